"""Configuration for Step 03: Pack interleaved buffers."""

from pydantic import BaseModel, Field


class PackBuffersConfig(BaseModel):
    include_color: bool = Field(
        True, description="Interleave a constant RGBA color between position and uv"
    )
    vertex_color: list[float] = Field(
        default=[1.0, 1.0, 1.0, 1.0], min_length=4, max_length=4, description="Vertex color RGBA"
    )
