"""Configuration for Step 02: Normal synthesis."""

from pydantic import BaseModel, Field


class NormalsConfig(BaseModel):
    enabled: bool = Field(True, description="Synthesize normals when the mesh has none")
    force: bool = Field(False, description="Recompute normals even if the mesh has them")
    default_normal: list[float] = Field(
        default=[0.0, 1.0, 0.0],
        min_length=3,
        max_length=3,
        description="Direction for vertices with no non-degenerate neighbouring triangle",
    )
