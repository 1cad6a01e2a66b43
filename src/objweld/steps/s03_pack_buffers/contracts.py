"""I/O contracts for Step 03: Pack interleaved buffers."""

from pathlib import Path

from pydantic import BaseModel, Field


class PackBuffersInput(BaseModel):
    mesh_path: Path = Field(..., description="Path to mesh.npz from s02")


class PackBuffersOutput(BaseModel):
    vertex_buffer_path: Path = Field(..., description="Interleaved float32 vertex stream")
    index_buffer_path: Path = Field(..., description="uint32 index stream")
    layout_path: Path = Field(..., description="layout.json describing the vertex stream")
    array_stride: int = Field(..., description="Bytes per interleaved vertex")
    vertex_count: int = Field(0)
    index_count: int = Field(0)
