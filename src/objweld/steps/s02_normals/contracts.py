"""I/O contracts for Step 02: Normal synthesis."""

from pathlib import Path

from pydantic import BaseModel, Field


class NormalsInput(BaseModel):
    mesh_path: Path = Field(..., description="Path to mesh.npz from s01")


class NormalsOutput(BaseModel):
    mesh_path: Path = Field(..., description="Path to mesh.npz with usable normals")
    normals_synthesized: bool = Field(False, description="Whether normals were computed here")
    num_vertices: int = Field(0, description="Vertex count of the mesh")
