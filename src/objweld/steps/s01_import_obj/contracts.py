"""I/O contracts for Step 01: Import OBJ."""

from pathlib import Path

from pydantic import BaseModel, Field


class ImportObjInput(BaseModel):
    obj_path: Path = Field(..., description="Path to a Wavefront .obj file")


class ImportObjOutput(BaseModel):
    mesh_path: Path = Field(..., description="Path to welded mesh.npz")
    diagnostics_path: Path = Field(..., description="Path to diagnostics.json")
    num_vertices: int = Field(..., description="Distinct welded vertices")
    num_triangles: int = Field(..., description="Triangles after fan triangulation")
    num_diagnostics: int = Field(0, description="Recoverable problems found while parsing")
    has_normals: bool = Field(False, description="Whether the source supplied usable normals")
