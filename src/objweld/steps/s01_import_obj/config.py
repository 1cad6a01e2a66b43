"""Configuration for Step 01: Import OBJ."""

from pydantic import BaseModel, Field


class ImportObjConfig(BaseModel):
    strict: bool = Field(
        False, description="Fail on the first malformed line instead of skipping it"
    )
    encoding: str = Field(
        "utf-8-sig", description="Text encoding of the OBJ file; a leading BOM is dropped"
    )
    fail_on_empty_mesh: bool = Field(
        True, description="Raise if the file yields no triangles"
    )
