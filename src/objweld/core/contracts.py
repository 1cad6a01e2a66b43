"""Pydantic models shared by the pipeline runner and every step."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class StepMeta(BaseModel):
    """Timing and parameters recorded next to a step's artifacts."""

    step_name: str
    elapsed_seconds: float = 0.0
    params: dict[str, Any] = Field(default_factory=dict)


class PipelineConfig(BaseModel):
    """Top-level pipeline configuration loaded from pipeline.yaml."""

    project_name: str = "objweld_project"
    data_root: Path = Path("./data")
    log_level: str = "INFO"
    steps: list[StepEntry] = Field(default_factory=list)


class StepEntry(BaseModel):
    """One entry in the pipeline step list."""

    name: str
    module: str
    config_file: str | None = None
    depends_on: list[str] = Field(default_factory=list)
    enabled: bool = True
    inputs: dict[str, Any] = Field(
        default_factory=dict, description="Literal input fields, overridden by dependency outputs"
    )


PipelineConfig.model_rebuild()
