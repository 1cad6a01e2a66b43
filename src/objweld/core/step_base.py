"""Base class for file-based pipeline steps.

A step wraps one stage of mesh ingestion behind typed Pydantic models for
its Input, Output and Config, so the runner can chain steps by field name
and the CLI can print their JSON schemas.
"""

from __future__ import annotations

import json
import logging
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import ClassVar, Generic, TypeVar

from pydantic import BaseModel

from .contracts import StepMeta

InputT = TypeVar("InputT", bound=BaseModel)
OutputT = TypeVar("OutputT", bound=BaseModel)
ConfigT = TypeVar("ConfigT", bound=BaseModel)

logger = logging.getLogger(__name__)


class BaseStep(ABC, Generic[InputT, OutputT, ConfigT]):
    """Abstract base for pipeline steps.

    Subclasses set ``name``, ``input_type``, ``output_type`` and
    ``config_type`` and implement ``run`` and ``validate_inputs``:

        class ImportObjStep(BaseStep[ImportObjInput, ImportObjOutput, ImportObjConfig]):
            name = "import_obj"
            input_type = ImportObjInput
            output_type = ImportObjOutput
            config_type = ImportObjConfig

            def run(self, inputs: ImportObjInput) -> ImportObjOutput: ...
            def validate_inputs(self, inputs: ImportObjInput) -> bool: ...
    """

    name: ClassVar[str] = ""
    input_type: ClassVar[type[BaseModel]]
    output_type: ClassVar[type[BaseModel]]
    config_type: ClassVar[type[BaseModel]]

    def __init__(self, config: ConfigT, data_root: Path):
        self.config = config
        self.data_root = Path(data_root)

    @property
    def step_name(self) -> str:
        return self.name or self.__class__.__name__

    @property
    def output_dir(self) -> Path:
        """``<data_root>/interim/<step name>``; created on first access."""
        path = self.data_root / "interim" / self.step_name
        path.mkdir(parents=True, exist_ok=True)
        return path

    @abstractmethod
    def run(self, inputs: InputT) -> OutputT:
        """Execute this step. Returns output model."""
        ...

    @abstractmethod
    def validate_inputs(self, inputs: InputT) -> bool:
        """Check that the input artifacts exist and look usable."""
        ...

    def execute(self, inputs: InputT) -> OutputT:
        """Run with validation, timing and a step_meta.json record."""
        logger.info(f"[{self.step_name}] Validating inputs...")
        if not self.validate_inputs(inputs):
            raise ValueError(f"[{self.step_name}] Input validation failed")

        logger.info(f"[{self.step_name}] Starting...")
        t0 = time.perf_counter()
        result = self.run(inputs)
        elapsed = time.perf_counter() - t0
        logger.info(f"[{self.step_name}] Done in {elapsed:.3f}s")

        meta = StepMeta(
            step_name=self.step_name,
            elapsed_seconds=elapsed,
            params=self.config.model_dump(mode="json"),
        )
        with open(self.output_dir / "step_meta.json", "w", encoding="utf-8") as f:
            json.dump(meta.model_dump(), f, indent=2)
        return result

    @classmethod
    def get_input_schema(cls) -> dict:
        return cls.input_type.model_json_schema()

    @classmethod
    def get_output_schema(cls) -> dict:
        return cls.output_type.model_json_schema()

    @classmethod
    def get_config_schema(cls) -> dict:
        return cls.config_type.model_json_schema()
