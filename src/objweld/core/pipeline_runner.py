"""Pipeline orchestrator: reads pipeline.yaml and executes steps in order."""

from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel

from .contracts import PipelineConfig, StepEntry

logger = logging.getLogger(__name__)


def load_pipeline_config(config_path: Path) -> PipelineConfig:
    """Load and validate pipeline.yaml.

    Relative ``data_root``, step ``config_file`` and step input paths (keys
    ending in ``_path``) are resolved against the directory holding the
    pipeline file.
    """
    config_path = Path(config_path)
    with open(config_path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    cfg = PipelineConfig(**raw)

    base = config_path.parent
    if not cfg.data_root.is_absolute():
        cfg.data_root = base / cfg.data_root
    for entry in cfg.steps:
        if entry.config_file and not Path(entry.config_file).is_absolute():
            entry.config_file = str(base / entry.config_file)
        for key, value in entry.inputs.items():
            if key.endswith("_path") and isinstance(value, str) and not Path(value).is_absolute():
                entry.inputs[key] = str(base / value)
    return cfg


def load_step_config(config_path: Path | None, config_class: type[BaseModel]) -> BaseModel:
    """Load a step YAML config into its Pydantic model; None gives defaults."""
    if config_path is None:
        return config_class()
    with open(config_path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    return config_class(**raw)


def import_step_class(module_path: str):
    """Import the step class from ``<module_path>.step``.

    The class is the one whose name ends in 'Step' (other than BaseStep).
    """
    step_module = importlib.import_module(f"{module_path}.step")
    for attr_name in dir(step_module):
        attr = getattr(step_module, attr_name)
        if (
            isinstance(attr, type)
            and hasattr(attr, "run")
            and attr_name.endswith("Step")
            and attr_name != "BaseStep"
        ):
            return attr
    raise ImportError(f"No Step class found in {module_path}.step")


def build_step_input(
    entry: StepEntry,
    input_type: type[BaseModel],
    results: dict[str, BaseModel],
    overrides: dict[str, Any] | None = None,
) -> BaseModel:
    """Merge literal inputs, dependency outputs and overrides, in that order."""
    input_data: dict[str, Any] = dict(entry.inputs)
    for dep in entry.depends_on:
        if dep not in results:
            raise RuntimeError(f"Step '{entry.name}' depends on '{dep}', which has not run")
        input_data.update(results[dep].model_dump())
    if overrides:
        input_data.update(overrides)
    return input_type(**input_data)


def run_pipeline(
    config_path: Path,
    overrides: dict[str, dict[str, Any]] | None = None,
) -> dict[str, BaseModel]:
    """Execute every enabled step of a pipeline config.

    Args:
        config_path: Path to pipeline.yaml.
        overrides: Per-step input fields keyed by step name, applied last.

    Returns:
        Step outputs keyed by step name.
    """
    pipeline_cfg = load_pipeline_config(config_path)
    overrides = overrides or {}
    results: dict[str, BaseModel] = {}

    enabled_steps = [s for s in pipeline_cfg.steps if s.enabled]
    logger.info(f"Pipeline '{pipeline_cfg.project_name}' with {len(enabled_steps)} steps")

    for entry in enabled_steps:
        logger.info(f"--- Step: {entry.name} ---")

        step_cls = import_step_class(entry.module)
        config_file = Path(entry.config_file) if entry.config_file else None
        step_config = load_step_config(config_file, step_cls.config_type)
        step_instance = step_cls(config=step_config, data_root=pipeline_cfg.data_root)

        step_input = build_step_input(
            entry, step_cls.input_type, results, overrides.get(entry.name)
        )
        results[entry.name] = step_instance.execute(step_input)

    logger.info("Pipeline complete.")
    return results
