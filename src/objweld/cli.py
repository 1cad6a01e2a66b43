"""CLI entry point for objweld.

Usage:
    objweld inspect model.obj            # Parse + weld one file, print a summary
    objweld run --obj model.obj          # Run the full pipeline
    objweld run-step import_obj -i '{"obj_path": "model.obj"}'
    objweld info                         # Show pipeline steps
"""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from objweld.core.logging import setup_logging

app = typer.Typer(name="objweld", help="Wavefront OBJ to welded GPU-ready buffers")
console = Console()

DEFAULT_CONFIG = Path("configs/pipeline.yaml")


@app.command()
def inspect(
    obj_path: Path = typer.Argument(..., help="Path to a .obj file"),
    strict: bool = typer.Option(False, help="Fail on the first malformed line"),
    synthesize_normals: bool = typer.Option(True, help="Compute normals if the file has none"),
    log_level: str = typer.Option("ERROR", help="Logging level"),
) -> None:
    """Parse and weld one OBJ file and print counts and diagnostics."""
    setup_logging(log_level)
    from objweld.mesh import ObjParseError, ingest_obj

    try:
        text = obj_path.read_text(encoding="utf-8-sig")
        result = ingest_obj(text, strict=strict, synthesize_normals=synthesize_normals)
    except (OSError, ObjParseError) as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)

    mesh = result.mesh
    table = Table(title=f"Mesh: {obj_path.name}")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Faces", str(result.face_count))
    table.add_row("Triangles", str(mesh.triangle_count))
    table.add_row("Welded vertices", str(mesh.vertex_count))
    table.add_row("Normals synthesized", "Y" if result.normals_synthesized else "N")
    table.add_row("Diagnostics", str(len(result.diagnostics)))
    console.print(table)

    for diagnostic in result.diagnostics:
        console.print(f"[yellow]{diagnostic}[/yellow]")


@app.command()
def run(
    config: Path = typer.Option(DEFAULT_CONFIG, help="Pipeline config path"),
    obj: Path = typer.Option(None, "--obj", help="OBJ file for the import_obj step"),
) -> None:
    """Run the full pipeline."""
    from objweld.core.pipeline_runner import load_pipeline_config, run_pipeline

    pipeline_cfg = load_pipeline_config(config)
    setup_logging(pipeline_cfg.log_level)

    overrides = {"import_obj": {"obj_path": obj}} if obj is not None else None
    results = run_pipeline(config, overrides=overrides)
    for name, output in results.items():
        console.print(f"[green]{name}:[/green] {output.model_dump_json()}")


@app.command()
def run_step(
    step_name: str = typer.Argument(..., help="Step name (e.g. import_obj)"),
    config: Path = typer.Option(DEFAULT_CONFIG, help="Pipeline config path"),
    input_json: str = typer.Option(None, "--input", "-i", help="Input as JSON string"),
) -> None:
    """Run a single pipeline step."""
    setup_logging()
    from objweld.core.pipeline_runner import import_step_class, load_pipeline_config, load_step_config

    pipeline_cfg = load_pipeline_config(config)
    entry = next((s for s in pipeline_cfg.steps if s.name == step_name), None)
    if entry is None:
        console.print(f"[red]Step '{step_name}' not found in pipeline config[/red]")
        raise typer.Exit(1)

    step_cls = import_step_class(entry.module)
    config_file = Path(entry.config_file) if entry.config_file else None
    step_config = load_step_config(config_file, step_cls.config_type)
    step_instance = step_cls(config=step_config, data_root=pipeline_cfg.data_root)

    input_data = dict(entry.inputs)
    if input_json:
        input_data.update(json.loads(input_json))
    required = step_cls.input_type.model_json_schema().get("required", [])
    missing = [field for field in required if field not in input_data]
    if missing:
        console.print(f"[yellow]Step '{step_name}' requires input fields: {missing}[/yellow]")
        console.print("[yellow]Use --input/-i with JSON string, e.g.:[/yellow]")
        console.print(f'  objweld run-step {step_name} -i \'{{"{missing[0]}": "value"}}\'')
        raise typer.Exit(1)

    console.print(f"[green]Running step: {step_name}[/green]")
    output = step_instance.execute(step_cls.input_type(**input_data))
    console.print(f"[green]Done. Output:[/green] {output.model_dump_json(indent=2)}")


@app.command()
def info(config: Path = typer.Option(DEFAULT_CONFIG, help="Pipeline config path")) -> None:
    """Show pipeline steps."""
    from objweld.core.pipeline_runner import load_pipeline_config

    pipeline_cfg = load_pipeline_config(config)
    table = Table(title=f"Pipeline: {pipeline_cfg.project_name}")
    table.add_column("#", style="dim")
    table.add_column("Step", style="cyan")
    table.add_column("Module", style="green")
    table.add_column("Enabled", style="yellow")
    table.add_column("Depends On", style="dim")

    for i, step in enumerate(pipeline_cfg.steps, 1):
        table.add_row(
            str(i),
            step.name,
            step.module,
            "Y" if step.enabled else "N",
            ", ".join(step.depends_on) if step.depends_on else "-",
        )
    console.print(table)


if __name__ == "__main__":
    app()
