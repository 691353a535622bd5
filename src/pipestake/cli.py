"""CLI entry point for pipestake.

Usage:
    pipestake run                          # Run full pipeline
    pipestake run-step stakeout_points     # Run single step
    pipestake info                         # Show pipeline info
    pipestake extract parts.json -o out.csv  # Snapshot straight to Trimble CSV
"""

from __future__ import annotations

import traceback
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from pipestake.core.logging import setup_logging

app = typer.Typer(name="pipestake", help="Stake-out points from fabrication piping models")
console = Console()

DEFAULT_CONFIG = Path("configs/pipeline.yaml")


def _report_failure(exc: Exception) -> None:
    console.print(f"[red]Failed: {escape(str(exc))}[/red]")
    console.print(traceback.format_exc(), style="dim", markup=False)


@app.command()
def run(
    config: Path = typer.Option(DEFAULT_CONFIG, help="Pipeline config path"),
    log_level: str = typer.Option("INFO", help="Logging level"),
) -> None:
    """Run the full pipeline."""
    setup_logging(log_level)
    from pipestake.core.pipeline_runner import run_pipeline

    try:
        results = run_pipeline(config)
    except Exception as e:
        _report_failure(e)
        raise typer.Exit(1)

    for step_name, output in results.items():
        console.print(f"[green]{step_name}:[/green] {output.model_dump_json()}")


@app.command()
def run_step(
    step_name: str = typer.Argument(..., help="Step name (e.g. stakeout_points)"),
    config: Path = typer.Option(DEFAULT_CONFIG, help="Pipeline config path"),
    input_json: str = typer.Option(None, "--input", "-i", help="Input as JSON string"),
) -> None:
    """Run a single pipeline step."""
    import json

    setup_logging()
    from pipestake.core.pipeline_runner import load_pipeline_config, import_step_class, load_step_config

    pipeline_cfg = load_pipeline_config(config)
    entry = next((s for s in pipeline_cfg.steps if s.name == step_name), None)
    if entry is None:
        console.print(f"[red]Step '{step_name}' not found in pipeline config[/red]")
        raise typer.Exit(1)

    step_cls = import_step_class(entry.module)
    step_config = load_step_config(Path(entry.config_file), step_cls.config_type)
    step_instance = step_cls(config=step_config, data_root=pipeline_cfg.data_root)

    input_data = dict(entry.inputs)
    if input_json:
        input_data.update(json.loads(input_json))
    if not input_data:
        schema = step_cls.input_type.model_json_schema()
        required = schema.get("required", [])
        if required:
            console.print(f"[yellow]Step '{step_name}' requires input fields: {required}[/yellow]")
            console.print("[yellow]Use --input/-i with JSON string, e.g.:[/yellow]")
            console.print(f'  pipestake run-step {step_name} -i \'{{"field": "value"}}\'')
            raise typer.Exit(1)

    console.print(f"[green]Running step: {step_name}[/green]")
    try:
        step_input = step_cls.input_type(**input_data)
        output = step_instance.execute(step_input)
    except Exception as e:
        _report_failure(e)
        raise typer.Exit(1)
    console.print(f"[green]Done. Output:[/green] {output.model_dump_json(indent=2)}")


@app.command()
def info(config: Path = typer.Option(DEFAULT_CONFIG, help="Pipeline config path")) -> None:
    """Show pipeline steps and their status."""
    from pipestake.core.pipeline_runner import load_pipeline_config

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


@app.command()
def extract(
    parts_json: Path = typer.Argument(..., help="Geometry snapshot (parts.json)"),
    output: Path = typer.Option(Path("Trimble_Points.csv"), "--output", "-o", help="CSV output path"),
    step_config: Optional[Path] = typer.Option(None, "--config", "-c", help="Stake-out config YAML"),
    log_level: str = typer.Option("WARNING", help="Logging level"),
) -> None:
    """Extract stake-out points from a snapshot and write a Trimble CSV."""
    setup_logging(log_level)
    from pipestake.core.pipeline_runner import load_step_config
    from pipestake.steps.s01_stakeout_points.config import StakeoutConfig
    from pipestake.steps.s01_stakeout_points.step import extract_stakeout_points, to_point_records
    from pipestake.utils.io import read_parts_json, write_trimble_csv

    try:
        cfg = load_step_config(step_config, StakeoutConfig) if step_config else StakeoutConfig()
        parts, skipped = read_parts_json(parts_json)
        result = extract_stakeout_points(parts, cfg)
        if result.found:
            records = to_point_records(result.points, cfg.name_prefix)
            write_trimble_csv(output, records)
    except Exception as e:
        _report_failure(e)
        raise typer.Exit(1)

    if skipped:
        console.print(f"[yellow]Skipped {skipped} unreadable parts[/yellow]")
    if not result.found:
        console.print(f"[yellow]{escape(result.message)}[/yellow]")
        return

    table = Table(title="Stake-out points")
    table.add_column("Phase", style="cyan")
    table.add_column("Count", justify="right")
    for key in ("regular_runs", "short_runs", "risers", "intersections", "riser_hits", "open_ends"):
        table.add_row(key, str(result.stats.get(key, 0)))
    console.print(table)
    console.print(
        f"[green]Wrote {len(records)} stake points (from {result.raw_count} raw):[/green] {output}"
    )


if __name__ == "__main__":
    app()
