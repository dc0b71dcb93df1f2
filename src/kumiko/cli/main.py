"""Typer CLI for kumiko strip derivation and export."""

import json
import logging
from pathlib import Path
from typing import Annotated

import typer

from kumiko.application import AnalyzeDesignCommand, NormalizeDesignCommand
from kumiko.application.config import (
    ConfigError,
    DesignConfiguration,
    config_to_design,
    design_to_payload,
    load_design,
    merge_design_with_cli,
    validate_design,
)
from kumiko.cli.commands import display_load_error, validate_command
from kumiko.contracts import DesignOutput
from kumiko.domain.services import format_value
from kumiko.domain.value_objects import ExportPass
from kumiko.infrastructure.exporters import ExporterRegistry, ExportManager
from kumiko.logging_config import setup_logging

app = typer.Typer(
    name="kumiko",
    help="Turn kumiko lattice designs into notched strips and cut files.",
)

# Register validate command
app.command(name="validate")(validate_command)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging"),
    ] = False,
) -> None:
    """Kumiko lattice strip cutter."""
    setup_logging(logging.DEBUG if verbose else logging.WARNING)


def _load_or_exit(design_file: Path) -> DesignConfiguration:
    try:
        return load_design(design_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)


def _analyze_or_exit(config: DesignConfiguration) -> DesignOutput:
    """Run the structural checks, then derive strips."""
    result = validate_design(config)
    if not result.is_valid:
        typer.echo("Errors:", err=True)
        for error in result.errors:
            typer.echo(f"  {error.path}: {error.message}", err=True)
        raise typer.Exit(code=1)
    return AnalyzeDesignCommand().execute(config_to_design(config))


def _parse_formats(formats_str: str) -> list[str]:
    """Parse a comma-separated format list or "all"."""
    available = ExporterRegistry.available_formats()
    if formats_str.strip().lower() == "all":
        return available

    formats = [f.strip().lower() for f in formats_str.split(",") if f.strip()]
    invalid = [f for f in formats if f not in available]
    if invalid:
        typer.echo(f"Unknown formats: {', '.join(invalid)}", err=True)
        typer.echo(f"Available formats: {', '.join(available)}", err=True)
        raise typer.Exit(code=1)
    if not formats:
        typer.echo("No valid formats to export.", err=True)
        raise typer.Exit(code=1)
    return formats


@app.command()
def strips(
    design_file: Annotated[Path, typer.Argument(help="Path to the JSON design file")],
) -> None:
    """List the strips a design needs, with notches and bank counts."""
    config = _load_or_exit(design_file)
    output = _analyze_or_exit(config)
    unit = output.params.units

    if not output.strips:
        typer.echo("No strips: the design has no lines long enough to cut.")
        return

    typer.echo(f"Strips ({len(output.strips)} lines, {len(output.strip_bank)} distinct):")
    for entry in output.strip_bank:
        strip = entry.strip
        notches = ", ".join(
            f"{format_value(n.dist, unit)}{'T' if n.from_top else 'B'}"
            for n in strip.notches
        )
        typer.echo(
            f"  {strip.display_code}  {format_value(strip.length_mm, unit):>8} {unit.value}"
            f"  x{entry.needed_count} (placed {entry.placed_count})"
            f"  notches: {notches or '-'}"
        )

    unplaced = sum(
        max(entry.needed_count - entry.placed_count, 0) for entry in output.strip_bank
    )
    if unplaced:
        typer.echo(f"\n{unplaced} strip(s) not yet placed in a group.")
    else:
        typer.echo("\nAll strips are placed.")


@app.command(name="export")
def export_design(
    design_file: Annotated[Path, typer.Argument(help="Path to the JSON design file")],
    output_dir: Annotated[
        Path,
        typer.Option("--output-dir", "-o", help="Directory for exported files"),
    ] = Path("."),
    formats: Annotated[
        str,
        typer.Option("--formats", "-f", help="Comma-separated formats: svg,dxf,json (or 'all')"),
    ] = "svg",
    group: Annotated[
        list[str] | None,
        typer.Option("--group", "-g", help="Group id to export (repeatable)"),
    ] = None,
    export_pass: Annotated[
        ExportPass | None,
        typer.Option("--pass", help="Force a single pass instead of the planned passes"),
    ] = None,
    flip: Annotated[
        bool,
        typer.Option("--flip", help="Flip strips when a pass is forced"),
    ] = False,
    bit_size: Annotated[
        float | None,
        typer.Option("--bit-size", help="Override the design bit size (mm)"),
    ] = None,
    stock_length: Annotated[
        float | None,
        typer.Option("--stock-length", help="Override the design stock length (mm)"),
    ] = None,
    grid_cell_size: Annotated[
        float | None,
        typer.Option("--grid-cell-size", help="Override the design grid cell size (mm)"),
    ] = None,
    project_name: Annotated[
        str | None,
        typer.Option("--project-name", help="File name prefix; defaults to the design name"),
    ] = None,
) -> None:
    """Export cut files for every group of a design."""
    format_list = _parse_formats(formats)
    config = _load_or_exit(design_file)
    try:
        config = merge_design_with_cli(
            config,
            bit_size=bit_size,
            stock_length=stock_length,
            grid_cell_size=grid_cell_size,
        )
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    output = _analyze_or_exit(config)

    manager = ExportManager(output_dir)
    try:
        files = manager.export_all(
            format_list,
            output,
            project_name=project_name,
            group_ids=group,
            export_pass=export_pass,
            flip=flip,
        )
    except KeyError as e:
        typer.echo(f"Export error: {e.args[0]}", err=True)
        raise typer.Exit(code=1)
    except OSError as e:
        typer.echo(f"Export error: {e}", err=True)
        raise typer.Exit(code=1)

    written = [path for paths in files.values() for path in paths]
    if not written:
        typer.echo("Nothing to export: no group has placed pieces.", err=True)
        raise typer.Exit(code=1)

    typer.echo("Exported files:")
    for fmt, paths in files.items():
        for path in paths:
            typer.echo(f"  {fmt.upper()}: {path}")


@app.command()
def normalize(
    design_file: Annotated[Path, typer.Argument(help="Path to the JSON design file")],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write here instead of overwriting the design"),
    ] = None,
) -> None:
    """Merge collinear lines and clear intersection overrides."""
    config = _load_or_exit(design_file)
    design = config_to_design(config)
    normalized = NormalizeDesignCommand().execute(design)

    target = output or design_file
    target.write_text(
        json.dumps(design_to_payload(normalized), indent=2) + "\n", encoding="utf-8"
    )
    typer.echo(
        f"Normalized {len(design.lines)} lines into {len(normalized.lines)}; "
        f"cleared {len(design.overrides)} override(s)"
    )
    typer.echo(f"Wrote {target}")


if __name__ == "__main__":
    app()
