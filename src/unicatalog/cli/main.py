"""Primary Typer application wiring the catalog CLI."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich.table import Table

from unicatalog.pipeline import write_catalog
from unicatalog.utils.logging import configure_logging

from .common import CLIState, cli_errors, console, get_state, load_catalog, resolve_settings

app = typer.Typer(
    add_completion=False,
    help="Merge overlapping university datasets into one catalog and inspect the result.",
    no_args_is_help=True,
)

SourcesArgument = typer.Argument(
    None,
    help="Source files (JSON or YAML), lowest precedence first. Defaults to configured sources.",
    show_default=False,
)


@app.callback()
def main(
    ctx: typer.Context,
    environment: Optional[str] = typer.Option(
        None,
        "--environment",
        "-e",
        help="Active configuration environment (development, testing, production).",
        show_default=False,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Emit debug logging for catalog construction.",
    ),
) -> None:
    """Configure settings and logging prior to executing subcommands."""

    with cli_errors():
        settings = resolve_settings(environment)
    configure_logging(settings, level="DEBUG" if verbose else "WARNING")
    ctx.obj = CLIState(settings=settings, environment=settings.environment, verbose=verbose)


@app.command("build")
def build_command(
    ctx: typer.Context,
    sources: Optional[List[Path]] = SourcesArgument,
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Destination JSON file. Defaults to <output_dir>/catalog.json.",
        show_default=False,
    ),
) -> None:
    """Build the merged catalog and write it as JSON."""

    state = get_state(ctx)
    with cli_errors():
        catalog = load_catalog(state, sources)
        destination = output or Path(state.settings.paths.output_dir) / "catalog.json"
        written = write_catalog(catalog, destination)

    console.print(
        f"[green]Wrote[/green] {len(catalog)} universities with "
        f"{catalog.statistics.total_programs} programs to {written}"
    )
    if catalog.skipped:
        console.print(f"[yellow]Skipped {len(catalog.skipped)} invalid records[/yellow]")


@app.command("stats")
def stats_command(
    ctx: typer.Context,
    sources: Optional[List[Path]] = SourcesArgument,
    top: int = typer.Option(10, "--top", min=1, help="Number of faculties to list."),
) -> None:
    """Print program statistics for the merged catalog."""

    state = get_state(ctx)
    with cli_errors():
        catalog = load_catalog(state, sources)

    metadata = catalog.metadata
    summary = Table(title="Catalog", show_header=False)
    summary.add_row("Universities", str(metadata.total_universities))
    summary.add_row("Programs", str(metadata.program_statistics.total_programs))
    summary.add_row("Version", metadata.version)
    for university_type, count in metadata.university_breakdown.items():
        summary.add_row(university_type, str(count))
    console.print(summary)

    faculties = Table(title="Programs by faculty")
    faculties.add_column("Faculty")
    faculties.add_column("Programs", justify="right")
    ranked = sorted(
        metadata.program_statistics.programs_by_faculty.items(),
        key=lambda item: (-item[1], item[0]),
    )
    for name, count in ranked[:top]:
        faculties.add_row(name, str(count))
    console.print(faculties)

    empty = metadata.program_statistics.universities_without_programs
    if empty:
        console.print(f"[yellow]Universities with no programs:[/yellow] {', '.join(empty)}")
    for entry in catalog.skipped:
        console.print(f"[yellow]Skipped[/yellow] {entry.source}{entry.path}: {entry.reason}")


@app.command("list")
def list_command(
    ctx: typer.Context,
    sources: Optional[List[Path]] = SourcesArgument,
    university_type: Optional[str] = typer.Option(
        None,
        "--type",
        "-t",
        help="Only list universities of this exact type.",
        show_default=False,
    ),
) -> None:
    """Print the simplified university listing."""

    state = get_state(ctx)
    with cli_errors():
        catalog = load_catalog(state, sources)

    allowed = None
    if university_type is not None:
        allowed = {university.id for university in catalog.by_type(university_type)}

    table = Table(title="Universities")
    table.add_column("ID")
    table.add_column("Abbreviation")
    table.add_column("Name")
    for entry in catalog.simplified:
        if allowed is not None and entry.id not in allowed:
            continue
        table.add_row(entry.id, entry.abbreviation, entry.name)
    console.print(table)


__all__ = ["app"]
