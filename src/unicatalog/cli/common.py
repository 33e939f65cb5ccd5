"""Shared helpers used across the catalog CLI."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Sequence

import typer
from pydantic import ValidationError
from rich.console import Console

from unicatalog.config.settings import Settings
from unicatalog.pipeline import Catalog, CatalogSourceError, build_catalog, load_sources
from unicatalog.utils.logging import get_logger

console = Console()
_LOGGER = get_logger(module=__name__)


class CLIError(RuntimeError):
    """Exception raised for user-facing CLI errors."""


@dataclass(slots=True)
class CLIState:
    """State object attached to ``typer.Context`` for downstream commands."""

    settings: Settings
    environment: str
    verbose: bool


def resolve_settings(environment: str | None) -> Settings:
    """Construct :class:`Settings` with the requested environment applied."""

    payload = {}
    if environment:
        payload["environment"] = environment
    try:
        return Settings(**payload)
    except ValidationError as exc:
        raise CLIError(f"Invalid configuration: {exc.errors()[0]['msg']}") from exc


def get_state(ctx: typer.Context) -> CLIState:
    """Return the :class:`CLIState` configured by the application callback."""

    if ctx.obj is None:
        raise CLIError("CLI context is not initialised")
    return ctx.obj


def resolve_sources(state: CLIState, sources: Sequence[Path] | None) -> List[Path]:
    """Pick explicit source paths, falling back to the configured ones."""

    selected = list(sources or []) or state.settings.source_files
    if not selected:
        raise CLIError("No catalog sources given and none configured under 'sources'")
    missing = [path for path in selected if not Path(path).exists()]
    if missing:
        raise CLIError(f"Source file does not exist: {missing[0]}")
    return [Path(path) for path in selected]


def load_catalog(state: CLIState, sources: Sequence[Path] | None) -> Catalog:
    """Load source files and build the catalog."""

    paths = resolve_sources(state, sources)
    _LOGGER.debug("Building catalog from files", sources=[str(path) for path in paths])
    return build_catalog(load_sources(paths), settings=state.settings)


@contextmanager
def cli_errors() -> Iterator[None]:
    """Render expected failures as a one-line error with exit code 2."""

    try:
        yield
    except (CLIError, CatalogSourceError, FileNotFoundError) as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


__all__ = [
    "CLIError",
    "CLIState",
    "cli_errors",
    "console",
    "get_state",
    "load_catalog",
    "resolve_settings",
    "resolve_sources",
]
