"""File I/O helpers for catalog sources and exports."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, List

import yaml

from unicatalog.utils.helpers import ensure_directory, serialize_json
from unicatalog.utils.logging import get_logger

from .builder import Catalog
from .validation import CatalogSource, CatalogSourceError

_YAML_SUFFIXES = {".yaml", ".yml"}
_JSON_SUFFIXES = {".json"}


def _read_payload(path: Path) -> Any:
    suffix = path.suffix.lower()
    with path.open("r", encoding="utf-8") as handle:
        if suffix in _JSON_SUFFIXES:
            return json.load(handle)
        if suffix in _YAML_SUFFIXES:
            return yaml.safe_load(handle)
    raise CatalogSourceError(
        f"Catalog source '{path}' has unsupported format '{suffix or '<none>'}'; "
        "expected .json, .yaml or .yml"
    )


def load_source(input_path: str | Path) -> CatalogSource:
    """Read one source file holding a list of universities.

    The file may contain the list itself or a mapping with a ``universities``
    key. Whether the records are well formed is left to the validation stage.
    """

    log = get_logger(module=__name__)
    path = Path(input_path)
    if not path.exists():
        raise FileNotFoundError(f"Catalog source not found: {path}")

    payload = _read_payload(path)
    if isinstance(payload, dict) and "universities" in payload:
        payload = payload["universities"]
    source = CatalogSource(name=path.stem, records=payload)
    log.debug(
        "Loaded catalog source",
        path=str(path),
        records=len(payload) if isinstance(payload, list) else None,
    )
    return source


def load_sources(paths: Iterable[str | Path]) -> List[CatalogSource]:
    """Load sources in the given order (lowest precedence first)."""

    return [load_source(path) for path in paths]


def write_catalog(catalog: Catalog, output_path: str | Path) -> Path:
    """Write the catalog payload as JSON and return the resolved path."""

    path = Path(output_path)
    ensure_directory(path.parent)
    path.write_text(serialize_json(catalog.to_payload()) + "\n", encoding="utf-8")
    return path.resolve()


__all__ = ["load_source", "load_sources", "write_catalog"]
