"""Top-level package for the university catalog reconciliation engine."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("unicatalog")
except PackageNotFoundError:  # pragma: no cover - running from a source checkout
    __version__ = "0.1.0"

from .config.settings import Settings, get_settings
from .entities import Degree, Faculty, ProgramStatistics, University
from .pipeline import Catalog, CatalogSource, build_catalog, compute_statistics, merge_catalogs

__all__ = [
    "__version__",
    "Settings",
    "get_settings",
    "University",
    "Faculty",
    "Degree",
    "ProgramStatistics",
    "Catalog",
    "CatalogSource",
    "build_catalog",
    "compute_statistics",
    "merge_catalogs",
]
