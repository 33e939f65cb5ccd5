"""Catalog reconciliation pipeline: validation, merge, statistics and views."""

from .builder import Catalog, build_catalog
from .io import load_source, load_sources, write_catalog
from .merger import CatalogMerger, merge_catalogs
from .statistics import compute_statistics, report_statistics
from .validation import (
    CatalogSource,
    CatalogSourceError,
    ValidationResult,
    validate_sources,
)
from .views import (
    build_metadata,
    filter_by_type,
    find_programs_by_aps,
    find_programs_by_faculty,
    get_university_programs,
    to_simplified_listing,
)

__all__ = [
    "Catalog",
    "build_catalog",
    "load_source",
    "load_sources",
    "write_catalog",
    "CatalogMerger",
    "merge_catalogs",
    "compute_statistics",
    "report_statistics",
    "CatalogSource",
    "CatalogSourceError",
    "ValidationResult",
    "validate_sources",
    "build_metadata",
    "filter_by_type",
    "find_programs_by_aps",
    "find_programs_by_faculty",
    "get_university_programs",
    "to_simplified_listing",
]
