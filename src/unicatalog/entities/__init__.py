"""Domain entities for the catalog reconciliation engine."""

from .core import (
    CatalogMetadata,
    Degree,
    Faculty,
    ProgramListing,
    ProgramStatistics,
    SimplifiedUniversity,
    SkippedRecord,
    Subject,
    University,
)

__all__ = [
    "Subject",
    "Degree",
    "Faculty",
    "University",
    "ProgramListing",
    "SimplifiedUniversity",
    "ProgramStatistics",
    "CatalogMetadata",
    "SkippedRecord",
]
