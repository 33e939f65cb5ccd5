"""Composition root that builds the catalog once from ordered sources."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple

from unicatalog.config.policies import (
    COMPREHENSIVE_UNIVERSITY,
    TRADITIONAL_UNIVERSITY,
    UNIVERSITY_OF_TECHNOLOGY,
    ProgramLookupPolicy,
)
from unicatalog.config.settings import Settings, get_settings
from unicatalog.entities.core import (
    CatalogMetadata,
    Degree,
    ProgramListing,
    ProgramStatistics,
    SimplifiedUniversity,
    SkippedRecord,
    University,
)
from unicatalog.utils.logging import get_logger, logging_context

from .merger import CatalogMerger
from .statistics import compute_statistics, report_statistics
from .validation import CatalogSource, validate_sources
from .views import (
    build_metadata,
    filter_by_type,
    find_programs_by_aps,
    find_programs_by_faculty,
    get_university_programs,
    to_simplified_listing,
)

_LOGGER = get_logger(module=__name__)


@dataclass(frozen=True)
class Catalog:
    """Result of a catalog build.

    The container is frozen and its collections are tuples, but the
    :class:`University` models inside are ordinary pydantic models shared by
    every view (``universities``, ``traditional`` and so on). Callers that need
    to change a record should work on ``university.model_copy(deep=True)``.

    Program lookups apply the ``programs`` policy the catalog was built with.
    """

    universities: Tuple[University, ...]
    traditional: Tuple[University, ...]
    technology: Tuple[University, ...]
    comprehensive: Tuple[University, ...]
    simplified: Tuple[SimplifiedUniversity, ...]
    statistics: ProgramStatistics
    metadata: CatalogMetadata
    skipped: Tuple[SkippedRecord, ...] = ()
    merge_stats: Tuple[Tuple[str, int], ...] = ()
    program_policy: ProgramLookupPolicy = field(default_factory=ProgramLookupPolicy)

    def __len__(self) -> int:
        return len(self.universities)

    def get(self, university_id: str) -> University | None:
        for university in self.universities:
            if university.id == university_id:
                return university
        return None

    def by_type(self, university_type: str) -> Tuple[University, ...]:
        return tuple(filter_by_type(self.universities, university_type))

    def programs_of(self, university_id: str) -> List[Degree]:
        return get_university_programs(self.universities, university_id)

    def programs_by_aps(self, min_aps: float, max_aps: float | None = None) -> List[ProgramListing]:
        """Degrees within the APS range; the upper bound defaults to ``program_policy.max_aps``."""

        return find_programs_by_aps(self.universities, min_aps, max_aps, policy=self.program_policy)

    def programs_by_faculty(self, faculty_name: str) -> List[ProgramListing]:
        return find_programs_by_faculty(self.universities, faculty_name)

    def to_payload(self) -> Dict[str, Any]:
        """JSON-ready representation using camelCase keys."""

        return {
            "universities": [university.to_payload() for university in self.universities],
            "simplified": [entry.to_payload() for entry in self.simplified],
            "metadata": self.metadata.to_payload(),
            "skipped": [entry.to_payload() for entry in self.skipped],
        }


def build_catalog(
    sources: Sequence[CatalogSource | Sequence[Any]],
    settings: Settings | None = None,
) -> Catalog:
    """Validate, merge and summarise ``sources`` (lowest precedence first).

    Raises :class:`~unicatalog.pipeline.validation.CatalogSourceError` only when
    a source is not a sequence; every record-level problem is reported in
    :attr:`Catalog.skipped` instead.
    """

    cfg = settings or get_settings()
    policies = cfg.policies

    with logging_context(stage="validate"):
        validation = validate_sources(sources)

    merger = CatalogMerger()
    with logging_context(stage="merge"):
        universities = merger.merge(validation.universities)

    with logging_context(stage="statistics"):
        statistics = compute_statistics(universities)
        report_statistics(universities, statistics)

    catalog = Catalog(
        universities=tuple(universities),
        traditional=tuple(filter_by_type(universities, TRADITIONAL_UNIVERSITY)),
        technology=tuple(filter_by_type(universities, UNIVERSITY_OF_TECHNOLOGY)),
        comprehensive=tuple(filter_by_type(universities, COMPREHENSIVE_UNIVERSITY)),
        simplified=tuple(to_simplified_listing(universities, policies.listing)),
        statistics=statistics,
        metadata=build_metadata(universities, statistics, policies.catalog),
        skipped=tuple(validation.skipped),
        merge_stats=tuple(sorted(merger.stats.items())),
        program_policy=policies.programs,
    )
    _LOGGER.info(
        "Catalog build complete",
        sources=len(validation.sources),
        universities=len(catalog),
        programs=statistics.total_programs,
        skipped=len(catalog.skipped),
    )
    return catalog


__all__ = ["Catalog", "build_catalog"]
