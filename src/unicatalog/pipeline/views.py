"""Pure filters and projections over a merged catalog."""

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

from unicatalog.config.policies import CatalogInfoPolicy, ListingPolicy, ProgramLookupPolicy
from unicatalog.entities.core import (
    CatalogMetadata,
    Degree,
    ProgramListing,
    ProgramStatistics,
    SimplifiedUniversity,
    University,
)


def filter_by_type(catalog: Iterable[University], university_type: str) -> List[University]:
    """Return universities whose ``type`` equals ``university_type`` exactly."""

    return [university for university in catalog if university.type == university_type]


def simplify_university(
    university: University, policy: ListingPolicy | None = None
) -> SimplifiedUniversity:
    listing = policy or ListingPolicy()
    name = university.name or listing.unknown_name
    if university.abbreviation:
        abbreviation = university.abbreviation
    elif university.name:
        abbreviation = university.name[: listing.abbreviation_length].upper()
    else:
        abbreviation = listing.unknown_abbreviation
    return SimplifiedUniversity(
        id=university.id or "",
        name=name,
        abbreviation=abbreviation,
        full_name=university.full_name or name,
        logo=university.logo or listing.default_logo,
    )


def to_simplified_listing(
    catalog: Iterable[University], policy: ListingPolicy | None = None
) -> List[SimplifiedUniversity]:
    """Project ``catalog`` into lightweight listing rows with fallback values."""

    return [simplify_university(university, policy) for university in catalog]


def type_breakdown(
    catalog: Sequence[University], known_types: Iterable[str] = ()
) -> Dict[str, int]:
    """Count universities per type; known types are reported even when absent."""

    breakdown: Dict[str, int] = {university_type: 0 for university_type in known_types}
    for university in catalog:
        if not university.type:
            continue
        breakdown[university.type] = breakdown.get(university.type, 0) + 1
    return breakdown


def build_metadata(
    catalog: Sequence[University],
    statistics: ProgramStatistics,
    policy: CatalogInfoPolicy | None = None,
) -> CatalogMetadata:
    """Assemble the metadata and statistics export for ``catalog``."""

    info = policy or CatalogInfoPolicy()
    return CatalogMetadata(
        total_universities=len(catalog),
        university_breakdown=type_breakdown(catalog, info.university_types),
        program_statistics=statistics,
        version=info.version,
        source=info.source_tag,
        features=list(info.features),
    )


def _listing(degree: Degree, university: University) -> ProgramListing:
    payload = degree.model_dump()
    payload.update(university=university.name, university_id=university.id)
    return ProgramListing.model_validate(payload)


def get_university_programs(catalog: Iterable[University], university_id: str) -> List[Degree]:
    """Return every degree offered by one university, or ``[]`` when unknown."""

    for university in catalog:
        if university.id == university_id:
            return [degree for faculty in university.faculties for degree in faculty.degrees]
    return []


def find_programs_by_aps(
    catalog: Iterable[University],
    min_aps: float,
    max_aps: float | None = None,
    policy: ProgramLookupPolicy | None = None,
) -> List[ProgramListing]:
    """Degrees whose APS requirement lies within ``[min_aps, max_aps]``."""

    upper = max_aps if max_aps is not None else (policy or ProgramLookupPolicy()).max_aps
    return [
        _listing(degree, university)
        for university in catalog
        for faculty in university.faculties
        for degree in faculty.degrees
        if degree.aps_requirement is not None and min_aps <= degree.aps_requirement <= upper
    ]


def find_programs_by_faculty(catalog: Iterable[University], faculty_name: str) -> List[ProgramListing]:
    """Degrees from faculties whose name contains ``faculty_name`` (case-insensitive)."""

    needle = faculty_name.casefold()
    return [
        _listing(degree, university)
        for university in catalog
        for faculty in university.faculties
        if needle in faculty.name.casefold()
        for degree in faculty.degrees
    ]


__all__ = [
    "filter_by_type",
    "simplify_university",
    "to_simplified_listing",
    "type_breakdown",
    "build_metadata",
    "get_university_programs",
    "find_programs_by_aps",
    "find_programs_by_faculty",
]
