"""Deterministic catalog merge policy implementation.

Sources are folded in ascending precedence. Collections (faculties, degrees)
are unioned by identity and never replaced; scalar fields follow
last-non-empty-wins.
"""

from __future__ import annotations

import copy
from typing import Dict, Iterable, List, Sequence

from unicatalog.entities.core import Faculty, University
from unicatalog.utils.helpers import has_content, normalize_faculty_name
from unicatalog.utils.logging import get_logger


_LOGGER = get_logger(module=__name__)

UNIVERSITY_SCALAR_FIELDS = (
    "name",
    "abbreviation",
    "full_name",
    "type",
    "location",
    "province",
    "website",
    "logo",
    "overview",
    "description",
    "established_year",
    "student_count",
    "campuses",
    "contact_info",
    "application_periods",
    "notable_features",
)
FACULTY_SCALAR_FIELDS = ("id", "description")

_COUNTERS = (
    "universities_in",
    "universities_merged",
    "faculties_merged",
    "faculties_added",
    "degrees_added",
    "degrees_dropped",
)


class CatalogMerger:
    """Fold ordered sources of universities into one deduplicated catalog."""

    def __init__(self) -> None:
        self.stats: Dict[str, int] = {}
        self.reset()

    def reset(self) -> None:
        """Reset per-run counters."""
        self.stats = {counter: 0 for counter in _COUNTERS}

    @staticmethod
    def _apply_scalars(target, incoming, fields: Iterable[str]) -> None:
        for name in fields:
            value = getattr(incoming, name)
            if has_content(value):
                setattr(target, name, copy.deepcopy(value))

    def _union_degrees(self, target: Faculty, incoming: Faculty) -> None:
        known = {degree.id for degree in target.degrees}
        for degree in incoming.degrees:
            if degree.id in known:
                self.stats["degrees_dropped"] += 1
                continue
            known.add(degree.id)
            target.degrees.append(degree.model_copy(deep=True))
            self.stats["degrees_added"] += 1

    def _merge_faculty(self, target: Faculty, incoming: Faculty) -> None:
        self._union_degrees(target, incoming)
        self._apply_scalars(target, incoming, FACULTY_SCALAR_FIELDS)

    def _collapse_faculties(self, faculties: Sequence[Faculty]) -> List[Faculty]:
        """Merge same-named faculties of one record and drop repeated degree ids."""

        collapsed: Dict[str, Faculty] = {}
        for faculty in faculties:
            key = normalize_faculty_name(faculty.name)
            existing = collapsed.get(key)
            if existing is None:
                fresh = faculty.model_copy(deep=True)
                fresh.degrees = []
                self._union_degrees(fresh, faculty)
                collapsed[key] = fresh
                continue
            self._merge_faculty(existing, faculty)
        return list(collapsed.values())

    def _merge_university(self, existing: University, incoming: University) -> None:
        index = {
            normalize_faculty_name(faculty.name): faculty for faculty in existing.faculties
        }
        for faculty in self._collapse_faculties(incoming.faculties):
            key = normalize_faculty_name(faculty.name)
            match = index.get(key)
            if match is None:
                existing.faculties.append(faculty)
                index[key] = faculty
                self.stats["faculties_added"] += 1
                continue
            self._merge_faculty(match, faculty)
            self.stats["faculties_merged"] += 1
        self._apply_scalars(existing, incoming, UNIVERSITY_SCALAR_FIELDS)
        self.stats["universities_merged"] += 1

    def merge(self, sources: Sequence[Sequence[University]]) -> List[University]:
        """Merge ``sources`` (lowest precedence first) into a new catalog.

        Inputs are never mutated. Output order follows the first appearance of
        each university id across all sources.
        """

        self.reset()
        catalog: Dict[str, University] = {}
        for source in sources:
            for university in source:
                self.stats["universities_in"] += 1
                existing = catalog.get(university.id)
                if existing is None:
                    fresh = university.model_copy(deep=True)
                    fresh.faculties = self._collapse_faculties(university.faculties)
                    catalog[university.id] = fresh
                    continue
                self._merge_university(existing, university)

        merged = list(catalog.values())
        _LOGGER.debug("Merged catalog sources", universities=len(merged), **self.stats)
        return merged


def merge_catalogs(sources: Sequence[Sequence[University]]) -> List[University]:
    """Functional wrapper around :meth:`CatalogMerger.merge`."""

    return CatalogMerger().merge(sources)


__all__ = [
    "CatalogMerger",
    "merge_catalogs",
    "UNIVERSITY_SCALAR_FIELDS",
    "FACULTY_SCALAR_FIELDS",
]
