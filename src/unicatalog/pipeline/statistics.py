"""Program statistics computed over a merged catalog."""

from __future__ import annotations

from collections import Counter
from typing import Any, Dict, Iterable, Sequence

from unicatalog.entities.core import ProgramStatistics, University
from unicatalog.utils.logging import get_logger

_LOGGER = get_logger(module=__name__)


def _faculty_programs(faculty: Any) -> tuple[str | None, int]:
    """Return the display name and degree count of one faculty entry."""

    try:
        name = faculty.name
        if not isinstance(name, str):
            raise TypeError(f"faculty name must be a string, got {type(name).__name__}")
        return name, len(faculty.degrees or [])
    except (AttributeError, TypeError) as exc:
        _LOGGER.debug("Ignoring malformed faculty entry", error=str(exc))
        return None, 0


def compute_statistics(catalog: Iterable[University]) -> ProgramStatistics:
    """Aggregate program counts in a single pass over ``catalog``.

    A university or faculty entry that does not have the expected shape
    contributes zero to every total; the pass itself never fails on it.
    """

    total_programs = 0
    by_faculty: Dict[str, int] = {}
    by_university: Dict[str, int] = {}
    without_programs: list[str] = []

    for university in catalog:
        try:
            university_id = university.id
            if not (isinstance(university_id, str) and university_id):
                raise TypeError(f"university id must be a non-empty string, got {university_id!r}")
            faculties = list(university.faculties or [])
        except (AttributeError, TypeError) as exc:
            _LOGGER.debug("Ignoring malformed university entry", error=str(exc))
            continue

        university_total = 0
        for faculty in faculties:
            name, count = _faculty_programs(faculty)
            if name is None:
                continue
            university_total += count
            by_faculty[name] = by_faculty.get(name, 0) + count

        total_programs += university_total
        by_university[university_id] = by_university.get(university_id, 0) + university_total
        if university_total == 0:
            without_programs.append(university_id)

    return ProgramStatistics(
        total_programs=total_programs,
        programs_by_faculty=by_faculty,
        programs_by_university=by_university,
        universities_without_programs=without_programs,
    )


def report_statistics(
    catalog: Sequence[University],
    statistics: ProgramStatistics,
    *,
    logger_=None,
) -> bool:
    """Log a diagnostic summary of the catalog.

    Reporting is best-effort: any failure is logged and swallowed so it can
    never abort catalog construction. Returns ``True`` when the summary was
    emitted.
    """

    log = logger_ or _LOGGER
    try:
        type_counts = Counter(university.type or "unknown" for university in catalog)
        log.info(
            "Catalog loaded",
            universities=len(catalog),
            programs=statistics.total_programs,
        )
        log.info(
            "University breakdown",
            breakdown={key: type_counts[key] for key in sorted(type_counts)},
        )
        if statistics.universities_without_programs:
            missing = set(statistics.universities_without_programs)
            log.warning(
                "Universities with no programs",
                names=[
                    university.name or university.id
                    for university in catalog
                    if university.id in missing
                ],
            )
        return True
    except Exception:
        log.exception("Failed to report catalog statistics")
        return False


__all__ = ["compute_statistics", "report_statistics"]
