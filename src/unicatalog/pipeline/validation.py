"""Validation boundary converting raw source records into typed entities.

Raw catalog sources are loosely shaped mappings. This module is the only place
that inspects them: every record either becomes a typed :class:`University`
(with its faculties and degrees) or is reported as a :class:`SkippedRecord`.
Downstream stages only ever see typed, identity-bearing entities.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Collection, Dict, Iterable, List, Mapping, Sequence, Tuple, Type

from pydantic import AliasChoices, BaseModel, ValidationError
from pydantic.alias_generators import to_camel

from unicatalog.entities.core import Degree, Faculty, SkippedRecord, University
from unicatalog.utils.logging import get_logger

_LOGGER = get_logger(module=__name__)

MISSING_UNIVERSITY_ID = "missing_university_id"
MISSING_FACULTY_NAME = "missing_faculty_name"
MISSING_DEGREE_ID = "missing_degree_id"
INVALID_UNIVERSITY = "invalid_university"
INVALID_FACULTY = "invalid_faculty"
INVALID_DEGREE = "invalid_degree"
NOT_A_MAPPING = "not_a_mapping"
INVALID_COLLECTION = "invalid_collection"
INVALID_FIELD = "invalid_field"


class CatalogSourceError(ValueError):
    """Raised when a whole source cannot be interpreted as a list of records."""


@dataclass(frozen=True)
class CatalogSource:
    """Named source dataset contributing university records."""

    name: str
    records: Sequence[Any]


@dataclass(frozen=True)
class TypedSource:
    """Source whose records passed the validation boundary."""

    name: str
    universities: Tuple[University, ...]


@dataclass
class ValidationResult:
    """Typed sources plus every record skipped while validating them."""

    sources: List[TypedSource] = field(default_factory=list)
    skipped: List[SkippedRecord] = field(default_factory=list)

    @property
    def universities(self) -> List[List[University]]:
        return [list(source.universities) for source in self.sources]

    @property
    def ok(self) -> bool:
        return not self.skipped


def _identity(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _error_details(exc: ValidationError) -> dict:
    return {
        "errors": [
            {"loc": ".".join(str(part) for part in error["loc"]), "msg": error["msg"]}
            for error in exc.errors()
        ]
    }


def _field_keys(model: Type[BaseModel]) -> Dict[str, Tuple[str, Tuple[str, ...]]]:
    """Map each accepted input key to its field name and every key feeding that field."""

    lookup: Dict[str, Tuple[str, Tuple[str, ...]]] = {}
    for name, info in model.model_fields.items():
        keys = {name, to_camel(name)}
        if info.alias:
            keys.add(info.alias)
        if isinstance(info.validation_alias, str):
            keys.add(info.validation_alias)
        elif isinstance(info.validation_alias, AliasChoices):
            keys.update(choice for choice in info.validation_alias.choices if isinstance(choice, str))
        group = tuple(sorted(keys))
        for key in keys:
            lookup[key] = (name, group)
    return lookup


class _SourceValidator:
    """Validate the records of a single source, collecting skips."""

    def __init__(self, source_name: str) -> None:
        self.source_name = source_name
        self.skipped: List[SkippedRecord] = []

    def _skip(
        self,
        reason: str,
        path: str,
        *,
        record_id: str | None = None,
        details: Mapping[str, Any] | None = None,
    ) -> None:
        entry = SkippedRecord(
            source=self.source_name,
            reason=reason,
            path=path,
            record_id=record_id,
            details=dict(details or {}),
        )
        self.skipped.append(entry)
        _LOGGER.warning(
            "Skipped catalog record",
            source=self.source_name,
            reason=reason,
            path=path,
            record_id=record_id,
        )

    def _validate_fields(
        self,
        model: Type[BaseModel],
        raw: Mapping[str, Any],
        path: str,
        *,
        record_id: str,
        reason: str,
        identity: Collection[str],
    ) -> Any:
        """Validate ``raw``, resetting each invalid optional field to its default.

        Every reset field is reported as :data:`INVALID_FIELD`. The record itself is
        only skipped (under ``reason``) when an identity field fails or an error
        cannot be attributed to a single input field.
        """

        payload = dict(raw)
        lookup = _field_keys(model)
        groups = dict(lookup.values())
        while True:
            try:
                return model.model_validate(payload)
            except ValidationError as exc:
                failed: Dict[str, List[dict]] = {}
                for error in exc.errors():
                    loc = error["loc"]
                    entry = lookup.get(str(loc[0])) if loc else None
                    if entry is None or entry[0] in identity:
                        failed = {}
                        break
                    failed.setdefault(entry[0], []).append(error)
                removed = False
                for field_name in failed:
                    for key in groups[field_name]:
                        if key in payload:
                            payload.pop(key)
                            removed = True
                if not removed:
                    self._skip(reason, path, record_id=record_id, details=_error_details(exc))
                    return None
                for field_name, errors in failed.items():
                    self._skip(
                        INVALID_FIELD,
                        f"{path}.{field_name}",
                        record_id=record_id,
                        details={
                            "field": field_name,
                            "errors": [
                                {
                                    "loc": ".".join(str(part) for part in error["loc"]),
                                    "msg": error["msg"],
                                }
                                for error in errors
                            ],
                        },
                    )

    def degree(self, raw: Any, path: str) -> Degree | None:
        if isinstance(raw, Degree):
            return raw.model_copy(deep=True)
        if not isinstance(raw, Mapping):
            self._skip(NOT_A_MAPPING, path, details={"type": type(raw).__name__})
            return None
        degree_id = _identity(raw.get("id"))
        if degree_id is None:
            self._skip(MISSING_DEGREE_ID, path, details={"name": raw.get("name")})
            return None
        return self._validate_fields(
            Degree,
            raw,
            path,
            record_id=degree_id,
            reason=INVALID_DEGREE,
            identity=("id",),
        )

    def faculty(self, raw: Any, path: str) -> Faculty | None:
        if isinstance(raw, Faculty):
            return raw.model_copy(deep=True)
        if not isinstance(raw, Mapping):
            self._skip(NOT_A_MAPPING, path, details={"type": type(raw).__name__})
            return None
        name = _identity(raw.get("name"))
        if name is None:
            self._skip(MISSING_FACULTY_NAME, path, record_id=_identity(raw.get("id")))
            return None
        degrees = self._children(raw.get("degrees"), f"{path}.degrees", self.degree)
        payload = {key: value for key, value in raw.items() if key != "degrees"}
        faculty = self._validate_fields(
            Faculty,
            payload,
            path,
            record_id=name,
            reason=INVALID_FACULTY,
            identity=("name",),
        )
        if faculty is None:
            return None
        faculty.degrees = degrees
        return faculty

    def university(self, raw: Any, path: str) -> University | None:
        if isinstance(raw, University):
            return raw.model_copy(deep=True)
        if not isinstance(raw, Mapping):
            self._skip(NOT_A_MAPPING, path, details={"type": type(raw).__name__})
            return None
        university_id = _identity(raw.get("id"))
        if university_id is None:
            self._skip(MISSING_UNIVERSITY_ID, path, details={"name": raw.get("name")})
            return None
        faculties = self._children(raw.get("faculties"), f"{path}.faculties", self.faculty)
        payload = {key: value for key, value in raw.items() if key != "faculties"}
        university = self._validate_fields(
            University,
            payload,
            path,
            record_id=university_id,
            reason=INVALID_UNIVERSITY,
            identity=("id",),
        )
        if university is None:
            return None
        university.faculties = faculties
        return university

    def _children(self, raw: Any, path: str, convert) -> list:
        if raw is None:
            return []
        if isinstance(raw, (str, bytes, Mapping)) or not isinstance(raw, Iterable):
            self._skip(INVALID_COLLECTION, path, details={"type": type(raw).__name__})
            return []
        converted = []
        for index, item in enumerate(raw):
            entity = convert(item, f"{path}[{index}]")
            if entity is not None:
                converted.append(entity)
        return converted


def _coerce_source(source: Any, position: int) -> CatalogSource:
    if isinstance(source, CatalogSource):
        named = source
    else:
        named = CatalogSource(name=f"source[{position}]", records=source)
    records = named.records
    if records is None or isinstance(records, (str, bytes, Mapping)) or not isinstance(
        records, Sequence
    ):
        raise CatalogSourceError(
            f"Catalog source '{named.name}' (position {position}) must be a sequence of "
            f"university records, got {type(records).__name__}"
        )
    return named


def validate_source(source: CatalogSource | Sequence[Any], position: int = 0) -> ValidationResult:
    """Validate a single source and return its typed records."""

    named = _coerce_source(source, position)
    validator = _SourceValidator(named.name)
    universities = []
    for index, raw in enumerate(named.records):
        university = validator.university(raw, f"[{index}]")
        if university is not None:
            universities.append(university)
    _LOGGER.debug(
        "Validated catalog source",
        source=named.name,
        universities=len(universities),
        skipped=len(validator.skipped),
    )
    return ValidationResult(
        sources=[TypedSource(name=named.name, universities=tuple(universities))],
        skipped=validator.skipped,
    )


def validate_sources(sources: Sequence[CatalogSource | Sequence[Any]] | None) -> ValidationResult:
    """Validate ordered sources, lowest precedence first.

    Raises :class:`CatalogSourceError` when ``sources`` itself or any single
    source is not a sequence. Record-level problems never raise; they are
    returned in :attr:`ValidationResult.skipped`.
    """

    if sources is None or isinstance(sources, (str, bytes, Mapping)) or not isinstance(
        sources, Sequence
    ):
        raise CatalogSourceError(
            f"Catalog sources must be a sequence of sources, got {type(sources).__name__}"
        )
    result = ValidationResult()
    for position, source in enumerate(sources):
        partial = validate_source(source, position)
        result.sources.extend(partial.sources)
        result.skipped.extend(partial.skipped)
    return result


__all__ = [
    "CatalogSource",
    "CatalogSourceError",
    "TypedSource",
    "ValidationResult",
    "validate_source",
    "validate_sources",
    "MISSING_UNIVERSITY_ID",
    "MISSING_FACULTY_NAME",
    "MISSING_DEGREE_ID",
    "INVALID_UNIVERSITY",
    "INVALID_FACULTY",
    "INVALID_DEGREE",
    "NOT_A_MAPPING",
    "INVALID_COLLECTION",
    "INVALID_FIELD",
]
