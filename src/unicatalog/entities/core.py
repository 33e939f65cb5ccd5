"""Core domain entities used throughout the catalog pipeline."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from unicatalog.utils.helpers import unique_preserving_order


class CatalogModel(BaseModel):
    """Base model accepting camelCase or snake_case keys and dumping camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


def _empty_if_none(value: Any) -> Any:
    return "" if value is None else value


def _list_if_none(value: Any) -> Any:
    return [] if value is None else value


class Subject(CatalogModel):
    """School subject requirement attached to a degree."""

    name: str = Field(..., min_length=1)
    level: int | float = Field(default=0)
    is_required: bool = Field(default=False)


class Degree(CatalogModel):
    """Degree program offered by a faculty."""

    id: str = Field(..., min_length=1, description="Identifier unique within the owning faculty")
    name: str = ""
    code: str = ""
    faculty: str = ""
    duration: str = ""
    aps_requirement: int | float | None = Field(
        default=None,
        description="Admission Point Score required for entry.",
    )
    description: str = ""
    subjects: List[Subject] = Field(default_factory=list)
    career_prospects: List[str] = Field(default_factory=list)

    @field_validator("id")
    @classmethod
    def _strip_id(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("degree id must contain non-whitespace characters")
        return cleaned

    @field_validator("name", "code", "faculty", "duration", "description", mode="before")
    @classmethod
    def _default_text(cls, value: Any) -> Any:
        return _empty_if_none(value)

    @field_validator("subjects", "career_prospects", mode="before")
    @classmethod
    def _default_lists(cls, value: Any) -> Any:
        return _list_if_none(value)


class Faculty(CatalogModel):
    """Named grouping of degrees within one university."""

    id: str = ""
    name: str = Field(..., min_length=1)
    description: str = ""
    degrees: List[Degree] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def _require_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("faculty name must contain non-whitespace characters")
        return value

    @field_validator("id", "description", mode="before")
    @classmethod
    def _default_text(cls, value: Any) -> Any:
        return _empty_if_none(value)

    @field_validator("degrees", mode="before")
    @classmethod
    def _default_degrees(cls, value: Any) -> Any:
        return _list_if_none(value)


class University(CatalogModel):
    """University record as contributed by one source or held in the catalog."""

    id: str = Field(..., min_length=1, description="Identifier unique across the catalog")
    name: str = ""
    abbreviation: str = ""
    full_name: str = ""
    type: str = ""
    location: str = ""
    province: str = ""
    website: str = ""
    logo: str = ""
    overview: str = ""
    description: str = ""
    established_year: int | float | None = None
    student_count: int | float | None = Field(
        default=None,
        validation_alias=AliasChoices("studentCount", "studentPopulation", "student_count"),
        serialization_alias="studentCount",
    )
    campuses: List[str] = Field(default_factory=list)
    contact_info: Dict[str, Any] | str | None = None
    application_periods: Dict[str, Any] | str | None = None
    notable_features: List[str] = Field(default_factory=list)
    faculties: List[Faculty] = Field(default_factory=list)

    @field_validator("id")
    @classmethod
    def _strip_id(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("university id must contain non-whitespace characters")
        return cleaned

    @field_validator(
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
        mode="before",
    )
    @classmethod
    def _default_text(cls, value: Any) -> Any:
        return _empty_if_none(value)

    @field_validator("campuses", "notable_features", "faculties", mode="before")
    @classmethod
    def _default_lists(cls, value: Any) -> Any:
        return _list_if_none(value)

    @field_validator("notable_features")
    @classmethod
    def _dedupe_features(cls, value: List[str]) -> List[str]:
        return unique_preserving_order(value)

    def program_count(self) -> int:
        return sum(len(faculty.degrees) for faculty in self.faculties)


class ProgramListing(Degree):
    """Degree row annotated with its owning university."""

    university: str = ""
    university_id: str = ""


class SimplifiedUniversity(CatalogModel):
    """Lightweight projection for listings."""

    id: str
    name: str
    abbreviation: str
    full_name: str
    logo: str


class ProgramStatistics(CatalogModel):
    """Aggregate program counts computed over a merged catalog."""

    total_programs: int = Field(default=0, ge=0)
    programs_by_faculty: Dict[str, int] = Field(default_factory=dict)
    programs_by_university: Dict[str, int] = Field(
        default_factory=dict,
        description="Program totals keyed by university id.",
    )
    universities_without_programs: List[str] = Field(
        default_factory=list,
        description="Ids of universities that list no programs.",
    )


class CatalogMetadata(CatalogModel):
    """Metadata and statistics export describing a built catalog."""

    total_universities: int = Field(default=0, ge=0)
    university_breakdown: Dict[str, int] = Field(default_factory=dict)
    program_statistics: ProgramStatistics = Field(default_factory=ProgramStatistics)
    version: str = Field(..., min_length=1)
    source: str = Field(..., min_length=1)
    last_updated: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    features: List[str] = Field(default_factory=list)


class SkippedRecord(CatalogModel):
    """Diagnostic describing a record dropped at the validation boundary."""

    source: str = Field(..., min_length=1, description="Name of the source that supplied the record")
    reason: str = Field(..., min_length=1)
    path: str = Field(..., description="Location of the record inside its source, e.g. [3].faculties[1]")
    record_id: str | None = None
    details: Dict[str, Any] = Field(default_factory=dict)


__all__ = [
    "CatalogModel",
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
