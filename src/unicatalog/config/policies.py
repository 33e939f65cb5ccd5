"""Policy configuration primitives for catalog reconciliation."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, List

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

TRADITIONAL_UNIVERSITY = "Traditional University"
UNIVERSITY_OF_TECHNOLOGY = "University of Technology"
COMPREHENSIVE_UNIVERSITY = "Comprehensive University"
SPECIALIZED_UNIVERSITY = "Specialized University"


class CatalogInfoPolicy(BaseModel):
    """Provenance tags and type vocabulary attached to catalog metadata."""

    version: str = Field(default="8.0.0-complete-comprehensive-2025", min_length=1)
    source_tag: str = Field(
        default="comprehensive-sa-universities-2025-complete",
        min_length=1,
        description="Provenance tag recorded in the exported metadata.",
    )
    university_types: List[str] = Field(
        default_factory=lambda: [
            TRADITIONAL_UNIVERSITY,
            UNIVERSITY_OF_TECHNOLOGY,
            COMPREHENSIVE_UNIVERSITY,
            SPECIALIZED_UNIVERSITY,
        ],
        description="Known university types, always present in the type breakdown.",
    )
    features: List[str] = Field(default_factory=list)

    @field_validator("university_types", "features")
    @classmethod
    def _strip_blanks(cls, value: List[str]) -> List[str]:
        return [entry.strip() for entry in value if entry and entry.strip()]


class ListingPolicy(BaseModel):
    """Fallback values used by the simplified university listing."""

    unknown_name: str = Field(default="Unknown University", min_length=1)
    unknown_abbreviation: str = Field(default="UNK", min_length=1)
    abbreviation_length: int = Field(default=3, ge=1, le=10)
    default_logo: str = Field(default="/logos/universities/default.svg", min_length=1)


class ProgramLookupPolicy(BaseModel):
    """Bounds applied by program lookups."""

    max_aps: int = Field(default=50, ge=0)


class Policies(BaseModel):
    """Root policy container."""

    catalog: CatalogInfoPolicy = Field(default_factory=CatalogInfoPolicy)
    listing: ListingPolicy = Field(default_factory=ListingPolicy)
    programs: ProgramLookupPolicy = Field(default_factory=ProgramLookupPolicy)

    @model_validator(mode="after")
    def _validate_version(self) -> "Policies":
        if not self.catalog.version:
            raise ValueError("catalog.version must be provided")
        return self


def _resolve_env_overrides(raw: dict) -> dict:
    """Apply environment variable overrides using UNICATALOG_POLICY__ prefix."""

    prefix = "UNICATALOG_POLICY__"
    for key, value in os.environ.items():
        if not key.startswith(prefix):
            continue
        path = key[len(prefix) :].lower().split("__")
        cursor = raw
        for part in path[:-1]:
            cursor = cursor.setdefault(part, {})
        try:
            parsed = json.loads(value)
        except (TypeError, json.JSONDecodeError):
            parsed = value
        cursor[path[-1]] = parsed
    return raw


def load_policies(source: Path | Dict[str, Any]) -> Policies:
    """Load policies from a dictionary or YAML file with environment overrides."""

    if isinstance(source, Path):
        if not source.exists():
            raise FileNotFoundError(f"Policy file not found: {source}")
        with source.open("r", encoding="utf-8") as handle:
            raw = yaml.safe_load(handle) or {}
    else:
        raw = dict(source)
    hydrated = _resolve_env_overrides(raw)
    return Policies.model_validate(hydrated)


__all__ = [
    "Policies",
    "load_policies",
    "CatalogInfoPolicy",
    "ListingPolicy",
    "ProgramLookupPolicy",
    "TRADITIONAL_UNIVERSITY",
    "UNIVERSITY_OF_TECHNOLOGY",
    "COMPREHENSIVE_UNIVERSITY",
    "SPECIALIZED_UNIVERSITY",
]
