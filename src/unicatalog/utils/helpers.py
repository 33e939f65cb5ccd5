"""General-purpose helpers for deterministic catalog processing."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Hashable, Iterable, List, TypeVar

T = TypeVar("T", bound=Hashable)
_WORD_BOUNDARY_PATTERN = re.compile(r"\s+")


def normalize_whitespace(text: str) -> str:
    """Collapse repeated whitespace into single spaces."""

    return _WORD_BOUNDARY_PATTERN.sub(" ", text.strip())


def normalize_faculty_name(name: str) -> str:
    """Return the identity key for a faculty name within one university."""

    return normalize_whitespace(name).casefold()


def has_content(value: Any) -> bool:
    """Whether ``value`` counts as non-empty for last-non-empty-wins merging."""

    return bool(value)


def unique_preserving_order(items: Iterable[T]) -> List[T]:
    """Drop repeated items while keeping first-seen order."""

    seen: set[T] = set()
    result: List[T] = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        result.append(item)
    return result


def ensure_directory(path: Path | str) -> Path:
    """Ensure that a directory exists and return the resolved Path."""

    target = Path(path)
    target.mkdir(parents=True, exist_ok=True)
    return target.resolve()


def serialize_json(payload: Any) -> str:
    """Serialise payloads with stable key ordering."""

    return json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False)


__all__ = [
    "normalize_whitespace",
    "normalize_faculty_name",
    "has_content",
    "unique_preserving_order",
    "ensure_directory",
    "serialize_json",
]
