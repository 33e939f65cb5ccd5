"""Utility helpers shared across catalog modules."""

from .helpers import (
    ensure_directory,
    has_content,
    normalize_faculty_name,
    normalize_whitespace,
    serialize_json,
    unique_preserving_order,
)
from .logging import configure_logging, get_logger, logging_context

__all__ = [
    "configure_logging",
    "get_logger",
    "logging_context",
    "ensure_directory",
    "has_content",
    "normalize_faculty_name",
    "normalize_whitespace",
    "serialize_json",
    "unique_preserving_order",
]
