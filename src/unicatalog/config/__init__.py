"""Configuration utilities for the catalog engine."""

from .policies import (
    CatalogInfoPolicy,
    ListingPolicy,
    Policies,
    ProgramLookupPolicy,
    load_policies,
)
from .settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
    "Policies",
    "load_policies",
    "CatalogInfoPolicy",
    "ListingPolicy",
    "ProgramLookupPolicy",
]
