"""
Larder - Data models.

Pydantic models for the Supabase rows the matching engine consumes.
"""

from larder.models.library import (
    LEGACY_ALIASES,
    SECTION_LABELS,
    LibraryCategory,
    LibraryEntry,
    LibraryRow,
    SavedDish,
    migrate_legacy_aliases,
    unique_sorted,
)

__all__ = [
    "LEGACY_ALIASES",
    "SECTION_LABELS",
    "LibraryCategory",
    "LibraryEntry",
    "LibraryRow",
    "SavedDish",
    "migrate_legacy_aliases",
    "unique_sorted",
]
