"""
Larder - Library Index.

Flattens a user's categorized library into a searchable collection used by
reconciliation: an exact-match set for the cheap path and an ordered flat
list for the fuzzy scan.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from larder.matching.fuzzy import find_match
from larder.models.library import LibraryEntry, LibraryRow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LibraryIndex:
    """
    Searchable view over a library.

    An empty index means the user has no library configured; reconciliation
    treats that as "everything is needed".
    """

    entries: tuple[LibraryEntry, ...] = ()
    flat_list: tuple[str, ...] = ()
    normalized_set: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_empty(self) -> bool:
        return not self.flat_list

    def __len__(self) -> int:
        return len(self.flat_list)

    def contains(self, candidate: str) -> bool:
        """
        Check whether the library already covers an ingredient.

        Exact (case-insensitive) membership first, then a fuzzy scan over
        every library entry.
        """
        key = str(candidate or "").strip().lower()
        if not key:
            return False
        if key in self.normalized_set:
            return True
        return find_match(candidate, self.flat_list) is not None


def coerce_library(row: LibraryRow | Mapping[str, Any] | None) -> LibraryRow:
    """
    Turn whatever the data layer returned into a LibraryRow.

    Missing or unparseable rows become an empty library.
    """
    if row is None:
        return LibraryRow()
    if isinstance(row, LibraryRow):
        return row
    if not isinstance(row, Mapping):
        logger.debug(f"Ignoring library row of type {type(row).__name__}")
        return LibraryRow()
    try:
        return LibraryRow.model_validate(dict(row))
    except ValidationError as e:
        logger.debug(f"Ignoring malformed library row: {e}")
        return LibraryRow()


def build_index(row: LibraryRow | Mapping[str, Any] | None) -> LibraryIndex:
    """
    Build the search index for a library row.

    Args:
        row: LibraryRow, raw `user_library` mapping, or None

    Returns:
        LibraryIndex (empty when there is no row or every category is empty)
    """
    library = coerce_library(row)
    entries = tuple(library.entries())
    flat_list = tuple(entry.name for entry in entries)
    normalized_set = frozenset(name.strip().lower() for name in flat_list)
    return LibraryIndex(entries=entries, flat_list=flat_list, normalized_set=normalized_set)
