"""
Larder - Shopping List Reconciliation.

Computes which recipe ingredients from a user's saved dishes are missing
from their library. This is the single implementation behind the shopping
list, the account summary and the shopping badge.

Pure functions: nothing here does I/O, and malformed rows or items are
skipped rather than raised.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from larder.library.index import LibraryIndex, build_index
from larder.matching.categories import SHOPPING_GROUPS, classify
from larder.matching.fuzzy import find_match, matches
from larder.matching.normalize import format_for_display, normalize_ingredient
from larder.models.library import LibraryRow, SavedDish

logger = logging.getLogger(__name__)

DishLike = SavedDish | Mapping[str, Any]
LibraryLike = LibraryIndex | LibraryRow | Mapping[str, Any] | None


@dataclass
class ShoppingList:
    """Needed ingredients grouped for display."""

    groups: dict[str, list[str]] = field(default_factory=dict)

    @property
    def count(self) -> int:
        return sum(len(items) for items in self.groups.values())

    @property
    def is_empty(self) -> bool:
        return not self.groups

    def items(self) -> list[str]:
        """Every needed item, in group order."""
        return [item for items in self.groups.values() for item in items]


def _as_index(library: LibraryLike) -> LibraryIndex:
    if isinstance(library, LibraryIndex):
        return library
    return build_index(library)


def _iter_dishes(saved_dishes: Iterable[Any] | None) -> Iterable[SavedDish]:
    for row in saved_dishes or ():
        if isinstance(row, SavedDish):
            yield row
            continue
        if not isinstance(row, Mapping):
            logger.debug(f"Skipping saved dish of type {type(row).__name__}")
            continue
        try:
            yield SavedDish.model_validate(dict(row))
        except ValidationError as e:
            logger.debug(f"Skipping malformed saved dish {row.get('id')!r}: {e}")


def compute_needed(saved_dishes: Iterable[DishLike] | None, library: LibraryLike) -> dict[str, str]:
    """
    Find ingredients required by saved dishes but absent from the library.

    Each ingredient (and suggested side) is normalized, checked against the
    library (exact first, then fuzzy), and collected when missing. Needed
    items that fuzzy-match one already collected are dropped, so "Tomato"
    and "Tomatoes" from different dishes count once; the first display form
    seen is kept.

    An empty library means nothing is configured yet, so every ingredient
    is needed.

    Args:
        saved_dishes: SavedDish models or raw `saved_dishes` rows
        library: LibraryIndex, LibraryRow, raw `user_library` row, or None

    Returns:
        Insertion-ordered mapping of lowercase key -> display name
    """
    index = _as_index(library)
    needed: dict[str, str] = {}

    for dish in _iter_dishes(saved_dishes):
        for raw in dish.raw_ingredients():
            candidate = normalize_ingredient(raw)
            if not candidate.strip():
                continue
            if not index.is_empty and index.contains(candidate):
                continue

            display = format_for_display(candidate)
            if find_match(display, needed.values()) is not None:
                continue
            needed[display.lower()] = display

    logger.debug(f"Reconciled against {len(index)} library items: {len(needed)} needed")
    return needed


def needed_count(saved_dishes: Iterable[DishLike] | None, library: LibraryLike) -> int:
    """Number of distinct needed ingredients (shopping badge)."""
    return len(compute_needed(saved_dishes, library))


def group_needed(needed: Iterable[str]) -> dict[str, list[str]]:
    """
    Group needed item names by shopping category.

    Groups follow SHOPPING_GROUPS order, empty groups are omitted, and each
    list is fuzzy-deduplicated and sorted.
    """
    grouped: dict[str, list[str]] = {}
    for name in needed:
        bucket = grouped.setdefault(classify(name), [])
        if not any(matches(existing, name) for existing in bucket):
            bucket.append(name)
    return {label: sorted(grouped[label]) for label in SHOPPING_GROUPS if grouped.get(label)}


def build_shopping_list(
    saved_dishes: Iterable[DishLike] | None,
    library: LibraryLike,
) -> ShoppingList:
    """Reconcile and group in one step (shopping list screen)."""
    needed = compute_needed(saved_dishes, library)
    shopping_list = ShoppingList(groups=group_needed(needed.values()))
    logger.info(f"Shopping list has {shopping_list.count} items in {len(shopping_list.groups)} groups")
    return shopping_list
