"""
Larder - User library.

Indexing a user's pantry library for matching, editing it, and dietary
recommendations.
"""

from larder.library.editing import (
    MEAL_SECTION_MAP,
    add_items,
    has_minimum_for_any_meal,
    has_minimum_for_meal,
    toggle_item,
)
from larder.library.index import LibraryIndex, build_index, coerce_library

__all__ = [
    "MEAL_SECTION_MAP",
    "LibraryIndex",
    "add_items",
    "build_index",
    "coerce_library",
    "has_minimum_for_any_meal",
    "has_minimum_for_meal",
    "toggle_item",
]
