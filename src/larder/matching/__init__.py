"""
Larder - Ingredient matching primitives.

Normalization, fuzzy matching and shopping list categories shared by every
surface that needs to compare recipe ingredients with a user's library.
"""

from larder.matching.categories import SHOPPING_GROUPS, classify
from larder.matching.fuzzy import find_match, matches, singularize
from larder.matching.normalize import (
    coerce_text,
    format_for_display,
    normalize_ingredient,
    parse_ingredient_field,
    split_entries,
)

__all__ = [
    "SHOPPING_GROUPS",
    "classify",
    "coerce_text",
    "find_match",
    "format_for_display",
    "matches",
    "normalize_ingredient",
    "parse_ingredient_field",
    "singularize",
    "split_entries",
]
