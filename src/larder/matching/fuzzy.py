"""
Larder - Fuzzy Ingredient Matching.

Case and plural insensitive, substring permissive equivalence between two
ingredient names. High recall by design of the product: "pea" matches both
"peas" and "peanut".
"""

import re
from collections.abc import Iterable

_PLURAL_RE = re.compile(r"s\b")


def singularize(name: str) -> str:
    """
    Lowercase, trim and drop the first word-final "s".

    Examples:
        singularize("Tomatoes") -> "tomatoe"
        singularize("Chicken Breasts") -> "chicken breast"
        singularize("s") -> "s"
    """
    base = str(name or "").strip().lower()
    reduced = _PLURAL_RE.sub("", base, count=1)
    return reduced or base


def matches(a: str, b: str) -> bool:
    """
    Return True if two ingredient names refer to the same thing.

    Names match when their singularized forms are equal or one contains
    the other.
    """
    aa = singularize(a)
    bb = singularize(b)
    if not aa or not bb:
        return False
    return aa == bb or aa in bb or bb in aa


def find_match(candidate: str, pool: Iterable[str]) -> str | None:
    """Return the first entry in pool that matches candidate, if any."""
    for entry in pool:
        if matches(candidate, entry):
            return entry
    return None
