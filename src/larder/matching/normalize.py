"""
Larder - Ingredient Normalization.

Reduces free-text recipe ingredient lines ("2 cups chopped fresh spinach,
divided") to the core noun phrase used for library matching, and formats
names for display.

Normalization is always recomputed on read. Nothing here raises on bad
input: every helper degrades to a best-effort string or an empty string.
"""

import json
import re
from typing import Any


# =============================================================================
# Word Lists
# =============================================================================

# Measurement units stripped after a leading quantity. Order matters:
# longer spellings come before their prefixes.
UNIT_WORDS = (
    "cups?",
    "cup",
    "tablespoons?",
    "tbsp",
    "teaspoons?",
    "tsp",
    "oz",
    "ounces?",
    "grams?",
    "g",
    "ml",
    "milliliters?",
    "l",
    "liters?",
    "lbs?",
    "pounds?",
    "kg",
    "kilograms?",
    "pinch",
    "cloves?",
    "cans?",
    "pieces?",
    "slices?",
    "heads?",
    r"bunch(?:es)?",
    "sticks?",
    "dash",
    "sprigs?",
    "ears?",
    "fillets?",
    "filets?",
    "packages?",
    "pkgs?",
    "bags?",
    "handfuls?",
    "bunches?",
    "links?",
    "strips?",
    "stalks?",
    "leaves?",
)

# Preparation, size and serving words that never name the ingredient itself.
DESCRIPTOR_WORDS = frozenset({
    "chopped",
    "fresh",
    "finely",
    "coarsely",
    "roughly",
    "diced",
    "minced",
    "sliced",
    "shredded",
    "grated",
    "optional",
    "softened",
    "peeled",
    "seeded",
    "halved",
    "quartered",
    "divided",
    "plus",
    "more",
    "serving",
    "servings",
    "taste",
    "room",
    "temperature",
    "warm",
    "cold",
    "extra",
    "virgin",
    "drained",
    "rinsed",
    "patted",
    "dry",
    "small",
    "medium",
})

# Keys tried, in order, when an ingredient arrives as an object.
TEXT_KEYS = ("name", "title", "text", "label", "ingredient", "value")

_BULLET_RE = re.compile(r"^[•\-\*\s]+")
_MEASURE_RE = re.compile(
    r"^[\d\s/,.\-½⅓⅔¼¾⅛]+"
    r"(?:(?:" + "|".join(UNIT_WORDS) + r")(?![a-z]))?\.?\s*",
    re.IGNORECASE,
)
_PAREN_RE = re.compile(r"\([^)]*\)")
_CLAUSE_RE = re.compile(r"[;,]")
_DELIMITER_RE = re.compile(r"[,\n]+")


# =============================================================================
# Coercion
# =============================================================================


def coerce_text(value: Any) -> str:
    """
    Coerce an ingredient payload of unknown shape to a string.

    Args:
        value: A string, list, dict, number or None

    Returns:
        Best-effort text, or "" when nothing usable is found

    Examples:
        coerce_text(["", "2 eggs"]) -> "2 eggs"
        coerce_text({"title": "Basil"}) -> "Basil"
        coerce_text(None) -> ""
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        for item in value:
            text = coerce_text(item)
            if normalize_ingredient(text):
                return text
        return ""
    if isinstance(value, dict):
        for key in TEXT_KEYS:
            text = coerce_text(value.get(key))
            if text.strip():
                return text
        return ""
    return str(value)


def parse_ingredient_field(value: Any) -> list:
    """
    Turn an `ingredients` or `suggested_sides` column value into a list.

    The column may hold a real array, a JSON-encoded array, newline or
    comma delimited text, a bare string, or null.
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    if not isinstance(value, str):
        return [value]

    text = value.strip()
    if not text:
        return []

    if text.startswith("["):
        try:
            decoded = json.loads(text)
        except json.JSONDecodeError:
            decoded = None
        if isinstance(decoded, list):
            return decoded

    separator = "\n" if "\n" in text else ","
    return [part.strip() for part in text.split(separator) if part.strip()]


def split_entries(text: str) -> list[str]:
    """Split comma/newline separated user input into display-formatted names."""
    if not text:
        return []
    entries = (format_for_display(part) for part in _DELIMITER_RE.split(text))
    return [entry for entry in entries if entry]


# =============================================================================
# Normalization
# =============================================================================


def strip_bullet(text: str) -> str:
    """Remove leading bullet markers and whitespace."""
    return _BULLET_RE.sub("", text).strip()


def strip_measurement(text: str) -> str:
    """
    Remove a leading quantity and unit.

    Examples:
        strip_measurement("2 cups flour") -> "flour"
        strip_measurement("1/2 tsp. salt") -> "salt"
        strip_measurement("3 large eggs") -> "large eggs"
    """
    return _MEASURE_RE.sub("", text, count=1).strip()


def normalize_ingredient(raw: Any) -> str:
    """
    Reduce a recipe ingredient line to its core name.

    Operations, in order:
    - Coerce lists/dicts/other values to text
    - Strip bullets, then a leading quantity + unit
    - Drop parenthetical asides
    - Keep only the clause before the first ";" or ","
    - Drop descriptor words (chopped, fresh, divided, ...)

    When descriptors were all that was left, falls back to the last word of
    the clause, then to progressively less processed forms of the input.

    Args:
        raw: Raw ingredient value

    Returns:
        Normalized name (not display formatted), or "" for empty input

    Examples:
        normalize_ingredient("2 cups chopped fresh spinach, divided") -> "spinach"
        normalize_ingredient("• 2 tomatoes (ripe), diced") -> "tomatoes"
        normalize_ingredient("1 tbsp finely chopped") -> "chopped"
    """
    if not raw:
        return ""

    text = coerce_text(raw)
    if not text:
        return ""

    without_bullet = strip_bullet(text)
    without_measure = strip_measurement(without_bullet)
    no_parens = _PAREN_RE.sub("", without_measure).strip()
    primary = _CLAUSE_RE.split(no_parens, maxsplit=1)[0].strip()

    if not primary:
        return _first_non_empty(without_measure, without_bullet, text)

    words = primary.split()
    kept = [word for word in words if word.lower() not in DESCRIPTOR_WORDS]
    cleaned = " ".join(kept).strip()
    if cleaned:
        return cleaned

    last_word = words[-1] if words else ""
    return _first_non_empty(last_word, primary, without_measure, without_bullet, text)


def _first_non_empty(*candidates: str) -> str:
    for candidate in candidates:
        if candidate and candidate.strip():
            return candidate.strip()
    return ""


# =============================================================================
# Display
# =============================================================================


def collapse_whitespace(text: str) -> str:
    """Trim and collapse runs of whitespace to single spaces."""
    return " ".join(str(text or "").split())


def format_for_display(text: Any) -> str:
    """
    Title-Case a name for display.

    Only used for presentation and library storage, never for matching.

    Examples:
        format_for_display("  olive   OIL ") -> "Olive Oil"
        format_for_display("gluten-free bread") -> "Gluten-free Bread"
    """
    clean = collapse_whitespace(text)
    if not clean:
        return ""
    return " ".join(_capitalize_word(word) for word in clean.split(" "))


def _capitalize_word(word: str) -> str:
    # Title-casing one character can yield several ("ß" -> "Ss"); only the
    # first of them stays upper so a second pass changes nothing.
    head = word[:1].title() + word[1:]
    return head[:1] + head[1:].lower()
