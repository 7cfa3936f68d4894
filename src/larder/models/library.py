"""
Larder - Library and Saved Dish Models.

These models map to the Supabase `user_library` and `saved_dishes` rows.
Rows arrive duck-typed: columns may be missing or null, older rows use the
legacy `vegetables`/`entrees` column names, and ingredient columns can be
arrays, JSON text or delimited text. Validation resolves all of that once,
at the boundary, so matching code only ever sees clean lists.
"""

import locale
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from larder.matching.normalize import format_for_display, parse_ingredient_field


class LibraryCategory(str, Enum):
    """Library categories, valued by their `user_library` column name."""

    SEASONINGS = "seasonings"
    PRODUCE = "produce"
    PROTEINS = "proteins"
    PASTAS = "pastas"
    EQUIPMENT = "equipment"
    GRAINS = "grains"
    BREADS = "breads"
    SAUCES_CONDIMENTS = "sauces_condiments"
    DAIRY = "dairy"
    NON_PERISHABLES = "non_perishables"

    @property
    def label(self) -> str:
        """Section heading shown in the library screen."""
        return SECTION_LABELS[self]

    @classmethod
    def from_label(cls, label: str) -> "LibraryCategory | None":
        """Resolve a section heading ("Sauces/Condiments") or column name."""
        for category, section in SECTION_LABELS.items():
            if label == section or label == category.value:
                return category
        return None


SECTION_LABELS: dict[LibraryCategory, str] = {
    LibraryCategory.SEASONINGS: "Seasonings",
    LibraryCategory.PRODUCE: "Produce",
    LibraryCategory.PROTEINS: "Proteins",
    LibraryCategory.PASTAS: "Pasta",
    LibraryCategory.EQUIPMENT: "Equipment",
    LibraryCategory.GRAINS: "Grains",
    LibraryCategory.BREADS: "Breads",
    LibraryCategory.SAUCES_CONDIMENTS: "Sauces/Condiments",
    LibraryCategory.DAIRY: "Dairy",
    LibraryCategory.NON_PERISHABLES: "Non-Perishable Items",
}

# Old column name -> current column name
LEGACY_ALIASES: dict[str, LibraryCategory] = {
    "vegetables": LibraryCategory.PRODUCE,
    "entrees": LibraryCategory.PROTEINS,
}


def _sort_key(name: str) -> tuple[str, str]:
    folded = name.casefold()
    try:
        return (locale.strxfrm(folded), name)
    except ValueError:
        # strxfrm rejects embedded NUL characters
        return (folded, name)


def unique_sorted(items: Iterable[Any]) -> list[str]:
    """
    Display-format, drop blanks, dedupe case-insensitively and sort.

    Examples:
        unique_sorted(["basil", "Basil ", "", "anise"]) -> ["Anise", "Basil"]
    """
    seen: dict[str, str] = {}
    for item in items:
        formatted = format_for_display(item) if isinstance(item, str) else ""
        if formatted and formatted.casefold() not in seen:
            seen[formatted.casefold()] = formatted
    return sorted(seen.values(), key=_sort_key)


def migrate_legacy_aliases(data: dict[str, Any]) -> dict[str, Any]:
    """
    Resolve legacy library column names.

    The current column wins when it holds a value; the legacy column is only
    used when the current one is missing or null.
    """
    migrated = dict(data)
    for legacy, category in LEGACY_ALIASES.items():
        legacy_value = migrated.pop(legacy, None)
        if migrated.get(category.value) is None and legacy_value is not None:
            migrated[category.value] = legacy_value
    return migrated


@dataclass(frozen=True)
class LibraryEntry:
    """One item of a user's library, with the category it came from."""

    category: LibraryCategory
    name: str


class LibraryRow(BaseModel):
    """
    A user's categorized pantry library.

    Every list is Title-Cased, deduplicated case-insensitively and sorted.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    seasonings: list[str] = Field(default_factory=list)
    produce: list[str] = Field(default_factory=list)
    proteins: list[str] = Field(default_factory=list)
    pastas: list[str] = Field(default_factory=list)
    equipment: list[str] = Field(default_factory=list)
    grains: list[str] = Field(default_factory=list)
    breads: list[str] = Field(default_factory=list)
    sauces_condiments: list[str] = Field(default_factory=list)
    dairy: list[str] = Field(default_factory=list)
    non_perishables: list[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _resolve_aliases(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return migrate_legacy_aliases(data)
        return data

    @field_validator(*(c.value for c in LibraryCategory), mode="before")
    @classmethod
    def _clean_items(cls, value: Any) -> list[str]:
        if value is None:
            return []
        if isinstance(value, str):
            value = parse_ingredient_field(value)
        if not isinstance(value, (list, tuple, set, frozenset)):
            return []
        return unique_sorted(value)

    def items_for(self, category: LibraryCategory) -> list[str]:
        """Items stored under one category."""
        return list(getattr(self, category.value))

    def entries(self) -> Iterator[LibraryEntry]:
        """All items, category by category, in enum order."""
        for category in LibraryCategory:
            for name in getattr(self, category.value):
                yield LibraryEntry(category=category, name=name)

    @property
    def is_empty(self) -> bool:
        return not any(getattr(self, c.value) for c in LibraryCategory)

    def with_items(self, category: LibraryCategory, items: Iterable[str]) -> "LibraryRow":
        """Return a copy with one category replaced (and re-cleaned)."""
        columns = self.to_payload()
        columns[category.value] = list(items)
        return LibraryRow.model_validate(columns)

    def to_payload(self, user_id: str | None = None) -> dict[str, Any]:
        """Canonical column mapping for a `user_library` upsert."""
        payload: dict[str, Any] = {c.value: list(getattr(self, c.value)) for c in LibraryCategory}
        if user_id is not None:
            payload["user_id"] = user_id
        return payload


class SavedDish(BaseModel):
    """
    A dish the user saved, as read from `saved_dishes`.

    `ingredients` and `suggested_sides` keep their raw items; normalization
    happens when the dish is reconciled.
    """

    model_config = ConfigDict(extra="ignore")

    id: str | int | None = None
    title: str | None = None
    ingredients: list[Any] = Field(default_factory=list)
    suggested_sides: list[Any] = Field(default_factory=list)
    meal_type: str | None = None

    # These columns never feed matching; a bad value must not cost the dish
    @field_validator("id", mode="before")
    @classmethod
    def _lenient_id(cls, value: Any) -> str | int | None:
        if isinstance(value, bool) or not isinstance(value, (str, int)):
            return None
        return value

    @field_validator("title", "meal_type", mode="before")
    @classmethod
    def _lenient_text(cls, value: Any) -> str | None:
        if isinstance(value, bool) or not isinstance(value, (str, int)):
            return None
        return str(value)

    @field_validator("ingredients", "suggested_sides", mode="before")
    @classmethod
    def _parse_column(cls, value: Any) -> list[Any]:
        return parse_ingredient_field(value)

    def raw_ingredients(self) -> Iterator[Any]:
        """Ingredients first, then suggested sides."""
        yield from self.ingredients
        yield from self.suggested_sides
