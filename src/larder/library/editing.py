"""
Larder - Library Editing.

Immutable updates for the library screen: adding typed-in items, toggling
suggested items, and the minimum coverage a library needs before dishes can
be generated from it.
"""

from larder.matching.normalize import format_for_display, split_entries
from larder.models.library import LibraryCategory, LibraryRow

# Categories that need at least one item for each meal type
MEAL_SECTION_MAP: dict[str, tuple[LibraryCategory, ...]] = {
    meal: (
        LibraryCategory.PROTEINS,
        LibraryCategory.PRODUCE,
        LibraryCategory.GRAINS,
        LibraryCategory.BREADS,
        LibraryCategory.DAIRY,
        LibraryCategory.SAUCES_CONDIMENTS,
        LibraryCategory.EQUIPMENT,
    )
    for meal in ("Breakfast", "Lunch", "Dinner")
}


def add_items(library: LibraryRow, category: LibraryCategory, text: str) -> LibraryRow:
    """
    Add comma or newline separated items to one category.

    Examples:
        add_items(lib, LibraryCategory.PRODUCE, "kale, leeks\\nbasil")
    """
    entries = split_entries(text)
    if not entries:
        return library
    return library.with_items(category, [*library.items_for(category), *entries])


def toggle_item(library: LibraryRow, category: LibraryCategory, item: str) -> LibraryRow:
    """Remove the item if the category has it (any case), otherwise add it."""
    name = format_for_display(item)
    if not name:
        return library
    current = library.items_for(category)
    key = name.lower()
    if any(value.lower() == key for value in current):
        return library.with_items(category, [v for v in current if v.lower() != key])
    return library.with_items(category, [*current, name])


def has_minimum_for_meal(library: LibraryRow, meal: str) -> bool:
    """True when every category the meal type needs has at least one item."""
    sections = MEAL_SECTION_MAP.get(meal)
    if not sections:
        return False
    return all(library.items_for(category) for category in sections)


def has_minimum_for_any_meal(library: LibraryRow) -> bool:
    """Saving the library is allowed once any meal type is covered."""
    return any(has_minimum_for_meal(library, meal) for meal in MEAL_SECTION_MAP)
