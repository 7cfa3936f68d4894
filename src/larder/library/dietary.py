"""
Larder - Dietary Preferences.

Keyword rules that decide whether an ingredient fits a user's diets, and the
library items recommended for each diet. The whole feature is gated by the
`dietary_feature_enabled` setting; while it is off every ingredient is
allowed and no preferences are kept.
"""

import logging
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

from larder.config import settings
from larder.models.library import LibraryCategory, LibraryRow

logger = logging.getLogger(__name__)


class DietaryKey(str, Enum):
    """Supported diets, valued by their key in `account_prefs.dietary`."""

    VEGAN = "vegan"
    VEGETARIAN = "vegetarian"
    PESCATARIAN = "pescatarian"
    GLUTEN_FREE = "gluten_free"
    DAIRY_FREE = "dairy_free"
    KETO = "keto"
    PALEO = "paleo"


DIETARY_LABELS: dict[DietaryKey, tuple[str, str]] = {
    DietaryKey.VEGAN: ("Vegan", "Plant-based, no animal products."),
    DietaryKey.VEGETARIAN: ("Vegetarian", "No meat or poultry."),
    DietaryKey.PESCATARIAN: ("Pescatarian", "Seafood ok, no meat or poultry."),
    DietaryKey.GLUTEN_FREE: ("Gluten-free", "Avoid wheat, barley, and rye."),
    DietaryKey.DAIRY_FREE: ("Dairy-free", "Skip milk-based products."),
    DietaryKey.KETO: ("Keto", "Low-carb, high-fat focus."),
    DietaryKey.PALEO: ("Paleo", "Whole foods, no grains or legumes."),
}

KEYWORDS: dict[str, tuple[str, ...]] = {
    "meat": (
        "beef", "steak", "pork", "bacon", "ham", "lamb", "veal", "prosciutto",
        "salami", "pepperoni", "chorizo", "duck", "goat",
    ),
    "poultry": ("chicken", "turkey", "hen"),
    "fish": (
        "salmon", "tuna", "tilapia", "cod", "trout", "sardine", "anchovy",
        "halibut", "mahi mahi", "snapper",
    ),
    "shellfish": ("shrimp", "prawn", "crab", "lobster", "clam", "mussel", "oyster", "scallop"),
    "dairy": ("milk", "cheese", "butter", "yogurt", "cream", "ghee", "whey", "kefir"),
    "egg": ("egg", "eggs", "egg yolk", "egg white", "mayonnaise", "aioli"),
    "gluten": ("wheat", "barley", "rye", "malt", "semolina", "farina", "spelt", "bulgur"),
    "gluten_foods": (
        "bread", "pasta", "noodle", "flour", "tortilla", "baguette", "bun",
        "roll", "cracker", "pastry",
    ),
    "legumes": ("bean", "beans", "lentil", "legume", "peanut", "peas", "chickpea", "soy", "edamame"),
    "sugars": (
        "white sugar", "cane sugar", "brown sugar", "corn syrup", "high fructose",
        "agave", "maple syrup",
    ),
    "starchy_veg": ("potato", "sweet potato", "yam", "parsnip"),
    "refined_oils": ("canola oil", "vegetable oil", "corn oil"),
    "fruit_high_sugar": ("banana", "mango", "pineapple", "grape", "dates"),
    "honey": ("honey",),
}

# Keyword groups each diet rules out
_EXCLUSIONS: dict[DietaryKey, tuple[str, ...]] = {
    DietaryKey.VEGAN: ("meat", "poultry", "fish", "shellfish", "dairy", "egg", "honey"),
    DietaryKey.PESCATARIAN: ("meat", "poultry"),
    DietaryKey.GLUTEN_FREE: ("gluten", "gluten_foods"),
    DietaryKey.DAIRY_FREE: ("dairy",),
    DietaryKey.KETO: (
        "gluten", "gluten_foods", "legumes", "starchy_veg", "sugars", "fruit_high_sugar",
    ),
    DietaryKey.PALEO: ("gluten", "gluten_foods", "legumes", "dairy", "sugars", "refined_oils"),
}

DIETARY_LIBRARY_RECOMMENDATIONS: dict[DietaryKey, dict[LibraryCategory, tuple[str, ...]]] = {
    DietaryKey.VEGAN: {
        LibraryCategory.PROTEINS: ("Tofu", "Tempeh", "Chickpeas", "Lentils", "Seitan"),
        LibraryCategory.DAIRY: ("Almond Milk", "Oat Milk", "Coconut Yogurt", "Nutritional Yeast"),
        LibraryCategory.SAUCES_CONDIMENTS: ("Tahini", "Tamari"),
        LibraryCategory.NON_PERISHABLES: ("Black Beans", "Canned Chickpeas"),
    },
    DietaryKey.VEGETARIAN: {
        LibraryCategory.PROTEINS: ("Paneer", "Eggs"),
        LibraryCategory.DAIRY: ("Greek Yogurt", "Halloumi", "Goat Cheese"),
    },
    DietaryKey.PESCATARIAN: {
        LibraryCategory.PROTEINS: ("Salmon", "Tuna", "Shrimp", "Cod", "Scallops"),
        LibraryCategory.SAUCES_CONDIMENTS: ("Fish Sauce", "Seaweed"),
    },
    DietaryKey.GLUTEN_FREE: {
        LibraryCategory.GRAINS: ("Quinoa", "Brown Rice", "Buckwheat"),
        LibraryCategory.PASTAS: ("Rice Noodles", "Chickpea Pasta", "Zucchini Noodles"),
        LibraryCategory.BREADS: ("Gluten-Free Bread", "Cassava Tortillas"),
    },
    DietaryKey.DAIRY_FREE: {
        LibraryCategory.DAIRY: ("Almond Milk", "Coconut Milk", "Vegan Cheese", "Cashew Cream"),
        LibraryCategory.SAUCES_CONDIMENTS: ("Coconut Yogurt",),
    },
    DietaryKey.KETO: {
        LibraryCategory.PROTEINS: ("Chicken Thighs", "Ground Beef", "Salmon", "Pork Belly"),
        LibraryCategory.PRODUCE: ("Cauliflower", "Broccoli", "Spinach", "Avocado", "Zucchini"),
        LibraryCategory.SAUCES_CONDIMENTS: ("Avocado Oil", "MCT Oil", "Pesto"),
    },
    DietaryKey.PALEO: {
        LibraryCategory.PROTEINS: ("Grass-Fed Beef", "Turkey", "Wild-Caught Salmon"),
        LibraryCategory.PRODUCE: ("Sweet Potatoes", "Cauliflower Rice", "Brussels Sprouts"),
        LibraryCategory.NON_PERISHABLES: ("Almond Flour", "Coconut Flour"),
        LibraryCategory.SAUCES_CONDIMENTS: ("Coconut Aminos",),
    },
}


def _feature_enabled(enabled: bool | None) -> bool:
    return settings.dietary_feature_enabled if enabled is None else enabled


def _has(text: str, group: str) -> bool:
    return any(term in text for term in KEYWORDS[group])


def sanitize_dietary_prefs(raw: Any, enabled: bool | None = None) -> set[DietaryKey]:
    """
    Keep the known diets that are switched on in a stored preferences blob.

    Args:
        raw: `account_prefs.dietary` value, e.g. {"vegan": true, "junk": 1}
        enabled: Override for the feature flag (defaults to settings)

    Returns:
        Set of active DietaryKey values (empty while the feature is off)
    """
    if not _feature_enabled(enabled):
        return set()
    if not isinstance(raw, Mapping):
        return set()
    return {key for key in DietaryKey if raw.get(key.value)}


def is_ingredient_allowed(
    ingredient: str,
    prefs: Iterable[DietaryKey],
    enabled: bool | None = None,
) -> bool:
    """
    Check an ingredient against the active diets.

    Vegetarians may eat seafood only when pescatarian is also active.
    """
    if not _feature_enabled(enabled):
        return True
    text = str(ingredient or "").lower()
    if not text:
        return True

    active = set(prefs)
    for key in active:
        if any(_has(text, group) for group in _EXCLUSIONS.get(key, ())):
            return False

    if DietaryKey.VEGETARIAN in active:
        if _has(text, "meat") or _has(text, "poultry"):
            return False
        if DietaryKey.PESCATARIAN not in active and (_has(text, "fish") or _has(text, "shellfish")):
            return False

    return True


def apply_dietary_recommendations(library: LibraryRow, prefs: Iterable[DietaryKey]) -> LibraryRow:
    """
    Merge each active diet's recommended items into the library.

    Returns the original row when no diet is active.
    """
    wanted = set(prefs)
    active = [key for key in DietaryKey if key in wanted]
    if not active:
        return library

    updated = library
    for key in active:
        for category, items in DIETARY_LIBRARY_RECOMMENDATIONS.get(key, {}).items():
            if items:
                updated = updated.with_items(category, [*updated.items_for(category), *items])

    logger.info(f"Applied dietary recommendations for {', '.join(k.value for k in active)}")
    return updated


async def ensure_library_coverage(user_id: str, prefs: Iterable[DietaryKey]) -> LibraryRow | None:
    """
    Persist dietary recommendations into a user's stored library.

    Best effort: a failed read or write is logged and None is returned, so
    saving account preferences never fails because of it.
    """
    from larder.db.client import get_library, upsert_library
    from larder.library.index import coerce_library

    active = set(prefs)
    if not active:
        return None

    try:
        current = coerce_library(await get_library(user_id))
        updated = apply_dietary_recommendations(current, active)
        await upsert_library(user_id, updated.to_payload())
        return updated
    except Exception as e:
        logger.warning(f"Failed to ensure dietary library coverage for {user_id}: {e}")
        return None


async def sync_dietary_library(
    user_id: str,
    enabled: bool | None = None,
) -> tuple[set[DietaryKey], LibraryRow | None]:
    """
    Load a user's stored diets and top up their library to match.

    Returns:
        (active diets, updated library row or None when nothing was written)
    """
    from larder.db.client import get_dietary_prefs

    prefs = sanitize_dietary_prefs(await get_dietary_prefs(user_id), enabled=enabled)
    if not prefs:
        logger.debug(f"No active diets for {user_id}")
        return prefs, None
    return prefs, await ensure_library_coverage(user_id, prefs)
