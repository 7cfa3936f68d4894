"""
Larder - Shopping List Categories.

Keyword buckets used to group needed ingredients on the shopping list.
Presentation only: a category never decides whether an item is needed.
"""

import re

OTHER = "Other"

# Checked in order; the first matching bucket wins.
CATEGORY_RULES: tuple[tuple[str, re.Pattern], ...] = (
    ("Dairy", re.compile(r"milk|cheese|butter|yogurt|cream")),
    ("Breads", re.compile(r"bread|tortilla|pita|baguette|bun|roll|naan")),
    ("Grains & Pasta", re.compile(r"rice|quinoa|oats|barley|farro|pasta|noodle")),
    ("Proteins", re.compile(r"chicken|beef|pork|turkey|fish|salmon|shrimp|tofu|egg|lamb")),
    ("Sauces/Condiments", re.compile(r"ketchup|mustard|mayo|soy|sauce|bbq|vinegar|relish|dressing")),
    ("Non-Perishable", re.compile(r"canned|broth|stock|jar|peanut butter")),
    (
        "Produce",
        re.compile(
            r"tomato|onion|pepper|spinach|garlic|apple|banana|berry|grape|orange|lemon|lime"
            r"|avocado|cucumber|carrot|broccoli|mushroom|zucchini|kale|lettuce|potato|bean|corn"
        ),
    ),
)

SHOPPING_GROUPS: tuple[str, ...] = tuple(label for label, _ in CATEGORY_RULES) + (OTHER,)


def classify(name: str) -> str:
    """
    Pick the shopping list group for an ingredient name.

    Examples:
        classify("Rice") -> "Grains & Pasta"
        classify("Peanut Butter") -> "Dairy"  # "butter" is checked first
        classify("Saffron") -> "Other"
    """
    text = str(name or "").strip().lower()
    for label, pattern in CATEGORY_RULES:
        if pattern.search(text):
            return label
    return OTHER
