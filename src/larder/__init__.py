"""
Larder - Pantry library matching for recipe shopping lists.

Decides which ingredients of a user's saved dishes are already in their
pantry library and which belong on the shopping list.
"""

__version__ = "1.0.0"
