"""
Pytest configuration and fixtures for Larder tests.
"""

import os
import pytest
from unittest.mock import MagicMock

# Set test environment before importing larder modules
os.environ["LARDER_ENV"] = "development"
os.environ["DIETARY_FEATURE_ENABLED"] = "false"


@pytest.fixture
def mock_supabase():
    """Mock Supabase client for unit tests."""
    mock_client = MagicMock()

    # Mock table operations
    mock_table = MagicMock()
    mock_table.select.return_value = mock_table
    mock_table.upsert.return_value = mock_table
    mock_table.eq.return_value = mock_table
    mock_table.maybe_single.return_value = mock_table
    mock_table.execute.return_value = MagicMock(data=[], count=None)

    mock_client.table.return_value = mock_table

    return mock_client


@pytest.fixture
def sample_library_row():
    """A `user_library` row as Supabase returns it."""
    return {
        "user_id": "user-1",
        "seasonings": ["salt", "Black Pepper", "SALT"],
        "produce": ["Onions", "garlic"],
        "proteins": ["Chicken Breast"],
        "pastas": None,
        "equipment": ["Skillet"],
        "grains": [],
        "breads": ["Sourdough"],
        "sauces_condiments": ["Soy Sauce"],
        "dairy": ["Butter"],
        "non_perishables": None,
        "updated_at": "2026-01-01T00:00:00Z",
    }


@pytest.fixture
def sample_saved_dishes():
    """Saved dish rows with the mix of ingredient shapes seen in production."""
    return [
        {
            "id": "dish-1",
            "title": "Chicken Stir Fry",
            "ingredients": [
                "2 chicken breasts, sliced",
                "1 onion, diced",
                "2 tbsp soy sauce",
                "1 cup rice",
            ],
            "suggested_sides": ["Steamed Broccoli"],
            "meal_type": "Dinner",
        },
        {
            "id": "dish-2",
            "title": "Garlic Toast",
            "ingredients": '["4 slices sourdough", "3 cloves garlic, minced", "2 tbsp butter, softened"]',
            "suggested_sides": None,
            "meal_type": "Lunch",
        },
        {
            "id": "dish-3",
            "title": "Spinach Omelette",
            "ingredients": "3 large eggs\n2 cups chopped fresh spinach, divided\n1/4 cup milk",
            "meal_type": "Breakfast",
        },
    ]
