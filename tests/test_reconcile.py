"""
Tests for shopping list reconciliation.

Tests cover:
- Needed set against a configured library
- The empty-library special case
- Cross-dish fuzzy deduplication (first display form wins)
- Grouping for the shopping list screen
- Malformed rows and items
"""

import pytest

from larder.library.index import build_index
from larder.models.library import LibraryRow, SavedDish
from larder.shopping.reconcile import (
    ShoppingList,
    build_shopping_list,
    compute_needed,
    group_needed,
    needed_count,
)


class TestComputeNeeded:
    """Test the needed set."""

    def test_library_scenario(self):
        """Onion and chicken are covered by the library; rice is not."""
        library = {"produce": ["Onions"], "proteins": ["Chicken Breast"]}
        dishes = [{"id": "d1", "ingredients": ["1 onion, diced", "2 chicken breasts", "1 cup rice"]}]

        needed = compute_needed(dishes, library)

        assert list(needed.values()) == ["Rice"]
        assert build_shopping_list(dishes, library).groups == {"Grains & Pasta": ["Rice"]}

    def test_empty_library_needs_everything(self):
        dishes = [{"id": "d1", "ingredients": ["Salt", "Pepper"]}]
        assert set(compute_needed(dishes, {}).values()) == {"Salt", "Pepper"}

    def test_empty_library_all_categories_empty(self):
        library = LibraryRow()
        dishes = [{"ingredients": ["1 cup rice", "2 carrots", "", None]}]
        assert list(compute_needed(dishes, library).values()) == ["Rice", "Carrots"]

    def test_no_library_row(self):
        assert list(compute_needed([{"ingredients": ["Salt"]}], None).values()) == ["Salt"]

    def test_dedupes_plurals(self):
        """Tomatoes from two lines collapse into one needed item."""
        dishes = [{"id": "d1", "ingredients": ["2 tomatoes, diced"]}, {"id": "d2", "ingredients": ["1 tomato"]}]
        needed = compute_needed(dishes, {})
        assert list(needed.values()) == ["Tomatoes"]

    def test_dedupe_keeps_first_seen_form(self):
        dishes = [
            {"id": "d1", "ingredients": ["3 cloves garlic, minced"]},
            {"id": "d2", "ingredients": ["Garlic Cloves"]},
        ]
        needed = compute_needed(dishes, {"produce": ["Kale"]})
        assert list(needed.values()) == ["Garlic"]

    def test_dedupe_garlic_other_order(self):
        dishes = [
            {"id": "d1", "ingredients": ["Garlic Cloves"]},
            {"id": "d2", "ingredients": ["3 cloves garlic, minced"]},
        ]
        needed = compute_needed(dishes, {"produce": ["Kale"]})
        assert len(needed) == 1
        assert "garlic" in next(iter(needed))

    def test_includes_suggested_sides(self):
        dishes = [{"ingredients": ["Salt"], "suggested_sides": ["Steamed Broccoli"]}]
        needed = compute_needed(dishes, {"seasonings": ["Salt"]})
        assert list(needed.values()) == ["Steamed Broccoli"]

    def test_keys_are_lowercase(self):
        needed = compute_needed([{"ingredients": ["Fresh Basil"]}], None)
        assert needed == {"basil": "Basil"}

    def test_accepts_models_and_index(self):
        index = build_index({"grains": ["Rice"]})
        dishes = [SavedDish(ingredients=["1 cup rice", "2 eggs"])]
        assert list(compute_needed(dishes, index).values()) == ["Eggs"]

    def test_fixture_rows(self, sample_saved_dishes, sample_library_row):
        """Mixed ingredient column shapes reconcile against a real library row."""
        needed = compute_needed(sample_saved_dishes, sample_library_row)
        assert list(needed.values()) == ["Rice", "Steamed Broccoli", "Large Eggs", "Spinach", "Milk"]

    def test_malformed_rows_are_skipped(self):
        dishes = [
            None,
            "not a row",
            {"id": "ok", "ingredients": [None, {"name": "Thyme"}, ["", "Sage"], 12]},
        ]
        needed = compute_needed(dishes, None)
        assert list(needed.values()) == ["Thyme", "Sage", "12"]

    @pytest.mark.parametrize(
        "extra",
        [
            {"title": 123},
            {"title": {"nested": True}},
            {"meal_type": ["Dinner"]},
            {"id": 1.5},
            {"id": {"uuid": "x"}},
        ],
    )
    def test_bad_metadata_keeps_ingredients(self, extra):
        """Should still reconcile a dish whose non-ingredient columns are malformed."""
        dish = {"ingredients": ["Saffron"], **extra}
        assert compute_needed([dish], None) == {"saffron": "Saffron"}
        assert needed_count([dish], {"produce": ["Kale"]}) == 1

    def test_odd_library_item_keeps_coverage(self):
        """One unsortable library item should not empty the whole library."""
        library = {"grains": ["Rice", "Bad\x00Item"], "produce": ["Kale"]}
        assert compute_needed([{"ingredients": ["Rice", "Kale"]}], library) == {}

    def test_no_dishes(self):
        assert compute_needed(None, {"produce": ["Kale"]}) == {}
        assert compute_needed([], None) == {}

    def test_needed_count(self):
        dishes = [{"ingredients": ["Salt", "Pepper", "salt"]}]
        assert needed_count(dishes, None) == 2


class TestGrouping:
    """Test shopping list grouping."""

    def test_group_order_and_sorting(self):
        grouped = group_needed(["Spinach", "Milk", "Saffron", "Garlic", "Rice"])
        assert list(grouped) == ["Dairy", "Grains & Pasta", "Produce", "Other"]
        assert grouped["Produce"] == ["Garlic", "Spinach"]

    def test_empty(self):
        assert group_needed([]) == {}

    def test_dedupes_within_group(self):
        assert group_needed(["Carrot", "Carrots"]) == {"Produce": ["Carrot"]}

    def test_shopping_list_result(self, sample_saved_dishes, sample_library_row):
        result = build_shopping_list(sample_saved_dishes, sample_library_row)

        assert isinstance(result, ShoppingList)
        assert result.count == 5
        assert not result.is_empty
        assert result.groups["Produce"] == ["Spinach", "Steamed Broccoli"]
        assert result.groups["Proteins"] == ["Large Eggs"]
        assert result.items()[0] == "Milk"

    def test_all_set(self):
        result = build_shopping_list([{"ingredients": ["Salt"]}], {"seasonings": ["Salt"]})
        assert result.is_empty
        assert result.count == 0
