"""
Tests for dietary preferences and library recommendations.
"""

import asyncio
from unittest.mock import AsyncMock, patch

from larder.library.dietary import (
    DIETARY_LIBRARY_RECOMMENDATIONS,
    DietaryKey,
    apply_dietary_recommendations,
    ensure_library_coverage,
    sync_dietary_library,
    is_ingredient_allowed,
    sanitize_dietary_prefs,
)
from larder.models.library import LibraryCategory, LibraryRow


def _run(coro):
    """Run an async coroutine synchronously (no pytest-asyncio needed)."""
    return asyncio.run(coro)


class TestSanitize:
    def test_keeps_truthy_known_keys(self):
        prefs = sanitize_dietary_prefs({"vegan": True, "keto": False, "carnivore": True}, enabled=True)
        assert prefs == {DietaryKey.VEGAN}

    def test_non_mapping(self):
        assert sanitize_dietary_prefs(["vegan"], enabled=True) == set()
        assert sanitize_dietary_prefs(None, enabled=True) == set()

    def test_feature_flag_off(self):
        """Should keep nothing while the feature is disabled."""
        assert sanitize_dietary_prefs({"vegan": True}, enabled=False) == set()
        assert sanitize_dietary_prefs({"vegan": True}) == set()


class TestIsIngredientAllowed:
    """Test keyword rules per diet."""

    def test_feature_flag_off_allows_everything(self):
        assert is_ingredient_allowed("Bacon", {DietaryKey.VEGAN}, enabled=False)
        assert is_ingredient_allowed("Bacon", {DietaryKey.VEGAN})

    def test_blank_ingredient(self):
        assert is_ingredient_allowed("", {DietaryKey.VEGAN}, enabled=True)

    def test_vegan(self):
        vegan = {DietaryKey.VEGAN}
        assert not is_ingredient_allowed("Whole Milk", vegan, enabled=True)
        assert not is_ingredient_allowed("Honey", vegan, enabled=True)
        assert not is_ingredient_allowed("Eggs", vegan, enabled=True)
        assert is_ingredient_allowed("Tofu", vegan, enabled=True)

    def test_vegetarian_excludes_seafood_unless_pescatarian(self):
        assert not is_ingredient_allowed("Salmon", {DietaryKey.VEGETARIAN}, enabled=True)
        assert is_ingredient_allowed(
            "Salmon", {DietaryKey.VEGETARIAN, DietaryKey.PESCATARIAN}, enabled=True
        )
        assert not is_ingredient_allowed("Chicken", {DietaryKey.VEGETARIAN}, enabled=True)
        assert is_ingredient_allowed("Cheddar Cheese", {DietaryKey.VEGETARIAN}, enabled=True)

    def test_pescatarian(self):
        assert not is_ingredient_allowed("Pork Belly", {DietaryKey.PESCATARIAN}, enabled=True)
        assert is_ingredient_allowed("Shrimp", {DietaryKey.PESCATARIAN}, enabled=True)

    def test_gluten_free(self):
        assert not is_ingredient_allowed("Sourdough Bread", {DietaryKey.GLUTEN_FREE}, enabled=True)
        assert not is_ingredient_allowed("Pearl Barley", {DietaryKey.GLUTEN_FREE}, enabled=True)
        assert is_ingredient_allowed("Quinoa", {DietaryKey.GLUTEN_FREE}, enabled=True)

    def test_dairy_free(self):
        assert not is_ingredient_allowed("Butter", {DietaryKey.DAIRY_FREE}, enabled=True)

    def test_keto(self):
        keto = {DietaryKey.KETO}
        assert not is_ingredient_allowed("Sweet Potato", keto, enabled=True)
        assert not is_ingredient_allowed("Maple Syrup", keto, enabled=True)
        assert not is_ingredient_allowed("Black Beans", keto, enabled=True)
        assert is_ingredient_allowed("Avocado", keto, enabled=True)

    def test_paleo(self):
        paleo = {DietaryKey.PALEO}
        assert not is_ingredient_allowed("Canola Oil", paleo, enabled=True)
        assert not is_ingredient_allowed("Lentils", paleo, enabled=True)
        assert is_ingredient_allowed("Turkey", paleo, enabled=True)

    def test_no_prefs(self):
        assert is_ingredient_allowed("Bacon", set(), enabled=True)


class TestRecommendations:
    """Test merging diet recommendations into a library."""

    def test_no_active_diets(self):
        library = LibraryRow(produce=["Kale"])
        assert apply_dietary_recommendations(library, set()) is library

    def test_merges_and_dedupes(self):
        library = LibraryRow(proteins=["tofu"], dairy=["Oat Milk"])
        updated = apply_dietary_recommendations(library, {DietaryKey.VEGAN})

        assert updated.proteins == ["Chickpeas", "Lentils", "Seitan", "Tempeh", "Tofu"]
        assert updated.dairy.count("Oat Milk") == 1
        assert "Tahini" in updated.sauces_condiments
        assert "Canned Chickpeas" in updated.non_perishables

    def test_multiple_diets(self):
        updated = apply_dietary_recommendations(LibraryRow(), iter([DietaryKey.KETO, DietaryKey.PALEO]))
        assert "Cauliflower" in updated.produce
        assert "Sweet Potatoes" in updated.produce
        assert updated.proteins.count("Salmon") == 1

    def test_every_diet_has_recommendations(self):
        assert set(DIETARY_LIBRARY_RECOMMENDATIONS) == set(DietaryKey)


class TestEnsureLibraryCoverage:
    """Test persisting recommendations to Supabase."""

    def test_upserts_merged_library(self):
        with patch("larder.db.client.get_library", new_callable=AsyncMock) as mock_get, \
             patch("larder.db.client.upsert_library", new_callable=AsyncMock) as mock_upsert:
            mock_get.return_value = {"user_id": "user-1", "vegetables": ["Kale"]}

            result = _run(ensure_library_coverage("user-1", {DietaryKey.GLUTEN_FREE}))

        assert result.produce == ["Kale"]
        assert "Quinoa" in result.grains
        user_id, payload = mock_upsert.call_args.args
        assert user_id == "user-1"
        assert payload["breads"] == ["Cassava Tortillas", "Gluten-free Bread"]
        assert "vegetables" not in payload

    def test_no_diets_skips_io(self):
        with patch("larder.db.client.get_library", new_callable=AsyncMock) as mock_get:
            assert _run(ensure_library_coverage("user-1", set())) is None
        mock_get.assert_not_called()

    def test_failure_is_logged_not_raised(self):
        with patch("larder.db.client.get_library", new_callable=AsyncMock) as mock_get:
            mock_get.side_effect = RuntimeError("network down")
            assert _run(ensure_library_coverage("user-1", {DietaryKey.VEGAN})) is None

    def test_library_category_keys(self):
        for recommendations in DIETARY_LIBRARY_RECOMMENDATIONS.values():
            assert all(isinstance(category, LibraryCategory) for category in recommendations)


class TestSyncDietaryLibrary:
    """Test loading stored diets and topping up the library."""

    def test_loads_sanitizes_and_upserts(self):
        with patch("larder.db.client.get_dietary_prefs", new_callable=AsyncMock) as mock_prefs, \
             patch("larder.db.client.get_library", new_callable=AsyncMock) as mock_get, \
             patch("larder.db.client.upsert_library", new_callable=AsyncMock) as mock_upsert:
            mock_prefs.return_value = {"gluten_free": True, "keto": False, "junk": True}
            mock_get.return_value = None

            prefs, updated = _run(sync_dietary_library("user-1", enabled=True))

        assert prefs == {DietaryKey.GLUTEN_FREE}
        assert updated.grains == ["Brown Rice", "Buckwheat", "Quinoa"]
        mock_upsert.assert_awaited_once()

    def test_feature_off_skips_library(self):
        with patch("larder.db.client.get_dietary_prefs", new_callable=AsyncMock) as mock_prefs, \
             patch("larder.db.client.get_library", new_callable=AsyncMock) as mock_get:
            mock_prefs.return_value = {"vegan": True}

            prefs, updated = _run(sync_dietary_library("user-1", enabled=False))

        assert prefs == set()
        assert updated is None
        mock_get.assert_not_called()
