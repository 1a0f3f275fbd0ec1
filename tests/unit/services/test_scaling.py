"""Unit tests for the serving scaler."""

from __future__ import annotations

from fractions import Fraction

import pytest

from recipe_extractor.schemas.recipe import Recipe
from recipe_extractor.services.scaling import (
    format_amount,
    scale_ingredient,
    scale_recipe,
)


pytestmark = pytest.mark.unit


class TestFormatAmount:
    """Tests for format_amount."""

    @pytest.mark.parametrize(
        ("amount", "expected"),
        [
            (Fraction(2), "2"),
            (Fraction(3, 2), "1.5"),
            (Fraction(1, 3), "0.33"),
            (0.25, "0.25"),
        ],
    )
    def test_formats(self, amount: Fraction | float, expected: str) -> None:
        assert format_amount(amount) == expected


class TestScaleIngredient:
    """Tests for scale_ingredient."""

    @pytest.mark.parametrize(
        ("ingredient", "factor", "expected"),
        [
            ("1 cup flour", Fraction(2), "2 cup flour"),
            ("200g flour", Fraction(1, 2), "100g flour"),
            ("1/2 tsp salt", Fraction(2), "1 tsp salt"),
            ("1 1/2 cups milk", Fraction(2), "3 cups milk"),
            ("2 teaspoons vanilla", Fraction(1), "2 teaspoons vanilla"),
            ("3 eggs", Fraction(1, 3), "1 eggs"),
        ],
    )
    def test_scales_first_quantity(
        self, ingredient: str, factor: Fraction, expected: str
    ) -> None:
        assert scale_ingredient(ingredient, factor) == expected

    @pytest.mark.parametrize(
        ("ingredient", "factor", "expected"),
        [
            ("2 tsp salt", Fraction(3), "2 tbsp salt"),
            ("8 tbsp butter", Fraction(2), "1 cup butter"),
            ("3 cups stock", Fraction(2), "1.5 quart stock"),
            ("2 tablespoons oil", Fraction(8), "1 cup oil"),
        ],
    )
    def test_promotes_large_measures(
        self, ingredient: str, factor: Fraction, expected: str
    ) -> None:
        assert scale_ingredient(ingredient, factor) == expected

    def test_line_without_number_is_unchanged(self) -> None:
        assert scale_ingredient("Salt to taste", Fraction(3)) == "Salt to taste"


class TestScaleRecipe:
    """Tests for scale_recipe."""

    @pytest.fixture
    def recipe(self) -> Recipe:
        return Recipe(
            id="r1",
            title="Pancakes",
            ingredients=["1 cup flour", "2 eggs", "Pinch of salt"],
            instructions=["Mix.", "Fry."],
            prep_time="10 min",
            cook_time="N/A",
            servings=4,
        )

    def test_scales_ingredients_and_servings(self, recipe: Recipe) -> None:
        scaled = scale_recipe(recipe, 8)

        assert scaled.servings == 8
        assert scaled.ingredients == ["2 cup flour", "4 eggs", "Pinch of salt"]
        assert scaled.instructions == recipe.instructions
        assert scaled.id == "r1"

    def test_scales_readable_times(self, recipe: Recipe) -> None:
        scaled = scale_recipe(recipe, 2)

        assert scaled.prep_time == 5
        assert scaled.cook_time == "N/A"

    def test_original_is_not_modified(self, recipe: Recipe) -> None:
        scale_recipe(recipe, 12)

        assert recipe.servings == 4
        assert recipe.ingredients[0] == "1 cup flour"

    @pytest.mark.parametrize("servings", [0, -2])
    def test_rejects_non_positive_target(self, recipe: Recipe, servings: int) -> None:
        with pytest.raises(ValueError, match="must be positive"):
            scale_recipe(recipe, servings)
