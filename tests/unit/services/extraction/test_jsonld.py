"""Unit tests for the JSON-LD strategy."""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from recipe_extractor.services.extraction.strategies.jsonld import (
    extract_jsonld,
    find_recipe_in_jsonld,
    parse_jsonld_recipe,
)
from tests.fixtures.pages import BARE_PAGE, JSONLD_PAGE, PASTA_JSONLD_PAGE


pytestmark = pytest.mark.unit

URL = "https://soup.example/tomato"


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


class TestFindRecipeInJsonld:
    """Tests for find_recipe_in_jsonld."""

    def test_direct_object(self) -> None:
        data = {"@type": "Recipe", "name": "A"}
        assert find_recipe_in_jsonld(data) is data

    def test_graph(self) -> None:
        data = {"@graph": [{"@type": "Person"}, {"@type": "Recipe", "name": "B"}]}
        assert find_recipe_in_jsonld(data) == {"@type": "Recipe", "name": "B"}

    def test_top_level_array(self) -> None:
        data = [{"@type": "Organization"}, {"@type": "http://schema.org/Recipe"}]
        assert find_recipe_in_jsonld(data) == {"@type": "http://schema.org/Recipe"}

    def test_no_recipe(self) -> None:
        assert find_recipe_in_jsonld({"@type": "Article"}) is None
        assert find_recipe_in_jsonld("Recipe") is None


class TestParseJsonldRecipe:
    """Tests for parse_jsonld_recipe."""

    def test_string_instructions_split_per_line(self) -> None:
        """Each non-empty line of a plain-string instruction is one step."""
        data = {
            "@type": "Recipe",
            "recipeInstructions": (
                "Heat the pan\nAdd oil\n\n  \nFry the onions\r\nServe<br>Enjoy"
            ),
        }
        draft = parse_jsonld_recipe(data, URL)

        assert draft.instructions == [
            "Heat the pan",
            "Add oil",
            "Fry the onions",
            "Serve",
            "Enjoy",
        ]

    def test_markup_is_removed_from_steps(self) -> None:
        data = {"recipeInstructions": ["<p>Mix <b>well</b></p>", "<li>Serve</li>"]}
        draft = parse_jsonld_recipe(data, URL)

        assert draft.instructions == ["Mix well", "Serve"]

    def test_single_ingredient_string(self) -> None:
        draft = parse_jsonld_recipe({"recipeIngredient": "1 cup rice"}, URL)

        assert draft.ingredients == ["1 cup rice"]

    def test_author_difficulty(self) -> None:
        draft = parse_jsonld_recipe({"educationalLevel": "Beginner"}, URL)

        assert draft.difficulty == "Beginner"


class TestExtractJsonld:
    """Tests for extract_jsonld."""

    def test_extracts_graph_recipe_after_malformed_block(self) -> None:
        result = extract_jsonld(_soup(JSONLD_PAGE), URL)

        assert result.is_recipe
        assert result.confidence == 0.85
        assert result.draft is not None
        assert result.draft.title == "Tomato Soup"
        assert result.draft.ingredients == [
            "6 ripe tomatoes",
            "1 onion",
            "2 cups stock",
        ]
        assert result.draft.instructions == [
            "Chop the tomatoes and onion",
            "Simmer for 20 minutes",
            "Blend until smooth",
        ]

    def test_reads_metadata(self) -> None:
        result = extract_jsonld(_soup(JSONLD_PAGE), URL)
        draft = result.draft

        assert draft is not None
        assert draft.prep_time == 10
        assert draft.cook_time == 25
        assert draft.servings == 4
        assert draft.cuisine == "Italian"
        assert draft.category == "Soup"
        assert draft.keywords == ["soup", "tomato", "easy"]
        assert draft.calories == 180
        assert draft.dietary_restrictions == ["Vegetarian"]
        assert draft.image_urls == [
            "https://cdn.example.com/big.jpg",
            "https://cdn.example.com/small.jpg",
        ]

    def test_minimal_recipe(self) -> None:
        result = extract_jsonld(_soup(PASTA_JSONLD_PAGE), "https://example.com/recipe")

        assert result.is_recipe
        assert result.draft is not None
        assert result.draft.title == "Pasta"
        assert result.draft.ingredients == ["100g pasta"]
        assert result.draft.instructions == ["Boil it."]

    def test_recipe_without_ingredients_is_not_a_match(self) -> None:
        html = """
        <script type="application/ld+json">
        {"@type": "Recipe", "name": "Air", "recipeInstructions": "Breathe"}
        </script>
        """
        result = extract_jsonld(_soup(html), URL)

        assert not result.is_recipe
        assert result.raw == {
            "@type": "Recipe",
            "name": "Air",
            "recipeInstructions": "Breathe",
        }

    def test_page_without_jsonld(self) -> None:
        result = extract_jsonld(_soup(BARE_PAGE), URL)

        assert not result.is_recipe
        assert result.reason == "No JSON-LD blocks found"
