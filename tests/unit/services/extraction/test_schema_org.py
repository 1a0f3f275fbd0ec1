"""Unit tests for the schema.org microdata strategy."""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from recipe_extractor.services.extraction.strategies.schema_org import (
    extract_schema_org,
)
from tests.fixtures.pages import (
    BARE_PAGE,
    JSONLD_PAGE,
    SCHEMA_ORG_PAGE,
    SCHEMA_ORG_WITHOUT_STEPS_PAGE,
)


pytestmark = pytest.mark.unit

URL = "https://bake.example/lemon-cake"


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


class TestExtractSchemaOrg:
    """Tests for extract_schema_org."""

    def test_extracts_recipe_with_fixed_confidence(self) -> None:
        result = extract_schema_org(_soup(SCHEMA_ORG_PAGE), URL)

        assert result.is_recipe
        assert result.confidence == 0.9
        assert result.draft is not None
        assert result.draft.title == "Lemon Cake"
        assert result.draft.ingredients == ["200g flour", "2 lemons", "3 eggs"]
        assert result.draft.instructions == [
            "Whisk the eggs and sugar",
            "Fold in the flour",
            "Bake for 40 minutes",
        ]

    def test_reads_scalar_properties(self) -> None:
        result = extract_schema_org(_soup(SCHEMA_ORG_PAGE), URL)
        draft = result.draft

        assert draft is not None
        assert draft.description == "A bright & zesty cake."
        assert draft.prep_time == 20
        assert draft.cook_time == 40
        assert draft.servings == 8
        assert draft.cuisine == "British"
        assert draft.category == "dessert"
        assert draft.calories == 320

    def test_resolves_relative_image_against_page_host(self) -> None:
        result = extract_schema_org(_soup(SCHEMA_ORG_PAGE), URL)

        assert result.draft is not None
        assert result.draft.image_urls == ["https://bake.example/images/lemon-cake.jpg"]

    def test_ignores_properties_of_nested_items(self) -> None:
        """The author's name must not be read as the recipe title."""
        result = extract_schema_org(_soup(SCHEMA_ORG_PAGE), URL)

        assert result.draft is not None
        assert result.draft.title != "Jane Baker"

    def test_how_to_steps(self) -> None:
        html = """
        <div itemscope itemtype="https://schema.org/Recipe">
          <span itemprop="name">Toast</span>
          <span itemprop="recipeIngredient">1 slice bread</span>
          <div itemprop="recipeInstructions" itemscope
               itemtype="https://schema.org/HowToStep">
            <span itemprop="text">Toast the bread</span>
          </div>
          <div itemprop="recipeInstructions" itemscope
               itemtype="https://schema.org/HowToStep">
            <span itemprop="text">Butter it</span>
          </div>
        </div>
        """
        result = extract_schema_org(_soup(html), URL)

        assert result.is_recipe
        assert result.draft is not None
        assert result.draft.instructions == ["Toast the bread", "Butter it"]

    def test_recipe_without_instructions_is_not_a_match(self) -> None:
        result = extract_schema_org(_soup(SCHEMA_ORG_WITHOUT_STEPS_PAGE), URL)

        assert not result.is_recipe
        assert result.reason
        assert result.raw is not None
        assert result.raw["fields"]["ingredients"] == ["1 cup rice"]

    @pytest.mark.parametrize("html", [BARE_PAGE, JSONLD_PAGE])
    def test_pages_without_microdata(self, html: str) -> None:
        result = extract_schema_org(_soup(html), URL)

        assert not result.is_recipe
        assert result.draft is None
