"""JSON-LD strategy.

Reads schema.org/Recipe structured data from
``<script type="application/ld+json">`` blocks. Malformed blocks are
skipped; the first Recipe found, directly, in a top-level array or inside
``@graph``, wins.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

import orjson

from recipe_extractor.observability.logging import get_logger
from recipe_extractor.parsing.duration import parse_iso8601_duration, time_to_minutes
from recipe_extractor.parsing.text import collapse_whitespace
from recipe_extractor.parsing.values import extract_first_value
from recipe_extractor.services.extraction.models import RecipeDraft, StrategyResult
from recipe_extractor.services.extraction.strategies.base import (
    diet_label,
    parse_calories,
    parse_servings,
    resolve_image_urls,
    split_keywords,
)


if TYPE_CHECKING:
    from bs4 import BeautifulSoup


logger = get_logger(__name__)

_LINE_BREAKS = re.compile(r"\r?\n|<br\s*/?>", re.IGNORECASE)
_TAGS = re.compile(r"<[^>]+>")
JSONLD_TYPE = re.compile(r"application/ld\+json", re.IGNORECASE)


def _is_recipe_type(schema_type: Any) -> bool:
    types = schema_type if isinstance(schema_type, list) else [schema_type]
    return any(
        isinstance(t, str) and (t == "Recipe" or t.endswith("/Recipe")) for t in types
    )


def find_recipe_in_jsonld(data: Any) -> dict[str, Any] | None:
    """Find the first Recipe object in parsed JSON-LD.

    Handles a direct Recipe object, an ``@graph`` array and a top-level
    array of objects.
    """
    if isinstance(data, dict):
        if _is_recipe_type(data.get("@type")):
            return data
        graph = data.get("@graph")
        if isinstance(graph, list):
            return find_recipe_in_jsonld(graph)

    elif isinstance(data, list):
        for item in data:
            result = find_recipe_in_jsonld(item)
            if result:
                return result

    return None


def _string(data: dict[str, Any], key: str) -> str | None:
    value = extract_first_value(data.get(key))
    return value.strip() if value and value.strip() else None


def _strip_markup(text: str) -> str:
    return collapse_whitespace(_TAGS.sub(" ", text))


def _minutes(value: Any) -> float | None:
    if not isinstance(value, str):
        return time_to_minutes(value)
    minutes = parse_iso8601_duration(value)
    return minutes if minutes is not None else time_to_minutes(value)


def _ingredients(data: dict[str, Any]) -> list[str]:
    ingredients = data.get("recipeIngredient") or data.get("ingredients") or []
    if not isinstance(ingredients, list):
        ingredients = [ingredients]
    return [str(i).strip() for i in ingredients if i and str(i).strip()]


def _step_text(item: Any) -> list[str]:
    if isinstance(item, str):
        return [item] if item.strip() else []
    if not isinstance(item, dict):
        return []

    schema_type = item.get("@type")
    if schema_type in ("HowToSection", "ItemList") or (
        isinstance(item.get("itemListElement"), list) and not item.get("text")
    ):
        children = item.get("itemListElement", [])
        return [text for child in children for text in _step_text(child)]

    for key in ("text", "name", "description"):
        value = item.get(key)
        if isinstance(value, str) and value.strip():
            return [value]
    return []


def _instructions(data: dict[str, Any]) -> list[str]:
    """Extract instructions from any of the supported shapes.

    A single string is split on newlines and ``<br>`` so each non-empty line
    is one step. Lists may hold strings, ``HowToStep`` objects (their
    ``text``) or ``HowToSection`` objects, which are flattened.
    """
    instructions = data.get("recipeInstructions")
    if not instructions:
        return []

    if isinstance(instructions, str):
        lines = _LINE_BREAKS.split(instructions)
    else:
        items = instructions if isinstance(instructions, list) else [instructions]
        lines = [text for item in items for text in _step_text(item)]

    steps = (_strip_markup(line) for line in lines)
    return [step for step in steps if step]


def _keywords(data: dict[str, Any]) -> list[str]:
    return split_keywords(data.get("keywords"))


def _diets(data: dict[str, Any]) -> list[str]:
    diets = data.get("suitableForDiet") or []
    if not isinstance(diets, list):
        diets = [diets]
    labels = (diet_label(d) for d in diets)
    return [label for label in labels if label]


def _calories(data: dict[str, Any]) -> int | None:
    nutrition = data.get("nutrition")
    if isinstance(nutrition, dict):
        return parse_calories(nutrition.get("calories"))
    return None


def _difficulty(data: dict[str, Any]) -> str | None:
    return _string(data, "difficulty") or _string(data, "educationalLevel")


def parse_jsonld_recipe(data: dict[str, Any], source_url: str) -> RecipeDraft:
    """Map a JSON-LD Recipe object onto a draft."""
    return RecipeDraft(
        title=_string(data, "name"),
        description=_string(data, "description"),
        ingredients=_ingredients(data),
        instructions=_instructions(data),
        prep_time=_minutes(data.get("prepTime")),
        cook_time=_minutes(data.get("cookTime")),
        total_time=_minutes(data.get("totalTime")),
        servings=parse_servings(data.get("recipeYield")),
        image_urls=resolve_image_urls(data.get("image"), source_url),
        cuisine=_string(data, "recipeCuisine"),
        category=_string(data, "recipeCategory"),
        keywords=_keywords(data),
        difficulty=_difficulty(data),
        calories=_calories(data),
        dietary_restrictions=_diets(data),
    )


def extract_jsonld(soup: BeautifulSoup, url: str) -> StrategyResult:
    """Extract a recipe from JSON-LD structured data.

    Args:
        soup: Parsed page.
        url: Page URL, used to resolve relative image paths.

    Returns:
        A match with confidence 0.85 when a Recipe with at least one
        ingredient and one instruction is found.
    """
    blocks = soup.find_all("script", attrs={"type": JSONLD_TYPE})
    if not blocks:
        return StrategyResult.no_match("No JSON-LD blocks found")

    for index, block in enumerate(blocks):
        payload = block.string or block.get_text()
        if not payload or not payload.strip():
            continue
        try:
            data = orjson.loads(payload.strip())
        except orjson.JSONDecodeError as e:
            logger.debug(
                "Skipping malformed JSON-LD block",
                url=url,
                block=index,
                error=str(e),
            )
            continue

        recipe_data = find_recipe_in_jsonld(data)
        if recipe_data is None:
            continue

        draft = parse_jsonld_recipe(recipe_data, url)
        if not draft.has_content:
            return StrategyResult.no_match(
                "JSON-LD Recipe has no ingredients or no instructions",
                raw=recipe_data,
            )
        return StrategyResult(
            is_recipe=True, draft=draft, confidence=0.85, raw=recipe_data
        )

    return StrategyResult.no_match("No JSON-LD Recipe object found")
