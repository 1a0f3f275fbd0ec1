"""Schema.org microdata strategy.

Reads the first element whose ``itemtype`` is a schema.org Recipe and the
``itemprop`` values it owns. Properties that belong to nested items (an
author ``Person``, a ``NutritionInformation`` block) are not read as
recipe properties unless asked for explicitly.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from recipe_extractor.observability.logging import get_logger
from recipe_extractor.parsing.duration import parse_iso8601_duration, time_to_minutes
from recipe_extractor.services.extraction.models import RecipeDraft, StrategyResult
from recipe_extractor.services.extraction.strategies.base import (
    diet_label,
    node_text,
    parse_calories,
    parse_servings,
    resolve_image_urls,
    split_keywords,
)


if TYPE_CHECKING:
    from bs4 import BeautifulSoup
    from bs4.element import Tag


logger = get_logger(__name__)

RECIPE_ITEMTYPE = re.compile(r"schema\.org/Recipe(?![A-Za-z])", re.IGNORECASE)
STEP_ITEMTYPE = re.compile(r"schema\.org/(HowToStep|HowToDirection)", re.IGNORECASE)
LIST_ITEMTYPE = re.compile(r"schema\.org/(ItemList|HowToSection)", re.IGNORECASE)


def _itemprop(name: str) -> re.Pattern[str]:
    return re.compile(rf"(^|\s){name}(\s|$)")


def _owned_props(node: Tag, *names: str) -> list[Tag]:
    """Elements carrying any of ``names`` whose nearest item scope is ``node``."""
    found: list[Tag] = []
    for name in names:
        for element in node.find_all(attrs={"itemprop": _itemprop(name)}):
            owner = element.find_parent(attrs={"itemscope": True})
            if owner is node and element not in found:
                found.append(element)
    return found


def _first_prop(node: Tag, *names: str) -> Tag | None:
    props = _owned_props(node, *names)
    return props[0] if props else None


def _prop_value(element: Tag | None) -> str:
    if element is None:
        return ""
    for attr in ("content", "datetime", "value"):
        value = element.get(attr)
        if value:
            return str(value).strip()
    return node_text(element)


def _image_value(element: Tag | None) -> str | None:
    if element is None:
        return None
    for attr in ("src", "content", "href", "data-src"):
        value = element.get(attr)
        if value:
            return str(value)
    nested = element.find(attrs={"itemprop": _itemprop("url")})
    return _prop_value(nested) or None


def _minutes(element: Tag | None) -> float | None:
    value = _prop_value(element)
    if not value:
        return None
    minutes = parse_iso8601_duration(value)
    return minutes if minutes is not None else time_to_minutes(value)


def _instruction_texts(element: Tag) -> list[str]:
    itemtype = str(element.get("itemtype") or "")
    if STEP_ITEMTYPE.search(itemtype):
        steps = [element]
    else:
        steps = element.find_all(attrs={"itemtype": STEP_ITEMTYPE})

    if steps:
        texts = []
        for step in steps:
            text_node = step.find(attrs={"itemprop": _itemprop("text")})
            texts.append(_prop_value(text_node) if text_node else node_text(step))
        return texts

    if LIST_ITEMTYPE.search(itemtype):
        items = element.find_all(attrs={"itemprop": _itemprop("itemListElement")})
        if items:
            return [_prop_value(item) for item in items]

    items = element.find_all("li")
    if items:
        return [node_text(item) for item in items]

    return [node_text(element)]


def extract_schema_org(soup: BeautifulSoup, url: str) -> StrategyResult:
    """Extract a recipe from schema.org microdata.

    Args:
        soup: Parsed page.
        url: Page URL, used to resolve relative image paths.

    Returns:
        A match when a Recipe item with at least one ingredient and one
        instruction is present; a non-match otherwise.
    """
    node = soup.find(attrs={"itemtype": RECIPE_ITEMTYPE})
    if node is None:
        return StrategyResult.no_match("No schema.org Recipe microdata found")

    ingredients: list[str] = []
    for element in _owned_props(node, "recipeIngredient", "ingredients"):
        text = node_text(element)
        if text and text not in ingredients:
            ingredients.append(text)

    instructions = [
        text
        for element in _owned_props(node, "recipeInstructions")
        for text in _instruction_texts(element)
        if text
    ]

    images = _image_value(_first_prop(node, "image"))
    nutrition = _first_prop(node, "nutrition")
    calories_node = (
        nutrition.find(attrs={"itemprop": _itemprop("calories")}) if nutrition else None
    )

    draft = RecipeDraft(
        title=_prop_value(_first_prop(node, "name")) or None,
        description=_prop_value(_first_prop(node, "description")) or None,
        ingredients=ingredients,
        instructions=instructions,
        prep_time=_minutes(_first_prop(node, "prepTime")),
        cook_time=_minutes(_first_prop(node, "cookTime")),
        total_time=_minutes(_first_prop(node, "totalTime")),
        servings=parse_servings(_prop_value(_first_prop(node, "recipeYield"))),
        image_urls=resolve_image_urls(images, url),
        cuisine=_prop_value(_first_prop(node, "recipeCuisine")) or None,
        category=_prop_value(_first_prop(node, "recipeCategory")) or None,
        keywords=split_keywords(_prop_value(_first_prop(node, "keywords"))),
        difficulty=_prop_value(_first_prop(node, "difficulty")) or None,
        calories=parse_calories(_prop_value(calories_node)) if calories_node else None,
        dietary_restrictions=[
            label
            for label in (
                diet_label(_prop_value(e))
                for e in _owned_props(node, "suitableForDiet")
            )
            if label
        ],
    )
    raw = {
        "itemtype": node.get("itemtype"),
        "fields": draft.model_dump(exclude_none=True),
    }

    if not draft.has_content:
        logger.debug(
            "Microdata Recipe lacks ingredients or instructions",
            url=url,
            ingredients=len(ingredients),
            instructions=len(instructions),
        )
        return StrategyResult.no_match(
            "Recipe microdata has no ingredients or no instructions", raw=raw
        )

    return StrategyResult(is_recipe=True, draft=draft, confidence=0.9, raw=raw)
