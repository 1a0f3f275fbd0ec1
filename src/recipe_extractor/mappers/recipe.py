"""Recipe data mappers.

Transforms recipe data between its three representations: a strategy's
``RecipeDraft``, the canonical ``Recipe`` and a row of the ``recipes``
table.
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING, Any, Final

import orjson

from recipe_extractor.core.config import get_settings
from recipe_extractor.observability.logging import get_logger
from recipe_extractor.parsing.difficulty import determine_difficulty
from recipe_extractor.parsing.duration import parse_time_value, time_to_minutes
from recipe_extractor.parsing.text import (
    clean_lines,
    collapse_whitespace,
    decode_html_entities,
    format_recipe_title,
    normalize_ingredient,
    normalize_instruction,
    unique,
)
from recipe_extractor.parsing.values import (
    decode_string_list,
    extract_first_image_url,
    extract_first_value,
)
from recipe_extractor.schemas.recipe import DEFAULT_SERVINGS, DEFAULT_TITLE, Recipe


if TYPE_CHECKING:
    from collections.abc import Mapping

    from recipe_extractor.services.extraction.models import RecipeDraft


logger = get_logger(__name__)

DRAFT_CATEGORY: Final = "Other"
ROW_CATEGORY: Final = "Uncategorized"
DEFAULT_CUISINE: Final = "Other"
MISSING_TIME: Final = "N/A"

# Columns written by build_recipe_row; lists are stored as JSON text.
RECIPE_COLUMNS: Final = (
    "id",
    "user_id",
    "title",
    "description",
    "ingredients",
    "instructions",
    "prep_time",
    "cook_time",
    "servings",
    "difficulty",
    "cuisine",
    "category",
    "dietary_restrictions",
    "tags",
    "calories",
    "image_url",
    "image_urls",
    "source_url",
    "confidence",
    "method",
)


def _capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]


def _placeholder_image() -> str:
    return get_settings().extraction.placeholder_image_url


def _minutes_text(minutes: float | None) -> str:
    return parse_time_value(minutes, default=MISSING_TIME)


def build_recipe_from_draft(
    draft: RecipeDraft,
    *,
    method: str,
    confidence: float,
    source_url: str,
) -> Recipe:
    """Promote a strategy draft to a canonical recipe.

    Ingredient and instruction lines are cleaned, the title tidied, missing
    fields defaulted (category ``"Other"``, four servings, no calories) and
    the difficulty derived unless the author supplied one.

    Args:
        draft: Strategy output.
        method: Name of the strategy that produced the draft.
        confidence: Confidence reported for the strategy.
        source_url: Page the draft came from.

    Returns:
        Canonical recipe, not yet persisted.
    """
    ingredients = clean_lines(draft.ingredients, normalize_ingredient)
    instructions = clean_lines(draft.instructions, normalize_instruction)
    category = extract_first_value(draft.category)

    return Recipe(
        title=format_recipe_title(draft.title) or DEFAULT_TITLE,
        description=collapse_whitespace(decode_html_entities(draft.description)),
        ingredients=ingredients,
        instructions=instructions,
        prep_time=_minutes_text(draft.prep_time),
        cook_time=_minutes_text(draft.cook_time),
        servings=draft.servings or DEFAULT_SERVINGS,
        difficulty=determine_difficulty(
            draft.total_minutes,
            len(ingredients),
            len(instructions),
            draft.difficulty,
        ),
        cuisine=extract_first_value(draft.cuisine) or DEFAULT_CUISINE,
        category=_capitalize(category) if category else DRAFT_CATEGORY,
        dietary_restrictions=unique(draft.dietary_restrictions),
        tags=unique(draft.keywords),
        calories=draft.calories or 0,
        image_url=draft.image_urls[0] if draft.image_urls else _placeholder_image(),
        image_urls=list(draft.image_urls),
        source_url=source_url,
        confidence=confidence,
        method=method,
    )


def _json_list(values: list[str]) -> str:
    return orjson.dumps(values).decode()


def build_recipe_row(recipe: Recipe, user_id: str) -> dict[str, Any]:
    """Build the insert payload for the ``recipes`` table.

    A new UUID is assigned when the recipe has no id yet.
    """
    return {
        "id": recipe.id or str(uuid.uuid4()),
        "user_id": user_id,
        "title": recipe.title,
        "description": recipe.description,
        "ingredients": _json_list(recipe.ingredients),
        "instructions": _json_list(recipe.instructions),
        "prep_time": str(recipe.prep_time),
        "cook_time": str(recipe.cook_time),
        "servings": recipe.servings,
        "difficulty": recipe.difficulty,
        "cuisine": recipe.cuisine,
        "category": recipe.category,
        "dietary_restrictions": _json_list(recipe.dietary_restrictions),
        "tags": _json_list(recipe.tags),
        "calories": recipe.calories,
        "image_url": recipe.image_url,
        "image_urls": _json_list(recipe.image_urls),
        "source_url": recipe.source_url,
        "confidence": recipe.confidence,
        "method": recipe.method,
    }


def _decoded_list(row: Mapping[str, Any], column: str) -> list[str]:
    result = decode_string_list(row.get(column))
    if not result.ok:
        logger.warning(
            "Failed to decode stored list, using empty list",
            recipe_id=str(row.get("id")),
            column=column,
            error=result.error,
        )
    return result.values


def _int_or(value: Any, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def map_row_to_recipe(row: Mapping[str, Any]) -> Recipe:
    """Map a stored row (or any loosely shaped recipe dict) to a Recipe.

    List columns may hold a native list, JSON text or an object; anything
    undecodable becomes an empty list and is logged. Stored text is
    returned as stored, so a row written by ``build_recipe_row`` reads back
    unchanged.
    """
    row = dict(row)
    settings = get_settings()

    ingredients = _decoded_list(row, "ingredients")
    instructions = _decoded_list(row, "instructions")

    image_url = extract_first_image_url(
        row.get("image_url") or row.get("image"),
        base_url=settings.extraction.image_base_url,
    )
    image_urls = _decoded_list(row, "image_urls") or ([image_url] if image_url else [])

    category = extract_first_value(row.get("category")) or extract_first_value(
        row.get("cuisine")
    )

    prep_raw = row.get("prep_time", row.get("prepTime"))
    cook_raw = row.get("cook_time", row.get("cookTime"))
    prep_minutes = time_to_minutes(prep_raw)
    cook_minutes = time_to_minutes(cook_raw)
    total_minutes = (prep_minutes or 0) + (cook_minutes or 0)

    confidence = row.get("confidence")

    return Recipe(
        id=str(row["id"]) if row.get("id") is not None else None,
        user_id=str(row["user_id"]) if row.get("user_id") is not None else None,
        title=(row.get("title") or "").strip() or DEFAULT_TITLE,
        description=row.get("description") or "",
        ingredients=ingredients,
        instructions=instructions,
        prep_time=parse_time_value(prep_raw, default=MISSING_TIME),
        cook_time=parse_time_value(cook_raw, default=MISSING_TIME),
        servings=_int_or(row.get("servings"), DEFAULT_SERVINGS),
        difficulty=determine_difficulty(
            total_minutes or None,
            len(ingredients),
            len(instructions),
            row.get("difficulty") or row.get("difficulty_level"),
        ),
        cuisine=extract_first_value(row.get("cuisine")) or DEFAULT_CUISINE,
        category=_capitalize(category) if category else ROW_CATEGORY,
        dietary_restrictions=unique(_decoded_list(row, "dietary_restrictions")),
        tags=_decoded_list(row, "tags"),
        calories=_int_or(row.get("calories"), 0),
        image_url=image_url or _placeholder_image(),
        image_urls=image_urls,
        source_url=row.get("source_url"),
        confidence=float(confidence) if confidence is not None else None,
        method=row.get("method"),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )
