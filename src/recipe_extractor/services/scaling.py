"""Serving scaler.

Produces a derived copy of a recipe for a different number of servings.
The copy is never persisted.
"""

from __future__ import annotations

import re
from fractions import Fraction
from typing import TYPE_CHECKING, Final

from recipe_extractor.parsing.duration import time_to_minutes


if TYPE_CHECKING:
    from recipe_extractor.schemas.recipe import Recipe


_QUANTITY = re.compile(
    r"(?P<amount>\d+\s+\d+/\d+|\d+/\d+|\d+(?:\.\d+)?)\s*(?P<unit>[a-zA-Z]+)?"
)

UNIT_ALIASES: Final = {
    "tablespoon": "tbsp",
    "tablespoons": "tbsp",
    "tbsps": "tbsp",
    "teaspoon": "tsp",
    "teaspoons": "tsp",
    "tsps": "tsp",
    "cups": "cup",
    "quarts": "quart",
}

# unit -> (threshold, larger unit, units per larger unit)
UNIT_PROMOTIONS: Final = {
    "tsp": (3, "tbsp", 3),
    "tbsp": (16, "cup", 16),
    "cup": (4, "quart", 4),
}


def _parse_amount(text: str) -> Fraction:
    parts = text.split()
    return sum((Fraction(part) for part in parts), Fraction(0))


def format_amount(amount: Fraction | float) -> str:
    """Render an amount with at most two decimals and no trailing zeros."""
    return f"{float(amount):.2f}".rstrip("0").rstrip(".")


def _promote(amount: Fraction, unit: str) -> tuple[Fraction, str]:
    while unit in UNIT_PROMOTIONS:
        threshold, larger, ratio = UNIT_PROMOTIONS[unit]
        if amount < threshold:
            break
        amount, unit = amount / ratio, larger
    return amount, unit


def scale_ingredient(ingredient: str, factor: Fraction) -> str:
    """Scale the first quantity in an ingredient line.

    Measured units are promoted when they grow large (3 tsp to 1 tbsp,
    16 tbsp to 1 cup, 4 cups to 1 quart). Lines without a number are
    returned unchanged.
    """
    match = _QUANTITY.search(ingredient)
    if match is None:
        return ingredient

    amount = _parse_amount(match.group("amount")) * factor
    unit = match.group("unit")
    canonical = UNIT_ALIASES.get(unit.lower(), unit.lower()) if unit else None
    if canonical in UNIT_PROMOTIONS:
        promoted, larger = _promote(amount, canonical)
        if larger != canonical:
            replacement = f"{format_amount(promoted)} {larger}"
            return ingredient[: match.start()] + replacement + ingredient[match.end() :]

    start, end = match.span("amount")
    return ingredient[:start] + format_amount(amount) + ingredient[end:]


def _scale_time(value: str | int | float, factor: Fraction) -> str | int | float:
    minutes = time_to_minutes(value)
    if not minutes:
        return value
    return round(minutes * float(factor))


def scale_recipe(recipe: Recipe, target_servings: int) -> Recipe:
    """Return a copy of ``recipe`` scaled to ``target_servings``.

    Prep and cook times become minute counts scaled by the same factor;
    times that cannot be read are left as they were.

    Raises:
        ValueError: If ``target_servings`` is not positive.
    """
    if target_servings < 1:
        msg = f"target_servings must be positive, got {target_servings}"
        raise ValueError(msg)

    factor = Fraction(target_servings, recipe.servings or 1)
    return recipe.model_copy(
        update={
            "ingredients": [scale_ingredient(i, factor) for i in recipe.ingredients],
            "prep_time": _scale_time(recipe.prep_time, factor),
            "cook_time": _scale_time(recipe.cook_time, factor),
            "servings": target_servings,
        }
    )
