"""Recipe parsing for social-media captions.

Captions follow the loose convention of a title line, an ``Ingredients:``
block of ``-`` bullets, an ``Instructions:`` block of numbered steps and
trailing hashtags.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Final

from recipe_extractor.parsing.text import collapse_whitespace, extract_hashtags


DEFAULT_CATEGORY: Final = "Other"

CATEGORY_KEYWORDS: Final[dict[str, tuple[str, ...]]] = {
    "Breakfast": ("breakfast", "morning", "brunch", "toast", "eggs"),
    "Lunch": ("lunch", "sandwich", "salad", "wrap"),
    "Dinner": ("dinner", "supper", "pasta", "steak"),
    "Dessert": ("dessert", "cake", "cookie", "sweet"),
    "Appetizer": ("appetizer", "starter", "snack", "dip"),
    "Drink": ("drink", "cocktail", "smoothie", "juice", "beverage"),
}

_INSTRUCTION_HEADER = r"(?:instructions|directions|method|steps)\s*:"
_INGREDIENTS_BLOCK = re.compile(
    rf"ingredients\s*:(.+?){_INSTRUCTION_HEADER}", re.IGNORECASE | re.DOTALL
)
_INSTRUCTIONS_BLOCK = re.compile(
    rf"{_INSTRUCTION_HEADER}(.+?)(?:#|$)", re.IGNORECASE | re.DOTALL
)
_INGREDIENT_BULLET = re.compile(r"^[-•*]\s*")
_STEP_NUMBER = re.compile(r"^\d+[.)]\s*")


@dataclass(slots=True)
class CaptionRecipe:
    """Recipe fields recovered from a caption."""

    title: str
    description: str
    ingredients: list[str] = field(default_factory=list)
    instructions: list[str] = field(default_factory=list)
    category: str = DEFAULT_CATEGORY
    tags: list[str] = field(default_factory=list)
    prep_minutes: int = 5
    cook_minutes: int = 10


def infer_category(text: str | None) -> str:
    """Guess a meal category from keywords; first matching category wins."""
    if not text:
        return DEFAULT_CATEGORY
    lowered = text.lower()
    for category, keywords in CATEGORY_KEYWORDS.items():
        if any(keyword in lowered for keyword in keywords):
            return category
    return DEFAULT_CATEGORY


def _block_lines(block: str, prefix: re.Pattern[str]) -> list[str]:
    lines = (prefix.sub("", line.strip()).strip() for line in block.splitlines())
    return [line for line in lines if line]


def parse_caption(caption: str | None) -> CaptionRecipe | None:
    """Parse a caption into recipe fields.

    Returns None for an empty caption. The result may have no ingredients
    or instructions; callers decide whether that is enough.
    """
    if not caption or not caption.strip():
        return None

    text = caption.strip()
    first_line = collapse_whitespace(text.splitlines()[0])

    ingredients: list[str] = []
    match = _INGREDIENTS_BLOCK.search(text)
    if match:
        ingredients = _block_lines(match.group(1), _INGREDIENT_BULLET)

    instructions: list[str] = []
    match = _INSTRUCTIONS_BLOCK.search(text)
    if match:
        instructions = _block_lines(match.group(1), _STEP_NUMBER)

    # Rough estimates scaled by recipe size.
    prep_minutes = max(5, min(30, len(ingredients) * 2))
    cook_minutes = max(10, min(60, len(instructions) * 5))

    return CaptionRecipe(
        title=first_line,
        description=first_line,
        ingredients=ingredients,
        instructions=instructions,
        category=infer_category(text),
        tags=extract_hashtags(text),
        prep_minutes=prep_minutes,
        cook_minutes=cook_minutes,
    )
