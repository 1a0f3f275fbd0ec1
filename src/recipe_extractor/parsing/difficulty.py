"""Difficulty scoring.

A recipe's difficulty is the average of three scores (total time,
instruction count, ingredient count), each from 1 to 3. An explicit
difficulty from the recipe author overrides the computed value.
"""

from __future__ import annotations

from typing import Final

from recipe_extractor.schemas.enums import Difficulty


EASY_THRESHOLD: Final = 1.7
MEDIUM_THRESHOLD: Final = 2.5

_AUTHOR_KEYWORDS: Final = (
    (Difficulty.EASY, ("easy", "simple", "beginner")),
    (Difficulty.MEDIUM, ("medium", "moderate", "intermediate")),
    (Difficulty.HARD, ("hard", "difficult", "complex", "expert", "advanced")),
)


def difficulty_from_text(text: str | None) -> Difficulty | None:
    """Map author-supplied difficulty text onto the enum, if recognizable."""
    if not text:
        return None
    normalized = text.strip().lower()
    for difficulty, keywords in _AUTHOR_KEYWORDS:
        if any(keyword in normalized for keyword in keywords):
            return difficulty
    return None


def _band(value: float, first: float, second: float) -> int:
    if value < first:
        return 1
    if value < second:
        return 2
    return 3


def determine_difficulty(
    total_minutes: float | None,
    ingredient_count: int,
    instruction_count: int,
    author_difficulty: str | None = None,
) -> Difficulty:
    """Derive the difficulty of a recipe.

    Scores: time <30 min 1, <60 min 2, else 3; instructions <5 1, <10 2,
    else 3; ingredients the same as instructions. An average below 1.7 is
    easy, below 2.5 medium, otherwise hard. Unknown time counts as
    0 minutes.
    """
    supplied = difficulty_from_text(author_difficulty)
    if supplied is not None:
        return supplied

    scores = (
        _band(total_minutes or 0, 30, 60),
        _band(instruction_count, 5, 10),
        _band(ingredient_count, 5, 10),
    )
    average = sum(scores) / len(scores)
    if average < EASY_THRESHOLD:
        return Difficulty.EASY
    if average < MEDIUM_THRESHOLD:
        return Difficulty.MEDIUM
    return Difficulty.HARD
