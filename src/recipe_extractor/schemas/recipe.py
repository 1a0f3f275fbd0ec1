"""Recipe and extraction schemas.

``Recipe`` is the canonical entity returned by every endpoint. The
extraction request/response models wrap it with the per-strategy
diagnostics produced by the extraction pipeline.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field

from recipe_extractor.schemas.base import APIRequest, APIResponse
from recipe_extractor.schemas.enums import Difficulty, ResponseStatus


DEFAULT_TITLE = "Untitled Recipe"
DEFAULT_SERVINGS = 4


class Recipe(APIResponse):
    """Canonical recipe.

    ``prep_time`` and ``cook_time`` are either a formatted string such as
    ``"1 hr 15 min"`` or a raw minute count; both forms are accepted.
    """

    id: str | None = Field(default=None, description="Recipe identifier")
    user_id: str | None = Field(default=None, description="Owning user")
    title: str = Field(default=DEFAULT_TITLE, min_length=1)
    description: str = ""
    ingredients: list[str] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)
    prep_time: str | int | float = "N/A"
    cook_time: str | int | float = "N/A"
    servings: int = Field(default=DEFAULT_SERVINGS, ge=1)
    difficulty: Difficulty = Difficulty.MEDIUM
    cuisine: str = "Other"
    category: str = "Other"
    dietary_restrictions: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    calories: int = Field(default=0, ge=0)
    image_url: str | None = None
    image_urls: list[str] = Field(default_factory=list)
    source_url: str | None = None
    confidence: float | None = Field(default=None, ge=0.0, le=1.0)
    method: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_persistable(self) -> bool:
        """A recipe needs at least one ingredient and one instruction."""
        return bool(self.ingredients) and bool(self.instructions)


class ErrorInfo(APIResponse):
    """Structured error attached to a failed attempt or a 500 response."""

    name: str
    message: str
    stack: str | None = None


class ExtractionAttempt(APIResponse):
    """Diagnostic record for one strategy run."""

    method: str
    success: bool
    confidence: float = 0.0
    error: ErrorInfo | None = None
    data: dict[str, Any] | None = None


class ExtractRequest(APIRequest):
    """Body of ``POST /extract``.

    ``url`` and ``user_id`` are optional at the schema level so that a
    missing value is reported as a 400 rather than a validation error.
    """

    url: str | None = None
    user_id: str | None = None
    debug: bool = False


class ExtractionSuccessResponse(APIResponse):
    """Body returned when a strategy produced a recipe."""

    status: ResponseStatus = ResponseStatus.SUCCESS
    data: Recipe
    method: str
    confidence: float
    extraction_results: list[ExtractionAttempt] | None = None


class ExtractionFailureResponse(APIResponse):
    """Body returned when extraction or persistence failed."""

    status: ResponseStatus = ResponseStatus.ERROR
    message: str
    suggestion: str | None = None
    extraction_results: list[ExtractionAttempt] | None = None
    error: ErrorInfo | None = None


class RecipeListResponse(APIResponse):
    """A page of a user's saved recipes."""

    recipes: list[Recipe]
    count: int
    limit: int
    offset: int
