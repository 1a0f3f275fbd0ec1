"""Data models for the extraction pipeline.

A ``RecipeDraft`` is what a strategy recovers from a page before any
cleanup; the mapper turns it into the canonical ``Recipe``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field


if TYPE_CHECKING:
    from recipe_extractor.schemas.recipe import ExtractionAttempt
    from recipe_extractor.services.classification import UrlClassification


class RecipeDraft(BaseModel):
    """Raw recipe data recovered by a strategy.

    Times are in minutes. Text fields are as found on the page; cleanup is
    the mapper's job.
    """

    title: str | None = Field(None, description="Recipe title")
    description: str | None = Field(None, description="Recipe description")
    ingredients: list[str] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)
    prep_time: float | None = Field(None, description="Prep time in minutes")
    cook_time: float | None = Field(None, description="Cook time in minutes")
    total_time: float | None = Field(None, description="Total time in minutes")
    servings: int | None = None
    image_urls: list[str] = Field(default_factory=list)
    cuisine: str | None = None
    category: str | None = None
    keywords: list[str] = Field(default_factory=list)
    difficulty: str | None = Field(None, description="Author-supplied difficulty")
    calories: int | None = None
    dietary_restrictions: list[str] = Field(default_factory=list)

    @property
    def has_content(self) -> bool:
        """At least one ingredient and one instruction were found."""
        return bool(self.ingredients) and bool(self.instructions)

    @property
    def total_minutes(self) -> float | None:
        if self.total_time:
            return self.total_time
        if self.prep_time or self.cook_time:
            return (self.prep_time or 0) + (self.cook_time or 0)
        return None


@dataclass(slots=True)
class StrategyResult:
    """What a single strategy reports back to the orchestrator.

    ``is_recipe=False`` is the normal "try the next strategy" signal; the
    optional ``reason`` explains it in diagnostics.
    """

    is_recipe: bool
    draft: RecipeDraft | None = None
    confidence: float = 0.0
    reason: str | None = None
    raw: dict[str, Any] | None = None

    @classmethod
    def no_match(cls, reason: str, raw: dict[str, Any] | None = None) -> StrategyResult:
        return cls(is_recipe=False, reason=reason, raw=raw)


@dataclass(slots=True)
class ExtractionOutcome:
    """Successful orchestration run."""

    draft: RecipeDraft
    method: str
    confidence: float
    source_url: str
    classification: UrlClassification
    attempts: list[ExtractionAttempt] = field(default_factory=list)
