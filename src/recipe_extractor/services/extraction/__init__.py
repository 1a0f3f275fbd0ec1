"""Recipe extraction pipeline."""

from recipe_extractor.services.extraction.exceptions import (
    ExtractionError,
    ExtractionExhaustedError,
    InvalidExtractionRequestError,
    PageFetchError,
    PageFetchTimeoutError,
    RecipePersistenceError,
)
from recipe_extractor.services.extraction.fetcher import PageFetcher, PageSession
from recipe_extractor.services.extraction.models import (
    ExtractionOutcome,
    RecipeDraft,
    StrategyResult,
)
from recipe_extractor.services.extraction.service import RecipeExtractionService


__all__ = [
    "ExtractionError",
    "ExtractionExhaustedError",
    "ExtractionOutcome",
    "InvalidExtractionRequestError",
    "PageFetchError",
    "PageFetchTimeoutError",
    "PageFetcher",
    "PageSession",
    "RecipeDraft",
    "RecipeExtractionService",
    "RecipePersistenceError",
    "StrategyResult",
]
