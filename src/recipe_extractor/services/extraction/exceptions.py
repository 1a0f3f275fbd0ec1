"""Recipe extraction exceptions.

Fetch and parse failures are caught per strategy and recorded as failed
attempts. Only ``InvalidExtractionRequestError``,
``ExtractionExhaustedError`` and ``RecipePersistenceError`` reach the
endpoint layer, where they become 400, 422 and 500 responses.
"""

from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from recipe_extractor.schemas.recipe import ExtractionAttempt


class ExtractionError(Exception):
    """Base exception for extraction errors."""


class InvalidExtractionRequestError(ExtractionError):
    """Raised when the URL or user id is missing or malformed.

    Raised before any network access.
    """


class PageFetchError(ExtractionError):
    """Raised when fetching the page fails.

    Covers connection errors, non-2xx responses and oversized pages.
    """


class PageFetchTimeoutError(PageFetchError):
    """Raised when fetching the page times out."""


class ExtractionExhaustedError(ExtractionError):
    """Raised when every strategy ran without producing a recipe.

    Carries the attempt of every strategy for diagnostics.
    """

    def __init__(self, message: str, attempts: list[ExtractionAttempt]) -> None:
        super().__init__(message)
        self.message = message
        self.attempts = attempts


class RecipePersistenceError(ExtractionError):
    """Raised when an extracted recipe cannot be stored."""
