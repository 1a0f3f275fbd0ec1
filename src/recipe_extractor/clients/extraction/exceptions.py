"""Extraction client exceptions.

Callers catch ``ExtractionRetriesExhaustedError`` to offer the AI
enhancement path; everything else signals a request that retrying will
not fix.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from recipe_extractor.clients.extraction.schemas import ExtractionResult


class ExtractionClientError(Exception):
    """Base exception for extraction client errors."""


class ExtractionUnavailableError(ExtractionClientError):
    """Raised when the extraction service cannot be reached."""


class ExtractionTimeoutError(ExtractionUnavailableError):
    """Raised when a request to the extraction service times out."""


class ExtractionResponseError(ExtractionClientError):
    """Raised when the extraction service returns an error response."""

    def __init__(
        self,
        status_code: int,
        message: str,
        body: dict[str, Any] | None = None,
    ) -> None:
        self.status_code = status_code
        self.body = body or {}
        super().__init__(message)


class ExtractionRejectedError(ExtractionResponseError):
    """Raised on a 400: the request itself is invalid."""

    def __init__(self, message: str, body: dict[str, Any] | None = None) -> None:
        super().__init__(status_code=400, message=message, body=body)


class ExtractionFailedError(ExtractionResponseError):
    """Raised on a 422: no strategy produced a recipe."""

    def __init__(self, result: ExtractionResult) -> None:
        self.result = result
        super().__init__(
            status_code=422,
            message=result.message or "Extraction failed",
            body=result.model_dump(),
        )


class ExtractionRetriesExhaustedError(ExtractionClientError):
    """Raised when every retry attempt failed.

    ``suggestion`` points the caller at the AI enhancement path and
    ``last_error`` is the failure of the final attempt.
    """

    def __init__(
        self,
        attempts: int,
        suggestion: str,
        last_error: ExtractionClientError,
    ) -> None:
        self.attempts = attempts
        self.suggestion = suggestion
        self.last_error = last_error
        super().__init__(f"Extraction failed after {attempts} attempts: {last_error}")
