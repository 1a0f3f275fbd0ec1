"""Client for the extraction endpoint with retry and AI fallback."""

from recipe_extractor.clients.extraction.client import ExtractionClient
from recipe_extractor.clients.extraction.exceptions import (
    ExtractionClientError,
    ExtractionFailedError,
    ExtractionRejectedError,
    ExtractionResponseError,
    ExtractionRetriesExhaustedError,
    ExtractionTimeoutError,
    ExtractionUnavailableError,
)
from recipe_extractor.clients.extraction.retry import RetryPolicy
from recipe_extractor.clients.extraction.schemas import (
    ExtractionCall,
    ExtractionResult,
)


__all__ = [
    "ExtractionCall",
    "ExtractionClient",
    "ExtractionClientError",
    "ExtractionFailedError",
    "ExtractionRejectedError",
    "ExtractionResponseError",
    "ExtractionResult",
    "ExtractionRetriesExhaustedError",
    "ExtractionTimeoutError",
    "ExtractionUnavailableError",
    "RetryPolicy",
]
