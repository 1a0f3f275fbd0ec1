"""Pydantic schemas for request/response validation."""

from recipe_extractor.schemas.base import (
    APIRequest,
    APIResponse,
    DownstreamRequest,
    DownstreamResponse,
)
from recipe_extractor.schemas.classification import (
    ClassificationResponse,
    ClassifyRequest,
)
from recipe_extractor.schemas.enums import (
    ConfidenceTier,
    Difficulty,
    ExtractionMethod,
    HealthStatus,
    ResponseStatus,
    SourceType,
)
from recipe_extractor.schemas.health import HealthResponse, ReadinessResponse
from recipe_extractor.schemas.recipe import (
    ErrorInfo,
    ExtractionAttempt,
    ExtractionFailureResponse,
    ExtractionSuccessResponse,
    ExtractRequest,
    Recipe,
    RecipeListResponse,
)


__all__ = [
    "APIRequest",
    "APIResponse",
    "ClassificationResponse",
    "ClassifyRequest",
    "ConfidenceTier",
    "Difficulty",
    "DownstreamRequest",
    "DownstreamResponse",
    "ErrorInfo",
    "ExtractRequest",
    "ExtractionAttempt",
    "ExtractionFailureResponse",
    "ExtractionMethod",
    "ExtractionSuccessResponse",
    "HealthResponse",
    "HealthStatus",
    "ReadinessResponse",
    "Recipe",
    "RecipeListResponse",
    "ResponseStatus",
    "SourceType",
]
