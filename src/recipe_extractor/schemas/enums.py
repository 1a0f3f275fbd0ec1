"""Enumeration types shared by schemas and services."""

from __future__ import annotations

from enum import StrEnum


class Difficulty(StrEnum):
    """Cooking difficulty of a recipe."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class SourceType(StrEnum):
    """Kind of site a submitted URL points at."""

    INSTAGRAM = "instagram"
    FACEBOOK = "facebook"
    TWITTER = "twitter"
    PINTEREST = "pinterest"
    YOUTUBE = "youtube"
    TIKTOK = "tiktok"
    RECIPE_WEBSITE = "recipe-website"
    GENERAL_WEBSITE = "general-website"


class ConfidenceTier(StrEnum):
    """Advisory likelihood that extraction from a source will succeed."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ExtractionMethod(StrEnum):
    """Names of the extraction strategies, in priority order."""

    SCHEMA_ORG = "schema-org"
    JSON_LD = "json-ld"
    HEURISTIC = "heuristic"


class ResponseStatus(StrEnum):
    """Top-level status of an extraction response."""

    SUCCESS = "success"
    ERROR = "error"


class HealthStatus(StrEnum):
    """Health status of the service or one of its dependencies."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"
    DISABLED = "disabled"
