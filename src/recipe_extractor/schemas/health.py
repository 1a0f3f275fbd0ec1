"""Health and readiness schemas."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import Field

from recipe_extractor.schemas.base import APIResponse
from recipe_extractor.schemas.enums import HealthStatus


class HealthResponse(APIResponse):
    """Liveness response."""

    status: HealthStatus = Field(..., description="Health status")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="Current server timestamp",
    )
    version: str = Field(..., description="Application version")
    environment: str = Field(..., description="Deployment environment")


class ReadinessResponse(HealthResponse):
    """Readiness response with dependency status."""

    dependencies: dict[str, HealthStatus] = Field(
        default_factory=dict,
        description="Status of external dependencies",
    )
