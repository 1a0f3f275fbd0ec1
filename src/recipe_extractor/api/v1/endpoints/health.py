"""Health check endpoints.

Provides liveness and readiness probes for Kubernetes and load balancers.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from recipe_extractor.core.config import Settings, get_settings
from recipe_extractor.database.connection import check_database_health
from recipe_extractor.schemas.enums import HealthStatus
from recipe_extractor.schemas.health import HealthResponse, ReadinessResponse


router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness probe",
    description="Basic health check to verify the service is running.",
)
async def health_check(
    settings: Annotated[Settings, Depends(get_settings)],
) -> HealthResponse:
    """Check if the service is alive. External dependencies are not probed."""
    return HealthResponse(
        status=HealthStatus.HEALTHY,
        version=settings.app.version,
        environment=settings.APP_ENV,
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
    description="Readiness check reporting extraction and database status.",
)
async def readiness_check(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings)],
) -> ReadinessResponse:
    """Check if the service is ready to handle requests.

    A database that is enabled but not connected degrades the service:
    URLs can still be classified but extracted recipes cannot be saved.
    """
    extraction_ready = getattr(request.app.state, "extraction_service", None)
    dependencies = {
        "extraction": (
            HealthStatus.HEALTHY if extraction_ready else HealthStatus.UNHEALTHY
        ),
        "database": HealthStatus(await check_database_health()),
    }

    degraded = dependencies["extraction"] != HealthStatus.HEALTHY or (
        settings.database.enabled
        and dependencies["database"] != HealthStatus.HEALTHY
    )

    return ReadinessResponse(
        status=HealthStatus.DEGRADED if degraded else HealthStatus.HEALTHY,
        version=settings.app.version,
        environment=settings.APP_ENV,
        dependencies=dependencies,
    )
