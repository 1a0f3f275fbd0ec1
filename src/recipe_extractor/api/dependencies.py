"""FastAPI dependencies for service access.

Services are created during application startup and stored in app.state.
A service that failed to start, or was disabled, is stored as None and
the dependency answers 503.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from recipe_extractor.core.exceptions import ServiceUnavailableException
from recipe_extractor.database.repositories.recipes import (
    RecipeRepository,  # noqa: TC001
)
from recipe_extractor.services.extraction.service import (
    RecipeExtractionService,  # noqa: TC001
)


STORAGE_UNAVAILABLE_MESSAGE = "Recipe storage not available"


async def get_extraction_service(request: Request) -> RecipeExtractionService:
    """Get the recipe extraction service from app state.

    Raises:
        ServiceUnavailableException: If the service is not initialized.
    """
    service: RecipeExtractionService | None = getattr(
        request.app.state, "extraction_service", None
    )
    if service is None:
        raise ServiceUnavailableException("Recipe extraction service not available")
    return service


async def get_optional_recipe_repository(
    request: Request,
) -> RecipeRepository | None:
    """Get the recipe repository, or None when the database is unavailable.

    For endpoints that must validate their input before answering 503.
    """
    return getattr(request.app.state, "recipe_repository", None)


async def get_recipe_repository(
    repository: Annotated[
        RecipeRepository | None, Depends(get_optional_recipe_repository)
    ],
) -> RecipeRepository:
    """Get the recipe repository.

    Raises:
        ServiceUnavailableException: If the database is disabled or unreachable.
    """
    if repository is None:
        raise ServiceUnavailableException(STORAGE_UNAVAILABLE_MESSAGE)
    return repository
