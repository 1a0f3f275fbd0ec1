"""Application lifespan event handlers.

Startup configures logging, opens the database pool when enabled and
creates the shared page fetcher. Shutdown releases them in reverse order.
Services that fail to start are stored as None so the endpoints depending
on them answer 503 instead of the whole application refusing to boot.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from recipe_extractor.core.config import Settings, get_settings
from recipe_extractor.database.connection import (
    close_database_pool,
    init_database_pool,
)
from recipe_extractor.database.repositories.recipes import RecipeRepository
from recipe_extractor.observability.logging import get_logger, setup_logging
from recipe_extractor.services.extraction.fetcher import PageFetcher
from recipe_extractor.services.extraction.service import RecipeExtractionService


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI

logger = get_logger(__name__)


async def _startup(app: FastAPI, settings: Settings) -> None:
    """Initialize all application services during startup."""
    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
        log_file=settings.logging.file,
    )

    logger.info(
        "Starting application",
        app_name=settings.app.name,
        environment=settings.APP_ENV,
        debug=settings.app.debug,
    )

    await _init_extraction_service(app, settings)
    await _init_recipe_repository(app, settings)

    logger.info("Application startup complete")


async def _init_extraction_service(app: FastAPI, settings: Settings) -> None:
    """Create the page fetcher and the extraction service on top of it."""
    fetcher = PageFetcher(settings)
    await fetcher.initialize()
    app.state.fetcher = fetcher
    app.state.extraction_service = RecipeExtractionService(fetcher)
    logger.info(
        "RecipeExtractionService initialized",
        strategies=app.state.extraction_service.strategy_names,
    )


async def _init_recipe_repository(app: FastAPI, settings: Settings) -> None:
    """Open the database pool and create the recipe repository."""
    app.state.recipe_repository = None

    if not settings.database.enabled:
        logger.info("Database disabled - recipe storage unavailable")
        return

    try:
        pool = await init_database_pool()
    except Exception:
        logger.exception("Failed to initialize database - recipe storage unavailable")
        return

    app.state.recipe_repository = RecipeRepository(
        pool, schema=settings.database.db_schema
    )


async def _shutdown(app: FastAPI) -> None:
    """Shutdown all application services."""
    logger.info("Shutting down application")

    fetcher: PageFetcher | None = getattr(app.state, "fetcher", None)
    if fetcher is not None:
        await fetcher.shutdown()

    await close_database_pool()

    logger.info("Application shutdown complete")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan events.

    Yields:
        None - control returns to the application to handle requests.
    """
    settings: Settings = getattr(app.state, "settings", None) or get_settings()
    await _startup(app, settings)
    try:
        yield
    finally:
        await _shutdown(app)
