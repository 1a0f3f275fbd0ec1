"""Unit tests for lifespan events.

Tests cover:
- Startup wiring of the extraction service
- Recipe storage with the database disabled, failing and connected
- Shutdown sequence
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import FastAPI

from recipe_extractor.core.events.lifespan import lifespan
from recipe_extractor.database.repositories.recipes import RecipeRepository
from recipe_extractor.services.extraction.service import RecipeExtractionService


if TYPE_CHECKING:
    from recipe_extractor.core.config import Settings


pytestmark = pytest.mark.unit

LIFESPAN = "recipe_extractor.core.events.lifespan"


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    application = FastAPI()
    application.state.settings = settings
    return application


class TestLifespan:
    """Tests for lifespan context manager."""

    async def test_startup_wires_extraction_without_database(
        self, app: FastAPI
    ) -> None:
        """Should create the extraction service and leave storage unset."""
        with (
            patch(f"{LIFESPAN}.setup_logging") as setup_logging,
            patch(f"{LIFESPAN}.init_database_pool") as init_pool,
            patch(f"{LIFESPAN}.close_database_pool", new_callable=AsyncMock),
        ):
            async with lifespan(app):
                assert isinstance(app.state.extraction_service, RecipeExtractionService)
                assert app.state.recipe_repository is None

        setup_logging.assert_called_once()
        init_pool.assert_not_called()

    async def test_database_failure_leaves_storage_unavailable(
        self, app: FastAPI, settings: Settings
    ) -> None:
        """Should keep starting when the pool cannot be opened."""
        settings.database.enabled = True

        with (
            patch(f"{LIFESPAN}.setup_logging"),
            patch(
                f"{LIFESPAN}.init_database_pool",
                new_callable=AsyncMock,
                side_effect=OSError("Connection refused"),
            ),
            patch(f"{LIFESPAN}.close_database_pool", new_callable=AsyncMock),
        ):
            async with lifespan(app):
                assert app.state.recipe_repository is None
                assert app.state.extraction_service is not None

    async def test_connected_database_creates_repository(
        self, app: FastAPI, settings: Settings
    ) -> None:
        settings.database.enabled = True
        pool = MagicMock()

        with (
            patch(f"{LIFESPAN}.setup_logging"),
            patch(
                f"{LIFESPAN}.init_database_pool",
                new_callable=AsyncMock,
                return_value=pool,
            ),
            patch(f"{LIFESPAN}.close_database_pool", new_callable=AsyncMock),
        ):
            async with lifespan(app):
                repository = app.state.recipe_repository
                assert isinstance(repository, RecipeRepository)
                assert repository.pool is pool

    async def test_shutdown_releases_resources(self, app: FastAPI) -> None:
        with (
            patch(f"{LIFESPAN}.setup_logging"),
            patch(
                f"{LIFESPAN}.close_database_pool", new_callable=AsyncMock
            ) as close_pool,
        ):
            async with lifespan(app):
                fetcher = app.state.fetcher
                fetcher.shutdown = AsyncMock(wraps=fetcher.shutdown)

        fetcher.shutdown.assert_awaited_once()
        close_pool.assert_awaited_once()
