"""Integration test fixtures.

The application runs with its real middleware, exception handlers and
extraction service. Outbound page fetches are intercepted with respx and
recipe storage is replaced by an in-memory repository.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import pytest
import respx
from httpx import ASGITransport, AsyncClient

from recipe_extractor.api.dependencies import get_optional_recipe_repository
from recipe_extractor.factory import create_app
from recipe_extractor.services.extraction.fetcher import PageFetcher
from recipe_extractor.services.extraction.service import RecipeExtractionService


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Generator

    from fastapi import FastAPI

    from recipe_extractor.core.config import Settings


pytestmark = pytest.mark.integration


class InMemoryRecipeRepository:
    """Stands in for ``RecipeRepository`` with the same method signatures."""

    def __init__(self) -> None:
        self.rows: dict[str, dict[str, Any]] = {}
        self._clock = datetime(2026, 1, 1, tzinfo=UTC)

    async def create(self, row: dict[str, Any]) -> dict[str, Any]:
        self._clock += timedelta(minutes=1)
        stored = {**row, "created_at": self._clock, "updated_at": self._clock}
        self.rows[row["id"]] = stored
        return dict(stored)

    async def get(self, recipe_id: str, user_id: str) -> dict[str, Any] | None:
        row = self.rows.get(recipe_id)
        if row is None or row["user_id"] != user_id:
            return None
        return dict(row)

    async def list_for_user(
        self, user_id: str, limit: int = 20, offset: int = 0
    ) -> list[dict[str, Any]]:
        owned = [row for row in self.rows.values() if row["user_id"] == user_id]
        owned.sort(key=lambda row: row["created_at"], reverse=True)
        return [dict(row) for row in owned[offset : offset + limit]]

    async def delete(self, recipe_id: str, user_id: str) -> bool:
        if await self.get(recipe_id, user_id) is None:
            return False
        del self.rows[recipe_id]
        return True


@pytest.fixture
def repository() -> InMemoryRecipeRepository:
    """Empty in-memory recipe storage."""
    return InMemoryRecipeRepository()


@pytest.fixture
async def fetcher(settings: Settings) -> AsyncGenerator[PageFetcher]:
    """Initialized page fetcher."""
    page_fetcher = PageFetcher(settings)
    await page_fetcher.initialize()
    yield page_fetcher
    await page_fetcher.shutdown()


@pytest.fixture
def app(
    settings: Settings,
    fetcher: PageFetcher,
    repository: InMemoryRecipeRepository,
) -> FastAPI:
    """Application wired the way the lifespan would wire it.

    ``ASGITransport`` does not run the lifespan, so the services it would
    create are attached here.
    """
    application = create_app(settings)
    application.state.extraction_service = RecipeExtractionService(fetcher)
    overrides = application.dependency_overrides
    overrides[get_optional_recipe_repository] = lambda: repository
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for testing."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def pages() -> Generator[respx.MockRouter]:
    """Intercept outbound page fetches."""
    with respx.mock(assert_all_called=False) as router:
        yield router
