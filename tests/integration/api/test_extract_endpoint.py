"""Integration tests for the extraction endpoints.

Tests cover:
- Full extract-save-return flow over each strategy
- Failure bodies with per-strategy diagnostics
- Request validation and debug output
- URL classification
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest

from recipe_extractor.api.dependencies import get_optional_recipe_repository
from recipe_extractor.services.extraction.exceptions import RecipePersistenceError
from recipe_extractor.services.extraction.service import EXHAUSTED_MESSAGE
from tests.fixtures.pages import (
    BARE_PAGE,
    HEURISTIC_PAGE,
    PASTA_JSONLD_PAGE,
    SCHEMA_ORG_PAGE,
)


if TYPE_CHECKING:
    import respx
    from fastapi import FastAPI
    from httpx import AsyncClient

    from recipe_extractor.core.config import Settings
    from tests.integration.conftest import InMemoryRecipeRepository


pytestmark = pytest.mark.integration

PAGE_URL = "https://example.com/recipe"
EXTRACT = "/api/v1/extract"


def _serve(pages: respx.MockRouter, html: str, url: str = PAGE_URL) -> respx.Route:
    return pages.get(url).mock(return_value=httpx.Response(200, text=html))


class TestExtractSuccess:
    """Tests for successful extraction."""

    async def test_json_ld_recipe_is_saved_and_returned(
        self,
        client: AsyncClient,
        pages: respx.MockRouter,
        repository: InMemoryRecipeRepository,
    ) -> None:
        _serve(pages, PASTA_JSONLD_PAGE)

        response = await client.post(
            EXTRACT, json={"url": PAGE_URL, "userId": "user-1"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "success"
        assert body["method"] == "json-ld"
        assert body["confidence"] == 0.85
        assert "extractionResults" not in body

        data = body["data"]
        assert data["title"] == "Pasta"
        assert data["ingredients"] == ["100g pasta"]
        assert data["instructions"] == ["Boil it."]
        assert data["userId"] == "user-1"
        assert data["sourceUrl"] == PAGE_URL
        assert data["method"] == "json-ld"
        assert data["id"] in repository.rows

    async def test_schema_org_wins_first(
        self, client: AsyncClient, pages: respx.MockRouter
    ) -> None:
        url = "https://bake.example/lemon-cake"
        _serve(pages, SCHEMA_ORG_PAGE, url)

        response = await client.post(EXTRACT, json={"url": url, "userId": "user-1"})

        body = response.json()
        assert body["method"] == "schema-org"
        assert body["confidence"] == 0.9
        assert body["data"]["title"] == "Lemon Cake"
        assert body["data"]["servings"] == 8
        assert body["data"]["imageUrl"] == "https://bake.example/images/lemon-cake.jpg"

    async def test_heuristic_reports_computed_confidence(
        self, client: AsyncClient, pages: respx.MockRouter
    ) -> None:
        _serve(pages, HEURISTIC_PAGE)

        response = await client.post(
            EXTRACT, json={"url": PAGE_URL, "userId": "user-1"}
        )

        body = response.json()
        assert body["method"] == "heuristic"
        assert body["confidence"] == 1.0
        assert body["data"]["prepTime"] == "10 min"
        assert body["data"]["cookTime"] == "15 min"

    async def test_debug_query_includes_diagnostics(
        self, client: AsyncClient, pages: respx.MockRouter
    ) -> None:
        _serve(pages, PASTA_JSONLD_PAGE)

        response = await client.post(
            f"{EXTRACT}?debug=true", json={"url": PAGE_URL, "userId": "user-1"}
        )

        results = response.json()["extractionResults"]
        assert [r["method"] for r in results] == ["schema-org", "json-ld"]
        assert results[0]["success"] is False
        assert results[1]["success"] is True
        assert results[1]["data"]["name"] == "Pasta"

    async def test_debug_body_flag(
        self, client: AsyncClient, pages: respx.MockRouter
    ) -> None:
        _serve(pages, PASTA_JSONLD_PAGE)

        response = await client.post(
            EXTRACT, json={"url": PAGE_URL, "userId": "user-1", "debug": True}
        )

        assert len(response.json()["extractionResults"]) == 2

    async def test_page_is_fetched_once(
        self, client: AsyncClient, pages: respx.MockRouter
    ) -> None:
        route = _serve(pages, HEURISTIC_PAGE)

        await client.post(EXTRACT, json={"url": PAGE_URL, "userId": "user-1"})

        assert route.call_count == 1

    @pytest.mark.parametrize("path", ["/extract", "/recipe-extractor"])
    async def test_root_aliases(
        self, client: AsyncClient, pages: respx.MockRouter, path: str
    ) -> None:
        _serve(pages, PASTA_JSONLD_PAGE)

        response = await client.post(path, json={"url": PAGE_URL, "userId": "u"})

        assert response.status_code == 200
        assert response.headers["X-Request-ID"]


class TestExtractFailure:
    """Tests for extraction failures."""

    async def test_page_without_recipe_returns_422_with_diagnostics(
        self, client: AsyncClient, pages: respx.MockRouter, settings: Settings
    ) -> None:
        _serve(pages, BARE_PAGE)

        response = await client.post(
            EXTRACT, json={"url": PAGE_URL, "userId": "user-1"}
        )

        assert response.status_code == 422
        body = response.json()
        assert body["status"] == "error"
        assert body["message"] == EXHAUSTED_MESSAGE
        assert body["suggestion"] == settings.extraction.failure_suggestion
        assert "data" not in body
        results = body["extractionResults"]
        assert [r["method"] for r in results] == [
            "schema-org",
            "json-ld",
            "heuristic",
        ]
        assert all(r["success"] is False for r in results)
        assert results[0]["error"]["name"] == "StructuralMismatch"

    async def test_unreachable_page_is_reported_per_strategy(
        self, client: AsyncClient, pages: respx.MockRouter
    ) -> None:
        route = pages.get(PAGE_URL).mock(return_value=httpx.Response(404))

        response = await client.post(
            EXTRACT, json={"url": PAGE_URL, "userId": "user-1"}
        )

        assert response.status_code == 422
        errors = [r["error"] for r in response.json()["extractionResults"]]
        assert {e["name"] for e in errors} == {"PageFetchError"}
        assert route.call_count == 3

    @pytest.mark.parametrize(
        "payload",
        [
            {"url": PAGE_URL},
            {"userId": "user-1"},
            {"url": "  ", "userId": "user-1"},
            {},
        ],
    )
    async def test_missing_fields_return_400(
        self, client: AsyncClient, payload: dict[str, str]
    ) -> None:
        response = await client.post(EXTRACT, json=payload)

        assert response.status_code == 400
        assert response.json() == {
            "status": "error",
            "message": "Both url and userId are required",
        }

    async def test_missing_body_returns_400(self, client: AsyncClient) -> None:
        response = await client.post(EXTRACT)

        assert response.status_code == 400

    async def test_invalid_url_returns_400(
        self, client: AsyncClient, pages: respx.MockRouter
    ) -> None:
        response = await client.post(
            EXTRACT, json={"url": "not a url", "userId": "user-1"}
        )

        assert response.status_code == 400
        assert "Invalid URL" in response.json()["message"]
        assert not pages.calls

    async def test_storage_failure_returns_500(
        self,
        client: AsyncClient,
        pages: respx.MockRouter,
        repository: InMemoryRecipeRepository,
    ) -> None:
        _serve(pages, PASTA_JSONLD_PAGE)

        async def failing_create(row: dict) -> dict:
            msg = "connection reset"
            raise RecipePersistenceError(msg)

        repository.create = failing_create  # type: ignore[method-assign]

        response = await client.post(
            f"{EXTRACT}?debug=true", json={"url": PAGE_URL, "userId": "user-1"}
        )

        assert response.status_code == 500
        body = response.json()
        assert body["message"] == "Recipe was extracted but could not be saved"
        assert body["error"]["name"] == "RecipePersistenceError"
        assert body["error"]["stack"]
        assert len(body["extractionResults"]) == 2

    async def test_storage_unavailable_returns_503(
        self, app: FastAPI, client: AsyncClient
    ) -> None:
        del app.dependency_overrides[get_optional_recipe_repository]

        response = await client.post(
            EXTRACT, json={"url": PAGE_URL, "userId": "user-1"}
        )

        assert response.status_code == 503
        assert response.json()["message"] == "Recipe storage not available"

    async def test_missing_fields_win_over_missing_storage(
        self, app: FastAPI, client: AsyncClient
    ) -> None:
        del app.dependency_overrides[get_optional_recipe_repository]

        response = await client.post(EXTRACT, json={"url": PAGE_URL})

        assert response.status_code == 400
        assert response.json()["message"] == "Both url and userId are required"


class TestClassifyEndpoint:
    """Tests for POST /classify."""

    async def test_instagram_post(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/v1/classify",
            json={"url": "https://www.instagram.com/p/CxYz123/?utm_source=ig"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["isValid"] is True
        assert body["sourceType"] == "instagram"
        assert body["instagramPostId"] == "CxYz123"
        assert body["cleanedUrl"] == "https://www.instagram.com/p/CxYz123/"

    async def test_recipe_site_has_no_warning(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/v1/classify",
            json={"url": "https://www.allrecipes.com/recipe/1/pancakes"},
        )

        body = response.json()
        assert body["sourceType"] == "recipe-website"
        assert body["confidenceTier"] == "high"
        assert "warning" not in body

    async def test_unknown_site_is_flagged(self, client: AsyncClient) -> None:
        response = await client.post("/api/v1/classify", json={"url": PAGE_URL})

        body = response.json()
        assert body["confidenceTier"] == "low"
        assert body["warning"]

    async def test_invalid_url(self, client: AsyncClient) -> None:
        response = await client.post("/api/v1/classify", json={"url": "nope"})

        assert response.json() == {"isValid": False}
