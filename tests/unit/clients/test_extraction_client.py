"""Unit tests for the extraction service client."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, patch

import httpx
import orjson
import pytest
import respx

from recipe_extractor.clients.extraction import (
    ExtractionClient,
    ExtractionClientError,
    ExtractionFailedError,
    ExtractionRejectedError,
    ExtractionResponseError,
    ExtractionRetriesExhaustedError,
    ExtractionTimeoutError,
    ExtractionUnavailableError,
    RetryPolicy,
)


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Generator

    from recipe_extractor.core.config import Settings


pytestmark = pytest.mark.unit

BASE_URL = "http://extractor.test"
EXTRACT_URL = f"{BASE_URL}/extract"
PAGE_URL = "https://example.com/recipe"

SUCCESS_BODY = {
    "status": "success",
    "data": {"id": "r1", "title": "Pasta"},
    "method": "json-ld",
    "confidence": 0.85,
}
FAILURE_BODY = {
    "status": "error",
    "message": "Could not extract a recipe from this page",
    "suggestion": "Try AI enhancement",
    "extractionResults": [{"method": "schema-org", "success": False}],
}


@pytest.fixture
def client_settings(settings: Settings) -> Settings:
    settings.client.base_url = f"{BASE_URL}/"
    settings.client.enhancement_url = "/free-model-recipe-generator"
    return settings


@pytest.fixture
async def client(client_settings: Settings) -> AsyncGenerator[ExtractionClient]:
    """Initialized client against the mocked service."""
    extraction_client = ExtractionClient(client_settings)
    await extraction_client.initialize()
    yield extraction_client
    await extraction_client.shutdown()


@pytest.fixture
def mock_sleep() -> Generator[AsyncMock]:
    with patch(
        "recipe_extractor.clients.extraction.client.asyncio.sleep",
        new_callable=AsyncMock,
    ) as sleep:
        yield sleep


class TestRetryPolicy:
    """Tests for RetryPolicy."""

    def test_exponential_delays(self) -> None:
        policy = RetryPolicy(max_retries=3, base_delay=1.0)

        assert [policy.delay_for(n) for n in range(3)] == [1.0, 2.0, 4.0]

    def test_first_call_plus_three_retries(self) -> None:
        policy = RetryPolicy(max_retries=3)

        assert [policy.should_retry(n) for n in range(4)] == [
            True,
            True,
            True,
            False,
        ]
        assert policy.max_attempts == 4

    @pytest.mark.parametrize(
        ("max_retries", "base_delay"),
        [(-1, 1.0), (3, -1.0)],
    )
    def test_rejects_invalid_values(
        self, max_retries: int, base_delay: float
    ) -> None:
        with pytest.raises(ValueError):
            RetryPolicy(max_retries=max_retries, base_delay=base_delay)


class TestExtract:
    """Tests for ExtractionClient.extract."""

    @respx.mock
    async def test_posts_camel_case_body(self, client: ExtractionClient) -> None:
        route = respx.post(EXTRACT_URL).mock(
            return_value=httpx.Response(200, json=SUCCESS_BODY)
        )

        result = await client.extract(PAGE_URL, "user-1", debug=True)

        sent = orjson.loads(route.calls.last.request.content)
        assert sent == {"url": PAGE_URL, "userId": "user-1", "debug": True}
        assert result.status == "success"
        assert result.method == "json-ld"
        assert result.confidence == 0.85
        assert result.data == {"id": "r1", "title": "Pasta"}

    @respx.mock
    async def test_400_is_rejected(self, client: ExtractionClient) -> None:
        respx.post(EXTRACT_URL).mock(
            return_value=httpx.Response(
                400, json={"status": "error", "message": "Both url and userId"}
            )
        )

        with pytest.raises(ExtractionRejectedError) as exc_info:
            await client.extract(PAGE_URL, "user-1")

        assert exc_info.value.status_code == 400

    @respx.mock
    async def test_422_carries_the_failure_body(
        self, client: ExtractionClient
    ) -> None:
        respx.post(EXTRACT_URL).mock(
            return_value=httpx.Response(422, json=FAILURE_BODY)
        )

        with pytest.raises(ExtractionFailedError) as exc_info:
            await client.extract(PAGE_URL, "user-1")

        result = exc_info.value.result
        assert result.suggestion == "Try AI enhancement"
        assert result.extraction_results == FAILURE_BODY["extractionResults"]

    @respx.mock
    async def test_other_status_is_a_response_error(
        self, client: ExtractionClient
    ) -> None:
        respx.post(EXTRACT_URL).mock(return_value=httpx.Response(500, text="boom"))

        with pytest.raises(ExtractionResponseError) as exc_info:
            await client.extract(PAGE_URL, "user-1")

        assert exc_info.value.status_code == 500

    @respx.mock
    async def test_timeout(self, client: ExtractionClient) -> None:
        respx.post(EXTRACT_URL).mock(side_effect=httpx.ReadTimeout("slow"))

        with pytest.raises(ExtractionTimeoutError):
            await client.extract(PAGE_URL, "user-1")

    @respx.mock
    async def test_connection_error(self, client: ExtractionClient) -> None:
        respx.post(EXTRACT_URL).mock(side_effect=httpx.ConnectError("refused"))

        with pytest.raises(ExtractionUnavailableError):
            await client.extract(PAGE_URL, "user-1")

    async def test_requires_initialize(self, client_settings: Settings) -> None:
        with pytest.raises(RuntimeError, match="not initialized"):
            await ExtractionClient(client_settings).extract(PAGE_URL, "user-1")


class TestExtractWithRetry:
    """Tests for ExtractionClient.extract_with_retry."""

    @respx.mock
    async def test_retries_failures_with_backoff(
        self, client: ExtractionClient, mock_sleep: AsyncMock
    ) -> None:
        route = respx.post(EXTRACT_URL).mock(
            side_effect=[
                httpx.Response(422, json=FAILURE_BODY),
                httpx.ConnectError("refused"),
                httpx.Response(200, json=SUCCESS_BODY),
            ]
        )

        result = await client.extract_with_retry(PAGE_URL, "user-1")

        assert result.status == "success"
        assert route.call_count == 3
        assert [c.args[0] for c in mock_sleep.await_args_list] == [1.0, 2.0]

    @respx.mock
    async def test_exhausted_retries_carry_server_suggestion(
        self, client: ExtractionClient, mock_sleep: AsyncMock
    ) -> None:
        route = respx.post(EXTRACT_URL).mock(
            return_value=httpx.Response(422, json=FAILURE_BODY)
        )

        with pytest.raises(ExtractionRetriesExhaustedError) as exc_info:
            await client.extract_with_retry(PAGE_URL, "user-1")

        assert route.call_count == 4
        assert [c.args[0] for c in mock_sleep.await_args_list] == [1.0, 2.0, 4.0]
        assert exc_info.value.attempts == 4
        assert exc_info.value.suggestion == "Try AI enhancement"
        assert isinstance(exc_info.value.last_error, ExtractionFailedError)

    @respx.mock
    async def test_exhausted_transport_errors_use_default_suggestion(
        self,
        client: ExtractionClient,
        client_settings: Settings,
        mock_sleep: AsyncMock,
    ) -> None:
        respx.post(EXTRACT_URL).mock(side_effect=httpx.ConnectError("refused"))

        with pytest.raises(ExtractionRetriesExhaustedError) as exc_info:
            await client.extract_with_retry(PAGE_URL, "user-1")

        expected = client_settings.extraction.failure_suggestion
        assert exc_info.value.suggestion == expected

    @respx.mock
    async def test_rejected_request_is_not_retried(
        self, client: ExtractionClient, mock_sleep: AsyncMock
    ) -> None:
        route = respx.post(EXTRACT_URL).mock(
            return_value=httpx.Response(400, json={"message": "bad"})
        )

        with pytest.raises(ExtractionRejectedError):
            await client.extract_with_retry(PAGE_URL, "user-1")

        assert route.call_count == 1
        mock_sleep.assert_not_awaited()

    @respx.mock
    async def test_custom_policy(
        self, client_settings: Settings, mock_sleep: AsyncMock
    ) -> None:
        respx.post(EXTRACT_URL).mock(
            return_value=httpx.Response(422, json=FAILURE_BODY)
        )
        client = ExtractionClient(
            client_settings, retry_policy=RetryPolicy(max_retries=0)
        )
        await client.initialize()

        try:
            with pytest.raises(ExtractionRetriesExhaustedError) as exc_info:
                await client.extract_with_retry(PAGE_URL, "user-1")
        finally:
            await client.shutdown()

        assert exc_info.value.attempts == 1
        mock_sleep.assert_not_awaited()


class TestEnhanceWithAi:
    """Tests for ExtractionClient.enhance_with_ai."""

    @respx.mock
    async def test_posts_to_relative_endpoint(self, client: ExtractionClient) -> None:
        route = respx.post(f"{BASE_URL}/free-model-recipe-generator").mock(
            return_value=httpx.Response(200, json=SUCCESS_BODY)
        )

        result = await client.enhance_with_ai(PAGE_URL, "user-1")

        assert route.called
        assert result.data == SUCCESS_BODY["data"]

    async def test_requires_configured_endpoint(
        self, client_settings: Settings
    ) -> None:
        client_settings.client.enhancement_url = None
        client = ExtractionClient(client_settings)

        with pytest.raises(ExtractionClientError, match="not configured"):
            await client.enhance_with_ai(PAGE_URL, "user-1")
