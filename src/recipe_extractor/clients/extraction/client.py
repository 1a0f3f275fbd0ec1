"""HTTP client for the recipe extraction endpoint.

Used by callers (UI backends, scripts) that submit URLs for extraction.
Retries are explicit: ``extract_with_retry`` runs in the caller's task, so
cancelling that task cancels any pending backoff sleep as well.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import httpx
import orjson

from recipe_extractor.clients.extraction.exceptions import (
    ExtractionClientError,
    ExtractionFailedError,
    ExtractionRejectedError,
    ExtractionResponseError,
    ExtractionRetriesExhaustedError,
    ExtractionTimeoutError,
    ExtractionUnavailableError,
)
from recipe_extractor.clients.extraction.retry import RetryPolicy
from recipe_extractor.clients.extraction.schemas import (
    ExtractionCall,
    ExtractionResult,
)
from recipe_extractor.core.config import get_settings
from recipe_extractor.observability.logging import get_logger


if TYPE_CHECKING:
    from recipe_extractor.core.config import Settings


logger = get_logger(__name__)

EXTRACT_PATH = "/extract"


class ExtractionClient:
    """Async client for ``POST /extract`` with retry and AI fallback.

    Example:
        ```python
        client = ExtractionClient()
        await client.initialize()
        try:
            result = await client.extract_with_retry(url, user_id)
        except ExtractionRetriesExhaustedError as e:
            print(e.suggestion)
            result = await client.enhance_with_ai(url, user_id)
        finally:
            await client.shutdown()
        ```
    """

    def __init__(
        self,
        settings: Settings | None = None,
        retry_policy: RetryPolicy | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Settings to read ``client`` options from.
            retry_policy: Overrides the policy built from settings.
            http_client: Pre-built HTTP client, which the caller keeps owning.
        """
        self._settings = settings or get_settings()
        client_settings = self._settings.client
        self.retry_policy = retry_policy or RetryPolicy(
            max_retries=client_settings.max_retries,
            base_delay=client_settings.backoff_base,
        )
        self._http_client = http_client
        self._owns_http_client = http_client is None

    @property
    def base_url(self) -> str:
        """Base URL of the extraction service."""
        return self._settings.client.base_url.rstrip("/")

    async def initialize(self) -> None:
        """Create the HTTP client if one was not supplied."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._settings.client.timeout),
                headers={
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                },
            )
        logger.info("ExtractionClient initialized", base_url=self.base_url)

    async def shutdown(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
        logger.debug("ExtractionClient shutdown")

    async def extract(
        self,
        url: str,
        user_id: str,
        *,
        debug: bool = False,
    ) -> ExtractionResult:
        """Submit one extraction request.

        Raises:
            ExtractionRejectedError: On 400.
            ExtractionFailedError: On 422.
            ExtractionResponseError: On any other error status.
            ExtractionUnavailableError: If the service cannot be reached.
        """
        call = ExtractionCall(url=url, user_id=user_id, debug=debug)
        return await self._post(f"{self.base_url}{EXTRACT_PATH}", call)

    async def extract_with_retry(
        self,
        url: str,
        user_id: str,
        *,
        debug: bool = False,
    ) -> ExtractionResult:
        """Submit an extraction request, retrying failures with backoff.

        Only extraction failures (422) and transport errors are retried.
        A rejected request (400) or any other error status is raised at once.

        Raises:
            ExtractionRetriesExhaustedError: When every attempt failed.
        """
        policy = self.retry_policy
        attempt = 0
        while True:
            try:
                return await self.extract(url, user_id, debug=debug)
            except (ExtractionFailedError, ExtractionUnavailableError) as e:
                if not policy.should_retry(attempt):
                    raise ExtractionRetriesExhaustedError(
                        attempts=attempt + 1,
                        suggestion=self._suggestion(e),
                        last_error=e,
                    ) from e

                delay = policy.delay_for(attempt)
                logger.info(
                    "Retrying extraction",
                    url=url,
                    attempt=attempt + 1,
                    max_attempts=policy.max_attempts,
                    delay_seconds=delay,
                    error=str(e),
                )
                await asyncio.sleep(delay)
                attempt += 1

    async def enhance_with_ai(
        self,
        url: str,
        user_id: str,
        *,
        debug: bool = False,
    ) -> ExtractionResult:
        """Ask the configured AI enhancement endpoint to build the recipe.

        Raises:
            ExtractionClientError: If no enhancement endpoint is configured.
        """
        endpoint = self._settings.client.enhancement_url
        if not endpoint:
            msg = "AI enhancement endpoint not configured"
            raise ExtractionClientError(msg)
        if not endpoint.startswith(("http://", "https://")):
            endpoint = f"{self.base_url}/{endpoint.lstrip('/')}"

        call = ExtractionCall(url=url, user_id=user_id, debug=debug)
        return await self._post(endpoint, call)

    async def _post(self, endpoint: str, call: ExtractionCall) -> ExtractionResult:
        if self._http_client is None:
            msg = "Client not initialized. Call initialize() first."
            raise RuntimeError(msg)

        logger.debug("Submitting extraction request", endpoint=endpoint, url=call.url)

        try:
            response = await self._http_client.post(
                endpoint,
                content=orjson.dumps(call.model_dump(by_alias=True)),
            )
        except httpx.TimeoutException as e:
            logger.warning("Extraction request timed out", endpoint=endpoint)
            raise ExtractionTimeoutError(str(e)) from e
        except httpx.RequestError as e:
            logger.warning(
                "Failed to reach extraction service",
                endpoint=endpoint,
                error=str(e),
            )
            msg = f"Failed to reach extraction service: {e}"
            raise ExtractionUnavailableError(msg) from e

        body = self._decode_body(response)

        if response.is_success:
            return ExtractionResult.model_validate(body)

        message = str(body.get("message") or f"HTTP {response.status_code}")
        logger.warning(
            "Extraction service returned error",
            status_code=response.status_code,
            message=message,
        )

        if response.status_code == 400:
            raise ExtractionRejectedError(message, body)
        if response.status_code == 422:
            raise ExtractionFailedError(
                ExtractionResult.model_validate({"status": "error", **body})
            )
        raise ExtractionResponseError(response.status_code, message, body)

    @staticmethod
    def _decode_body(response: httpx.Response) -> dict[str, object]:
        try:
            body = orjson.loads(response.content)
        except orjson.JSONDecodeError:
            return {"message": response.text}
        return body if isinstance(body, dict) else {"data": body}

    def _suggestion(self, error: ExtractionClientError) -> str:
        if isinstance(error, ExtractionFailedError) and error.result.suggestion:
            return error.result.suggestion
        return self._settings.extraction.failure_suggestion
