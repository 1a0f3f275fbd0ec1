"""Page fetching for the extraction strategies.

``PageFetcher`` owns one shared ``httpx.AsyncClient`` for the process.
``PageSession`` wraps a single orchestration run: the first successful
fetch is reused by later strategies, while a failed fetch is not cached so
the next strategy gets a fresh attempt.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
from bs4 import BeautifulSoup

from recipe_extractor.core.config import get_settings
from recipe_extractor.observability.logging import get_logger
from recipe_extractor.services.extraction.exceptions import (
    PageFetchError,
    PageFetchTimeoutError,
)


if TYPE_CHECKING:
    from recipe_extractor.core.config import Settings


logger = get_logger(__name__)

HTML_PARSER = "lxml"


class PageFetcher:
    """Fetches HTML with a browser-like User-Agent and an explicit timeout.

    Example:
        ```python
        fetcher = PageFetcher()
        await fetcher.initialize()
        html = await fetcher.fetch("https://example.com/recipe")
        await fetcher.shutdown()
        ```
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        self._http_client: httpx.AsyncClient | None = None

    @property
    def timeout(self) -> float:
        return self._settings.extraction.fetch_timeout

    async def initialize(self) -> None:
        """Create the shared HTTP client."""
        self._http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            follow_redirects=True,
            headers={
                "User-Agent": self._settings.extraction.user_agent,
                "Accept": (
                    "text/html,application/xhtml+xml,application/xml;"
                    "q=0.9,image/webp,*/*;q=0.8"
                ),
                "Accept-Language": "en-US,en;q=0.5",
            },
        )
        logger.info("PageFetcher initialized", timeout=self.timeout)

    async def shutdown(self) -> None:
        """Release the HTTP client."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None
        logger.debug("PageFetcher shutdown")

    async def fetch(self, url: str) -> str:
        """Fetch a page and return its HTML.

        Raises:
            PageFetchTimeoutError: If the request times out.
            PageFetchError: On transport errors, non-2xx responses or pages
                larger than ``extraction.max_html_bytes``.
        """
        if not self._http_client:
            msg = "PageFetcher not initialized. Call initialize() first."
            raise RuntimeError(msg)

        try:
            response = await self._http_client.get(url)
            response.raise_for_status()

        except httpx.TimeoutException as e:
            logger.warning("Request timed out", url=url, error=str(e))
            error_msg = f"Request timed out after {self.timeout}s: {url}"
            raise PageFetchTimeoutError(error_msg) from e

        except httpx.HTTPStatusError as e:
            logger.warning(
                "HTTP error fetching URL",
                url=url,
                status_code=e.response.status_code,
            )
            error_msg = f"HTTP {e.response.status_code} fetching {url}"
            raise PageFetchError(error_msg) from e

        except httpx.RequestError as e:
            logger.warning("Request error fetching URL", url=url, error=str(e))
            error_msg = f"Failed to fetch {url}: {e}"
            raise PageFetchError(error_msg) from e

        if len(response.content) > self._settings.extraction.max_html_bytes:
            error_msg = f"Page too large ({len(response.content)} bytes): {url}"
            raise PageFetchError(error_msg)

        html: str = response.text
        return html


class PageSession:
    """Per-run view of one URL: fetched lazily, parsed at most once."""

    def __init__(self, fetcher: PageFetcher, url: str) -> None:
        self._fetcher = fetcher
        self.url = url
        self._html: str | None = None
        self._soup: BeautifulSoup | None = None

    async def html(self) -> str:
        if self._html is None:
            self._html = await self._fetcher.fetch(self.url)
        return self._html

    async def soup(self) -> BeautifulSoup:
        if self._soup is None:
            self._soup = BeautifulSoup(await self.html(), HTML_PARSER)
        return self._soup
