"""Access logging for API calls.

Health and readiness checks, under the root or the versioned prefix, are
not logged.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Final

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from recipe_extractor.observability.logging import bind_context, get_logger


if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response

logger = get_logger(__name__)

HEALTH_CHECK_SUFFIXES: Final = ("/health", "/ready")


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log each call with its status and duration."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        path = request.url.path
        if path.endswith(HEALTH_CHECK_SUFFIXES):
            return await call_next(request)

        bind_context(method=request.method, path=path, client_ip=_client_ip(request))

        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "Request completed",
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return response


def _client_ip(request: Request) -> str:
    # Behind a proxy the first X-Forwarded-For entry is the caller.
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    return request.client.host if request.client else "unknown"
