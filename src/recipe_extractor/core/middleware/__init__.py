"""HTTP middleware for request correlation and logging."""

from .logging import LoggingMiddleware
from .request_id import REQUEST_ID_HEADER, RequestIDMiddleware


__all__ = [
    "REQUEST_ID_HEADER",
    "LoggingMiddleware",
    "RequestIDMiddleware",
]
