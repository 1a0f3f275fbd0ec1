"""Request and response bodies exchanged with the extraction endpoint."""

from __future__ import annotations

from typing import Any

from recipe_extractor.schemas.base import DownstreamRequest, DownstreamResponse


class ExtractionCall(DownstreamRequest):
    """Body sent to ``/extract`` and to the enhancement endpoint."""

    url: str
    user_id: str
    debug: bool = False


class ExtractionResult(DownstreamResponse):
    """Body returned by the extraction endpoint, success or failure."""

    status: str
    message: str | None = None
    data: dict[str, Any] | None = None
    method: str | None = None
    confidence: float | None = None
    suggestion: str | None = None
    extraction_results: list[dict[str, Any]] = []
