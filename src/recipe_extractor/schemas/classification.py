"""URL classification schemas."""

from __future__ import annotations

from recipe_extractor.schemas.base import APIRequest, APIResponse
from recipe_extractor.schemas.enums import ConfidenceTier, SourceType


class ClassifyRequest(APIRequest):
    """Body of ``POST /classify``."""

    url: str


class ClassificationResponse(APIResponse):
    """Advisory classification of a submitted URL."""

    is_valid: bool
    source_type: SourceType | None = None
    confidence_tier: ConfidenceTier | None = None
    hostname: str | None = None
    cleaned_url: str | None = None
    instagram_post_id: str | None = None
    warning: str | None = None
