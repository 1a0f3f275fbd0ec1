"""URL classification service."""

from recipe_extractor.services.classification.classifier import (
    UrlClassification,
    classify_url,
    clean_url,
    extract_instagram_post_id,
    is_valid_url,
)


__all__ = [
    "UrlClassification",
    "classify_url",
    "clean_url",
    "extract_instagram_post_id",
    "is_valid_url",
]
