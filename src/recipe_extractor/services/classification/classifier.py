"""URL classification.

Pure string/regex inspection of a submitted URL: no network access. The
result is advisory; a low confidence tier never blocks extraction.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from recipe_extractor.schemas.enums import ConfidenceTier, SourceType
from recipe_extractor.services.classification.constants import (
    CONFIDENCE_TIERS,
    INSTAGRAM_POST_PATTERNS,
    RECIPE_DOMAINS,
    SOCIAL_HOST_PATTERNS,
    TRACKING_PARAMS,
)


_HTTP_URL = re.compile(r"^https?://\S+$", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class UrlClassification:
    """Classification of a URL.

    Only ``is_valid`` is meaningful when the URL is invalid.
    """

    is_valid: bool
    source_type: SourceType | None = None
    confidence_tier: ConfidenceTier | None = None
    hostname: str | None = None
    cleaned_url: str | None = None
    instagram_post_id: str | None = None

    @property
    def is_low_confidence(self) -> bool:
        return self.confidence_tier == ConfidenceTier.LOW


def _hostname(url: str) -> str | None:
    if not url or not _HTTP_URL.match(url.strip()):
        return None
    try:
        host = urlsplit(url.strip()).hostname
    except ValueError:
        return None
    return host.lower() if host else None


def is_valid_url(url: str | None) -> bool:
    """Check for an ``http(s)://`` URL with a non-empty host."""
    return bool(url) and _hostname(url) is not None


def clean_url(url: str) -> str:
    """Remove tracking query parameters, leaving everything else intact.

    Invalid URLs are returned unchanged.
    """
    if not is_valid_url(url):
        return url
    parts = urlsplit(url.strip())
    query = [
        (key, value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
        if key.lower() not in TRACKING_PARAMS and not key.lower().startswith("utm_")
    ]
    return urlunsplit(parts._replace(query=urlencode(query)))


def extract_instagram_post_id(url: str) -> str | None:
    """Return the post, reel or story id from an Instagram URL."""
    for pattern in INSTAGRAM_POST_PATTERNS:
        match = pattern.search(url or "")
        if match:
            return match.group(1)
    return None


def _source_type(hostname: str) -> SourceType:
    for source_type, pattern in SOCIAL_HOST_PATTERNS:
        if pattern.search(hostname):
            return source_type
    if any(domain in hostname for domain in RECIPE_DOMAINS):
        return SourceType.RECIPE_WEBSITE
    return SourceType.GENERAL_WEBSITE


def classify_url(url: str | None) -> UrlClassification:
    """Classify a URL by source type and confidence tier.

    Social networks are checked first, then the curated recipe-site list;
    anything else is a general website.

    Examples:
        >>> classify_url("https://www.instagram.com/p/ABC123/").source_type
        <SourceType.INSTAGRAM: 'instagram'>
        >>> classify_url("not a url").is_valid
        False
    """
    hostname = _hostname(url or "")
    if hostname is None:
        return UrlClassification(is_valid=False)

    source_type = _source_type(hostname)
    post_id = (
        extract_instagram_post_id(url or "")
        if source_type == SourceType.INSTAGRAM
        else None
    )
    return UrlClassification(
        is_valid=True,
        source_type=source_type,
        confidence_tier=CONFIDENCE_TIERS[source_type],
        hostname=hostname,
        cleaned_url=clean_url(url or ""),
        instagram_post_id=post_id,
    )
