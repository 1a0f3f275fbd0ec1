"""Shape-tolerant readers for loosely typed recipe fields.

Stored rows and scraped payloads carry the same field as a plain string, a
JSON-encoded string, a list or an object depending on where it came from.
The helpers here decode each shape once and never raise.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Final

import orjson

from recipe_extractor.observability.logging import get_logger
from recipe_extractor.parsing.exceptions import FieldDecodeError
from recipe_extractor.parsing.text import TEXT_ACCESSOR_KEYS, coerce_text


logger = get_logger(__name__)

DEFAULT_IMAGE_BASE_URL: Final = "https://example.com"

IMAGE_ACCESSOR_KEYS: Final = ("url", "src", "image", "imageUrl")

# Wrapper keys under which an object may hold the actual list.
LIST_CONTAINER_KEYS: Final = (
    "items",
    "steps",
    "ingredients",
    "instructions",
    "itemListElement",
)


@dataclass(frozen=True, slots=True)
class DecodeResult:
    """Outcome of decoding a loosely typed list field.

    ``values`` is always usable; on failure it is empty and ``error``
    describes what went wrong.
    """

    values: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _looks_like_json(text: str) -> bool:
    return text.startswith(("[", "{"))


def _to_string_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return []
        if _looks_like_json(text):
            try:
                return _to_string_list(orjson.loads(text))
            except orjson.JSONDecodeError as e:
                msg = f"invalid JSON: {e}"
                raise FieldDecodeError(msg) from e
        return [line.strip() for line in text.splitlines() if line.strip()]
    if isinstance(value, list):
        items = (coerce_text(item).strip() for item in value if item is not None)
        return [item for item in items if item]
    if isinstance(value, dict):
        for key in LIST_CONTAINER_KEYS:
            if isinstance(value.get(key), list):
                return _to_string_list(value[key])
        msg = "object does not contain a list"
        raise FieldDecodeError(msg)
    msg = f"unsupported type {type(value).__name__}"
    raise FieldDecodeError(msg)


def decode_string_list(value: Any) -> DecodeResult:
    """Decode a list-of-strings field from any of its stored shapes.

    Accepts a native list, a JSON-encoded string, newline-separated text or
    an object wrapping a list. Failures produce an empty result with an
    error message instead of raising.

    Example:
        >>> decode_string_list('["a","b"]').values
        ['a', 'b']
    """
    try:
        return DecodeResult(values=_to_string_list(value))
    except FieldDecodeError as e:
        return DecodeResult(error=str(e))


def extract_first_value(value: Any) -> str | None:
    """Return the first meaningful scalar from a string, list or object.

    JSON-encoded strings are parsed first; strings that merely look like
    JSON are returned as written.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if _looks_like_json(text):
            try:
                return extract_first_value(orjson.loads(text))
            except orjson.JSONDecodeError:
                logger.debug("Value is not valid JSON, using raw text", value=text)
        return text
    if isinstance(value, list):
        for item in value:
            first = extract_first_value(item)
            if first:
                return first
        return None
    if isinstance(value, dict):
        for key in TEXT_ACCESSOR_KEYS:
            first = extract_first_value(value.get(key))
            if first:
                return first
        return None
    return str(value)


def _dimension(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _is_sized(item: Any) -> bool:
    return isinstance(item, dict) and bool(item.get("width") or item.get("height"))


def _area(item: dict[str, Any]) -> float:
    return _dimension(item.get("width")) * _dimension(item.get("height"))


def _image_candidates(value: Any, base_url: str) -> list[str]:
    if value is None:
        return []

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return []
        if _looks_like_json(text):
            try:
                return _image_candidates(orjson.loads(text), base_url)
            except orjson.JSONDecodeError:
                return []
        if text.startswith(("http://", "https://")):
            return [text]
        if text.startswith("//"):
            return [f"https:{text}"]
        if text.startswith("/"):
            return [f"{base_url.rstrip('/')}{text}"]
        return []

    if isinstance(value, dict):
        for key in IMAGE_ACCESSOR_KEYS:
            found = _image_candidates(value.get(key), base_url)
            if found:
                return found
        return []

    if isinstance(value, list):
        # Entries with size metadata win, largest first; sort is stable so
        # equal areas keep document order.
        sized = sorted(
            (item for item in value if _is_sized(item)), key=_area, reverse=True
        )
        rest = [item for item in value if not _is_sized(item)]
        urls: list[str] = []
        for item in [*sized, *rest]:
            urls.extend(_image_candidates(item, base_url))
        return list(dict.fromkeys(urls))

    return []


def collect_image_urls(
    value: Any, base_url: str = DEFAULT_IMAGE_BASE_URL
) -> list[str]:
    """Return every usable image URL in preference order, deduplicated."""
    return _image_candidates(value, base_url)


def extract_first_image_url(
    value: Any, base_url: str = DEFAULT_IMAGE_BASE_URL
) -> str | None:
    """Pick the best image URL from any supported shape.

    Handles absolute or root-relative strings (rewritten against
    ``base_url``), JSON-encoded strings, lists (entries with width/height
    preferred, by area descending) and objects (``url``, ``src``, ``image``,
    ``imageUrl`` in that order). Returns None when nothing usable is found;
    callers supply their own placeholder.

    Example:
        >>> extract_first_image_url(
        ...     ["http://a.jpg", {"url": "http://b.jpg", "width": 800, "height": 600}]
        ... )
        'http://b.jpg'
    """
    candidates = _image_candidates(value, base_url)
    return candidates[0] if candidates else None
