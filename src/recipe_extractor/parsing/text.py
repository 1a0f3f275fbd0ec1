"""Text cleanup for titles, ingredients and instructions."""

from __future__ import annotations

import html
import re
from typing import TYPE_CHECKING, Any, Final

import orjson


if TYPE_CHECKING:
    from collections.abc import Callable


# Keys probed, in order, when an ingredient or instruction arrives as an object.
TEXT_ACCESSOR_KEYS: Final = ("name", "text", "ingredient", "description", "value")

INGREDIENT_PUNCTUATION_MIN_LENGTH: Final = 10
TERMINAL_PUNCTUATION: Final = (".", "!", "?")

_BULLET_PREFIX = re.compile(r"^[\s•·▪◦‣∙●○■□*+\-–—]+")
_NUMBER_PREFIX = re.compile(r"^(?:step\s*)?\d+\s*[.):]\s*(?=\D)", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")
_HASHTAG = re.compile(r"#(\w+)")
_TITLE_SUFFIX = re.compile(r"\s+[|–—]\s+[^|–—]+$")


def decode_html_entities(text: str | None) -> str:
    """Decode named, decimal and hex HTML entities.

    Decoding repeats until the text stops changing, so double-encoded input
    (``&amp;lt;``) ends up fully decoded and the function is idempotent.
    """
    if not text:
        return ""
    previous = None
    decoded = text
    while decoded != previous:
        previous = decoded
        decoded = html.unescape(decoded)
    return decoded


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def coerce_text(value: Any) -> str:
    """Turn an arbitrary ingredient/instruction value into a string.

    Strings pass through. Objects are probed with ``TEXT_ACCESSOR_KEYS`` in
    order and fall back to their JSON encoding; anything else is ``str()``'d.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        for key in TEXT_ACCESSOR_KEYS:
            candidate = value.get(key)
            if isinstance(candidate, str) and candidate.strip():
                return candidate
        return orjson.dumps(value, default=str).decode()
    return str(value)


def _capitalize(text: str) -> str:
    return text[:1].upper() + text[1:] if text else text


def _clean_line(value: Any) -> str:
    text = decode_html_entities(coerce_text(value))
    text = _BULLET_PREFIX.sub("", text)
    text = _NUMBER_PREFIX.sub("", text)
    return _capitalize(collapse_whitespace(text))


def normalize_ingredient(value: Any) -> str:
    """Clean a single ingredient line.

    Example:
        >>> normalize_ingredient("• 2 cups flour")
        '2 cups flour.'
    """
    text = _clean_line(value).rstrip(";:").rstrip()
    if (
        len(text) > INGREDIENT_PUNCTUATION_MIN_LENGTH
        and not text.endswith(TERMINAL_PUNCTUATION)
    ):
        text += "."
    return text


def normalize_instruction(value: Any) -> str:
    """Clean a single instruction step and ensure it ends a sentence."""
    text = _clean_line(value)
    if text and not text.endswith(TERMINAL_PUNCTUATION):
        text += "."
    return text


def clean_lines(values: list[Any], normalizer: Callable[[Any], str]) -> list[str]:
    """Apply ``normalizer`` to every value, dropping lines that end up empty."""
    cleaned = (normalizer(value) for value in values)
    return [line for line in cleaned if line]


def format_recipe_title(title: Any) -> str:
    """Tidy a page or caption title.

    Entities are decoded, whitespace collapsed, a trailing ``| Site Name``
    segment removed and the first letter capitalized.
    """
    text = collapse_whitespace(decode_html_entities(coerce_text(title)))
    stripped = _TITLE_SUFFIX.sub("", text)
    return _capitalize(stripped or text)


def extract_hashtags(text: str | None) -> list[str]:
    """Return hashtags (without ``#``) in order of first appearance."""
    if not text:
        return []
    return unique(_HASHTAG.findall(text))


def unique(values: list[str]) -> list[str]:
    """Deduplicate while keeping first-appearance order."""
    return list(dict.fromkeys(value for value in values if value))
