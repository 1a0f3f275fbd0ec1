"""Shared strategy types and helpers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any
from urllib.parse import urlsplit

from recipe_extractor.parsing.text import collapse_whitespace
from recipe_extractor.parsing.values import collect_image_urls


if TYPE_CHECKING:
    from collections.abc import Callable

    from bs4 import BeautifulSoup
    from bs4.element import Tag

    from recipe_extractor.services.extraction.models import StrategyResult

    StrategyFunc = Callable[[BeautifulSoup, str], StrategyResult]


_FIRST_NUMBER = re.compile(r"\d+")
_SERVES = re.compile(r"serves\s*:?\s*(\d+)", re.IGNORECASE)
_SERVINGS = re.compile(r"(\d+)\s*servings?\b", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class StrategyDescriptor:
    """One entry of the strategy registry.

    ``confidence`` is the fixed score reported on success, or None when the
    strategy computes its own.
    """

    name: str
    confidence: float | None
    extract: StrategyFunc

    def confidence_for(self, result: StrategyResult) -> float:
        return self.confidence if self.confidence is not None else result.confidence


def node_text(node: Tag | None) -> str:
    """Visible text of a node with whitespace collapsed."""
    if node is None:
        return ""
    return collapse_whitespace(node.get_text(" "))


def parse_servings(value: Any) -> int | None:
    """Read a servings count from ``4``, ``"4-6"``, ``"Serves 4"`` and so on.

    ``serves N`` and ``N servings`` phrasings win; otherwise the first
    number found is used.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value) if value > 0 else None
    if isinstance(value, list):
        for item in value:
            servings = parse_servings(item)
            if servings:
                return servings
        return None

    text = str(value)
    phrased = find_servings_phrase(text)
    if phrased:
        return phrased
    match = _FIRST_NUMBER.search(text)
    if match and int(match.group(0)) > 0:
        return int(match.group(0))
    return None


def find_servings_phrase(text: str) -> int | None:
    """Find ``serves N`` or ``N servings`` in free text, ignoring bare numbers."""
    for pattern in (_SERVES, _SERVINGS):
        match = pattern.search(text)
        if match and int(match.group(1)) > 0:
            return int(match.group(1))
    return None


def resolve_image_urls(value: Any, page_url: str) -> list[str]:
    """Collect image URLs, resolving root-relative paths against the page host."""
    parts = urlsplit(page_url)
    return collect_image_urls(value, base_url=f"{parts.scheme}://{parts.netloc}")


def split_keywords(value: Any) -> list[str]:
    """Keywords arrive comma-separated or as a list."""
    if not value:
        return []
    if isinstance(value, list):
        items = [str(item) for item in value if item]
    else:
        items = str(value).split(",")
    return list(dict.fromkeys(k.strip() for k in items if k and k.strip()))


_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z])(?=[A-Z])")


def diet_label(value: Any) -> str | None:
    """Turn ``https://schema.org/GlutenFreeDiet`` into ``Gluten Free``."""
    if not value:
        return None
    name = str(value).rstrip("/").rsplit("/", 1)[-1].strip()
    name = name.removesuffix("Diet")
    label = _CAMEL_BOUNDARY.sub(" ", name).strip()
    return label or None


def parse_calories(value: Any) -> int | None:
    """Read ``"250 calories"`` / ``"250 kcal"`` / ``250`` as an integer."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value)
    match = _FIRST_NUMBER.search(str(value))
    return int(match.group(0)) if match else None
