"""Heuristic DOM strategy.

Used when a page carries no structured data. Ingredients and instructions
come from an ordered list of CSS selectors covering common recipe-card
plugins, with a line-splitting fallback over broader containers. On social
media pages whose only content is the ``og:description`` caption, the
caption parser is the last resort.

Confidence is additive: 0.3 base, +0.1 title, +0.1 image, +0.2 for more
than three ingredients, +0.2 for more than one instruction and +0.1 when
any timing was found, capped at 1.0.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

from recipe_extractor.observability.logging import get_logger
from recipe_extractor.parsing.caption import parse_caption
from recipe_extractor.parsing.duration import parse_iso8601_duration, time_to_minutes
from recipe_extractor.services.classification import classify_url
from recipe_extractor.services.classification.constants import SOCIAL_SOURCES
from recipe_extractor.services.extraction.models import RecipeDraft, StrategyResult
from recipe_extractor.services.extraction.strategies.base import (
    find_servings_phrase,
    node_text,
    parse_servings,
    resolve_image_urls,
)


if TYPE_CHECKING:
    from bs4 import BeautifulSoup
    from bs4.element import Tag


logger = get_logger(__name__)

INGREDIENT_SELECTORS: Final = (
    ".ingredients li",
    ".recipe-ingredients li",
    '[itemprop="recipeIngredient"]',
    '[itemprop="ingredients"]',
    ".wprm-recipe-ingredient",
    ".tasty-recipes-ingredients li",
    ".mv-create-ingredients li",
    ".ingredient-list li",
    "#ingredients li",
    ".ingredient",
)
INSTRUCTION_SELECTORS: Final = (
    ".instructions li",
    ".recipe-instructions li",
    '[itemprop="recipeInstructions"] li',
    '[itemprop="recipeInstructions"]',
    ".wprm-recipe-instruction-text",
    ".tasty-recipes-instructions li",
    ".mv-create-instructions li",
    ".directions li",
    ".method li",
    ".steps li",
    "#instructions li",
)
INGREDIENT_CONTAINERS: Final = (".ingredients", ".recipe-ingredients", "#ingredients")
INSTRUCTION_CONTAINERS: Final = (
    ".instructions",
    ".recipe-instructions",
    "#instructions",
    ".directions",
    ".method",
)
PREP_TIME_SELECTORS: Final = (
    '[itemprop="prepTime"]',
    '[class*="prep-time"]',
    '[class*="prep_time"]',
    '[class*="preptime"]',
    '[class*="prepTime"]',
)
COOK_TIME_SELECTORS: Final = (
    '[itemprop="cookTime"]',
    '[class*="cook-time"]',
    '[class*="cook_time"]',
    '[class*="cooktime"]',
    '[class*="cookTime"]',
)
SERVINGS_SELECTORS: Final = (
    '[itemprop="recipeYield"]',
    '[class*="servings"]',
    '[class*="yield"]',
)
IMAGE_CLASS_HINTS: Final = ("recipe", "hero", "featured")

MIN_LINE_LENGTH: Final = 5
MAX_LINE_LENGTH: Final = 200
LARGE_IMAGE_PX: Final = 300

BASE_CONFIDENCE: Final = 0.3

_TIME = re.compile(r"\d+\s*(?:minutes?|mins?|hours?|hrs?|h|m)(?![a-z])", re.IGNORECASE)


def _title(soup: BeautifulSoup) -> str | None:
    for tag in ("h1", "title"):
        text = node_text(soup.find(tag))
        if text:
            return text
    return None


def _meta_content(soup: BeautifulSoup, *keys: str) -> str | None:
    for key in keys:
        for attr in ("property", "name"):
            meta = soup.find("meta", attrs={attr: key})
            if meta and meta.get("content"):
                return str(meta["content"]).strip()
    return None


def _pixels(value: object) -> int:
    match = re.match(r"\s*(\d+)", str(value or ""))
    return int(match.group(1)) if match else 0


def _image_score(img: Tag) -> int:
    hints = " ".join(
        [*img.get("class", []), str(img.get("id", "")), str(img.get("alt", ""))]
    ).lower()
    score = 2 if any(hint in hints for hint in IMAGE_CLASS_HINTS) else 0
    if _pixels(img.get("width")) > LARGE_IMAGE_PX:
        score += 1
    if _pixels(img.get("height")) > LARGE_IMAGE_PX:
        score += 1
    return score


def _image(soup: BeautifulSoup, url: str) -> list[str]:
    meta_image = _meta_content(soup, "og:image", "twitter:image")
    if meta_image:
        return resolve_image_urls(meta_image, url)

    best: Tag | None = None
    best_score = -1
    for img in soup.find_all("img"):
        score = _image_score(img)
        # Strictly greater keeps the first image on ties; plain images score 0.
        if score > best_score and (img.get("src") or img.get("data-src")):
            best, best_score = img, score
    if best is None:
        return []
    return resolve_image_urls(best.get("src") or best.get("data-src"), url)


def _select_lines(soup: BeautifulSoup, selectors: tuple[str, ...]) -> list[str]:
    for selector in selectors:
        lines = [node_text(node) for node in soup.select(selector)]
        lines = [line for line in lines if line]
        if lines:
            return lines
    return []


def _container_lines(soup: BeautifulSoup, selectors: tuple[str, ...]) -> list[str]:
    for selector in selectors:
        container = soup.select_one(selector)
        if container is None:
            continue
        lines = (line.strip() for line in container.get_text("\n").splitlines())
        kept = [
            line for line in lines if MIN_LINE_LENGTH <= len(line) <= MAX_LINE_LENGTH
        ]
        if kept:
            return kept
    return []


def _lines(
    soup: BeautifulSoup,
    selectors: tuple[str, ...],
    containers: tuple[str, ...],
) -> list[str]:
    return _select_lines(soup, selectors) or _container_lines(soup, containers)


def _minutes(soup: BeautifulSoup, selectors: tuple[str, ...]) -> float | None:
    for selector in selectors:
        for node in soup.select(selector):
            attr_value = node.get("datetime") or node.get("content") or ""
            iso = parse_iso8601_duration(str(attr_value))
            if iso is not None:
                return iso
            text = node_text(node)
            match = _TIME.search(text)
            if match:
                return time_to_minutes(text[match.start():])
    return None


def _servings(soup: BeautifulSoup) -> int | None:
    for selector in SERVINGS_SELECTORS:
        node = soup.select_one(selector)
        if node is not None:
            servings = parse_servings(node.get("content") or node_text(node))
            if servings:
                return servings
    return find_servings_phrase(soup.get_text(" "))


def score_confidence(draft: RecipeDraft) -> float:
    """Additive confidence for a heuristic draft."""
    confidence = BASE_CONFIDENCE
    if draft.title:
        confidence += 0.1
    if draft.image_urls:
        confidence += 0.1
    if len(draft.ingredients) > 3:
        confidence += 0.2
    if len(draft.instructions) > 1:
        confidence += 0.2
    if draft.prep_time or draft.cook_time or draft.total_time:
        confidence += 0.1
    return round(min(confidence, 1.0), 2)


def _caption_draft(soup: BeautifulSoup, url: str) -> RecipeDraft | None:
    caption = _meta_content(soup, "og:description", "description")
    parsed = parse_caption(caption)
    if parsed is None or not (parsed.ingredients and parsed.instructions):
        return None
    return RecipeDraft(
        title=parsed.title,
        description=parsed.description,
        ingredients=parsed.ingredients,
        instructions=parsed.instructions,
        prep_time=parsed.prep_minutes,
        cook_time=parsed.cook_minutes,
        image_urls=_image(soup, url),
        category=parsed.category,
        keywords=parsed.tags,
    )


def _is_social(url: str) -> bool:
    return classify_url(url).source_type in SOCIAL_SOURCES


def extract_heuristic(soup: BeautifulSoup, url: str) -> StrategyResult:
    """Extract a recipe from page structure.

    Args:
        soup: Parsed page.
        url: Page URL, used to resolve images and detect social sites.

    Returns:
        A match only when both ingredients and instructions were found.
    """
    draft = RecipeDraft(
        title=_title(soup),
        description=_meta_content(soup, "description", "og:description"),
        ingredients=_lines(soup, INGREDIENT_SELECTORS, INGREDIENT_CONTAINERS),
        instructions=_lines(soup, INSTRUCTION_SELECTORS, INSTRUCTION_CONTAINERS),
        prep_time=_minutes(soup, PREP_TIME_SELECTORS),
        cook_time=_minutes(soup, COOK_TIME_SELECTORS),
        servings=_servings(soup),
        image_urls=_image(soup, url),
    )

    if not draft.has_content and _is_social(url):
        caption_draft = _caption_draft(soup, url)
        if caption_draft is not None:
            logger.debug("Recovered recipe from social caption", url=url)
            draft = caption_draft

    confidence = score_confidence(draft)
    raw = draft.model_dump(exclude_none=True)

    if not draft.has_content:
        return StrategyResult(
            is_recipe=False,
            confidence=confidence,
            reason="No ingredient and instruction lists found in page structure",
            raw=raw,
        )

    return StrategyResult(is_recipe=True, draft=draft, confidence=confidence, raw=raw)
