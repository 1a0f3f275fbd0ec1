"""Source-classification tables."""

from __future__ import annotations

import re
from typing import Final

from recipe_extractor.schemas.enums import ConfidenceTier, SourceType


# Checked in order against the hostname; the first match wins.
SOCIAL_HOST_PATTERNS: Final[tuple[tuple[SourceType, re.Pattern[str]], ...]] = (
    (SourceType.INSTAGRAM, re.compile(r"(^|\.)instagram\.com$|(^|\.)instagr\.am$")),
    (SourceType.FACEBOOK, re.compile(r"(^|\.)facebook\.com$|(^|\.)fb\.watch$")),
    (SourceType.TWITTER, re.compile(r"(^|\.)twitter\.com$|(^|\.)x\.com$")),
    (SourceType.PINTEREST, re.compile(r"(^|\.)pinterest\.[a-z.]+$|(^|\.)pin\.it$")),
    (SourceType.TIKTOK, re.compile(r"(^|\.)tiktok\.com$")),
    (SourceType.YOUTUBE, re.compile(r"(^|\.)youtube\.com$|(^|\.)youtu\.be$")),
)

RECIPE_DOMAINS: Final = (
    "allrecipes.com",
    "foodnetwork.com",
    "cooking.nytimes.com",
    "food.com",
    "epicurious.com",
    "tasty.co",
    "delish.com",
    "foodandwine.com",
    "cookinglight.com",
    "eatingwell.com",
    "simplyrecipes.com",
    "tasteofhome.com",
    "food52.com",
    "bonappetit.com",
    "cookstr.com",
    "seriouseats.com",
    "taste.com.au",
    "thekitchn.com",
    "bbcgoodfood.com",
    "budgetbytes.com",
    "smittenkitchen.com",
    "minimalistbaker.com",
    "pinchofyum.com",
    "halfbakedharvest.com",
    "sallysbakingaddiction.com",
    "kingarthurbaking.com",
    "marthastewart.com",
    "myrecipes.com",
    "bettycrocker.com",
    "recipetineats.com",
    "cookieandkate.com",
    "loveandlemons.com",
)

CONFIDENCE_TIERS: Final[dict[SourceType, ConfidenceTier]] = {
    SourceType.INSTAGRAM: ConfidenceTier.HIGH,
    SourceType.FACEBOOK: ConfidenceTier.MEDIUM,
    SourceType.TWITTER: ConfidenceTier.MEDIUM,
    SourceType.PINTEREST: ConfidenceTier.MEDIUM,
    SourceType.TIKTOK: ConfidenceTier.MEDIUM,
    SourceType.YOUTUBE: ConfidenceTier.MEDIUM,
    SourceType.RECIPE_WEBSITE: ConfidenceTier.HIGH,
    SourceType.GENERAL_WEBSITE: ConfidenceTier.LOW,
}

SOCIAL_SOURCES: Final = frozenset(source for source, _ in SOCIAL_HOST_PATTERNS)

TRACKING_PARAMS: Final = frozenset(
    {
        "utm_source",
        "utm_medium",
        "utm_campaign",
        "utm_term",
        "utm_content",
        "fbclid",
        "ref",
        "source",
        "medium",
        "campaign",
    }
)

INSTAGRAM_POST_PATTERNS: Final = (
    re.compile(r"instagram\.com/p/([^/?#]+)", re.IGNORECASE),
    re.compile(r"instagram\.com/reels?/([^/?#]+)", re.IGNORECASE),
    re.compile(r"instagram\.com/stories/[^/]+/([^/?#]+)", re.IGNORECASE),
)

LOW_CONFIDENCE_WARNING: Final = (
    "This site is not a known recipe source; extraction accuracy may be reduced."
)
