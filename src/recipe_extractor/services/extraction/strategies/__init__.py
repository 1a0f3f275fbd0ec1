"""Extraction strategies and their priority-ordered registry."""

from __future__ import annotations

from typing import Final

from recipe_extractor.schemas.enums import ExtractionMethod
from recipe_extractor.services.extraction.strategies.base import StrategyDescriptor
from recipe_extractor.services.extraction.strategies.heuristic import extract_heuristic
from recipe_extractor.services.extraction.strategies.jsonld import extract_jsonld
from recipe_extractor.services.extraction.strategies.schema_org import (
    extract_schema_org,
)


# Tried in this order; the first structural match wins.
STRATEGIES: Final[tuple[StrategyDescriptor, ...]] = (
    StrategyDescriptor(
        name=ExtractionMethod.SCHEMA_ORG.value,
        confidence=0.9,
        extract=extract_schema_org,
    ),
    StrategyDescriptor(
        name=ExtractionMethod.JSON_LD.value,
        confidence=0.85,
        extract=extract_jsonld,
    ),
    StrategyDescriptor(
        name=ExtractionMethod.HEURISTIC.value,
        confidence=None,
        extract=extract_heuristic,
    ),
)


__all__ = [
    "STRATEGIES",
    "StrategyDescriptor",
    "extract_heuristic",
    "extract_jsonld",
    "extract_schema_org",
]
