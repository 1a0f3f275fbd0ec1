"""Recipe extraction orchestrator.

Runs the registered strategies strictly in priority order against one
URL. Every strategy yields an ``ExtractionAttempt``; the first strategy
that reports a structural match ends the run and later strategies are
never invoked. Strategy failures, fetch failures included, are recorded
and never propagate.
"""

from __future__ import annotations

import traceback
from typing import TYPE_CHECKING

from recipe_extractor.observability.logging import get_logger
from recipe_extractor.schemas.recipe import ErrorInfo, ExtractionAttempt
from recipe_extractor.services.classification import classify_url
from recipe_extractor.services.extraction.exceptions import (
    ExtractionExhaustedError,
    InvalidExtractionRequestError,
)
from recipe_extractor.services.extraction.fetcher import PageSession
from recipe_extractor.services.extraction.models import (
    ExtractionOutcome,
    StrategyResult,
)
from recipe_extractor.services.extraction.strategies import STRATEGIES


if TYPE_CHECKING:
    from collections.abc import Sequence

    from recipe_extractor.services.extraction.fetcher import PageFetcher
    from recipe_extractor.services.extraction.strategies import StrategyDescriptor


logger = get_logger(__name__)

EXHAUSTED_MESSAGE = "Could not extract a recipe from this page"
STRUCTURAL_MISMATCH = "StructuralMismatch"


class RecipeExtractionService:
    """Service for extracting recipe drafts from URLs.

    Example:
        ```python
        fetcher = PageFetcher()
        await fetcher.initialize()
        service = RecipeExtractionService(fetcher)

        outcome = await service.extract("https://example.com/recipe")
        print(outcome.method, outcome.confidence, outcome.draft.title)
        ```
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        strategies: Sequence[StrategyDescriptor] = STRATEGIES,
    ) -> None:
        self._fetcher = fetcher
        self._strategies = tuple(strategies)

    @property
    def strategy_names(self) -> list[str]:
        return [descriptor.name for descriptor in self._strategies]

    async def extract(self, url: str, *, debug: bool = False) -> ExtractionOutcome:
        """Run the strategy chain against ``url``.

        Args:
            url: Page to extract from.
            debug: Keep raw strategy payloads and stack traces in attempts.

        Returns:
            The outcome of the first strategy that found a recipe.

        Raises:
            InvalidExtractionRequestError: If the URL is not http(s).
            ExtractionExhaustedError: If no strategy found a recipe.
        """
        classification = classify_url(url)
        if not classification.is_valid:
            msg = f"Invalid URL: {url!r}"
            raise InvalidExtractionRequestError(msg)

        # Fetch exactly what was submitted; the cleaned URL is stored only.
        target_url = url.strip()
        source_url = classification.cleaned_url or target_url
        if classification.is_low_confidence:
            logger.warning(
                "URL is not a known recipe source, extraction accuracy may be reduced",
                url=source_url,
                source_type=classification.source_type,
            )

        session = PageSession(self._fetcher, target_url)
        attempts: list[ExtractionAttempt] = []

        for descriptor in self._strategies:
            attempt, result = await self._run_strategy(descriptor, session, debug=debug)
            attempts.append(attempt)

            if result is not None and result.is_recipe and result.draft is not None:
                logger.info(
                    "Recipe extracted",
                    url=source_url,
                    method=descriptor.name,
                    confidence=attempt.confidence,
                )
                return ExtractionOutcome(
                    draft=result.draft,
                    method=descriptor.name,
                    confidence=attempt.confidence,
                    source_url=source_url,
                    classification=classification,
                    attempts=attempts,
                )

        logger.warning(
            "All extraction strategies failed",
            url=source_url,
            attempts=len(attempts),
        )
        raise ExtractionExhaustedError(EXHAUSTED_MESSAGE, attempts=attempts)

    async def _run_strategy(
        self,
        descriptor: StrategyDescriptor,
        session: PageSession,
        *,
        debug: bool,
    ) -> tuple[ExtractionAttempt, StrategyResult | None]:
        """Run one strategy and describe what happened.

        Returns the attempt record and the strategy result, or None for the
        result when the strategy raised.
        """
        try:
            soup = await session.soup()
            result = descriptor.extract(soup, session.url)
        except Exception as e:
            logger.warning(
                "Extraction strategy failed",
                method=descriptor.name,
                url=session.url,
                error_type=type(e).__name__,
                error=str(e),
            )
            error = ErrorInfo(
                name=type(e).__name__,
                message=str(e),
                stack=traceback.format_exc() if debug else None,
            )
            return (
                ExtractionAttempt(method=descriptor.name, success=False, error=error),
                None,
            )

        if result.is_recipe:
            attempt = ExtractionAttempt(
                method=descriptor.name,
                success=True,
                confidence=descriptor.confidence_for(result),
                data=result.raw if debug else None,
            )
        else:
            logger.debug(
                "Strategy found no recipe",
                method=descriptor.name,
                url=session.url,
                reason=result.reason,
            )
            attempt = ExtractionAttempt(
                method=descriptor.name,
                success=False,
                confidence=result.confidence,
                error=ErrorInfo(
                    name=STRUCTURAL_MISMATCH,
                    message=result.reason or "No recipe found",
                ),
                data=result.raw if debug else None,
            )
        return attempt, result
