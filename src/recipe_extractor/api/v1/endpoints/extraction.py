"""Recipe extraction endpoints.

Provides:
- POST /extract (alias POST /recipe-extractor) to extract, save and return
  a recipe from a URL
- POST /classify to classify a URL without fetching it
"""

from __future__ import annotations

import traceback
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import ORJSONResponse

from recipe_extractor.api.dependencies import (
    STORAGE_UNAVAILABLE_MESSAGE,
    get_extraction_service,
    get_optional_recipe_repository,
)
from recipe_extractor.core.config import get_settings
from recipe_extractor.core.exceptions import ServiceUnavailableException
from recipe_extractor.database.repositories.recipes import (
    RecipeRepository,  # noqa: TC001
)
from recipe_extractor.mappers import (
    build_recipe_from_draft,
    build_recipe_row,
    map_row_to_recipe,
)
from recipe_extractor.observability.logging import bind_context, get_logger
from recipe_extractor.schemas import (
    ClassificationResponse,
    ClassifyRequest,
    ErrorInfo,
    ExtractionAttempt,
    ExtractionFailureResponse,
    ExtractionSuccessResponse,
    ExtractRequest,
)
from recipe_extractor.services.classification import classify_url
from recipe_extractor.services.classification.constants import (
    LOW_CONFIDENCE_WARNING,
)
from recipe_extractor.services.extraction.exceptions import (
    ExtractionExhaustedError,
    InvalidExtractionRequestError,
    RecipePersistenceError,
)
from recipe_extractor.services.extraction.service import (
    RecipeExtractionService,  # noqa: TC001
)


logger = get_logger(__name__)

router = APIRouter(tags=["Extraction"])

MISSING_FIELDS_MESSAGE = "Both url and userId are required"
PERSISTENCE_FAILED_MESSAGE = "Recipe was extracted but could not be saved"
UNEXPECTED_FAILURE_MESSAGE = "An unexpected error occurred during extraction"


def _json(model: Any, status_code: int = status.HTTP_200_OK) -> ORJSONResponse:
    return ORJSONResponse(
        status_code=status_code,
        content=model.model_dump(mode="json", exclude_none=True),
    )


def _failure(
    status_code: int,
    message: str,
    *,
    attempts: list[ExtractionAttempt] | None = None,
    suggestion: str | None = None,
    exc: Exception | None = None,
    debug: bool = False,
) -> ORJSONResponse:
    error = None
    if exc is not None and debug:
        error = ErrorInfo(
            name=type(exc).__name__,
            message=str(exc),
            stack="".join(traceback.format_exception(exc)),
        )
    body = ExtractionFailureResponse(
        message=message,
        suggestion=suggestion,
        extraction_results=attempts,
        error=error,
    )
    return _json(body, status_code)


EXTRACT_RESPONSES: dict[int | str, dict[str, Any]] = {
    200: {"model": ExtractionSuccessResponse},
    400: {"model": ExtractionFailureResponse, "description": "Missing url or userId"},
    422: {
        "model": ExtractionFailureResponse,
        "description": "No strategy found a recipe; diagnostics included",
    },
    500: {"model": ExtractionFailureResponse, "description": "Saving failed"},
    503: {"description": STORAGE_UNAVAILABLE_MESSAGE},
}


@router.post(
    "/extract",
    summary="Extract a recipe from a URL",
    description=(
        "Fetches the page, runs the Schema.org, JSON-LD and heuristic "
        "strategies in order, saves the first recipe found for the user and "
        "returns it. Pass debug=true in the body or query for diagnostics."
    ),
    responses=EXTRACT_RESPONSES,
)
@router.post(
    "/recipe-extractor",
    include_in_schema=False,
)
async def extract_recipe(
    extraction_service: Annotated[
        RecipeExtractionService, Depends(get_extraction_service)
    ],
    repository: Annotated[
        RecipeRepository | None, Depends(get_optional_recipe_repository)
    ],
    request_body: ExtractRequest | None = None,
    debug_query: Annotated[bool, Query(alias="debug")] = False,
) -> ORJSONResponse:
    """Extract, save and return a recipe.

    Args:
        extraction_service: Strategy orchestrator.
        repository: Storage for the extracted recipe, None without a database.
        request_body: ``{url, userId, debug?}``.
        debug_query: ``?debug=true``, equivalent to ``debug`` in the body.

    Returns:
        200 with the saved recipe, 400 for a missing field, 422 when no
        strategy matched, 500 when saving failed, 503 without storage.
    """
    body = request_body or ExtractRequest()
    debug = debug_query or body.debug
    url = (body.url or "").strip()
    user_id = (body.user_id or "").strip()

    if not url or not user_id:
        logger.warning(
            "Extraction request missing fields",
            has_url=bool(url),
            has_user_id=bool(user_id),
        )
        return _failure(status.HTTP_400_BAD_REQUEST, MISSING_FIELDS_MESSAGE)

    if repository is None:
        raise ServiceUnavailableException(STORAGE_UNAVAILABLE_MESSAGE)

    bind_context(user_id=user_id)
    logger.info("Extracting recipe", url=url, debug=debug)

    try:
        outcome = await extraction_service.extract(url, debug=debug)
    except InvalidExtractionRequestError as e:
        return _failure(status.HTTP_400_BAD_REQUEST, str(e))
    except ExtractionExhaustedError as e:
        return _failure(
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            e.message,
            attempts=e.attempts,
            suggestion=get_settings().extraction.failure_suggestion,
        )
    except Exception as e:
        logger.opt(exception=e).error("Extraction failed unexpectedly", url=url)
        return _failure(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            UNEXPECTED_FAILURE_MESSAGE,
            exc=e,
            debug=debug,
        )

    try:
        recipe = build_recipe_from_draft(
            outcome.draft,
            method=outcome.method,
            confidence=outcome.confidence,
            source_url=outcome.source_url,
        )
        if not recipe.is_persistable:
            msg = "Recipe needs at least one ingredient and one instruction"
            raise RecipePersistenceError(msg)
        stored = await repository.create(build_recipe_row(recipe, user_id))
        saved = map_row_to_recipe(stored)
    except RecipePersistenceError as e:
        return _failure(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            PERSISTENCE_FAILED_MESSAGE,
            attempts=outcome.attempts,
            exc=e,
            debug=debug,
        )
    except Exception as e:
        logger.opt(exception=e).error("Saving extracted recipe failed", url=url)
        return _failure(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            UNEXPECTED_FAILURE_MESSAGE,
            attempts=outcome.attempts,
            exc=e,
            debug=debug,
        )

    logger.info(
        "Recipe saved",
        recipe_id=saved.id,
        method=outcome.method,
        confidence=outcome.confidence,
    )

    return _json(
        ExtractionSuccessResponse(
            data=saved,
            method=outcome.method,
            confidence=outcome.confidence,
            extraction_results=outcome.attempts if debug else None,
        )
    )


@router.post(
    "/classify",
    response_model=ClassificationResponse,
    response_model_exclude_none=True,
    summary="Classify a URL",
    description="Reports the source type and confidence tier of a URL "
    "without fetching it.",
)
async def classify(request_body: ClassifyRequest) -> ClassificationResponse:
    """Classify a URL. Advisory only; extraction is attempted regardless."""
    result = classify_url(request_body.url)
    return ClassificationResponse(
        is_valid=result.is_valid,
        source_type=result.source_type,
        confidence_tier=result.confidence_tier,
        hostname=result.hostname,
        cleaned_url=result.cleaned_url,
        instagram_post_id=result.instagram_post_id,
        warning=LOW_CONFIDENCE_WARNING if result.is_low_confidence else None,
    )
