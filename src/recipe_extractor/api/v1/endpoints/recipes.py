"""Saved recipe endpoints.

Provides:
- GET /recipes for listing a user's saved recipes
- GET /recipes/{recipeId} for one saved recipe
- DELETE /recipes/{recipeId} for removing a saved recipe
- GET /recipes/{recipeId}/scaled for a copy scaled to other servings

Every route is scoped to the ``userId`` query parameter.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Response, status

from recipe_extractor.api.dependencies import get_recipe_repository
from recipe_extractor.core.exceptions import NotFoundException
from recipe_extractor.database.repositories.recipes import (
    RecipeRepository,  # noqa: TC001
)
from recipe_extractor.mappers import map_row_to_recipe
from recipe_extractor.observability.logging import get_logger
from recipe_extractor.schemas import Recipe, RecipeListResponse
from recipe_extractor.services.scaling import scale_recipe


logger = get_logger(__name__)

router = APIRouter(prefix="/recipes", tags=["Recipes"])

UserId = Annotated[
    str,
    Query(alias="userId", min_length=1, description="Owner of the recipes"),
]
RecipeId = Annotated[str, Path(alias="recipeId", min_length=1)]


async def _get_owned(
    repository: RecipeRepository,
    recipe_id: str,
    user_id: str,
) -> Recipe:
    row = await repository.get(recipe_id, user_id)
    if row is None:
        raise NotFoundException("Recipe", recipe_id)
    return map_row_to_recipe(row)


@router.get(
    "",
    response_model=RecipeListResponse,
    summary="List saved recipes",
)
async def list_recipes(
    user_id: UserId,
    repository: Annotated[RecipeRepository, Depends(get_recipe_repository)],
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> RecipeListResponse:
    """List the user's recipes, newest first."""
    rows = await repository.list_for_user(user_id, limit=limit, offset=offset)
    recipes = [map_row_to_recipe(row) for row in rows]
    return RecipeListResponse(
        recipes=recipes,
        count=len(recipes),
        limit=limit,
        offset=offset,
    )


@router.get(
    "/{recipeId}",
    response_model=Recipe,
    summary="Get a saved recipe",
    responses={404: {"description": "Recipe not found"}},
)
async def get_recipe(
    recipe_id: RecipeId,
    user_id: UserId,
    repository: Annotated[RecipeRepository, Depends(get_recipe_repository)],
) -> Recipe:
    """Return one of the user's recipes."""
    return await _get_owned(repository, recipe_id, user_id)


@router.delete(
    "/{recipeId}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a saved recipe",
    responses={404: {"description": "Recipe not found"}},
)
async def delete_recipe(
    recipe_id: RecipeId,
    user_id: UserId,
    repository: Annotated[RecipeRepository, Depends(get_recipe_repository)],
) -> Response:
    """Delete one of the user's recipes."""
    if not await repository.delete(recipe_id, user_id):
        raise NotFoundException("Recipe", recipe_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{recipeId}/scaled",
    response_model=Recipe,
    summary="Scale a saved recipe",
    description=(
        "Returns a copy of the recipe with ingredient quantities and times "
        "scaled to the requested servings. The stored recipe is unchanged."
    ),
    responses={404: {"description": "Recipe not found"}},
)
async def get_scaled_recipe(
    recipe_id: RecipeId,
    user_id: UserId,
    servings: Annotated[int, Query(ge=1, le=100)],
    repository: Annotated[RecipeRepository, Depends(get_recipe_repository)],
) -> Recipe:
    """Return a scaled copy of one of the user's recipes."""
    recipe = await _get_owned(repository, recipe_id, user_id)
    logger.debug(
        "Scaling recipe",
        recipe_id=recipe_id,
        servings=recipe.servings,
        target_servings=servings,
    )
    return scale_recipe(recipe, servings)
