"""Mappers between drafts, canonical recipes and stored rows."""

from recipe_extractor.mappers.recipe import (
    build_recipe_from_draft,
    build_recipe_row,
    map_row_to_recipe,
)


__all__ = [
    "build_recipe_from_draft",
    "build_recipe_row",
    "map_row_to_recipe",
]
