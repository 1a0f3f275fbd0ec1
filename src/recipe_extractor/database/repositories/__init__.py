"""Database repositories."""

from recipe_extractor.database.repositories.recipes import RecipeRepository


__all__ = ["RecipeRepository"]
