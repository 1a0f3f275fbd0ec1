"""PostgreSQL database layer.

This module provides:
- Connection pool management
- The recipe bookmark repository
- Health check utilities
"""

from recipe_extractor.database.connection import (
    check_database_health,
    close_database_pool,
    get_database_pool,
    init_database_pool,
    is_database_available,
)
from recipe_extractor.database.repositories.recipes import RecipeRepository


__all__ = [
    "RecipeRepository",
    "check_database_health",
    "close_database_pool",
    "get_database_pool",
    "init_database_pool",
    "is_database_available",
]
