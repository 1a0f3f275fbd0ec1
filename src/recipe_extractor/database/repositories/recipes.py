"""Recipe bookmark repository.

Rows live in the ``recipes`` table of the configured schema. The table is
provisioned outside this service and is expected to carry the columns
listed in ``recipe_extractor.mappers.recipe.RECIPE_COLUMNS`` plus
``created_at`` and ``updated_at`` timestamps defaulting to ``now()``.
Every read and delete is scoped to the owning user.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import asyncpg

from recipe_extractor.core.config import get_settings
from recipe_extractor.database.connection import get_database_pool
from recipe_extractor.mappers.recipe import RECIPE_COLUMNS
from recipe_extractor.observability.logging import get_logger
from recipe_extractor.services.extraction.exceptions import RecipePersistenceError


if TYPE_CHECKING:
    from asyncpg import Pool, Record


logger = get_logger(__name__)


class RecipeRepository:
    """Data access for stored recipe bookmarks.

    Uses raw asyncpg queries. Rows are returned as plain dicts so the
    mapper can treat stored rows and ad-hoc payloads the same way.
    """

    def __init__(self, pool: Pool | None = None, schema: str | None = None) -> None:
        """Initialize repository with optional connection pool.

        Args:
            pool: asyncpg connection pool. If None, uses global pool.
            schema: Database schema. Defaults to ``database.db_schema``.
        """
        self._pool = pool
        self._schema = schema or get_settings().database.db_schema

    @property
    def pool(self) -> Pool:
        """Get the database connection pool."""
        if self._pool is not None:
            return self._pool
        return get_database_pool()

    @property
    def table(self) -> str:
        """Schema-qualified table name."""
        return f'"{self._schema}".recipes'

    async def create(self, row: dict[str, Any]) -> dict[str, Any]:
        """Insert a recipe row and return the stored row.

        Args:
            row: Payload from ``build_recipe_row``.

        Raises:
            RecipePersistenceError: If the insert fails.
        """
        columns = [column for column in RECIPE_COLUMNS if column in row]
        placeholders = ", ".join(f"${i}" for i in range(1, len(columns) + 1))
        query = f"""
            INSERT INTO {self.table} ({", ".join(columns)})
            VALUES ({placeholders})
            RETURNING *
        """  # noqa: S608

        try:
            async with self.pool.acquire() as conn:
                stored = await conn.fetchrow(query, *(row[c] for c in columns))
        except (asyncpg.PostgresError, OSError) as e:
            logger.error(
                "Failed to store recipe",
                recipe_id=row.get("id"),
                user_id=row.get("user_id"),
                error=str(e),
            )
            msg = f"Failed to store recipe: {e}"
            raise RecipePersistenceError(msg) from e

        if stored is None:
            msg = "Insert returned no row"
            raise RecipePersistenceError(msg)

        logger.info(
            "Stored recipe", recipe_id=row.get("id"), user_id=row.get("user_id")
        )
        return self._to_dict(stored)

    async def get(self, recipe_id: str, user_id: str) -> dict[str, Any] | None:
        """Fetch one recipe owned by ``user_id``.

        Returns:
            The row, or None if absent or owned by someone else.
        """
        query = f"""
            SELECT * FROM {self.table}
            WHERE id = $1 AND user_id = $2
        """  # noqa: S608

        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(query, recipe_id, user_id)

        return self._to_dict(row) if row is not None else None

    async def list_for_user(
        self,
        user_id: str,
        limit: int = 20,
        offset: int = 0,
    ) -> list[dict[str, Any]]:
        """List a user's recipes, newest first."""
        query = f"""
            SELECT * FROM {self.table}
            WHERE user_id = $1
            ORDER BY created_at DESC
            LIMIT $2 OFFSET $3
        """  # noqa: S608

        async with self.pool.acquire() as conn:
            rows = await conn.fetch(query, user_id, limit, offset)

        return [self._to_dict(row) for row in rows]

    async def delete(self, recipe_id: str, user_id: str) -> bool:
        """Delete a recipe owned by ``user_id``.

        Returns:
            True if a row was deleted.
        """
        query = f"""
            DELETE FROM {self.table}
            WHERE id = $1 AND user_id = $2
            RETURNING id
        """  # noqa: S608

        async with self.pool.acquire() as conn:
            deleted = await conn.fetchval(query, recipe_id, user_id)

        if deleted is not None:
            logger.info("Deleted recipe", recipe_id=recipe_id, user_id=user_id)
        return deleted is not None

    @staticmethod
    def _to_dict(row: Record) -> dict[str, Any]:
        return dict(row.items())
