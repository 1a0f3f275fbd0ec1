"""PostgreSQL connection pool management.

The pool is created during application startup when the database is
enabled and closed on shutdown. Without a pool, endpoints that read or
store recipes answer 503.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import asyncpg

from recipe_extractor.core.config import get_settings
from recipe_extractor.observability.logging import get_logger


if TYPE_CHECKING:
    from asyncpg import Pool

logger = get_logger(__name__)

_pool: Pool | None = None


async def init_database_pool() -> Pool:
    """Create the PostgreSQL connection pool and verify it with a query.

    Raises:
        asyncpg.PostgresError: If the first connection check fails.
    """
    global _pool  # noqa: PLW0603

    settings = get_settings()

    logger.info(
        "Initializing database connection pool",
        host=settings.database.host,
        port=settings.database.port,
        database=settings.database.name,
        schema=settings.database.db_schema,
    )

    _pool = await asyncpg.create_pool(
        host=settings.database.host,
        port=settings.database.port,
        database=settings.database.name,
        user=settings.database.user,
        password=settings.DATABASE_PASSWORD or None,
        min_size=settings.database.min_pool_size,
        max_size=settings.database.max_pool_size,
        command_timeout=settings.database.command_timeout,
        ssl=settings.database.ssl if settings.database.ssl else None,
    )

    try:
        async with _pool.acquire() as conn:
            await conn.fetchval("SELECT 1")
    except asyncpg.PostgresError:
        logger.exception("Failed to connect to database")
        raise

    logger.info("Database connection established successfully")
    return _pool


async def close_database_pool() -> None:
    """Close the connection pool if one is open."""
    global _pool  # noqa: PLW0603

    if _pool is None:
        return

    logger.info("Closing database connection pool")
    await _pool.close()
    _pool = None
    logger.info("Database connection pool closed")


def get_database_pool() -> Pool:
    """Return the open connection pool.

    Raises:
        RuntimeError: If the pool has not been initialized.
    """
    if _pool is None:
        msg = "Database pool not initialized. Call init_database_pool() first."
        raise RuntimeError(msg)
    return _pool


def is_database_available() -> bool:
    """Return whether a connection pool is open."""
    return _pool is not None


async def check_database_health() -> str:
    """Probe the database.

    Returns:
        ``"healthy"``, ``"unhealthy"`` or ``"disabled"`` when no pool is open.
    """
    if not is_database_available():
        return "disabled"

    try:
        async with get_database_pool().acquire() as conn:
            await conn.fetchval("SELECT 1")
    except (asyncpg.PostgresError, OSError) as e:
        logger.warning("Database health check failed", error=str(e))
        return "unhealthy"
    return "healthy"
