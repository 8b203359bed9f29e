"""
Async PostgreSQL connection pool module for the time-series supplier.

This module provides an async PostgreSQL connection pool using asyncpg. The pool
is only created when DATABASE_URL is configured; the engine runs against an
in-memory supplier otherwise.

Key Components:
- Global connection pool singleton (_pool)
- init_db(): Initialize the connection pool at application startup
- get_db_pool(): Get the pool instance (initializes if needed)
- close_db(): Gracefully close the pool at application shutdown

Connection Pool Configuration:
- min_size: 1 (minimum idle connections kept in pool)
- max_size: 5 (maximum connections in pool)
- command_timeout: 30 seconds (query timeout)

Usage:
    # At application startup (in FastAPI lifespan)
    await init_db()

    # In the time-series supplier
    pool = await get_db_pool()
    async with pool.acquire() as conn:
        rows = await conn.fetch(query, dataset_id)

    # At application shutdown
    await close_db()
"""

from typing import Optional

import asyncpg
from asyncpg import Pool

from summarization.core.config import get_settings
from summarization.core.exceptions import ConfigError


# =============================================================================
# Global Pool Singleton
# =============================================================================

# Global connection pool instance - None until init_db() is called
_pool: Optional[Pool] = None


# =============================================================================
# Pool Lifecycle Functions
# =============================================================================

async def init_db() -> Pool:
    """
    Initialize the database connection pool.

    If the pool is already initialized, this function returns the existing pool
    without creating a new one (idempotent behavior).

    Returns:
        Pool: The asyncpg connection pool instance.

    Raises:
        ConfigError: If DATABASE_URL is not configured.
        asyncpg.PostgresError: If connection to the database fails.
        OSError: If the database host is unreachable.
    """
    global _pool

    if _pool is None:
        settings = get_settings()

        if not settings.database_url:
            raise ConfigError("DATABASE_URL is not configured")

        _pool = await asyncpg.create_pool(
            dsn=settings.database_url,
            min_size=1,
            max_size=5,
            command_timeout=30,
        )

    return _pool


async def get_db_pool() -> Pool:
    """
    Get the database connection pool, initializing if needed.

    Returns:
        Pool: The asyncpg connection pool instance.

    Raises:
        ConfigError: If DATABASE_URL is not configured.
        asyncpg.PostgresError: If connection to the database fails during lazy init.
    """
    global _pool

    if _pool is None:
        await init_db()

    assert _pool is not None, "Pool should be initialized after init_db()"

    return _pool


async def close_db() -> None:
    """
    Close the database connection pool gracefully.

    This function is idempotent - calling it multiple times or when the pool
    is not initialized has no effect.
    """
    global _pool

    if _pool is not None:
        await _pool.close()
        _pool = None
