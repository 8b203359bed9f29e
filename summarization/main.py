"""
FastAPI application entry point for the summarization API.

This module configures logging, registers the API routers and manages the
lifetime of the optional Postgres pool and the engine's cache.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from summarization import __version__
from summarization.api import api_router
from summarization.core.config import get_settings
from summarization.core.database import close_db, init_db
from summarization.core.dependencies import get_engine

# Configure logging
logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Lifespan context manager for FastAPI application startup and shutdown events.

    On startup:
        - Initialize the database connection pool when DATABASE_URL is set
        - Warn when running without a database, since the in-memory supplier
          starts empty

    On shutdown:
        - Cancel in-flight computations and clear the cache
        - Close the database connection pool
    """
    # Startup
    logger.info("Summarization API starting")
    if get_settings().database_url:
        try:
            await init_db()
            logger.info("Database connection pool initialized")
        except Exception as e:
            logger.error(f"Failed to initialize database: {e}")
            # Pool is created lazily on the first Postgres fetch
    else:
        logger.warning(
            "DATABASE_URL not set, using an empty in-memory time-series supplier; "
            "POST /summaries answers 422 until datasets are registered on it"
        )

    yield

    # Shutdown
    logger.info("Summarization API shutting down")
    get_engine().reset()
    try:
        await close_db()
        logger.info("Database connection pool closed")
    except Exception as e:
        logger.error(f"Error closing database pool: {e}")


# Create FastAPI application
app = FastAPI(
    title="Summarization API",
    version=__version__,
    description=(
        "Linguistic summaries of time series: weekday/weekend behaviour, "
        "weekly trends and adjacent-week comparisons."
    ),
    lifespan=lifespan,
)

app.include_router(api_router)


@app.get("/health")
async def health_check():
    """
    Health check endpoint for monitoring and load balancer probes.

    Returns:
        Dict with status 'healthy' and the number of cached slots
    """
    return {"status": "healthy", "cached_slots": len(get_engine().cache)}


# Run with uvicorn when executed directly
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "summarization.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
