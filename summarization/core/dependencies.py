"""
FastAPI dependency injection module for the summarization API.

This module provides reusable FastAPI dependencies for configuration access and
the process-wide summarization engine, so endpoint handlers stay decoupled from
how the engine and its time-series supplier are built.

Key Dependencies Provided:
- get_settings_dependency: Returns the cached Settings singleton
- get_engine: Returns the cached SummarizationEngine singleton
- SettingsDep: Type alias for injecting Settings into endpoints
- EngineDep: Type alias for injecting the engine into endpoints

Usage Examples:
    @router.post("/summaries")
    async def create_summaries(
        request: SummarizationRequest,
        engine: EngineDep,
    ) -> List[SummaryGroup]:
        return await engine.summaries(request.to_config(), request.kinds)

    # In tests
    app.dependency_overrides[get_engine] = lambda: stub_engine
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from summarization.core.config import Settings, get_settings
from summarization.services.data_source import (
    InMemoryTimeSeriesSource,
    PostgresTimeSeriesSource,
    TimeSeriesSource,
)
from summarization.services.engine import SummarizationEngine


# =============================================================================
# Settings Dependency
# =============================================================================

def get_settings_dependency() -> Settings:
    """
    Return the Settings singleton instance.

    This is a thin wrapper around get_settings() to enable FastAPI's
    dependency override mechanism for testing.
    """
    return get_settings()


# =============================================================================
# Engine Dependency
# =============================================================================

@lru_cache()
def get_engine() -> SummarizationEngine:
    """
    Return the process-wide summarization engine.

    The time-series supplier is chosen from settings: Postgres when
    DATABASE_URL is configured, an empty in-memory supplier otherwise.
    The engine (and therefore its cache) lives until the process ends or
    reset() is called.
    """
    settings = get_settings()

    source: TimeSeriesSource
    if settings.database_url:
        source = PostgresTimeSeriesSource(table=settings.time_series_table)
    else:
        source = InMemoryTimeSeriesSource({})

    return SummarizationEngine(source)


# =============================================================================
# Type Aliases for Dependency Injection
# =============================================================================

# Usage: async def endpoint(settings: SettingsDep)
SettingsDep = Annotated[Settings, Depends(get_settings_dependency)]

# Usage: async def endpoint(engine: EngineDep)
EngineDep = Annotated[SummarizationEngine, Depends(get_engine)]
