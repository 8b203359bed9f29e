"""
Pytest Configuration and Shared Fixtures for Summarization Tests.

This module provides fixtures and configuration for all tests, supporting:
- Async test execution with pytest-asyncio
- Daily time-series builders anchored on a Monday
- In-memory supplier and engine fixtures
- Mock database pool fixtures for the Postgres supplier

Dependencies:
- pytest
- pytest-asyncio
"""

import asyncio
from datetime import date, datetime, timedelta
from typing import Callable, List, Sequence
from unittest.mock import AsyncMock, Mock

import pytest

from summarization.models import SummarizationConfig, TimeSeriesPoint
from summarization.services import (
    InMemoryTimeSeriesSource,
    SummarizationEngine,
    TimeSeriesSource,
)


# ============================================================
# CONSTANTS
# ============================================================

# Monday, so day i of a series falls on weekday i % 7
SERIES_START: date = date(2026, 1, 5)


# ============================================================
# SERIES BUILDERS
# ============================================================

def build_daily_series(
    values: Sequence[float],
    start: date = SERIES_START,
) -> List[TimeSeriesPoint]:
    """
    Build one point per day starting at `start` (midnight, naive).

    Args:
        values: y values in chronological order.
        start: Date of the first point.

    Returns:
        List of TimeSeriesPoint, one per value.
    """
    origin = datetime(start.year, start.month, start.day)
    return [
        TimeSeriesPoint(x=origin + timedelta(days=offset), y=float(value))
        for offset, value in enumerate(values)
    ]


@pytest.fixture
def make_series() -> Callable[..., List[TimeSeriesPoint]]:
    """Return the daily series builder for use inside tests."""
    return build_daily_series


@pytest.fixture
def two_week_series() -> List[TimeSeriesPoint]:
    """
    Two flat weeks: 100 in the first week, 106 in the second.

    Weekday and weekend means are both 103, so the weekday/weekend equal
    validity is 1.0 and the weekly averages differ by 6%.
    """
    return build_daily_series([100.0] * 7 + [106.0] * 7)


# ============================================================
# SUPPLIER AND ENGINE FIXTURES
# ============================================================

class CountingSource(TimeSeriesSource):
    """
    In-memory supplier that counts fetches and can hold them open.

    When `release` is cleared, fetch() sets `started` and waits for `release`
    before returning, which lets tests observe in-flight computations. Configs
    whose fetch ran to the end are appended to `completed`; a fetch cancelled
    while waiting sets `cancelled`.
    """

    def __init__(self, points: Sequence[TimeSeriesPoint]) -> None:
        self.points = list(points)
        self.fetch_count = 0
        self.started = asyncio.Event()
        self.release = asyncio.Event()
        self.release.set()
        self.cancelled = asyncio.Event()
        self.completed: List[SummarizationConfig] = []

    async def fetch(self, config: SummarizationConfig) -> List[TimeSeriesPoint]:
        self.fetch_count += 1
        self.started.set()
        try:
            await self.release.wait()
        except asyncio.CancelledError:
            self.cancelled.set()
            raise
        self.completed.append(config)
        return list(self.points)


@pytest.fixture
def in_memory_source(two_week_series: List[TimeSeriesPoint]) -> InMemoryTimeSeriesSource:
    """In-memory supplier holding `two_week_series` under dataset id 'active-users'."""
    return InMemoryTimeSeriesSource({'active-users': two_week_series})


@pytest.fixture
def engine(in_memory_source: InMemoryTimeSeriesSource) -> SummarizationEngine:
    """Engine with a fresh cache over `in_memory_source`."""
    return SummarizationEngine(in_memory_source)


@pytest.fixture
def config() -> SummarizationConfig:
    """Default config for dataset 'active-users'."""
    return SummarizationConfig(dataset_id='active-users')


@pytest.fixture
def counting_source(two_week_series: List[TimeSeriesPoint]) -> CountingSource:
    """CountingSource over `two_week_series`."""
    return CountingSource(two_week_series)


# ============================================================
# DATABASE FIXTURES
# ============================================================

@pytest.fixture
def mock_db_pool() -> AsyncMock:
    """
    Create a mock asyncpg connection pool.

    pool.acquire() returns an async context manager yielding a connection
    whose fetch() returns [] unless a test overrides it:

        conn = mock_db_pool.acquire.return_value.__aenter__.return_value
        conn.fetch.return_value = [{'ts': ..., 'value': 1.0}]
    """
    pool = AsyncMock()

    conn = AsyncMock()
    conn.fetch = AsyncMock(return_value=[])

    # acquire() is a plain call returning an async context manager
    acquire_context = AsyncMock()
    acquire_context.__aenter__ = AsyncMock(return_value=conn)
    acquire_context.__aexit__ = AsyncMock(return_value=None)
    pool.acquire = Mock(return_value=acquire_context)

    pool.close = AsyncMock(return_value=None)

    return pool
