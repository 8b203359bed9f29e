"""
Time-series suppliers and the data source service.

The data source service is the leaf of every service graph: it awaits the
configured supplier once per distinct config and replays the delivered points
to every downstream service through the shared single-flight cache.

Suppliers:
    - InMemoryTimeSeriesSource: datasets registered in process (tests, demos,
      collaborators that already hold the series)
    - PostgresTimeSeriesSource: rows from a (dataset_id, ts, value) table read
      through the shared asyncpg pool

Both filter by the config's inclusive range of UTC calendar dates and deliver
points in chronological order. The Postgres table stores `ts` as timestamptz.
"""

import logging
import re
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from summarization.core.cache import SingleFlightCache
from summarization.core.database import get_db_pool
from summarization.core.exceptions import ConfigError
from summarization.models.schemas import (
    DataSourceProperties,
    SummarizationConfig,
    SummaryGroup,
    TimeSeriesPoint,
)
from summarization.services.base import SummarizationService
from summarization.utils.time_series import to_utc, utc_day_bounds

logger = logging.getLogger(__name__)

_IDENTIFIER = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$')


# =============================================================================
# Suppliers
# =============================================================================


class TimeSeriesSource(ABC):
    """Supplies the time series selected by a config."""

    @abstractmethod
    async def fetch(self, config: SummarizationConfig) -> List[TimeSeriesPoint]:
        """Return the points of `config.dataset_id` within the config date range."""


def _in_range(
    point: TimeSeriesPoint,
    start: Optional[datetime],
    end: Optional[datetime],
) -> bool:
    moment = to_utc(point.x)
    if start is not None and moment < start:
        return False
    if end is not None and moment >= end:
        return False
    return True


class InMemoryTimeSeriesSource(TimeSeriesSource):
    """
    Supplier backed by datasets held in memory.

    Args:
        datasets: Mapping of dataset id to its points.
    """

    def __init__(self, datasets: Mapping[str, Sequence[TimeSeriesPoint]]) -> None:
        self._datasets: Dict[str, Tuple[TimeSeriesPoint, ...]] = {
            dataset_id: tuple(points) for dataset_id, points in datasets.items()
        }

    def register(self, dataset_id: str, points: Sequence[TimeSeriesPoint]) -> None:
        """
        Add or replace a dataset.

        Summaries already cached for this dataset are not invalidated; call
        SummarizationEngine.reset() after replacing data.
        """
        self._datasets[dataset_id] = tuple(points)

    async def fetch(self, config: SummarizationConfig) -> List[TimeSeriesPoint]:
        if config.dataset_id not in self._datasets:
            raise ConfigError(f"Unknown dataset: {config.dataset_id!r}")

        start, end = utc_day_bounds(config.start_date, config.end_date)
        points = [
            point for point in self._datasets[config.dataset_id]
            if _in_range(point, start, end)
        ]
        return sorted(points, key=lambda point: to_utc(point.x))


class PostgresTimeSeriesSource(TimeSeriesSource):
    """
    Supplier reading a (dataset_id, ts, value) table through asyncpg.

    Args:
        table: Table (optionally schema-qualified) holding the series.

    Raises:
        ConfigError: If `table` is not a plain SQL identifier.
    """

    def __init__(self, table: str = 'time_series_point') -> None:
        if not _IDENTIFIER.match(table):
            raise ConfigError(f"Invalid time series table name: {table!r}")
        self._table = table

    async def fetch(self, config: SummarizationConfig) -> List[TimeSeriesPoint]:
        query = f"""
            SELECT ts, value
            FROM {self._table}
            WHERE dataset_id = $1
              AND ($2::timestamptz IS NULL OR ts >= $2::timestamptz)
              AND ($3::timestamptz IS NULL OR ts < $3::timestamptz)
              AND value IS NOT NULL
            ORDER BY ts ASC
        """

        start, end = utc_day_bounds(config.start_date, config.end_date)
        pool = await get_db_pool()

        async with pool.acquire() as conn:
            rows = await conn.fetch(
                query,
                config.dataset_id,
                start,
                end,
            )

        logger.info(f"Fetched {len(rows)} points for dataset {config.dataset_id!r}")

        return [TimeSeriesPoint(x=row['ts'], y=float(row['value'])) for row in rows]


# =============================================================================
# Data Source Service
# =============================================================================


class DataSourceSummarizationService(SummarizationService[DataSourceProperties]):
    """
    Wraps a TimeSeriesSource as a memoized analytical service.

    Produces no summaries of its own.
    """

    name = 'data_source'
    title = 'Data Source'

    def __init__(
        self,
        source: TimeSeriesSource,
        cache: Optional[SingleFlightCache] = None,
    ) -> None:
        super().__init__(cache)
        self.source = source

    async def create_properties(self, config: SummarizationConfig) -> DataSourceProperties:
        points = await self.source.fetch(config)
        ordered = sorted(points, key=lambda point: to_utc(point.x))
        return DataSourceProperties(points=tuple(ordered))

    async def create_summaries(self, config: SummarizationConfig) -> Tuple[SummaryGroup, ...]:
        return ()
