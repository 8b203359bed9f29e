"""
Test Suite for Time-Series Suppliers.

Covers:
- InMemoryTimeSeriesSource lookup, inclusive UTC date filtering and ordering
- PostgresTimeSeriesSource query parameters and row conversion (mocked pool)
- Table name validation
- DataSourceSummarizationService delivering ordered points and no summaries
"""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from unittest.mock import AsyncMock, patch

import pytest

from summarization.core.exceptions import ConfigError
from summarization.models import SummarizationConfig, TimeSeriesPoint
from summarization.services import (
    DataSourceSummarizationService,
    InMemoryTimeSeriesSource,
    PostgresTimeSeriesSource,
)


class TestInMemoryTimeSeriesSource:
    """Datasets held in process."""

    @pytest.mark.asyncio
    async def test_unknown_dataset_raises_config_error(self) -> None:
        source = InMemoryTimeSeriesSource({})

        with pytest.raises(ConfigError):
            await source.fetch(SummarizationConfig(dataset_id='missing'))

    @pytest.mark.asyncio
    async def test_date_range_is_inclusive(self, make_series) -> None:
        source = InMemoryTimeSeriesSource({'series': make_series(range(10))})
        config = SummarizationConfig(
            dataset_id='series',
            start_date=date(2026, 1, 6),
            end_date=date(2026, 1, 8),
        )

        points = await source.fetch(config)

        assert [point.y for point in points] == [1.0, 2.0, 3.0]

    @pytest.mark.asyncio
    async def test_date_range_uses_utc_days(self) -> None:
        plus_two = timezone(timedelta(hours=2))
        points = [
            # 2026-01-05 23:00 UTC
            TimeSeriesPoint(x=datetime(2026, 1, 6, 1, tzinfo=plus_two), y=1.0),
            # 2026-01-06 00:00 UTC
            TimeSeriesPoint(x=datetime(2026, 1, 6, 2, tzinfo=plus_two), y=2.0),
            TimeSeriesPoint(x=datetime(2026, 1, 6, 23, 59), y=3.0),
            TimeSeriesPoint(x=datetime(2026, 1, 7, tzinfo=timezone.utc), y=4.0),
        ]
        source = InMemoryTimeSeriesSource({'series': points})
        config = SummarizationConfig(
            dataset_id='series',
            start_date=date(2026, 1, 6),
            end_date=date(2026, 1, 6),
        )

        fetched = await source.fetch(config)

        assert [point.y for point in fetched] == [2.0, 3.0]

    @pytest.mark.asyncio
    async def test_points_are_returned_in_order(self, make_series) -> None:
        points = make_series([1.0, 2.0, 3.0])
        source = InMemoryTimeSeriesSource({'series': list(reversed(points))})

        fetched = await source.fetch(SummarizationConfig(dataset_id='series'))

        assert fetched == points

    @pytest.mark.asyncio
    async def test_register_replaces_dataset(self, make_series) -> None:
        source = InMemoryTimeSeriesSource({'series': make_series([1.0])})

        source.register('series', make_series([5.0, 6.0]))
        fetched = await source.fetch(SummarizationConfig(dataset_id='series'))

        assert [point.y for point in fetched] == [5.0, 6.0]


class TestPostgresTimeSeriesSource:
    """Rows read through the shared asyncpg pool."""

    @pytest.mark.asyncio
    async def test_fetch_passes_config_parameters(self, mock_db_pool: AsyncMock) -> None:
        conn = mock_db_pool.acquire.return_value.__aenter__.return_value
        conn.fetch.return_value = [
            {'ts': datetime(2026, 1, 5, tzinfo=timezone.utc), 'value': Decimal('12.5')},
            {'ts': datetime(2026, 1, 6, tzinfo=timezone.utc), 'value': 14},
        ]
        config = SummarizationConfig(
            dataset_id='active-users',
            start_date=date(2026, 1, 5),
            end_date=date(2026, 1, 31),
        )

        with patch('summarization.services.data_source.get_db_pool',
                   return_value=mock_db_pool):
            points = await PostgresTimeSeriesSource().fetch(config)

        args = conn.fetch.call_args.args
        assert 'FROM time_series_point' in args[0]
        assert args[1:] == (
            'active-users',
            datetime(2026, 1, 5, tzinfo=timezone.utc),
            datetime(2026, 2, 1, tzinfo=timezone.utc),
        ), (
            f"Unexpected query parameters: {args[1:]}"
        )
        assert points == [
            TimeSeriesPoint(x=datetime(2026, 1, 5, tzinfo=timezone.utc), y=12.5),
            TimeSeriesPoint(x=datetime(2026, 1, 6, tzinfo=timezone.utc), y=14.0),
        ]

    @pytest.mark.asyncio
    async def test_open_range_passes_nulls(self, mock_db_pool: AsyncMock) -> None:
        conn = mock_db_pool.acquire.return_value.__aenter__.return_value

        with patch('summarization.services.data_source.get_db_pool',
                   return_value=mock_db_pool):
            points = await PostgresTimeSeriesSource('analytics.daily_metric').fetch(
                SummarizationConfig(dataset_id='active-users')
            )

        args = conn.fetch.call_args.args
        assert 'FROM analytics.daily_metric' in args[0]
        assert args[2] is None and args[3] is None
        assert points == []

    @pytest.mark.parametrize("table", [
        'points; DROP TABLE users',
        '1points',
        'a.b.c',
        '',
    ])
    def test_invalid_table_names_are_rejected(self, table: str) -> None:
        with pytest.raises(ConfigError):
            PostgresTimeSeriesSource(table)


class TestDataSourceService:
    """Leaf service of every graph."""

    @pytest.mark.asyncio
    async def test_properties_hold_ordered_points(self, make_series) -> None:
        points = make_series([3.0, 1.0, 2.0])
        service = DataSourceSummarizationService(
            InMemoryTimeSeriesSource({'series': points[::-1]})
        )

        properties = await service.properties({'dataset_id': 'series'})

        assert list(properties.points) == points

    @pytest.mark.asyncio
    async def test_produces_no_summaries(self, make_series) -> None:
        service = DataSourceSummarizationService(
            InMemoryTimeSeriesSource({'series': make_series([1.0])})
        )

        assert await service.summaries({'dataset_id': 'series'}) == ()
