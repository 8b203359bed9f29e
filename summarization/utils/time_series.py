"""
Time-series utilities: timestamp conversion, period grouping, weekday split.

Days:
    Every notion of "day" is the UTC calendar day. Timezone-aware timestamps
    are converted to UTC and naive timestamps are taken to be UTC already.
    Week grouping, weekend detection and date-range filtering (in memory and
    in Postgres) all go through to_utc / utc_day_bounds.

Conversion:
    TimeSeriesPoint.x (datetime) becomes NumericPoint.x in fractional days since
    the Unix epoch, so gradients of fitted models read as "units per day".

Grouping:
    group_by_period partitions points into contiguous, non-overlapping buckets
    of `period_length` days anchored at the first point. Buckets are returned
    in chronological order; a trailing partial bucket is kept.
"""

import math
from datetime import date, datetime, time, timedelta, timezone
from typing import List, Optional, Sequence, Tuple

from summarization.core.exceptions import InvalidInputError
from summarization.models.schemas import NumericPoint, TimeSeriesPoint


SECONDS_PER_DAY: float = 86400.0

# Saturday and Sunday in datetime.weekday() numbering
WEEKEND_DAYS = frozenset({5, 6})

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Absorbs float error when a point sits exactly on a bucket boundary
_BOUNDARY_TOLERANCE: float = 1e-9


def to_utc(moment: datetime) -> datetime:
    """Timezone-aware UTC equivalent of `moment`; naive input is read as UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def utc_day_bounds(
    start_date: Optional[date],
    end_date: Optional[date],
) -> Tuple[Optional[datetime], Optional[datetime]]:
    """
    Half-open UTC instants [start, end) covering an inclusive date range.

    Either side is None when the matching date is None (unbounded).

    Example:
        >>> utc_day_bounds(date(2026, 1, 5), date(2026, 1, 5))[1]
        datetime.datetime(2026, 1, 6, 0, 0, tzinfo=datetime.timezone.utc)
    """
    start = (
        datetime.combine(start_date, time.min, tzinfo=timezone.utc)
        if start_date is not None else None
    )
    end = (
        datetime.combine(end_date + timedelta(days=1), time.min, tzinfo=timezone.utc)
        if end_date is not None else None
    )
    return start, end


def timestamp_to_days(moment: datetime) -> float:
    """Fractional days between the Unix epoch and `moment`."""
    return (to_utc(moment) - _EPOCH).total_seconds() / SECONDS_PER_DAY


def time_series_point_to_num_point(point: TimeSeriesPoint) -> NumericPoint:
    return NumericPoint(x=timestamp_to_days(point.x), y=point.y)


def time_series_points_to_num_points(
    points: Sequence[TimeSeriesPoint],
) -> Tuple[NumericPoint, ...]:
    return tuple(time_series_point_to_num_point(point) for point in points)


def is_weekend(point: TimeSeriesPoint) -> bool:
    return to_utc(point.x).weekday() in WEEKEND_DAYS


def group_by_period(
    points: Sequence[NumericPoint],
    period_length: float,
) -> Tuple[Tuple[NumericPoint, ...], ...]:
    """
    Partition points into contiguous buckets of `period_length`.

    Bucket k holds the points with start + k * period_length <= x <
    start + (k + 1) * period_length, where start is the earliest x. Points keep
    their chronological order inside each bucket. Buckets with no points are
    omitted, so the result only contains non-empty groups.

    Args:
        points: Numeric points with x in days.
        period_length: Bucket length in days (7 for weeks). Must be positive.

    Returns:
        Tuple of buckets ordered by bucket start.

    Raises:
        InvalidInputError: Non-positive period length.

    Example:
        >>> daily = [NumericPoint(x=d, y=1.0) for d in range(14)]
        >>> [len(week) for week in group_by_period(daily, 7)]
        [7, 7]
    """
    if not period_length > 0:
        raise InvalidInputError(f"Period length must be positive, got {period_length}")

    if not points:
        return ()

    ordered = sorted(points, key=lambda point: point.x)
    start = ordered[0].x

    buckets: List[List[NumericPoint]] = []
    bucket_indices: List[int] = []

    for point in ordered:
        index = math.floor((point.x - start) / period_length + _BOUNDARY_TOLERANCE)
        if not bucket_indices or bucket_indices[-1] != index:
            bucket_indices.append(index)
            buckets.append([])
        buckets[-1].append(point)

    return tuple(tuple(bucket) for bucket in buckets)
