"""
Test Suite for Time-Series and Formatting Utilities.

Covers:
- Timestamp to day-number conversion (naive and timezone-aware)
- Weekend detection and UTC day bounds
- Period grouping anchored at the first point
- Point normalisation
- Number and ordinal formatting used in summary text
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from summarization.core.exceptions import InvalidInputError
from summarization.models.schemas import NumericPoint, TimeSeriesPoint
from summarization.utils.commons import normalize_points, normalize_points_y
from summarization.utils.formatters import format_y, ordinal_text
from summarization.utils.time_series import (
    group_by_period,
    is_weekend,
    time_series_point_to_num_point,
    timestamp_to_days,
    to_utc,
    utc_day_bounds,
)


def daily_points(days) -> list:
    return [NumericPoint(x=float(day), y=1.0) for day in days]


class TestTimestampConversion:
    """Timestamps become fractional days since the epoch."""

    def test_epoch_offsets(self) -> None:
        assert timestamp_to_days(datetime(1970, 1, 1)) == 0.0
        assert timestamp_to_days(datetime(1970, 1, 2)) == 1.0
        assert timestamp_to_days(datetime(1970, 1, 2, 12)) == 1.5

    def test_aware_timestamps_are_converted_to_utc(self) -> None:
        plus_two = timezone(timedelta(hours=2))

        days = timestamp_to_days(datetime(1970, 1, 2, tzinfo=plus_two))

        assert days == pytest.approx(1.0 - 2 / 24)

    def test_point_conversion_keeps_value(self) -> None:
        point = TimeSeriesPoint(x=datetime(1970, 1, 11), y=42.0)

        converted = time_series_point_to_num_point(point)

        assert converted.x == 10.0
        assert converted.y == 42.0


class TestIsWeekend:
    """Saturday and Sunday are weekend days."""

    @pytest.mark.parametrize("day,expected", [
        (datetime(2026, 1, 9), False),   # Friday
        (datetime(2026, 1, 10), True),   # Saturday
        (datetime(2026, 1, 11), True),   # Sunday
        (datetime(2026, 1, 12), False),  # Monday
    ])
    def test_weekend_days(self, day: datetime, expected: bool) -> None:
        assert is_weekend(TimeSeriesPoint(x=day, y=0.0)) is expected

    @pytest.mark.parametrize("day,expected", [
        # Saturday 01:00 at UTC+2 is Friday 23:00 UTC
        (datetime(2026, 1, 10, 1, tzinfo=timezone(timedelta(hours=2))), False),
        # Sunday 20:00 at UTC-5 is Monday 01:00 UTC
        (datetime(2026, 1, 11, 20, tzinfo=timezone(timedelta(hours=-5))), False),
        (datetime(2026, 1, 10, tzinfo=timezone.utc), True),
    ])
    def test_weekend_uses_utc_day(self, day: datetime, expected: bool) -> None:
        assert is_weekend(TimeSeriesPoint(x=day, y=0.0)) is expected


class TestUtcDays:
    """One UTC calendar day shared by grouping, weekend detection and filtering."""

    def test_naive_timestamps_are_read_as_utc(self) -> None:
        assert to_utc(datetime(2026, 1, 5, 12)) == datetime(2026, 1, 5, 12, tzinfo=timezone.utc)

    def test_aware_timestamps_are_converted(self) -> None:
        minus_five = timezone(timedelta(hours=-5))

        converted = to_utc(datetime(2026, 1, 5, 22, tzinfo=minus_five))

        assert converted == datetime(2026, 1, 6, 3, tzinfo=timezone.utc)
        assert converted.tzinfo is timezone.utc

    def test_day_bounds_are_half_open(self) -> None:
        start, end = utc_day_bounds(date(2026, 1, 5), date(2026, 1, 11))

        assert start == datetime(2026, 1, 5, tzinfo=timezone.utc)
        assert end == datetime(2026, 1, 12, tzinfo=timezone.utc)

    def test_missing_dates_leave_bounds_open(self) -> None:
        assert utc_day_bounds(None, None) == (None, None)
        assert utc_day_bounds(None, date(2026, 1, 5))[0] is None


class TestGroupByPeriod:
    """Contiguous buckets anchored at the first point."""

    def test_two_full_weeks(self) -> None:
        weeks = group_by_period(daily_points(range(14)), 7)

        assert [len(week) for week in weeks] == [7, 7]
        assert weeks[1][0].x == 7.0

    def test_trailing_partial_week_is_kept(self) -> None:
        weeks = group_by_period(daily_points(range(10)), 7)

        assert [len(week) for week in weeks] == [7, 3]

    def test_anchor_is_first_point_not_calendar_week(self) -> None:
        weeks = group_by_period(daily_points(range(3, 17)), 7)

        assert [week[0].x for week in weeks] == [3.0, 10.0]

    def test_empty_buckets_are_omitted(self) -> None:
        weeks = group_by_period(daily_points(list(range(7)) + list(range(14, 21))), 7)

        assert len(weeks) == 2, "The empty middle week produces no group"
        assert weeks[1][0].x == 14.0

    def test_unsorted_input_is_ordered(self) -> None:
        weeks = group_by_period(daily_points([8, 1, 0, 9, 3]), 7)

        assert [[point.x for point in week] for week in weeks] == [[0, 1, 3], [8, 9]]

    def test_fractional_timestamps(self) -> None:
        points = [NumericPoint(x=0.5 + day, y=1.0) for day in range(8)]

        weeks = group_by_period(points, 7)

        assert [len(week) for week in weeks] == [7, 1]

    def test_empty_input(self) -> None:
        assert group_by_period([], 7) == ()

    def test_non_positive_period_is_rejected(self) -> None:
        with pytest.raises(InvalidInputError):
            group_by_period(daily_points(range(3)), 0)


class TestNormalizePoints:
    """Rescaling to the unit interval."""

    def test_both_axes_rescaled(self) -> None:
        points = [NumericPoint(x=10, y=5), NumericPoint(x=20, y=15), NumericPoint(x=30, y=10)]

        normalized = normalize_points(points)

        assert [point.x for point in normalized] == pytest.approx([0.0, 0.5, 1.0])
        assert [point.y for point in normalized] == pytest.approx([0.0, 1.0, 0.5])

    def test_y_only_keeps_x(self) -> None:
        points = [NumericPoint(x=10, y=5), NumericPoint(x=20, y=15)]

        normalized = normalize_points_y(points)

        assert [point.x for point in normalized] == [10, 20]
        assert [point.y for point in normalized] == pytest.approx([0.0, 1.0])

    def test_constant_values_map_to_zero(self) -> None:
        points = [NumericPoint(x=1, y=7), NumericPoint(x=2, y=7)]

        assert [point.y for point in normalize_points_y(points)] == [0.0, 0.0]

    def test_input_is_not_mutated(self) -> None:
        points = [NumericPoint(x=1, y=7), NumericPoint(x=2, y=9)]

        normalize_points(points)

        assert points == [NumericPoint(x=1, y=7), NumericPoint(x=2, y=9)]


class TestFormatters:
    """Numbers and ordinals embedded in summary text."""

    @pytest.mark.parametrize("value,expected", [
        (6.000000000000005, '6'),
        (6.6667, '6.67'),
        (0.5, '0.5'),
        (150.0, '150'),
        (-0.001, '0'),
        (-2.5, '-2.5'),
    ])
    def test_format_y(self, value: float, expected: str) -> None:
        assert format_y(value) == expected

    @pytest.mark.parametrize("index,expected", [
        (0, 'first'),
        (1, 'second'),
        (11, 'twelfth'),
        (12, '13th'),
        (20, '21st'),
        (21, '22nd'),
        (22, '23rd'),
        (110, '111th'),
    ])
    def test_ordinal_text(self, index: int, expected: str) -> None:
        assert ordinal_text(index) == expected

    def test_negative_ordinal_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            ordinal_text(-1)
