"""
Enumeration definitions for the summarization engine.

All enums inherit from both `str` and `Enum` to ensure JSON serialization
compatibility with Pydantic models, enabling automatic serialization and
deserialization in API requests and responses.
"""

from enum import Enum


class SummarizerKind(str, Enum):
    """
    Closed set of summarizers that produce summary groups.

    The engine dispatches on this enum explicitly; adding a member without a
    matching branch in SummarizationEngine.service() fails with ConfigError.

    - weekday_weekend_relative: Are weekday and weekend values alike?
    - trend_weekly_elaboration: Per-week direction and rate of change
    - trend_weekly_comparison_average: Adjacent-week comparison of means
    - trend_weekly_comparison_rate: Adjacent-week comparison of gradients
    """
    WEEKDAY_WEEKEND_RELATIVE = "weekday_weekend_relative"
    TREND_WEEKLY_ELABORATION = "trend_weekly_elaboration"
    TREND_WEEKLY_COMPARISON_AVERAGE = "trend_weekly_comparison_average"
    TREND_WEEKLY_COMPARISON_RATE = "trend_weekly_comparison_rate"


class TrapezoidShape(str, Enum):
    """
    Shapes of the trapezoid membership family.

    - symmetric: four breakpoints a <= b <= c <= d; rises on [a, b], plateau
      on [b, c], falls on [c, d]
    - left_shoulder: two breakpoints a <= b; degree 1 below a, falls to 0 at b
    - right_shoulder: two breakpoints a <= b; degree 0 below a, rises to 1 at b
    """
    SYMMETRIC = "symmetric"
    LEFT_SHOULDER = "left_shoulder"
    RIGHT_SHOULDER = "right_shoulder"


class TrendDirection(str, Enum):
    """
    Direction of a linear trend, as used in summary text.

    A zero gradient counts as increasing.
    """
    INCREASING = "increasing"
    DECREASING = "decreasing"

    @classmethod
    def of(cls, gradient: float) -> "TrendDirection":
        return cls.INCREASING if gradient >= 0 else cls.DECREASING

    @property
    def past_tense(self) -> str:
        return "increased" if self is TrendDirection.INCREASING else "decreased"
