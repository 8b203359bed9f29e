"""
Pydantic models for the summarization engine.

This module provides type-safe data validation for every entity flowing through
the engine: raw and numeric time-series points, fitted linear models, the
summarizer configuration (which doubles as the cache key), per-service
properties, and the summary groups handed to renderers.

Immutability:
    Every model is declared with `frozen=True`. Properties and summaries are
    therefore never mutated once produced; recomputation always creates new
    instances. Frozen models with tuple fields are hashable, which is what lets
    SummarizationConfig act as a value-equality cache key.

All models use Pydantic v2 syntax with field validation.
"""

from datetime import date, datetime
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from summarization.core.config import get_settings
from summarization.models.enums import SummarizerKind


# =============================================================================
# Time-Series Primitives
# =============================================================================


class TimeSeriesPoint(BaseModel):
    """One observation of the configured metric at a timestamp."""
    model_config = ConfigDict(frozen=True)

    x: datetime = Field(..., description="Observation timestamp")
    y: float = Field(..., description="Observed value")


class NumericPoint(BaseModel):
    """
    Timestamp-normalized point used by the numeric routines.

    `x` is expressed in days (fractional days since the Unix epoch for points
    converted from a TimeSeriesPoint), so gradients read as "per day".
    """
    model_config = ConfigDict(frozen=True)

    x: float
    y: float


class LinearModel(BaseModel):
    """Least-squares fit y = gradient * x + intercept over a point set."""
    model_config = ConfigDict(frozen=True)

    gradient: float
    intercept: float

    def predict(self, x: float) -> float:
        return self.gradient * x + self.intercept


class Decomposition(BaseModel):
    """
    Additive decomposition observed = trend + seasonal + residual.

    `trend` and `residual` only cover points with a full moving-average window.
    `seasonal` is broadcast back to every input point by phase.
    """
    model_config = ConfigDict(frozen=True)

    trend: Tuple[NumericPoint, ...]
    seasonal: Tuple[NumericPoint, ...]
    residual: Tuple[NumericPoint, ...]


# =============================================================================
# Configuration (cache key)
# =============================================================================


class SummarizationConfig(BaseModel):
    """
    Summarizer input: date range, dataset reference and phrasing thresholds.

    Two configs are equal iff all fields are equal by value, and equal configs
    hash equally, so a config is used directly as the cache key. Threshold
    defaults come from Settings at construction time.
    """
    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        extra='forbid',
        json_schema_extra={
            "example": {
                "dataset_id": "active-users",
                "start_date": "2026-01-05",
                "end_date": "2026-02-08",
                "metric_label": "active users",
            }
        }
    )

    dataset_id: str = Field(
        ...,
        min_length=1,
        description="Identifier of the dataset in the time-series supplier"
    )
    start_date: Optional[date] = Field(
        default=None,
        description="First calendar date included (inclusive); unbounded when omitted"
    )
    end_date: Optional[date] = Field(
        default=None,
        description="Last calendar date included (inclusive); unbounded when omitted"
    )
    metric_label: str = Field(
        default="active users",
        min_length=1,
        description="Noun phrase naming the metric in generated text"
    )
    period_length_days: int = Field(
        default_factory=lambda: get_settings().period_length_days,
        gt=0,
    )
    percentage_change_threshold: float = Field(
        default_factory=lambda: get_settings().percentage_change_threshold,
        ge=0,
        allow_inf_nan=False,
    )
    rate_diff_threshold: float = Field(
        default_factory=lambda: get_settings().rate_diff_threshold,
        ge=0,
        allow_inf_nan=False,
    )
    weekday_qualifier_threshold: float = Field(
        default_factory=lambda: get_settings().weekday_qualifier_threshold,
        ge=0,
        le=1,
    )
    rate_epsilon: float = Field(
        default_factory=lambda: get_settings().rate_epsilon,
        ge=0,
        allow_inf_nan=False,
    )

    @model_validator(mode='after')
    def _check_date_range(self) -> "SummarizationConfig":
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError(
                f"start_date {self.start_date} is after end_date {self.end_date}"
            )
        return self


# =============================================================================
# Service Properties
# =============================================================================


class DataSourceProperties(BaseModel):
    """Points delivered by the time-series supplier, chronologically ordered."""
    model_config = ConfigDict(frozen=True)

    points: Tuple[TimeSeriesPoint, ...]


class WeeklyElaborationProperties(BaseModel):
    """
    Per-week point groups and linear models.

    `week_linear_models[i]` is fitted on `week_point_arrays[i]`. The models
    tuple may be shorter than the point groups when a trailing bucket holds
    too few points for a fit.
    """
    model_config = ConfigDict(frozen=True)

    week_point_arrays: Tuple[Tuple[NumericPoint, ...], ...]
    week_linear_models: Tuple[LinearModel, ...]


class WeekdayWeekendRelativeProperties(BaseModel):
    """Degree to which weekday and weekend behaviour are indistinguishable."""
    model_config = ConfigDict(frozen=True)

    weekday_weekend_equal_validity: float = Field(..., ge=0.0, le=1.0)
    weekday_mean: Optional[float] = None
    weekend_mean: Optional[float] = None
    normalized_difference: float = Field(default=0.0, ge=0.0)


class EmptyProperties(BaseModel):
    """Properties of services that only synthesize text from upstream services."""
    model_config = ConfigDict(frozen=True)


# =============================================================================
# Summaries
# =============================================================================


class Summary(BaseModel):
    """
    One generated sentence with its validity degree.

    `text` may contain <b>...</b> emphasis spans.
    """
    model_config = ConfigDict(frozen=True)

    text: str
    validity: float = Field(..., ge=0.0, le=1.0)


class SummaryGroup(BaseModel):
    """A titled, ordered group of summaries produced by one summarizer."""
    model_config = ConfigDict(frozen=True)

    title: str
    summaries: Tuple[Summary, ...] = ()


# =============================================================================
# API Request Models
# =============================================================================


class SummarizationRequest(SummarizationConfig):
    """
    Body of POST /summaries: a config plus the summarizers to run.

    When `kinds` is omitted every summarizer runs, in SummarizerKind order.
    """

    kinds: Optional[Tuple[SummarizerKind, ...]] = None

    def to_config(self) -> SummarizationConfig:
        return SummarizationConfig(**self.model_dump(exclude={'kinds'}))


# =============================================================================
# API Response Models
# =============================================================================


class SummarizationResponse(BaseModel):
    """Response for POST /summaries."""
    model_config = ConfigDict(frozen=True)

    dataset_id: str
    groups: Tuple[SummaryGroup, ...] = ()


class CacheResetResponse(BaseModel):
    """Response for DELETE /summaries/cache."""
    model_config = ConfigDict(frozen=True)

    cancelled: int = Field(..., ge=0, description="In-flight computations cancelled")
    generation: int = Field(..., ge=0, description="Cache generation after the reset")
