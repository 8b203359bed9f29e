"""
Summarization Services Module

This module contains the analytical services of the summarization engine.
Every service memoizes its properties and summaries per config in a shared
single-flight cache and reads upstream results through the same config.

Services:
- data_source: Delivers the raw time series (in-memory or Postgres supplier)
- weekday_weekend: Weekday/weekend "equal" validity degree
- weekly_elaboration: Weekly grouping and per-week linear fits
- weekly_comparison_average: Adjacent-week comparison of means
- weekly_comparison_rate: Adjacent-week comparison of gradients
- engine: Wires the services into one acyclic graph
"""

# =============================================================================
# Service Contract Exports
# =============================================================================

from summarization.services.base import (
    ConfigInput,
    SummarizationService,
    prepare_config,
    validate_dependency_graph,
)

# =============================================================================
# Data Source Exports
# =============================================================================

from summarization.services.data_source import (
    DataSourceSummarizationService,
    InMemoryTimeSeriesSource,
    PostgresTimeSeriesSource,
    TimeSeriesSource,
)

# =============================================================================
# Analytical Service Exports
# =============================================================================

from summarization.services.weekday_weekend import (
    WeekdayWeekendRelativeSummarizationService,
)
from summarization.services.weekly_elaboration import (
    TrendWeeklyElaborationSummarizationService,
)
from summarization.services.weekly_comparison_average import (
    TrendWeeklyComparisonAverageSummarizationService,
    build_average_comparison_summaries,
)
from summarization.services.weekly_comparison_rate import (
    TrendWeeklyComparisonRateSummarizationService,
    build_rate_comparison_summaries,
)

# =============================================================================
# Engine Exports
# =============================================================================

from summarization.services.engine import DEFAULT_KINDS, SummarizationEngine


__all__ = [
    # Contract
    "ConfigInput",
    "SummarizationService",
    "prepare_config",
    "validate_dependency_graph",
    # Data source
    "DataSourceSummarizationService",
    "InMemoryTimeSeriesSource",
    "PostgresTimeSeriesSource",
    "TimeSeriesSource",
    # Analytical services
    "WeekdayWeekendRelativeSummarizationService",
    "TrendWeeklyElaborationSummarizationService",
    "TrendWeeklyComparisonAverageSummarizationService",
    "TrendWeeklyComparisonRateSummarizationService",
    "build_average_comparison_summaries",
    "build_rate_comparison_summaries",
    # Engine
    "DEFAULT_KINDS",
    "SummarizationEngine",
]
