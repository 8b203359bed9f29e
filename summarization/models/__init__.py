"""
Package initialization file for summarization models.

This module exports all Pydantic schemas and enumerations from schemas.py and
enums.py, making them importable from summarization.models directly.

Usage:
    from summarization.models import (
        SummarizerKind,
        SummarizationConfig,
        SummaryGroup,
        TimeSeriesPoint,
        # ... etc
    )
"""

# =============================================================================
# Enums - Import and re-export all enumerations from enums.py
# =============================================================================

from summarization.models.enums import (
    SummarizerKind,
    TrapezoidShape,
    TrendDirection,
)


# =============================================================================
# Schemas - Import and re-export all Pydantic models from schemas.py
# =============================================================================

from summarization.models.schemas import (
    # -------------------------------------------------------------------------
    # Time-series primitives
    # -------------------------------------------------------------------------
    TimeSeriesPoint,
    NumericPoint,
    LinearModel,
    Decomposition,

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------
    SummarizationConfig,

    # -------------------------------------------------------------------------
    # Service properties
    # -------------------------------------------------------------------------
    DataSourceProperties,
    WeeklyElaborationProperties,
    WeekdayWeekendRelativeProperties,
    EmptyProperties,

    # -------------------------------------------------------------------------
    # Summaries and API models
    # -------------------------------------------------------------------------
    Summary,
    SummaryGroup,
    SummarizationRequest,
    SummarizationResponse,
    CacheResetResponse,
)


__all__ = [
    # Enums
    'SummarizerKind',
    'TrapezoidShape',
    'TrendDirection',
    # Time-series primitives
    'TimeSeriesPoint',
    'NumericPoint',
    'LinearModel',
    'Decomposition',
    # Configuration
    'SummarizationConfig',
    # Service properties
    'DataSourceProperties',
    'WeeklyElaborationProperties',
    'WeekdayWeekendRelativeProperties',
    'EmptyProperties',
    # Summaries and API models
    'Summary',
    'SummaryGroup',
    'SummarizationRequest',
    'SummarizationResponse',
    'CacheResetResponse',
]
