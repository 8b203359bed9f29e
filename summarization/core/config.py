"""
Settings and environment management module for the summarization engine.

This module provides centralized configuration management using pydantic-settings,
which automatically loads settings from environment variables and .env files.

Key Features:
- Environment variable validation and type coercion
- Sensible defaults for development (in-memory data, no database)
- Singleton pattern via @lru_cache for efficient access
- Phrasing thresholds shared by every comparison summarizer

Environment Variables:
- DATABASE_URL: PostgreSQL connection string (optional; enables the Postgres
  time-series supplier)
- TIME_SERIES_TABLE: Table holding (dataset_id, ts, value) rows
- LOG_LEVEL: Root logging level for the FastAPI entry point

Phrasing Defaults:
- percentage_change_threshold: 5.0 (percent change below which weeks are "similar")
- rate_diff_threshold: 2.0 (absolute gradient difference gate, users per day)
- weekday_qualifier_threshold: 0.7 (equal-validity at or below which the
  "of weekdays" qualifier is added)
- rate_epsilon: 1e-5 (added to every gradient before division)

Usage:
    from summarization.core.config import get_settings

    settings = get_settings()
    threshold = settings.percentage_change_threshold
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    The class inherits from pydantic-settings BaseSettings which provides:
    - Automatic loading from environment variables (case-insensitive)
    - Support for .env file loading
    - Type validation and coercion
    - Default values for optional settings

    Attributes:
        database_url: PostgreSQL connection string. Optional.
        time_series_table: Table queried by the Postgres time-series supplier.
        period_length_days: Length of a grouping period (a week).
        percentage_change_threshold: Percent change gate for "more/less than".
        rate_diff_threshold: Gradient difference gate for rate phrasing.
        weekday_qualifier_threshold: Equal-validity gate for the weekday qualifier.
        rate_epsilon: Epsilon added to gradients to avoid zero division.
        weekday_weekend_similar_below: Normalised difference with full "equal" degree.
        weekday_weekend_different_above: Normalised difference with zero "equal" degree.
        log_level: Logging level name.
    """

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore',
        case_sensitive=False,
    )

    # =========================================================================
    # Data Source
    # =========================================================================

    # When unset the engine runs against an in-memory supplier only
    database_url: Optional[str] = None

    # Columns: dataset_id TEXT, ts TIMESTAMPTZ, value DOUBLE PRECISION
    time_series_table: str = 'time_series_point'

    # =========================================================================
    # Grouping and Phrasing Defaults
    # =========================================================================

    period_length_days: int = 7

    percentage_change_threshold: float = 5.0

    rate_diff_threshold: float = 2.0

    weekday_qualifier_threshold: float = 0.7

    rate_epsilon: float = 1e-5

    # Left-shoulder breakpoints for the weekday/weekend "equal" predicate
    weekday_weekend_similar_below: float = 0.1
    weekday_weekend_different_above: float = 0.3

    # =========================================================================
    # Logging
    # =========================================================================

    log_level: str = 'INFO'


@lru_cache()
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Returns:
        Settings: The application settings instance with all configuration values.

    Raises:
        pydantic.ValidationError: If environment variables have invalid values.

    Note:
        To refresh settings in tests, you can clear the cache:
        >>> get_settings.cache_clear()
    """
    return Settings()
