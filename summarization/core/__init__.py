"""
Core infrastructure package for the summarization engine.

Provides:
- Configuration management via pydantic-settings
- The error taxonomy shared by libraries and services
- The single-flight result cache
- Async PostgreSQL connectivity via asyncpg (database module)
- FastAPI dependency injection utilities (dependencies module)

This module re-exports the leaf components so other modules can write:

    from summarization.core import get_settings, ConfigError, SingleFlightCache

The database and dependencies modules are imported explicitly by their
consumers since they pull in asyncpg, FastAPI and the service layer.
"""

# =============================================================================
# Re-exports from summarization.core.config
# =============================================================================
from summarization.core.config import Settings, get_settings

# =============================================================================
# Re-exports from summarization.core.exceptions
# =============================================================================
from summarization.core.exceptions import (
    SummarizationError,
    ConfigError,
    InsufficientDataError,
    InvalidInputError,
    CyclicDependencyError,
)

# =============================================================================
# Re-exports from summarization.core.cache
# =============================================================================
from summarization.core.cache import SingleFlightCache


__all__ = [
    # Configuration management (from config.py)
    'Settings',
    'get_settings',
    # Error taxonomy (from exceptions.py)
    'SummarizationError',
    'ConfigError',
    'InsufficientDataError',
    'InvalidInputError',
    'CyclicDependencyError',
    # Result cache (from cache.py)
    'SingleFlightCache',
]
