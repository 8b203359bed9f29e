"""
Summarization Package.

Linguistic summarization of time series: turns a daily metric series into
short natural-language statements graded by fuzzy validity degrees.

Subpackages:
    - api: FastAPI route handlers
    - core: Configuration, errors, cache, database and dependencies
    - libs: Fuzzy protoform and trend primitives
    - models: Pydantic schemas and enums
    - services: Analytical services and the engine wiring them together
    - utils: Time-series, normalization and text formatting helpers
"""

__version__ = "1.0.0"
