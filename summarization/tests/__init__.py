"""
Summarization Test Suite.

Tests for the fuzzy protoform and trend libraries, time-series utilities,
analytical services, engine and API handlers.

Test Modules:
- test_protoform: Trapezoid membership and sigma-count quantification
- test_trend: Linear fitting, moving average and additive decomposition
- test_time_series: Timestamp conversion, grouping, normalisation, formatting
- test_services: Cache, config, cycles, services and engine
- test_comparisons: Adjacent-week comparison phrasing
- test_data_source: In-memory and Postgres suppliers
- test_api: Endpoint handlers
"""
