"""
Helpers shared by the analytical services.

- time_series: timestamp conversion, period grouping, weekend detection
- commons: point normalisation
- formatters: number and ordinal formatting for summary text
"""
