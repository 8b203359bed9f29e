"""
Error taxonomy for the summarization engine.

Hierarchy:
    SummarizationError
    ├── ConfigError             malformed or missing config; raised before any computation
    ├── InsufficientDataError   too few points/weeks; recovered at the summary level
    ├── InvalidInputError       NaN or non-numeric input to a library function
    └── CyclicDependencyError   service graph contains a cycle (programming error)

Numeric edge cases such as division by a near-zero quantity are prevented with
epsilon additions and never surface as exceptions.
"""


class SummarizationError(Exception):
    """Base class for all errors raised by the summarization engine."""


class ConfigError(SummarizationError):
    """Malformed or missing configuration field. Not retried."""


class InsufficientDataError(SummarizationError):
    """Fewer than the minimum number of points or weeks for a computation."""


class InvalidInputError(SummarizationError, ValueError):
    """Non-numeric or NaN input to a membership or trend function."""


class CyclicDependencyError(SummarizationError):
    """
    A service dependency graph contains a cycle.

    Attributes:
        chain: Service names forming the cycle, in traversal order.
    """

    def __init__(self, chain):
        self.chain = tuple(chain)
        super().__init__(
            f"Cyclic service dependency: {' -> '.join(self.chain)}"
        )
