"""
Summarization engine.

Wires the analytical services into one acyclic graph that shares a single
single-flight cache:

    data_source
      +-- weekday_weekend_relative
      +-- trend_weekly_elaboration
            +-- trend_weekly_comparison_average
            +-- trend_weekly_comparison_rate (also uses weekday_weekend_relative)

Requested summarizers run concurrently for the same config; their groups are
returned flattened in the order the kinds were requested.
"""

import asyncio
import logging
from typing import Iterable, List, Optional, Sequence

from summarization.core.cache import SingleFlightCache
from summarization.core.exceptions import ConfigError
from summarization.models.enums import SummarizerKind
from summarization.models.schemas import SummaryGroup
from summarization.services.base import (
    ConfigInput,
    SummarizationService,
    prepare_config,
    validate_dependency_graph,
)
from summarization.services.data_source import (
    DataSourceSummarizationService,
    TimeSeriesSource,
)
from summarization.services.weekday_weekend import (
    WeekdayWeekendRelativeSummarizationService,
)
from summarization.services.weekly_comparison_average import (
    TrendWeeklyComparisonAverageSummarizationService,
)
from summarization.services.weekly_comparison_rate import (
    TrendWeeklyComparisonRateSummarizationService,
)
from summarization.services.weekly_elaboration import (
    TrendWeeklyElaborationSummarizationService,
)

logger = logging.getLogger(__name__)


# Kinds produced when a request does not select any
DEFAULT_KINDS: Sequence[SummarizerKind] = (
    SummarizerKind.WEEKDAY_WEEKEND_RELATIVE,
    SummarizerKind.TREND_WEEKLY_ELABORATION,
    SummarizerKind.TREND_WEEKLY_COMPARISON_AVERAGE,
    SummarizerKind.TREND_WEEKLY_COMPARISON_RATE,
)


class SummarizationEngine:
    """
    Entry point for producing summaries from a time-series supplier.

    Attributes:
        source: Supplier of raw points.
        cache: Cache shared by every service in the graph.
    """

    def __init__(
        self,
        source: TimeSeriesSource,
        cache: Optional[SingleFlightCache] = None,
    ) -> None:
        self.source = source
        self.cache = cache if cache is not None else SingleFlightCache()

        self.data_source = DataSourceSummarizationService(source, cache=self.cache)
        self.weekday_weekend_relative = WeekdayWeekendRelativeSummarizationService(
            self.data_source, cache=self.cache
        )
        self.trend_weekly_elaboration = TrendWeeklyElaborationSummarizationService(
            self.data_source, cache=self.cache
        )
        self.trend_weekly_comparison_average = (
            TrendWeeklyComparisonAverageSummarizationService(
                self.trend_weekly_elaboration, cache=self.cache
            )
        )
        self.trend_weekly_comparison_rate = TrendWeeklyComparisonRateSummarizationService(
            self.weekday_weekend_relative,
            self.trend_weekly_elaboration,
            cache=self.cache,
        )

        self.services: List[SummarizationService] = validate_dependency_graph([
            self.weekday_weekend_relative,
            self.trend_weekly_elaboration,
            self.trend_weekly_comparison_average,
            self.trend_weekly_comparison_rate,
        ])

    def service(self, kind: SummarizerKind) -> SummarizationService:
        """Return the service producing `kind` (a SummarizerKind or its value)."""
        try:
            kind = SummarizerKind(kind)
        except ValueError as e:
            raise ConfigError(f"Unknown summarizer kind: {kind!r}") from e

        if kind == SummarizerKind.WEEKDAY_WEEKEND_RELATIVE:
            return self.weekday_weekend_relative
        elif kind == SummarizerKind.TREND_WEEKLY_ELABORATION:
            return self.trend_weekly_elaboration
        elif kind == SummarizerKind.TREND_WEEKLY_COMPARISON_AVERAGE:
            return self.trend_weekly_comparison_average
        elif kind == SummarizerKind.TREND_WEEKLY_COMPARISON_RATE:
            return self.trend_weekly_comparison_rate
        else:
            raise ConfigError(f"Unknown summarizer kind: {kind!r}")

    async def summaries(
        self,
        config: ConfigInput,
        kinds: Optional[Iterable[SummarizerKind]] = None,
    ) -> List[SummaryGroup]:
        """
        Produce summary groups for `config`.

        Args:
            config: SummarizationConfig or a mapping of its fields.
            kinds: Summarizers to run, in output order. Defaults to all of them.

        Returns:
            Flattened summary groups, one or more per requested kind.

        Raises:
            ConfigError: Invalid config or unknown kind.
            InvalidInputError: Non-finite data reached a numeric routine.
            CyclicDependencyError: The service graph contains a cycle.
        """
        config = prepare_config(config)
        selected = list(kinds) if kinds else list(DEFAULT_KINDS)
        services = [self.service(kind) for kind in selected]

        logger.info(
            f"Summarizing dataset {config.dataset_id!r} with "
            f"{', '.join(service.name for service in services)}"
        )

        results = await asyncio.gather(
            *(service.summaries(config) for service in services)
        )

        return [group for groups in results for group in groups]

    def reset(self) -> int:
        """Invalidate every cached result. Returns the number of cancelled computations."""
        return self.cache.invalidate()
