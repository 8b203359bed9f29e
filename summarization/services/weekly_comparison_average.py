"""
Trend Weekly Comparison Service - Average.

Compares the mean of every week with the week before it and emits one summary
per adjacent pair (i, i + 1):

    percentage_change = (mean[i + 1] - mean[i]) / (|mean[i]| + EPSILON) * 100

Phrasing:
    |percentage_change| >  threshold  ->  "X% more than" / "X% less than"
    |percentage_change| <= threshold  ->  "similar to"

The threshold is config.percentage_change_threshold (5 by default). Every
sentence carries validity 1.0.
"""

from typing import Optional, Sequence, Tuple

import numpy as np

from summarization.core.cache import SingleFlightCache
from summarization.models.schemas import (
    EmptyProperties,
    NumericPoint,
    Summary,
    SummarizationConfig,
    SummaryGroup,
)
from summarization.services.base import SummarizationService
from summarization.services.weekly_elaboration import (
    TrendWeeklyElaborationSummarizationService,
)
from summarization.utils.formatters import format_y, ordinal_text


EPSILON: float = 1e-5


def build_average_comparison_summaries(
    week_point_arrays: Sequence[Sequence[NumericPoint]],
    config: SummarizationConfig,
) -> Tuple[Summary, ...]:
    """
    One summary per adjacent week pair comparing the weekly means of y.

    Args:
        week_point_arrays: Chronologically ordered, non-empty week groups.
        config: Supplies the metric label and the percentage threshold.

    Example:
        Weeks with means [100, 106] give
        "The average active users of the <b>second week</b> was
        <b>6% more than</b> the <b>first week</b>."
    """
    week_y_averages = [
        float(np.mean([point.y for point in week_points]))
        for week_points in week_point_arrays
    ]

    summaries = []
    for i in range(len(week_y_averages) - 1):
        current_average = week_y_averages[i]
        next_average = week_y_averages[i + 1]

        percentage_change = (
            (next_average - current_average) / (abs(current_average) + EPSILON) * 100
        )
        descriptor = 'more' if percentage_change >= 0 else 'less'

        if abs(percentage_change) > config.percentage_change_threshold:
            change_text = f"{format_y(abs(percentage_change))}% {descriptor} than"
        else:
            change_text = 'similar to'

        text = (
            f"The average {config.metric_label} of the <b>{ordinal_text(i + 1)} week</b> "
            f"was <b>{change_text}</b> the <b>{ordinal_text(i)} week</b>."
        )
        summaries.append(Summary(text=text, validity=1.0))

    return tuple(summaries)


class TrendWeeklyComparisonAverageSummarizationService(
    SummarizationService[EmptyProperties]
):
    """Adjacent-week comparison of weekly averages."""

    name = 'trend_weekly_comparison_average'
    title = 'Trend Weekly Comparison - Average'

    def __init__(
        self,
        trend_weekly_elaboration_service: TrendWeeklyElaborationSummarizationService,
        cache: Optional[SingleFlightCache] = None,
    ) -> None:
        super().__init__(cache)
        self.trend_weekly_elaboration_service = trend_weekly_elaboration_service

    @property
    def dependencies(self) -> Sequence[SummarizationService]:
        return (self.trend_weekly_elaboration_service,)

    async def create_properties(self, config: SummarizationConfig) -> EmptyProperties:
        return EmptyProperties()

    async def create_summaries(self, config: SummarizationConfig) -> Tuple[SummaryGroup, ...]:
        elaboration = await self.trend_weekly_elaboration_service.properties(config)

        summaries = build_average_comparison_summaries(
            elaboration.week_point_arrays, config
        )

        return (SummaryGroup(title=self.title, summaries=summaries),)
