"""
Trend Weekly Comparison Service - Rate.

Compares the gradient (daily rate of change) of every fitted week with the
week before it and emits one summary per adjacent pair of fitted weeks.

For a pair (i, i + 1), with eps = config.rate_epsilon:

    current = gradient[i] + eps
    next    = gradient[i + 1] + eps
    rate_diff_abs = |next - current|

Decision policy (thresholds from config, 2 and 5 by default):
    1. rate_diff_abs > rate_diff_threshold and current * next < 0
       -> direction reversal: "was decreasing in the second week but
          increasing in the first week" (no percentage)
    2. otherwise percentage = (|next| - |current|) / |current| * 100 and
       - |percentage| > percentage_threshold and rate_diff_abs > rate_diff_threshold
         -> "X% (D more <label> increased per day) faster than"
       - else -> "in the same rate as"

An "of weekdays" qualifier is added when the weekday/weekend equal validity is
at or below config.weekday_qualifier_threshold. Every sentence carries
validity 1.0.
"""

import asyncio
from typing import Optional, Sequence, Tuple

from summarization.core.cache import SingleFlightCache
from summarization.models.enums import TrendDirection
from summarization.models.schemas import (
    EmptyProperties,
    LinearModel,
    Summary,
    SummarizationConfig,
    SummaryGroup,
)
from summarization.services.base import SummarizationService
from summarization.services.weekday_weekend import (
    WeekdayWeekendRelativeSummarizationService,
)
from summarization.services.weekly_elaboration import (
    TrendWeeklyElaborationSummarizationService,
)
from summarization.utils.formatters import format_y, ordinal_text


def build_rate_comparison_summaries(
    week_linear_models: Sequence[LinearModel],
    weekday_weekend_equal_validity: float,
    config: SummarizationConfig,
) -> Tuple[Summary, ...]:
    """
    One summary per adjacent pair of weekly linear models.

    Args:
        week_linear_models: Chronologically ordered weekly fits.
        weekday_weekend_equal_validity: Degree gating the "of weekdays" qualifier.
        config: Supplies label, epsilon and thresholds.
    """
    eps = config.rate_epsilon
    label = config.metric_label

    if weekday_weekend_equal_validity > config.weekday_qualifier_threshold:
        qualifier = ''
    else:
        qualifier = '<b>of weekdays</b> '

    summaries = []
    for i in range(len(week_linear_models) - 1):
        current_rate = week_linear_models[i].gradient + eps
        next_rate = week_linear_models[i + 1].gradient + eps

        rate_diff_abs = abs(next_rate - current_rate)
        absolute_rate_diff = abs(next_rate) - abs(current_rate)

        current_direction = TrendDirection.of(current_rate)
        next_direction = TrendDirection.of(next_rate)

        if rate_diff_abs > config.rate_diff_threshold and current_rate * next_rate < 0:
            text = (
                f"The {label} {qualifier}was <b>{next_direction.value}</b> in the "
                f"<b>{ordinal_text(i + 1)} week</b> but <b>{current_direction.value}</b> "
                f"in the <b>{ordinal_text(i)} week</b>."
            )
        else:
            percentage_change = absolute_rate_diff / max(abs(current_rate), eps) * 100
            descriptor = 'more' if percentage_change >= 0 else 'less'
            speed_descriptor = 'faster' if percentage_change >= 0 else 'slower'

            if (
                abs(percentage_change) > config.percentage_change_threshold
                and rate_diff_abs > config.rate_diff_threshold
            ):
                change_text = (
                    f"{format_y(abs(percentage_change))}% "
                    f"({format_y(abs(absolute_rate_diff))} {descriptor} {label} "
                    f"{current_direction.past_tense} per day) {speed_descriptor} than"
                )
            else:
                change_text = 'in the same rate as'

            text = (
                f"The {label} {qualifier}in the <b>{ordinal_text(i + 1)} week</b> "
                f"{current_direction.past_tense} <b>{change_text}</b> "
                f"the <b>{ordinal_text(i)} week</b>."
            )

        summaries.append(Summary(text=text, validity=1.0))

    return tuple(summaries)


class TrendWeeklyComparisonRateSummarizationService(
    SummarizationService[EmptyProperties]
):
    """Adjacent-week comparison of weekly rates of change."""

    name = 'trend_weekly_comparison_rate'
    title = 'Trend Weekly Comparison - Rate'

    def __init__(
        self,
        weekday_weekend_relative_service: WeekdayWeekendRelativeSummarizationService,
        trend_weekly_elaboration_service: TrendWeeklyElaborationSummarizationService,
        cache: Optional[SingleFlightCache] = None,
    ) -> None:
        super().__init__(cache)
        self.weekday_weekend_relative_service = weekday_weekend_relative_service
        self.trend_weekly_elaboration_service = trend_weekly_elaboration_service

    @property
    def dependencies(self) -> Sequence[SummarizationService]:
        return (
            self.weekday_weekend_relative_service,
            self.trend_weekly_elaboration_service,
        )

    async def create_properties(self, config: SummarizationConfig) -> EmptyProperties:
        return EmptyProperties()

    async def create_summaries(self, config: SummarizationConfig) -> Tuple[SummaryGroup, ...]:
        weekday_weekend, elaboration = await asyncio.gather(
            self.weekday_weekend_relative_service.properties(config),
            self.trend_weekly_elaboration_service.properties(config),
        )

        summaries = build_rate_comparison_summaries(
            elaboration.week_linear_models,
            weekday_weekend.weekday_weekend_equal_validity,
            config,
        )

        return (SummaryGroup(title=self.title, summaries=summaries),)
