"""
Weekday/Weekend Relative Service.

Grades how indistinguishable weekday and weekend behaviour is:

    1. Split points into weekday (Mon-Fri) and weekend (Sat-Sun) subsets.
    2. Representative statistic per subset: the mean of y.
    3. Normalized difference = |weekday_mean - weekend_mean|
                               / (max(|weekday_mean|, |weekend_mean|) + EPSILON)
    4. weekday_weekend_equal_validity = trapmf_l(similar_below, different_above)(difference)

When one subset is empty there is nothing to tell apart and the degree is 1.0.
An empty series raises InsufficientDataError.

Downstream, the degree only gates phrasing (the rate comparison adds an
"of weekdays" qualifier when it is low); it never changes numeric results.
"""

import logging
from typing import Optional, Sequence, Tuple

import pandas as pd

from summarization.core.cache import SingleFlightCache
from summarization.core.config import get_settings
from summarization.core.exceptions import InsufficientDataError
from summarization.libs.protoform import MembershipFunction, trapmf_l
from summarization.models.schemas import (
    Summary,
    SummarizationConfig,
    SummaryGroup,
    WeekdayWeekendRelativeProperties,
)
from summarization.services.base import SummarizationService
from summarization.services.data_source import DataSourceSummarizationService
from summarization.utils.formatters import format_y
from summarization.utils.time_series import is_weekend

logger = logging.getLogger(__name__)


EPSILON: float = 1e-5


def default_equal_membership() -> MembershipFunction:
    settings = get_settings()
    return trapmf_l(
        settings.weekday_weekend_similar_below,
        settings.weekday_weekend_different_above,
    )


class WeekdayWeekendRelativeSummarizationService(
    SummarizationService[WeekdayWeekendRelativeProperties]
):
    """Computes the weekday/weekend "equal" validity degree."""

    name = 'weekday_weekend_relative'
    title = 'Weekday and Weekend - Relative'

    def __init__(
        self,
        data_source_service: DataSourceSummarizationService,
        cache: Optional[SingleFlightCache] = None,
        equal_membership: Optional[MembershipFunction] = None,
    ) -> None:
        super().__init__(cache)
        self.data_source_service = data_source_service
        self.equal_membership = equal_membership or default_equal_membership()

    @property
    def dependencies(self) -> Sequence[SummarizationService]:
        return (self.data_source_service,)

    async def create_properties(
        self, config: SummarizationConfig
    ) -> WeekdayWeekendRelativeProperties:
        data = await self.data_source_service.properties(config)

        if not data.points:
            raise InsufficientDataError(
                f"No points for dataset {config.dataset_id!r} in the selected range"
            )

        frame = pd.DataFrame({
            'y': [point.y for point in data.points],
            'day_type': [
                'weekend' if is_weekend(point) else 'weekday' for point in data.points
            ],
        })
        means = frame.groupby('day_type')['y'].mean()

        weekday_mean = float(means['weekday']) if 'weekday' in means.index else None
        weekend_mean = float(means['weekend']) if 'weekend' in means.index else None

        if weekday_mean is None or weekend_mean is None:
            return WeekdayWeekendRelativeProperties(
                weekday_weekend_equal_validity=1.0,
                weekday_mean=weekday_mean,
                weekend_mean=weekend_mean,
            )

        scale = max(abs(weekday_mean), abs(weekend_mean))
        difference = abs(weekday_mean - weekend_mean) / (scale + EPSILON)
        validity = self.equal_membership(difference)

        logger.debug(
            f"Weekday mean {weekday_mean:.3f}, weekend mean {weekend_mean:.3f}, "
            f"difference {difference:.3f}, equal validity {validity:.3f}"
        )

        return WeekdayWeekendRelativeProperties(
            weekday_weekend_equal_validity=validity,
            weekday_mean=weekday_mean,
            weekend_mean=weekend_mean,
            normalized_difference=difference,
        )

    async def create_summaries(self, config: SummarizationConfig) -> Tuple[SummaryGroup, ...]:
        properties = await self.properties(config)
        validity = properties.weekday_weekend_equal_validity

        if properties.weekday_mean is None or properties.weekend_mean is None:
            return (SummaryGroup(title=self.title, summaries=()),)

        if validity >= 0.5:
            text = (
                f"The {config.metric_label} of <b>weekdays</b> were "
                f"<b>similar to</b> <b>weekends</b>."
            )
            summary = Summary(text=text, validity=validity)
        else:
            change = (
                (properties.weekday_mean - properties.weekend_mean)
                / (abs(properties.weekend_mean) + EPSILON) * 100
            )
            descriptor = 'more' if change >= 0 else 'less'
            text = (
                f"The {config.metric_label} of <b>weekdays</b> were "
                f"<b>{format_y(abs(change))}% {descriptor} than</b> <b>weekends</b>."
            )
            summary = Summary(text=text, validity=1.0 - validity)

        return (SummaryGroup(title=self.title, summaries=(summary,)),)
