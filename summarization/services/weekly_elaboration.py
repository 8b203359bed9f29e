"""
Trend Weekly Elaboration Service.

Converts the delivered time series into per-week structure consumed by the
comparison services:

    week_point_arrays   points grouped into consecutive periods (weeks)
    week_linear_models  least-squares fit per week, aligned with the groups

Rules:
    - At least MIN_WEEKS groups are required, otherwise InsufficientDataError
      (comparisons need at least one adjacent pair).
    - A week whose points cannot be fitted (fewer than 2 distinct x values,
      typically a trailing partial week) ends the models tuple; later weeks
      are not fitted so models stay aligned with their groups.

Its own summaries describe the direction and daily rate of each fitted week.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from summarization.core.cache import SingleFlightCache
from summarization.core.exceptions import InsufficientDataError
from summarization.libs.trend import create_linear_model
from summarization.models.enums import TrendDirection
from summarization.models.schemas import (
    LinearModel,
    Summary,
    SummarizationConfig,
    SummaryGroup,
    WeeklyElaborationProperties,
)
from summarization.services.base import SummarizationService
from summarization.services.data_source import DataSourceSummarizationService
from summarization.utils.formatters import format_y, ordinal_text
from summarization.utils.time_series import (
    group_by_period,
    time_series_points_to_num_points,
)

logger = logging.getLogger(__name__)


# Minimum number of week groups for a usable elaboration
MIN_WEEKS: int = 2


class TrendWeeklyElaborationSummarizationService(
    SummarizationService[WeeklyElaborationProperties]
):
    """Groups the series by week and fits a linear model per week."""

    name = 'trend_weekly_elaboration'
    title = 'Trend Weekly Elaboration'

    def __init__(
        self,
        data_source_service: DataSourceSummarizationService,
        cache: Optional[SingleFlightCache] = None,
    ) -> None:
        super().__init__(cache)
        self.data_source_service = data_source_service

    @property
    def dependencies(self) -> Sequence[SummarizationService]:
        return (self.data_source_service,)

    async def create_properties(
        self, config: SummarizationConfig
    ) -> WeeklyElaborationProperties:
        data = await self.data_source_service.properties(config)

        points = time_series_points_to_num_points(data.points)
        week_point_arrays = group_by_period(points, config.period_length_days)

        if len(week_point_arrays) < MIN_WEEKS:
            raise InsufficientDataError(
                f"Weekly elaboration needs at least {MIN_WEEKS} weeks of data, "
                f"got {len(week_point_arrays)}"
            )

        week_linear_models: List[LinearModel] = []
        for index, week_points in enumerate(week_point_arrays):
            try:
                week_linear_models.append(create_linear_model(week_points))
            except InsufficientDataError as e:
                logger.warning(
                    f"Stopping weekly fits at week {index} of {len(week_point_arrays)} "
                    f"for dataset {config.dataset_id!r}: {e}"
                )
                break

        return WeeklyElaborationProperties(
            week_point_arrays=week_point_arrays,
            week_linear_models=tuple(week_linear_models),
        )

    async def create_summaries(self, config: SummarizationConfig) -> Tuple[SummaryGroup, ...]:
        properties = await self.properties(config)

        summaries = []
        for index, model in enumerate(properties.week_linear_models):
            direction = TrendDirection.of(model.gradient)
            text = (
                f"The {config.metric_label} in the <b>{ordinal_text(index)} week</b> "
                f"were <b>{direction.value}</b> by <b>{format_y(abs(model.gradient))}</b> per day."
            )
            summaries.append(Summary(text=text, validity=1.0))

        return (SummaryGroup(title=self.title, summaries=tuple(summaries)),)
