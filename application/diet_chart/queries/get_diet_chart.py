"""Get diet chart query."""

from dataclasses import dataclass
from typing import Optional

from domain.diet_chart.core.entities.diet_chart import DietChart
from domain.diet_chart.core.exceptions.domain_errors import DietChartNotFoundError
from domain.identity.core.access import require_caller
from domain.identity.core.caller import CallerIdentity
from domain.shared.ports.diet_chart_repository import IDietChartRepository


@dataclass(frozen=True)
class GetDietChartQuery:
    """Query: Single active chart by id."""

    caller: Optional[CallerIdentity]
    chart_id: str


class GetDietChartQueryHandler:
    """Handler for GetDietChartQuery."""

    def __init__(self, repository: IDietChartRepository):
        self._repository = repository

    async def handle(self, query: GetDietChartQuery) -> DietChart:
        """
        Raises:
            UnauthenticatedError: No caller
            DietChartNotFoundError: Chart absent or soft-deleted
        """
        require_caller(query.caller)

        chart = await self._repository.get_by_id(query.chart_id)
        if chart is None:
            raise DietChartNotFoundError(query.chart_id)
        return chart
