"""Pantry queue query - meals a pantry staff member still has to finish."""

from dataclasses import dataclass
from typing import List, Optional

from domain.diet_chart.core.entities.diet_chart import DietChart
from domain.diet_chart.core.value_objects.chart_filter import ChartFilter, MealCriteria
from domain.diet_chart.core.value_objects.enums import PreparationStatus
from domain.identity.core.access import require_role
from domain.identity.core.caller import CallerIdentity, StaffRole
from domain.shared.ports.diet_chart_repository import IDietChartRepository

OPEN_PANTRY_STATUSES = frozenset({PreparationStatus.PENDING, PreparationStatus.PREPARING})


@dataclass(frozen=True)
class PantryQueueQuery:
    """Query: Charts with open work assigned to the calling pantry member."""

    caller: Optional[CallerIdentity]


class PantryQueueQueryHandler:
    """
    Handler for PantryQueueQuery.

    Charts are returned whole: a chart appears once if any of its meals
    matches, and the client picks the relevant meals out itself.
    """

    def __init__(self, repository: IDietChartRepository):
        self._repository = repository

    async def handle(self, query: PantryQueueQuery) -> List[DietChart]:
        caller = require_role(query.caller, StaffRole.PANTRY)

        chart_filter = ChartFilter(
            meal=MealCriteria(statuses=OPEN_PANTRY_STATUSES, assigned_pantry=caller.id)
        )
        return [chart async for chart in self._repository.find_active(chart_filter)]
