"""Delivery queue query - the ward-wide pool of unclaimed ready meals."""

from dataclasses import dataclass
from typing import List, Optional

from domain.diet_chart.core.entities.diet_chart import DietChart
from domain.diet_chart.core.value_objects.chart_filter import ChartFilter, MealCriteria
from domain.diet_chart.core.value_objects.enums import PreparationStatus
from domain.identity.core.access import require_role
from domain.identity.core.caller import CallerIdentity, StaffRole
from domain.shared.ports.diet_chart_repository import IDietChartRepository


@dataclass(frozen=True)
class DeliveryQueueQuery:
    """Query: Charts holding at least one ready meal nobody has claimed."""

    caller: Optional[CallerIdentity]


class DeliveryQueueQueryHandler:
    """
    Handler for DeliveryQueueQuery.

    Not scoped to the caller: delivery assignment happens when a delivery
    member marks the meal delivered.
    """

    def __init__(self, repository: IDietChartRepository):
        self._repository = repository

    async def handle(self, query: DeliveryQueueQuery) -> List[DietChart]:
        require_role(query.caller, StaffRole.DELIVERY)

        chart_filter = ChartFilter(
            meal=MealCriteria(
                statuses=frozenset({PreparationStatus.READY}), delivery_unassigned=True
            )
        )
        return [chart async for chart in self._repository.find_active(chart_filter)]
