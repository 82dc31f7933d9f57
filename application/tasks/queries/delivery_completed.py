"""Delivery completed-work query."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional

from domain.diet_chart.core.entities.diet_chart import DietChart
from domain.diet_chart.core.value_objects.chart_filter import ChartFilter, MealCriteria
from domain.diet_chart.core.value_objects.enums import PreparationStatus
from domain.identity.core.access import require_role
from domain.identity.core.caller import CallerIdentity, StaffRole
from domain.shared.ports.diet_chart_repository import IDietChartRepository

_NEVER = datetime.min.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class DeliveryCompletedQuery:
    """Query: Charts holding meals the caller has delivered."""

    caller: Optional[CallerIdentity]


class DeliveryCompletedQueryHandler:
    """
    Handler for DeliveryCompletedQuery.

    Charts are ordered by the most recent delivery the caller made on them,
    newest first. The sort is stable, so ties keep store order.
    """

    def __init__(self, repository: IDietChartRepository):
        self._repository = repository

    async def handle(self, query: DeliveryCompletedQuery) -> List[DietChart]:
        caller = require_role(query.caller, StaffRole.DELIVERY)

        criteria = MealCriteria(
            statuses=frozenset({PreparationStatus.DELIVERED}), assigned_delivery=caller.id
        )
        charts = [
            chart async for chart in self._repository.find_active(ChartFilter(meal=criteria))
        ]

        def last_delivery(chart: DietChart) -> datetime:
            times = [
                meal.delivery_time
                for meal in chart.meals
                if criteria.matches(meal) and meal.delivery_time is not None
            ]
            return max(times, default=_NEVER)

        charts.sort(key=last_delivery, reverse=True)
        return charts
