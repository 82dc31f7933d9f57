"""Pantry completed-work query.

Answers "which meals did I finish today?" for a pantry staff member. Charts
are flattened into meals, filtered, and regrouped so that each record only
carries the caller's finished meals.
"""

from dataclasses import dataclass
from datetime import date, datetime, timezone, tzinfo
from typing import Callable, List, Optional
import logging

from domain.diet_chart.services.completed_work import CompletedWork, flatten, keep, regroup
from domain.diet_chart.core.value_objects.chart_filter import ChartFilter, MealCriteria
from domain.diet_chart.core.value_objects.enums import PreparationStatus
from domain.identity.core.access import require_role
from domain.identity.core.caller import CallerIdentity, StaffRole
from domain.shared.day_window import day_window
from domain.shared.ports.diet_chart_repository import IDietChartRepository

logger = logging.getLogger(__name__)

FINISHED_PANTRY_STATUSES = frozenset({PreparationStatus.READY, PreparationStatus.DELIVERED})


@dataclass(frozen=True)
class PantryCompletedQuery:
    """
    Query: Meals the caller prepared, for charts dated on one day.

    Attributes:
        caller: Pantry staff member
        day: Local calendar day (defaults to today in the ward time zone)
    """

    caller: Optional[CallerIdentity]
    day: Optional[date] = None


class PantryCompletedQueryHandler:
    """Handler for PantryCompletedQuery."""

    def __init__(
        self,
        repository: IDietChartRepository,
        tz: tzinfo = timezone.utc,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self._repository = repository
        self._tz = tz
        self._clock = clock

    async def handle(self, query: PantryCompletedQuery) -> List[CompletedWork]:
        """
        Returns:
            One record per chart with at least one matching meal, newest
            chart (by creation time) first
        """
        caller = require_role(query.caller, StaffRole.PANTRY)

        start, end = day_window(query.day, self._tz, self._clock())
        criteria = MealCriteria(statuses=FINISHED_PANTRY_STATUSES, assigned_pantry=caller.id)

        # The store narrows charts; meals are re-filtered one by one below
        charts = [
            chart
            async for chart in self._repository.find_active(
                ChartFilter(date_from=start, date_until=end, meal=criteria)
            )
        ]
        records = regroup(keep(flatten(charts), criteria.matches))
        records.sort(key=lambda record: record.created_at, reverse=True)

        logger.debug(
            "Pantry completed work",
            extra={"caller_id": caller.id, "window_start": start.isoformat(), "count": len(records)},
        )
        return records
