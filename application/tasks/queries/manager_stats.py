"""Manager statistics query - meal counts by preparation status."""

from dataclasses import dataclass
from datetime import date, datetime, timezone, tzinfo
from typing import Callable, List, Optional

from domain.diet_chart.services.completed_work import count_by_status, flatten
from domain.diet_chart.core.value_objects.chart_filter import ChartFilter
from domain.diet_chart.core.value_objects.enums import PreparationStatus
from domain.identity.core.access import require_role
from domain.identity.core.caller import CallerIdentity, StaffRole
from domain.shared.day_window import local_midnight, today
from domain.shared.ports.diet_chart_repository import IDietChartRepository


@dataclass(frozen=True)
class ManagerStatsQuery:
    """
    Query: Meal counts across active charts dated on or after a day.

    Attributes:
        caller: Manager
        day: First local calendar day counted (defaults to today)
    """

    caller: Optional[CallerIdentity]
    day: Optional[date] = None


@dataclass(frozen=True)
class StatusCount:
    """Number of meals currently in one preparation status."""

    status: PreparationStatus
    count: int


class ManagerStatsQueryHandler:
    """Handler for ManagerStatsQuery.

    Only statuses with at least one meal are reported, in lifecycle order
    (pending, preparing, ready, delivered).
    """

    def __init__(
        self,
        repository: IDietChartRepository,
        tz: tzinfo = timezone.utc,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self._repository = repository
        self._tz = tz
        self._clock = clock

    async def handle(self, query: ManagerStatsQuery) -> List[StatusCount]:
        require_role(query.caller, StaffRole.MANAGER)

        day = query.day if query.day is not None else today(self._tz, self._clock())
        chart_filter = ChartFilter(date_from=local_midnight(day, self._tz))

        charts = [chart async for chart in self._repository.find_active(chart_filter)]
        counts = count_by_status(flatten(charts))
        return [StatusCount(status=status, count=count) for status, count in counts.items()]
