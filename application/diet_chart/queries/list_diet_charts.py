"""List diet charts query."""

from dataclasses import dataclass
from datetime import date, timezone, tzinfo
from typing import List, Optional
import logging

from domain.diet_chart.core.entities.diet_chart import DietChart
from domain.diet_chart.core.value_objects.chart_filter import ChartFilter
from domain.identity.core.access import require_caller
from domain.identity.core.caller import CallerIdentity
from domain.shared.day_window import day_window
from domain.shared.ports.diet_chart_repository import IDietChartRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListDietChartsQuery:
    """
    Query: Active charts, optionally for one patient and/or one day.

    Attributes:
        caller: Authenticated caller (any role)
        patient_id: Restrict to one patient
        day: Restrict to charts dated on this local calendar day
    """

    caller: Optional[CallerIdentity]
    patient_id: Optional[str] = None
    day: Optional[date] = None


class ListDietChartsQueryHandler:
    """Handler for ListDietChartsQuery."""

    def __init__(self, repository: IDietChartRepository, tz: tzinfo = timezone.utc):
        self._repository = repository
        self._tz = tz

    async def handle(self, query: ListDietChartsQuery) -> List[DietChart]:
        require_caller(query.caller)

        date_from = date_until = None
        if query.day is not None:
            date_from, date_until = day_window(query.day, self._tz)

        chart_filter = ChartFilter(
            patient_id=query.patient_id, date_from=date_from, date_until=date_until
        )
        charts = [chart async for chart in self._repository.find_active(chart_filter)]
        # Newest first
        charts.sort(key=lambda chart: chart.created_at, reverse=True)

        logger.debug(
            "Listed diet charts",
            extra={"patient_id": query.patient_id, "day": str(query.day), "count": len(charts)},
        )
        return charts
