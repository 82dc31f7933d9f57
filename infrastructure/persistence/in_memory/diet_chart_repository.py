"""In-memory diet chart repository implementation.

Provides an in-memory implementation of IDietChartRepository for tests and
local development. Uses a dictionary for storage with no external
dependencies.
"""

from copy import deepcopy
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Dict, Mapping, Optional

from domain.diet_chart.core.entities.diet_chart import DietChart
from domain.diet_chart.core.value_objects.chart_filter import ChartFilter
from domain.diet_chart.core.value_objects.enums import AssignmentSlot


class InMemoryDietChartRepository:
    """
    In-memory implementation of IDietChartRepository port.

    Concurrency: safe under a single asyncio event loop. No method awaits
    between reading and writing a stored chart, so each write is atomic
    with respect to other coroutines.
    Persistence: data lost on process restart (in-memory only)

    Example:
        >>> repository = InMemoryDietChartRepository()
        >>> chart = DietChart.create(patient_id="p1", date=date.today(), created_by="m1")
        >>> await repository.create(chart)
        >>> retrieved = await repository.get_by_id(chart.id)
    """

    def __init__(self) -> None:
        """Initialize repository with empty storage."""
        self._storage: Dict[str, DietChart] = {}

    async def create(self, chart: DietChart) -> DietChart:
        """
        Store a new chart.

        Note:
            - Stores a deep copy to prevent external modifications
            - Raises ValueError if the id is already taken
        """
        if chart.id in self._storage:
            raise ValueError(f"Diet chart {chart.id} already exists")

        self._storage[chart.id] = deepcopy(chart)
        return deepcopy(chart)

    async def get_by_id(self, chart_id: str, include_inactive: bool = False) -> Optional[DietChart]:
        chart = self._active(chart_id, include_inactive)
        return deepcopy(chart) if chart is not None else None

    async def find_active(
        self, chart_filter: Optional[ChartFilter] = None
    ) -> AsyncIterator[DietChart]:
        """Yield deep copies of active charts matching the filter."""
        # Snapshot so concurrent writes don't break iteration
        for chart in list(self._storage.values()):
            if not chart.is_active:
                continue
            if chart_filter is not None and not chart_filter.matches(chart):
                continue
            yield deepcopy(chart)

    async def update(
        self, chart_id: str, changes: Mapping[str, Any], **revise_options: Any
    ) -> Optional[DietChart]:
        """
        Merge changes into an active chart.

        The merge runs on a copy, so a validation failure leaves the stored
        chart untouched.
        """
        stored = self._active(chart_id)
        if stored is None:
            return None

        revised = deepcopy(stored)
        revised.revise(changes, **revise_options)
        self._storage[chart_id] = revised
        return deepcopy(revised)

    async def apply_meal_transition(
        self,
        chart_id: str,
        meal_id: str,
        changes: Dict[str, Any],
        slot: AssignmentSlot,
        caller_id: str,
    ) -> Optional[DietChart]:
        stored = self._active(chart_id)
        if stored is None:
            return None

        meal = stored.find_meal(meal_id)
        if meal is None:
            return None

        holder = meal.holder(slot)
        if holder is not None and holder != caller_id:
            return None

        meal.apply_changes(changes)
        stored.updated_at = datetime.now(timezone.utc)
        return deepcopy(stored)

    async def soft_delete(self, chart_id: str) -> bool:
        stored = self._active(chart_id)
        if stored is None:
            return False

        stored.is_active = False
        stored.updated_at = datetime.now(timezone.utc)
        return True

    def _active(self, chart_id: str, include_inactive: bool = False) -> Optional[DietChart]:
        chart = self._storage.get(chart_id)
        if chart is None or (not chart.is_active and not include_inactive):
            return None
        return chart

    def clear(self) -> None:
        """
        Clear all charts from storage.

        Note: Utility method for testing - not part of IDietChartRepository port
        """
        self._storage.clear()
