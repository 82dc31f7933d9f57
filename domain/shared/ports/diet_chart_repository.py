"""Diet chart repository port (interface).

Defines the contract of the Diet Chart Store. Infrastructure provides the
in-memory and MongoDB implementations.
"""

from typing import Any, AsyncIterator, Dict, Mapping, Optional, Protocol

from domain.diet_chart.core.entities.diet_chart import DietChart
from domain.diet_chart.core.value_objects.chart_filter import ChartFilter
from domain.diet_chart.core.value_objects.enums import AssignmentSlot


class IDietChartRepository(Protocol):
    """
    Interface for diet chart persistence.

    Activity is enforced at this boundary: every read takes an explicit
    ``include_inactive`` flag defaulting to False, and no method ever
    physically deletes a chart.

    Writes are whole-document, except ``apply_meal_transition`` which must
    touch only the target meal's workflow fields so that concurrent
    transitions on different meals of one chart do not overwrite each other.

    Example usage (application layer):
        >>> class SoftDeleteHandler:
        ...     def __init__(self, repository: IDietChartRepository):
        ...         self._repository = repository
        ...
        ...     async def handle(self, chart_id: str) -> None:
        ...         if not await self._repository.soft_delete(chart_id):
        ...             raise DietChartNotFoundError(chart_id)
    """

    async def create(self, chart: DietChart) -> DietChart:
        """
        Persist a new chart.

        Returns:
            The stored chart (a copy, with store timestamps)

        Raises:
            PersistenceError: If the store fails
        """
        ...

    async def get_by_id(self, chart_id: str, include_inactive: bool = False) -> Optional[DietChart]:
        """
        Retrieve a chart by id.

        Args:
            chart_id: Chart identifier
            include_inactive: Also return soft-deleted charts (audit only)

        Returns:
            DietChart, or None if absent (or inactive and not requested)
        """
        ...

    def find_active(self, chart_filter: Optional[ChartFilter] = None) -> AsyncIterator[DietChart]:
        """
        Lazily iterate active charts matching ``chart_filter``.

        Ordering is unspecified; callers sort when they need an order.

        Example:
            >>> async for chart in repository.find_active(ChartFilter(patient_id="p1")):
            ...     print(chart.date)
        """
        ...

    async def update(
        self, chart_id: str, changes: Mapping[str, Any], **revise_options: Any
    ) -> Optional[DietChart]:
        """
        Merge ``changes`` into an active chart and re-validate it.

        Args:
            chart_id: Chart identifier
            changes: Field name → value (see DietChart.revise)
            **revise_options: Forwarded to DietChart.revise (tz, now)

        Returns:
            Updated chart, or None if absent or inactive

        Raises:
            DietChartValidationError: If the merged chart is invalid
        """
        ...

    async def apply_meal_transition(
        self,
        chart_id: str,
        meal_id: str,
        changes: Dict[str, Any],
        slot: AssignmentSlot,
        caller_id: str,
    ) -> Optional[DietChart]:
        """
        Atomically write workflow fields on one meal.

        The write only happens if the chart is active, contains the meal,
        and the meal's ``slot`` is empty or already held by ``caller_id``.

        Returns:
            Updated chart, or None if the guard did not match
        """
        ...

    async def soft_delete(self, chart_id: str) -> bool:
        """
        Flip ``is_active`` to False.

        Returns:
            True if an active chart was deactivated, False if absent or
            already inactive
        """
        ...
