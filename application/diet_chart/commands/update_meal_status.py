"""Update meal status command and handler.

The only write path for staff roles. Every request is checked against the
transition table before anything is written, and the write itself touches
a single meal so that concurrent transitions on sibling meals never
overwrite each other.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional, Union
import logging

from domain.diet_chart.core.entities.diet_chart import DietChart
from domain.diet_chart.core.exceptions.domain_errors import (
    DietChartNotFoundError,
    DietChartValidationError,
    MealAlreadyClaimedError,
    MealNotFoundError,
    TransitionForbiddenError,
)
from domain.diet_chart.services.transition_authorizer import (
    allowed_targets,
    authorize_transition,
)
from domain.diet_chart.core.value_objects.enums import PreparationStatus
from domain.identity.core.access import require_caller
from domain.identity.core.caller import CallerIdentity
from domain.shared.ports.diet_chart_repository import IDietChartRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpdateMealStatusCommand:
    """
    Command: Move one meal to a new preparation status.

    Attributes:
        caller: Authenticated caller (any role; the table decides)
        chart_id: Parent chart
        meal_id: Meal within the chart
        status: Requested target status
    """

    caller: Optional[CallerIdentity]
    chart_id: str
    meal_id: str
    status: Union[PreparationStatus, str]


class UpdateMealStatusCommandHandler:
    """Handler for UpdateMealStatusCommand."""

    def __init__(
        self,
        repository: IDietChartRepository,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        """
        Initialize handler.

        Args:
            repository: Diet chart repository port
            clock: Source of the delivery timestamp
        """
        self._repository = repository
        self._clock = clock

    async def handle(self, command: UpdateMealStatusCommand) -> DietChart:
        """
        Execute transition.

        Flow:
        1. Require an authenticated caller whose role may transition meals,
           and a known status
        2. Load active chart, locate meal
        3. Authorize (role, target) against the transition table
        4. Reject when another staff member already holds the slot
        5. Apply the single-meal update atomically

        Returns:
            Chart as stored after the transition

        Raises:
            UnauthenticatedError: No caller
            DietChartValidationError: Unknown status value
            DietChartNotFoundError / MealNotFoundError: Target absent
            TransitionForbiddenError: Role may not request this status
            MealAlreadyClaimedError: Slot held by another staff member
        """
        caller = require_caller(command.caller)
        if not allowed_targets(caller.role):
            raise TransitionForbiddenError(
                caller.role.value, getattr(command.status, "value", str(command.status))
            )
        target = self._parse_status(command.status)

        chart = await self._repository.get_by_id(command.chart_id)
        if chart is None:
            raise DietChartNotFoundError(command.chart_id)

        meal = chart.find_meal(command.meal_id)
        if meal is None:
            raise MealNotFoundError(command.chart_id, command.meal_id)

        transition = authorize_transition(caller.role, target)
        if transition is None:
            logger.warning(
                "Meal transition denied",
                extra={
                    "chart_id": command.chart_id,
                    "meal_id": command.meal_id,
                    "role": caller.role.value,
                    "target_status": target.value,
                },
            )
            raise TransitionForbiddenError(caller.role.value, target.value)

        holder = transition.conflicting_holder(meal, caller.id)
        if holder is not None:
            raise MealAlreadyClaimedError(command.meal_id, transition.slot.value, holder)

        updated = await self._repository.apply_meal_transition(
            command.chart_id,
            command.meal_id,
            transition.changes(caller.id, self._clock()),
            transition.slot,
            caller.id,
        )
        if updated is None:
            # Chart deleted or slot claimed between the read and the write
            await self._raise_lost_race(command, transition.slot.value)

        logger.info(
            "Meal status updated",
            extra={
                "chart_id": command.chart_id,
                "meal_id": command.meal_id,
                "role": caller.role.value,
                "target_status": target.value,
                "caller_id": caller.id,
            },
        )
        return updated  # type: ignore[return-value]

    @staticmethod
    def _parse_status(status: Union[PreparationStatus, str]) -> PreparationStatus:
        try:
            return PreparationStatus(status)
        except ValueError:
            raise DietChartValidationError({"status": f"Invalid status '{status}'"})

    async def _raise_lost_race(self, command: UpdateMealStatusCommand, slot: str) -> None:
        chart = await self._repository.get_by_id(command.chart_id)
        if chart is None:
            raise DietChartNotFoundError(command.chart_id)
        meal = chart.find_meal(command.meal_id)
        if meal is None:
            raise MealNotFoundError(command.chart_id, command.meal_id)
        raise MealAlreadyClaimedError(command.meal_id, slot, getattr(meal, slot))
