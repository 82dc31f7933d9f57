"""Create diet chart command and handler."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone, tzinfo
from typing import Optional, Tuple, Union
import logging

from domain.diet_chart.core.entities.diet_chart import DietChart
from domain.diet_chart.core.value_objects.meal_draft import MealDraft
from domain.identity.core.access import require_role
from domain.identity.core.caller import CallerIdentity, StaffRole
from domain.shared.ports.diet_chart_repository import IDietChartRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreateDietChartCommand:
    """
    Command: Create a diet chart (manager only).

    Required fields are Optional here so that their absence is reported as
    a validation error listing every missing field.

    Attributes:
        caller: Authenticated caller (must be a manager)
        patient_id: Patient reference
        date: Calendar day (bare date = local midnight)
        meals: Meal drafts in display order
        dietary_restrictions: Restriction labels
        calories: Daily calorie target
    """

    caller: Optional[CallerIdentity]
    patient_id: Optional[str]
    date: Union[date, datetime, None]
    meals: Tuple[MealDraft, ...] = field(default_factory=tuple)
    dietary_restrictions: Tuple[str, ...] = field(default_factory=tuple)
    calories: Optional[float] = None


class CreateDietChartCommandHandler:
    """Handler for CreateDietChartCommand."""

    def __init__(self, repository: IDietChartRepository, tz: tzinfo = timezone.utc):
        """
        Initialize handler.

        Args:
            repository: Diet chart repository port
            tz: Ward time zone used to interpret bare dates
        """
        self._repository = repository
        self._tz = tz

    async def handle(self, command: CreateDietChartCommand) -> DietChart:
        """
        Execute create command.

        Flow:
        1. Require manager role
        2. Build and validate the chart (created_by = caller)
        3. Persist

        Raises:
            UnauthenticatedError / ForbiddenError: If caller is not a manager
            DietChartValidationError: If fields are missing or malformed
        """
        caller = require_role(command.caller, StaffRole.MANAGER)

        chart = DietChart.create(
            patient_id=command.patient_id,
            date=command.date,
            created_by=caller.id,
            meals=command.meals,
            dietary_restrictions=command.dietary_restrictions,
            calories=command.calories,
            tz=self._tz,
        )

        stored = await self._repository.create(chart)

        logger.info(
            "Diet chart created",
            extra={
                "chart_id": stored.id,
                "patient_id": stored.patient_id,
                "meal_count": len(stored.meals),
                "created_by": caller.id,
            },
        )

        return stored
