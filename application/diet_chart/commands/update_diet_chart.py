"""Update diet chart command and handler.

Managers edit charts wholesale: any of patient, date, meals, dietary
restrictions and calories may be replaced in one call.
"""

from dataclasses import dataclass
from datetime import timezone, tzinfo
from typing import Any, Dict, Optional
import logging

from domain.diet_chart.core.entities.diet_chart import EDITABLE_FIELDS, DietChart
from domain.diet_chart.core.exceptions.domain_errors import DietChartNotFoundError
from domain.identity.core.access import require_role
from domain.identity.core.caller import CallerIdentity, StaffRole
from domain.shared.ports.diet_chart_repository import IDietChartRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpdateDietChartCommand:
    """
    Command: Update diet chart fields (manager only).

    Attributes:
        caller: Authenticated caller
        chart_id: Chart to update
        updates: Field name → new value
    """

    caller: Optional[CallerIdentity]
    chart_id: str
    updates: Dict[str, Any]


class UpdateDietChartCommandHandler:
    """Handler for UpdateDietChartCommand."""

    def __init__(self, repository: IDietChartRepository, tz: tzinfo = timezone.utc):
        self._repository = repository
        self._tz = tz

    async def handle(self, command: UpdateDietChartCommand) -> DietChart:
        """
        Execute update command.

        Fields outside the editable set are ignored with a warning.

        Raises:
            UnauthenticatedError / ForbiddenError: If caller is not a manager
            DietChartNotFoundError: If the chart is absent or inactive
            DietChartValidationError: If the merged chart is invalid
        """
        caller = require_role(command.caller, StaffRole.MANAGER)

        updates: Dict[str, Any] = {}
        for name, value in command.updates.items():
            if name not in EDITABLE_FIELDS:
                logger.warning(
                    "Field not allowed for update",
                    extra={"field": name, "allowed_fields": sorted(EDITABLE_FIELDS)},
                )
                continue
            updates[name] = value

        logger.info(
            "Updating diet chart",
            extra={
                "chart_id": command.chart_id,
                "update_fields": list(updates),
                "caller_id": caller.id,
            },
        )

        chart = await self._repository.update(command.chart_id, updates, tz=self._tz)
        if chart is None:
            raise DietChartNotFoundError(command.chart_id)

        return chart
