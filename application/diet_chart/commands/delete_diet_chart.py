"""Delete diet chart command and handler.

Deletion is always soft: the chart is flagged inactive and disappears from
every workflow read, but the document is kept for audit.
"""

from dataclasses import dataclass
from typing import Optional
import logging

from domain.diet_chart.core.exceptions.domain_errors import DietChartNotFoundError
from domain.identity.core.access import require_role
from domain.identity.core.caller import CallerIdentity, StaffRole
from domain.shared.ports.diet_chart_repository import IDietChartRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeleteDietChartCommand:
    """Command: Soft-delete a diet chart (manager only)."""

    caller: Optional[CallerIdentity]
    chart_id: str


@dataclass(frozen=True)
class DeletionReceipt:
    """Confirmation returned instead of the chart body."""

    chart_id: str
    message: str = "Diet chart deleted successfully"


class DeleteDietChartCommandHandler:
    """Handler for DeleteDietChartCommand."""

    def __init__(self, repository: IDietChartRepository):
        self._repository = repository

    async def handle(self, command: DeleteDietChartCommand) -> DeletionReceipt:
        """
        Execute delete command.

        Raises:
            UnauthenticatedError / ForbiddenError: If caller is not a manager
            DietChartNotFoundError: If the chart is absent or already inactive
        """
        caller = require_role(command.caller, StaffRole.MANAGER)

        deleted = await self._repository.soft_delete(command.chart_id)
        if not deleted:
            logger.info("Diet chart not found for deletion", extra={"chart_id": command.chart_id})
            raise DietChartNotFoundError(command.chart_id)

        logger.info(
            "Diet chart deleted",
            extra={"chart_id": command.chart_id, "caller_id": caller.id},
        )
        return DeletionReceipt(chart_id=command.chart_id)
