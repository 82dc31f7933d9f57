"""Strawberry GraphQL permission for authenticated staff."""

import logging
from typing import Any

from strawberry.permission import BasePermission
from strawberry.types import Info

logger = logging.getLogger(__name__)


class IsAuthenticated(BasePermission):
    """Permission checker for authenticated callers.

    Verifies that the GraphQL context carries the CallerIdentity that
    AuthMiddleware stored on request.state. Role checks are left to the
    command and query handlers.

    Examples:
        @strawberry.field(permission_classes=[IsAuthenticated])
        async def pantry_queue(self, info: Info) -> List[DietChartType]:
            caller = info.context.caller
    """

    message = "Not authenticated"
    error_extensions = {"code": "UNAUTHENTICATED"}

    async def has_permission(self, source: Any, info: Info, **kwargs: Any) -> bool:
        caller = getattr(info.context, "caller", None)

        if caller is None:
            logger.warning("Permission denied: No caller in context")
            return False

        logger.debug(f"Permission granted for caller: {caller.id}")
        return True
