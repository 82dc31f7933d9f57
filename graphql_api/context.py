"""GraphQL context factory for dependency injection.

Provides all required dependencies for GraphQL resolvers:
- Diet chart repository (chart storage)
- People directory (patient / staff display names)
- Ward time zone (calendar-day boundaries)
- Caller identity (set by AuthMiddleware)
"""

from datetime import timezone, tzinfo
from typing import Any, Optional

from fastapi import Request
from strawberry.fastapi import BaseContext

from domain.identity.core.caller import CallerIdentity
from domain.shared.ports.diet_chart_repository import IDietChartRepository
from domain.shared.ports.people_directory import IPeopleDirectory


class GraphQLContext(BaseContext):
    """GraphQL context with all dependencies.

    This context is injected into all GraphQL resolvers via the
    `info` parameter. Resolvers access dependencies using
    `info.context.get("diet_chart_repository")`.

    Attributes:
        diet_chart_repository: Repository for diet chart persistence
        people_directory: Patient / staff lookups for display fields
        ward_timezone: Zone whose local midnight bounds a day
        request: FastAPI request object (None in direct schema execution)
        caller: Identity from AuthMiddleware (None if anonymous)
    """

    def __init__(
        self,
        diet_chart_repository: IDietChartRepository,
        people_directory: IPeopleDirectory,
        ward_timezone: tzinfo = timezone.utc,
        request: Optional[Request] = None,
        caller: Optional[CallerIdentity] = None,
    ) -> None:
        """Initialize GraphQL context with all dependencies."""
        super().__init__()
        self.diet_chart_repository = diet_chart_repository
        self.people_directory = people_directory
        self.ward_timezone = ward_timezone
        self.request = request
        # Explicit caller wins; otherwise take what the middleware stored
        if caller is None and request is not None:
            caller = getattr(request.state, "caller", None)
        self.caller = caller

    def get(self, key: str) -> Any:
        """Get dependency by name (for resolver compatibility).

        Example:
            >>> repository = info.context.get("diet_chart_repository")
        """
        return getattr(self, key, None)


def create_context(
    diet_chart_repository: IDietChartRepository,
    people_directory: IPeopleDirectory,
    ward_timezone: tzinfo = timezone.utc,
    request: Optional[Request] = None,
    caller: Optional[CallerIdentity] = None,
) -> GraphQLContext:
    """Create GraphQL context with all dependencies.

    Example:
        >>> context = create_context(
        ...     diet_chart_repository=InMemoryDietChartRepository(),
        ...     people_directory=InMemoryPeopleDirectory(),
        ...     caller=CallerIdentity(id="m1", role=StaffRole.MANAGER),
        ... )
        >>> await schema.execute(query, context_value=context)
    """
    return GraphQLContext(
        diet_chart_repository=diet_chart_repository,
        people_directory=people_directory,
        ward_timezone=ward_timezone,
        request=request,
        caller=caller,
    )
