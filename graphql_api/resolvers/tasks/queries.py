"""Task query resolvers (Workflow Query Engine).

Exposed under the ``tasks`` namespace:
- pantryQueue / pantryCompleted: pantry staff
- deliveryQueue / deliveryCompleted: delivery staff
- stats: managers
"""

from datetime import date as Date
from typing import List, Optional

import strawberry
from strawberry.types import Info

from application.tasks.queries.delivery_completed import (
    DeliveryCompletedQuery,
    DeliveryCompletedQueryHandler,
)
from application.tasks.queries.delivery_queue import (
    DeliveryQueueQuery,
    DeliveryQueueQueryHandler,
)
from application.tasks.queries.manager_stats import ManagerStatsQuery, ManagerStatsQueryHandler
from application.tasks.queries.pantry_completed import (
    PantryCompletedQuery,
    PantryCompletedQueryHandler,
)
from application.tasks.queries.pantry_queue import PantryQueueQuery, PantryQueueQueryHandler
from domain.shared.errors import WorkflowError
from graphql_api.resolvers.diet_chart.mapping import (
    map_completed_work_to_graphql,
    map_diet_charts_to_graphql,
)
from graphql_api.types_diet_chart import CompletedWorkType, DietChartType, StatusCountType
from graphql_api.utils.errors import to_graphql_error


@strawberry.type
class TaskQueries:
    """Role-scoped task lists and statistics.

    Examples:
        query {
          tasks {
            pantryQueue { id meals { id type preparationStatus } }
            pantryCompleted(day: "2026-10-19") { chartId meals { id } }
          }
        }
    """

    @strawberry.field
    async def pantry_queue(self, info: Info) -> List[DietChartType]:
        """Charts with pending or preparing meals assigned to the caller.

        Charts are returned whole; filter meals on assignedPantryId.
        """
        context = info.context
        handler = PantryQueueQueryHandler(repository=context.get("diet_chart_repository"))
        try:
            charts = await handler.handle(PantryQueueQuery(caller=context.caller))
        except WorkflowError as e:
            raise to_graphql_error(e) from e
        return await map_diet_charts_to_graphql(charts, context.get("people_directory"))

    @strawberry.field
    async def delivery_queue(self, info: Info) -> List[DietChartType]:
        """Charts with ready meals no delivery member has claimed."""
        context = info.context
        handler = DeliveryQueueQueryHandler(repository=context.get("diet_chart_repository"))
        try:
            charts = await handler.handle(DeliveryQueueQuery(caller=context.caller))
        except WorkflowError as e:
            raise to_graphql_error(e) from e
        return await map_diet_charts_to_graphql(charts, context.get("people_directory"))

    @strawberry.field
    async def pantry_completed(
        self, info: Info, day: Optional[Date] = None
    ) -> List[CompletedWorkType]:
        """Meals the caller finished for charts dated ``day`` (default today)."""
        context = info.context
        handler = PantryCompletedQueryHandler(
            repository=context.get("diet_chart_repository"),
            tz=context.get("ward_timezone"),
        )
        try:
            records = await handler.handle(PantryCompletedQuery(caller=context.caller, day=day))
        except WorkflowError as e:
            raise to_graphql_error(e) from e
        return await map_completed_work_to_graphql(records, context.get("people_directory"))

    @strawberry.field
    async def delivery_completed(self, info: Info) -> List[DietChartType]:
        """Charts holding meals the caller delivered, latest delivery first."""
        context = info.context
        handler = DeliveryCompletedQueryHandler(repository=context.get("diet_chart_repository"))
        try:
            charts = await handler.handle(DeliveryCompletedQuery(caller=context.caller))
        except WorkflowError as e:
            raise to_graphql_error(e) from e
        return await map_diet_charts_to_graphql(charts, context.get("people_directory"))

    @strawberry.field
    async def stats(self, info: Info, day: Optional[Date] = None) -> List[StatusCountType]:
        """Meal counts by status for charts dated on or after ``day``."""
        context = info.context
        handler = ManagerStatsQueryHandler(
            repository=context.get("diet_chart_repository"),
            tz=context.get("ward_timezone"),
        )
        try:
            counts = await handler.handle(ManagerStatsQuery(caller=context.caller, day=day))
        except WorkflowError as e:
            raise to_graphql_error(e) from e
        return [StatusCountType(status=c.status, count=c.count) for c in counts]
