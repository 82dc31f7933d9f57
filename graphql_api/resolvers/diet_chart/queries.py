"""Query resolvers for the diet chart domain.

- dietCharts: Active charts, optionally by patient and day
- dietChart: Single active chart by id
"""

from datetime import date as Date
from typing import List, Optional

import strawberry
from strawberry.types import Info

from application.diet_chart.queries.get_diet_chart import (
    GetDietChartQuery,
    GetDietChartQueryHandler,
)
from application.diet_chart.queries.list_diet_charts import (
    ListDietChartsQuery,
    ListDietChartsQueryHandler,
)
from domain.shared.errors import WorkflowError
from graphql_api.resolvers.diet_chart.mapping import (
    map_diet_chart_to_graphql,
    map_diet_charts_to_graphql,
)
from graphql_api.types_diet_chart import DietChartType
from graphql_api.utils.errors import to_graphql_error
from infrastructure.identity.auth_permission import IsAuthenticated


@strawberry.type
class DietChartQueries:
    """Read access to diet charts for every authenticated role."""

    @strawberry.field(permission_classes=[IsAuthenticated])
    async def diet_charts(
        self,
        info: Info,
        patient_id: Optional[str] = None,
        day: Optional[Date] = None,
    ) -> List[DietChartType]:
        """List active diet charts, newest first.

        Args:
            patient_id: Restrict to one patient
            day: Restrict to charts dated on this ward-local day

        Example:
            query {
              dietCharts(day: "2026-10-19") {
                id
                patient { name roomNumber bedNumber }
                meals { type preparationStatus assignedPantry { name } }
              }
            }
        """
        context = info.context
        handler = ListDietChartsQueryHandler(
            repository=context.get("diet_chart_repository"),
            tz=context.get("ward_timezone"),
        )
        try:
            charts = await handler.handle(
                ListDietChartsQuery(caller=context.caller, patient_id=patient_id, day=day)
            )
        except WorkflowError as e:
            raise to_graphql_error(e) from e

        return await map_diet_charts_to_graphql(charts, context.get("people_directory"))

    @strawberry.field(permission_classes=[IsAuthenticated])
    async def diet_chart(self, info: Info, id: str) -> DietChartType:
        """Get one active diet chart. Errors with NOT_FOUND if absent or deleted."""
        context = info.context
        handler = GetDietChartQueryHandler(repository=context.get("diet_chart_repository"))
        try:
            chart = await handler.handle(GetDietChartQuery(caller=context.caller, chart_id=id))
        except WorkflowError as e:
            raise to_graphql_error(e) from e

        return await map_diet_chart_to_graphql(chart, context.get("people_directory"))
