"""Main GraphQL schema factory for the meal workflow backend.

Usage:
    from graphql_api.schema import create_schema
    schema = create_schema()
"""

import strawberry

from graphql_api.resolvers.diet_chart.mutations import DietChartMutations
from graphql_api.resolvers.diet_chart.queries import DietChartQueries
from graphql_api.resolvers.tasks.queries import TaskQueries
from infrastructure.identity.auth_permission import IsAuthenticated


@strawberry.type
class Query(DietChartQueries):
    @strawberry.field(
        permission_classes=[IsAuthenticated],
        description="Role-scoped task lists and statistics",
    )  # type: ignore[misc]
    def tasks(self) -> TaskQueries:
        return TaskQueries()


@strawberry.type
class Mutation(DietChartMutations):
    pass


def create_schema() -> strawberry.Schema:
    """Create Strawberry schema with diet chart and task resolvers."""
    return strawberry.Schema(query=Query, mutation=Mutation)
