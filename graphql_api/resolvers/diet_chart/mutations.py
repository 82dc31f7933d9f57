"""Mutation resolvers for the diet chart domain.

These resolvers execute the Lifecycle Manager commands:
- createDietChart: Create chart (manager)
- updateDietChart: Edit chart fields (manager)
- updateMealStatus: Move one meal through the workflow (pantry / delivery)
- deleteDietChart: Soft delete chart (manager)

Domain failures are returned as OperationError, never raised.
"""

from typing import Any, Dict, List

import strawberry
from strawberry.types import Info

from application.diet_chart.commands.create_diet_chart import (
    CreateDietChartCommand,
    CreateDietChartCommandHandler,
)
from application.diet_chart.commands.delete_diet_chart import (
    DeleteDietChartCommand,
    DeleteDietChartCommandHandler,
)
from application.diet_chart.commands.update_diet_chart import (
    UpdateDietChartCommand,
    UpdateDietChartCommandHandler,
)
from application.diet_chart.commands.update_meal_status import (
    UpdateMealStatusCommand,
    UpdateMealStatusCommandHandler,
)
from domain.diet_chart.core.value_objects.meal_draft import MealDraft
from domain.shared.errors import WorkflowError
from graphql_api.resolvers.diet_chart.mapping import map_diet_chart_to_graphql
from graphql_api.types_diet_chart_mutations import (
    CreateDietChartInput,
    DeleteDietChartResult,
    DeleteDietChartSuccess,
    DietChartResult,
    DietChartSuccess,
    MealInput,
    UpdateDietChartInput,
    UpdateMealStatusInput,
)
from graphql_api.utils.errors import to_operation_error
from infrastructure.identity.auth_permission import IsAuthenticated


def _to_drafts(meals: List[MealInput]) -> tuple:
    return tuple(
        MealDraft(
            type=meal.type,
            ingredients=tuple(meal.ingredients or ()),
            special_instructions=meal.special_instructions,
            delivery_notes=meal.delivery_notes,
            id=meal.id,
        )
        for meal in meals
    )


@strawberry.type
class DietChartMutations:
    """Mutations for diet chart operations."""

    @strawberry.mutation(permission_classes=[IsAuthenticated])
    async def create_diet_chart(
        self, info: Info, input: CreateDietChartInput
    ) -> DietChartResult:
        """Create a diet chart (manager only).

        Example:
            mutation {
              createDietChart(input: {
                patientId: "p-12"
                date: "2026-10-19"
                meals: [{ type: BREAKFAST, ingredients: ["oats", "banana"] }]
                dietaryRestrictions: ["low-sodium"]
              }) {
                ... on DietChartSuccess { dietChart { id } }
                ... on OperationError { code message fields { field message } }
              }
            }
        """
        context = info.context
        handler = CreateDietChartCommandHandler(
            repository=context.get("diet_chart_repository"),
            tz=context.get("ward_timezone"),
        )
        try:
            chart = await handler.handle(
                CreateDietChartCommand(
                    caller=context.caller,
                    patient_id=input.patient_id,
                    date=input.date,
                    meals=_to_drafts(input.meals),
                    dietary_restrictions=tuple(input.dietary_restrictions),
                    calories=input.calories,
                )
            )
        except WorkflowError as e:
            return to_operation_error(e)

        return DietChartSuccess(
            diet_chart=await map_diet_chart_to_graphql(chart, context.get("people_directory"))
        )

    @strawberry.mutation(permission_classes=[IsAuthenticated])
    async def update_diet_chart(
        self, info: Info, id: str, input: UpdateDietChartInput
    ) -> DietChartResult:
        """Update chart fields (manager only). Omitted fields are kept.

        Replacing ``meals`` keeps the workflow state of meals whose id is
        passed back.
        """
        context = info.context

        # Build updates dict from provided fields
        updates: Dict[str, Any] = {}
        if input.patient_id is not strawberry.UNSET:
            updates["patient_id"] = input.patient_id
        if input.date is not strawberry.UNSET:
            updates["date"] = input.date
        if input.meals is not strawberry.UNSET:
            updates["meals"] = _to_drafts(input.meals or [])
        if input.dietary_restrictions is not strawberry.UNSET:
            updates["dietary_restrictions"] = list(input.dietary_restrictions or [])
        if input.calories is not strawberry.UNSET:
            updates["calories"] = input.calories

        handler = UpdateDietChartCommandHandler(
            repository=context.get("diet_chart_repository"),
            tz=context.get("ward_timezone"),
        )
        try:
            chart = await handler.handle(
                UpdateDietChartCommand(caller=context.caller, chart_id=id, updates=updates)
            )
        except WorkflowError as e:
            return to_operation_error(e)

        return DietChartSuccess(
            diet_chart=await map_diet_chart_to_graphql(chart, context.get("people_directory"))
        )

    @strawberry.mutation(permission_classes=[IsAuthenticated])
    async def update_meal_status(
        self, info: Info, input: UpdateMealStatusInput
    ) -> DietChartResult:
        """Move one meal to a new preparation status.

        Pantry staff may set PREPARING and READY, delivery staff DELIVERED;
        anything else fails with FORBIDDEN.

        Example:
            mutation {
              updateMealStatus(input: {chartId: "...", mealId: "...", status: READY}) {
                ... on DietChartSuccess { dietChart { meals { id preparationStatus } } }
                ... on OperationError { code message }
              }
            }
        """
        context = info.context
        handler = UpdateMealStatusCommandHandler(repository=context.get("diet_chart_repository"))
        try:
            chart = await handler.handle(
                UpdateMealStatusCommand(
                    caller=context.caller,
                    chart_id=input.chart_id,
                    meal_id=input.meal_id,
                    status=input.status,
                )
            )
        except WorkflowError as e:
            return to_operation_error(e)

        return DietChartSuccess(
            diet_chart=await map_diet_chart_to_graphql(chart, context.get("people_directory"))
        )

    @strawberry.mutation(permission_classes=[IsAuthenticated])
    async def delete_diet_chart(self, info: Info, id: str) -> DeleteDietChartResult:
        """Soft delete a chart (manager only)."""
        context = info.context
        handler = DeleteDietChartCommandHandler(repository=context.get("diet_chart_repository"))
        try:
            receipt = await handler.handle(DeleteDietChartCommand(caller=context.caller, chart_id=id))
        except WorkflowError as e:
            return to_operation_error(e)

        return DeleteDietChartSuccess(chart_id=receipt.chart_id, message=receipt.message)
