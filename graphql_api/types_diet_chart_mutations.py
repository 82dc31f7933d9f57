"""GraphQL types for diet chart mutations.

These types support CQRS commands:
- Create diet chart
- Update diet chart
- Update meal status
- Delete diet chart
"""

from __future__ import annotations

from datetime import date as Date
from typing import Annotated, List, Optional, Union

import strawberry

from graphql_api.types_diet_chart import DietChartType, MealType, PreparationStatus


__all__ = [
    # Input types
    "MealInput",
    "CreateDietChartInput",
    "UpdateDietChartInput",
    "UpdateMealStatusInput",
    # Success types
    "DietChartSuccess",
    "DeleteDietChartSuccess",
    # Error types
    "FieldError",
    "OperationError",
    # Union types
    "DietChartResult",
    "DeleteDietChartResult",
]


# ============================================
# MUTATION INPUT TYPES
# ============================================


@strawberry.input
class MealInput:
    """Meal content supplied by a manager.

    Pass the id of an existing meal to keep its preparation status and
    assignments when replacing a chart's meals.
    """

    type: MealType
    ingredients: List[str] = strawberry.field(default_factory=list)
    special_instructions: Optional[str] = ""
    delivery_notes: Optional[str] = None
    id: Optional[str] = None


@strawberry.input
class CreateDietChartInput:
    """Input for create diet chart mutation.

    patient_id and date are required; they are declared optional so that
    every missing field is reported in one validation error.
    """

    patient_id: Optional[str] = None
    date: Optional[Date] = None
    meals: List[MealInput] = strawberry.field(default_factory=list)
    dietary_restrictions: List[str] = strawberry.field(default_factory=list)
    calories: Optional[float] = None


@strawberry.input
class UpdateDietChartInput:
    """Input for update diet chart mutation. Omitted fields are kept."""

    patient_id: Optional[str] = strawberry.UNSET
    date: Optional[Date] = strawberry.UNSET
    meals: Optional[List[MealInput]] = strawberry.UNSET
    dietary_restrictions: Optional[List[str]] = strawberry.UNSET
    calories: Optional[float] = strawberry.UNSET


@strawberry.input
class UpdateMealStatusInput:
    """Input for update meal status mutation."""

    chart_id: str
    meal_id: str
    status: PreparationStatus


# ============================================
# MUTATION RESULT TYPES
# ============================================


@strawberry.type
class DietChartSuccess:
    """Chart after a successful create / update / transition."""

    diet_chart: DietChartType


@strawberry.type
class DeleteDietChartSuccess:
    """Confirmation of a soft delete."""

    chart_id: str
    message: str


@strawberry.type
class FieldError:
    """One invalid field, keyed by its path (e.g. ``meals[0].type``)."""

    field: str
    message: str


@strawberry.type
class OperationError:
    """Failed mutation.

    code is one of UNAUTHENTICATED, FORBIDDEN, NOT_FOUND, VALIDATION_ERROR,
    INTERNAL_ERROR.
    """

    code: str
    message: str
    fields: List[FieldError] = strawberry.field(default_factory=list)


# ============================================
# UNION TYPES
# ============================================

DietChartResult = Annotated[
    Union[DietChartSuccess, OperationError],
    strawberry.union("DietChartResult"),
]

DeleteDietChartResult = Annotated[
    Union[DeleteDietChartSuccess, OperationError],
    strawberry.union("DeleteDietChartResult"),
]
