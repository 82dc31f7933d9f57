"""Diet chart bounded context.

A diet chart is one patient's meal plan for one calendar day. Meals are
embedded in the chart and advance through pending → preparing → ready →
delivered as pantry and delivery staff act on them.
"""

from domain.diet_chart.core.entities.diet_chart import DietChart
from domain.diet_chart.core.entities.meal import Meal
from domain.diet_chart.core.value_objects.meal_draft import MealDraft
from domain.diet_chart.core.value_objects.enums import MealType, PreparationStatus

__all__ = [
    "DietChart",
    "Meal",
    "MealDraft",
    "MealType",
    "PreparationStatus",
]
