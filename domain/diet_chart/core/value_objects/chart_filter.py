"""Chart and meal predicates used by the store and the query engine.

The same objects serve two purposes: in-memory stores evaluate them
directly with ``matches``, the MongoDB store translates them into a query
document. Activity (``is_active``) is never part of a filter; the store
applies it uniformly.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import FrozenSet, Optional

from domain.diet_chart.core.entities.diet_chart import DietChart
from domain.diet_chart.core.entities.meal import Meal
from domain.diet_chart.core.value_objects.enums import PreparationStatus


@dataclass(frozen=True)
class MealCriteria:
    """
    Conditions that must all hold for the same meal.

    Attributes:
        statuses: Allowed preparation statuses (None = any)
        assigned_pantry: Required pantry assignee
        assigned_delivery: Required delivery assignee
        delivery_unassigned: Require that no delivery assignee is set
    """

    statuses: Optional[FrozenSet[PreparationStatus]] = None
    assigned_pantry: Optional[str] = None
    assigned_delivery: Optional[str] = None
    delivery_unassigned: bool = False

    def __post_init__(self) -> None:
        if self.delivery_unassigned and self.assigned_delivery is not None:
            raise ValueError("delivery_unassigned conflicts with assigned_delivery")

    def matches(self, meal: Meal) -> bool:
        if self.statuses is not None and meal.preparation_status not in self.statuses:
            return False
        if self.assigned_pantry is not None and meal.assigned_pantry != self.assigned_pantry:
            return False
        if self.assigned_delivery is not None and meal.assigned_delivery != self.assigned_delivery:
            return False
        if self.delivery_unassigned and meal.assigned_delivery is not None:
            return False
        return True


@dataclass(frozen=True)
class ChartFilter:
    """
    Chart-level filter.

    Attributes:
        patient_id: Restrict to one patient
        date_from: Chart date lower bound (inclusive)
        date_until: Chart date upper bound (exclusive)
        meal: At least one meal must satisfy these criteria
    """

    patient_id: Optional[str] = None
    date_from: Optional[datetime] = None
    date_until: Optional[datetime] = None
    meal: Optional[MealCriteria] = None

    def matches(self, chart: DietChart) -> bool:
        if self.patient_id is not None and chart.patient_id != self.patient_id:
            return False
        if self.date_from is not None and chart.date < self.date_from:
            return False
        if self.date_until is not None and chart.date >= self.date_until:
            return False
        if self.meal is not None and not any(self.meal.matches(m) for m in chart.meals):
            return False
        return True
