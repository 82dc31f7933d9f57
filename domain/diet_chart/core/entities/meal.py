"""Meal entity - one meal slot embedded in a diet chart."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional
from uuid import uuid4

from domain.diet_chart.core.exceptions.domain_errors import DietChartValidationError
from domain.diet_chart.core.value_objects.enums import AssignmentSlot, MealType, PreparationStatus
from domain.diet_chart.core.value_objects.meal_draft import MealDraft


# Fields a transition is allowed to write on a meal
WORKFLOW_FIELDS = frozenset(
    {"preparation_status", "assigned_pantry", "assigned_delivery", "delivery_time"}
)


@dataclass
class Meal:
    """
    Entity: one breakfast, lunch or dinner slot within a chart.

    Identity: id unique within the parent chart
    Ownership: owned by its DietChart, never persisted on its own

    Invariants:
    - meal_type and preparation_status are valid enum members
    - ingredient labels are non-empty
    - delivery_time is timezone-aware when set
    """

    id: str
    meal_type: MealType
    ingredients: List[str] = field(default_factory=list)
    special_instructions: str = ""
    preparation_status: PreparationStatus = PreparationStatus.PENDING
    assigned_pantry: Optional[str] = None
    assigned_delivery: Optional[str] = None
    delivery_time: Optional[datetime] = None
    delivery_notes: Optional[str] = None

    def __post_init__(self) -> None:
        errors: Dict[str, str] = {}
        try:
            self.meal_type = MealType(self.meal_type)
        except ValueError:
            errors["type"] = f"Invalid meal type '{self.meal_type}'"
        try:
            self.preparation_status = PreparationStatus(self.preparation_status)
        except ValueError:
            errors["preparation_status"] = f"Invalid status '{self.preparation_status}'"
        for index, ingredient in enumerate(self.ingredients):
            if not isinstance(ingredient, str) or not ingredient.strip():
                errors[f"ingredients[{index}]"] = "Ingredient cannot be empty"
        if self.delivery_time is not None and self.delivery_time.tzinfo is None:
            errors["delivery_time"] = "delivery_time must be timezone-aware (use UTC)"
        if errors:
            raise DietChartValidationError(errors)

    @classmethod
    def from_draft(cls, draft: MealDraft, existing: Optional["Meal"] = None) -> "Meal":
        """
        Build a meal from manager content.

        When ``existing`` is given, its id and workflow state are carried
        over so that editing a chart never resets or reassigns work in
        progress.
        """
        meal = cls(
            id=existing.id if existing else str(uuid4()),
            meal_type=draft.meal_type,
            ingredients=list(draft.ingredients),
            special_instructions=draft.special_instructions or "",
            delivery_notes=draft.delivery_notes,
        )
        if existing is not None:
            meal.preparation_status = existing.preparation_status
            meal.assigned_pantry = existing.assigned_pantry
            meal.assigned_delivery = existing.assigned_delivery
            meal.delivery_time = existing.delivery_time
        return meal

    def holder(self, slot: AssignmentSlot) -> Optional[str]:
        """Staff id currently held in an assignment slot."""
        return getattr(self, slot.value)

    def apply_changes(self, changes: Mapping[str, Any]) -> None:
        """
        Apply workflow field changes produced by a transition.

        Raises:
            ValueError: If a change targets a non-workflow field
        """
        for name, value in changes.items():
            if name not in WORKFLOW_FIELDS:
                raise ValueError(f"Invalid workflow field: {name}")
            setattr(self, name, value)
