"""MealDraft value object - manager-supplied meal content."""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple, Union

from domain.diet_chart.core.value_objects.enums import MealType


@dataclass(frozen=True)
class MealDraft:
    """
    Meal content as written by a manager when creating or editing a chart.

    Drafts carry only what a manager may set. Workflow state (status,
    assignments, delivery time) is never part of a draft.

    Attributes:
        type: Meal slot, as enum or raw string (validated later)
        ingredients: Ingredient labels, each non-empty
        special_instructions: Free text for the pantry
        delivery_notes: Free text for delivery staff
        id: Id of an existing meal to keep its workflow state on update
    """

    type: Union[MealType, str, None]
    ingredients: Tuple[str, ...] = field(default_factory=tuple)
    special_instructions: Optional[str] = ""
    delivery_notes: Optional[str] = None
    id: Optional[str] = None

    def __post_init__(self) -> None:
        # Accept lists from callers while keeping the draft hashable
        object.__setattr__(self, "ingredients", tuple(self.ingredients or ()))

    def validation_errors(self, prefix: str) -> Dict[str, str]:
        """Collect field errors, keyed by ``{prefix}.{field}``."""
        errors: Dict[str, str] = {}

        if self.type is None or self.type == "":
            errors[f"{prefix}.type"] = "Meal type is required"
        elif not isinstance(self.type, MealType):
            try:
                MealType(self.type)
            except ValueError:
                allowed = ", ".join(t.value for t in MealType)
                errors[f"{prefix}.type"] = f"Invalid meal type '{self.type}' (allowed: {allowed})"

        for index, ingredient in enumerate(self.ingredients):
            if not isinstance(ingredient, str) or not ingredient.strip():
                errors[f"{prefix}.ingredients[{index}]"] = "Ingredient cannot be empty"

        return errors

    @property
    def meal_type(self) -> MealType:
        return self.type if isinstance(self.type, MealType) else MealType(self.type)
