"""Domain exceptions for the diet chart bounded context."""

from typing import Dict, Optional

from domain.shared.errors import ForbiddenError, NotFoundError, WorkflowError


class DietChartNotFoundError(NotFoundError):
    """Raised when a chart id does not match an active chart."""

    def __init__(self, chart_id: str):
        self.chart_id = chart_id
        super().__init__(f"Diet chart not found: {chart_id}")


class MealNotFoundError(NotFoundError):
    """Raised when a meal id is not part of the chart's meal sequence."""

    def __init__(self, chart_id: str, meal_id: str):
        self.chart_id = chart_id
        self.meal_id = meal_id
        super().__init__(f"Meal {meal_id} not found in diet chart {chart_id}")


class DietChartValidationError(WorkflowError):
    """Raised when chart or meal fields are missing or malformed.

    Attributes:
        fields: Mapping of field path (e.g. ``meals[1].type``) to message
    """

    code = "VALIDATION_ERROR"

    def __init__(self, fields: Dict[str, str], message: Optional[str] = None):
        self.fields = dict(fields)
        if message is None:
            message = "Invalid diet chart: " + ", ".join(sorted(self.fields))
        super().__init__(message)


class TransitionForbiddenError(ForbiddenError):
    """Raised when a role may not move a meal to the requested status."""

    def __init__(self, role: str, target: str):
        self.role = role
        self.target = target
        super().__init__(f"Role '{role}' may not set meal status to '{target}'")


class MealAlreadyClaimedError(ForbiddenError):
    """Raised when another staff member already holds the meal's assignment."""

    def __init__(self, meal_id: str, slot: str, holder: str):
        self.meal_id = meal_id
        self.slot = slot
        self.holder = holder
        super().__init__(f"Meal {meal_id} is already assigned ({slot}) to {holder}")
