"""Diet chart domain exceptions."""

from domain.diet_chart.core.exceptions.domain_errors import (
    DietChartNotFoundError,
    DietChartValidationError,
    MealAlreadyClaimedError,
    MealNotFoundError,
    TransitionForbiddenError,
)

__all__ = [
    "DietChartNotFoundError",
    "DietChartValidationError",
    "MealAlreadyClaimedError",
    "MealNotFoundError",
    "TransitionForbiddenError",
]
