"""Diet chart commands (Lifecycle Manager)."""

from application.diet_chart.commands.create_diet_chart import (
    CreateDietChartCommand,
    CreateDietChartCommandHandler,
)
from application.diet_chart.commands.delete_diet_chart import (
    DeleteDietChartCommand,
    DeleteDietChartCommandHandler,
    DeletionReceipt,
)
from application.diet_chart.commands.update_diet_chart import (
    UpdateDietChartCommand,
    UpdateDietChartCommandHandler,
)
from application.diet_chart.commands.update_meal_status import (
    UpdateMealStatusCommand,
    UpdateMealStatusCommandHandler,
)

__all__ = [
    "CreateDietChartCommand",
    "CreateDietChartCommandHandler",
    "DeleteDietChartCommand",
    "DeleteDietChartCommandHandler",
    "DeletionReceipt",
    "UpdateDietChartCommand",
    "UpdateDietChartCommandHandler",
    "UpdateMealStatusCommand",
    "UpdateMealStatusCommandHandler",
]
