"""MongoDB repository implementations."""

from .base import MongoBaseRepository
from .diet_chart_repository import MongoDietChartRepository

__all__ = [
    "MongoBaseRepository",
    "MongoDietChartRepository",
]
