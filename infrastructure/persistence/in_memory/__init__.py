"""In-memory repository implementations."""

from .diet_chart_repository import InMemoryDietChartRepository

__all__ = ["InMemoryDietChartRepository"]
