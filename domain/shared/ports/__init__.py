"""Domain ports (interfaces for infrastructure adapters)."""

from domain.shared.ports.diet_chart_repository import IDietChartRepository
from domain.shared.ports.people_directory import (
    IPeopleDirectory,
    PatientSummary,
    StaffSummary,
)

__all__ = [
    "IDietChartRepository",
    "IPeopleDirectory",
    "PatientSummary",
    "StaffSummary",
]
