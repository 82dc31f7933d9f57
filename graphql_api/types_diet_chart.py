"""GraphQL types for diet chart and task queries.

Domain enums are exposed directly; entity types carry both the raw
reference ids and their resolved display form (None when the people
directory does not know the id).
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

import strawberry

from domain.diet_chart.core.value_objects import enums


__all__ = [
    "MealType",
    "PreparationStatus",
    "PatientType",
    "StaffMemberType",
    "MealSlotType",
    "DietChartType",
    "CompletedWorkType",
    "StatusCountType",
]


# ============================================
# ENUMS
# ============================================

MealType = strawberry.enum(enums.MealType, name="MealType", description="Meal slot of the day")

PreparationStatus = strawberry.enum(
    enums.PreparationStatus,
    name="PreparationStatus",
    description="Meal lifecycle: pending → preparing → ready → delivered",
)


# ============================================
# PEOPLE
# ============================================


@strawberry.type(name="Patient")
class PatientType:
    """Patient display form."""

    id: str
    name: str
    room_number: Optional[str] = None
    bed_number: Optional[str] = None
    floor_number: Optional[str] = None


@strawberry.type(name="StaffMember")
class StaffMemberType:
    """Staff display form."""

    id: str
    name: str


# ============================================
# DIET CHART
# ============================================


@strawberry.type(name="Meal")
class MealSlotType:
    """One meal slot of a chart with its workflow state."""

    id: str
    type: MealType
    ingredients: List[str]
    special_instructions: str
    preparation_status: PreparationStatus
    assigned_pantry_id: Optional[str] = None
    assigned_pantry: Optional[StaffMemberType] = None
    assigned_delivery_id: Optional[str] = None
    assigned_delivery: Optional[StaffMemberType] = None
    delivery_time: Optional[datetime] = None
    delivery_notes: Optional[str] = None


@strawberry.type(name="DietChart")
class DietChartType:
    """A patient's meal plan for one day."""

    id: str
    patient_id: str
    date: datetime
    meals: List[MealSlotType]
    dietary_restrictions: List[str]
    created_by_id: str
    is_active: bool
    created_at: datetime
    updated_at: datetime
    patient: Optional[PatientType] = None
    created_by: Optional[StaffMemberType] = None
    calories: Optional[float] = None


# ============================================
# TASKS
# ============================================


@strawberry.type(name="CompletedWork")
class CompletedWorkType:
    """Chart-shaped record holding only the caller's finished meals."""

    chart_id: str
    patient_id: str
    date: datetime
    created_at: datetime
    meals: List[MealSlotType]
    patient: Optional[PatientType] = None


@strawberry.type(name="StatusCount")
class StatusCountType:
    """Meal count for one preparation status."""

    status: PreparationStatus
    count: int
