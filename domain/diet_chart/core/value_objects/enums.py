"""Enumerations for meal slots and the preparation state machine."""

from enum import Enum


class MealType(str, Enum):
    """Meal slot within a chart."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"


class PreparationStatus(str, Enum):
    """Meal lifecycle state. ``PENDING`` is initial, ``DELIVERED`` terminal."""

    PENDING = "pending"
    PREPARING = "preparing"
    READY = "ready"
    DELIVERED = "delivered"


class AssignmentSlot(str, Enum):
    """Meal field stamped with the staff member who performed a transition."""

    PANTRY = "assigned_pantry"
    DELIVERY = "assigned_delivery"
