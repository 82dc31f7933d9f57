"""Meal transition authorizer.

Pure decision table from (caller role, requested status) to the side
effect a successful transition has on the meal. Nothing here touches
storage; handlers apply the resulting changes through the repository.

    role      target               side effect
    pantry    preparing, ready     assigned_pantry = caller
    delivery  delivered            assigned_delivery = caller, delivery_time = now
    manager   (none)

The current status is not consulted: any role-legal target is
accepted from any state (a delivery caller may move a pending meal straight
to delivered).
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, FrozenSet, Mapping, Optional

from domain.diet_chart.core.entities.meal import Meal
from domain.diet_chart.core.value_objects.enums import AssignmentSlot, PreparationStatus
from domain.identity.core.caller import StaffRole


@dataclass(frozen=True)
class MealTransition:
    """Approved transition and the fields it stamps."""

    target: PreparationStatus
    slot: AssignmentSlot
    stamps_delivery_time: bool = False

    def changes(self, caller_id: str, at: datetime) -> Dict[str, Any]:
        """Workflow field values to write on the meal."""
        changes: Dict[str, Any] = {
            "preparation_status": self.target,
            self.slot.value: caller_id,
        }
        if self.stamps_delivery_time:
            changes["delivery_time"] = at
        return changes

    def conflicting_holder(self, meal: Meal, caller_id: str) -> Optional[str]:
        """Other staff member already holding this transition's slot, if any."""
        holder = meal.holder(self.slot)
        if holder is not None and holder != caller_id:
            return holder
        return None


_PANTRY = AssignmentSlot.PANTRY
_DELIVERY = AssignmentSlot.DELIVERY

TRANSITION_TABLE: Mapping[StaffRole, Mapping[PreparationStatus, MealTransition]] = {
    StaffRole.PANTRY: {
        PreparationStatus.PREPARING: MealTransition(PreparationStatus.PREPARING, _PANTRY),
        PreparationStatus.READY: MealTransition(PreparationStatus.READY, _PANTRY),
    },
    StaffRole.DELIVERY: {
        PreparationStatus.DELIVERED: MealTransition(
            PreparationStatus.DELIVERED, _DELIVERY, stamps_delivery_time=True
        ),
    },
    StaffRole.MANAGER: {},
}


def authorize_transition(role: StaffRole, target: PreparationStatus) -> Optional[MealTransition]:
    """
    Decide whether ``role`` may move a meal to ``target``.

    Returns:
        The approved MealTransition, or None when the combination is denied

    Example:
        >>> authorize_transition(StaffRole.PANTRY, PreparationStatus.READY).slot
        <AssignmentSlot.PANTRY: 'assigned_pantry'>
        >>> authorize_transition(StaffRole.MANAGER, PreparationStatus.READY) is None
        True
    """
    return TRANSITION_TABLE.get(role, {}).get(target)


def allowed_targets(role: StaffRole) -> FrozenSet[PreparationStatus]:
    """Statuses ``role`` may request; empty for roles that never transition meals."""
    return frozenset(TRANSITION_TABLE.get(role, {}))
