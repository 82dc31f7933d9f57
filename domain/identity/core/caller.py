"""Caller identity value objects."""

from dataclasses import dataclass
from enum import Enum


class StaffRole(str, Enum):
    """Closed set of roles a caller can hold."""

    MANAGER = "manager"
    PANTRY = "pantry"
    DELIVERY = "delivery"


@dataclass(frozen=True)
class CallerIdentity:
    """Authenticated actor attached to a request.

    The role is fixed for the lifetime of the request and drives every
    authorization decision in the workflow core.

    Examples:
        >>> caller = CallerIdentity(id="staff-42", role=StaffRole.PANTRY)
        >>> caller.has_role(StaffRole.PANTRY, StaffRole.DELIVERY)
        True
    """

    id: str
    role: StaffRole

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Caller id cannot be empty")
        if not isinstance(self.role, StaffRole):
            raise ValueError(f"Invalid role: {self.role}")

    def has_role(self, *roles: StaffRole) -> bool:
        return self.role in roles
