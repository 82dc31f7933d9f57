"""Role-check capability used by command and query handlers."""

from typing import Optional

from domain.identity.core.caller import CallerIdentity, StaffRole
from domain.shared.errors import ForbiddenError, UnauthenticatedError


def require_caller(caller: Optional[CallerIdentity]) -> CallerIdentity:
    """Return the caller or fail with UnauthenticatedError."""
    if caller is None:
        raise UnauthenticatedError("Authentication required")
    return caller


def require_role(caller: Optional[CallerIdentity], *allowed: StaffRole) -> CallerIdentity:
    """Ensure the caller holds one of the allowed roles.

    Args:
        caller: Identity resolved by the auth layer (None if anonymous)
        *allowed: Roles permitted to perform the action

    Returns:
        The authenticated caller

    Raises:
        UnauthenticatedError: If there is no caller
        ForbiddenError: If the caller's role is not in ``allowed``
    """
    caller = require_caller(caller)
    if not caller.has_role(*allowed):
        names = ", ".join(role.value for role in allowed)
        raise ForbiddenError(f"Role '{caller.role.value}' not permitted (requires: {names})")
    return caller
