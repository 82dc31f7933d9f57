"""Caller identity model consumed by the workflow core."""

from domain.identity.core.caller import CallerIdentity, StaffRole
from domain.identity.core.access import require_caller, require_role

__all__ = ["CallerIdentity", "StaffRole", "require_caller", "require_role"]
