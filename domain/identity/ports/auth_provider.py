"""Authentication provider port (interface)."""

from abc import ABC, abstractmethod

from domain.identity.core.caller import CallerIdentity


class IAuthProvider(ABC):
    """Turns transport-level credentials into a caller identity.

    Token issuance and password handling live outside this service; the
    workflow core only needs to know who is calling and with which role.

    Examples:
        >>> class StaticAuthProvider(IAuthProvider):
        ...     async def verify_token(self, token: str) -> CallerIdentity:
        ...         return CallerIdentity(id=token, role=StaffRole.MANAGER)
    """

    @abstractmethod
    async def verify_token(self, token: str) -> CallerIdentity:
        """Verify a bearer token.

        Args:
            token: Raw bearer token from the Authorization header

        Returns:
            CallerIdentity built from the token claims

        Raises:
            UnauthenticatedError: Token is invalid, expired, or lacks a
                recognised role
        """
        pass
