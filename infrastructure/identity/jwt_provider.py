"""JWT authentication provider implementation."""

import logging
from typing import Any, Dict, Optional

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError as JWTError

from domain.identity.core.caller import CallerIdentity, StaffRole
from domain.identity.ports.auth_provider import IAuthProvider
from domain.shared.errors import UnauthenticatedError
from infrastructure.config import get_jwt_algorithm, get_jwt_audience, get_jwt_secret

logger = logging.getLogger(__name__)


class JwtAuthProvider(IAuthProvider):
    """Verifies bearer tokens issued by the hospital identity service.

    Tokens are signed with a shared secret. Required claims:
    - sub: staff id
    - role: "manager", "pantry" or "delivery"
    - exp: expiration timestamp

    Environment Variables:
    - AUTH_JWT_SECRET: signing secret (required)
    - AUTH_JWT_ALGORITHM: defaults to HS256
    - AUTH_JWT_AUDIENCE: expected audience (optional)

    Examples:
        >>> provider = JwtAuthProvider(secret="s3cret")
        >>> caller = await provider.verify_token(token)
        >>> caller.role
        <StaffRole.PANTRY: 'pantry'>
    """

    def __init__(
        self,
        secret: Optional[str] = None,
        algorithm: Optional[str] = None,
        audience: Optional[str] = None,
    ):
        """Initialize provider.

        Raises:
            ValueError: If no secret is configured
        """
        self.secret = secret or get_jwt_secret()
        self.algorithm = algorithm or get_jwt_algorithm()
        self.audience = audience or get_jwt_audience()

        if not self.secret:
            raise ValueError("AUTH_JWT_SECRET is required")

    async def verify_token(self, token: str) -> CallerIdentity:
        claims = self._decode(token)

        subject = claims.get("sub")
        if not subject:
            raise UnauthenticatedError("Token has no subject")

        try:
            role = StaffRole(claims.get("role"))
        except ValueError:
            logger.warning("Token with unknown role", extra={"role": claims.get("role")})
            raise UnauthenticatedError("Token has no recognised role")

        return CallerIdentity(id=str(subject), role=role)

    def _decode(self, token: str) -> Dict[str, Any]:
        required = ["exp", "sub"]
        if self.audience is not None:
            required.append("aud")
        try:
            return jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                audience=self.audience,
                options={"require": required},
            )
        except ExpiredSignatureError as e:
            raise UnauthenticatedError("Token has expired") from e
        except JWTError as e:
            raise UnauthenticatedError(f"Invalid token: {e}") from e
