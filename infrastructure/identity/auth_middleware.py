"""FastAPI authentication middleware."""

import logging
from typing import Any, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from domain.identity.ports.auth_provider import IAuthProvider
from domain.shared.errors import UnauthenticatedError
from infrastructure.config import is_auth_required

logger = logging.getLogger(__name__)

PUBLIC_PATHS = frozenset({"/health"})


class AuthMiddleware(BaseHTTPMiddleware):
    """Resolves the caller identity for every request.

    Verifies the bearer token from the Authorization header and stores the
    resulting CallerIdentity in ``request.state.caller`` for downstream
    handlers (None for anonymous requests when auth is optional).

    Environment Variables:
    - AUTH_REQUIRED: "true" to reject requests without a token (default)

    Examples:
        >>> app.add_middleware(AuthMiddleware, auth_provider=JwtAuthProvider())
        >>> # In a handler:
        >>> caller = request.state.caller
    """

    def __init__(
        self,
        app: Any,
        auth_provider: IAuthProvider,
        auth_required: Optional[bool] = None,
    ) -> None:
        super().__init__(app)
        self.auth_provider = auth_provider
        self.auth_required = is_auth_required() if auth_required is None else auth_required

    async def dispatch(self, request: Request, call_next: Any) -> Any:
        request.state.caller = None

        if request.url.path in PUBLIC_PATHS:
            return await call_next(request)

        token = self._extract_token(request.headers.get("Authorization"))

        if not token:
            if self.auth_required:
                return JSONResponse(
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    content={"code": "UNAUTHENTICATED", "message": "Missing authorization token"},
                )
            return await call_next(request)

        try:
            request.state.caller = await self.auth_provider.verify_token(token)
        except UnauthenticatedError as e:
            logger.info("Rejected token", extra={"path": request.url.path, "reason": str(e)})
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"code": e.code, "message": str(e)},
            )

        return await call_next(request)

    def _extract_token(self, auth_header: Optional[str]) -> Optional[str]:
        """Extract Bearer token from Authorization header.

        Examples:
            >>> self._extract_token("Bearer eyJ...")
            'eyJ...'
            >>> self._extract_token("eyJ...")  # Missing Bearer
            None
        """
        if not auth_header:
            return None

        parts = auth_header.split()
        if len(parts) != 2:
            return None

        scheme, token = parts
        if scheme.lower() != "bearer":
            return None

        return token
