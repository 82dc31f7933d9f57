"""Identity ports."""

from domain.identity.ports.auth_provider import IAuthProvider

__all__ = ["IAuthProvider"]
