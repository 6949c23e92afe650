"""Bearer token authentication plugin.

Resolves a token from the configured ``source`` (e.g. ``env:MY_TOKEN``) and
sends it as ``Authorization: Bearer <token>``. No token exchange or refresh is
performed.
"""

from __future__ import annotations

from mapi.auth.base import AuthPlugin, AuthResult
from mapi.config import resolve_credential
from mapi.exceptions import MissingDataAuthError
from mapi.models import AuthConfig


class BearerAuthPlugin(AuthPlugin):
    """Authenticate via Bearer token in the Authorization header."""

    @property
    def auth_type(self) -> str:
        return "bearer"

    def authenticate(self, auth_config: AuthConfig) -> AuthResult:
        """Resolve the token and return a Bearer auth header.

        Raises:
            MissingDataAuthError: If the source yields an empty token.
        """
        token = resolve_credential(auth_config.source)
        if not token:
            raise MissingDataAuthError(
                f"Bearer token from '{auth_config.source}' is empty"
            )
        return AuthResult(headers={"Authorization": f"Bearer {token}"})

    def validate_config(self, auth_config: AuthConfig) -> list[str]:
        errors: list[str] = []
        if not auth_config.source:
            errors.append("Bearer auth requires a 'source' for the token")
        return errors
