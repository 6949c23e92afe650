"""HTTP Basic authentication plugin.

The credential ``source`` must resolve to ``"username:password"``, which is
Base64-encoded and sent as ``Authorization: Basic <encoded>`` per :rfc:`7617`.
"""

from __future__ import annotations

import base64

from mapi.auth.base import AuthPlugin, AuthResult
from mapi.config import resolve_credential
from mapi.exceptions import AuthError, MissingDataAuthError
from mapi.models import AuthConfig


class BasicAuthPlugin(AuthPlugin):
    """Authenticate via HTTP Basic authentication."""

    @property
    def auth_type(self) -> str:
        return "basic"

    def authenticate(self, auth_config: AuthConfig) -> AuthResult:
        """Resolve ``username:password`` and return a Basic auth header.

        Raises:
            MissingDataAuthError: If the source yields an empty credential.
            AuthError: If the credential has no ``:`` separator.
        """
        raw = resolve_credential(auth_config.source)
        if not raw:
            raise MissingDataAuthError(
                f"Basic auth credential from '{auth_config.source}' is empty"
            )
        if ":" not in raw:
            raise AuthError(
                "Basic auth credential must be in 'username:password' format "
                "(colon separator is required)"
            )
        encoded = base64.b64encode(raw.encode("utf-8")).decode("ascii")
        return AuthResult(headers={"Authorization": f"Basic {encoded}"})
