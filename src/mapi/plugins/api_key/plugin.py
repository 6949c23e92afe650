"""API key auth plugin -- header, query parameter, or cookie placement.

The key is resolved from ``source`` and placed according to ``location``:

* ``"header"`` -- header named ``header`` (default ``X-API-Key``);
* ``"query"`` -- query parameter named ``param_name`` (default ``api_key``);
* ``"cookie"`` -- cookie named ``header`` (default ``api_key``).
"""

from __future__ import annotations

from mapi.auth.base import AuthPlugin, AuthResult
from mapi.config import resolve_credential
from mapi.exceptions import MissingDataAuthError
from mapi.models import AuthConfig

_LOCATIONS = ("header", "query", "cookie")


class APIKeyAuthPlugin(AuthPlugin):
    """Authenticate via an API key in a header, query parameter, or cookie."""

    @property
    def auth_type(self) -> str:
        return "api_key"

    def authenticate(self, auth_config: AuthConfig) -> AuthResult:
        """Resolve the API key and place it per ``auth_config.location``.

        Unknown locations fall back to a header.

        Raises:
            MissingDataAuthError: If the source yields an empty key.
        """
        credential = resolve_credential(auth_config.source)
        if not credential:
            raise MissingDataAuthError(f"API key from '{auth_config.source}' is empty")

        location = auth_config.location
        if location == "query":
            key_name = auth_config.param_name or auth_config.header or "api_key"
            return AuthResult(params={key_name: credential})
        if location == "cookie":
            key_name = auth_config.header or auth_config.param_name or "api_key"
            return AuthResult(cookies={key_name: credential})

        key_name = auth_config.header or auth_config.param_name or "X-API-Key"
        return AuthResult(headers={key_name: credential})

    def validate_config(self, auth_config: AuthConfig) -> list[str]:
        errors: list[str] = []
        if not auth_config.source:
            errors.append("API key auth requires a 'source' for the credential")
        if auth_config.location not in _LOCATIONS:
            errors.append(
                f"Invalid location '{auth_config.location}': "
                "must be 'header', 'query', or 'cookie'"
            )
        return errors
