"""Abstract base class for authentication plugins.

This module defines the two foundational types of the auth subsystem:

- :class:`AuthResult` -- the HTTP headers, query parameters, and cookies an
  auth plugin produces.
- :class:`AuthPlugin` -- the abstract base class every authentication
  strategy extends.

Endpoints declared with ``requiresAuth`` call an *auth hook* (any zero-argument
callable returning an :class:`AuthResult`) and forward the result to the
transport as request options. :meth:`mapi.auth.manager.AuthManager.hook`
builds such a hook from an :class:`~mapi.models.AuthConfig`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable

from mapi.models import AuthConfig


class AuthResult:
    """Container for authentication artifacts to inject into HTTP requests.

    Args:
        headers: HTTP headers to add (e.g. ``{"Authorization": "Bearer ..."}``).
        params: Query-string parameters to add (e.g. ``{"api_key": "..."}``).
        cookies: Cookies to add (serialised into a ``Cookie`` header by the transport).

    Example::

        result = AuthResult(headers={"Authorization": "Bearer tok123"})
        assert result.as_options() == {"headers": {"Authorization": "Bearer tok123"}}
    """

    def __init__(
        self,
        headers: dict[str, str] | None = None,
        params: dict[str, str] | None = None,
        cookies: dict[str, str] | None = None,
    ):
        self.headers = headers or {}
        self.params = params or {}
        self.cookies = cookies or {}

    def as_options(self) -> dict[str, Any]:
        """Return the non-empty parts as transport request options."""
        options: dict[str, Any] = {}
        if self.headers:
            options["headers"] = dict(self.headers)
        if self.params:
            options["params"] = dict(self.params)
        if self.cookies:
            options["cookies"] = dict(self.cookies)
        return options


AuthHook = Callable[[], AuthResult]
"""Zero-argument callable invoked by an endpoint that requires auth."""


class AuthPlugin(ABC):
    """Abstract base class for authentication plugins.

    Subclasses provide an :attr:`auth_type` identifier and an
    :meth:`authenticate` implementation. Plugins are registered with
    :class:`~mapi.auth.manager.AuthManager` and looked up by ``auth_type``.
    """

    @property
    @abstractmethod
    def auth_type(self) -> str:
        """Return the unique auth type identifier this plugin handles."""
        ...

    @abstractmethod
    def authenticate(self, auth_config: AuthConfig) -> AuthResult:
        """Resolve credentials and return auth artifacts for HTTP requests.

        Args:
            auth_config: The authentication section of the active profile.

        Returns:
            An :class:`AuthResult` to inject into outgoing requests.

        Raises:
            MissingDataAuthError: If the configured source yields no credential.
        """
        ...

    def validate_config(self, auth_config: AuthConfig) -> list[str]:
        """Return human-readable problems with *auth_config* (empty when valid)."""
        return []
