"""Auth manager -- registry and dispatcher for auth plugins.

:class:`AuthManager` maps auth-type strings (``"api_key"``, ``"bearer"``,
``"basic"``) to :class:`~mapi.auth.base.AuthPlugin` instances. Its
:meth:`~AuthManager.hook` method turns an :class:`~mapi.models.AuthConfig`
into the zero-argument auth hook that endpoints call when they are declared
with ``requiresAuth``.

For most use cases, call :func:`create_default_manager` to get a manager
pre-loaded with every built-in plugin.
"""

from __future__ import annotations

from typing import Optional

from mapi.auth.base import AuthHook, AuthPlugin, AuthResult
from mapi.exceptions import AuthError
from mapi.models import AuthConfig
from mapi.output import debug


class AuthManager:
    """Registry and dispatcher for authentication plugins.

    Example::

        manager = create_default_manager()
        api = Api(definition, transport, auth=manager.hook(profile.auth))
    """

    def __init__(self) -> None:
        self._plugins: dict[str, AuthPlugin] = {}

    def register(self, plugin: AuthPlugin) -> None:
        """Register *plugin* under its ``auth_type``, replacing any previous one."""
        self._plugins[plugin.auth_type] = plugin

    def get_plugin(self, auth_type: str) -> AuthPlugin:
        """Retrieve a registered plugin by its auth type identifier.

        Raises:
            AuthError: If no plugin is registered for *auth_type*.
        """
        plugin = self._plugins.get(auth_type)
        if plugin is None:
            available = ", ".join(sorted(self._plugins)) or "(none)"
            raise AuthError(
                f"No auth plugin registered for type '{auth_type}'. "
                f"Available types: {available}"
            )
        return plugin

    def authenticate(self, auth_config: Optional[AuthConfig]) -> AuthResult:
        """Produce auth artifacts for *auth_config*.

        Returns an empty :class:`~mapi.auth.base.AuthResult` when
        *auth_config* is ``None``.
        """
        if auth_config is None:
            return AuthResult()
        return self.get_plugin(auth_config.type).authenticate(auth_config)

    def hook(self, auth_config: Optional[AuthConfig]) -> AuthHook:
        """Return an auth hook that authenticates with *auth_config* once.

        The plugin runs on the first authenticated call; later calls reuse its
        result. Unknown auth types fail immediately rather than on first use.
        """
        if auth_config is not None:
            self.get_plugin(auth_config.type)

        cached: list[AuthResult] = []

        def _hook() -> AuthResult:
            if not cached:
                debug(f"Authenticating with '{auth_config.type if auth_config else 'none'}'")
                cached.append(self.authenticate(auth_config))
            return cached[0]

        return _hook

    def list_types(self) -> list[str]:
        """Return the identifiers of all registered auth types, sorted."""
        return sorted(self._plugins)


def create_default_manager() -> AuthManager:
    """Create an :class:`AuthManager` with the ``api_key``, ``basic`` and ``bearer`` plugins."""
    from mapi.plugins.api_key import APIKeyAuthPlugin
    from mapi.plugins.basic import BasicAuthPlugin
    from mapi.plugins.bearer import BearerAuthPlugin

    manager = AuthManager()
    manager.register(APIKeyAuthPlugin())
    manager.register(BearerAuthPlugin())
    manager.register(BasicAuthPlugin())
    return manager
