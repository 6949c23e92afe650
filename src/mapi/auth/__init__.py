"""Plugin-based authentication for endpoints declared with ``requiresAuth``.

The main entry points are:

- :class:`AuthPlugin` -- abstract base class for auth strategies.
- :class:`AuthResult` -- headers, params and cookies produced by a plugin.
- :class:`AuthManager` -- registry mapping auth type strings to plugins and
  building auth hooks for :class:`~mapi.api.Api`.
- :func:`create_default_manager` -- manager with every built-in plugin.

Typical usage::

    from mapi.auth import create_default_manager

    hook = create_default_manager().hook(profile.auth)
    api = Api(definition, transport, auth=hook)
"""

from mapi.auth.base import AuthHook, AuthPlugin, AuthResult
from mapi.auth.manager import AuthManager, create_default_manager

__all__ = [
    "AuthHook",
    "AuthPlugin",
    "AuthResult",
    "AuthManager",
    "create_default_manager",
]
