"""Bearer token authentication plugin."""

from mapi.plugins.bearer.plugin import BearerAuthPlugin

__all__ = ["BearerAuthPlugin"]
