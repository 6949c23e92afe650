"""HTTP Basic authentication plugin."""

from mapi.plugins.basic.plugin import BasicAuthPlugin

__all__ = ["BasicAuthPlugin"]
