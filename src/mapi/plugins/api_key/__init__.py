"""API key authentication plugin (header, query parameter, or cookie)."""

from mapi.plugins.api_key.plugin import APIKeyAuthPlugin

__all__ = ["APIKeyAuthPlugin"]
