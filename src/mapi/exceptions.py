"""Exception hierarchy for mapi.

All exceptions inherit from :class:`MapiError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`mapi.exit_codes`.
Errors raised while building or calling the endpoint tree propagate to the
caller untouched; only :func:`mapi.app.main` turns them into exit codes.

Subclass hierarchy::

    MapiError (exit 1)
    +-- InvalidUsageError               (exit 2)
    |   +-- MissingParameterError
    |   +-- MissingBodyError
    |   +-- UnsupportedMethodError
    |   +-- UnknownAliasError
    +-- AuthError                       (exit 3)
    |   +-- MissingDataAuthError
    +-- NotFoundError                   (exit 4)
    +-- ServerError                     (exit 5)
    +-- ConnectionError_                (exit 6)
    +-- DefinitionError                 (exit 7)
    |   +-- InvalidServiceDefinitionError
    +-- ConfigError                     (exit 1)
"""

from __future__ import annotations

from mapi.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CONNECTION_ERROR,
    EXIT_DEFINITION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
    EXIT_SERVER_ERROR,
)


class MapiError(Exception):
    """Base exception for all mapi errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(MapiError):
    """Raised when an endpoint is called with data it cannot use."""

    exit_code = EXIT_INVALID_USAGE


class MissingParameterError(InvalidUsageError):
    """A required path parameter has no value in the call data.

    Args:
        slug: Name of the missing parameter.
        template: The path template being resolved.
    """

    def __init__(self, slug: str, template: str):
        super().__init__(f"Parameter '{slug}' is required by {template}")
        self.slug = slug
        self.template = template


class MissingBodyError(InvalidUsageError):
    """The endpoint declares a body but was called without any data."""


class UnsupportedMethodError(InvalidUsageError):
    """The endpoint's HTTP method cannot be dispatched (only GET and POST can)."""


class UnknownAliasError(InvalidUsageError):
    """No alias or service is registered under the requested name."""


class AuthError(MapiError):
    """Raised when authentication fails (e.g. rejected token)."""

    exit_code = EXIT_AUTH_FAILURE


class MissingDataAuthError(AuthError):
    """Raised by auth plugins when a credential resolves to nothing."""


class NotFoundError(MapiError):
    """Raised when the API returns HTTP 404."""

    exit_code = EXIT_NOT_FOUND


class ServerError(MapiError):
    """Raised when the API returns an error status that is not auth or 404."""

    exit_code = EXIT_SERVER_ERROR


class ConnectionError_(MapiError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused).

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """

    exit_code = EXIT_CONNECTION_ERROR


class DefinitionError(MapiError):
    """Raised when an API definition cannot be loaded or validated."""

    exit_code = EXIT_DEFINITION_ERROR


class InvalidServiceDefinitionError(DefinitionError):
    """A service definition supplies neither ``name`` nor ``base``."""


class ConfigError(MapiError):
    """Raised for configuration problems (missing profiles, invalid JSON, bad credential sources)."""

    exit_code = EXIT_GENERIC_FAILURE
