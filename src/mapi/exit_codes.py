"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to an error category and is referenced by the matching
:class:`~mapi.exceptions.MapiError` subclass, so shell scripts wrapping
``mapi call`` can branch on ``$?`` without parsing stderr.
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""An endpoint was invoked without the parameters or body it requires."""

EXIT_AUTH_FAILURE = 3
"""Credentials for an authenticated endpoint could not be produced or were rejected."""

EXIT_NOT_FOUND = 4
"""The API answered HTTP 404."""

EXIT_SERVER_ERROR = 5
"""The API answered with an error status other than 401/403/404."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""

EXIT_DEFINITION_ERROR = 7
"""The API definition could not be loaded or describes an invalid service tree."""
