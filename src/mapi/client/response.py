"""Response handling for the CLI -- rendering and status mapping.

The endpoint tree returns transport responses untouched; this module is
where ``mapi call`` turns an :class:`httpx.Response` into output and an
exit code.
"""

from __future__ import annotations

from typing import Any

import httpx

from mapi.exceptions import AuthError, NotFoundError, ServerError
from mapi.output import format_response, info


def format_api_response(response: httpx.Response) -> None:
    """Print the status line to stderr and the body to stdout."""
    info(f"HTTP {response.status_code} {response.reason_phrase or ''}".rstrip())
    data = extract_response_data(response)
    if data is not None:
        format_response(data)


def extract_response_data(response: httpx.Response) -> Any:
    """Return the JSON-decoded body, the raw text, or ``None`` for an empty body."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def raise_for_status(response: httpx.Response) -> None:
    """Raise the :mod:`mapi.exceptions` error matching an error status.

    Raises:
        AuthError: On 401 / 403.
        NotFoundError: On 404.
        ServerError: On any other status >= 400.
    """
    status = response.status_code
    if status < 400:
        return

    detail = extract_response_data(response)
    if isinstance(detail, dict):
        msg = detail.get("message") or detail.get("error") or detail.get("detail") or ""
    else:
        msg = str(detail)[:200] if detail else ""
    full_msg = f"HTTP {status}: {msg}" if msg else f"HTTP {status}"

    if status in (401, 403):
        raise AuthError(full_msg)
    if status == 404:
        raise NotFoundError(full_msg)
    raise ServerError(full_msg)
