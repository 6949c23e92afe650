"""HTTP transports for mapi.

Endpoints delegate every request to a *transport* (see
:mod:`mapi.client.base` for the contract). Two httpx-backed implementations
ship with the package:

    :class:`HttpxTransport` -- blocking, backed by :class:`httpx.Client`.
    :class:`AsyncHttpxTransport` -- non-blocking, backed by :class:`httpx.AsyncClient`.

Both are context managers and accept a base URL, a
:class:`~mapi.models.RequestConfig` and a ``dry_run`` flag.
"""

from mapi.client.async_transport import AsyncHttpxTransport
from mapi.client.base import RequestOptions, Transport
from mapi.client.sync_transport import HttpxTransport

__all__ = ["AsyncHttpxTransport", "HttpxTransport", "RequestOptions", "Transport"]
