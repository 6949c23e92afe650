"""Transport contract between the endpoint tree and the HTTP layer.

An :class:`~mapi.endpoint.Endpoint` never talks to the network itself. It
resolves its path and body, then hands them to a *transport* object that
implements two methods::

    get(url, options)          -> response (or awaitable response)
    post(url, body, options)   -> response (or awaitable response)

``options`` is a :data:`RequestOptions` dict built from the endpoint's auth
hook. Every key is optional:

* ``headers`` -- extra request headers,
* ``params`` -- query-string parameters,
* ``cookies`` -- cookies, sent as a single ``Cookie`` header.

Whatever the transport returns is returned unchanged to the caller, so a
transport whose methods are coroutines gives the whole tree an async API.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

RequestOptions = dict[str, Any]


@runtime_checkable
class Transport(Protocol):
    """Structural type for objects that can execute endpoint requests."""

    def get(self, url: str, options: RequestOptions) -> Any:
        ...

    def post(self, url: str, body: Any, options: RequestOptions) -> Any:
        ...


def merge_request_headers(options: RequestOptions) -> dict[str, str]:
    """Flatten *options* into the header dict sent on the wire.

    ``Accept: application/json`` is always present; option headers override
    it, and cookies are folded into a ``Cookie`` header after any cookie the
    caller already set.
    """
    headers: dict[str, str] = {"Accept": "application/json"}
    headers.update(options.get("headers") or {})

    cookies = options.get("cookies") or {}
    if cookies:
        cookie_str = "; ".join(f"{k}={v}" for k, v in cookies.items())
        existing = headers.get("Cookie")
        if existing:
            cookie_str = f"{existing}; {cookie_str}"
        headers["Cookie"] = cookie_str

    return headers
