"""Synchronous httpx transport.

:class:`HttpxTransport` satisfies the :class:`~mapi.client.base.Transport`
contract with a blocking :class:`httpx.Client`:

- **Request options** -- headers, query params and cookies built by an
  endpoint's auth hook are merged into the outgoing request.
- **Dry-run mode** -- prints the request to stderr and returns a synthetic
  200 response without sending traffic.

Responses are returned as-is, error statuses included, and network errors
propagate as :mod:`httpx` exceptions. Each call is a single attempt.

See Also:
    :class:`~mapi.client.async_transport.AsyncHttpxTransport` for the
    non-blocking equivalent.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from mapi.client.base import RequestOptions, merge_request_headers
from mapi.models import RequestConfig
from mapi.output import debug, get_output


class HttpxTransport:
    """Blocking transport backed by :class:`httpx.Client`.

    Must be used as a context manager so the underlying connection pool is
    opened and closed.

    Args:
        base_url: Server URL prefixed to every resolved endpoint path.
        request: Timeout and SSL settings.
        dry_run: When ``True``, requests are printed to stderr and a
            synthetic 200 response is returned without network I/O.

    Example::

        with HttpxTransport("https://api.example.com") as transport:
            api = Api(definition, transport)
            api["users"].invoke("get", 1)
    """

    def __init__(
        self,
        base_url: str = "",
        request: Optional[RequestConfig] = None,
        dry_run: bool = False,
    ) -> None:
        self._base_url = base_url
        self._request_config = request or RequestConfig()
        self._dry_run = dry_run
        self._client: Optional[httpx.Client] = None

    def __enter__(self) -> HttpxTransport:
        self._client = httpx.Client(
            base_url=self._base_url,
            timeout=self._request_config.timeout,
            verify=self._request_config.verify_ssl,
            follow_redirects=True,
        )
        return self

    def __exit__(self, *args: object) -> None:
        if self._client:
            self._client.close()
            self._client = None

    def get(self, url: str, options: RequestOptions) -> httpx.Response:
        """Send a GET request for the resolved endpoint path *url*."""
        return self._send("GET", url, None, options)

    def post(self, url: str, body: Any, options: RequestOptions) -> httpx.Response:
        """Send a POST request with *body* serialised as JSON (``None`` sends no body)."""
        return self._send("POST", url, body, options)

    def _send(
        self,
        method: str,
        url: str,
        body: Any,
        options: RequestOptions,
    ) -> httpx.Response:
        headers = merge_request_headers(options)
        params = dict(options.get("params") or {})

        if self._dry_run:
            return print_dry_run(method, f"{self._base_url}{url}", headers, params, body)

        assert self._client is not None, "Transport not opened -- use as context manager"
        debug(f"{method} {self._base_url}{url}")
        kwargs: dict[str, Any] = {"headers": headers, "params": params}
        if body is not None:
            kwargs["json"] = body
        response = self._client.request(method, url, **kwargs)
        debug(f"{method} {url} -> HTTP {response.status_code}")
        return response


def print_dry_run(
    method: str,
    url: str,
    headers: dict[str, str],
    params: dict[str, Any],
    body: Any,
) -> httpx.Response:
    """Print request details to stderr and return a synthetic 200 response."""
    import json as json_mod

    output = get_output()
    output.info(f"[dry-run] {method} {url}")
    for key, value in headers.items():
        output.info(f"  Header: {key}: {value}")
    for key, value in params.items():
        output.info(f"  Param: {key}={value}")
    if body is not None:
        output.info(f"  Body (JSON): {json_mod.dumps(body, indent=2, default=str)}")

    return httpx.Response(
        status_code=200,
        headers={"content-type": "application/json"},
        json={"dry_run": True, "message": "Request was not sent"},
        request=httpx.Request(method=method, url=url),
    )
