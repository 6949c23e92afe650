"""Asynchronous httpx transport -- mirrors :class:`~mapi.client.sync_transport.HttpxTransport`.

With this transport every alias in the tree returns a coroutine::

    async with AsyncHttpxTransport("https://api.example.com") as transport:
        api = Api(definition, transport)
        response = await api["users"].invoke("get", 1)

Path and body errors (:class:`~mapi.exceptions.MissingParameterError` and
friends) are still raised synchronously by the alias call, before a
coroutine exists.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from mapi.client.base import RequestOptions, merge_request_headers
from mapi.client.sync_transport import print_dry_run
from mapi.models import RequestConfig
from mapi.output import debug


class AsyncHttpxTransport:
    """Non-blocking transport backed by :class:`httpx.AsyncClient`.

    Args:
        base_url: Server URL prefixed to every resolved endpoint path.
        request: Timeout and SSL settings.
        dry_run: Print requests instead of sending them.
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
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> AsyncHttpxTransport:
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._request_config.timeout,
            verify=self._request_config.verify_ssl,
            follow_redirects=True,
        )
        return self

    async def __aexit__(self, *args: object) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def get(self, url: str, options: RequestOptions) -> httpx.Response:
        return await self._send("GET", url, None, options)

    async def post(self, url: str, body: Any, options: RequestOptions) -> httpx.Response:
        return await self._send("POST", url, body, options)

    async def _send(
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

        assert self._client is not None, "Transport not opened -- use as async context manager"
        debug(f"{method} {self._base_url}{url}")
        kwargs: dict[str, Any] = {"headers": headers, "params": params}
        if body is not None:
            kwargs["json"] = body
        response = await self._client.request(method, url, **kwargs)
        debug(f"{method} {url} -> HTTP {response.status_code}")
        return response
