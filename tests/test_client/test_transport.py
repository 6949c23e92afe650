"""Tests for mapi.client.sync_transport and mapi.client.base."""

from __future__ import annotations

import json

import httpx
import pytest

from mapi.api import Api
from mapi.client.base import Transport, merge_request_headers
from mapi.client.sync_transport import HttpxTransport


def _open(transport: HttpxTransport, handler) -> HttpxTransport:
    """Attach an httpx.MockTransport-backed client to *transport*."""
    transport._client = httpx.Client(
        base_url=transport._base_url, transport=httpx.MockTransport(handler)
    )
    return transport


# ---------------------------------------------------------------------------
# merge_request_headers()
# ---------------------------------------------------------------------------


class TestMergeRequestHeaders:
    """Tests for merge_request_headers()."""

    def test_accept_default(self) -> None:
        assert merge_request_headers({}) == {"Accept": "application/json"}

    def test_headers_override_accept(self) -> None:
        headers = merge_request_headers({"headers": {"Accept": "text/csv", "X-A": "1"}})
        assert headers == {"Accept": "text/csv", "X-A": "1"}

    def test_cookies_folded(self) -> None:
        headers = merge_request_headers({"cookies": {"a": "1", "b": "2"}})
        assert headers["Cookie"] == "a=1; b=2"

    def test_cookies_appended_to_existing(self) -> None:
        headers = merge_request_headers(
            {"headers": {"Cookie": "sid=x"}, "cookies": {"token": "y"}}
        )
        assert headers["Cookie"] == "sid=x; token=y"


# ---------------------------------------------------------------------------
# HttpxTransport
# ---------------------------------------------------------------------------


class TestHttpxTransport:
    """Tests for HttpxTransport request construction."""

    def test_satisfies_protocol(self) -> None:
        assert isinstance(HttpxTransport(), Transport)

    def test_get(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"id": 42})

        transport = _open(HttpxTransport("https://api.example.com"), handler)
        response = transport.get("/users/42", {"params": {"expand": "roles"}})

        assert response.json() == {"id": 42}
        assert seen[0].method == "GET"
        assert str(seen[0].url) == "https://api.example.com/users/42?expand=roles"
        assert seen[0].headers["accept"] == "application/json"
        assert seen[0].content == b""

    def test_post_sends_json(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201, json={"ok": True})

        transport = _open(HttpxTransport("https://api.example.com"), handler)
        response = transport.post(
            "/users/", {"name": "Ada"}, {"headers": {"Authorization": "Bearer t"}}
        )

        assert response.status_code == 201
        assert json.loads(seen[0].content) == {"name": "Ada"}
        assert seen[0].headers["authorization"] == "Bearer t"

    def test_post_without_body(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(204)

        transport = _open(HttpxTransport(), handler)
        transport.post("http://localhost/ping", None, {})
        assert seen[0].content == b""

    def test_error_status_returned_as_is(self) -> None:
        transport = _open(HttpxTransport(), lambda request: httpx.Response(500))
        assert transport.get("http://localhost/x", {}).status_code == 500

    def test_network_error_propagates(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        transport = _open(HttpxTransport(), handler)
        with pytest.raises(httpx.ConnectError):
            transport.get("http://localhost/x", {})

    def test_requires_context_manager(self) -> None:
        with pytest.raises(AssertionError, match="context manager"):
            HttpxTransport().get("/x", {})

    def test_context_manager_closes_client(self) -> None:
        with HttpxTransport("https://api.example.com") as transport:
            assert transport._client is not None
        assert transport._client is None

    def test_dry_run_sends_nothing(self, capsys, plain_output) -> None:
        transport = HttpxTransport("https://api.example.com", dry_run=True)
        response = transport.post("/users/", {"name": "Ada"}, {"params": {"k": "v"}})

        assert response.status_code == 200
        assert response.json()["dry_run"] is True
        err = capsys.readouterr().err
        assert "[dry-run] POST https://api.example.com/users/" in err
        assert "Param: k=v" in err
        assert '"name": "Ada"' in err


class TestTransportWithApi:
    """The endpoint tree driving a real transport."""

    def test_alias_round_trip(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        transport = _open(HttpxTransport("https://api.example.com"), handler)
        api = Api({"base": "/api", "services": [{"name": "users"}]}, transport)
        response = api["users"].invoke("get", 7)

        assert response.status_code == 200
        assert seen[0].url.path == "/api/users/7"
