"""End-to-end tests of the ``mapi`` CLI via typer's CliRunner."""

from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest

from mapi import __version__
from mapi.app import app


DEFINITION = """\
base: /api
services:
  - name: users
    services:
      - name: roles
    endpoints:
      - method: GET
        endpoint: /:user_id/posts/:post_id?
        alias: posts
  - name: status
    defaultEndpoints: false
"""


@pytest.fixture
def definition_file(isolated_config: Path) -> Path:
    path = isolated_config / "api.yaml"
    path.write_text(DEFINITION)
    return path


# ---------------------------------------------------------------------------
# Root options
# ---------------------------------------------------------------------------


class TestRoot:
    """Tests for the root callback."""

    def test_version(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_no_args_shows_help(self, cli_runner) -> None:
        result = cli_runner.invoke(app, [])
        assert "call" in result.output
        assert "inspect" in result.output


# ---------------------------------------------------------------------------
# inspect
# ---------------------------------------------------------------------------


class TestInspect:
    """Tests for ``mapi inspect``."""

    def test_lists_endpoints(self, cli_runner, definition_file: Path) -> None:
        result = cli_runner.invoke(
            app, ["--json", "inspect", "--definition", str(definition_file)]
        )
        assert result.exit_code == 0, result.output
        rows = json.loads(result.stdout)

        users = [(r["Alias"], r["Method"], r["Path"]) for r in rows if r["Service"] == "users"]
        assert users == [
            ("get", "GET", "/api/users/:id?"),
            ("create", "POST", "/api/users/"),
            ("update", "PUT", "/api/users/:id"),
            ("delete", "DELETE", "/api/users/:id"),
            ("posts", "GET", "/api/users/:user_id/posts/:post_id?"),
            ("health", "GET", "/api/users/info"),
        ]
        services = {r["Service"] for r in rows}
        assert services == {"users", "users.roles", "status"}

    def test_missing_definition(self, cli_runner, isolated_config: Path) -> None:
        result = cli_runner.invoke(app, ["inspect"])
        assert result.exit_code == 2

    def test_unreadable_definition(self, cli_runner, isolated_config: Path) -> None:
        result = cli_runner.invoke(app, ["inspect", "-d", str(isolated_config / "nope.yaml")])
        assert result.exit_code == 7


# ---------------------------------------------------------------------------
# call
# ---------------------------------------------------------------------------


class TestCallDryRun:
    """Tests for ``mapi --dry-run call``."""

    def _call(self, cli_runner, definition_file: Path, *args: str):
        return cli_runner.invoke(
            app,
            [
                "--dry-run",
                "--no-color",
                "call",
                *args,
                "-d",
                str(definition_file),
                "--base-url",
                "https://api.example.com",
            ],
        )

    def test_get_scalar(self, cli_runner, definition_file: Path) -> None:
        result = self._call(cli_runner, definition_file, "users.get", "42")
        assert result.exit_code == 0, result.output
        assert "[dry-run] GET https://api.example.com/api/users/42" in result.output

    def test_get_mapping(self, cli_runner, definition_file: Path) -> None:
        result = self._call(
            cli_runner, definition_file, "users.posts", '{"user_id": 1, "post_id": 9}'
        )
        assert result.exit_code == 0, result.output
        assert "GET https://api.example.com/api/users/1/posts/9" in result.output

    def test_nested_service(self, cli_runner, definition_file: Path) -> None:
        result = self._call(cli_runner, definition_file, "users.roles.get", "admin")
        assert "GET https://api.example.com/api/users/roles/admin" in result.output

    def test_create_body(self, cli_runner, definition_file: Path) -> None:
        result = self._call(cli_runner, definition_file, "users.create", '{"name": "Ada"}')
        assert result.exit_code == 0, result.output
        assert "POST https://api.example.com/api/users/" in result.output
        assert '"name": "Ada"' in result.output

    def test_missing_parameter(self, cli_runner, definition_file: Path) -> None:
        result = self._call(cli_runner, definition_file, "users.posts")
        assert result.exit_code == 2
        assert "user_id" in result.output

    def test_missing_body(self, cli_runner, definition_file: Path) -> None:
        result = self._call(cli_runner, definition_file, "users.create")
        assert result.exit_code == 2

    def test_unsupported_method(self, cli_runner, definition_file: Path) -> None:
        result = self._call(cli_runner, definition_file, "users.delete", "1")
        assert result.exit_code == 2
        assert "DELETE" in result.output

    def test_unknown_alias(self, cli_runner, definition_file: Path) -> None:
        result = self._call(cli_runner, definition_file, "status.get")
        assert result.exit_code == 2
        assert "health" in result.output


class TestCallLive:
    """``mapi call`` against an httpx.MockTransport-backed client."""

    @pytest.fixture
    def mock_server(self, monkeypatch: pytest.MonkeyPatch) -> list[httpx.Request]:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            if request.url.path.endswith("/404"):
                return httpx.Response(404, json={"message": "no such user"})
            return httpx.Response(200, json={"id": 1, "name": "Ada"})

        real_client = httpx.Client

        def client_factory(**kwargs) -> httpx.Client:
            kwargs["transport"] = httpx.MockTransport(handler)
            return real_client(**kwargs)

        monkeypatch.setattr("mapi.client.sync_transport.httpx.Client", client_factory)
        return seen

    def test_success(self, cli_runner, definition_file: Path, mock_server) -> None:
        result = cli_runner.invoke(
            app,
            [
                "--json",
                "--quiet",
                "call",
                "users.get",
                "1",
                "-d",
                str(definition_file),
                "--base-url",
                "https://api.example.com",
            ],
        )
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout) == {"id": 1, "name": "Ada"}
        assert mock_server[0].url.path == "/api/users/1"

    def test_not_found_exit_code(self, cli_runner, definition_file: Path, mock_server) -> None:
        result = cli_runner.invoke(
            app,
            ["call", "users.get", "404", "-d", str(definition_file), "--base-url", "https://x.test"],
        )
        assert result.exit_code == 4

    def test_profile_auth(
        self,
        cli_runner,
        definition_file: Path,
        mock_server,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("MAPI_TEST_TOKEN", "tok")
        added = cli_runner.invoke(
            app,
            [
                "profile",
                "add",
                "demo",
                "-d",
                str(definition_file),
                "--base-url",
                "https://api.example.com",
                "--auth-type",
                "bearer",
                "--auth-source",
                "env:MAPI_TEST_TOKEN",
            ],
        )
        assert added.exit_code == 0, added.output

        result = cli_runner.invoke(app, ["call", "users.get", "1"])
        assert result.exit_code == 0, result.output
        assert mock_server[0].headers["authorization"] == "Bearer tok"

        cli_runner.invoke(app, ["call", "users.health"])
        assert "authorization" not in mock_server[1].headers


# ---------------------------------------------------------------------------
# profile
# ---------------------------------------------------------------------------


class TestProfileCommands:
    """Tests for ``mapi profile``."""

    def test_add_list_show_remove(self, cli_runner, isolated_config: Path) -> None:
        result = cli_runner.invoke(
            app, ["profile", "add", "shop", "-d", "shop.yaml", "--base-url", "https://s.test"]
        )
        assert result.exit_code == 0, result.output

        listed = cli_runner.invoke(app, ["--plain", "profile", "list"])
        assert "shop\tshop.yaml\thttps://s.test" in listed.stdout

        shown = cli_runner.invoke(app, ["--json", "profile", "show", "shop"])
        assert json.loads(shown.stdout)["base_url"] == "https://s.test"

        removed = cli_runner.invoke(app, ["profile", "remove", "shop"])
        assert removed.exit_code == 0
        assert cli_runner.invoke(app, ["profile", "show", "shop"]).exit_code == 1

    def test_add_existing_requires_force(self, cli_runner, isolated_config: Path) -> None:
        args = ["profile", "add", "shop", "-d", "shop.yaml"]
        assert cli_runner.invoke(app, args).exit_code == 0
        assert cli_runner.invoke(app, args).exit_code == 2
        assert cli_runner.invoke(app, [*args, "--force"]).exit_code == 0

    def test_remove_missing(self, cli_runner, isolated_config: Path) -> None:
        assert cli_runner.invoke(app, ["profile", "remove", "nope"]).exit_code == 1
