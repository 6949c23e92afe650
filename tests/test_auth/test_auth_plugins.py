"""Tests for mapi.auth -- manager, hooks and built-in plugins."""

from __future__ import annotations

import base64

import pytest

from mapi.auth import AuthManager, AuthResult, create_default_manager
from mapi.exceptions import AuthError, ConfigError, MissingDataAuthError
from mapi.models import AuthConfig
from mapi.plugins.api_key import APIKeyAuthPlugin
from mapi.plugins.basic import BasicAuthPlugin
from mapi.plugins.bearer import BearerAuthPlugin


# ---------------------------------------------------------------------------
# AuthResult
# ---------------------------------------------------------------------------


class TestAuthResult:
    """Tests for AuthResult.as_options()."""

    def test_empty(self) -> None:
        assert AuthResult().as_options() == {}

    def test_all_parts(self) -> None:
        result = AuthResult(headers={"A": "1"}, params={"k": "v"}, cookies={"c": "2"})
        assert result.as_options() == {
            "headers": {"A": "1"},
            "params": {"k": "v"},
            "cookies": {"c": "2"},
        }


# ---------------------------------------------------------------------------
# Bearer
# ---------------------------------------------------------------------------


class TestBearerPlugin:
    """Tests for BearerAuthPlugin."""

    def test_auth_type(self) -> None:
        assert BearerAuthPlugin().auth_type == "bearer"

    def test_authenticate(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MAPI_TEST_TOKEN", "tok123")
        result = BearerAuthPlugin().authenticate(
            AuthConfig(type="bearer", source="env:MAPI_TEST_TOKEN")
        )
        assert result.headers == {"Authorization": "Bearer tok123"}

    def test_empty_token(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MAPI_TEST_TOKEN", "")
        with pytest.raises(MissingDataAuthError):
            BearerAuthPlugin().authenticate(
                AuthConfig(type="bearer", source="env:MAPI_TEST_TOKEN")
            )

    def test_unset_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("MAPI_TEST_TOKEN", raising=False)
        with pytest.raises(ConfigError):
            BearerAuthPlugin().authenticate(
                AuthConfig(type="bearer", source="env:MAPI_TEST_TOKEN")
            )


# ---------------------------------------------------------------------------
# API key
# ---------------------------------------------------------------------------


class TestAPIKeyPlugin:
    """Tests for APIKeyAuthPlugin placements."""

    @pytest.fixture(autouse=True)
    def _key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MAPI_TEST_KEY", "secret")

    def test_default_header(self) -> None:
        result = APIKeyAuthPlugin().authenticate(
            AuthConfig(type="api_key", source="env:MAPI_TEST_KEY")
        )
        assert result.headers == {"X-API-Key": "secret"}

    def test_custom_header(self) -> None:
        result = APIKeyAuthPlugin().authenticate(
            AuthConfig(type="api_key", source="env:MAPI_TEST_KEY", header="X-Token")
        )
        assert result.headers == {"X-Token": "secret"}

    def test_query(self) -> None:
        result = APIKeyAuthPlugin().authenticate(
            AuthConfig(
                type="api_key", source="env:MAPI_TEST_KEY", location="query", param_name="key"
            )
        )
        assert result.params == {"key": "secret"}
        assert result.headers == {}

    def test_cookie(self) -> None:
        result = APIKeyAuthPlugin().authenticate(
            AuthConfig(type="api_key", source="env:MAPI_TEST_KEY", location="cookie")
        )
        assert result.cookies == {"api_key": "secret"}

    def test_validate_bad_location(self) -> None:
        errors = APIKeyAuthPlugin().validate_config(
            AuthConfig(type="api_key", source="env:X", location="body")
        )
        assert len(errors) == 1

    def test_empty_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MAPI_TEST_KEY", "")
        with pytest.raises(MissingDataAuthError):
            APIKeyAuthPlugin().authenticate(
                AuthConfig(type="api_key", source="env:MAPI_TEST_KEY")
            )


# ---------------------------------------------------------------------------
# Basic
# ---------------------------------------------------------------------------


class TestBasicPlugin:
    """Tests for BasicAuthPlugin."""

    def test_authenticate(self, tmp_path) -> None:
        cred = tmp_path / "cred"
        cred.write_text("ada:lovelace\n")
        result = BasicAuthPlugin().authenticate(
            AuthConfig(type="basic", source=f"file:{cred}")
        )
        expected = base64.b64encode(b"ada:lovelace").decode("ascii")
        assert result.headers == {"Authorization": f"Basic {expected}"}

    def test_missing_separator(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MAPI_TEST_BASIC", "nocolon")
        with pytest.raises(AuthError, match="username:password"):
            BasicAuthPlugin().authenticate(
                AuthConfig(type="basic", source="env:MAPI_TEST_BASIC")
            )


# ---------------------------------------------------------------------------
# AuthManager
# ---------------------------------------------------------------------------


class TestAuthManager:
    """Tests for AuthManager registration, dispatch and hooks."""

    def test_default_types(self) -> None:
        assert create_default_manager().list_types() == ["api_key", "basic", "bearer"]

    def test_unknown_type(self) -> None:
        with pytest.raises(AuthError, match="oauth"):
            AuthManager().get_plugin("oauth")

    def test_authenticate_none(self) -> None:
        assert AuthManager().authenticate(None).as_options() == {}

    def test_hook_rejects_unknown_type_eagerly(self) -> None:
        with pytest.raises(AuthError):
            create_default_manager().hook(AuthConfig(type="oauth"))

    def test_hook_caches_result(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[str] = []

        class CountingPlugin(BearerAuthPlugin):
            def authenticate(self, auth_config: AuthConfig) -> AuthResult:
                calls.append(auth_config.source)
                return AuthResult(headers={"Authorization": "Bearer x"})

        manager = AuthManager()
        manager.register(CountingPlugin())
        hook = manager.hook(AuthConfig(type="bearer", source="env:UNUSED"))

        assert calls == []
        first = hook()
        second = hook()
        assert first is second
        assert calls == ["env:UNUSED"]

    def test_hook_feeds_endpoint(self, transport, monkeypatch: pytest.MonkeyPatch) -> None:
        from mapi.api import Api

        monkeypatch.setenv("MAPI_TEST_TOKEN", "tok")
        hook = create_default_manager().hook(
            AuthConfig(type="bearer", source="env:MAPI_TEST_TOKEN")
        )
        api = Api({"services": [{"name": "users"}]}, transport, auth=hook)

        api["users"].invoke("get", 1)
        api["users"].invoke("health")
        assert transport.calls[0][2] == {"headers": {"Authorization": "Bearer tok"}}
        assert transport.calls[1][2] == {}
