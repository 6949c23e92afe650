"""Shared test fixtures for mapi.

Provides a recording transport for exercising the endpoint tree without a
network, isolated config directories, output-state management, and a Typer
CLI runner. Fixtures are discovered automatically by pytest.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from mapi.output import OutputFormat, OutputManager, reset_output, set_output


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The manager caches sys.stdout/sys.stderr at creation time; CliRunner
    swaps those streams, so a manager must never outlive its test.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Transport double
# ---------------------------------------------------------------------------


class RecordingTransport:
    """Transport that records every call and returns a marker tuple."""

    def __init__(self) -> None:
        self.calls: list[tuple[Any, ...]] = []

    def get(self, url: str, options: dict[str, Any]) -> tuple[str, str]:
        self.calls.append(("GET", url, options))
        return ("GET", url)

    def post(self, url: str, body: Any, options: dict[str, Any]) -> tuple[str, str, Any]:
        self.calls.append(("POST", url, body, options))
        return ("POST", url, body)


@pytest.fixture
def transport() -> RecordingTransport:
    """A fresh RecordingTransport."""
    return RecordingTransport()


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Points XDG_CONFIG_HOME into tmp_path, clears MAPI_* variables and
    changes the working directory to tmp_path.

    Returns:
        The tmp_path root directory.
    """
    monkeypatch.setattr("mapi.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    for var in ["MAPI_PROFILE", "MAPI_BASE_URL"]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def plain_output() -> OutputManager:
    """Install a non-quiet, uncoloured PLAIN output manager.

    Diagnostics go straight to ``sys.stderr`` via ``print`` so ``capsys``
    sees them verbatim.
    """
    output = OutputManager(format=OutputFormat.PLAIN, no_color=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
