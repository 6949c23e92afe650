"""Profile storage, active-profile resolution, and credential sources.

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD
  (``$XDG_CONFIG_HOME/mapi/``), ``~/.mapi/`` elsewhere.
* **Profiles** -- one JSON file per API under ``profiles/``, each a
  :class:`~mapi.models.Profile`. Writes are atomic (temp file + rename).
* **Precedence** -- :func:`resolve_profile` picks the active profile from the
  CLI flag, ``MAPI_PROFILE``, the project-local ``./mapi.json``, or the only
  stored profile, in that order. ``MAPI_BASE_URL`` overrides the profile's
  ``base_url``.
* **Credentials** -- :func:`resolve_credential` reads secrets from
  environment variables, files, or an interactive prompt.
"""

from __future__ import annotations

import getpass
import json
import os
import platform
import sys
import tempfile
from pathlib import Path
from typing import Any, Optional

from mapi.exceptions import ConfigError
from mapi.models import Profile

_APP_NAME = "mapi"
_PROJECT_CONFIG_FILENAME = "mapi.json"


# --- Paths ---


def _is_xdg_platform() -> bool:
    """Return True on Linux and the BSDs."""
    system = platform.system()
    return system == "Linux" or system.endswith("BSD")


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/mapi/`` (default ``~/.config/mapi/``).
    On macOS/Windows: ``~/.mapi/``.
    """
    if _is_xdg_platform():
        env_value = os.environ.get("XDG_CONFIG_HOME", "")
        base = Path(env_value) if env_value else Path.home() / ".config"
        path = base / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}"
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_profiles_dir() -> Path:
    """Return ``<config_dir>/profiles/``, creating it if necessary."""
    path = get_config_dir() / "profiles"
    path.mkdir(parents=True, exist_ok=True)
    return path


def _atomic_write(path: Path, data: str) -> None:
    """Write *data* to *path* via a sibling temp file and ``os.replace``."""
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Profiles ---


def _profile_path(name: str) -> Path:
    return get_profiles_dir() / f"{name}.json"


def list_profiles() -> list[str]:
    """Return stored profile names, sorted."""
    return sorted(p.stem for p in get_profiles_dir().glob("*.json") if p.is_file())


def profile_exists(name: str) -> bool:
    return _profile_path(name).is_file()


def load_profile(name: str) -> Profile:
    """Load and validate the profile *name*.

    Raises:
        ConfigError: If the file is missing, is not JSON, or fails validation.
    """
    path = _profile_path(name)
    if not path.is_file():
        raise ConfigError(f"Profile '{name}' not found at {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return Profile.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid profile '{name}' at {path}: {exc}") from exc


def save_profile(profile: Profile) -> None:
    """Persist *profile* atomically as ``<profiles_dir>/<name>.json``."""
    data = profile.model_dump(mode="json")
    _atomic_write(_profile_path(profile.name), json.dumps(data, indent=2) + "\n")


def delete_profile(name: str) -> None:
    """Delete the profile *name*.

    Raises:
        ConfigError: If the profile does not exist.
    """
    path = _profile_path(name)
    if not path.is_file():
        raise ConfigError(f"Profile '{name}' not found at {path}")
    path.unlink()


def load_project_config() -> Optional[dict[str, Any]]:
    """Load ``./mapi.json`` if present.

    Raises:
        ConfigError: If the file exists but is not valid JSON.
    """
    path = Path.cwd() / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc


def resolve_profile(cli_profile: Optional[str] = None) -> Optional[Profile]:
    """Resolve the active profile.

    Precedence (high to low):
        1. ``cli_profile`` (the ``--profile`` flag)
        2. ``MAPI_PROFILE`` environment variable
        3. ``default_profile`` in ``./mapi.json``
        4. The only stored profile, when exactly one exists

    ``MAPI_BASE_URL``, when set, replaces the resolved profile's ``base_url``.

    Returns:
        The active profile, or ``None`` if nothing selects one.
    """
    name: Optional[str] = None

    project = load_project_config()
    if project is not None:
        name = project.get("default_profile")

    env_profile = os.environ.get("MAPI_PROFILE")
    if env_profile:
        name = env_profile

    if cli_profile is not None:
        name = cli_profile

    if name is None:
        profiles = list_profiles()
        if len(profiles) == 1:
            name = profiles[0]

    if name is None:
        return None

    profile = load_profile(name)
    env_base_url = os.environ.get("MAPI_BASE_URL")
    if env_base_url:
        profile.base_url = env_base_url
    return profile


# --- Credential sources ---


def resolve_credential(source: str) -> str:
    """Resolve a credential from its source descriptor.

    Supported formats:
        - ``"env:VAR_NAME"`` -- ``os.environ["VAR_NAME"]``
        - ``"file:/path/to/file"`` -- file content, stripped of whitespace
        - ``"prompt"`` -- interactive prompt (requires a TTY)

    Raises:
        ConfigError: If the source cannot be resolved.
    """
    if source.startswith("env:"):
        var_name = source[4:]
        value = os.environ.get(var_name)
        if value is None:
            raise ConfigError(
                f"Environment variable '{var_name}' is not set (source: {source})"
            )
        return value

    if source.startswith("file:"):
        path = Path(source[5:]).expanduser()
        if not path.is_file():
            raise ConfigError(f"Credential file not found: {path} (source: {source})")
        try:
            return path.read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise ConfigError(f"Cannot read credential file {path}: {exc}") from exc

    if source == "prompt":
        if not sys.stdin.isatty():
            raise ConfigError(
                "Cannot prompt for credentials: stdin is not a TTY (source: prompt)"
            )
        return getpass.getpass("Enter credential: ")

    raise ConfigError(f"Unknown credential source format: {source}")
