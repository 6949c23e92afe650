"""Load API definitions from a URL, local file, or stdin.

Definition files use the same schema as the mappings accepted by
:class:`~mapi.api.Api`, in JSON or YAML::

    base: /api
    services:
      - name: users
        endpoints:
          - method: GET
            endpoint: /:id/posts
            alias: posts

:func:`load_definition` fetches and parses the document and validates it into
an :class:`~mapi.models.ApiDefinition`. Callables cannot be expressed in a
file, so ``methods`` overrides are only available from Python.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import httpx
import yaml
from pydantic import ValidationError

from mapi.exceptions import DefinitionError
from mapi.models import ApiDefinition
from mapi.output import debug


def load_definition(source: str) -> ApiDefinition:
    """Load and validate an API definition.

    Args:
        source: A URL (http/https), file path, or ``-`` for stdin.

    Raises:
        DefinitionError: If the source cannot be read, parsed, or validated.
    """
    debug(f"Loading API definition from {source}")
    raw = load_raw(source)
    try:
        return ApiDefinition.model_validate(raw)
    except ValidationError as exc:
        raise DefinitionError(f"Invalid API definition in {source}: {exc}") from exc


def load_raw(source: str) -> dict[str, Any]:
    """Load the definition document at *source* as a plain dict."""
    if source == "-":
        return _load_from_stdin()
    if source.startswith(("http://", "https://")):
        return _load_from_url(source)
    return _load_from_file(source)


def _load_from_stdin() -> dict[str, Any]:
    content = sys.stdin.read()
    if not content.strip():
        raise DefinitionError("No input received from stdin")
    return _parse_content(content)


def _load_from_url(url: str) -> dict[str, Any]:
    try:
        response = httpx.get(url, timeout=30.0, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise DefinitionError(
            f"HTTP {exc.response.status_code} fetching definition from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise DefinitionError(f"Failed to fetch definition from {url}: {exc}") from exc

    content_type = response.headers.get("content-type", "")
    hint = ""
    if "json" in content_type:
        hint = "json"
    elif "yaml" in content_type or "yml" in content_type:
        hint = "yaml"
    return _parse_content(response.text, hint=hint)


def _load_from_file(path: str) -> dict[str, Any]:
    file_path = Path(path)
    if not file_path.is_file():
        raise DefinitionError(f"Definition file not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DefinitionError(f"Failed to read definition file {path}: {exc}") from exc

    if not content.strip():
        raise DefinitionError(f"Definition file is empty: {path}")

    suffix = file_path.suffix.lower()
    hint = ""
    if suffix == ".json":
        hint = "json"
    elif suffix in (".yaml", ".yml"):
        hint = "yaml"
    return _parse_content(content, hint=hint)


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Parse *content* as JSON, falling back to YAML unless *hint* says otherwise.

    Raises:
        DefinitionError: If neither parser yields a mapping.
    """
    if hint != "yaml":
        try:
            result = json.loads(content)
        except json.JSONDecodeError as exc:
            if hint == "json":
                raise DefinitionError(f"Invalid JSON: {exc}") from exc
        else:
            return _require_mapping(result)

    try:
        result = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise DefinitionError(f"Failed to parse definition as JSON or YAML: {exc}") from exc
    return _require_mapping(result)


def _require_mapping(result: Any) -> dict[str, Any]:
    if not isinstance(result, dict):
        kind = type(result).__name__ if result is not None else "empty document"
        raise DefinitionError(f"Definition must be a JSON/YAML object (got {kind})")
    return result
