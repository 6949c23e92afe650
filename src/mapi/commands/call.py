"""``mapi call`` -- invoke one alias of the compiled API."""

from __future__ import annotations

import json
from typing import Any, Optional

import httpx
import typer

from mapi.api import Api
from mapi.auth import create_default_manager
from mapi.client import HttpxTransport
from mapi.client.response import format_api_response, raise_for_status
from mapi.commands.common import load_context
from mapi.exceptions import ConnectionError_, MapiError
from mapi.output import error


def parse_data(raw: Optional[str]) -> Any:
    """Parse the DATA argument: JSON when possible, otherwise the raw string."""
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def call_command(
    ctx: typer.Context,
    target: str = typer.Argument(
        help="Dotted alias path, e.g. 'users.get' or 'users.roles.create'."
    ),
    data: Optional[str] = typer.Argument(
        None, help="Call data: a bare value, or JSON (object, number, ...)."
    ),
    definition: Optional[str] = typer.Option(
        None, "--definition", "-d", help="API definition file or URL."
    ),
    profile: Optional[str] = typer.Option(
        None, "--profile", "-p", help="Profile name."
    ),
    base_url: Optional[str] = typer.Option(
        None, "--base-url", help="Server URL (overrides the profile)."
    ),
) -> None:
    """Call an endpoint alias and print the response.

    Example::

        mapi call users.get 42 -d api.yaml --base-url https://example.com
        mapi call users.create '{"name": "Ada"}'
        mapi call users.posts.get '{"user_id": 1, "id": 7}'
    """
    api_definition, active = load_context(definition, profile)
    dry_run = bool(ctx.obj and ctx.obj.get("dry_run"))
    server = base_url or (active.base_url if active else None) or ""

    try:
        auth = None
        if active is not None and active.auth is not None:
            auth = create_default_manager().hook(active.auth)

        with HttpxTransport(
            server,
            request=active.request if active else None,
            dry_run=dry_run,
        ) as transport:
            api = Api(api_definition, transport, auth=auth)
            method = api.resolve_alias(target)
            try:
                response = method(parse_data(data))
            except httpx.HTTPError as exc:
                raise ConnectionError_(f"Request failed: {exc}") from exc

        format_api_response(response)
        raise_for_status(response)
    except MapiError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
