"""``mapi inspect`` -- list every service, alias, method and path of an API."""

from __future__ import annotations

from typing import Optional

import typer

from mapi.api import Api
from mapi.client import HttpxTransport
from mapi.commands.common import load_context
from mapi.exceptions import MapiError
from mapi.output import error, print_table


def inspect_command(
    definition: Optional[str] = typer.Option(
        None, "--definition", "-d", help="API definition file or URL."
    ),
    profile: Optional[str] = typer.Option(
        None, "--profile", "-p", help="Profile name."
    ),
) -> None:
    """Show the compiled endpoint tree.

    One row per endpoint: the dotted service name, the alias it is bound to
    (if any), the HTTP method, the full path template and whether it
    requires auth. Endpoints are compiled exactly as ``mapi call`` would
    compile them, default CRUD and health-check endpoints included.

    Example::

        mapi inspect --definition api.yaml
        mapi --json inspect -p myapi
    """
    api_definition, _ = load_context(definition, profile)
    try:
        # Never opened: construction does not touch the transport.
        api = Api(api_definition, HttpxTransport())
    except MapiError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    headers = ["Service", "Alias", "Method", "Path", "Auth"]
    rows: list[list[str]] = []
    for name, service in api.walk():
        for endpoint in service.endpoints:
            rows.append([
                name,
                endpoint.alias or "",
                endpoint.method,
                endpoint.template,
                "yes" if endpoint.requires_auth else "no",
            ])
    print_table(headers, rows, title="Endpoints")
