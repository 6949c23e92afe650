"""``mapi profile`` -- create, list, show and remove stored profiles."""

from __future__ import annotations

from typing import Optional

import typer

from mapi.config import delete_profile, list_profiles, load_profile, profile_exists, save_profile
from mapi.exceptions import ConfigError
from mapi.models import AuthConfig, Profile, RequestConfig
from mapi.output import error, format_response, info, print_table, success


profile_app = typer.Typer(no_args_is_help=True)


@profile_app.command("add")
def profile_add(
    name: str = typer.Argument(help="Profile name."),
    definition: str = typer.Option(
        ..., "--definition", "-d", help="API definition file or URL."
    ),
    base_url: Optional[str] = typer.Option(
        None, "--base-url", help="Server URL prefixed to every request."
    ),
    auth_type: Optional[str] = typer.Option(
        None, "--auth-type", help="Auth type: api_key, bearer, basic."
    ),
    auth_source: str = typer.Option(
        "prompt", "--auth-source", help="Credential source: env:VAR, file:/path, prompt."
    ),
    auth_header: Optional[str] = typer.Option(
        None, "--auth-header", help="Header (or cookie) name for api_key auth."
    ),
    auth_location: str = typer.Option(
        "header", "--auth-location", help="api_key placement: header, query, cookie."
    ),
    timeout: int = typer.Option(30, "--timeout", help="Request timeout in seconds."),
    insecure: bool = typer.Option(False, "--insecure", help="Skip SSL verification."),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing profile."),
) -> None:
    """Create a profile.

    Example::

        mapi profile add shop -d shop.yaml --base-url https://shop.example.com \\
            --auth-type bearer --auth-source env:SHOP_TOKEN
    """
    if profile_exists(name) and not force:
        error(f"Profile '{name}' already exists (use --force to overwrite)")
        raise typer.Exit(code=2)

    auth = None
    if auth_type is not None:
        auth = AuthConfig(
            type=auth_type,
            source=auth_source,
            header=auth_header,
            location=auth_location,
        )

    profile = Profile(
        name=name,
        definition=definition,
        base_url=base_url,
        auth=auth,
        request=RequestConfig(timeout=timeout, verify_ssl=not insecure),
    )
    save_profile(profile)
    success(f"Saved profile '{name}'")


@profile_app.command("list")
def profile_list() -> None:
    """List stored profiles."""
    names = list_profiles()
    if not names:
        info("No profiles. Run: mapi profile add NAME --definition FILE")
        return

    rows: list[list[str]] = []
    for name in names:
        try:
            profile = load_profile(name)
        except ConfigError as exc:
            rows.append([name, f"(invalid: {exc})", ""])
            continue
        rows.append([name, profile.definition, profile.base_url or ""])
    print_table(["Name", "Definition", "Base URL"], rows, title="Profiles")


@profile_app.command("show")
def profile_show(name: str = typer.Argument(help="Profile name.")) -> None:
    """Show a profile as JSON."""
    try:
        profile = load_profile(name)
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    format_response(profile.model_dump(mode="json"))


@profile_app.command("remove")
def profile_remove(name: str = typer.Argument(help="Profile name.")) -> None:
    """Delete a profile."""
    try:
        delete_profile(name)
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    success(f"Removed profile '{name}'")
