"""Definition and profile resolution shared by ``mapi call`` and ``mapi inspect``."""

from __future__ import annotations

from typing import Optional

import typer

from mapi.config import resolve_profile
from mapi.exceptions import MapiError
from mapi.loader import load_definition
from mapi.models import ApiDefinition, Profile
from mapi.output import debug, error


def load_context(
    definition: Optional[str],
    profile_name: Optional[str],
) -> tuple[ApiDefinition, Optional[Profile]]:
    """Resolve the active profile and load the API definition.

    ``--definition`` wins over the profile's ``definition`` source.

    Raises:
        typer.Exit: With the error's exit code when nothing can be loaded.
    """
    try:
        profile = resolve_profile(profile_name)
        source = definition or (profile.definition if profile else None)
        if source is None:
            error("No API definition. Pass --definition or run: mapi profile add")
            raise typer.Exit(code=2)
        if profile is not None:
            debug(f"Using profile '{profile.name}'")
        return load_definition(source), profile
    except MapiError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
