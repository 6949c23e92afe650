"""Typer application and CLI entry point for mapi.

Wires the root Typer app with the ``call``, ``inspect`` and ``profile``
sub-commands. :func:`main` is the console-script entry point declared in
``pyproject.toml``; it installs a SIGINT handler and turns any
:class:`~mapi.exceptions.MapiError` escaping a command into an error message
and the matching exit code.
"""

from __future__ import annotations

import signal
import sys
from typing import Any

import typer

from mapi import __version__
from mapi.commands.call import call_command
from mapi.commands.inspect import inspect_command
from mapi.commands.profile import profile_app
from mapi.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="mapi",
    help="Call REST APIs described by declarative service definitions.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("call")(call_command)
app.command("inspect")(inspect_command)
app.add_typer(profile_app, name="profile", help="Manage stored profiles.")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"mapi {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="Print requests instead of sending them."
    ),
) -> None:
    """Install the global output manager and store shared flags in ``ctx.obj``."""
    from mapi.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))

    ctx.ensure_object(dict)
    ctx.obj["dry_run"] = dry_run
    ctx.obj["verbose"] = verbose


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``mapi`` console script."""
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from mapi.exceptions import MapiError
        from mapi.output import error

        if isinstance(exc, MapiError):
            error(str(exc))
            sys.exit(exc.exit_code)
        error(f"Unexpected error: {exc}")
        sys.exit(EXIT_GENERIC_FAILURE)
