"""Typer application factory and CLI entry point for natayark.

This module wires together the top-level Typer application and registers
the built-in commands (``login``, ``status``, ``logout`` and the ``config``
group).

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. Unhandled exceptions are written to a crash log under
the data directory.
"""

from __future__ import annotations

import sys
import traceback
from datetime import datetime
from pathlib import Path

import typer

from natayark import __version__
from natayark.commands.config import config_app
from natayark.commands.session import login_command, logout_command, status_command
from natayark.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="natayark",
    help="Log in to Natayark ID and manage the saved session.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("login")(login_command)
app.command("status")(status_command)
app.command("logout")(logout_command)
app.add_typer(config_app, name="config", help="Settings management.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"natayark {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
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
        False, "--verbose", "-v", help="Show each login request."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Initialises the global :class:`~natayark.output.OutputManager` from
    the CLI flags.
    """
    from natayark.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(
        OutputManager(
            format=fmt,
            no_color=no_color,
            quiet=quiet,
            verbose=verbose,
        )
    )


def _write_crash_log(exc: BaseException) -> Path:
    """Save the traceback of an unexpected failure under ``<data>/logs/``."""
    from natayark.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_path = logs_dir / f"crash-{datetime.now():%Y%m%d-%H%M%S}.log"
    header = f"natayark {__version__} ({' '.join(sys.argv)})\n\n"
    log_path.write_text(header + "".join(traceback.format_exception(exc)), encoding="utf-8")
    return log_path


def main() -> None:
    """Console-script entry point.

    A :class:`~natayark.exceptions.NatayarkError` that escapes a command
    exits with its ``exit_code``. Anything else is a bug: the traceback is
    written to a crash log and the process exits with status 1.
    """
    from natayark.exceptions import NatayarkError
    from natayark.output import error

    try:
        app()
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except NatayarkError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
    except Exception as exc:
        log_path = _write_crash_log(exc)
        error(f"Unexpected error, traceback saved to {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
