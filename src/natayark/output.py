"""Console output for the natayark CLI.

stdout carries data only: the session view printed by ``login`` and
``status``, or the settings printed by ``config show``. Progress messages
and errors go to stderr so a piped ``natayark --json status`` stays
parseable.

Records are nested dicts. :meth:`OutputManager.print_record` flattens
them to dot-path keys (the same keys ``config set`` accepts) and renders
them as JSON, tab-separated lines or a Rich table. Rich is used only when
stdout is a terminal and colour is allowed (``NO_COLOR``, ``TERM=dumb``
and ``--no-color`` all turn it off).

Library code reports through the module-level helpers (:func:`debug`,
:func:`info`, ...), which delegate to the global :class:`OutputManager`
installed by :func:`~natayark.app.main_callback`.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.table import Table


class OutputFormat(str, Enum):
    """Record format on stdout. ``AUTO`` picks ``RICH`` on a colour TTY, else ``PLAIN``."""

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


def flatten(record: dict[str, Any], prefix: str = "") -> dict[str, Any]:
    """Flatten nested dicts into ``{"endpoints.oauth2_url": ...}`` form."""
    flat: dict[str, Any] = {}
    for key, value in record.items():
        path = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(flatten(value, f"{path}."))
        else:
            flat[path] = value
    return flat


class OutputManager:
    """Routes records to stdout and diagnostics to stderr.

    Args:
        format: Record format; ``AUTO`` is resolved once, here.
        no_color: Plain ``print`` on stderr instead of Rich markup.
        quiet: Drop ``info``, ``success`` and ``suggest`` messages; errors
            still show.
        verbose: Show ``debug`` messages (one per login request).
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _color_disabled_by_env()
        self._quiet = quiet
        self._verbose = verbose

        if format == OutputFormat.AUTO:
            rich_ok = sys.stdout.isatty() and not self._no_color
            format = OutputFormat.RICH if rich_ok else OutputFormat.PLAIN
        self._format = format

        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    # --- stdout ---

    def print_record(self, record: dict[str, Any]) -> None:
        """Write *record* to stdout in the active format."""
        if self._format == OutputFormat.JSON:
            print(json.dumps(record, indent=2, ensure_ascii=False), flush=True)
            return

        flat = flatten(record)
        if self._format == OutputFormat.PLAIN:
            for key, value in flat.items():
                print(f"{key}\t{_plain(value)}", flush=True)
            return

        table = Table(show_header=True, header_style="bold cyan")
        table.add_column("Key")
        table.add_column("Value")
        for key, value in flat.items():
            table.add_row(key, _plain(value))
        Console(file=sys.stdout, no_color=self._no_color, force_terminal=True).print(table)

    # --- stderr ---

    def _emit(self, plain: str, markup: str) -> None:
        if self._no_color:
            print(plain, file=sys.stderr, flush=True)
        else:
            self._stderr.print(markup)

    def info(self, message: str) -> None:
        if not self._quiet:
            self._emit(message, message)

    def success(self, message: str) -> None:
        if not self._quiet:
            self._emit(message, f"[green]{message}[/green]")

    def suggest(self, message: str) -> None:
        if not self._quiet:
            self._emit(f"→ {message}", f"[dim]→ {message}[/dim]")

    def error(self, message: str) -> None:
        """Shown even with ``--quiet``."""
        self._emit(f"Error: {message}", f"[bold red]Error:[/bold red] {message}")

    def debug(self, message: str) -> None:
        if self._verbose:
            self._emit(f"[debug] {message}", f"[dim]\\[debug] {message}[/dim]")


def _plain(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)


def _color_disabled_by_env() -> bool:
    return "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb"


# --- Global instance ---

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the global :class:`OutputManager`, creating a default one lazily."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Forget the global instance (tests call this between cases)."""
    global _output
    _output = None


def print_record(record: dict[str, Any]) -> None:
    get_output().print_record(record)


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def suggest(message: str) -> None:
    get_output().suggest(message)


def error(message: str) -> None:
    get_output().error(message)


def debug(message: str) -> None:
    get_output().debug(message)
