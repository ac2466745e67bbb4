# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : console.py
#   file_relpath : src/phaseflow/cli/console.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""Console abstraction for user-facing program output.

Commands write results through a console stored in ``ctx.obj["console"]``;
``logging`` is reserved for diagnostics and always goes to stderr.
"""

from __future__ import annotations

import sys
from typing import Any, Protocol, TextIO

import click

__all__: list[str] = [
    "ClickConsole",
    "ConsoleLike",
    "get_console_safely",
]


class ConsoleLike(Protocol):
    """Minimal interface for a console used by CLI commands."""

    def print(self, text: str = "", *, nl: bool = True) -> None:
        """Write a message to stdout."""
        ...

    def warn(self, text: str, *, nl: bool = True) -> None:
        """Write a warning message to stderr."""
        ...

    def error(self, text: str, *, nl: bool = True) -> None:
        """Write an error message to stderr."""
        ...

    def styled(self, text: str, **style_kwargs: Any) -> str:
        """Return a styled string (no-op if styling is disabled)."""
        ...


class ClickConsole(ConsoleLike):
    """Program-output console backed by ``click.echo``.

    Args:
        enable_color (bool): If True, emit ANSI color codes.
        out (TextIO | None): Stream for standard output (defaults to ``sys.stdout``).
        err (TextIO | None): Stream for error output (defaults to ``sys.stderr``).
    """

    enable_color: bool
    out: TextIO | None
    err: TextIO | None

    def __init__(
        self,
        *,
        enable_color: bool = True,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.enable_color = enable_color
        self.out = out or sys.stdout
        self.err = err or sys.stderr

    def print(self, text: str = "", *, nl: bool = True) -> None:
        click.echo(text, nl=nl, file=self.out, color=self.enable_color)

    def warn(self, text: str, *, nl: bool = True) -> None:
        click.secho(text, nl=nl, file=self.err, color=self.enable_color, fg="yellow")

    def error(self, text: str, *, nl: bool = True) -> None:
        click.secho(text, nl=nl, file=self.err, color=self.enable_color, fg="bright_red")

    def styled(self, text: str, **style_kwargs: Any) -> str:
        """Return ``text`` styled with ``click.style`` (plain when color is disabled)."""
        if not self.enable_color:
            return text
        return click.style(text, **style_kwargs)


def get_console_safely() -> ConsoleLike:
    """Return the console from the current Click context, or a plain fallback."""
    ctx: click.Context | None = click.get_current_context(silent=True)
    if ctx is not None and isinstance(ctx.obj, dict):
        console: ConsoleLike | None = ctx.obj.get("console")
        if console is not None:
            return console
    return ClickConsole(enable_color=False)
