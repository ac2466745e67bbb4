# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : errors.py
#   file_relpath : src/phaseflow/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""Exceptions for the PhaseFlow CLI.

Raise these from commands to terminate with a standardized message and exit
code. `show()` prints through the project console when one is present in the
Click context.
"""

from __future__ import annotations

from typing import IO, Any

import click

from phaseflow.cli.exit_codes import ExitCode

__all__: list[str] = [
    "PhaseflowCliError",
    "PhaseflowConfigError",
    "PhaseflowNoMatchError",
    "PhaseflowPipelineError",
    "PhaseflowUsageError",
]


class PhaseflowCliError(click.ClickException):
    """Base class for all PhaseFlow CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text (colorized in `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:
        """Display the error using the project console if available."""
        ctx: click.Context | None = click.get_current_context(silent=True)
        if ctx is not None and isinstance(ctx.obj, dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(console.styled(self.format_message(), fg="bright_red"))
                return
        super().show(file)


class PhaseflowUsageError(PhaseflowCliError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class PhaseflowConfigError(PhaseflowCliError):
    """Error for configuration errors (malformed config, unloadable plugin module)."""

    exit_code = ExitCode.CONFIG_ERROR


class PhaseflowNoMatchError(PhaseflowCliError):
    """No presenter matches the request."""

    exit_code = ExitCode.NO_MATCH


class PhaseflowPipelineError(PhaseflowCliError):
    """A fetcher or transformer failed while running the workflow."""

    exit_code = ExitCode.PIPELINE_ERROR
