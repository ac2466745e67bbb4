# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : version.py
#   file_relpath : src/phaseflow/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""PhaseFlow `version` command.

Prints the PhaseFlow version as installed in the active Python environment.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from phaseflow.cli.cmd_common import get_effective_verbosity
from phaseflow.cli.formats import OutputFormat, is_machine_format
from phaseflow.cli.options import output_format_option
from phaseflow.constants import PHASEFLOW_VERSION

if TYPE_CHECKING:
    from phaseflow.cli.console import ConsoleLike


@click.command(
    name="version",
    help="Show the current version of PhaseFlow.",
)
@output_format_option
def version_command(*, output_format: OutputFormat | None = None) -> None:
    """Show the current version of PhaseFlow."""
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]
    vlevel: int = get_effective_verbosity(ctx)

    if is_machine_format(output_format):
        console.print(json.dumps({"version": PHASEFLOW_VERSION}))
    elif vlevel > 0:
        console.print(console.styled("PhaseFlow version:\n", bold=True, underline=True))
        console.print(f"    {console.styled(PHASEFLOW_VERSION, bold=True)}")
    else:
        console.print(console.styled(PHASEFLOW_VERSION, bold=True))
