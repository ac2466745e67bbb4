# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : config.py
#   file_relpath : src/phaseflow/cli/commands/config.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""PhaseFlow `config` command.

Prints the effective configuration (defaults merged with discovered and
explicit config files) as TOML, or as JSON with ``--format json``.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from phaseflow.cli.cmd_common import get_effective_verbosity, load_config
from phaseflow.cli.formats import OutputFormat, is_machine_format
from phaseflow.cli.options import output_format_option

if TYPE_CHECKING:
    from phaseflow.cli.console import ConsoleLike
    from phaseflow.config.model import Config


@click.command(
    name="config",
    help="Show the effective PhaseFlow configuration.",
    epilog="""
Merges the built-in defaults, [tool.phaseflow] in pyproject.toml, phaseflow.toml
and any --config files given to the group, in that order.""",
)
@output_format_option
def config_command(*, output_format: OutputFormat | None = None) -> None:
    """Dump the merged configuration."""
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]
    vlevel: int = get_effective_verbosity(ctx)

    config: Config = load_config(ctx)

    if is_machine_format(output_format):
        payload = {"config_files": list(config.config_files), **config.to_toml_dict()}
        console.print(json.dumps(payload))
        return

    if vlevel > 0:
        sources: str = ", ".join(config.config_files) or "(defaults only)"
        console.print(console.styled(f"# Sources: {sources}", dim=True))
    console.print(config.to_toml(), nl=False)
