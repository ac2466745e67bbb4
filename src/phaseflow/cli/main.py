# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : main.py
#   file_relpath : src/phaseflow/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""Click entry point for the PhaseFlow CLI.

Group-level options (verbosity, color, config files) are resolved once and
placed into ``ctx.obj``; subcommands read them from there.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from phaseflow.cli.commands.config import config_command
from phaseflow.cli.commands.plugins import plugins_command
from phaseflow.cli.commands.presenters import presenters_command
from phaseflow.cli.commands.run import run_command
from phaseflow.cli.commands.version import version_command
from phaseflow.cli.console import ClickConsole
from phaseflow.cli.options import (
    ColorMode,
    common_color_options,
    common_config_options,
    common_verbose_options,
    resolve_color_mode,
    resolve_verbosity,
)
from phaseflow.config.logging import get_logger, resolve_env_log_level, setup_logging

if TYPE_CHECKING:
    from phaseflow.cli.console import ConsoleLike
    from phaseflow.config.logging import PhaseflowLogger

logger: PhaseflowLogger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
    config_paths: tuple[str, ...],
    no_config: bool,
) -> None:
    """Initialize shared state (verbosity, color, config sources) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        color_mode (ColorMode | None): Explicit color mode from ``--color`` (or ``None``).
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
        config_paths (tuple[str, ...]): Extra config files from ``--config``.
        no_config (bool): Whether ``--no-config`` was passed.
    """
    ctx.obj = ctx.obj or {}

    # Program-output verbosity:
    ctx.obj["verbosity_level"] = resolve_verbosity(verbose, quiet)

    # Internal logging via env:
    level_env: int | None = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    effective_color_mode: ColorMode = (
        ColorMode.NEVER if no_color else (color_mode or ColorMode.AUTO)
    )
    enable_color: bool = resolve_color_mode(cli_mode=effective_color_mode, output_format=None)
    ctx.obj["color_enabled"] = enable_color
    ctx.color = enable_color

    ctx.obj["console"] = ClickConsole(enable_color=enable_color)

    ctx.obj["config_paths"] = tuple(config_paths)
    ctx.obj["no_config"] = no_config


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="PhaseFlow: run fetch/transform workflows for routes.",
)
@common_verbose_options
@common_color_options
@common_config_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
    config_paths: tuple[str, ...],
    no_config: bool,
) -> None:
    """Entry point for the PhaseFlow CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        color_mode=color_mode,
        no_color=no_color,
        config_paths=config_paths,
        no_config=no_config,
    )
    console: ConsoleLike = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'phaseflow run ROUTE --content-type TYPE' to run a workflow.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(version_command)

cli.add_command(config_command)

cli.add_command(plugins_command)

cli.add_command(presenters_command)

cli.add_command(run_command)

if __name__ == "__main__":
    cli()
