# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : cmd_common.py
#   file_relpath : src/phaseflow/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""Common command utilities for Click-based commands.

Small plumbing helpers shared by several commands: effective verbosity,
layered config resolution from the group options, and building a populated
[`PluginRegistry`][phaseflow.registry.registry.PluginRegistry].
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from phaseflow.builtins import register_builtins
from phaseflow.cli.errors import PhaseflowConfigError
from phaseflow.config.io import ConfigError
from phaseflow.config.logging import get_logger
from phaseflow.config.model import MutableConfig
from phaseflow.registry.loading import (
    PluginLoadError,
    load_entry_point_plugins,
    load_plugin_modules,
)
from phaseflow.registry.registry import PluginRegistry

if TYPE_CHECKING:
    import click

    from phaseflow.config.logging import PhaseflowLogger
    from phaseflow.config.model import ArgsLike, Config

logger: PhaseflowLogger = get_logger(__name__)

__all__: list[str] = [
    "build_registry",
    "get_effective_verbosity",
    "load_config",
]


def get_effective_verbosity(ctx: click.Context) -> int:
    """Return the program-output verbosity for this command.

    ``0`` is terse (default and ``-q``), ``1`` is verbose (``-v``) and ``2``
    adds debugging detail (``-vv`` and above).
    """
    level: int = int(ctx.obj.get("verbosity_level", logging.WARNING))
    if level <= logging.DEBUG:
        return 2
    if level <= logging.INFO:
        return 1
    return 0


def load_config(ctx: click.Context, overrides: ArgsLike | None = None) -> Config:
    """Resolve the layered configuration for the current invocation.

    Reads ``config_paths`` and ``no_config`` stored on ``ctx.obj`` by the
    group, then applies per-command ``overrides`` (see
    [`MutableConfig.apply_cli_args`][phaseflow.config.model.MutableConfig.apply_cli_args]).

    Raises:
        PhaseflowConfigError: If a config file cannot be read or parsed.
    """
    config_paths: tuple[str, ...] = tuple(ctx.obj.get("config_paths", ()))
    no_config: bool = bool(ctx.obj.get("no_config", False))
    try:
        draft: MutableConfig = MutableConfig.load_merged(
            extra_config_files=[Path(p) for p in config_paths],
            no_config=no_config,
        )
    except ConfigError as exc:
        raise PhaseflowConfigError(str(exc)) from exc
    if overrides:
        draft.apply_cli_args(overrides)
    config: Config = draft.freeze()
    logger.debug("Effective config: %s", config)
    return config


def build_registry(config: Config) -> PluginRegistry:
    """Return a registry populated according to ``config``.

    Registration order: built-ins (when enabled), entry-point plugins, then
    configured plugin modules, so later sources can replace earlier entries by
    name.

    Raises:
        PhaseflowConfigError: If a configured plugin module cannot be loaded.
    """
    registry = PluginRegistry()
    if config.builtins:
        register_builtins(registry)
    load_entry_point_plugins(registry)
    try:
        load_plugin_modules(registry, config.plugin_modules)
    except PluginLoadError as exc:
        raise PhaseflowConfigError(str(exc)) from exc
    logger.debug("Built %r", registry)
    return registry
