# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : plugins.py
#   file_relpath : src/phaseflow/cli/commands/plugins.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""PhaseFlow `plugins` command.

Lists the three registry catalogs (plugins, presenters, shared plugins) with
their fetcher and transformer paths, followed by the registry stats.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import click

from phaseflow.cli.cmd_common import build_registry, get_effective_verbosity, load_config
from phaseflow.cli.formats import OutputFormat
from phaseflow.cli.options import output_format_option
from phaseflow.pipeline.presenter import Presenter

if TYPE_CHECKING:
    from phaseflow.cli.console import ConsoleLike
    from phaseflow.config.model import Config
    from phaseflow.pipeline.plugin import Plugin
    from phaseflow.registry.registry import PluginRegistry


def describe_plugin(plugin: Plugin) -> dict[str, Any]:
    """Return a JSON-friendly description of a plugin or presenter."""
    entry: dict[str, Any] = {
        "name": plugin.name,
        "display_name": plugin.get_display_name(),
        "fetchers": plugin.phase_set.get_fetcher_paths(),
        "transformers": plugin.phase_set.get_transformer_paths(),
        "view": plugin.view.name if plugin.view is not None else None,
    }
    if isinstance(plugin, Presenter):
        entry["route"] = plugin.route
        entry["content_type"] = plugin.content_type
        entry["tenant"] = plugin.tenant
    return entry


@click.command(
    name="plugins",
    help="List registered plugins, presenters and shared plugins.",
)
@output_format_option
def plugins_command(*, output_format: OutputFormat | None = None) -> None:
    """List the registry catalogs."""
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]
    vlevel: int = get_effective_verbosity(ctx)

    config: Config = load_config(ctx)
    registry: PluginRegistry = build_registry(config)
    fmt: OutputFormat = output_format or OutputFormat.DEFAULT

    catalogs: dict[str, list[dict[str, Any]]] = {
        "plugins": [describe_plugin(p) for p in registry.get_all_plugins()],
        "presenters": [describe_plugin(p) for p in registry.get_all_presenters()],
        "shared_plugins": [describe_plugin(p) for p in registry.get_all_shared_plugins()],
    }

    if fmt == OutputFormat.JSON:
        console.print(json.dumps({**catalogs, "stats": registry.get_stats().to_dict()}, indent=2))
        return

    if fmt == OutputFormat.NDJSON:
        for kind, entries in catalogs.items():
            for entry in entries:
                console.print(json.dumps({"kind": kind, **entry}))
        return

    for kind, entries in catalogs.items():
        title: str = kind.replace("_", " ").capitalize()
        console.print(console.styled(f"{title} (total: {len(entries)})", bold=True))
        for idx, entry in enumerate(entries, start=1):
            console.print(f"  {idx}. {entry['display_name']}")
            if vlevel > 0:
                fetchers: str = ", ".join(entry["fetchers"]) or "-"
                transformers: str = ", ".join(entry["transformers"]) or "-"
                console.print(console.styled(f"       fetchers: {fetchers}", dim=True))
                console.print(console.styled(f"       transformers: {transformers}", dim=True))
        console.print()

    stats = registry.get_stats()
    console.print(
        f"{stats.total_count} registered "
        f"({stats.plugin_count} plugins, {stats.presenter_count} presenters, "
        f"{stats.shared_plugin_count} shared)"
    )
