# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : presenters.py
#   file_relpath : src/phaseflow/cli/commands/presenters.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""PhaseFlow `presenters` command.

Lists registered presenters, optionally narrowed to a content type and/or a
tenant. The tenant filter is exact: presenters without a tenant are not
listed under ``--tenant``, even though they would match such a request.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from phaseflow.cli.cmd_common import build_registry, load_config
from phaseflow.cli.commands.plugins import describe_plugin
from phaseflow.cli.formats import OutputFormat
from phaseflow.cli.options import output_format_option

if TYPE_CHECKING:
    from phaseflow.cli.console import ConsoleLike
    from phaseflow.config.model import Config
    from phaseflow.pipeline.presenter import Presenter
    from phaseflow.registry.registry import PluginRegistry


@click.command(
    name="presenters",
    help="List registered presenters.",
)
@click.option("--content-type", "content_type", default=None, help="Only this content type.")
@click.option("--tenant", "tenant", default=None, help="Only presenters bound to this tenant.")
@output_format_option
def presenters_command(
    *,
    content_type: str | None = None,
    tenant: str | None = None,
    output_format: OutputFormat | None = None,
) -> None:
    """List presenters, filtered by content type and tenant."""
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]

    config: Config = load_config(ctx)
    registry: PluginRegistry = build_registry(config)

    presenters: list[Presenter] = registry.get_all_presenters()
    if content_type is not None:
        by_type: set[str] = {p.name for p in registry.get_presenters_by_content_type(content_type)}
        presenters = [p for p in presenters if p.name in by_type]
    if tenant is not None:
        by_tenant: set[str] = {p.name for p in registry.get_presenters_by_tenant(tenant)}
        presenters = [p for p in presenters if p.name in by_tenant]

    fmt: OutputFormat = output_format or OutputFormat.DEFAULT
    if fmt == OutputFormat.JSON:
        console.print(json.dumps([describe_plugin(p) for p in presenters], indent=2))
        return
    if fmt == OutputFormat.NDJSON:
        for p in presenters:
            console.print(json.dumps(describe_plugin(p)))
        return

    if not presenters:
        console.print(console.styled("No presenters match.", fg="blue"))
        return
    for p in presenters:
        scope: str = f" [tenant: {p.tenant}]" if p.tenant else ""
        console.print(
            f"{console.styled(p.name, bold=True)}  {p.route}  {p.content_type}"
            + console.styled(scope, dim=True)
        )
