# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : run.py
#   file_relpath : src/phaseflow/cli/commands/run.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""PhaseFlow `run` command.

Builds a [`WorkflowContext`][phaseflow.pipeline.context.WorkflowContext] for a
route, resolves the matching presenter, runs the shared plugins and the
presenter, and prints the transformed data.

Exit codes:
    * ``SUCCESS`` when the workflow completes;
    * ``NO_MATCH`` when no presenter matches route, content type and tenant;
    * ``PIPELINE_ERROR`` when a fetcher or transformer fails;
    * ``CONFIG_ERROR`` when the configuration or a plugin module is invalid.
"""

from __future__ import annotations

import asyncio
import json
from typing import TYPE_CHECKING, Any

import click

from phaseflow.builtins.articles import CLOCK_METADATA_KEY
from phaseflow.builtins.utils import parse_timestamp
from phaseflow.cli.cli_types import KeyValueParam
from phaseflow.cli.cmd_common import build_registry, get_effective_verbosity, load_config
from phaseflow.cli.errors import PhaseflowNoMatchError, PhaseflowPipelineError
from phaseflow.cli.formats import OutputFormat
from phaseflow.cli.options import output_format_option
from phaseflow.config.logging import get_logger
from phaseflow.pipeline.context import WorkflowContext
from phaseflow.pipeline.engine import run_route
from phaseflow.pipeline.errors import StageError

if TYPE_CHECKING:
    from datetime import datetime

    from phaseflow.cli.console import ConsoleLike
    from phaseflow.config.logging import PhaseflowLogger
    from phaseflow.config.model import Config
    from phaseflow.pipeline.presenter import Presenter
    from phaseflow.registry.registry import PluginRegistry

logger: PhaseflowLogger = get_logger(__name__)


def _parse_now(
    ctx: click.Context,  # pylint: disable=unused-argument
    param: click.Parameter,  # pylint: disable=unused-argument
    value: str | None,
) -> datetime | None:
    """Validator: parse ``--now`` as an ISO-8601 timestamp."""
    if value is None:
        return None
    try:
        return parse_timestamp(value)
    except ValueError as exc:
        raise click.BadParameter(f"Invalid ISO-8601 timestamp: {value}") from exc


def build_payload(presenter: Presenter, ctx: WorkflowContext) -> dict[str, Any]:
    """Return the machine-readable result of a presenter run."""
    return {
        "presenter": presenter.name,
        "route": presenter.route,
        "content_type": presenter.content_type,
        "tenant": ctx.tenant,
        "view": (
            {"name": presenter.view.name, "props": presenter.view.select_props(ctx)}
            if presenter.view is not None
            else None
        ),
        "transformed": ctx.transformed,
        "summary": ctx.get_summary().to_dict(),
    }


def _shape(value: Any) -> str:
    if isinstance(value, dict):
        return f"object, {len(value)} keys"
    if isinstance(value, (list, tuple)):
        return f"list, {len(value)} items"
    return type(value).__name__


@click.command(
    name="run",
    help="Run the presenter workflow for ROUTE.",
    epilog="""
Example: phaseflow run /articles/42 --content-type article --param id=42 --format json""",
)
@click.argument("route")
@click.option("--content-type", "content_type", required=True, help="Requested content type.")
@click.option("--tenant", "tenant", default=None, help="Tenant for presenter matching.")
@click.option(
    "--param",
    "params",
    multiple=True,
    type=KeyValueParam(),
    help="Request parameter as KEY=VALUE (repeatable).",
)
@click.option(
    "--shared",
    "shared_plugins",
    multiple=True,
    help="Shared plugin to run before the presenter (repeatable; replaces the configured list).",
)
@click.option(
    "--plugin-module",
    "plugin_modules",
    multiple=True,
    help="Extra dotted module exposing register(registry) (repeatable).",
)
@click.option(
    "--now",
    "now",
    default=None,
    callback=_parse_now,
    help="ISO-8601 timestamp used as the current time by time-based transforms.",
)
@output_format_option
def run_command(
    *,
    route: str,
    content_type: str,
    tenant: str | None,
    params: tuple[tuple[str, str], ...],
    shared_plugins: tuple[str, ...],
    plugin_modules: tuple[str, ...],
    now: datetime | None,
    output_format: OutputFormat | None = None,
) -> None:
    """Resolve and run the presenter for ROUTE."""
    click_ctx: click.Context = click.get_current_context()
    click_ctx.ensure_object(dict)
    console: ConsoleLike = click_ctx.obj["console"]
    vlevel: int = get_effective_verbosity(click_ctx)

    config: Config = load_config(
        click_ctx,
        {"shared_plugins": shared_plugins, "plugin_modules": plugin_modules},
    )
    registry: PluginRegistry = build_registry(config)

    ctx = WorkflowContext(
        tenant=tenant,
        request={"path": route, "params": dict(params)},
    )
    if now is not None:
        ctx.set_metadata(CLOCK_METADATA_KEY, now)

    try:
        presenter: Presenter | None = asyncio.run(
            run_route(
                registry,
                ctx,
                route=route,
                content_type=content_type,
                shared_plugins=config.shared_plugins,
            )
        )
    except StageError as exc:
        raise PhaseflowPipelineError(str(exc)) from exc

    if presenter is None:
        scope: str = f" for tenant '{tenant}'" if tenant else ""
        raise PhaseflowNoMatchError(
            f"No presenter matches route '{route}' and content type '{content_type}'{scope}."
        )

    fmt: OutputFormat = output_format or OutputFormat.DEFAULT
    if fmt == OutputFormat.JSON:
        console.print(json.dumps(build_payload(presenter, ctx), indent=2, default=str))
        return
    if fmt == OutputFormat.NDJSON:
        for path in ctx.get_transformed_paths():
            line: dict[str, Any] = {"path": path, "data": ctx.get_transformed(path)}
            console.print(json.dumps(line, default=str))
        return

    console.print(console.styled(f"✓ {presenter.get_display_name()}", fg="green", bold=True))
    if presenter.view is not None:
        console.print(f"  view: {presenter.view.name}")
    console.print("  transformed:")
    for path in ctx.get_transformed_paths():
        shape: str = console.styled(f"({_shape(ctx.get_transformed(path))})", dim=True)
        console.print(f"    {path} {shape}")
        if vlevel > 0:
            console.print(
                console.styled(
                    json.dumps(ctx.get_transformed(path), indent=2, default=str), dim=True
                )
            )
    summary: dict[str, Any] = ctx.get_summary().to_dict()
    console.print(
        f"  fetched: {summary['fetched_count']}, transformed: {summary['transformed_count']}, "
        f"metadata: {summary['metadata_count']}"
    )
