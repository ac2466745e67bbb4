# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : engine.py
#   file_relpath : src/phaseflow/pipeline/engine.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""Request-level entry point of the workflow engine.

[`run_route`][phaseflow.pipeline.engine.run_route] is what a request handler
calls once it has built a [`WorkflowContext`][phaseflow.pipeline.context.WorkflowContext]:
resolve the presenter for the request, run the shared plugins and the
presenter, and hand the presenter back so the caller can render its view.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from phaseflow.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable

    from phaseflow.config.logging import PhaseflowLogger
    from phaseflow.pipeline.context import WorkflowContext
    from phaseflow.pipeline.presenter import Presenter
    from phaseflow.registry.registry import PluginRegistry

logger: PhaseflowLogger = get_logger(__name__)

__all__: list[str] = [
    "run_route",
]


async def run_route(
    registry: PluginRegistry,
    ctx: WorkflowContext,
    *,
    route: str,
    content_type: str,
    shared_plugins: Iterable[str] = (),
) -> Presenter | None:
    """Resolve and run the presenter for a request.

    Args:
        registry (PluginRegistry): Registry holding presenters and shared plugins.
        ctx (WorkflowContext): Request-scoped context; ``ctx.tenant`` takes part
            in presenter matching.
        route (str): Request route.
        content_type (str): Requested content type.
        shared_plugins (Iterable[str]): Shared plugin names to run before the
            presenter. Unknown names are skipped.

    Returns:
        Presenter | None: The presenter that ran, or ``None`` when no presenter
        matches (nothing is executed in that case).

    Raises:
        StageError: Propagated from the first failing stage.
    """
    presenter: Presenter | None = registry.find_presenter(route, content_type, ctx.tenant)
    if presenter is None:
        logger.info(
            "No presenter matches route=%s content_type=%s tenant=%s",
            route,
            content_type,
            ctx.tenant,
        )
        return None
    await registry.execute_presenter_workflow(presenter, ctx, list(shared_plugins))
    return presenter
