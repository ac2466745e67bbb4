# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : phases.py
#   file_relpath : src/phaseflow/pipeline/phases.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""Run the fetch and transform phases of a plugin.

A [`PhaseSet`][phaseflow.pipeline.phases.PhaseSet] is an immutable, ordered
pair of stage lists. Executing it runs every fetcher in order, awaiting each
before the next starts, then every transformer in order. Transformers may
therefore read any fetched path and any earlier transformer's output.

Composition (``add_fetcher``, ``add_transformer``, ``prepend``, ``append``)
always returns a new ``PhaseSet``; the receivers are never modified.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterable

from phaseflow.config.logging import get_logger
from phaseflow.pipeline.errors import FetchError, TransformError

if TYPE_CHECKING:
    from phaseflow.config.logging import PhaseflowLogger
    from phaseflow.pipeline.context import WorkflowContext
    from phaseflow.pipeline.fetchers import Fetcher
    from phaseflow.pipeline.transformers import Transformer

logger: PhaseflowLogger = get_logger(__name__)

__all__: list[str] = [
    "PhaseSet",
]


@dataclass(frozen=True, init=False)
class PhaseSet:
    """Ordered fetchers and transformers executed as one unit.

    Attributes:
        fetchers (tuple[Fetcher, ...]): Fetchers, in execution order.
        transformers (tuple[Transformer, ...]): Transformers, in execution order.

    Any iterable is accepted at construction time and stored as a tuple.
    """

    fetchers: tuple[Fetcher, ...] = ()
    transformers: tuple[Transformer, ...] = ()

    def __init__(
        self,
        fetchers: Iterable[Fetcher] = (),
        transformers: Iterable[Transformer] = (),
    ) -> None:
        object.__setattr__(self, "fetchers", tuple(fetchers))
        object.__setattr__(self, "transformers", tuple(transformers))

    async def execute(self, ctx: WorkflowContext) -> None:
        """Run all fetchers, then all transformers, against ``ctx``.

        Each stage's result is written to ``ctx.fetched`` / ``ctx.transformed``
        at the stage's path before the next stage starts. Execution stops at
        the first failure; results already written stay in the context.

        Args:
            ctx (WorkflowContext): Request-scoped context, mutated in place.

        Raises:
            FetchError: A fetcher raised; the original exception is chained.
            TransformError: A transformer raised; the original exception is chained.
        """
        for fetcher in self.fetchers:
            logger.trace("Running fetcher '%s'", fetcher.path)
            try:
                result: Any = await fetcher.fetch(ctx)
            except Exception as exc:
                logger.error("Error in fetcher %s: %s", fetcher.path, exc)
                raise FetchError(fetcher.path, exc) from exc
            ctx.fetched[fetcher.path] = result

        for transformer in self.transformers:
            logger.trace("Running transformer '%s'", transformer.path)
            try:
                result = transformer.transform(ctx)
                if inspect.isawaitable(result):
                    result = await result
            except Exception as exc:
                logger.error("Error in transformer %s: %s", transformer.path, exc)
                raise TransformError(transformer.path, exc) from exc
            ctx.transformed[transformer.path] = result

    def add_fetcher(self, fetcher: Fetcher) -> PhaseSet:
        """Return a new phase set with ``fetcher`` appended to the fetchers."""
        return PhaseSet((*self.fetchers, fetcher), self.transformers)

    def add_transformer(self, transformer: Transformer) -> PhaseSet:
        """Return a new phase set with ``transformer`` appended to the transformers."""
        return PhaseSet(self.fetchers, (*self.transformers, transformer))

    def prepend(self, other: PhaseSet) -> PhaseSet:
        """Return a new phase set with ``other``'s stages placed before this one's."""
        return PhaseSet(
            (*other.fetchers, *self.fetchers),
            (*other.transformers, *self.transformers),
        )

    def append(self, other: PhaseSet) -> PhaseSet:
        """Return a new phase set with ``other``'s stages placed after this one's."""
        return PhaseSet(
            (*self.fetchers, *other.fetchers),
            (*self.transformers, *other.transformers),
        )

    def get_fetcher_paths(self) -> list[str]:
        return [f.path for f in self.fetchers]

    def get_transformer_paths(self) -> list[str]:
        return [t.path for t in self.transformers]

    def is_empty(self) -> bool:
        return not self.fetchers and not self.transformers

    def get_phase_count(self) -> int:
        """Return the total number of stages (fetchers plus transformers)."""
        return len(self.fetchers) + len(self.transformers)
