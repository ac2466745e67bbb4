# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : transformers.py
#   file_relpath : src/phaseflow/pipeline/transformers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""Transformers: the data-shaping stage of a phase set.

A [`Transformer`][phaseflow.pipeline.transformers.Transformer] pairs a storage
path with a function of the workflow context. The function may be sync or
async; [`PhaseSet.execute`][phaseflow.pipeline.phases.PhaseSet.execute] awaits
awaitable results and stores the value at ``ctx.transformed[path]``.

The ``create_*_transformer`` combinators read their source(s) from
``ctx.fetched``. List-oriented combinators (slice, filter, map, sort, group,
aggregate) require a ``list`` or ``tuple`` source and raise
[`NotASequenceError`][phaseflow.pipeline.errors.NotASequenceError] otherwise.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Hashable, Sequence, Union

from phaseflow.pipeline.errors import NotASequenceError, ValidationFailedError

if TYPE_CHECKING:
    from phaseflow.pipeline.context import WorkflowContext

__all__: list[str] = [
    "TransformFn",
    "Transformer",
    "create_aggregate_transformer",
    "create_combine_transformer",
    "create_filter_transformer",
    "create_format_transformer",
    "create_group_transformer",
    "create_map_transformer",
    "create_slice_transformer",
    "create_sort_transformer",
    "create_transformer",
    "create_validation_transformer",
]

TransformFn = Callable[["WorkflowContext"], Union[Any, Awaitable[Any]]]


@dataclass(frozen=True)
class Transformer:
    """Association between a storage path and a transform function.

    Attributes:
        path (str): Key under which the result is stored in ``ctx.transformed``.
        transform (TransformFn): Sync or async callable receiving the workflow context.
    """

    path: str
    transform: TransformFn


def create_transformer(path: str, transform: TransformFn) -> Transformer:
    """Create a transformer with the given path and transform function."""
    return Transformer(path=path, transform=transform)


def _require_sequence(ctx: WorkflowContext, source: str) -> Sequence[Any]:
    """Return ``ctx.fetched[source]`` if it is a list or tuple.

    Raises:
        NotASequenceError: If the value is missing or not a list/tuple.
    """
    data: Any = ctx.fetched.get(source)
    if not isinstance(data, (list, tuple)):
        raise NotASequenceError(source, data)
    return data


def create_slice_transformer(
    path: str,
    source: str,
    start: int,
    end: int | None = None,
) -> Transformer:
    """Create a transformer returning ``source[start:end]`` as a new list."""

    def _transform(ctx: WorkflowContext) -> list[Any]:
        return list(_require_sequence(ctx, source)[start:end])

    return Transformer(path=path, transform=_transform)


def create_filter_transformer(
    path: str,
    source: str,
    predicate: Callable[[Any], Any],
) -> Transformer:
    """Create a transformer keeping the items for which ``predicate`` is truthy."""

    def _transform(ctx: WorkflowContext) -> list[Any]:
        return [item for item in _require_sequence(ctx, source) if predicate(item)]

    return Transformer(path=path, transform=_transform)


def create_map_transformer(
    path: str,
    source: str,
    map_fn: Callable[[Any], Any],
) -> Transformer:
    """Create a transformer applying ``map_fn`` to each item."""

    def _transform(ctx: WorkflowContext) -> list[Any]:
        return [map_fn(item) for item in _require_sequence(ctx, source)]

    return Transformer(path=path, transform=_transform)


def create_sort_transformer(
    path: str,
    source: str,
    compare: Callable[[Any, Any], int],
) -> Transformer:
    """Create a transformer returning a sorted copy of the source.

    Args:
        path (str): Storage path of the result.
        source (str): Fetched path holding the list to sort.
        compare (Callable[[Any, Any], int]): Comparator returning a negative,
            zero, or positive number.

    Returns:
        Transformer: The sort transformer. The sort is stable and the source
        list is left untouched.
    """
    key = functools.cmp_to_key(compare)

    def _transform(ctx: WorkflowContext) -> list[Any]:
        return sorted(_require_sequence(ctx, source), key=key)

    return Transformer(path=path, transform=_transform)


def create_group_transformer(
    path: str,
    source: str,
    key_fn: Callable[[Any], Hashable],
) -> Transformer:
    """Create a transformer grouping items into ``{key: [items...]}``.

    Keys appear in first-seen order and items keep their source order.
    """

    def _transform(ctx: WorkflowContext) -> dict[Any, list[Any]]:
        groups: dict[Any, list[Any]] = {}
        for item in _require_sequence(ctx, source):
            groups.setdefault(key_fn(item), []).append(item)
        return groups

    return Transformer(path=path, transform=_transform)


def create_aggregate_transformer(
    path: str,
    source: str,
    aggregate_fn: Callable[[Sequence[Any]], Any],
) -> Transformer:
    """Create a transformer reducing the whole source sequence with ``aggregate_fn``."""

    def _transform(ctx: WorkflowContext) -> Any:
        return aggregate_fn(_require_sequence(ctx, source))

    return Transformer(path=path, transform=_transform)


def create_format_transformer(
    path: str,
    source: str,
    format_fn: Callable[[Any], Any],
) -> Transformer:
    """Create a transformer applying ``format_fn`` to the source value, whatever its shape."""

    def _transform(ctx: WorkflowContext) -> Any:
        return format_fn(ctx.fetched.get(source))

    return Transformer(path=path, transform=_transform)


def create_combine_transformer(
    path: str,
    sources: Sequence[str],
    combine_fn: Callable[..., Any],
) -> Transformer:
    """Create a transformer calling ``combine_fn(*values)`` over several fetched paths.

    Missing paths contribute ``None``.
    """
    source_paths: tuple[str, ...] = tuple(sources)

    def _transform(ctx: WorkflowContext) -> Any:
        return combine_fn(*(ctx.fetched.get(p) for p in source_paths))

    return Transformer(path=path, transform=_transform)


def create_validation_transformer(
    path: str,
    source: str,
    predicate: Callable[[Any], Any],
) -> Transformer:
    """Create a transformer that passes the source value through if it validates.

    Raises:
        ValidationFailedError: (from the transform) when ``predicate`` is falsy.
    """

    def _transform(ctx: WorkflowContext) -> Any:
        data: Any = ctx.fetched.get(source)
        if not predicate(data):
            raise ValidationFailedError(source)
        return data

    return Transformer(path=path, transform=_transform)
