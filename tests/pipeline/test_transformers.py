# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : test_transformers.py
#   file_relpath : tests/pipeline/test_transformers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""Tests for the transformer combinators."""

from __future__ import annotations

from typing import Any

import pytest

from phaseflow.pipeline.context import WorkflowContext
from phaseflow.pipeline.errors import NotASequenceError, ValidationFailedError
from phaseflow.pipeline.transformers import (
    Transformer,
    create_aggregate_transformer,
    create_combine_transformer,
    create_filter_transformer,
    create_format_transformer,
    create_group_transformer,
    create_map_transformer,
    create_slice_transformer,
    create_sort_transformer,
    create_transformer,
    create_validation_transformer,
)
from tests.conftest import mark_pipeline, parametrize

ITEMS: list[dict[str, Any]] = [
    {"id": 1, "kind": "a", "score": 3},
    {"id": 2, "kind": "b", "score": 1},
    {"id": 3, "kind": "a", "score": 2},
    {"id": 4, "kind": "c", "score": 1},
]


def _ctx(**fetched: Any) -> WorkflowContext:
    return WorkflowContext(fetched=dict(fetched))


@mark_pipeline
def test_create_transformer_calls_function_with_context() -> None:
    """A plain transformer receives the context it is run against."""
    t: Transformer = create_transformer("n", lambda ctx: len(ctx.fetched))

    assert t.path == "n"
    assert t.transform(_ctx(a=1, b=2)) == 2


@parametrize(
    "start, end, expected_ids",
    [
        (0, 2, [1, 2]),
        (1, None, [2, 3, 4]),
        (0, 10, [1, 2, 3, 4]),
        (3, 1, []),
    ],
)
@mark_pipeline
def test_slice_transformer(start: int, end: int | None, expected_ids: list[int]) -> None:
    """Slicing follows half-open ``[start, end)`` semantics and clamps to the length."""
    t: Transformer = create_slice_transformer("s", "items", start, end)

    result: list[dict[str, Any]] = t.transform(_ctx(items=ITEMS))

    assert [i["id"] for i in result] == expected_ids


@mark_pipeline
def test_slice_accepts_tuples_and_returns_a_list() -> None:
    """Tuples are ordered sequences too; the result is always a new list."""
    t: Transformer = create_slice_transformer("s", "items", 0, 2)

    assert t.transform(_ctx(items=("x", "y", "z"))) == ["x", "y"]


@mark_pipeline
def test_filter_and_map_transformers() -> None:
    """Filter keeps truthy items in order; map applies a function to each item."""
    keep_a: Transformer = create_filter_transformer("f", "items", lambda i: i["kind"] == "a")
    ids: Transformer = create_map_transformer("m", "items", lambda i: i["id"] * 10)
    ctx: WorkflowContext = _ctx(items=ITEMS)

    assert [i["id"] for i in keep_a.transform(ctx)] == [1, 3]
    assert ids.transform(ctx) == [10, 20, 30, 40]


@mark_pipeline
def test_sort_transformer_is_stable_and_leaves_source_untouched() -> None:
    """Sorting uses the comparator, keeps ties in source order and copies the list."""
    source: list[dict[str, Any]] = list(ITEMS)
    t: Transformer = create_sort_transformer("s", "items", lambda a, b: a["score"] - b["score"])

    result: list[dict[str, Any]] = t.transform(_ctx(items=source))

    assert [i["id"] for i in result] == [2, 4, 3, 1]
    assert source == ITEMS


@mark_pipeline
def test_group_transformer_keeps_first_seen_key_order() -> None:
    """Groups appear in first-seen key order with items in source order."""
    t: Transformer = create_group_transformer("g", "items", lambda i: i["kind"])

    groups: dict[str, list[dict[str, Any]]] = t.transform(_ctx(items=ITEMS))

    assert list(groups) == ["a", "b", "c"]
    assert [i["id"] for i in groups["a"]] == [1, 3]


@mark_pipeline
def test_aggregate_transformer_receives_whole_sequence() -> None:
    """The aggregate function reduces the entire source sequence."""
    t: Transformer = create_aggregate_transformer(
        "total", "items", lambda items: sum(i["score"] for i in items)
    )

    assert t.transform(_ctx(items=ITEMS)) == 7


@mark_pipeline
def test_format_transformer_accepts_any_shape() -> None:
    """The format combinator does not require a sequence, and sees None for missing paths."""
    upper: Transformer = create_format_transformer("f", "title", lambda v: str(v).upper())

    assert upper.transform(_ctx(title="hello")) == "HELLO"
    assert upper.transform(_ctx()) == "NONE"


@mark_pipeline
def test_combine_transformer_passes_values_in_source_order() -> None:
    """Combine calls the function with one value per source path; missing paths give None."""
    t: Transformer = create_combine_transformer(
        "c", ["a", "b", "missing"], lambda a, b, m: {"a": a, "b": b, "m": m}
    )

    assert t.transform(_ctx(a=1, b=[2])) == {"a": 1, "b": [2], "m": None}


@parametrize(
    "factory",
    [
        lambda: create_slice_transformer("t", "src", 0, 1),
        lambda: create_filter_transformer("t", "src", bool),
        lambda: create_map_transformer("t", "src", str),
        lambda: create_sort_transformer("t", "src", lambda a, b: 0),
        lambda: create_group_transformer("t", "src", str),
        lambda: create_aggregate_transformer("t", "src", len),
    ],
)
@parametrize("value", [None, {"not": "a list"}, "string", 42])
@mark_pipeline
def test_sequence_combinators_reject_non_sequences(factory: Any, value: Any) -> None:
    """List-oriented combinators raise `NotASequenceError` for non-list sources."""
    t: Transformer = factory()

    with pytest.raises(NotASequenceError) as excinfo:
        t.transform(_ctx(src=value))

    assert isinstance(excinfo.value, TypeError)
    assert excinfo.value.source_path == "src"
    assert "src" in str(excinfo.value)


@mark_pipeline
def test_validation_transformer_passes_value_through_unchanged() -> None:
    """A truthy predicate returns the very same source value."""
    payload: dict[str, Any] = {"id": 7}
    t: Transformer = create_validation_transformer("v", "article", lambda a: "id" in a)

    assert t.transform(_ctx(article=payload)) is payload


@mark_pipeline
def test_validation_transformer_raises_on_falsy_predicate() -> None:
    """A falsy predicate raises `ValidationFailedError` naming the source path."""
    t: Transformer = create_validation_transformer("v", "article", lambda a: False)

    with pytest.raises(ValidationFailedError) as excinfo:
        t.transform(_ctx(article={"id": 7}))

    assert isinstance(excinfo.value, ValueError)
    assert str(excinfo.value) == "Validation failed for data at article"
