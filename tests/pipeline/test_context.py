# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : test_context.py
#   file_relpath : tests/pipeline/test_context.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""Tests for `WorkflowContext` accessors, cloning, merging and summaries."""

from __future__ import annotations

from phaseflow.pipeline.context import ContextSummary, WorkflowContext
from tests.conftest import mark_pipeline, parametrize


@mark_pipeline
def test_get_data_prefers_transformed() -> None:
    """A transformed value shadows the fetched value at the same path."""
    ctx = WorkflowContext()
    ctx.set_fetched("a", 1)
    ctx.set_transformed("a", 2)

    assert ctx.get_data("a") == 2
    assert ctx.get_data("a", prefer_transformed=False) == 1


@mark_pipeline
def test_get_data_falls_back_to_fetched_and_none() -> None:
    """Without a transformed value, fetched data is returned; unknown paths give None."""
    ctx = WorkflowContext()
    ctx.set_fetched("only_fetched", [1, 2])

    assert ctx.get_data("only_fetched") == [1, 2]
    assert ctx.get_data("missing") is None
    assert ctx.get_fetched("missing") is None
    assert ctx.get_transformed("missing") is None


@mark_pipeline
def test_has_data_respects_preference() -> None:
    """`has_data` checks both maps unless transformed data is not preferred."""
    ctx = WorkflowContext()
    ctx.set_transformed("t", {"x": 1})

    assert ctx.has_data("t") is True
    assert ctx.has_data("t", prefer_transformed=False) is False
    assert ctx.has_data("nothing") is False


@mark_pipeline
def test_paths_keep_insertion_order() -> None:
    """Path listings follow insertion order; `get_all_paths` keeps duplicates."""
    ctx = WorkflowContext()
    ctx.set_fetched("b", 1)
    ctx.set_fetched("a", 2)
    ctx.set_transformed("a", 3)

    assert ctx.get_fetched_paths() == ["b", "a"]
    assert ctx.get_transformed_paths() == ["a"]
    assert ctx.get_all_paths() == ["b", "a", "a"]


@mark_pipeline
def test_metadata_accessors() -> None:
    """Metadata can be set, read and listed; `None` values count as absent."""
    ctx = WorkflowContext()
    ctx.set_metadata("trace_id", "abc")
    ctx.set_metadata("flag", None)

    assert ctx.get_metadata("trace_id") == "abc"
    assert ctx.has_metadata("trace_id") is True
    assert ctx.has_metadata("flag") is False
    assert ctx.get_metadata_keys() == ["trace_id", "flag"]


@mark_pipeline
def test_clone_copies_maps_and_shares_request_refs() -> None:
    """Writes to a clone's maps do not leak; request-bound references are shared."""
    request: dict[str, str] = {"path": "/x"}
    user: dict[str, str] = {"name": "Ada"}
    ctx = WorkflowContext(tenant="acme", user=user, request=request)
    ctx.set_fetched("a", 1)

    copy: WorkflowContext = ctx.clone()
    copy.set_fetched("b", 2)
    copy.set_metadata("k", "v")

    assert ctx.get_fetched_paths() == ["a"]
    assert ctx.get_metadata_keys() == []
    assert copy.get_fetched("a") == 1
    assert copy.tenant == "acme"
    assert copy.request is request
    assert copy.user is user


@mark_pipeline
def test_merge_without_overwrite_never_replaces_existing_keys() -> None:
    """A non-overwriting merge only fills keys missing from the target."""
    ctx = WorkflowContext(fetched={"a": 1}, transformed={"t": "mine"}, metadata={"m": 1})
    other = WorkflowContext(
        fetched={"a": 100, "b": 2},
        transformed={"t": "theirs", "u": "new"},
        metadata={"m": 9, "n": 2},
    )

    ctx.merge(other)

    assert ctx.fetched == {"a": 1, "b": 2}
    assert ctx.transformed == {"t": "mine", "u": "new"}
    assert ctx.metadata == {"m": 1, "n": 2}
    # `other` is untouched
    assert other.fetched == {"a": 100, "b": 2}


@mark_pipeline
def test_merge_with_overwrite_replaces_every_overlapping_key() -> None:
    """An overwriting merge replaces each overlapping key with the other's value."""
    ctx = WorkflowContext(fetched={"a": 1, "keep": 0}, metadata={"m": 1})
    other = WorkflowContext(fetched={"a": 100, "b": 2}, metadata={"m": 9})

    ctx.merge(other, overwrite=True)

    assert ctx.fetched == {"a": 100, "keep": 0, "b": 2}
    assert ctx.metadata == {"m": 9}


@mark_pipeline
def test_clear_keeps_request_bound_references() -> None:
    """`clear` empties the data maps but keeps tenant, user and request."""
    ctx = WorkflowContext(tenant="acme", request={"path": "/"})
    ctx.set_fetched("a", 1)
    ctx.set_transformed("b", 2)
    ctx.set_metadata("c", 3)

    ctx.clear()

    assert ctx.get_summary() == ContextSummary(
        fetched_count=0, transformed_count=0, metadata_count=0, tenant="acme", user=None
    )
    assert ctx.request == {"path": "/"}


@parametrize(
    "fetched, transformed, metadata",
    [
        ({}, {}, {}),
        ({"a": 1}, {"b": 2, "c": 3}, {"now": "x"}),
    ],
)
@mark_pipeline
def test_summary_counts(
    fetched: dict[str, int],
    transformed: dict[str, int],
    metadata: dict[str, str],
) -> None:
    """The summary reports the size of each map and the tenant/user references."""
    ctx = WorkflowContext(
        fetched=dict(fetched),
        transformed=dict(transformed),
        metadata=dict(metadata),
        tenant="demo",
        user="u1",
    )

    summary: ContextSummary = ctx.get_summary()

    assert summary.to_dict() == {
        "fetched_count": len(fetched),
        "transformed_count": len(transformed),
        "metadata_count": len(metadata),
        "tenant": "demo",
        "user": "u1",
    }
