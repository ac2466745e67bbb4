# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : test_plugin.py
#   file_relpath : tests/pipeline/test_plugin.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""Tests for `Plugin`, `ViewBinding` and `Presenter`."""

from __future__ import annotations

import dataclasses
from typing import Any, Callable

import pytest

from phaseflow.pipeline.context import WorkflowContext
from phaseflow.pipeline.fetchers import create_fetcher
from phaseflow.pipeline.phases import PhaseSet
from phaseflow.pipeline.plugin import Plugin, ViewBinding
from phaseflow.pipeline.presenter import (
    WILDCARD,
    Presenter,
    create_article_presenter,
    create_bundle_presenter,
    create_collection_presenter,
    create_search_presenter,
)
from tests.conftest import mark_asyncio, mark_pipeline, parametrize


def single_fetcher(path: str, value: Any = None) -> PhaseSet:
    """Return a phase set with one fetcher producing ``value`` (default: the path)."""

    async def _fetch(ctx: WorkflowContext) -> Any:
        return path if value is None else value

    return PhaseSet([create_fetcher(path, _fetch)])


@mark_pipeline
def test_prepend_phase_sets_folds_in_reverse() -> None:
    """Prepending ``[P1, P2]`` yields P2's stages, then P1's, then the base's."""
    base = Plugin("base", single_fetcher("fBase"))
    p1 = Plugin("p1", single_fetcher("fA"))
    p2 = Plugin("p2", single_fetcher("fB"))

    combined: Plugin = base.prepend_phase_sets([p1, p2])

    assert combined.phase_set.get_fetcher_paths() == ["fB", "fA", "fBase"]
    assert base.phase_set.get_fetcher_paths() == ["fBase"]


@mark_pipeline
def test_append_phase_sets_keeps_order() -> None:
    """Appending ``[P1, P2]`` yields the base's stages, then P1's, then P2's."""
    base = Plugin("base", single_fetcher("fBase"))
    p1 = Plugin("p1", single_fetcher("fA"))
    p2 = Plugin("p2", single_fetcher("fB"))

    combined: Plugin = base.append_phase_sets([p1, p2])

    assert combined.phase_set.get_fetcher_paths() == ["fBase", "fA", "fB"]


@mark_pipeline
def test_phase_set_composition_keeps_presenter_type() -> None:
    """Composing a presenter returns a presenter with the same routing fields."""
    presenter: Presenter = create_article_presenter(
        "pr", "/articles", ViewBinding("article"), single_fetcher("own"), tenant="acme"
    )
    shared = Plugin("shared", single_fetcher("shared"))

    combined: Presenter = presenter.prepend_phase_sets([shared])

    assert isinstance(combined, Presenter)
    assert (combined.route, combined.content_type, combined.tenant) == (
        "/articles",
        "article",
        "acme",
    )
    assert combined.phase_set.get_fetcher_paths() == ["shared", "own"]


@mark_pipeline
def test_is_presenter_depends_on_view_binding() -> None:
    """A plugin with a view binding is presentable; a data-only plugin is not."""
    assert Plugin("data").is_presenter() is False
    assert Plugin("ui", view=ViewBinding("card")).is_presenter() is True


@mark_pipeline
def test_plugins_are_immutable() -> None:
    """Plugins are frozen values."""
    plugin = Plugin("p")

    with pytest.raises(dataclasses.FrozenInstanceError):
        plugin.name = "other"  # type: ignore[misc]


@mark_pipeline
def test_clone_with_overrides() -> None:
    """`clone` returns a copy with only the given fields replaced."""
    presenter: Presenter = create_search_presenter("s", "/search", None, PhaseSet())

    copy: Presenter = presenter.clone(name="s2", tenant="demo")

    assert isinstance(copy, Presenter)
    assert copy.name == "s2"
    assert copy.tenant == "demo"
    assert copy.route == "/search"
    assert presenter.name == "s"


@mark_pipeline
def test_clone_rejects_unknown_fields() -> None:
    """Unknown override names raise ``TypeError``."""
    with pytest.raises(TypeError):
        Plugin("p").clone(colour="red")


@mark_pipeline
def test_display_names() -> None:
    """Display names identify the plugin kind and, for presenters, the routing."""
    assert Plugin("head").get_display_name() == "Plugin(head)"
    presenter: Presenter = create_bundle_presenter("b", "/bundles", None, PhaseSet())
    assert presenter.get_display_name() == "Presenter(b, /bundles, bundle)"


@mark_pipeline
@mark_asyncio
async def test_execute_runs_phase_set() -> None:
    """Executing a plugin runs its phase set against the context."""
    ctx = WorkflowContext()

    await Plugin("p", single_fetcher("x", 1)).execute(ctx)

    assert ctx.fetched == {"x": 1}


@mark_pipeline
def test_view_binding_selects_props() -> None:
    """A view binding pulls its props from the context, preferring transformed data."""
    ctx = WorkflowContext(fetched={"a": "raw", "b": "raw-b"}, transformed={"a": "view"})
    view = ViewBinding("card", props=("a", "b", "missing"))

    assert view.select_props(ctx) == {"a": "view", "b": "raw-b", "missing": None}


@parametrize(
    "factory, content_type",
    [
        (create_article_presenter, "article"),
        (create_bundle_presenter, "bundle"),
        (create_search_presenter, "search"),
        (create_collection_presenter, "collection"),
    ],
)
@mark_pipeline
def test_presenter_factories_set_content_type(
    factory: Callable[..., Presenter], content_type: str
) -> None:
    """Each factory fixes its content type and passes the other fields through."""
    view = ViewBinding("v")
    presenter: Presenter = factory("n", "/r", view, PhaseSet(), tenant="t")

    assert presenter.content_type == content_type
    assert (presenter.name, presenter.route, presenter.view, presenter.tenant) == (
        "n",
        "/r",
        view,
        "t",
    )


@parametrize(
    "presenter_route, presenter_ct, presenter_tenant, route, ct, tenant, expected",
    [
        # Route prefix match with a tenant-less presenter.
        ("/articles", "article", None, "/articles/42", "article", "acme", True),
        ("/articles", "article", None, "/articles", "article", None, True),
        # Wildcards.
        (WILDCARD, "article", None, "/anything/at/all", "article", None, True),
        ("/x", WILDCARD, None, "/x", "whatever", None, True),
        # Route and content type mismatches.
        ("/articles", "article", None, "/news/1", "article", None, False),
        ("/articles", "article", None, "/articles/1", "bundle", None, False),
        # Tenant scoping is permissive when either side has no tenant.
        ("/x", "article", "acme", "/x", "article", "other", False),
        ("/x", "article", "acme", "/x", "article", None, True),
        ("/x", "article", "acme", "/x", "article", "acme", True),
        ("/x", "article", "", "/x", "article", "other", True),
    ],
)
@mark_pipeline
def test_presenter_matches(
    presenter_route: str,
    presenter_ct: str,
    presenter_tenant: str | None,
    route: str,
    ct: str,
    tenant: str | None,
    expected: bool,
) -> None:
    """Matching combines route prefix/wildcard, content type and permissive tenant rules."""
    presenter = Presenter(
        "p", route=presenter_route, content_type=presenter_ct, tenant=presenter_tenant
    )

    assert presenter.matches(route, ct, tenant) is expected
