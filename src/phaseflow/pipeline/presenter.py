# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : presenter.py
#   file_relpath : src/phaseflow/pipeline/presenter.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""Presenters: plugins bound to a route and a content type.

A [`Presenter`][phaseflow.pipeline.presenter.Presenter] answers a request for a
``(route, content_type, tenant)`` triple. Matching rules:

- route: exact match, the presenter route is ``"*"``, or the request route
  starts with the presenter route (so ``"/articles"`` answers
  ``"/articles/42"``);
- content type: exact match or the presenter content type is ``"*"``;
- tenant: permissive. A presenter without a tenant matches every tenant, and a
  request without a tenant matches every presenter.

Factories create presenters for the well-known content types ``article``,
``bundle``, ``search`` and ``collection``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from phaseflow.pipeline.plugin import Plugin

if TYPE_CHECKING:
    from phaseflow.pipeline.phases import PhaseSet
    from phaseflow.pipeline.plugin import ViewBinding

__all__: list[str] = [
    "CONTENT_TYPE_ARTICLE",
    "CONTENT_TYPE_BUNDLE",
    "CONTENT_TYPE_COLLECTION",
    "CONTENT_TYPE_SEARCH",
    "Presenter",
    "WILDCARD",
    "create_article_presenter",
    "create_bundle_presenter",
    "create_collection_presenter",
    "create_search_presenter",
]

WILDCARD: Final[str] = "*"

CONTENT_TYPE_ARTICLE: Final[str] = "article"
CONTENT_TYPE_BUNDLE: Final[str] = "bundle"
CONTENT_TYPE_SEARCH: Final[str] = "search"
CONTENT_TYPE_COLLECTION: Final[str] = "collection"


@dataclass(frozen=True, kw_only=True)
class Presenter(Plugin):
    """Plugin bound to a route pattern, a content type and optionally a tenant.

    ``route`` and ``content_type`` are keyword-only:
    ``Presenter("presenter-articles", phase_set, view, route="/articles", content_type="article")``.

    Attributes:
        route (str): Route pattern (``"*"`` for any route, otherwise a prefix).
        content_type (str): Content type (``"*"`` for any).
        tenant (str | None): Tenant the presenter is restricted to, if any.
    """

    route: str
    content_type: str
    tenant: str | None = None

    def matches(self, route: str, content_type: str, tenant: str | None = None) -> bool:
        """Return True if this presenter can answer the given request triple."""
        route_match: bool = (
            self.route == route or self.route == WILDCARD or route.startswith(self.route)
        )
        content_type_match: bool = (
            self.content_type == content_type or self.content_type == WILDCARD
        )
        tenant_match: bool = not self.tenant or not tenant or self.tenant == tenant
        return route_match and content_type_match and tenant_match

    def get_display_name(self) -> str:
        return f"Presenter({self.name}, {self.route}, {self.content_type})"


def create_article_presenter(
    name: str,
    route: str,
    view: ViewBinding | None,
    phase_set: PhaseSet,
    tenant: str | None = None,
) -> Presenter:
    """Create a presenter for the ``article`` content type."""
    return Presenter(
        name, phase_set, view, route=route, content_type=CONTENT_TYPE_ARTICLE, tenant=tenant
    )


def create_bundle_presenter(
    name: str,
    route: str,
    view: ViewBinding | None,
    phase_set: PhaseSet,
    tenant: str | None = None,
) -> Presenter:
    """Create a presenter for the ``bundle`` content type."""
    return Presenter(
        name, phase_set, view, route=route, content_type=CONTENT_TYPE_BUNDLE, tenant=tenant
    )


def create_search_presenter(
    name: str,
    route: str,
    view: ViewBinding | None,
    phase_set: PhaseSet,
    tenant: str | None = None,
) -> Presenter:
    """Create a presenter for the ``search`` content type."""
    return Presenter(
        name, phase_set, view, route=route, content_type=CONTENT_TYPE_SEARCH, tenant=tenant
    )


def create_collection_presenter(
    name: str,
    route: str,
    view: ViewBinding | None,
    phase_set: PhaseSet,
    tenant: str | None = None,
) -> Presenter:
    """Create a presenter for the ``collection`` content type."""
    return Presenter(
        name, phase_set, view, route=route, content_type=CONTENT_TYPE_COLLECTION, tenant=tenant
    )
