# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : navigation.py
#   file_relpath : src/phaseflow/builtins/navigation.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""Shared plugin producing site navigation.

Fetches:
    * ``navigationData``: main, footer and social links. Known tenants
      override sections of the base structure (currently the ``main`` menu).
    * ``userNavigation``: login/register links for anonymous requests, or the
      account menu plus a user summary when ``ctx.user`` is set.

Transforms:
    * ``navigationMenu``: all link sections, the user block and breadcrumbs
      derived from the request path.
    * ``mobileNavigation``: a flat, initially closed menu.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Final, Mapping

from phaseflow.builtins.utils import lookup
from phaseflow.pipeline.fetchers import create_fetcher
from phaseflow.pipeline.phases import PhaseSet
from phaseflow.pipeline.plugin import Plugin
from phaseflow.pipeline.transformers import create_transformer

if TYPE_CHECKING:
    from phaseflow.pipeline.context import WorkflowContext

__all__: list[str] = [
    "NAVIGATION_PLUGIN_NAME",
    "NavigationPlugin",
    "TENANT_NAVIGATION",
    "generate_breadcrumbs",
]

NAVIGATION_PLUGIN_NAME: Final[str] = "plugin-navigation"

# Per-tenant overrides, shallow-merged over the base navigation.
TENANT_NAVIGATION: Final[Mapping[str, Mapping[str, Any]]] = MappingProxyType(
    {
        "luxgen": {
            "main": [
                {"label": "Home", "href": "/", "active": True},
                {"label": "Products", "href": "/products"},
                {"label": "Solutions", "href": "/solutions"},
                {"label": "About", "href": "/about"},
                {"label": "Contact", "href": "/contact"},
            ],
        },
        "demo": {
            "main": [
                {"label": "Demo", "href": "/demo", "active": True},
                {"label": "Features", "href": "/features"},
                {"label": "Pricing", "href": "/pricing"},
            ],
        },
    }
)


def _base_navigation() -> dict[str, Any]:
    return {
        "main": [
            {"label": "Home", "href": "/", "active": True},
            {"label": "About", "href": "/about"},
            {"label": "Services", "href": "/services"},
            {"label": "Contact", "href": "/contact"},
        ],
        "footer": [
            {"label": "Privacy Policy", "href": "/privacy"},
            {"label": "Terms of Service", "href": "/terms"},
            {"label": "Cookie Policy", "href": "/cookies"},
        ],
        "social": [
            {"label": "Twitter", "href": "https://twitter.com/luxgen", "icon": "twitter"},
            {
                "label": "LinkedIn",
                "href": "https://linkedin.com/company/luxgen",
                "icon": "linkedin",
            },
            {"label": "GitHub", "href": "https://github.com/luxgen", "icon": "github"},
        ],
    }


def generate_breadcrumbs(path: str) -> list[dict[str, str]]:
    """Return breadcrumbs for a URL path, starting with ``Home``.

    Each non-empty segment adds a crumb whose label is the segment with its
    first character upper-cased, e.g. ``/articles/42`` gives
    ``Home > Articles > 42``.
    """
    crumbs: list[dict[str, str]] = [{"label": "Home", "href": "/"}]
    current: str = ""
    for segment in (s for s in path.split("/") if s):
        current += f"/{segment}"
        crumbs.append({"label": segment[:1].upper() + segment[1:], "href": current})
    return crumbs


async def _navigation_data(ctx: WorkflowContext) -> dict[str, Any]:
    navigation: dict[str, Any] = _base_navigation()
    if ctx.tenant:
        navigation.update(copy.deepcopy(dict(TENANT_NAVIGATION.get(ctx.tenant, {}))))
    return navigation


async def _user_navigation(ctx: WorkflowContext) -> dict[str, Any]:
    user: Any = ctx.user
    if not user:
        return {
            "authenticated": False,
            "items": [
                {"label": "Login", "href": "/login"},
                {"label": "Register", "href": "/register"},
            ],
        }
    return {
        "authenticated": True,
        "user": {
            "name": lookup(user, "name"),
            "email": lookup(user, "email"),
            "avatar": lookup(user, "avatar"),
        },
        "items": [
            {"label": "Dashboard", "href": "/dashboard"},
            {"label": "Profile", "href": "/profile"},
            {"label": "Settings", "href": "/settings"},
            {"label": "Logout", "href": "/logout"},
        ],
    }


def _navigation_menu(ctx: WorkflowContext) -> dict[str, Any]:
    navigation: dict[str, Any] = ctx.fetched["navigationData"]
    return {
        "main": navigation["main"],
        "footer": navigation["footer"],
        "social": navigation["social"],
        "user": ctx.fetched["userNavigation"],
        "breadcrumbs": generate_breadcrumbs(lookup(ctx.request, "path", "/")),
    }


def _mobile_navigation(ctx: WorkflowContext) -> dict[str, Any]:
    navigation: dict[str, Any] = ctx.fetched["navigationData"]
    user_nav: dict[str, Any] = ctx.fetched["userNavigation"]
    items: list[dict[str, Any]] = list(navigation["main"])
    if user_nav["authenticated"]:
        items.extend(user_nav["items"])
    return {"isOpen": False, "items": items}


def _navigation_phase_set() -> PhaseSet:
    return PhaseSet(
        [
            create_fetcher("navigationData", _navigation_data),
            create_fetcher("userNavigation", _user_navigation),
        ],
        [
            create_transformer("navigationMenu", _navigation_menu),
            create_transformer("mobileNavigation", _mobile_navigation),
        ],
    )


@dataclass(frozen=True)
class NavigationPlugin(Plugin):
    """Shared, data-only plugin named ``plugin-navigation``."""

    name: str = NAVIGATION_PLUGIN_NAME
    phase_set: PhaseSet = field(default_factory=_navigation_phase_set)
