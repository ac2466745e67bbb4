# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : head.py
#   file_relpath : src/phaseflow/builtins/head.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""Shared plugin producing HTML head metadata.

Fetches:
    * ``siteMetadata``: site-wide defaults (site URL from ``SITE_URL``).
    * ``pageMetadata``: per-page values read from ``ctx.request``.

Transforms:
    * ``headData``: title, description, keywords, canonical URL, robots
      directive and the Open Graph / Twitter card blocks.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Final

from phaseflow.builtins.utils import lookup
from phaseflow.pipeline.fetchers import create_fetcher
from phaseflow.pipeline.phases import PhaseSet
from phaseflow.pipeline.plugin import Plugin
from phaseflow.pipeline.transformers import create_transformer

if TYPE_CHECKING:
    from phaseflow.pipeline.context import WorkflowContext

__all__: list[str] = [
    "DEFAULT_SITE_URL",
    "HEAD_PLUGIN_NAME",
    "HeadPlugin",
    "SITE_URL_ENV_VAR",
]

HEAD_PLUGIN_NAME: Final[str] = "plugin-head"
SITE_URL_ENV_VAR: Final[str] = "SITE_URL"
DEFAULT_SITE_URL: Final[str] = "https://luxgen.com"


async def _site_metadata(ctx: WorkflowContext) -> dict[str, Any]:
    return {
        "title": "Luxgen Monorepo",
        "description": "A comprehensive monorepo with UI components and plugin system",
        "keywords": ["monorepo", "ui", "components", "plugins"],
        "author": "Luxgen Team",
        "siteUrl": os.environ.get(SITE_URL_ENV_VAR) or DEFAULT_SITE_URL,
        "ogImage": "/og-image.jpg",
        "twitterCard": "summary_large_image",
    }


async def _page_metadata(ctx: WorkflowContext) -> dict[str, Any]:
    site: dict[str, Any] = ctx.fetched.get("siteMetadata") or {}
    request: Any = ctx.request
    return {
        "title": lookup(request, "title") or "Page Title",
        "description": lookup(request, "description") or "Page Description",
        "canonical": lookup(request, "canonical") or site.get("siteUrl"),
        "robots": lookup(request, "robots") or "index,follow",
    }


def _head_data(ctx: WorkflowContext) -> dict[str, Any]:
    site: dict[str, Any] = ctx.fetched["siteMetadata"]
    page: dict[str, Any] = ctx.fetched["pageMetadata"]
    return {
        "title": f"{page['title']} | {site['title']}",
        "description": page["description"] or site["description"],
        "keywords": ", ".join(site["keywords"]),
        "author": site["author"],
        "canonical": page["canonical"],
        "robots": page["robots"],
        "og": {
            "title": page["title"],
            "description": page["description"],
            "url": page["canonical"],
            "image": site["ogImage"],
            "type": "website",
        },
        "twitter": {
            "card": site["twitterCard"],
            "title": page["title"],
            "description": page["description"],
            "image": site["ogImage"],
        },
    }


def _head_phase_set() -> PhaseSet:
    return PhaseSet(
        [
            create_fetcher("siteMetadata", _site_metadata),
            create_fetcher("pageMetadata", _page_metadata),
        ],
        [
            create_transformer("headData", _head_data),
        ],
    )


@dataclass(frozen=True)
class HeadPlugin(Plugin):
    """Shared, data-only plugin named ``plugin-head``."""

    name: str = HEAD_PLUGIN_NAME
    phase_set: PhaseSet = field(default_factory=_head_phase_set)
