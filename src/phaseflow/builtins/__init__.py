# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : __init__.py
#   file_relpath : src/phaseflow/builtins/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""Built-in shared plugins and presenters.

* [`HeadPlugin`][phaseflow.builtins.head.HeadPlugin] (``plugin-head``, shared)
* [`NavigationPlugin`][phaseflow.builtins.navigation.NavigationPlugin]
  (``plugin-navigation``, shared)
* [`ArticlePresenter`][phaseflow.builtins.articles.ArticlePresenter]
  (``presenter-articles``)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from phaseflow.config.logging import get_logger

from .articles import ArticlePresenter
from .head import HeadPlugin
from .navigation import NavigationPlugin

if TYPE_CHECKING:
    from phaseflow.config.logging import PhaseflowLogger
    from phaseflow.registry.registry import PluginRegistry

logger: PhaseflowLogger = get_logger(__name__)

__all__ = [
    "ArticlePresenter",
    "HeadPlugin",
    "NavigationPlugin",
    "register_builtins",
]


def register_builtins(registry: PluginRegistry) -> None:
    """Register the built-in shared plugins and the article presenter."""
    registry.register_shared_plugin(HeadPlugin())
    registry.register_shared_plugin(NavigationPlugin())
    registry.register_presenter(ArticlePresenter())
    logger.debug("Registered built-in plugins")
