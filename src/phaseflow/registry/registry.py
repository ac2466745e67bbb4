# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : registry.py
#   file_relpath : src/phaseflow/registry/registry.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""Plugin registry: the three catalogs and workflow orchestration.

[`PluginRegistry`][phaseflow.registry.registry.PluginRegistry] keeps three
independent, name-keyed catalogs:

* **plugins**: general plugins, run by
  [`execute_workflow`][phaseflow.registry.registry.PluginRegistry.execute_workflow];
* **presenters**: route handlers, searched by
  [`find_presenter`][phaseflow.registry.registry.PluginRegistry.find_presenter];
* **shared plugins**: cross-cutting plugins (head, navigation) run before a
  presenter by
  [`execute_presenter_workflow`][phaseflow.registry.registry.PluginRegistry.execute_presenter_workflow].

Notes:
    * Registering under an existing name replaces the previous entry in place;
      the catalog keeps its original insertion position.
    * Lookups that find nothing return ``None`` (or an empty list); they never raise.
    * Registries are plain instances, injected where needed. Mutations and
      snapshot reads are guarded by an ``RLock``; mutating a registry while
      workflows are running is still unsupported, since each workflow reads
      the catalogs more than once.
"""

from __future__ import annotations

from dataclasses import dataclass
from threading import RLock
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from phaseflow.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from phaseflow.config.logging import PhaseflowLogger
    from phaseflow.pipeline.context import WorkflowContext
    from phaseflow.pipeline.plugin import Plugin
    from phaseflow.pipeline.presenter import Presenter

logger: PhaseflowLogger = get_logger(__name__)

__all__: list[str] = [
    "PluginRegistry",
    "RegistryStats",
]


@dataclass(frozen=True)
class RegistryStats:
    """Catalog sizes of a registry."""

    plugin_count: int
    presenter_count: int
    shared_plugin_count: int
    total_count: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "plugin_count": self.plugin_count,
            "presenter_count": self.presenter_count,
            "shared_plugin_count": self.shared_plugin_count,
            "total_count": self.total_count,
        }


class PluginRegistry:
    """Name-keyed catalogs of plugins, presenters and shared plugins."""

    def __init__(self) -> None:
        self._lock = RLock()
        self._plugins: dict[str, Plugin] = {}
        self._presenters: dict[str, Presenter] = {}
        self._shared_plugins: dict[str, Plugin] = {}

    def __repr__(self) -> str:
        stats: RegistryStats = self.get_stats()
        return (
            f"PluginRegistry(plugins={stats.plugin_count}, "
            f"presenters={stats.presenter_count}, "
            f"shared_plugins={stats.shared_plugin_count})"
        )

    # --- registration ---

    def register_plugin(self, plugin: Plugin) -> None:
        """Register a general plugin under its name (replacing any previous one)."""
        with self._lock:
            if plugin.name in self._plugins:
                logger.debug("Replacing plugin '%s'", plugin.name)
            self._plugins[plugin.name] = plugin
        logger.debug("Registered plugin %s", plugin.get_display_name())

    def register_presenter(self, presenter: Presenter) -> None:
        """Register a presenter under its name (replacing any previous one)."""
        with self._lock:
            if presenter.name in self._presenters:
                logger.debug("Replacing presenter '%s'", presenter.name)
            self._presenters[presenter.name] = presenter
        logger.debug("Registered presenter %s", presenter.get_display_name())

    def register_shared_plugin(self, plugin: Plugin) -> None:
        """Register a shared plugin under its name (replacing any previous one)."""
        with self._lock:
            if plugin.name in self._shared_plugins:
                logger.debug("Replacing shared plugin '%s'", plugin.name)
            self._shared_plugins[plugin.name] = plugin
        logger.debug("Registered shared plugin %s", plugin.get_display_name())

    # --- lookup ---

    def get_plugin(self, name: str) -> Plugin | None:
        with self._lock:
            return self._plugins.get(name)

    def get_presenter(self, name: str) -> Presenter | None:
        with self._lock:
            return self._presenters.get(name)

    def get_shared_plugin(self, name: str) -> Plugin | None:
        with self._lock:
            return self._shared_plugins.get(name)

    def find_presenter(
        self,
        route: str,
        content_type: str,
        tenant: str | None = None,
    ) -> Presenter | None:
        """Return the first presenter, in registration order, matching the request.

        Args:
            route (str): Request route (e.g. ``"/articles/42"``).
            content_type (str): Requested content type.
            tenant (str | None): Request tenant, if resolved.

        Returns:
            Presenter | None: The first match, or ``None`` when nothing matches.
        """
        for presenter in self.get_all_presenters():
            if presenter.matches(route, content_type, tenant):
                return presenter
        logger.debug(
            "No presenter for route=%s content_type=%s tenant=%s", route, content_type, tenant
        )
        return None

    def get_all_plugins(self) -> list[Plugin]:
        """Return all general plugins in registration order."""
        with self._lock:
            return list(self._plugins.values())

    def get_all_presenters(self) -> list[Presenter]:
        """Return all presenters in registration order."""
        with self._lock:
            return list(self._presenters.values())

    def get_all_shared_plugins(self) -> list[Plugin]:
        """Return all shared plugins in registration order."""
        with self._lock:
            return list(self._shared_plugins.values())

    def as_mapping(self) -> Mapping[str, Mapping[str, Plugin]]:
        """Return read-only snapshots of the three catalogs, keyed by catalog name."""
        with self._lock:
            return MappingProxyType(
                {
                    "plugins": MappingProxyType(dict(self._plugins)),
                    "presenters": MappingProxyType(dict(self._presenters)),
                    "shared_plugins": MappingProxyType(dict(self._shared_plugins)),
                }
            )

    # --- filtered queries ---

    def get_plugins_by_category(self, category: str) -> list[Plugin]:
        """Return general plugins whose name contains ``category`` as a substring."""
        return [p for p in self.get_all_plugins() if category in p.name]

    def get_presenters_by_content_type(self, content_type: str) -> list[Presenter]:
        """Return presenters whose content type equals ``content_type`` exactly."""
        return [p for p in self.get_all_presenters() if p.content_type == content_type]

    def get_presenters_by_tenant(self, tenant: str) -> list[Presenter]:
        """Return presenters restricted to exactly ``tenant``.

        Unlike [`find_presenter`][phaseflow.registry.registry.PluginRegistry.find_presenter],
        tenant-less presenters are not included.
        """
        return [p for p in self.get_all_presenters() if p.tenant == tenant]

    # --- execution ---

    async def execute_workflow(
        self,
        ctx: WorkflowContext,
        plugin_names: Iterable[str] | None = None,
    ) -> None:
        """Run general plugins sequentially against ``ctx``.

        Args:
            ctx (WorkflowContext): Request-scoped context.
            plugin_names (Iterable[str] | None): Names to run, in that order.
                Unknown names are skipped. When ``None``, every general plugin
                runs in registration order.

        Raises:
            StageError: Propagated from the first failing stage; later plugins
                do not run.
        """
        plugins: list[Plugin]
        if plugin_names is None:
            plugins = self.get_all_plugins()
        else:
            plugins = []
            for name in plugin_names:
                plugin: Plugin | None = self.get_plugin(name)
                if plugin is None:
                    logger.debug("Skipping unknown plugin '%s'", name)
                    continue
                plugins.append(plugin)

        logger.info("Executing workflow: %s", ", ".join(p.name for p in plugins) or "(none)")
        for plugin in plugins:
            await plugin.execute(ctx)
        logger.info("Workflow complete: %d plugin(s)", len(plugins))

    async def execute_presenter_workflow(
        self,
        presenter: Presenter,
        ctx: WorkflowContext,
        shared_plugin_names: Iterable[str] | None = None,
    ) -> None:
        """Run the named shared plugins, then the presenter, against ``ctx``.

        Unknown shared-plugin names are skipped. Shared plugins run before the
        presenter, so presenter transformers can read their results.

        Raises:
            StageError: Propagated from the first failing stage; the presenter
                does not run if a shared plugin fails.
        """
        logger.info("Executing presenter workflow for %s", presenter.get_display_name())
        for name in shared_plugin_names or ():
            shared: Plugin | None = self.get_shared_plugin(name)
            if shared is None:
                logger.debug("Skipping unknown shared plugin '%s'", name)
                continue
            await shared.execute(ctx)
        await presenter.execute(ctx)
        logger.info("Presenter workflow complete for %s", presenter.get_display_name())

    # --- removal ---

    def remove_plugin(self, name: str) -> bool:
        """Remove a general plugin; return True if it existed."""
        with self._lock:
            return self._plugins.pop(name, None) is not None

    def remove_presenter(self, name: str) -> bool:
        """Remove a presenter; return True if it existed."""
        with self._lock:
            return self._presenters.pop(name, None) is not None

    def remove_shared_plugin(self, name: str) -> bool:
        """Remove a shared plugin; return True if it existed."""
        with self._lock:
            return self._shared_plugins.pop(name, None) is not None

    def clear_plugins(self) -> None:
        with self._lock:
            self._plugins.clear()

    def clear_presenters(self) -> None:
        with self._lock:
            self._presenters.clear()

    def clear_shared_plugins(self) -> None:
        with self._lock:
            self._shared_plugins.clear()

    def clear(self) -> None:
        """Empty all three catalogs."""
        with self._lock:
            self.clear_plugins()
            self.clear_presenters()
            self.clear_shared_plugins()
        logger.debug("Cleared registry")

    def get_stats(self) -> RegistryStats:
        """Return catalog sizes; ``total_count`` is the sum of the three."""
        with self._lock:
            plugin_count: int = len(self._plugins)
            presenter_count: int = len(self._presenters)
            shared_count: int = len(self._shared_plugins)
        return RegistryStats(
            plugin_count=plugin_count,
            presenter_count=presenter_count,
            shared_plugin_count=shared_count,
            total_count=plugin_count + presenter_count + shared_count,
        )
