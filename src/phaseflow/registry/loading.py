# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : loading.py
#   file_relpath : src/phaseflow/registry/loading.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""Runtime plugin registration from configuration and entry points.

Two discovery mechanisms feed a [`PluginRegistry`][phaseflow.registry.registry.PluginRegistry]:

* **Configured modules** (``[workflow].plugin_modules``): dotted module names
  that expose a ``register(registry)`` hook. A configured module that cannot
  be imported or lacks the hook is a configuration mistake and raises
  [`PluginLoadError`][phaseflow.registry.loading.PluginLoadError].
* **Entry points** in the ``phaseflow.plugins`` group: each entry point loads
  a callable taking the registry. Broken third-party entry points are logged
  and skipped so one faulty distribution cannot block start-up.
"""

from __future__ import annotations

from importlib import import_module
from importlib.metadata import EntryPoints, entry_points
from typing import TYPE_CHECKING, Any, Final

from phaseflow.config.logging import get_logger
from phaseflow.pipeline.errors import PhaseflowError

if TYPE_CHECKING:
    from collections.abc import Iterable
    from types import ModuleType

    from phaseflow.config.logging import PhaseflowLogger
    from phaseflow.registry.registry import PluginRegistry

logger: PhaseflowLogger = get_logger(__name__)

__all__: list[str] = [
    "ENTRYPOINT_GROUP",
    "REGISTER_HOOK",
    "PluginLoadError",
    "load_entry_point_plugins",
    "load_plugin_modules",
]

ENTRYPOINT_GROUP: Final[str] = "phaseflow.plugins"
REGISTER_HOOK: Final[str] = "register"


class PluginLoadError(PhaseflowError):
    """A configured plugin module could not be imported or has no register hook."""

    def __init__(self, module: str, reason: str) -> None:
        self.module = module
        super().__init__(f"Cannot load plugin module '{module}': {reason}")


def load_plugin_modules(registry: PluginRegistry, modules: Iterable[str]) -> list[str]:
    """Import each dotted module and call its ``register(registry)`` hook.

    Args:
        registry (PluginRegistry): Registry handed to every hook.
        modules (Iterable[str]): Dotted module names, loaded in order.

    Returns:
        list[str]: The module names that were loaded.

    Raises:
        PluginLoadError: If a module cannot be imported (any import-time error),
            does not define a callable ``register`` attribute, or its hook raises.
    """
    loaded: list[str] = []
    for modname in modules:
        try:
            mod: ModuleType = import_module(modname)
        except Exception as exc:
            raise PluginLoadError(modname, f"{type(exc).__name__}: {exc}") from exc
        hook: Any = getattr(mod, REGISTER_HOOK, None)
        if not callable(hook):
            raise PluginLoadError(modname, f"no callable '{REGISTER_HOOK}' attribute")
        try:
            hook(registry)
        except Exception as exc:
            raise PluginLoadError(
                modname, f"{REGISTER_HOOK}() failed: {type(exc).__name__}: {exc}"
            ) from exc
        logger.debug("Loaded plugin module %s", modname)
        loaded.append(modname)
    return loaded


def load_entry_point_plugins(
    registry: PluginRegistry,
    group: str = ENTRYPOINT_GROUP,
) -> list[str]:
    """Call every registration callable advertised in the entry-point ``group``.

    Returns:
        list[str]: Names of the entry points that registered successfully.
    """
    candidates: EntryPoints = entry_points().select(group=group)
    loaded: list[str] = []
    for ep in candidates:
        try:
            hook: Any = ep.load()
            if not callable(hook):
                logger.warning("Entry point %s is not callable: %r", ep.name, hook)
                continue
            hook(registry)
        except Exception:
            logger.exception("Failed loading plugins from entry point %s", ep.name)
            continue
        loaded.append(ep.name)
    return loaded
