# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : plugin.py
#   file_relpath : src/phaseflow/pipeline/plugin.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""Plugins: named vertical slices of the application.

A [`Plugin`][phaseflow.pipeline.plugin.Plugin] bundles a name, a
[`PhaseSet`][phaseflow.pipeline.phases.PhaseSet] and an optional
[`ViewBinding`][phaseflow.pipeline.plugin.ViewBinding]. A plugin that carries a
view binding is a *presenter-capable* plugin; one without is a data-only plugin
whose results are consumed by others (for example head metadata or
navigation).

Plugins are immutable. Composition helpers return new instances of the same
class via ``dataclasses.replace``, so subclasses such as
[`Presenter`][phaseflow.pipeline.presenter.Presenter] keep their own fields and
type.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Iterable, TypeVar

from phaseflow.pipeline.phases import PhaseSet

if TYPE_CHECKING:
    from phaseflow.pipeline.context import WorkflowContext

__all__: list[str] = [
    "Plugin",
    "ViewBinding",
]

PluginT = TypeVar("PluginT", bound="Plugin")


@dataclass(frozen=True)
class ViewBinding:
    """Handle to the view-layer component that renders a plugin's results.

    The engine never renders anything itself. The binding only identifies the
    component (``name``) and the data paths it consumes (``props``), so the
    request layer can hand the right slice of the context to its renderer.

    Attributes:
        name (str): Identifier of the view component (e.g. ``"article"``).
        props (tuple[str, ...]): Data paths the component consumes.
    """

    name: str
    props: tuple[str, ...] = ()

    def select_props(self, ctx: WorkflowContext) -> dict[str, Any]:
        """Return ``{path: value}`` for each prop, preferring transformed data."""
        return {path: ctx.get_data(path) for path in self.props}


@dataclass(frozen=True)
class Plugin:
    """Named phase set with an optional view binding.

    Attributes:
        name (str): Unique plugin name within its registry catalog.
        phase_set (PhaseSet): Stages executed by [`execute`][phaseflow.pipeline.plugin.Plugin.execute].
        view (ViewBinding | None): View-layer handle; ``None`` for data-only plugins.
    """

    name: str
    phase_set: PhaseSet = field(default_factory=PhaseSet)
    view: ViewBinding | None = None

    def is_presenter(self) -> bool:
        """Return True if the plugin has a view binding."""
        return self.view is not None

    async def execute(self, ctx: WorkflowContext) -> None:
        """Run this plugin's phase set against ``ctx``.

        Raises:
            StageError: Propagated from the first failing stage.
        """
        await self.phase_set.execute(ctx)

    def prepend_phase_sets(self: PluginT, plugins: Iterable[Plugin]) -> PluginT:
        """Return a copy whose phase set has each plugin's stages prepended in turn.

        The plugins are folded left to right, each one being prepended to the
        running result. With ``[A, B]`` the combined order is therefore
        ``B, A, self``.
        """
        combined: PhaseSet = self.phase_set
        for plugin in plugins:
            combined = combined.prepend(plugin.phase_set)
        return dataclasses.replace(self, phase_set=combined)

    def append_phase_sets(self: PluginT, plugins: Iterable[Plugin]) -> PluginT:
        """Return a copy whose phase set has each plugin's stages appended in order.

        With ``[A, B]`` the combined order is ``self, A, B``.
        """
        combined: PhaseSet = self.phase_set
        for plugin in plugins:
            combined = combined.append(plugin.phase_set)
        return dataclasses.replace(self, phase_set=combined)

    def clone(self: PluginT, **overrides: Any) -> PluginT:
        """Return a copy with the given fields replaced.

        Raises:
            TypeError: If an override names an unknown field.
        """
        return dataclasses.replace(self, **overrides)

    def get_display_name(self) -> str:
        return f"Plugin({self.name})"
