# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : model.py
#   file_relpath : src/phaseflow/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""Configuration model: immutable ``Config`` and the ``MutableConfig`` builder.

Layers, lowest to highest precedence:

1. built-in defaults (``load_defaults_dict``);
2. ``[tool.phaseflow]`` in ``pyproject.toml`` of the discovery directory;
3. ``phaseflow.toml`` of the discovery directory;
4. explicit config files (``--config``), in the order given;
5. CLI overrides (``apply_cli_args``).

Each ``MutableConfig`` field is tri-state: ``None`` means "not set by this
layer", so [`merge_with`][phaseflow.config.model.MutableConfig.merge_with] can
let a higher layer override only the values it actually sets.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterable

from phaseflow.config.io import (
    get_bool_value_or_none,
    get_string_list_or_none,
    get_table_value,
    load_defaults_dict,
    load_toml_dict,
    to_toml,
    warn_unknown_keys,
)
from phaseflow.config.keys import Toml
from phaseflow.config.logging import get_logger
from phaseflow.constants import DEFAULT_TOML_CONFIG_NAME, PYPROJECT_TOML_NAME

if TYPE_CHECKING:
    from phaseflow.config.io import TomlTable
    from phaseflow.config.logging import PhaseflowLogger

# ArgsLike: generic mapping accepted by config loaders (CLI namespaces and API dicts).
ArgsLike = Mapping[str, Any]

logger: PhaseflowLogger = get_logger(__name__)

__all__: list[str] = [
    "ArgsLike",
    "Config",
    "MutableConfig",
]


# ------------------ Immutable runtime config ------------------


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable runtime configuration for PhaseFlow.

    Produced by [`MutableConfig.freeze`][phaseflow.config.model.MutableConfig.freeze].

    Attributes:
        config_files (tuple[str, ...]): Config sources merged into this snapshot.
        shared_plugins (tuple[str, ...]): Shared plugins run before every presenter.
        plugin_modules (tuple[str, ...]): Dotted modules exposing ``register(registry)``.
        builtins (bool): Whether the built-in plugins are registered.
    """

    config_files: tuple[str, ...]
    shared_plugins: tuple[str, ...]
    plugin_modules: tuple[str, ...]
    builtins: bool

    def to_toml_dict(self) -> TomlTable:
        """Return this config in the TOML schema (without ``config_files``)."""
        return {
            Toml.SECTION_WORKFLOW: {
                Toml.KEY_SHARED_PLUGINS: list(self.shared_plugins),
                Toml.KEY_PLUGIN_MODULES: list(self.plugin_modules),
                Toml.KEY_BUILTINS: self.builtins,
            },
        }

    def to_toml(self) -> str:
        return to_toml(self.to_toml_dict())

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this frozen config."""
        return MutableConfig(
            config_files=list(self.config_files),
            shared_plugins=list(self.shared_plugins),
            plugin_modules=list(self.plugin_modules),
            builtins=self.builtins,
        )


# -------------------------- Mutable builder --------------------------


@dataclass
class MutableConfig:
    """Mutable configuration used during discovery and merging.

    ``None`` means "unset in this layer"; [`freeze`][phaseflow.config.model.MutableConfig.freeze]
    fills unset values from the built-in defaults.
    """

    config_files: list[str] = field(default_factory=lambda: [])
    shared_plugins: list[str] | None = None
    plugin_modules: list[str] | None = None
    builtins: bool | None = None

    # ---------------------------- Build/freeze ----------------------------

    def freeze(self) -> Config:
        """Freeze this builder into an immutable ``Config``."""
        resolved: MutableConfig = MutableConfig.from_defaults().merge_with(self)
        return Config(
            config_files=tuple(self.config_files),
            shared_plugins=tuple(resolved.shared_plugins or ()),
            plugin_modules=tuple(resolved.plugin_modules or ()),
            builtins=bool(resolved.builtins),
        )

    # --------------------------- Loaders/parsers --------------------------

    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Return a builder populated with the built-in defaults."""
        return cls.from_toml_dict(load_defaults_dict())

    @classmethod
    def from_toml_dict(cls, data: TomlTable, config_file: Path | None = None) -> MutableConfig:
        """Create a draft config from a parsed TOML dict.

        Unknown sections and keys, and values of the wrong type, are ignored
        with a warning.

        Args:
            data (TomlTable): Parsed TOML (already unwrapped from ``[tool.phaseflow]``).
            config_file (Path | None): Source file, recorded in ``config_files``.

        Returns:
            MutableConfig: The resulting draft.
        """
        source: str = str(config_file) if config_file else "<defaults>"
        warn_unknown_keys(data, source)

        workflow_tbl: TomlTable = get_table_value(data, Toml.SECTION_WORKFLOW)
        logger.trace("TOML [workflow]: %s", workflow_tbl)

        return cls(
            config_files=[str(config_file)] if config_file else [],
            shared_plugins=get_string_list_or_none(workflow_tbl, Toml.KEY_SHARED_PLUGINS),
            plugin_modules=get_string_list_or_none(workflow_tbl, Toml.KEY_PLUGIN_MODULES),
            builtins=get_bool_value_or_none(workflow_tbl, Toml.KEY_BUILTINS),
        )

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableConfig | None:
        """Load configuration from a single TOML file.

        For ``pyproject.toml`` only the ``[tool.phaseflow]`` table is used; a
        ``pyproject.toml`` without that table yields ``None``.

        Raises:
            ConfigError: If the file cannot be read or parsed.
        """
        logger.debug("Creating MutableConfig from TOML config: %s", path)
        data: TomlTable = load_toml_dict(path)

        if path.name == PYPROJECT_TOML_NAME:
            tool: TomlTable = get_table_value(data, Toml.PYPROJECT_TOOL)
            section: TomlTable = get_table_value(tool, Toml.PYPROJECT_SECTION)
            if not section:
                logger.debug("No [tool.phaseflow] section in %s", path)
                return None
            data = section

        return cls.from_toml_dict(data, config_file=path)

    @classmethod
    def discover_config_files(cls, anchor: Path) -> list[Path]:
        """Return config files in ``anchor`` in merge order (pyproject first)."""
        found: list[Path] = []
        for name in (PYPROJECT_TOML_NAME, DEFAULT_TOML_CONFIG_NAME):
            candidate: Path = anchor / name
            if candidate.is_file():
                found.append(candidate)
        return found

    @classmethod
    def load_merged(
        cls,
        *,
        anchor: Path | None = None,
        extra_config_files: Iterable[Path] | None = None,
        no_config: bool = False,
    ) -> MutableConfig:
        """Merge defaults, discovered files and explicit files into one draft.

        Args:
            anchor (Path | None): Discovery directory (default: current directory).
            extra_config_files (Iterable[Path] | None): Explicit files merged last,
                in the given order.
            no_config (bool): Skip discovery in ``anchor``.

        Returns:
            MutableConfig: Draft ready for CLI overrides and ``freeze()``.

        Raises:
            ConfigError: If any file cannot be read or parsed.
        """
        draft: MutableConfig = cls.from_defaults()

        if not no_config:
            for cfg_path in cls.discover_config_files(anchor or Path.cwd()):
                mc: MutableConfig | None = cls.from_toml_file(cfg_path)
                if mc is not None:
                    draft = draft.merge_with(mc)

        for extra in extra_config_files or ():
            mc = cls.from_toml_file(Path(extra))
            if mc is not None:
                draft = draft.merge_with(mc)

        return draft

    # ------------------------------- Merging -------------------------------

    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Return a new draft where values set in ``other`` override this draft."""
        return MutableConfig(
            config_files=self.config_files + other.config_files,
            shared_plugins=other.shared_plugins
            if other.shared_plugins is not None
            else self.shared_plugins,
            plugin_modules=other.plugin_modules
            if other.plugin_modules is not None
            else self.plugin_modules,
            builtins=other.builtins if other.builtins is not None else self.builtins,
        )

    def apply_cli_args(self, args: ArgsLike) -> MutableConfig:
        """Apply CLI overrides in place and return ``self``.

        Recognized keys: ``shared_plugins`` (non-empty sequence replaces the
        configured list), ``plugin_modules`` (non-empty sequence is appended),
        ``builtins`` (bool).
        """
        shared: Any = args.get("shared_plugins")
        if shared:
            self.shared_plugins = list(shared)
        modules: Any = args.get("plugin_modules")
        if modules:
            self.plugin_modules = [*(self.plugin_modules or []), *modules]
        builtins: Any = args.get("builtins")
        if builtins is not None:
            self.builtins = bool(builtins)
        return self
