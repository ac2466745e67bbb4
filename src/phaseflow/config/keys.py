# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : keys.py
#   file_relpath : src/phaseflow/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""Canonical TOML section and key names for PhaseFlow configuration.

These constants are the external configuration schema as it appears in
``phaseflow.toml`` and in ``[tool.phaseflow]`` inside ``pyproject.toml``.
Renaming or removing a key is a breaking change.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by PhaseFlow configuration."""

    # [workflow]
    SECTION_WORKFLOW: Final[str] = "workflow"

    KEY_SHARED_PLUGINS: Final[str] = "shared_plugins"
    KEY_PLUGIN_MODULES: Final[str] = "plugin_modules"
    KEY_BUILTINS: Final[str] = "builtins"

    # pyproject.toml nesting: [tool.phaseflow]
    PYPROJECT_TOOL: Final[str] = "tool"
    PYPROJECT_SECTION: Final[str] = "phaseflow"

    KNOWN_KEYS: Final[dict[str, frozenset[str]]] = {
        SECTION_WORKFLOW: frozenset({KEY_SHARED_PLUGINS, KEY_PLUGIN_MODULES, KEY_BUILTINS}),
    }
