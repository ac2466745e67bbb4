# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : __init__.py
#   file_relpath : src/phaseflow/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""Configuration and logging for PhaseFlow.

* [`phaseflow.config.model`][phaseflow.config.model]: ``Config`` / ``MutableConfig``
  and layered loading (defaults, ``pyproject.toml``, ``phaseflow.toml``, ``--config``).
* [`phaseflow.config.io`][phaseflow.config.io]: TOML parsing with ``tomlkit``.
* [`phaseflow.config.logging`][phaseflow.config.logging]: TRACE-aware logging setup.
"""

from __future__ import annotations

from .io import ConfigError
from .keys import Toml
from .model import Config, MutableConfig

__all__ = [
    "Config",
    "ConfigError",
    "MutableConfig",
    "Toml",
]
