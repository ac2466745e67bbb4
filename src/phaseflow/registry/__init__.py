# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : __init__.py
#   file_relpath : src/phaseflow/registry/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""Plugin registry and runtime plugin loading.

Typical set-up:

```python
from phaseflow.builtins import register_builtins
from phaseflow.registry import PluginRegistry, load_plugin_modules

registry = PluginRegistry()
register_builtins(registry)
load_plugin_modules(registry, ["myapp.plugins"])
```
"""

from __future__ import annotations

from .loading import (
    ENTRYPOINT_GROUP,
    PluginLoadError,
    load_entry_point_plugins,
    load_plugin_modules,
)
from .registry import PluginRegistry, RegistryStats

__all__ = [
    "PluginRegistry",
    "RegistryStats",
    "ENTRYPOINT_GROUP",
    "PluginLoadError",
    "load_entry_point_plugins",
    "load_plugin_modules",
]
