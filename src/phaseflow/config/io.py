# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : io.py
#   file_relpath : src/phaseflow/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""TOML I/O and value getters for PhaseFlow configuration.

Parsing and rendering are done with ``tomlkit``. Parsed documents are returned
as plain ``dict`` structures (``TomlTable``).

Getters validate the expected shape of a value. A value of the wrong type is
ignored with a warning so a config typo never changes unrelated settings;
callers fall back to the lower-precedence layer.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from phaseflow.config.keys import Toml
from phaseflow.config.logging import get_logger

if TYPE_CHECKING:
    from pathlib import Path

    from phaseflow.config.logging import PhaseflowLogger

logger: PhaseflowLogger = get_logger(__name__)

__all__: list[str] = [
    "ConfigError",
    "TomlTable",
    "get_bool_value_or_none",
    "get_string_list_or_none",
    "get_table_value",
    "load_defaults_dict",
    "load_toml_dict",
    "to_toml",
    "warn_unknown_keys",
]

TomlTable = dict[str, Any]


class ConfigError(Exception):
    """A configuration file cannot be read or is not valid TOML."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Invalid configuration file {path}: {reason}")


def load_defaults_dict() -> TomlTable:
    """Return PhaseFlow's runtime defaults as a new dict (no I/O)."""
    return {
        Toml.SECTION_WORKFLOW: {
            Toml.KEY_SHARED_PLUGINS: ["plugin-head", "plugin-navigation"],
            Toml.KEY_PLUGIN_MODULES: [],
            Toml.KEY_BUILTINS: True,
        },
    }


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document (``phaseflow.toml`` or ``pyproject.toml``).

    Returns:
        TomlTable: The parsed TOML content.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(path, str(e)) from e
    except TomlkitParseError as e:
        raise ConfigError(path, str(e)) from e
    data_any: Any = doc.unwrap()
    return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}


def to_toml(data: Mapping[str, Any]) -> str:
    """Render a TOML table as text."""
    return tomlkit.dumps(dict(data))


def warn_unknown_keys(data: TomlTable, source: str) -> None:
    """Log a warning for each section or key outside the known schema."""
    for section, table in data.items():
        known: frozenset[str] | None = Toml.KNOWN_KEYS.get(section)
        if known is None:
            logger.warning("Ignoring unknown section [%s] in %s", section, source)
            continue
        if not isinstance(table, dict):
            continue
        for key in cast("TomlTable", table):
            if key not in known:
                logger.warning("Ignoring unknown key '%s' in [%s] of %s", key, section, source)


def get_table_value(table: TomlTable, key: str) -> TomlTable:
    """Return the sub-table at ``key``, or an empty dict if missing or not a table."""
    value: Any = table.get(key)
    if value is None:
        return {}
    if isinstance(value, dict):
        return cast("TomlTable", value)
    logger.warning("Expected [%s] to be a table, got %s; ignoring", key, type(value).__name__)
    return {}


def get_bool_value_or_none(table: TomlTable, key: str) -> bool | None:
    """Return a boolean value, or None when missing or ill-typed."""
    value: Any = table.get(key)
    if value is None or isinstance(value, bool):
        return value
    logger.warning("Expected '%s' to be a boolean, got %r; ignoring", key, value)
    return None


def get_string_list_or_none(table: TomlTable, key: str) -> list[str] | None:
    """Return a list of strings, or None when missing or ill-typed.

    Non-string items are dropped with a warning; the remaining items are kept.
    """
    value: Any = table.get(key)
    if value is None:
        return None
    if not isinstance(value, list):
        logger.warning("Expected '%s' to be a list of strings, got %r; ignoring", key, value)
        return None
    items: list[str] = []
    for item in cast("list[Any]", value):
        if isinstance(item, str):
            items.append(item)
        else:
            logger.warning("Ignoring non-string entry in '%s': %r", key, item)
    return items
