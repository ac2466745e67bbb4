# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : utils.py
#   file_relpath : src/phaseflow/builtins/utils.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""Helpers shared by the built-in plugins."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

__all__: list[str] = [
    "lookup",
    "parse_timestamp",
]


def lookup(obj: Any, key: str, default: Any = None) -> Any:
    """Read ``key`` from a mapping or an attribute of an object.

    The request layer may hand over plain dicts or framework objects for
    ``ctx.request`` and ``ctx.user``; both are supported. ``None`` values are
    treated as missing and yield ``default``.
    """
    if obj is None:
        return default
    value: Any = obj.get(key) if isinstance(obj, Mapping) else getattr(obj, key, None)
    return default if value is None else value


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp (``Z`` suffix allowed) into an aware datetime."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed: datetime = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
