# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : logging.py
#   file_relpath : src/phaseflow/config/logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""Custom PhaseFlow logging with TRACE logging.

This module extends the standard logging module with PhaseFlow-specific features,
including a custom TRACE level (used for per-stage tracing inside workflows), a
specialized logger class, and colored output formatting.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, Callable, Final, TextIO, cast

from yachalk import chalk

if TYPE_CHECKING:
    from collections.abc import Mapping

# Define TRACE_LEVEL as a module-level constant
TRACE_LEVEL: Final[int] = logging.DEBUG - 5

LOG_LEVEL_ENV_VAR: Final[str] = "PHASEFLOW_LOG_LEVEL"


class PhaseflowLogger(logging.Logger):
    """Custom logger class for PhaseFlow with support for a TRACE log level below DEBUG."""

    def trace(
        self,
        msg: object,
        *args: object,
        extra: Mapping[str, object] | None = None,
    ) -> None:
        """Log 'msg % args' with severity 'TRACE'.

        Args:
            msg (object): The message to be logged.
            *args (object): Variable length argument list for the message.
            extra (Mapping[str, object] | None): Optional dictionary of extra information to pass
                to the logger.
        """
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(
                TRACE_LEVEL,
                msg=msg,
                args=args,
                extra=extra,
                stacklevel=2,
            )


if not hasattr(logging, "TRACE"):
    logging.addLevelName(TRACE_LEVEL, "TRACE")
    # Expose TRACE_LEVEL as logging.TRACE
    logging.TRACE = TRACE_LEVEL  # type: ignore

logging.setLoggerClass(PhaseflowLogger)

LOG_FORMAT: Final[str] = "[%(levelname)s] %(message)s"
# Below INFO, records also name the emitting module and function.
DEBUG_LOG_FORMAT: Final[str] = (
    "[%(levelname)s] [%(name)s:%(lineno)d] [%(funcName)s] %(message)s"
)

# Severity floor -> style, checked from the most severe down.
_LEVEL_STYLES: Final[tuple[tuple[int, Callable[[str], str]], ...]] = (
    (logging.CRITICAL, chalk.red_bright),
    (logging.ERROR, chalk.red),
    (logging.WARNING, chalk.yellow),
    (logging.INFO, chalk.green),
    (logging.DEBUG, chalk.gray),
    (TRACE_LEVEL, chalk.blue),
)


class ChalkFormatter(logging.Formatter):
    """Formatter that colors each record with ``yachalk`` by severity.

    Records below TRACE (custom levels) are rendered dim red.
    """

    def format(self, record: logging.LogRecord) -> str:
        message: str = super().format(record)
        for floor, style in _LEVEL_STYLES:
            if record.levelno >= floor:
                return style(message)
        return chalk.dim.red(message)


_LEVEL_NAMES: Final[dict[str, int]] = {
    "TRACE": TRACE_LEVEL,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
    "FATAL": logging.CRITICAL,
    "NOTSET": logging.NOTSET,
}


def resolve_env_log_level() -> int | None:
    """Return the level named by ``PHASEFLOW_LOG_LEVEL``, or None if unset or unknown.

    Accepts level names in any case (``trace``, ``DEBUG``, ``warn``) and
    numeric levels (``"10"``).
    """
    raw: str | None = os.environ.get(LOG_LEVEL_ENV_VAR)
    if not raw:
        return None
    name: str = raw.strip().upper()
    if name.isdigit():
        return int(name)
    return _LEVEL_NAMES.get(name)


def setup_logging(level: int | None = None, *, stream: TextIO | None = None) -> None:
    """Install a single colored handler on the root logger.

    Args:
        level (int | None): Root level. ``None`` consults ``PHASEFLOW_LOG_LEVEL``
            and falls back to CRITICAL, which keeps the CLI quiet by default.
        stream (TextIO | None): Destination for log records (default: ``sys.stderr``).
    """
    if level is None:
        level = resolve_env_log_level() or logging.CRITICAL

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Replace previous handlers so repeated CLI invocations do not duplicate output
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(ChalkFormatter(LOG_FORMAT if level >= logging.INFO else DEBUG_LOG_FORMAT))
    root_logger.addHandler(handler)


def get_logger(name: str) -> PhaseflowLogger:
    """Return the ``PhaseflowLogger`` registered under ``name``."""
    return cast("PhaseflowLogger", logging.getLogger(name))
