# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : test_config_logging.py
#   file_relpath : tests/config/test_config_logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""Tests for log level resolution and logging setup."""

from __future__ import annotations

import io
import logging as std_logging

import pytest

from phaseflow.config.logging import (
    LOG_LEVEL_ENV_VAR,
    TRACE_LEVEL,
    get_logger,
    resolve_env_log_level,
    setup_logging,
)
from tests.conftest import mark_config, parametrize


@parametrize(
    "value, expected",
    [
        ("trace", TRACE_LEVEL),
        (" DEBUG ", std_logging.DEBUG),
        ("warn", std_logging.WARNING),
        ("10", 10),
        ("bogus", None),
        ("", None),
    ],
)
@mark_config
def test_resolve_env_log_level(
    monkeypatch: pytest.MonkeyPatch, value: str, expected: int | None
) -> None:
    """Level names are case-insensitive; numbers pass through; unknown names yield None."""
    monkeypatch.setenv(LOG_LEVEL_ENV_VAR, value)

    assert resolve_env_log_level() == expected


@mark_config
def test_resolve_env_log_level_unset() -> None:
    """Without the environment variable no level is forced."""
    assert resolve_env_log_level() is None


@mark_config
def test_setup_logging_writes_to_stream_and_supports_trace() -> None:
    """`setup_logging` routes records to the given stream, TRACE included."""
    buffer = io.StringIO()
    try:
        setup_logging(TRACE_LEVEL, stream=buffer)
        log = get_logger("phaseflow.tests.logging")
        log.trace("tracing %s", "stage")
        log.info("done")
    finally:
        setup_logging(TRACE_LEVEL)

    text: str = buffer.getvalue()
    assert "[TRACE]" in text
    assert "tracing stage" in text
    assert "done" in text


@mark_config
def test_setup_logging_env_default_is_quiet() -> None:
    """Without a level or environment override only CRITICAL records pass."""
    buffer = io.StringIO()
    try:
        setup_logging(stream=buffer)
        get_logger("phaseflow.tests.logging").error("hidden")
    finally:
        setup_logging(TRACE_LEVEL)

    assert buffer.getvalue() == ""
