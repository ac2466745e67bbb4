# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""CLI test helpers for running PhaseFlow in a controlled working directory.

Config discovery reads ``pyproject.toml`` and ``phaseflow.toml`` from the
current directory, so `run_cli_in()` switches to a temporary directory before
invoking the Click CLI. Use `run_cli()` for invocations that never touch
configuration (``--help``, ``version``).
"""

from __future__ import annotations

import json
import os
from typing import IO, TYPE_CHECKING, Any, Sequence

from click.testing import CliRunner, Result

from phaseflow.cli.exit_codes import ExitCode
from phaseflow.cli.main import cli

if TYPE_CHECKING:
    from pathlib import Path


def run_cli_in(
    tmp_path: Path,
    argv: str | Sequence[str] | None,
    *,
    input_text: str | bytes | IO[Any] | None = None,
) -> Result:
    """Invoke the CLI with `tmp_path` as the working directory.

    Args:
        tmp_path (Path): Directory used as the CWD for the invocation.
        argv (str | Sequence[str] | None): CLI argument vector, e.g. ``["config"]``.
        input_text (str | bytes | IO[Any] | None): Optional standard input.

    Returns:
        Result: The `click.testing.Result` produced by `CliRunner.invoke`.
    """
    runner = CliRunner()
    cwd: str = os.getcwd()
    try:
        os.chdir(tmp_path)
        return runner.invoke(cli, argv, input=input_text)
    finally:
        os.chdir(cwd)


def run_cli(
    argv: str | Sequence[str] | None,
    *,
    input_text: str | bytes | IO[Any] | None = None,
) -> Result:
    """Invoke the CLI without changing the working directory."""
    runner = CliRunner()
    return runner.invoke(cli, argv, input=input_text)


def parse_json_output(result: Result) -> Any:
    """Return the JSON document printed on stdout."""
    return json.loads(result.stdout)


def assert_SUCCESS(result: Result) -> None:
    """Assert that the command exited successfully (code 0)."""
    assert result.exit_code == ExitCode.SUCCESS, result.output


def assert_USAGE_ERROR(result: Result) -> None:
    """Assert that the command exited with USAGE_ERROR (code 64)."""
    assert result.exit_code == ExitCode.USAGE_ERROR, result.output


def assert_NO_MATCH(result: Result) -> None:
    """Assert that the command exited with NO_MATCH (code 69)."""
    assert result.exit_code == ExitCode.NO_MATCH, result.output


def assert_PIPELINE_ERROR(result: Result) -> None:
    """Assert that the command exited with PIPELINE_ERROR (code 70)."""
    assert result.exit_code == ExitCode.PIPELINE_ERROR, result.output


def assert_CONFIG_ERROR(result: Result) -> None:
    """Assert that the command exited with CONFIG_ERROR (code 78)."""
    assert result.exit_code == ExitCode.CONFIG_ERROR, result.output
