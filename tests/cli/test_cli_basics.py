# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : test_cli_basics.py
#   file_relpath : tests/cli/test_cli_basics.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""CLI tests: group behavior, `version`, `config`, `plugins` and `presenters`."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from phaseflow.constants import PHASEFLOW_VERSION
from tests.cli.conftest import (
    assert_CONFIG_ERROR,
    assert_SUCCESS,
    assert_USAGE_ERROR,
    parse_json_output,
    run_cli,
    run_cli_in,
)
from tests.conftest import mark_cli, parametrize

if TYPE_CHECKING:
    from pathlib import Path


@mark_cli
def test_no_subcommand_prints_hint_and_help() -> None:
    """Invoking the group alone prints a hint followed by the help text."""
    result = run_cli(["--no-color"])

    assert_SUCCESS(result)
    assert "Hint: use 'phaseflow run ROUTE" in result.output
    assert "Commands:" in result.output


@mark_cli
def test_version_outputs_version() -> None:
    """`version` prints the bare version string."""
    result = run_cli(["--no-color", "version"])

    assert_SUCCESS(result)
    assert result.output.strip() == PHASEFLOW_VERSION


@parametrize("fmt", ["json", "ndjson", "JSON"])
@mark_cli
def test_version_machine_formats(fmt: str) -> None:
    """Machine formats print a JSON object; the format name is case-insensitive."""
    result = run_cli(["version", "--format", fmt])

    assert_SUCCESS(result)
    assert parse_json_output(result) == {"version": PHASEFLOW_VERSION}


@mark_cli
def test_verbose_and_quiet_are_mutually_exclusive() -> None:
    """Combining -v and -q is a usage error."""
    result = run_cli(["-v", "-q", "version"])

    assert_USAGE_ERROR(result)
    assert "mutually exclusive" in result.output


@mark_cli
def test_config_dump_defaults(isolation: Path) -> None:
    """`config` prints the default workflow table as TOML."""
    result = run_cli_in(isolation, ["--no-color", "config"])

    assert_SUCCESS(result)
    assert "[workflow]" in result.output
    assert 'shared_plugins = ["plugin-head", "plugin-navigation"]' in result.output
    assert "builtins = true" in result.output


@mark_cli
def test_config_dump_reads_discovered_file(isolation: Path) -> None:
    """A phaseflow.toml in the working directory is merged and listed as a source."""
    (isolation / "phaseflow.toml").write_text(
        "[workflow]\nbuiltins = false\n", encoding="utf-8"
    )

    result = run_cli_in(isolation, ["config", "--format", "json"])

    assert_SUCCESS(result)
    payload: dict[str, Any] = parse_json_output(result)
    assert payload["workflow"]["builtins"] is False
    assert payload["config_files"] == [str(isolation / "phaseflow.toml")]


@mark_cli
def test_config_no_config_skips_discovery(isolation: Path) -> None:
    """`--no-config` ignores config files in the working directory."""
    (isolation / "phaseflow.toml").write_text(
        "[workflow]\nbuiltins = false\n", encoding="utf-8"
    )

    result = run_cli_in(isolation, ["--no-config", "config", "--format", "json"])

    assert_SUCCESS(result)
    assert parse_json_output(result)["workflow"]["builtins"] is True


@mark_cli
def test_malformed_explicit_config_is_config_error(isolation: Path) -> None:
    """A malformed --config file exits with CONFIG_ERROR."""
    bad: Path = isolation / "bad.toml"
    bad.write_text("[workflow\n", encoding="utf-8")

    result = run_cli_in(isolation, ["--config", str(bad), "config"])

    assert_CONFIG_ERROR(result)
    assert "Invalid configuration file" in result.output


@mark_cli
def test_undecodable_explicit_config_is_config_error(isolation: Path) -> None:
    """A --config file with invalid UTF-8 exits with CONFIG_ERROR."""
    bad: Path = isolation / "bad.toml"
    bad.write_bytes(b"\xff\xfe")

    result = run_cli_in(isolation, ["--config", str(bad), "config"])

    assert_CONFIG_ERROR(result)
    assert "Invalid configuration file" in result.output


@mark_cli
def test_plugins_json_lists_builtins(isolation: Path) -> None:
    """`plugins --format json` lists the built-in catalogs and stats."""
    result = run_cli_in(isolation, ["plugins", "--format", "json"])

    assert_SUCCESS(result)
    payload: dict[str, Any] = parse_json_output(result)
    assert [p["name"] for p in payload["presenters"]] == ["presenter-articles"]
    assert [p["name"] for p in payload["shared_plugins"]] == ["plugin-head", "plugin-navigation"]
    assert payload["presenters"][0]["route"] == "/articles"
    assert payload["stats"]["presenter_count"] == 1
    assert payload["stats"]["shared_plugin_count"] == 2


@mark_cli
def test_plugins_ndjson_tags_each_entry(isolation: Path) -> None:
    """NDJSON output has one JSON object per entry with its catalog kind."""
    result = run_cli_in(isolation, ["plugins", "--format", "ndjson"])

    assert_SUCCESS(result)
    lines: list[dict[str, Any]] = [json.loads(line) for line in result.stdout.splitlines()]
    assert {line["kind"] for line in lines} == {"presenters", "shared_plugins"}
    assert len(lines) == 3


@mark_cli
def test_plugins_default_output_summarizes(isolation: Path) -> None:
    """The human listing ends with a registration summary."""
    result = run_cli_in(isolation, ["--no-color", "plugins"])

    assert_SUCCESS(result)
    assert "Presenter(presenter-articles, /articles, article)" in result.output
    assert "3 registered (0 plugins, 1 presenters, 2 shared)" in result.output


@parametrize(
    "args, expected",
    [
        ([], ["presenter-articles"]),
        (["--content-type", "article"], ["presenter-articles"]),
        (["--content-type", "bundle"], []),
        (["--tenant", "demo"], []),
    ],
)
@mark_cli
def test_presenters_filters(isolation: Path, args: list[str], expected: list[str]) -> None:
    """Content type and tenant filters narrow the presenter listing."""
    result = run_cli_in(isolation, ["presenters", *args, "--format", "json"])

    assert_SUCCESS(result)
    assert [p["name"] for p in parse_json_output(result)] == expected


@mark_cli
def test_presenters_empty_listing_message(isolation: Path) -> None:
    """An empty human listing says so."""
    result = run_cli_in(isolation, ["--no-color", "presenters", "--content-type", "search"])

    assert_SUCCESS(result)
    assert "No presenters match." in result.output
