# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : formats.py
#   file_relpath : src/phaseflow/cli/formats.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""Output format vocabulary shared by the CLI commands.

Machine formats (JSON, NDJSON) are stable and colorless.
"""

from __future__ import annotations

from enum import Enum


class OutputFormat(str, Enum):
    """Output format for CLI rendering.

    Attributes:
        DEFAULT: Human-friendly text output; may include ANSI color if enabled.
        JSON: A single JSON document.
        NDJSON: One JSON object per line.

    Notes:
        Use with [`phaseflow.cli.cli_types.EnumChoiceParam`][] to parse
        ``--format`` from Click.
    """

    DEFAULT = "default"
    JSON = "json"
    NDJSON = "ndjson"


def is_machine_format(fmt: OutputFormat | None) -> bool:
    """Return True for formats intended for machine consumption."""
    return fmt in {OutputFormat.JSON, OutputFormat.NDJSON}
