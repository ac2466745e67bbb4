# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : constants.py
#   file_relpath : src/phaseflow/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""PhaseFlow Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version

PHASEFLOW_VERSION: str = get_version("phaseflow")

# Configuration file names looked up in the discovery directory:
PYPROJECT_TOML_NAME: str = "pyproject.toml"
DEFAULT_TOML_CONFIG_NAME: str = "phaseflow.toml"

VALUE_NOT_SET: str = "<not set>"
