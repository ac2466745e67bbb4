# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : __main__.py
#   file_relpath : src/phaseflow/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""Module entry point for running PhaseFlow via ``python -m phaseflow``.

Delegates to [`phaseflow.cli.main.cli`][], the same entry point as the
``phaseflow`` console script.
"""

from __future__ import annotations

from phaseflow.cli.main import cli

if __name__ == "__main__":
    cli()
