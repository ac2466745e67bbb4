# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : __init__.py
#   file_relpath : src/phaseflow/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""PhaseFlow command-line interface (Click).

The console script ``phaseflow`` points at [`phaseflow.cli.main.cli`][].
"""
