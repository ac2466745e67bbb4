# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : __init__.py
#   file_relpath : src/phaseflow/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""PhaseFlow CLI subcommands."""
