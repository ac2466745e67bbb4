# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : __init__.py
#   file_relpath : src/phaseflow/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""PhaseFlow package.

PhaseFlow is a two-phase workflow engine for server-rendered pages: plugins
fetch raw data, transform it into view-ready shapes, and presenters bind a
route and content type to the plugin that renders it. It ships a plugin
registry, built-in head/navigation/article plugins and a Click CLI.
"""

from __future__ import annotations
