# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : noxfile.py
#   file_relpath : noxfile.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""PhaseFlow project automation via Nox.

Sessions:
  - `lint`: Ruff lint on sources and tests.
  - `format_check`: Verify formatting with Ruff.
  - `qa`: Per-Python session that runs pytest.

Common invocations:
  - `nox -s lint`
  - `nox -s qa`
"""

from __future__ import annotations

import nox

PYTHON_VERSIONS: list[str] = ["3.10", "3.11", "3.12", "3.13"]
LINT_TARGETS: list[str] = ["src", "tests", "noxfile.py"]

nox.options.sessions = ["lint", "qa"]


@nox.session
def lint(session: nox.Session) -> None:
    """Run Ruff lint checks."""
    session.install("ruff")
    session.run("ruff", "check", *LINT_TARGETS)


@nox.session
def format_check(session: nox.Session) -> None:
    """Verify formatting with Ruff (no changes written)."""
    session.install("ruff")
    session.run("ruff", "format", "--check", *LINT_TARGETS)


@nox.session(python=PYTHON_VERSIONS)
def qa(session: nox.Session) -> None:
    """Install the package with test extras and run pytest."""
    session.install("-e", ".[test]")
    session.run("pytest", *session.posargs)
