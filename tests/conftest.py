# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""Pytest configuration for the PhaseFlow test suite.

Sets up typed wrappers for the project's pytest marks, shared fixtures, and
TRACE-level logging for test runs.

Notes:
    Tests should respect the immutable/mutable configuration split: build a
    `phaseflow.config.MutableConfig`, then `freeze()` it into a
    `phaseflow.config.Config`. To tweak a frozen `Config`, `thaw()` it first.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from phaseflow.config import MutableConfig, logging
from phaseflow.pipeline.context import WorkflowContext
from phaseflow.registry.registry import PluginRegistry

if TYPE_CHECKING:
    from pathlib import Path

    from phaseflow.config import Config

F = TypeVar("F", bound=Callable[..., object])

# Takes a Callable (F) and returns the same Callable (F).
DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.pipeline`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_pipeline: DecoratorType[Any] = as_typed_mark(pytest.mark.pipeline)
mark_registry: DecoratorType[Any] = as_typed_mark(pytest.mark.registry)
mark_builtins: DecoratorType[Any] = as_typed_mark(pytest.mark.builtins)
mark_config: DecoratorType[Any] = as_typed_mark(pytest.mark.config)
mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)
mark_asyncio: DecoratorType[Any] = as_typed_mark(pytest.mark.asyncio)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`."""
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_phaseflow_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure PhaseFlow's runtime log level is not forced via env during tests.

    Avoids accidental DEBUG/TRACE noise when the developer has exported
    PHASEFLOW_LOG_LEVEL in their shell.
    """
    monkeypatch.delenv(logging.LOG_LEVEL_ENV_VAR, raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the logging level to TRACE for the whole test session."""
    logging.setup_logging(level=logging.TRACE_LEVEL)


@pytest.fixture
def isolation(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test in an empty temporary working directory.

    Config discovery looks at the current directory, so this keeps the
    repository's own ``pyproject.toml`` out of CLI and config tests.

    Returns:
        Path: The isolated working directory.
    """
    cwd: Path = tmp_path / "proj"
    cwd.mkdir()
    monkeypatch.chdir(cwd)
    return cwd


@pytest.fixture
def registry() -> PluginRegistry:
    """Return a fresh, empty registry."""
    return PluginRegistry()


@pytest.fixture
def ctx() -> WorkflowContext:
    """Return an empty workflow context."""
    return WorkflowContext()


def make_config(**overrides: Any) -> Config:
    """Return a frozen `Config` built from defaults and overrides.

    Args:
        **overrides (Any): Attributes set on the mutable builder before freezing.

    Returns:
        Config: An immutable configuration snapshot.
    """
    m: MutableConfig = MutableConfig.from_defaults()
    for k, v in overrides.items():
        setattr(m, k, v)
    return m.freeze()
