# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : errors.py
#   file_relpath : src/phaseflow/pipeline/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""Exception taxonomy for the PhaseFlow workflow engine.

Errors are classified by *origin*:

- [`FetchError`][phaseflow.pipeline.errors.FetchError]: a fetcher's producer
  function raised. Carries the failing fetcher's path.
- [`TransformError`][phaseflow.pipeline.errors.TransformError]: a transformer's
  function raised (including validation and sequence-shape failures raised by
  the built-in combinators). Carries the failing transformer's path.

Lookups that find nothing (registry ``get_*``/``find_*``) are *not* errors:
they return ``None`` or an empty list and leave "not found" handling to the
caller.

The stage-level exceptions raised *inside* combinators
([`NotASequenceError`][phaseflow.pipeline.errors.NotASequenceError],
[`ValidationFailedError`][phaseflow.pipeline.errors.ValidationFailedError],
[`GraphQLResponseError`][phaseflow.pipeline.errors.GraphQLResponseError]) derive
from the matching builtin exception types so callers that run a stage function
directly can catch them idiomatically.
"""

from __future__ import annotations

from typing import Any, Literal

__all__: list[str] = [
    "FetchError",
    "GraphQLResponseError",
    "NotASequenceError",
    "PhaseflowError",
    "StageError",
    "TransformError",
    "ValidationFailedError",
]


Phase = Literal["fetch", "transform"]


class PhaseflowError(Exception):
    """Base class for all PhaseFlow engine errors."""


class StageError(PhaseflowError):
    """A single fetcher or transformer failed.

    The original exception is chained as ``__cause__`` by
    [`PhaseSet.execute`][phaseflow.pipeline.phases.PhaseSet.execute].

    Attributes:
        path (str): Storage path of the failing stage.
        phase (Phase): ``"fetch"`` or ``"transform"``.
        cause (BaseException | None): The exception raised by the stage function.
    """

    phase: Phase

    def __init__(self, path: str, cause: BaseException | None = None) -> None:
        self.path = path
        self.cause = cause
        detail: str = f": {cause}" if cause is not None else ""
        super().__init__(f"Error in {self.phase}er '{path}'{detail}")


class FetchError(StageError):
    """A fetcher's producer function raised (FetchFailure)."""

    phase: Phase = "fetch"


class TransformError(StageError):
    """A transformer's function raised (TransformFailure)."""

    phase: Phase = "transform"


class NotASequenceError(TypeError):
    """Source data for a list-oriented transformer is not an ordered sequence."""

    def __init__(self, source_path: str, value: Any) -> None:
        self.source_path = source_path
        super().__init__(
            f"Source data at {source_path} is not an array (got {type(value).__name__})"
        )


class ValidationFailedError(ValueError):
    """The predicate of a validation transformer returned a falsy value."""

    def __init__(self, source_path: str) -> None:
        self.source_path = source_path
        super().__init__(f"Validation failed for data at {source_path}")


class GraphQLResponseError(RuntimeError):
    """A GraphQL endpoint answered with a non-empty ``errors`` member."""

    def __init__(self, errors: Any) -> None:
        self.errors = errors
        super().__init__(f"GraphQL errors: {errors!r}")
