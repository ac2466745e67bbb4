# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : context.py
#   file_relpath : src/phaseflow/pipeline/context.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""Workflow context model for the PhaseFlow engine.

This module defines the request-scoped state bag that fetchers and transformers
read from and write into. The central type is
[`WorkflowContext`][phaseflow.pipeline.context.WorkflowContext].

Ownership:
    A ``WorkflowContext`` is created at the start of a request by the calling
    HTTP/GraphQL layer, is exclusively owned by the single workflow run that
    uses it, and is discarded at the end of the request. It must never be
    handed to a second, concurrently running workflow.

Absent values:
    A path or metadata key is *absent* when it is missing **or** holds ``None``.
    This rule drives [`get_data`][phaseflow.pipeline.context.WorkflowContext.get_data],
    [`has_data`][phaseflow.pipeline.context.WorkflowContext.has_data] and
    [`has_metadata`][phaseflow.pipeline.context.WorkflowContext.has_metadata].
    Non-overwriting [`merge`][phaseflow.pipeline.context.WorkflowContext.merge]
    is stricter: it never touches a key that exists, even if it holds ``None``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

__all__: list[str] = [
    "ContextSummary",
    "WorkflowContext",
]


@dataclass(frozen=True)
class ContextSummary:
    """Small, serializable snapshot of a context's size and identity."""

    fetched_count: int
    transformed_count: int
    metadata_count: int
    tenant: str | None = None
    user: Any = None

    def to_dict(self) -> dict[str, Any]:
        """Return the summary as a plain dict (for logging and machine output)."""
        return {
            "fetched_count": self.fetched_count,
            "transformed_count": self.transformed_count,
            "metadata_count": self.metadata_count,
            "tenant": self.tenant,
            "user": self.user,
        }


def _fill_missing(target: dict[str, Any], source: dict[str, Any]) -> None:
    for key, value in source.items():
        if key not in target:
            target[key] = value


@dataclass
class WorkflowContext:
    """Mutable, request-scoped state for one workflow execution.

    Attributes:
        fetched (dict[str, Any]): Results of fetchers, keyed by fetcher path.
        transformed (dict[str, Any]): Results of transformers, keyed by transformer path.
        metadata (dict[str, Any]): Free-form request metadata (flags, clocks, trace ids).
        tenant (str | None): Multi-tenant scoping identifier, if resolved.
        user (Any): Authenticated user object supplied by the request layer.
        request (Any): Request object or mapping supplied by the request layer.
        response (Any): Response object supplied by the request layer.
    """

    fetched: dict[str, Any] = field(default_factory=lambda: {})
    transformed: dict[str, Any] = field(default_factory=lambda: {})
    metadata: dict[str, Any] = field(default_factory=lambda: {})
    tenant: str | None = None
    user: Any = None
    request: Any = None
    response: Any = None

    # --- fetched / transformed accessors ---

    def get_fetched(self, path: str) -> Any:
        """Return fetched data at ``path`` (``None`` if absent)."""
        return self.fetched.get(path)

    def set_fetched(self, path: str, data: Any) -> None:
        """Store fetched data at ``path`` (last write wins)."""
        self.fetched[path] = data

    def get_transformed(self, path: str) -> Any:
        """Return transformed data at ``path`` (``None`` if absent)."""
        return self.transformed.get(path)

    def set_transformed(self, path: str, data: Any) -> None:
        """Store transformed data at ``path`` (last write wins)."""
        self.transformed[path] = data

    def get_data(self, path: str, prefer_transformed: bool = True) -> Any:
        """Return data at ``path`` from either map.

        Args:
            path (str): Storage path to look up.
            prefer_transformed (bool): When True, a present transformed value
                shadows the fetched value at the same path.

        Returns:
            Any: The transformed value (if preferred and present), otherwise the
            fetched value, otherwise ``None``.
        """
        if prefer_transformed and self.transformed.get(path) is not None:
            return self.transformed[path]
        return self.fetched.get(path)

    def has_data(self, path: str, prefer_transformed: bool = True) -> bool:
        """Return True if data is present at ``path``.

        With ``prefer_transformed`` both maps are checked; otherwise only
        ``fetched`` is.
        """
        if prefer_transformed:
            return self.transformed.get(path) is not None or self.fetched.get(path) is not None
        return self.fetched.get(path) is not None

    def get_fetched_paths(self) -> list[str]:
        """Return all fetched paths in insertion order."""
        return list(self.fetched)

    def get_transformed_paths(self) -> list[str]:
        """Return all transformed paths in insertion order."""
        return list(self.transformed)

    def get_all_paths(self) -> list[str]:
        """Return fetched paths followed by transformed paths (duplicates kept)."""
        return self.get_fetched_paths() + self.get_transformed_paths()

    # --- metadata ---

    def set_metadata(self, key: str, value: Any) -> None:
        """Set a metadata entry."""
        self.metadata[key] = value

    def get_metadata(self, key: str) -> Any:
        """Return a metadata entry (``None`` if absent)."""
        return self.metadata.get(key)

    def has_metadata(self, key: str) -> bool:
        """Return True if a non-``None`` metadata entry exists for ``key``."""
        return self.metadata.get(key) is not None

    def get_metadata_keys(self) -> list[str]:
        """Return all metadata keys in insertion order."""
        return list(self.metadata)

    # --- whole-context operations ---

    def clone(self) -> WorkflowContext:
        """Return a copy with shallow-copied data maps.

        ``tenant``, ``user``, ``request`` and ``response`` are shared by
        reference; the three data maps are new dicts so writes to the clone do
        not leak into this context.
        """
        return WorkflowContext(
            fetched=dict(self.fetched),
            transformed=dict(self.transformed),
            metadata=dict(self.metadata),
            tenant=self.tenant,
            user=self.user,
            request=self.request,
            response=self.response,
        )

    def merge(self, other: WorkflowContext, overwrite: bool = False) -> None:
        """Merge ``other``'s data maps into this context in place.

        Args:
            other (WorkflowContext): Context to merge from; it is not modified.
            overwrite (bool): When True, every overlapping key takes ``other``'s
                value. When False, only keys missing from this context are
                filled in; existing keys are never replaced.
        """
        if overwrite:
            self.fetched.update(other.fetched)
            self.transformed.update(other.transformed)
            self.metadata.update(other.metadata)
            return
        _fill_missing(self.fetched, other.fetched)
        _fill_missing(self.transformed, other.transformed)
        _fill_missing(self.metadata, other.metadata)

    def clear(self) -> None:
        """Empty the fetched, transformed, and metadata maps.

        Request-bound references (tenant, user, request, response) are kept.
        """
        self.fetched = {}
        self.transformed = {}
        self.metadata = {}

    def get_summary(self) -> ContextSummary:
        """Return a [`ContextSummary`][phaseflow.pipeline.context.ContextSummary] of this context."""
        return ContextSummary(
            fetched_count=len(self.fetched),
            transformed_count=len(self.transformed),
            metadata_count=len(self.metadata),
            tenant=self.tenant,
            user=self.user,
        )
