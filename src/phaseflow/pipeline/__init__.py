# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : __init__.py
#   file_relpath : src/phaseflow/pipeline/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""PhaseFlow workflow pipeline package.

This package contains the building blocks of a request workflow:

- the request-scoped [`WorkflowContext`][phaseflow.pipeline.context.WorkflowContext]
- fetchers and transformers, with their factory helpers
- [`PhaseSet`][phaseflow.pipeline.phases.PhaseSet], which runs fetchers then transformers
- [`Plugin`][phaseflow.pipeline.plugin.Plugin] and
  [`Presenter`][phaseflow.pipeline.presenter.Presenter]
- the request helper [`run_route`][phaseflow.pipeline.engine.run_route]
"""

from __future__ import annotations

from .context import ContextSummary, WorkflowContext
from .engine import run_route
from .errors import (
    FetchError,
    GraphQLResponseError,
    NotASequenceError,
    PhaseflowError,
    StageError,
    TransformError,
    ValidationFailedError,
)
from .fetchers import (
    Fetcher,
    create_api_fetcher,
    create_database_fetcher,
    create_env_fetcher,
    create_fetcher,
    create_file_fetcher,
    create_graphql_fetcher,
)
from .phases import PhaseSet
from .plugin import Plugin, ViewBinding
from .presenter import (
    WILDCARD,
    Presenter,
    create_article_presenter,
    create_bundle_presenter,
    create_collection_presenter,
    create_search_presenter,
)
from .transformers import (
    Transformer,
    create_aggregate_transformer,
    create_combine_transformer,
    create_filter_transformer,
    create_format_transformer,
    create_group_transformer,
    create_map_transformer,
    create_slice_transformer,
    create_sort_transformer,
    create_transformer,
    create_validation_transformer,
)

__all__ = [
    "ContextSummary",
    "WorkflowContext",
    "run_route",
    "FetchError",
    "GraphQLResponseError",
    "NotASequenceError",
    "PhaseflowError",
    "StageError",
    "TransformError",
    "ValidationFailedError",
    "Fetcher",
    "create_api_fetcher",
    "create_database_fetcher",
    "create_env_fetcher",
    "create_fetcher",
    "create_file_fetcher",
    "create_graphql_fetcher",
    "PhaseSet",
    "Plugin",
    "ViewBinding",
    "WILDCARD",
    "Presenter",
    "create_article_presenter",
    "create_bundle_presenter",
    "create_collection_presenter",
    "create_search_presenter",
    "Transformer",
    "create_aggregate_transformer",
    "create_combine_transformer",
    "create_filter_transformer",
    "create_format_transformer",
    "create_group_transformer",
    "create_map_transformer",
    "create_slice_transformer",
    "create_sort_transformer",
    "create_transformer",
    "create_validation_transformer",
]
