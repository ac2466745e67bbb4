# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : fetchers.py
#   file_relpath : src/phaseflow/pipeline/fetchers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""Fetchers: the data-producing stage of a phase set.

A [`Fetcher`][phaseflow.pipeline.fetchers.Fetcher] pairs a storage *path* with
an async producer function. [`PhaseSet.execute`][phaseflow.pipeline.phases.PhaseSet.execute]
awaits the producer and stores its result at ``ctx.fetched[path]``; a later
fetcher at the same path overwrites an earlier one.

Factories:
    - ``create_fetcher``: plain association of a path and a producer.
    - ``create_api_fetcher``: JSON over HTTP via ``httpx``.
    - ``create_graphql_fetcher``: GraphQL POST via ``httpx``.
    - ``create_database_fetcher``: textual SQL via a SQLAlchemy ``AsyncEngine``.
    - ``create_file_fetcher``: a JSON document on disk.
    - ``create_env_fetcher``: an environment variable.

Notes:
    Fetchers are process-wide shared values read concurrently by many
    workflow runs. Producer closures capture configuration only; anything
    request-specific must be read from the ``WorkflowContext`` argument.
    Producers impose their own timeouts; a timeout surfaces as an exception
    like any other failure.
"""

from __future__ import annotations

import asyncio
import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Final

import httpx
from sqlalchemy import text

from phaseflow.config.logging import get_logger
from phaseflow.pipeline.errors import GraphQLResponseError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sqlalchemy.ext.asyncio import AsyncEngine

    from phaseflow.config.logging import PhaseflowLogger
    from phaseflow.pipeline.context import WorkflowContext

logger: PhaseflowLogger = get_logger(__name__)

__all__: list[str] = [
    "DEFAULT_GRAPHQL_ENDPOINT",
    "DEFAULT_HTTP_TIMEOUT",
    "FetchFn",
    "Fetcher",
    "create_api_fetcher",
    "create_database_fetcher",
    "create_env_fetcher",
    "create_fetcher",
    "create_file_fetcher",
    "create_graphql_fetcher",
]

DEFAULT_HTTP_TIMEOUT: Final[float] = 10.0
DEFAULT_GRAPHQL_ENDPOINT: Final[str] = "/graphql"

FetchFn = Callable[["WorkflowContext"], Awaitable[Any]]


@dataclass(frozen=True)
class Fetcher:
    """Association between a storage path and an async producer.

    Attributes:
        path (str): Key under which the result is stored in ``ctx.fetched``.
        fetch (FetchFn): Async callable receiving the workflow context.
    """

    path: str
    fetch: FetchFn


def create_fetcher(path: str, fetch: FetchFn) -> Fetcher:
    """Create a fetcher with the given path and producer function."""
    return Fetcher(path=path, fetch=fetch)


async def _send(
    client: httpx.AsyncClient | None,
    timeout: float,
    method: str,
    url: str,
    **kwargs: Any,
) -> httpx.Response:
    """Send one request on ``client``, or on a short-lived client when None.

    Raises ``httpx.HTTPStatusError`` for non-2xx responses.
    """
    if client is not None:
        response: httpx.Response = await client.request(method, url, **kwargs)
    else:
        async with httpx.AsyncClient(timeout=timeout) as owned:
            response = await owned.request(method, url, **kwargs)
    response.raise_for_status()
    return response


def create_api_fetcher(
    path: str,
    url: str,
    *,
    method: str = "GET",
    headers: Mapping[str, str] | None = None,
    json_body: Any = None,
    timeout: float = DEFAULT_HTTP_TIMEOUT,
    client: httpx.AsyncClient | None = None,
) -> Fetcher:
    """Create a fetcher that calls a JSON REST endpoint.

    Args:
        path (str): Storage path for the decoded response body.
        url (str): Endpoint URL (relative URLs require a ``client`` with a ``base_url``).
        method (str): HTTP method.
        headers (Mapping[str, str] | None): Extra headers, merged over
            ``Content-Type: application/json``.
        json_body (Any): Optional JSON request body.
        timeout (float): Timeout in seconds for the short-lived client used when
            ``client`` is None.
        client (httpx.AsyncClient | None): Shared client owned by the caller;
            it is never closed by the fetcher.

    Returns:
        Fetcher: A fetcher whose producer returns the decoded JSON body and
        raises ``httpx.HTTPStatusError`` on non-2xx responses.
    """
    request_headers: dict[str, str] = {"Content-Type": "application/json", **(headers or {})}

    async def _fetch(ctx: WorkflowContext) -> Any:
        response: httpx.Response = await _send(
            client, timeout, method, url, headers=request_headers, json=json_body
        )
        return response.json()

    return Fetcher(path=path, fetch=_fetch)


def create_graphql_fetcher(
    path: str,
    query: str,
    variables: Mapping[str, Any] | None = None,
    endpoint: str = DEFAULT_GRAPHQL_ENDPOINT,
    *,
    headers: Mapping[str, str] | None = None,
    timeout: float = DEFAULT_HTTP_TIMEOUT,
    client: httpx.AsyncClient | None = None,
) -> Fetcher:
    """Create a fetcher that POSTs a GraphQL query and returns its ``data``.

    Raises:
        GraphQLResponseError: (from the producer) when the response carries a
            non-empty ``errors`` member.
    """
    payload: dict[str, Any] = {"query": query, "variables": dict(variables or {})}
    request_headers: dict[str, str] = {"Content-Type": "application/json", **(headers or {})}

    async def _fetch(ctx: WorkflowContext) -> Any:
        response: httpx.Response = await _send(
            client, timeout, "POST", endpoint, headers=request_headers, json=payload
        )
        result: dict[str, Any] = response.json()
        if result.get("errors"):
            raise GraphQLResponseError(result["errors"])
        return result.get("data")

    return Fetcher(path=path, fetch=_fetch)


def create_database_fetcher(
    path: str,
    query: str,
    params: Mapping[str, Any] | None = None,
    *,
    engine: AsyncEngine | None = None,
) -> Fetcher:
    """Create a fetcher that runs a textual SQL query.

    The producer returns ``{"rows": [...], "count": n}`` where each row is a
    plain dict keyed by column name.

    Args:
        path (str): Storage path for the result.
        query (str): SQL text with ``:name`` bind parameters.
        params (Mapping[str, Any] | None): Bind parameter values.
        engine (AsyncEngine | None): Engine to query. When None the fetcher is a
            stub that logs the query and returns an empty result set.

    Returns:
        Fetcher: The database fetcher.
    """
    bind: dict[str, Any] = dict(params or {})

    async def _fetch(ctx: WorkflowContext) -> dict[str, Any]:
        if engine is None:
            logger.debug("Database fetcher '%s' has no engine; query not run: %s", path, query)
            return {"rows": [], "count": 0}
        async with engine.connect() as conn:
            result = await conn.execute(text(query), bind)
            rows: list[dict[str, Any]] = [dict(row._mapping) for row in result]
        return {"rows": rows, "count": len(rows)}

    return Fetcher(path=path, fetch=_fetch)


def create_file_fetcher(path: str, file_path: str | Path) -> Fetcher:
    """Create a fetcher that reads and parses a UTF-8 JSON file.

    The file is read in a worker thread so the event loop is not blocked.
    Missing files raise ``FileNotFoundError``; malformed JSON raises
    ``json.JSONDecodeError``.
    """
    source: Path = Path(file_path)

    async def _fetch(ctx: WorkflowContext) -> Any:
        content: str = await asyncio.to_thread(source.read_text, encoding="utf-8")
        return json.loads(content)

    return Fetcher(path=path, fetch=_fetch)


def create_env_fetcher(path: str, env_var: str, default: Any = None) -> Fetcher:
    """Create a fetcher that reads an environment variable at execution time."""

    async def _fetch(ctx: WorkflowContext) -> Any:
        return os.environ.get(env_var, default)

    return Fetcher(path=path, fetch=_fetch)
