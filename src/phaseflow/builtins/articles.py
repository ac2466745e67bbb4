# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : articles.py
#   file_relpath : src/phaseflow/builtins/articles.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""Presenter for the ``article`` content type.

Fetches ``articleData`` (requires ``request["params"]["id"]``),
``relatedArticles`` and ``comments``; transforms them into ``articleMeta``,
``topRelatedArticles``, ``recentComments`` and ``articleContent`` for the
``article`` view.

The article data is sample content standing in for a CMS lookup.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any, Final

from phaseflow.builtins.utils import lookup, parse_timestamp
from phaseflow.pipeline.fetchers import create_fetcher
from phaseflow.pipeline.phases import PhaseSet
from phaseflow.pipeline.plugin import ViewBinding
from phaseflow.pipeline.presenter import CONTENT_TYPE_ARTICLE, Presenter
from phaseflow.pipeline.transformers import (
    create_filter_transformer,
    create_slice_transformer,
    create_transformer,
)

if TYPE_CHECKING:
    from phaseflow.pipeline.context import WorkflowContext

__all__: list[str] = [
    "ARTICLE_PRESENTER_NAME",
    "ARTICLE_ROUTE",
    "ARTICLE_VIEW",
    "ArticlePresenter",
    "CLOCK_METADATA_KEY",
    "MissingArticleIdError",
    "RECENT_COMMENT_WINDOW",
]

ARTICLE_PRESENTER_NAME: Final[str] = "presenter-articles"
ARTICLE_ROUTE: Final[str] = "/articles"

# Metadata key holding an aware ``datetime`` used as "now" by time-based transforms.
CLOCK_METADATA_KEY: Final[str] = "now"
RECENT_COMMENT_WINDOW: Final[timedelta] = timedelta(days=7)

ARTICLE_VIEW: Final[ViewBinding] = ViewBinding(
    name="article",
    props=("articleContent", "articleMeta", "topRelatedArticles", "recentComments"),
)


class MissingArticleIdError(ValueError):
    """The request carries no ``params.id`` for the article lookup."""

    def __init__(self) -> None:
        super().__init__("Article ID is required")


def _clock(ctx: WorkflowContext) -> datetime:
    now: Any = ctx.get_metadata(CLOCK_METADATA_KEY)
    if not isinstance(now, datetime):
        return datetime.now(timezone.utc)
    return now if now.tzinfo is not None else now.replace(tzinfo=timezone.utc)


async def _article_data(ctx: WorkflowContext) -> dict[str, Any]:
    article_id: Any = lookup(lookup(ctx.request, "params"), "id")
    if not article_id:
        raise MissingArticleIdError()
    return {
        "id": article_id,
        "title": "Sample Article Title",
        "content": "This is the article content...",
        "excerpt": "This is the article excerpt...",
        "author": {
            "name": "John Doe",
            "email": "john@example.com",
            "avatar": "/avatars/john.jpg",
        },
        "publishedAt": "2024-01-15T10:00:00Z",
        "updatedAt": "2024-01-15T10:00:00Z",
        "tags": ["technology", "web development", "react"],
        "category": "Technology",
        "featuredImage": "/images/article-featured.jpg",
        "readTime": 5,
        "views": 1234,
        "likes": 42,
        "comments": 8,
    }


async def _related_articles(ctx: WorkflowContext) -> list[dict[str, Any]]:
    return [
        {
            "id": "2",
            "title": "Related Article 1",
            "excerpt": "This is a related article...",
            "publishedAt": "2024-01-14T10:00:00Z",
            "readTime": 3,
            "views": 567,
        },
        {
            "id": "3",
            "title": "Related Article 2",
            "excerpt": "This is another related article...",
            "publishedAt": "2024-01-13T10:00:00Z",
            "readTime": 4,
            "views": 890,
        },
    ]


async def _comments(ctx: WorkflowContext) -> list[dict[str, Any]]:
    article: dict[str, Any] = ctx.fetched.get("articleData") or {}
    if not article.get("id"):
        return []
    return [
        {
            "id": "1",
            "author": "Jane Smith",
            "content": "Great article! Very informative.",
            "publishedAt": "2024-01-15T11:00:00Z",
            "likes": 5,
        },
        {
            "id": "2",
            "author": "Bob Johnson",
            "content": "Thanks for sharing this knowledge.",
            "publishedAt": "2024-01-15T12:00:00Z",
            "likes": 3,
        },
    ]


def _article_meta(ctx: WorkflowContext) -> dict[str, Any]:
    article: dict[str, Any] = ctx.fetched["articleData"]
    return {
        "title": article["title"],
        "description": article["excerpt"],
        "author": article["author"]["name"],
        "publishedAt": article["publishedAt"],
        "updatedAt": article["updatedAt"],
        "tags": article["tags"],
        "category": article["category"],
        "readTime": article["readTime"],
        "views": article["views"],
        "likes": article["likes"],
        "comments": article["comments"],
    }


def _recent_comments(ctx: WorkflowContext) -> list[dict[str, Any]]:
    cutoff: datetime = _clock(ctx) - RECENT_COMMENT_WINDOW
    recent = create_filter_transformer(
        "recentComments",
        "comments",
        lambda comment: parse_timestamp(comment["publishedAt"]) > cutoff,
    )
    return recent.transform(ctx)


def _article_content(ctx: WorkflowContext) -> dict[str, Any]:
    article: dict[str, Any] = ctx.fetched["articleData"]
    return {
        "title": article["title"],
        "content": article["content"],
        "featuredImage": article["featuredImage"],
        "author": article["author"],
        "publishedAt": article["publishedAt"],
        "updatedAt": article["updatedAt"],
        "tags": article["tags"],
        "category": article["category"],
        "readTime": article["readTime"],
        "stats": {
            "views": article["views"],
            "likes": article["likes"],
            "comments": article["comments"],
        },
    }


def _article_phase_set() -> PhaseSet:
    return PhaseSet(
        [
            create_fetcher("articleData", _article_data),
            create_fetcher("relatedArticles", _related_articles),
            create_fetcher("comments", _comments),
        ],
        [
            create_transformer("articleMeta", _article_meta),
            create_slice_transformer("topRelatedArticles", "relatedArticles", 0, 3),
            create_transformer("recentComments", _recent_comments),
            create_transformer("articleContent", _article_content),
        ],
    )


@dataclass(frozen=True, kw_only=True)
class ArticlePresenter(Presenter):
    """Presenter ``presenter-articles`` answering ``/articles...`` for ``article`` content.

    Comments count as recent when published within ``RECENT_COMMENT_WINDOW``
    of the context clock (metadata ``"now"``, defaulting to the current UTC time).
    """

    name: str = ARTICLE_PRESENTER_NAME
    phase_set: PhaseSet = field(default_factory=_article_phase_set)
    view: ViewBinding | None = ARTICLE_VIEW
    route: str = ARTICLE_ROUTE
    content_type: str = CONTENT_TYPE_ARTICLE
