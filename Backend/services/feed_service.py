# services/feed_service.py
"""
Feed assembler: turns stored articles into RSS documents for three scopes
(everything, one curated list, one newspaper).
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Union
from uuid import UUID

from supabase import AsyncClient

from app.config import settings
from app.core.errors import BadRequestError, NotFoundError
from app.core.logging import get_logger
from app.models.article import Article
from app.models.feed import FeedChannel, FeedItem
from app.models.newspaper_list import NewspaperListRow
from app.utils.ids import parse_int_id
from services.rss_renderer import render_rss
from services.supabase_service import fetch_one, run_query

logger = get_logger()

FALLBACK_TITLE = "Ohne Titel"
FALLBACK_AUTHOR = "Unbekannte Quelle"

ARTICLE_COLUMNS = "title, link, snippet, published_at, author, content_html, image_url, categories"
ARTICLE_COLUMNS_WITH_NEWSPAPER = f"{ARTICLE_COLUMNS}, newspaper(name)"

LIST_NOT_FOUND_MESSAGE = "Newspaper list not found"
NEWSPAPER_NOT_FOUND_MESSAGE = "Newspaper not found"


def _site_url() -> str:
    return settings.SITE_URL.rstrip("/")


def _channel(title: str, description: str, path: str) -> FeedChannel:
    return FeedChannel(
        title=title,
        description=description,
        feed_url=f"{_site_url()}{path}",
        site_url=_site_url(),
        language=settings.FEED_LANGUAGE,
    )


def article_to_feed_item(article: Article, *, newspaper_name: Optional[str] = None) -> FeedItem:
    joined_name = article.newspaper.name if article.newspaper else None
    return FeedItem(
        title=article.title or FALLBACK_TITLE,
        description=article.content_html or article.snippet or "",
        url=article.link,
        author=article.author or newspaper_name or joined_name or FALLBACK_AUTHOR,
        date=article.published_at,
        categories=list(article.categories or []),
        enclosure_url=article.image_url or None,
    )


def _latest(query: Any) -> Any:
    # undated articles last
    return query.order("published_at", desc=True, nullsfirst=False).limit(settings.FEED_ITEM_LIMIT)


def build_list_article_query(client: AsyncClient, news_list: NewspaperListRow) -> Any:
    """
    Articles of the list's newspapers, narrowed by the optional filters:
    author must be in `filter_authors`, categories must share at least one
    value with `filter_categories`.
    """
    query = (
        client.table("parsed_news")
        .select(ARTICLE_COLUMNS_WITH_NEWSPAPER)
        .in_("newspaper_id", list(news_list.newspapers or []))
    )
    if news_list.filter_authors:
        query = query.in_("author", list(news_list.filter_authors))
    if news_list.filter_categories:
        query = query.overlaps("categories", list(news_list.filter_categories))
    return _latest(query)


async def _fetch_articles(query: Any, *, event: str, message: str, **context: Any) -> List[Article]:
    rows = await run_query(query, event=event, message=message, **context)
    return [Article.model_validate(r) for r in rows]


# --------------------------------------------------------------------
# Scopes
# --------------------------------------------------------------------
async def build_all_feed(client: AsyncClient) -> str:
    articles = await _fetch_articles(
        _latest(client.table("parsed_news").select(ARTICLE_COLUMNS_WITH_NEWSPAPER)),
        event="rss_all_articles_failed",
        message="Could not fetch articles.",
    )
    channel = _channel(
        "Aggregierter News Feed",
        "Die neuesten Nachrichten von allen Quellen.",
        "/api/rss/all",
    )
    logger.info("rss_feed_built", scope="all", items=len(articles))
    return render_rss(channel, (article_to_feed_item(a) for a in articles))


async def _load_list(client: AsyncClient, list_id: str) -> NewspaperListRow:
    try:
        list_id = str(UUID(list_id))
    except ValueError:
        # not a uuid, so no such list can exist
        raise NotFoundError(LIST_NOT_FOUND_MESSAGE) from None

    row: Optional[Dict[str, Any]] = await fetch_one(
        client.table("newspaper_list")
        .select("id, name, newspapers, filter_authors, filter_categories")
        .eq("id", list_id),
        event="rss_list_lookup_failed",
        message="Could not fetch the newspaper list",
        list_id=list_id,
    )
    if row is None:
        logger.info("rss_list_not_found", list_id=list_id)
        raise NotFoundError(LIST_NOT_FOUND_MESSAGE)
    return NewspaperListRow.model_validate(row)


async def build_list_feed(client: AsyncClient, list_id: str) -> str:
    news_list = await _load_list(client, list_id)
    list_id = news_list.id

    articles: List[Article] = []
    if news_list.newspapers:
        articles = await _fetch_articles(
            build_list_article_query(client, news_list),
            event="rss_list_articles_failed",
            message="Could not fetch articles for the list",
            list_id=list_id,
        )

    channel = _channel(
        f"RSS Feed: {news_list.name}",
        f'Die neuesten Nachrichten für die Liste "{news_list.name}".',
        f"/api/rss/list/{list_id}",
    )
    logger.info("rss_feed_built", scope="list", list_id=list_id, items=len(articles))
    return render_rss(channel, (article_to_feed_item(a) for a in articles))


async def build_newspaper_feed(client: AsyncClient, raw_id: Union[str, int]) -> str:
    newspaper_id = parse_int_id(raw_id, error_cls=BadRequestError, message="Invalid ID")

    newspaper = await fetch_one(
        client.table("newspaper").select("name").eq("id", newspaper_id),
        event="rss_newspaper_lookup_failed",
        message="Could not fetch the newspaper",
        newspaper_id=newspaper_id,
    )
    if newspaper is None:
        logger.info("rss_newspaper_not_found", newspaper_id=newspaper_id)
        raise NotFoundError(NEWSPAPER_NOT_FOUND_MESSAGE)
    name = newspaper.get("name")

    articles = await _fetch_articles(
        _latest(
            client.table("parsed_news")
            .select(ARTICLE_COLUMNS)
            .eq("newspaper_id", newspaper_id)
        ),
        event="rss_newspaper_articles_failed",
        message="Could not fetch articles for the newspaper",
        newspaper_id=newspaper_id,
    )

    channel = _channel(
        f"RSS Feed: {name}",
        f'Die neuesten Nachrichten von "{name}".',
        f"/api/rss/newspaper/{newspaper_id}",
    )
    logger.info("rss_feed_built", scope="newspaper", newspaper_id=newspaper_id, items=len(articles))
    return render_rss(channel, (article_to_feed_item(a, newspaper_name=name) for a in articles))
