# services/article_service.py
from __future__ import annotations

from typing import Union

from supabase import AsyncClient

from app.core.errors import NotFoundError
from app.models.article import Article
from app.utils.ids import parse_int_id
from services.supabase_service import fetch_one

NOT_FOUND_MESSAGE = "Article not found"


async def get_article(client: AsyncClient, raw_id: Union[str, int]) -> Article:
    """Single article with the name of its newspaper joined in."""
    article_id = parse_int_id(raw_id, error_cls=NotFoundError, message=NOT_FOUND_MESSAGE)
    row = await fetch_one(
        client.table("parsed_news").select("*, newspaper(name)").eq("id", article_id),
        event="article_get_failed",
        message="Could not fetch article.",
        article_id=article_id,
    )
    if row is None:
        raise NotFoundError(NOT_FOUND_MESSAGE)
    return Article.model_validate(row)
