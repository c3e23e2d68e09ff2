# services/newspaper_list_service.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from postgrest.exceptions import APIError
from supabase import AsyncClient

from app.core.errors import NotFoundError
from app.core.logging import get_logger
from app.core.notifications import Notifier
from app.deps.auth import User
from app.models.common import MutationResult
from app.models.newspaper_list import (
    NewspaperListCreateInput,
    NewspaperListEditInput,
    NewspaperListRow,
)
from services.supabase_service import fetch_one, run_query

logger = get_logger()

TABLE = "newspaper_list"
COLUMNS = "id, name, newspapers, author, filter_authors, filter_categories"

NOT_FOUND_MESSAGE = "Liste nicht gefunden"
MISSING_ID_MESSAGE = "Listen-ID fehlt"
LOAD_FAILED_MESSAGE = "Fehler beim Laden der Listen"


def validate_news_list_id(raw: Any) -> str:
    """Route ids may arrive as a list (catch-all params); the first one wins."""
    value = raw[0] if isinstance(raw, (list, tuple)) and raw else raw
    value = str(value or "").strip()
    if not value:
        raise NotFoundError(MISSING_ID_MESSAGE)
    return value


async def get_news_list(client: AsyncClient, list_id: str) -> NewspaperListRow:
    row = await fetch_one(
        client.table(TABLE).select(COLUMNS).eq("id", list_id),
        event="news_list_get_failed",
        message=LOAD_FAILED_MESSAGE,
        list_id=list_id,
    )
    if row is None:
        raise NotFoundError(NOT_FOUND_MESSAGE)
    return NewspaperListRow.model_validate(row)


async def list_news_lists(client: AsyncClient) -> List[NewspaperListRow]:
    rows = await run_query(
        client.table(TABLE).select(COLUMNS).order("created_at", desc=True),
        event="news_list_list_failed",
        message=LOAD_FAILED_MESSAGE,
    )
    return [NewspaperListRow.model_validate(r) for r in rows]


async def list_my_news_lists(client: AsyncClient, user: Optional[User]) -> List[NewspaperListRow]:
    if user is None:
        return []
    rows = await run_query(
        client.table(TABLE)
        .select(COLUMNS)
        .eq("author", str(user.user_id))
        .order("created_at", desc=True),
        event="news_list_list_mine_failed",
        message=LOAD_FAILED_MESSAGE,
    )
    return [NewspaperListRow.model_validate(r) for r in rows]


async def list_selectable_authors(client: AsyncClient) -> List[str]:
    rows = await run_query(
        client.rpc("get_distinct_authors"),
        event="distinct_authors_failed",
        message="Fehler beim Laden der Autoren",
    )
    return [r["author_name"] for r in rows if r.get("author_name")]


async def list_selectable_categories(client: AsyncClient) -> List[str]:
    rows = await run_query(
        client.rpc("get_distinct_categories"),
        event="distinct_categories_failed",
        message="Fehler beim Laden der Kategorien",
    )
    return [r["category_name"] for r in rows if r.get("category_name")]


async def create_news_list(
    client: AsyncClient,
    notifier: Notifier,
    data: NewspaperListCreateInput,
    *,
    author: Optional[User] = None,
) -> MutationResult:
    payload = data.model_dump()
    if author is not None:
        payload["author"] = str(author.user_id)
    try:
        response = await client.table(TABLE).insert(payload).execute()
    except APIError as exc:
        logger.warning("news_list_create_failed", error=exc.message, code=exc.code)
        notifier.error("Fehler", exc.message)
        return MutationResult(success=False)

    rows = response.data or []
    list_id = rows[0].get("id") if rows else None
    notifier.success("Liste erstellt!")
    logger.info("news_list_created", list_id=list_id)
    return MutationResult(success=True, id=list_id)


async def update_news_list(
    client: AsyncClient,
    notifier: Notifier,
    list_id: str,
    data: NewspaperListEditInput,
) -> MutationResult:
    try:
        await client.table(TABLE).update(data.model_dump()).eq("id", list_id).execute()
    except APIError as exc:
        logger.warning("news_list_update_failed", list_id=list_id, error=exc.message)
        notifier.error("Fehler", exc.message)
        return MutationResult(success=False, id=list_id)

    notifier.success("Gespeichert!")
    return MutationResult(success=True, id=list_id)


async def delete_news_list(client: AsyncClient, notifier: Notifier, list_id: str) -> MutationResult:
    try:
        await client.table(TABLE).delete().eq("id", list_id).execute()
    except APIError as exc:
        logger.warning("news_list_delete_failed", list_id=list_id, error=exc.message)
        notifier.error("Fehler", f"Liste konnte nicht gelöscht werden: {exc.message}")
        return MutationResult(success=False, id=list_id)

    notifier.success("Liste gelöscht!")
    return MutationResult(success=True, id=list_id)


async def _update_filter(
    client: AsyncClient,
    notifier: Notifier,
    list_id: str,
    patch: Dict[str, List[str]],
    *,
    label: str,
) -> MutationResult:
    try:
        await client.table(TABLE).update(patch).eq("id", list_id).execute()
    except APIError as exc:
        logger.warning("news_list_filter_update_failed", list_id=list_id, error=exc.message)
        notifier.error("Fehler", f"{label} konnte nicht gespeichert werden: {exc.message}")
        return MutationResult(success=False, id=list_id)

    notifier.success(f"{label} gespeichert!")
    return MutationResult(success=True, id=list_id)


async def edit_author_filter(
    client: AsyncClient, notifier: Notifier, list_id: str, authors: List[str]
) -> MutationResult:
    return await _update_filter(
        client, notifier, list_id, {"filter_authors": list(authors)}, label="Autorenfilter"
    )


async def edit_category_filter(
    client: AsyncClient, notifier: Notifier, list_id: str, categories: List[str]
) -> MutationResult:
    return await _update_filter(
        client, notifier, list_id, {"filter_categories": list(categories)}, label="Kategorienfilter"
    )
