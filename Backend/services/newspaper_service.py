# services/newspaper_service.py
from __future__ import annotations

from typing import List, Optional, Union

from postgrest.exceptions import APIError
from supabase import AsyncClient

from app.core.errors import NotFoundError
from app.core.logging import get_logger
from app.core.notifications import Notifier
from app.deps.auth import User
from app.models.common import MutationResult, SelectOption
from app.models.newspaper import NewspaperCreateInput, NewspaperEditInput, NewspaperRow
from app.utils.ids import parse_int_id
from services.supabase_service import fetch_one, run_query

logger = get_logger()

TABLE = "newspaper"
COLUMNS = "id, name, url, rss, country, description, author"

NOT_FOUND_MESSAGE = "Zeitung nicht gefunden"
LOAD_FAILED_MESSAGE = "Fehler beim Laden der Zeitungen"


def validate_newspaper_id(raw: Union[str, int]) -> int:
    return parse_int_id(raw, error_cls=NotFoundError, message=NOT_FOUND_MESSAGE)


async def get_newspaper(client: AsyncClient, newspaper_id: int) -> NewspaperRow:
    row = await fetch_one(
        client.table(TABLE).select(COLUMNS).eq("id", newspaper_id),
        event="newspaper_get_failed",
        message=LOAD_FAILED_MESSAGE,
        newspaper_id=newspaper_id,
    )
    if row is None:
        raise NotFoundError(NOT_FOUND_MESSAGE)
    return NewspaperRow.model_validate(row)


async def list_newspapers(client: AsyncClient) -> List[NewspaperRow]:
    rows = await run_query(
        client.table(TABLE).select(COLUMNS).order("name"),
        event="newspaper_list_failed",
        message=LOAD_FAILED_MESSAGE,
    )
    return [NewspaperRow.model_validate(r) for r in rows]


async def list_my_newspapers(client: AsyncClient, user: Optional[User]) -> List[NewspaperRow]:
    if user is None:
        return []
    rows = await run_query(
        client.table(TABLE).select(COLUMNS).eq("author", str(user.user_id)).order("name"),
        event="newspaper_list_mine_failed",
        message=LOAD_FAILED_MESSAGE,
    )
    return [NewspaperRow.model_validate(r) for r in rows]


async def list_newspapers_of_country(client: AsyncClient, country_id: int) -> List[NewspaperRow]:
    rows = await run_query(
        client.table(TABLE).select(COLUMNS).eq("country", country_id).order("name"),
        event="newspaper_list_of_country_failed",
        message=LOAD_FAILED_MESSAGE,
        country_id=country_id,
    )
    return [NewspaperRow.model_validate(r) for r in rows]


async def list_newspapers_for_select(client: AsyncClient) -> List[SelectOption]:
    newspapers = await list_newspapers(client)
    return [SelectOption(label=n.name, value=n.id) for n in newspapers]


async def create_newspaper(
    client: AsyncClient,
    notifier: Notifier,
    data: NewspaperCreateInput,
    *,
    author: Optional[User] = None,
) -> MutationResult:
    payload = data.model_dump()
    if author is not None:
        payload["author"] = str(author.user_id)
    try:
        response = await client.table(TABLE).insert(payload).execute()
    except APIError as exc:
        logger.warning("newspaper_create_failed", error=exc.message, code=exc.code)
        notifier.error("Fehler", f"Konnte Zeitung nicht erstellen: {exc.message}")
        return MutationResult(success=False)

    rows = response.data or []
    newspaper_id = rows[0].get("id") if rows else None
    notifier.success("Erstellt!", f'Zeitung "{data.name}" wurde hinzugefügt.')
    logger.info("newspaper_created", newspaper_id=newspaper_id)
    return MutationResult(success=True, id=newspaper_id)


async def update_newspaper(
    client: AsyncClient,
    notifier: Notifier,
    newspaper_id: int,
    data: NewspaperEditInput,
) -> MutationResult:
    try:
        await client.table(TABLE).update(data.model_dump()).eq("id", newspaper_id).execute()
    except APIError as exc:
        logger.warning("newspaper_update_failed", newspaper_id=newspaper_id, error=exc.message)
        notifier.error("Fehler", f"Konnte nicht speichern: {exc.message}")
        return MutationResult(success=False, id=newspaper_id)

    notifier.success("Gespeichert!", "Zeitung wurde erfolgreich aktualisiert.")
    return MutationResult(success=True, id=newspaper_id)


async def delete_newspaper(client: AsyncClient, notifier: Notifier, newspaper_id: int) -> MutationResult:
    try:
        await client.table(TABLE).delete().eq("id", newspaper_id).execute()
    except APIError as exc:
        logger.warning("newspaper_delete_failed", newspaper_id=newspaper_id, error=exc.message)
        notifier.error("Fehler", f"Konnte nicht löschen: {exc.message}")
        return MutationResult(success=False, id=newspaper_id)

    notifier.success("Gelöscht!", "Zeitung wurde erfolgreich gelöscht.")
    return MutationResult(success=True, id=newspaper_id)
