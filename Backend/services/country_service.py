# services/country_service.py
from __future__ import annotations

from typing import List, Optional, Union

from postgrest.exceptions import APIError
from supabase import AsyncClient

from app.core.errors import NotFoundError
from app.core.logging import get_logger
from app.core.notifications import Notifier
from app.deps.auth import User
from app.models.common import MutationResult
from app.models.country import CountryCreateInput, CountryEditInput, CountryRow, CountrySelect
from app.utils.ids import parse_int_id
from services.supabase_service import fetch_one, run_query

logger = get_logger()

TABLE = "country"
COLUMNS = "id, name, full_name, short, author"

NOT_FOUND_MESSAGE = "Land nicht gefunden"
LOAD_FAILED_MESSAGE = "Fehler beim Laden der Länder"


def validate_country_id(raw: Union[str, int]) -> int:
    return parse_int_id(raw, error_cls=NotFoundError, message=NOT_FOUND_MESSAGE)


async def get_country(client: AsyncClient, country_id: int) -> CountryRow:
    row = await fetch_one(
        client.table(TABLE).select(COLUMNS).eq("id", country_id),
        event="country_get_failed",
        message=LOAD_FAILED_MESSAGE,
        country_id=country_id,
    )
    if row is None:
        raise NotFoundError(NOT_FOUND_MESSAGE)
    return CountryRow.model_validate(row)


async def list_countries(client: AsyncClient) -> List[CountryRow]:
    rows = await run_query(
        client.table(TABLE).select(COLUMNS).order("name"),
        event="country_list_failed",
        message=LOAD_FAILED_MESSAGE,
    )
    return [CountryRow.model_validate(r) for r in rows]


async def list_my_countries(client: AsyncClient, user: Optional[User]) -> List[CountryRow]:
    if user is None:
        return []
    rows = await run_query(
        client.table(TABLE).select(COLUMNS).eq("author", str(user.user_id)).order("name"),
        event="country_list_mine_failed",
        message=LOAD_FAILED_MESSAGE,
    )
    return [CountryRow.model_validate(r) for r in rows]


async def list_countries_for_select(client: AsyncClient) -> List[CountrySelect]:
    rows = await run_query(
        client.table(TABLE).select("id, name").order("name"),
        event="country_select_failed",
        message=LOAD_FAILED_MESSAGE,
    )
    return [CountrySelect.model_validate(r) for r in rows]


async def create_country(
    client: AsyncClient,
    notifier: Notifier,
    data: CountryCreateInput,
    *,
    author: Optional[User] = None,
) -> MutationResult:
    payload = data.model_dump()
    if author is not None:
        payload["author"] = str(author.user_id)
    try:
        response = await client.table(TABLE).insert(payload).execute()
    except APIError as exc:
        logger.warning("country_create_failed", error=exc.message, code=exc.code)
        notifier.error("Fehler", f"Konnte nicht erstellen: {exc.message}")
        return MutationResult(success=False)

    rows = response.data or []
    country_id = rows[0].get("id") if rows else None
    notifier.success("Erstellt!", "Das Land wurde erfolgreich erstellt.")
    logger.info("country_created", country_id=country_id)
    return MutationResult(success=True, id=country_id)


async def update_country(
    client: AsyncClient,
    notifier: Notifier,
    country_id: int,
    data: CountryEditInput,
) -> MutationResult:
    try:
        await client.table(TABLE).update(data.model_dump()).eq("id", country_id).execute()
    except APIError as exc:
        logger.warning("country_update_failed", country_id=country_id, error=exc.message)
        notifier.error("Fehler", f"Konnte nicht speichern: {exc.message}")
        return MutationResult(success=False, id=country_id)

    notifier.success("Gespeichert!", "Das Land wurde erfolgreich aktualisiert.")
    return MutationResult(success=True, id=country_id)


async def delete_country(client: AsyncClient, notifier: Notifier, country_id: int) -> MutationResult:
    try:
        await client.table(TABLE).delete().eq("id", country_id).execute()
    except APIError as exc:
        logger.warning("country_delete_failed", country_id=country_id, error=exc.message)
        notifier.error("Fehler", f"Konnte nicht löschen: {exc.message}")
        return MutationResult(success=False, id=country_id)

    notifier.success("Gelöscht!", "Das Land wurde erfolgreich gelöscht.")
    return MutationResult(success=True, id=country_id)
