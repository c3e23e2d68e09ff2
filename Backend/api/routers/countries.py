# Backend/api/routers/countries.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Path
from supabase import AsyncClient

from app.core.notifications import Notifier, get_notifier
from app.deps.auth import User, get_current_user, get_current_user_optional
from app.deps.supabase import get_user_db
from app.models.common import MutationResponse, MutationResult
from app.models.country import CountryCreateInput, CountryEditInput, CountryRow, CountrySelect
from services import country_service

router = APIRouter(
    prefix="/countries",
    tags=["countries"],
)


def _respond(result: MutationResult, notifier: Notifier) -> MutationResponse:
    return MutationResponse(**result.model_dump(), notifications=notifier.items)


@router.get("", response_model=List[CountryRow])
async def list_countries(client: AsyncClient = Depends(get_user_db)) -> List[CountryRow]:
    return await country_service.list_countries(client)


@router.get("/mine", response_model=List[CountryRow])
async def list_my_countries(
    client: AsyncClient = Depends(get_user_db),
    user: Optional[User] = Depends(get_current_user_optional),
) -> List[CountryRow]:
    return await country_service.list_my_countries(client, user)


@router.get("/select", response_model=List[CountrySelect])
async def list_countries_for_select(client: AsyncClient = Depends(get_user_db)) -> List[CountrySelect]:
    return await country_service.list_countries_for_select(client)


@router.get("/{country_id}", response_model=CountryRow)
async def read_country(
    country_id: str = Path(...),
    client: AsyncClient = Depends(get_user_db),
) -> CountryRow:
    return await country_service.get_country(client, country_service.validate_country_id(country_id))


@router.post("", response_model=MutationResponse)
async def create_country(
    payload: CountryCreateInput,
    client: AsyncClient = Depends(get_user_db),
    user: User = Depends(get_current_user),
    notifier: Notifier = Depends(get_notifier),
) -> MutationResponse:
    result = await country_service.create_country(client, notifier, payload, author=user)
    return _respond(result, notifier)


@router.put("/{country_id}", response_model=MutationResponse)
async def update_country(
    payload: CountryEditInput,
    country_id: str = Path(...),
    client: AsyncClient = Depends(get_user_db),
    user: User = Depends(get_current_user),
    notifier: Notifier = Depends(get_notifier),
) -> MutationResponse:
    result = await country_service.update_country(
        client, notifier, country_service.validate_country_id(country_id), payload
    )
    return _respond(result, notifier)


@router.delete("/{country_id}", response_model=MutationResponse)
async def delete_country(
    country_id: str = Path(...),
    client: AsyncClient = Depends(get_user_db),
    user: User = Depends(get_current_user),
    notifier: Notifier = Depends(get_notifier),
) -> MutationResponse:
    result = await country_service.delete_country(
        client, notifier, country_service.validate_country_id(country_id)
    )
    return _respond(result, notifier)
