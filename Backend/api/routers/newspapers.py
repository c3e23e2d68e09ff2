# Backend/api/routers/newspapers.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Path
from supabase import AsyncClient

from app.core.notifications import Notifier, get_notifier
from app.deps.auth import User, get_current_user, get_current_user_optional
from app.deps.supabase import get_user_db
from app.models.common import MutationResponse, SelectOption
from app.models.newspaper import NewspaperCreateInput, NewspaperEditInput, NewspaperRow
from services import country_service, newspaper_service

router = APIRouter(
    prefix="/newspapers",
    tags=["newspapers"],
)


@router.get("", response_model=List[NewspaperRow])
async def list_newspapers(client: AsyncClient = Depends(get_user_db)) -> List[NewspaperRow]:
    return await newspaper_service.list_newspapers(client)


@router.get("/mine", response_model=List[NewspaperRow])
async def list_my_newspapers(
    client: AsyncClient = Depends(get_user_db),
    user: Optional[User] = Depends(get_current_user_optional),
) -> List[NewspaperRow]:
    return await newspaper_service.list_my_newspapers(client, user)


@router.get("/select", response_model=List[SelectOption])
async def list_newspapers_for_select(client: AsyncClient = Depends(get_user_db)) -> List[SelectOption]:
    return await newspaper_service.list_newspapers_for_select(client)


@router.get("/country/{country_id}", response_model=List[NewspaperRow])
async def list_newspapers_of_country(
    country_id: str = Path(...),
    client: AsyncClient = Depends(get_user_db),
) -> List[NewspaperRow]:
    return await newspaper_service.list_newspapers_of_country(
        client, country_service.validate_country_id(country_id)
    )


@router.get("/{newspaper_id}", response_model=NewspaperRow)
async def read_newspaper(
    newspaper_id: str = Path(...),
    client: AsyncClient = Depends(get_user_db),
) -> NewspaperRow:
    return await newspaper_service.get_newspaper(
        client, newspaper_service.validate_newspaper_id(newspaper_id)
    )


@router.post("", response_model=MutationResponse)
async def create_newspaper(
    payload: NewspaperCreateInput,
    client: AsyncClient = Depends(get_user_db),
    user: User = Depends(get_current_user),
    notifier: Notifier = Depends(get_notifier),
) -> MutationResponse:
    result = await newspaper_service.create_newspaper(client, notifier, payload, author=user)
    return MutationResponse(**result.model_dump(), notifications=notifier.items)


@router.put("/{newspaper_id}", response_model=MutationResponse)
async def update_newspaper(
    payload: NewspaperEditInput,
    newspaper_id: str = Path(...),
    client: AsyncClient = Depends(get_user_db),
    user: User = Depends(get_current_user),
    notifier: Notifier = Depends(get_notifier),
) -> MutationResponse:
    result = await newspaper_service.update_newspaper(
        client, notifier, newspaper_service.validate_newspaper_id(newspaper_id), payload
    )
    return MutationResponse(**result.model_dump(), notifications=notifier.items)


@router.delete("/{newspaper_id}", response_model=MutationResponse)
async def delete_newspaper(
    newspaper_id: str = Path(...),
    client: AsyncClient = Depends(get_user_db),
    user: User = Depends(get_current_user),
    notifier: Notifier = Depends(get_notifier),
) -> MutationResponse:
    result = await newspaper_service.delete_newspaper(
        client, notifier, newspaper_service.validate_newspaper_id(newspaper_id)
    )
    return MutationResponse(**result.model_dump(), notifications=notifier.items)
