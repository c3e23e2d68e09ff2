# Backend/api/routers/lists.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Path
from supabase import AsyncClient

from app.core.notifications import Notifier, get_notifier
from app.deps.auth import User, get_current_user, get_current_user_optional
from app.deps.supabase import get_user_db
from app.models.common import MutationResponse
from app.models.newspaper_list import (
    AuthorFilterInput,
    CategoryFilterInput,
    NewspaperListCreateInput,
    NewspaperListEditInput,
    NewspaperListRow,
)
from services import newspaper_list_service as lists

router = APIRouter(
    prefix="/lists",
    tags=["lists"],
)


@router.get("", response_model=List[NewspaperListRow])
async def list_news_lists(client: AsyncClient = Depends(get_user_db)) -> List[NewspaperListRow]:
    return await lists.list_news_lists(client)


@router.get("/mine", response_model=List[NewspaperListRow])
async def list_my_news_lists(
    client: AsyncClient = Depends(get_user_db),
    user: Optional[User] = Depends(get_current_user_optional),
) -> List[NewspaperListRow]:
    return await lists.list_my_news_lists(client, user)


@router.get("/authors", response_model=List[str])
async def list_selectable_authors(client: AsyncClient = Depends(get_user_db)) -> List[str]:
    """Distinct article authors, for the author filter picker."""
    return await lists.list_selectable_authors(client)


@router.get("/categories", response_model=List[str])
async def list_selectable_categories(client: AsyncClient = Depends(get_user_db)) -> List[str]:
    """Distinct article categories, for the category filter picker."""
    return await lists.list_selectable_categories(client)


@router.get("/{list_id}", response_model=NewspaperListRow)
async def read_news_list(
    list_id: str = Path(...),
    client: AsyncClient = Depends(get_user_db),
) -> NewspaperListRow:
    return await lists.get_news_list(client, lists.validate_news_list_id(list_id))


@router.post("", response_model=MutationResponse)
async def create_news_list(
    payload: NewspaperListCreateInput,
    client: AsyncClient = Depends(get_user_db),
    user: User = Depends(get_current_user),
    notifier: Notifier = Depends(get_notifier),
) -> MutationResponse:
    result = await lists.create_news_list(client, notifier, payload, author=user)
    return MutationResponse(**result.model_dump(), notifications=notifier.items)


@router.put("/{list_id}", response_model=MutationResponse)
async def update_news_list(
    payload: NewspaperListEditInput,
    list_id: str = Path(...),
    client: AsyncClient = Depends(get_user_db),
    user: User = Depends(get_current_user),
    notifier: Notifier = Depends(get_notifier),
) -> MutationResponse:
    result = await lists.update_news_list(client, notifier, lists.validate_news_list_id(list_id), payload)
    return MutationResponse(**result.model_dump(), notifications=notifier.items)


@router.put("/{list_id}/authors", response_model=MutationResponse)
async def edit_author_filter(
    payload: AuthorFilterInput,
    list_id: str = Path(...),
    client: AsyncClient = Depends(get_user_db),
    user: User = Depends(get_current_user),
    notifier: Notifier = Depends(get_notifier),
) -> MutationResponse:
    result = await lists.edit_author_filter(
        client, notifier, lists.validate_news_list_id(list_id), payload.authors
    )
    return MutationResponse(**result.model_dump(), notifications=notifier.items)


@router.put("/{list_id}/categories", response_model=MutationResponse)
async def edit_category_filter(
    payload: CategoryFilterInput,
    list_id: str = Path(...),
    client: AsyncClient = Depends(get_user_db),
    user: User = Depends(get_current_user),
    notifier: Notifier = Depends(get_notifier),
) -> MutationResponse:
    result = await lists.edit_category_filter(
        client, notifier, lists.validate_news_list_id(list_id), payload.categories
    )
    return MutationResponse(**result.model_dump(), notifications=notifier.items)


@router.delete("/{list_id}", response_model=MutationResponse)
async def delete_news_list(
    list_id: str = Path(...),
    client: AsyncClient = Depends(get_user_db),
    user: User = Depends(get_current_user),
    notifier: Notifier = Depends(get_notifier),
) -> MutationResponse:
    result = await lists.delete_news_list(client, notifier, lists.validate_news_list_id(list_id))
    return MutationResponse(**result.model_dump(), notifications=notifier.items)
