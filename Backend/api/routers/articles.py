# Backend/api/routers/articles.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Path
from supabase import AsyncClient

from app.deps.supabase import get_admin_db
from app.models.article import Article
from services.article_service import get_article

router = APIRouter(
    prefix="/articles",
    tags=["articles"],
)


@router.get("/{article_id}", response_model=Article)
async def read_article(
    article_id: str = Path(..., description="Article id"),
    client: AsyncClient = Depends(get_admin_db),
) -> Article:
    return await get_article(client, article_id)
