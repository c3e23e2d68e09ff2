# Backend/api/routers/rss.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Path
from fastapi.responses import Response
from supabase import AsyncClient

from app.deps.supabase import get_admin_db
from services.feed_service import build_all_feed, build_list_feed, build_newspaper_feed
from services.rss_renderer import RSS_CONTENT_TYPE

router = APIRouter(
    prefix="/rss",
    tags=["rss"],
)


def _rss_response(xml: str) -> Response:
    return Response(content=xml, media_type=RSS_CONTENT_TYPE)


@router.get("/all", response_class=Response)
async def rss_all(client: AsyncClient = Depends(get_admin_db)) -> Response:
    """Latest articles across all newspapers."""
    return _rss_response(await build_all_feed(client))


@router.get("/list/{list_id}", response_class=Response)
async def rss_list(
    list_id: str = Path(..., description="Newspaper list id (uuid)"),
    client: AsyncClient = Depends(get_admin_db),
) -> Response:
    """Articles of a curated list, narrowed by its author/category filters."""
    return _rss_response(await build_list_feed(client, list_id))


@router.get("/newspaper/{newspaper_id}", response_class=Response)
async def rss_newspaper(
    newspaper_id: str = Path(..., description="Numeric newspaper id"),
    client: AsyncClient = Depends(get_admin_db),
) -> Response:
    return _rss_response(await build_newspaper_feed(client, newspaper_id))
