# Backend/app/deps/supabase.py
from __future__ import annotations

from typing import AsyncIterator, Optional

from fastapi import Header
from supabase import AsyncClient

from app.deps.auth import bearer_token
from services.supabase_service import close_client, create_user_client, get_admin_client

__all__ = ["get_admin_db", "get_user_db"]


async def get_admin_db() -> AsyncClient:
    """Privileged client for the feed, article and refresh routes."""
    return await get_admin_client()


async def get_user_db(authorization: Optional[str] = Header(None)) -> AsyncIterator[AsyncClient]:
    """
    User-scoped client for the CRUD routes; closed once the request is done.
    """
    client = await create_user_client(bearer_token(authorization))
    try:
        yield client
    finally:
        await close_client(client)
