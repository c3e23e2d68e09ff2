# services/supabase_service.py
from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional

from postgrest.exceptions import APIError
from supabase import AsyncClient, acreate_client

from app.config import require_supabase_admin, require_supabase_public
from app.core.errors import UpstreamFailureError
from app.core.logging import get_logger

logger = get_logger()

# --------------------------------------------------------------------
# Clients
# --------------------------------------------------------------------
_admin_client: AsyncClient | None = None
_admin_lock = asyncio.Lock()


async def get_admin_client() -> AsyncClient:
    """
    Process-wide client authenticated with the service role key.
    Bypasses row level security; only the server routes use it.
    """
    global _admin_client
    if _admin_client is not None:
        return _admin_client

    async with _admin_lock:
        if _admin_client is not None:
            return _admin_client
        url, key = require_supabase_admin()
        _admin_client = await acreate_client(url, key)
        logger.info("supabase_admin_client_ready")
        return _admin_client


async def create_user_client(access_token: Optional[str] = None) -> AsyncClient:
    """
    Per-request client on the public key. When the caller sent a Supabase
    access token, queries run as that user so row level security applies.
    """
    url, key = require_supabase_public()
    client = await acreate_client(url, key)
    if access_token:
        client.postgrest.auth(access_token)
    return client


async def close_client(client: AsyncClient) -> None:
    """Release the PostgREST connection pool held by `client`."""
    await client.postgrest.aclose()


async def close_clients() -> None:
    """Close and forget the privileged client; used at application shutdown."""
    global _admin_client
    client, _admin_client = _admin_client, None
    if client is not None:
        await close_client(client)
        logger.info("supabase_admin_client_closed")


# --------------------------------------------------------------------
# Query helpers
# --------------------------------------------------------------------
async def run_query(query: Any, *, event: str, message: str, **context: Any) -> List[Dict[str, Any]]:
    """
    Execute a PostgREST builder and always hand back a list of rows.

    A failing query is logged with its real cause and re-raised as
    UpstreamFailureError carrying only `message`.
    """
    try:
        response = await query.execute()
    except APIError as exc:
        logger.error(event, error=exc.message, code=exc.code, **context)
        raise UpstreamFailureError(message) from exc

    data = getattr(response, "data", None)
    if data is None:
        return []
    if isinstance(data, dict):
        return [data]
    return list(data)


async def fetch_one(query: Any, *, event: str, message: str, **context: Any) -> Optional[Dict[str, Any]]:
    rows = await run_query(query.limit(1), event=event, message=message, **context)
    return rows[0] if rows else None
