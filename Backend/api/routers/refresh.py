# Backend/api/routers/refresh.py
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Path

from services import refresh_service

router = APIRouter(
    prefix="/refresh",
    tags=["refresh"],
)


# must be registered before /{newspaper_id}
@router.get("/all")
async def refresh_all() -> Any:
    """Ask the ingestion function to poll every newspaper."""
    return await refresh_service.refresh_all()


@router.get("/{newspaper_id}")
async def refresh_newspaper(
    newspaper_id: str = Path(..., description="Numeric newspaper id"),
) -> Any:
    return await refresh_service.refresh_newspaper(newspaper_id)
