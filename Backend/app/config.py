# app/config.py
from __future__ import annotations

from pathlib import Path
from typing import List

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Backend/app/config.py → parent = Backend
ENV_FILE = Path(__file__).resolve().parents[1] / ".env"
load_dotenv(ENV_FILE, override=False)  # pre-load into the process environment


class Settings(BaseSettings):
    # ---- App ----
    APP_VERSION: str = "0.1.0"
    LOG_LEVEL: str = "INFO"

    # ---- Supabase ----
    # Public (anon) key for user-scoped queries, service role key for the
    # privileged server routes. Both stay empty until configured.
    SUPABASE_URL: str = ""
    SUPABASE_KEY: str = ""
    SUPABASE_SERVICE_ROLE_KEY: str = ""
    SUPABASE_JWT_SECRET: str = ""

    # ---- RSS output ----
    SITE_URL: str = "https://your-website.com"
    FEED_LANGUAGE: str = "de"
    FEED_ITEM_LIMIT: int = Field(default=50, ge=1)

    # ---- Refresh trigger ----
    REFRESH_TIMEOUT_S: float = 60.0

    # ---- CORS ----
    ALLOWED_ORIGINS: List[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://127.0.0.1:3000"]
    )

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()


def require_supabase_admin() -> tuple[str, str]:
    """
    Return (url, service_role_key) or fail loudly when the privileged
    connection is not configured.
    """
    if not settings.SUPABASE_URL or not settings.SUPABASE_SERVICE_ROLE_KEY:
        raise RuntimeError(
            "SUPABASE_URL / SUPABASE_SERVICE_ROLE_KEY missing. Check Backend/.env "
            f"(tried to load from: {ENV_FILE})."
        )
    return settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY


def require_supabase_public() -> tuple[str, str]:
    """
    Return (url, anon_key) for user-scoped clients.
    """
    if not settings.SUPABASE_URL or not settings.SUPABASE_KEY:
        raise RuntimeError(
            "SUPABASE_URL / SUPABASE_KEY missing. Check Backend/.env "
            f"(tried to load from: {ENV_FILE})."
        )
    return settings.SUPABASE_URL, settings.SUPABASE_KEY


def require_supabase_jwt() -> str:
    """
    Verify SUPABASE_JWT_SECRET is present when auth needs it.
    """
    secret = settings.SUPABASE_JWT_SECRET
    if not secret:
        raise RuntimeError(
            "SUPABASE_JWT_SECRET missing. Set it in Backend/.env "
            f"(tried to load from: {ENV_FILE})."
        )
    return secret
