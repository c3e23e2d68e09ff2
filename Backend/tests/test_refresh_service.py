from __future__ import annotations

import httpx
import pytest

from app.config import settings
from app.core.errors import BadRequestError, UpstreamFailureError
from services import refresh_service

BASE_URL = "https://project.supabase.example"


@pytest.fixture(autouse=True)
def _supabase(monkeypatch):
    monkeypatch.setattr(settings, "SUPABASE_URL", BASE_URL)
    monkeypatch.setattr(settings, "SUPABASE_SERVICE_ROLE_KEY", "service-key")


def test_function_url_joins_path():
    assert (
        refresh_service.function_url(BASE_URL + "/", "process_newspaper")
        == f"{BASE_URL}/functions/v1/process_newspaper"
    )


@pytest.mark.parametrize("raw", ["abc", "", None, "1e3"])
def test_parse_newspaper_id_rejects_non_numeric(raw):
    with pytest.raises(BadRequestError) as exc:
        refresh_service.parse_newspaper_id(raw)
    assert exc.value.status_code == 400
    assert exc.value.message == "A valid numerical newspaper ID is required."


@pytest.mark.asyncio
async def test_refresh_all_posts_with_service_key(httpx_mock):
    httpx_mock.add_response(
        method="POST",
        url=f"{BASE_URL}/functions/v1/process_newspaper",
        json={"processed": 3},
    )

    result = await refresh_service.refresh_all()

    assert result == {"processed": 3}
    request = httpx_mock.get_requests()[0]
    assert request.headers["Authorization"] == "Bearer service-key"
    assert request.headers["apikey"] == "service-key"


@pytest.mark.asyncio
async def test_refresh_newspaper_targets_single_function(httpx_mock):
    httpx_mock.add_response(
        method="POST",
        url=f"{BASE_URL}/functions/v1/process_one_newspaper/42",
        text="ok",
    )

    assert await refresh_service.refresh_newspaper("42") == "ok"


@pytest.mark.asyncio
async def test_refresh_invalid_id_never_calls_function(httpx_mock):
    with pytest.raises(BadRequestError):
        await refresh_service.refresh_newspaper("abc")
    assert httpx_mock.get_requests() == []


@pytest.mark.asyncio
async def test_refresh_non_2xx_becomes_upstream_failure(httpx_mock):
    httpx_mock.add_response(status_code=500, text="boom")

    with pytest.raises(UpstreamFailureError) as exc:
        await refresh_service.refresh_all()

    assert exc.value.status_code == 500
    assert exc.value.message == "Failed to refresh newspaper feed."
    assert exc.value.data == {"originalError": "Edge Function returned a non-2xx status code"}


@pytest.mark.asyncio
async def test_refresh_transport_error_becomes_upstream_failure(httpx_mock):
    httpx_mock.add_exception(httpx.ConnectError("connection refused"))

    with pytest.raises(UpstreamFailureError) as exc:
        await refresh_service.refresh_newspaper(7)

    assert exc.value.data["originalError"] == (
        "Failed to send a request to the Edge Function: connection refused"
    )
