# services/refresh_service.py
"""
Forwards refresh requests to the hosted ingestion function. Single attempt,
no retry: the function itself polls and upserts the feeds.
"""
from __future__ import annotations

from typing import Any, Optional, Union

import httpx

from app.config import require_supabase_admin, settings
from app.core.errors import BadRequestError, UpstreamFailureError
from app.core.logging import get_logger
from app.utils.ids import parse_int_id

logger = get_logger()

REFRESH_ALL_FUNCTION = "process_newspaper"
REFRESH_ONE_FUNCTION = "process_one_newspaper"

REFRESH_FAILED_MESSAGE = "Failed to refresh newspaper feed."
INVALID_ID_MESSAGE = "A valid numerical newspaper ID is required."

# same wording the Supabase clients use for function errors
NON_2XX_MESSAGE = "Edge Function returned a non-2xx status code"
RELAY_MESSAGE = "Failed to send a request to the Edge Function"


def function_url(base_url: str, function_name: str) -> str:
    return f"{base_url.rstrip('/')}/functions/v1/{function_name}"


def _decode(response: httpx.Response) -> Any:
    content_type = response.headers.get("content-type", "")
    if "application/json" in content_type:
        return response.json()
    return response.text


async def invoke_function(
    function_name: str,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> Any:
    """
    POST to `{SUPABASE_URL}/functions/v1/<function_name>` with the service
    role key as bearer token. Any transport error or non-2xx status becomes
    UpstreamFailureError with the original message under `originalError`.
    """
    base_url, service_key = require_supabase_admin()
    url = function_url(base_url, function_name)
    headers = {
        "Authorization": f"Bearer {service_key}",
        "apikey": service_key,
    }

    own_client = client is None
    http = client or httpx.AsyncClient(timeout=settings.REFRESH_TIMEOUT_S)
    try:
        response = await http.post(url, headers=headers)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        logger.error(
            "refresh_function_failed",
            function=function_name,
            status_code=exc.response.status_code,
            body=exc.response.text[:500],
        )
        raise UpstreamFailureError(
            REFRESH_FAILED_MESSAGE, data={"originalError": NON_2XX_MESSAGE}
        ) from exc
    except httpx.HTTPError as exc:
        logger.error("refresh_function_unreachable", function=function_name, error=str(exc))
        raise UpstreamFailureError(
            REFRESH_FAILED_MESSAGE, data={"originalError": f"{RELAY_MESSAGE}: {exc}"}
        ) from exc
    finally:
        if own_client:
            await http.aclose()

    logger.info("refresh_function_invoked", function=function_name, status_code=response.status_code)
    return _decode(response)


def parse_newspaper_id(raw: Union[str, int, None]) -> int:
    return parse_int_id(raw, error_cls=BadRequestError, message=INVALID_ID_MESSAGE)


async def refresh_newspaper(raw_id: Union[str, int, None]) -> Any:
    newspaper_id = parse_newspaper_id(raw_id)
    return await invoke_function(f"{REFRESH_ONE_FUNCTION}/{newspaper_id}")


async def refresh_all() -> Any:
    return await invoke_function(REFRESH_ALL_FUNCTION)
