# Backend/app/core/request_id.py
from __future__ import annotations

import uuid
from typing import Optional
import contextvars

_request_id_ctx: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar("request_id", default=None)


def set_request_id(request_id: Optional[str]) -> None:
    _request_id_ctx.set(request_id)

def get_request_id() -> Optional[str]:
    return _request_id_ctx.get()

def clear_request_id() -> None:
    _request_id_ctx.set(None)

def new_request_id() -> str:
    return uuid.uuid4().hex
