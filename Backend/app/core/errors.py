# Backend/app/core/errors.py
from __future__ import annotations

from typing import Any, Dict, Optional

__all__ = [
    "AppError",
    "NotFoundError",
    "BadRequestError",
    "UpstreamFailureError",
]


class AppError(Exception):
    """
    Base for errors that map onto an HTTP status.

    `message` is what the caller sees; `data` is optional extra payload
    (e.g. the upstream error for diagnostics).
    """

    status_code: int = 500

    def __init__(self, message: str, *, data: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.data = data


class NotFoundError(AppError):
    status_code = 404


class BadRequestError(AppError):
    status_code = 400


class UpstreamFailureError(AppError):
    """Record store or hosted function failed."""

    status_code = 500
