# Backend/app/core/notifications.py
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel

from app.core.logging import get_logger

logger = get_logger()

NotificationColor = Literal["success", "error"]

ICON_SUCCESS = "i-heroicons-check-circle"
ICON_ERROR = "i-heroicons-x-circle"


class Notification(BaseModel):
    """User-facing notice, rendered as a toast by the frontend."""

    title: str
    description: Optional[str] = None
    color: NotificationColor = "success"
    icon: Optional[str] = None


class Notifier:
    """
    Collects the notifications emitted while handling one request.
    """

    def __init__(self) -> None:
        self._items: List[Notification] = []

    def success(self, title: str, description: Optional[str] = None) -> Notification:
        note = Notification(title=title, description=description, color="success", icon=ICON_SUCCESS)
        self._items.append(note)
        logger.info("notification_success", title=title)
        return note

    def error(self, title: str, description: Optional[str] = None) -> Notification:
        note = Notification(title=title, description=description, color="error", icon=ICON_ERROR)
        self._items.append(note)
        logger.warning("notification_error", title=title, description=description)
        return note

    @property
    def items(self) -> List[Notification]:
        return list(self._items)


def get_notifier() -> Notifier:
    """FastAPI dependency: one collector per request."""
    return Notifier()
