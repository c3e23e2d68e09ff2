from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, Field

from app.core.notifications import Notification

RecordId = Union[int, str]


class MutationResult(BaseModel):
    """Outcome of a create/update/delete against the record store."""

    success: bool
    id: Optional[RecordId] = None


class MutationResponse(MutationResult):
    notifications: List[Notification] = Field(default_factory=list)


class SelectOption(BaseModel):
    label: Optional[str] = None
    value: int


def min_length(value: str, length: int, message: str) -> str:
    if len(value) < length:
        raise ValueError(message)
    return value
