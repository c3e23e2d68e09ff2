"""
Pydantic models for countries.
"""
from __future__ import annotations

import re
from typing import Optional

from pydantic import BaseModel, field_validator

from app.models.common import min_length

_LETTERS_ONLY = re.compile(r"^[A-Za-z]+$")


class CountryRow(BaseModel):
    id: int
    name: Optional[str] = None
    full_name: Optional[str] = None
    short: Optional[str] = None
    author: Optional[str] = None


class CountrySelect(BaseModel):
    id: int
    name: Optional[str] = None


class CountryEditInput(BaseModel):
    """Editable fields; the display name is fixed after creation."""
    full_name: str
    short: str

    @field_validator("full_name")
    @classmethod
    def _check_full_name(cls, value: str) -> str:
        return min_length(value, 3, "Ganzer Name muss mindestens 3 Zeichen lang sein.")

    @field_validator("short")
    @classmethod
    def _check_short(cls, value: str) -> str:
        if len(value) < 2:
            raise ValueError("Abkürzung muss mindestens 2 Zeichen lang sein.")
        if len(value) > 3:
            raise ValueError("Abkürzung darf maximal 3 Zeichen lang sein.")
        if not _LETTERS_ONLY.match(value):
            raise ValueError("Abkürzung darf nur Buchstaben enthalten.")
        return value


class CountryCreateInput(CountryEditInput):
    name: str

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        return min_length(value, 3, "Name muss mindestens 3 Zeichen lang sein.")
