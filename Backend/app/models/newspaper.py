"""
Pydantic models for newspapers.
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import AnyUrl, BaseModel, Field, TypeAdapter, ValidationError, field_validator

from app.models.common import min_length

_URL = TypeAdapter(AnyUrl)


def is_valid_url(value: str) -> bool:
    try:
        _URL.validate_python(value)
    except ValidationError:
        return False
    return True


class NewspaperRow(BaseModel):
    id: int
    name: Optional[str] = None
    url: Optional[str] = None
    rss: Optional[str] = None
    country: Optional[int] = None
    description: Optional[str] = None
    author: Optional[str] = None


class NewspaperInput(BaseModel):
    """Shared by create and edit."""
    name: str
    url: Optional[str] = None
    rss: str
    country: int = Field(default=None, validate_default=True)
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        return min_length(value, 3, "Name muss mindestens 3 Zeichen lang sein.")

    @field_validator("url")
    @classmethod
    def _check_url(cls, value: Optional[str]) -> Optional[str]:
        # empty string means "no website"
        if value is None or value == "":
            return value
        if not is_valid_url(value):
            raise ValueError("Muss eine gültige URL sein.")
        return value

    @field_validator("rss")
    @classmethod
    def _check_rss(cls, value: str) -> str:
        if not is_valid_url(value):
            raise ValueError("RSS-Feed-URL muss eine gültige URL sein.")
        return value

    @field_validator("country", mode="before")
    @classmethod
    def _check_country(cls, value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError("Bitte wähle ein Land aus.")
        return value


NewspaperCreateInput = NewspaperInput
NewspaperEditInput = NewspaperInput
