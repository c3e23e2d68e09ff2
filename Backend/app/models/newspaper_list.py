"""
Pydantic models for curated newspaper lists.
"""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from app.models.common import min_length


class NewspaperListRow(BaseModel):
    id: str
    name: Optional[str] = None
    newspapers: Optional[List[int]] = None
    author: Optional[str] = None
    filter_authors: Optional[List[str]] = None
    filter_categories: Optional[List[str]] = None


class NewspaperListInput(BaseModel):
    """Shared by create and edit."""
    name: str
    newspapers: List[int]
    filter_authors: Optional[List[str]] = None
    filter_categories: Optional[List[str]] = None

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        return min_length(value, 3, "Listenname muss mindestens 3 Zeichen lang sein.")

    @field_validator("newspapers")
    @classmethod
    def _check_newspapers(cls, value: List[int]) -> List[int]:
        if not value:
            raise ValueError("Die Liste muss mindestens eine Zeitung enthalten.")
        return value


NewspaperListCreateInput = NewspaperListInput
NewspaperListEditInput = NewspaperListInput


class AuthorFilterInput(BaseModel):
    authors: List[str] = Field(default_factory=list)


class CategoryFilterInput(BaseModel):
    categories: List[str] = Field(default_factory=list)
