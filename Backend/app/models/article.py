from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field


class NewspaperRef(BaseModel):
    name: Optional[str] = None


class Article(BaseModel):
    """
    One ingested news item (table `parsed_news`).

    Every column is optional because the feed queries only select the
    columns they render.
    """

    id: Optional[int] = None
    newspaper_id: Optional[int] = None
    title: Optional[str] = None
    link: Optional[str] = None
    snippet: Optional[str] = None
    content_html: Optional[str] = None
    image_url: Optional[str] = None
    author: Optional[str] = None
    categories: Optional[List[str]] = Field(default=None)
    published_at: Optional[datetime] = None
    raw_item: Optional[Any] = None
    created_at: Optional[datetime] = None
    newspaper: Optional[NewspaperRef] = None
