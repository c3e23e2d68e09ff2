from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class FeedChannel(BaseModel):
    title: str
    description: str
    feed_url: str
    site_url: str
    language: str = "de"


class FeedItem(BaseModel):
    title: str
    description: str = ""
    url: Optional[str] = None
    author: str
    date: Optional[datetime] = None
    categories: List[str] = Field(default_factory=list)
    enclosure_url: Optional[str] = None
