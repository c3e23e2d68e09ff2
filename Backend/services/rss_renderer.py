# services/rss_renderer.py
"""
RSS 2.0 serialization for the republished feeds.
"""
from __future__ import annotations

import mimetypes
import re
import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Iterable, Optional
from urllib.parse import urlparse

from app.models.feed import FeedChannel, FeedItem

RSS_CONTENT_TYPE = "application/rss+xml; charset=utf-8"
GENERATOR = "newspaper-rss"

ATOM_NS = "http://www.w3.org/2005/Atom"
DC_NS = "http://purl.org/dc/elements/1.1/"

ET.register_namespace("atom", ATOM_NS)
ET.register_namespace("dc", DC_NS)

# control characters outside the XML 1.0 character range
_INVALID_XML_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")


def _clean(text: Optional[str]) -> Optional[str]:
    if text is None:
        return None
    return _INVALID_XML_CHARS.sub("", text)


def _rfc822(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return format_datetime(value)


def _enclosure_type(url: str) -> str:
    guessed, _ = mimetypes.guess_type(urlparse(url).path)
    return guessed or "image/jpeg"


def _append_item(channel: ET.Element, item: FeedItem) -> None:
    node = ET.SubElement(channel, "item")
    ET.SubElement(node, "title").text = _clean(item.title)
    ET.SubElement(node, "description").text = _clean(item.description)
    if item.url:
        ET.SubElement(node, "link").text = _clean(item.url)
        ET.SubElement(node, "guid", {"isPermaLink": "true"}).text = _clean(item.url)
    for category in item.categories:
        ET.SubElement(node, "category").text = _clean(category)
    ET.SubElement(node, f"{{{DC_NS}}}creator").text = _clean(item.author)
    if item.date is not None:
        ET.SubElement(node, "pubDate").text = _rfc822(item.date)
    if item.enclosure_url:
        enclosure_url = _clean(item.enclosure_url)
        ET.SubElement(
            node,
            "enclosure",
            {"url": enclosure_url, "length": "0", "type": _enclosure_type(enclosure_url)},
        )


def render_rss(
    channel: FeedChannel,
    items: Iterable[FeedItem],
    *,
    build_date: Optional[datetime] = None,
) -> str:
    rss = ET.Element("rss", {"version": "2.0"})
    ch = ET.SubElement(rss, "channel")
    ET.SubElement(ch, "title").text = _clean(channel.title)
    ET.SubElement(ch, "description").text = _clean(channel.description)
    ET.SubElement(ch, "link").text = channel.site_url
    ET.SubElement(ch, "generator").text = GENERATOR
    ET.SubElement(ch, "lastBuildDate").text = _rfc822(build_date or datetime.now(timezone.utc))
    ET.SubElement(
        ch,
        f"{{{ATOM_NS}}}link",
        {"href": channel.feed_url, "rel": "self", "type": "application/rss+xml"},
    )
    ET.SubElement(ch, "language").text = channel.language

    for item in items:
        _append_item(ch, item)

    ET.indent(rss, space="  ")
    return ET.tostring(rss, encoding="utf-8", xml_declaration=True).decode("utf-8")
