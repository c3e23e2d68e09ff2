from __future__ import annotations

import xml.etree.ElementTree as ET
from datetime import datetime, timezone

from app.models.feed import FeedChannel, FeedItem
from services.rss_renderer import ATOM_NS, DC_NS, render_rss


def _channel() -> FeedChannel:
    return FeedChannel(
        title="RSS Feed: Morgenlage",
        description="Die neuesten Nachrichten",
        feed_url="https://site.example/api/rss/list/abc",
        site_url="https://site.example",
        language="de",
    )


def test_render_rss_without_items_is_well_formed():
    xml = render_rss(_channel(), [])
    root = ET.fromstring(xml.encode("utf-8"))

    assert root.tag == "rss"
    assert root.get("version") == "2.0"
    channel = root.find("channel")
    assert channel.findtext("title") == "RSS Feed: Morgenlage"
    assert channel.findtext("link") == "https://site.example"
    assert channel.findtext("language") == "de"
    self_link = channel.find(f"{{{ATOM_NS}}}link")
    assert self_link.get("href") == "https://site.example/api/rss/list/abc"
    assert self_link.get("rel") == "self"
    assert channel.findall("item") == []


def test_render_rss_item_fields():
    item = FeedItem(
        title="Wahl",
        description="<p>Inhalt</p>",
        url="https://news.example/1",
        author="Jane",
        date=datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc),
        categories=["politik", "inland"],
        enclosure_url="https://img.example/a.png?w=300",
    )
    root = ET.fromstring(render_rss(_channel(), [item]).encode("utf-8"))
    node = root.find("channel/item")

    assert node.findtext("title") == "Wahl"
    # html is escaped text, not markup
    assert node.findtext("description") == "<p>Inhalt</p>"
    assert node.findtext("link") == "https://news.example/1"
    assert node.findtext("guid") == "https://news.example/1"
    assert node.findtext(f"{{{DC_NS}}}creator") == "Jane"
    assert node.findtext("pubDate") == "Wed, 01 Jan 2025 12:00:00 +0000"
    assert [c.text for c in node.findall("category")] == ["politik", "inland"]
    enclosure = node.find("enclosure")
    assert enclosure.get("url") == "https://img.example/a.png?w=300"
    assert enclosure.get("type") == "image/png"


def test_render_rss_skips_optional_nodes():
    item = FeedItem(title="Ohne Datum", author="Tagesblatt")
    node = ET.fromstring(render_rss(_channel(), [item]).encode("utf-8")).find("channel/item")

    assert node.find("pubDate") is None
    assert node.find("enclosure") is None
    assert node.find("link") is None


def test_render_rss_strips_control_characters():
    item = FeedItem(
        title="Titel\x08",
        description="Teil\x0beins\x1f",
        author="Re\x0cdaktion",
        categories=["sp\x00ort"],
    )
    channel = _channel()
    channel.title = "Morgen\x1elage"

    root = ET.fromstring(render_rss(channel, [item]).encode("utf-8"))

    assert root.find("channel").findtext("title") == "Morgenlage"
    node = root.find("channel/item")
    assert node.findtext("title") == "Titel"
    assert node.findtext("description") == "Teileins"
    assert node.findtext(f"{{{DC_NS}}}creator") == "Redaktion"
    assert node.findtext("category") == "sport"


def test_render_rss_keeps_tabs_and_newlines():
    item = FeedItem(title="Zeile", description="eins\tzwei\ndrei", author="Jane")
    node = ET.fromstring(render_rss(_channel(), [item]).encode("utf-8")).find("channel/item")
    assert node.findtext("description") == "eins\tzwei\ndrei"
