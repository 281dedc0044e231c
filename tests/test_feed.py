"""Tests for full feed assembly."""
import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from unittest.mock import patch

import pytest

from rssbuilder.errors import MissingRequiredField
from rssbuilder.feed import ATOM_NS, CONTENT_NS, generate_rss
from rssbuilder.models import Enclosure, FeedChannel, FeedItem


def _channel(**kw):
    defaults = dict(
        title="My Podcast",
        description="Latest episodes",
        site="https://example.com",
        feed_url="https://example.com/feed.xml",
        language="en-GB",
        items=[
            FeedItem(
                title="Episode 1",
                link="https://example.com/ep1",
                pub_date=datetime(2026, 2, 12, 6, 0, tzinfo=timezone.utc),
                description="Description",
                category=["Podcast", "Tech"],
                content="Content",
                enclosure=Enclosure(url="https://example.com/ep1.mp3", length=123456, type="audio/mpeg"),
            ),
            FeedItem(
                title="Episode 2",
                link="https://example.com/ep2",
                pub_date="2026-02-13T08:00:00Z",
                guid="ep-2",
            ),
        ],
    )
    defaults.update(kw)
    return FeedChannel(**defaults)


def _parse(xml):
    return ET.fromstring(xml.encode("utf-8"))


class TestGenerateRss:
    def test_declaration_and_well_formed(self, cache):
        out = generate_rss(_channel(), cache)
        assert out.startswith('<?xml version="1.0" encoding="UTF-8"?>\n')
        root = _parse(out)
        assert root.tag == "rss"
        assert root.get("version") == "2.0"

    def test_namespaces_declared(self, cache):
        out = generate_rss(_channel(), cache)
        assert f'xmlns:content="{CONTENT_NS}"' in out
        assert f'xmlns:atom="{ATOM_NS}"' in out

    def test_channel_header(self, cache):
        root = _parse(generate_rss(_channel(), cache))
        channel = root.find("channel")
        assert channel.find("title").text == "My Podcast"
        assert channel.find("link").text == "https://example.com"
        assert channel.find("description").text == "Latest episodes"
        assert channel.find("language").text == "en-GB"
        assert channel.find("lastBuildDate").text.endswith(" GMT")
        atom = channel.find(f"{{{ATOM_NS}}}link")
        assert atom.get("href") == "https://example.com/feed.xml"
        assert atom.get("rel") == "self"
        assert atom.get("type") == "application/rss+xml"

    def test_items_rendered(self, cache):
        root = _parse(generate_rss(_channel(), cache))
        items = root.findall("channel/item")
        assert [i.find("title").text for i in items] == ["Episode 1", "Episode 2"]
        assert items[0].find(f"{{{CONTENT_NS}}}encoded").text == "Content"
        assert [c.text for c in items[0].findall("category")] == ["Podcast", "Tech"]
        assert items[1].find("guid").get("isPermaLink") == "false"
        assert items[1].find("pubDate").text == "Fri, 13 Feb 2026 08:00:00 GMT"

    def test_items_separated_by_blank_line(self, cache):
        out = generate_rss(_channel(), cache)
        assert "  </item>\n\n  <item>" in out

    def test_default_language(self, cache):
        root = _parse(generate_rss(_channel(language=None), cache))
        assert root.find("channel/language").text == "en"

    def test_empty_items_from_mapping(self, channel_dict):
        out = generate_rss(channel_dict)
        root = _parse(out)
        assert root.findall("channel/item") == []

    def test_invalid_items_dropped(self, cache):
        items = [
            FeedItem(title="", link="https://example.com/a"),
            None,
            FeedItem(title="No link", link=""),
            FeedItem(title="Kept", link="https://example.com/kept"),
        ]
        root = _parse(generate_rss(_channel(items=items), cache))
        assert [i.find("title").text for i in root.findall("channel/item")] == ["Kept"]

    def test_last_build_date_is_now(self, cache):
        with patch("rssbuilder.feed.format_rfc822", return_value="Mon, 01 Jan 2024 00:00:00 GMT") as fmt:
            out = generate_rss(_channel(items=[]), cache)
        fmt.assert_called_once_with()
        assert "<lastBuildDate>Mon, 01 Jan 2024 00:00:00 GMT</lastBuildDate>" in out

    def test_cdata_terminator_keeps_document_well_formed(self, cache):
        items = [FeedItem(title="x", link="https://e/x", content="before ]]> after\x00")]
        out = generate_rss(_channel(items=items), cache)
        item = _parse(out).find("channel/item")
        assert item.find(f"{{{CONTENT_NS}}}encoded").text == "before ]]&gt; after"

    def test_escaped_channel_fields(self, cache):
        out = generate_rss(_channel(title="Tom & Jerry's <Show>", items=[]), cache)
        assert _parse(out).find("channel/title").text == "Tom & Jerry's <Show>"


class TestCustomData:
    def test_inserted_verbatim_before_items(self, cache):
        custom = "\n  <itunes:explicit xmlns:itunes=\"http://www.itunes.com/dtds/podcast-1.0.dtd\">no</itunes:explicit>  \n"
        out = generate_rss(_channel(custom_data=custom), cache)
        assert '    <itunes:explicit xmlns:itunes="http://www.itunes.com/dtds/podcast-1.0.dtd">no</itunes:explicit>\n  <item>' in out
        _parse(out)

    def test_not_escaped(self, cache):
        out = generate_rss(_channel(custom_data="<ttl>60</ttl>", items=[]), cache)
        assert "<ttl>60</ttl>" in out
        assert _parse(out).find("channel/ttl").text == "60"

    def test_blank_custom_data_ignored(self, cache):
        out = generate_rss(_channel(custom_data="   ", items=[]), cache)
        assert "    \n" not in out


class TestValidation:
    @pytest.mark.parametrize("field", ["title", "description", "site", "feed_url"])
    def test_missing_required(self, cache, field):
        with pytest.raises(MissingRequiredField) as exc:
            generate_rss(_channel(**{field: ""}), cache)
        assert exc.value.fields == [field]

    def test_feed_url_omitted_from_mapping(self, channel_dict):
        del channel_dict["feedUrl"]
        with pytest.raises(MissingRequiredField):
            generate_rss(channel_dict)

    def test_reports_all_missing(self, cache):
        with pytest.raises(MissingRequiredField) as exc:
            generate_rss(FeedChannel(title="", description="", site="s", feed_url=""), cache)
        assert exc.value.fields == ["title", "description", "feed_url"]

    def test_fails_before_rendering(self, cache):
        with patch("rssbuilder.feed.render_item") as render:
            with pytest.raises(MissingRequiredField):
                generate_rss(_channel(site=None), cache)
        render.assert_not_called()

    def test_bad_item_date_aborts(self, cache):
        items = [FeedItem(title="x", link="https://e/x", pub_date="not-a-date")]
        with pytest.raises(ValueError):
            generate_rss(_channel(items=items), cache)

    def test_same_title_hits_cache(self, cache):
        items = [FeedItem(title="Same & title", link=f"https://e/{i}") for i in range(3)]
        generate_rss(_channel(items=items), cache)
        assert "Same & title" in cache


class TestLooseItemValues:
    def test_int_category_and_bare_enclosure_url(self, channel_dict):
        channel_dict["items"] = [{
            "title": "a",
            "link": "https://s/a",
            "category": 2024,
            "enclosure": "https://s/a.mp3",
        }]
        item = _parse(generate_rss(channel_dict)).find("channel/item")
        assert [c.text for c in item.findall("category")] == ["2024"]
        assert item.find("enclosure") is None
