"""Assemble a complete RSS 2.0 document from a channel."""
import logging
from typing import Any, Mapping, Optional, Union

from rssbuilder.dates import format_rfc822
from rssbuilder.errors import MissingRequiredField
from rssbuilder.escape import EscapeCache, escape_xml
from rssbuilder.models import FeedChannel
from rssbuilder.render import render_item

logger = logging.getLogger(__name__)

CONTENT_NS = "http://purl.org/rss/1.0/modules/content/"
ATOM_NS = "http://www.w3.org/2005/Atom"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'


def generate_rss(
    channel: Union[FeedChannel, Mapping[str, Any]],
    cache: Optional[EscapeCache] = None,
) -> str:
    """Render ``channel`` as an RSS 2.0 document.

    Raises MissingRequiredField before rendering anything when title,
    description, site or feed_url is empty. Items without a title or link are
    dropped silently. ``custom_data`` is inserted verbatim (trimmed) right
    before the items; it is never escaped.
    """
    if isinstance(channel, Mapping):
        channel = FeedChannel.from_dict(channel)

    missing = channel.missing_fields
    if missing:
        raise MissingRequiredField(missing)

    items = channel.items or []
    valid_items = [item for item in items if item is not None and item.is_renderable]
    rendered = [xml for xml in (render_item(item, cache) for item in valid_items) if xml]
    skipped = len(items) - len(rendered)
    if skipped:
        logger.info(f"[Feed] Skipped {skipped} of {len(items)} items without title or link")
    logger.debug(f"[Feed] Rendered {len(rendered)} items for {channel.feed_url}")

    items_xml = "\n\n".join(rendered)
    last_build_date = format_rfc822()

    custom = channel.custom_data.strip() if channel.custom_data else ""
    custom_xml = f"    {custom}\n" if custom else ""

    return (
        f"{XML_DECLARATION}\n"
        f'<rss version="2.0" xmlns:content="{CONTENT_NS}" xmlns:atom="{ATOM_NS}">\n'
        "  <channel>\n"
        f"    <title>{escape_xml(channel.title, cache)}</title>\n"
        f"    <link>{escape_xml(channel.site, cache)}</link>\n"
        f"    <description>{escape_xml(channel.description, cache)}</description>\n"
        f"    <language>{escape_xml(channel.resolved_language, cache)}</language>\n"
        f"    <lastBuildDate>{last_build_date}</lastBuildDate>\n"
        f'    <atom:link href="{escape_xml(channel.feed_url, cache)}" rel="self" type="application/rss+xml" />\n'
        f"{custom_xml}{items_xml}\n"
        "  </channel>\n"
        "</rss>"
    )
