"""Render ``<item>`` and ``<category>`` fragments."""
from typing import Any, List, Optional

from rssbuilder.cdata import wrap_cdata
from rssbuilder.dates import format_rfc822
from rssbuilder.escape import EscapeCache, escape_xml
from rssbuilder.models import Enclosure, FeedItem

ITEM_INDENT = "  "
FIELD_INDENT = "    "


def render_category(category: Any, cache: Optional[EscapeCache] = None) -> str:
    """One ``<category>`` line per non-empty value, in input order."""
    if not category:
        return ""
    values = list(category) if isinstance(category, (list, tuple)) else [category]
    return "\n".join(
        f"{FIELD_INDENT}<category>{escape_xml(str(value), cache)}</category>"
        for value in values
        if value
    )


def render_enclosure(enclosure: Optional[Enclosure], cache: Optional[EscapeCache] = None) -> str:
    if not isinstance(enclosure, Enclosure) or not enclosure.url:
        return ""
    return (
        f'{FIELD_INDENT}<enclosure url="{escape_xml(enclosure.url, cache)}" '
        f'length="{enclosure.safe_length}" '
        f'type="{escape_xml(enclosure.resolved_type, cache)}" />'
    )


def render_item(item: Optional[FeedItem], cache: Optional[EscapeCache] = None) -> str:
    """Render one ``<item>``; returns ``""`` when title or link is missing.

    A bad ``pub_date`` raises InvalidDate.
    """
    if item is None or not item.is_renderable:
        return ""

    guid = item.resolved_guid
    permalink = "true" if item.is_permalink else "false"
    parts: List[str] = [
        f"{ITEM_INDENT}<item>",
        f"{FIELD_INDENT}<title>{escape_xml(item.title, cache)}</title>",
        f"{FIELD_INDENT}<link>{escape_xml(item.link, cache)}</link>",
        f"{FIELD_INDENT}<pubDate>{format_rfc822(item.pub_date or None)}</pubDate>",
        f'{FIELD_INDENT}<guid isPermaLink="{permalink}">{escape_xml(guid, cache)}</guid>',
    ]

    if item.description:
        parts.append(f"{FIELD_INDENT}<description>{escape_xml(item.description, cache)}</description>")

    if item.content:
        parts.append(f"{FIELD_INDENT}<content:encoded>{wrap_cdata(item.content)}</content:encoded>")

    if item.category:
        category_xml = render_category(item.category, cache)
        if category_xml:
            parts.append(category_xml)

    enclosure_xml = render_enclosure(item.enclosure, cache)
    if enclosure_xml:
        parts.append(enclosure_xml)

    parts.append(f"{ITEM_INDENT}</item>")
    return "\n".join(parts)
