"""rssbuilder — turn in-memory feed entries into an RSS 2.0 document."""
__version__ = "1.0.0"

from rssbuilder.cdata import clean_cdata
from rssbuilder.collection import CollectionFeedConfig, FeedMappers, create_rss_from_collection
from rssbuilder.dates import format_rfc822
from rssbuilder.errors import InvalidDate, MissingRequiredField, RSSBuilderError
from rssbuilder.escape import EscapeCache, escape_xml
from rssbuilder.feed import generate_rss
from rssbuilder.models import Enclosure, FeedChannel, FeedItem
from rssbuilder.render import render_category, render_item

__all__ = [
    "CollectionFeedConfig", "EscapeCache", "Enclosure", "FeedChannel", "FeedItem",
    "FeedMappers", "InvalidDate", "MissingRequiredField", "RSSBuilderError",
    "clean_cdata", "create_rss_from_collection", "escape_xml", "format_rfc822",
    "generate_rss", "render_category", "render_item",
]
