"""Map an arbitrary collection of entries onto feed items.

Each entry goes through a fixed set of extraction hooks. The required hooks
always run; an optional hook left as ``None`` means the field does not apply.
"""
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, Mapping, Optional, TypeVar

from rssbuilder.escape import EscapeCache
from rssbuilder.feed import generate_rss
from rssbuilder.models import FeedChannel, FeedItem, coerce_enclosure

T = TypeVar("T")

# Canonical field → source key used when mapping plain dict entries.
DEFAULT_FIELDS = {
    "title": "title",
    "link": "link",
    "description": "description",
    "content": "content",
    "pub_date": "pubDate",
    "category": "category",
    "guid": "guid",
    "enclosure": "enclosure",
}


@dataclass
class FeedMappers(Generic[T]):
    title: Callable[[T], Any]
    link: Callable[[T], Any]
    description: Callable[[T], Any]
    content: Callable[[T], Any]
    pub_date: Callable[[T], Any]
    category: Optional[Callable[[T], Any]] = None
    guid: Optional[Callable[[T], Any]] = None
    enclosure: Optional[Callable[[T], Any]] = None

    @classmethod
    def from_fields(cls, fields: Optional[Mapping[str, str]] = None) -> "FeedMappers[Mapping[str, Any]]":
        """Key-lookup mappers for mapping entries.

        ``fields`` overrides source keys, e.g. ``{"link": "url"}``. ``pubDate``
        may be given as ``pub_date`` too.
        """
        keys = dict(DEFAULT_FIELDS)
        for name, key in (fields or {}).items():
            name = "pub_date" if name == "pubDate" else name
            if name not in keys:
                raise ValueError(f"Unknown feed field '{name}' (expected one of {', '.join(keys)})")
            keys[name] = key

        def lookup(key: str) -> Callable[[Mapping[str, Any]], Any]:
            return lambda entry: entry.get(key)

        def date_lookup(entry: Mapping[str, Any]) -> Any:
            value = entry.get(keys["pub_date"])
            if value is None and keys["pub_date"] == "pubDate":
                value = entry.get("pub_date")
            return value

        return cls(
            title=lookup(keys["title"]),
            link=lookup(keys["link"]),
            description=lookup(keys["description"]),
            content=lookup(keys["content"]),
            pub_date=date_lookup,
            category=lookup(keys["category"]),
            guid=lookup(keys["guid"]),
            enclosure=lookup(keys["enclosure"]),
        )


@dataclass
class CollectionFeedConfig(Generic[T]):
    title: str
    description: str
    site: str
    feed_url: str
    mappers: FeedMappers[T]
    language: Optional[str] = None
    custom_data: Optional[str] = None


def map_entry(entry: T, mappers: FeedMappers[T]) -> FeedItem:
    """Build one FeedItem from a source entry."""
    link = mappers.link(entry)
    item = FeedItem(
        title=mappers.title(entry),
        link=link,
        pub_date=mappers.pub_date(entry),
        description=mappers.description(entry),
    )

    content = mappers.content(entry)
    if content:
        item.content = content

    category = mappers.category(entry) if mappers.category else None
    if category:
        item.category = category

    guid = mappers.guid(entry) if mappers.guid else None
    item.guid = guid or link

    enclosure = mappers.enclosure(entry) if mappers.enclosure else None
    if enclosure:
        item.enclosure = coerce_enclosure(enclosure)

    return item


def build_channel(collection: Iterable[T], config: CollectionFeedConfig[T]) -> FeedChannel:
    """Map every entry with ``config.mappers`` into a channel, without rendering."""
    channel = FeedChannel(
        title=config.title,
        description=config.description,
        site=config.site,
        feed_url=config.feed_url,
        items=[map_entry(entry, config.mappers) for entry in collection],
    )
    if config.language:
        channel.language = config.language
    if config.custom_data:
        channel.custom_data = config.custom_data
    return channel


def create_rss_from_collection(
    collection: Iterable[T],
    config: CollectionFeedConfig[T],
    cache: Optional[EscapeCache] = None,
) -> str:
    """Map every entry with ``config.mappers`` and render the resulting feed."""
    return generate_rss(build_channel(collection, config), cache=cache)
