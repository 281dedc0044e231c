"""Data models for rssbuilder."""
import math
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence, Union

from rssbuilder.dates import DateLike

DEFAULT_ENCLOSURE_TYPE = "image/jpeg"
DEFAULT_LANGUAGE = "en"

Category = Union[str, Sequence[str]]


def _pick(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first key present in ``data`` (camelCase or snake_case spelling)."""
    for key in keys:
        if key in data:
            return data[key]
    return default


def normalize_length(length: Any) -> int:
    """Enclosure byte size: non-negative numbers and digit strings pass, everything else is 0."""
    if isinstance(length, bool):
        return 0
    if isinstance(length, int):
        return length if length >= 0 else 0
    if isinstance(length, float):
        return int(length) if math.isfinite(length) and length >= 0 else 0
    if isinstance(length, str) and length.strip().isdigit():
        return int(length.strip())
    return 0


@dataclass
class Enclosure:
    url: str
    length: Any = 0
    type: Optional[str] = None

    @property
    def safe_length(self) -> int:
        return normalize_length(self.length)

    @property
    def resolved_type(self) -> str:
        return self.type or DEFAULT_ENCLOSURE_TYPE

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Enclosure":
        return cls(
            url=data.get("url") or "",
            length=data.get("length", 0),
            type=data.get("type"),
        )


def coerce_enclosure(value: Any) -> Optional[Enclosure]:
    """Enclosures pass, mappings are converted, anything else (a bare URL string, say) is dropped."""
    if isinstance(value, Enclosure):
        return value
    if isinstance(value, Mapping):
        return Enclosure.from_dict(value)
    return None

@dataclass
class FeedItem:
    title: str
    link: str
    pub_date: Optional[DateLike] = None  # None renders as "now"
    guid: Optional[str] = None
    description: Optional[str] = None
    content: Optional[str] = None  # embedded via CDATA
    category: Optional[Category] = None
    enclosure: Optional[Enclosure] = None

    @property
    def is_renderable(self) -> bool:
        return bool(self.title) and bool(self.link)

    @property
    def resolved_guid(self) -> str:
        return self.guid or self.link

    @property
    def is_permalink(self) -> bool:
        return self.resolved_guid == self.link

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FeedItem":
        """Build an item from a mapping; accepts ``pubDate`` or ``pub_date``."""
        return cls(
            title=data.get("title") or "",
            link=data.get("link") or "",
            pub_date=_pick(data, "pub_date", "pubDate"),
            guid=data.get("guid"),
            description=data.get("description"),
            content=data.get("content"),
            category=data.get("category"),
            enclosure=coerce_enclosure(data.get("enclosure")),
        )


@dataclass
class FeedChannel:
    title: str
    description: str
    site: str
    feed_url: str
    items: List[Optional[FeedItem]] = field(default_factory=list)
    language: Optional[str] = None
    # Trusted, pre-formed XML inserted without escaping. Callers sanitize it.
    custom_data: Optional[str] = None

    REQUIRED_FIELDS = ("title", "description", "site", "feed_url")

    @property
    def missing_fields(self) -> List[str]:
        return [name for name in self.REQUIRED_FIELDS if not getattr(self, name)]

    @property
    def resolved_language(self) -> str:
        return self.language or DEFAULT_LANGUAGE

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FeedChannel":
        """Build a channel from a mapping; item mappings are converted too."""
        items = [
            FeedItem.from_dict(i) if isinstance(i, Mapping) else i
            for i in (data.get("items") or [])
        ]
        return cls(
            title=data.get("title") or "",
            description=data.get("description") or "",
            site=data.get("site") or "",
            feed_url=_pick(data, "feed_url", "feedUrl", default="") or "",
            items=items,
            language=data.get("language"),
            custom_data=_pick(data, "custom_data", "customData"),
        )
