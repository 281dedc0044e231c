"""XML escaping with a memoized raw → escaped mapping.

The default cache is process-wide, built on first use and never cleared.
Pass an explicit ``EscapeCache`` (optionally bounded) to scope it to one call.
"""
import threading
from collections import OrderedDict
from typing import Any, Optional

# Ampersand first so entities added by later steps are not re-escaped.
_REPLACEMENTS = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
)


class EscapeCache:
    """Thread-safe mapping from raw text to its escaped form.

    With ``maxsize=None`` the cache grows without bound. Otherwise the oldest
    inserted entries are evicted once ``maxsize`` is exceeded.
    """

    def __init__(self, maxsize: Optional[int] = None):
        if maxsize is not None and maxsize < 1:
            raise ValueError("maxsize must be a positive integer or None")
        self.maxsize = maxsize
        self._data: "OrderedDict[str, str]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, raw: str) -> Optional[str]:
        return self._data.get(raw)

    def put(self, raw: str, escaped: str) -> str:
        """Store ``escaped`` unless another caller beat us to it; return the stored value."""
        with self._lock:
            existing = self._data.get(raw)
            if existing is not None:
                return existing
            self._data[raw] = escaped
            if self.maxsize is not None and len(self._data) > self.maxsize:
                self._data.popitem(last=False)
            return escaped

    def __contains__(self, raw: str) -> bool:
        return raw in self._data

    def __len__(self) -> int:
        return len(self._data)


_default_cache: Optional[EscapeCache] = None
_default_lock = threading.Lock()


def default_cache() -> EscapeCache:
    """Return the process-wide cache, creating it on first use."""
    global _default_cache
    if _default_cache is None:
        with _default_lock:
            if _default_cache is None:
                _default_cache = EscapeCache()
    return _default_cache


def _escape(raw: str) -> str:
    for char, entity in _REPLACEMENTS:
        raw = raw.replace(char, entity)
    return raw


def escape_xml(text: Any, cache: Optional[EscapeCache] = None) -> str:
    """Escape text for XML element content and double-quoted attributes.

    Empty or missing input gives ``""``. Results are memoized by the exact raw
    string, so repeated input returns the very same object.
    """
    if not text:
        return ""
    raw = text if isinstance(text, str) else str(text)
    store = cache if cache is not None else default_cache()
    cached = store.get(raw)
    if cached is not None:
        return cached
    return store.put(raw, _escape(raw))
