"""Exceptions raised by rssbuilder."""
from typing import Any, List


class RSSBuilderError(Exception):
    """Base class for all rssbuilder errors."""


class MissingRequiredField(RSSBuilderError, ValueError):
    """A mandatory channel field (title, description, site, feed_url) is empty."""

    def __init__(self, fields: List[str]):
        self.fields = list(fields)
        super().__init__(f"Missing required RSS options: {', '.join(self.fields)}")


class InvalidDate(RSSBuilderError, ValueError):
    """A timestamp could not be resolved to a point in time."""

    def __init__(self, value: Any, reason: str = ""):
        self.value = value
        msg = f"Invalid date: {value!r}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)
