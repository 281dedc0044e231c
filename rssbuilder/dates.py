"""RFC 822 date formatting for RSS ``pubDate`` / ``lastBuildDate``."""
import math
from datetime import date, datetime, timezone
from email.utils import format_datetime
from typing import Any, Optional, Union

from dateutil import parser as dateparser

from rssbuilder.errors import InvalidDate

DateLike = Union[datetime, date, str, int, float]


def to_utc(value: Any) -> datetime:
    """Resolve a timestamp value to an aware UTC datetime.

    Naive datetimes and naive parsed strings are taken as UTC, never local time.
    Raises InvalidDate for anything that is not a representable point in time.
    """
    if isinstance(value, bool):
        raise InvalidDate(value, "booleans are not timestamps")

    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    elif isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            raise InvalidDate(value, "not a finite number")
        try:
            dt = datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise InvalidDate(value, str(e)) from e
    elif isinstance(value, str):
        if not value.strip():
            raise InvalidDate(value, "empty string")
        try:
            dt = dateparser.parse(value)
        except (ValueError, OverflowError) as e:
            raise InvalidDate(value, str(e)) from e
    else:
        raise InvalidDate(value, f"unsupported type {type(value).__name__}")

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    try:
        return dt.astimezone(timezone.utc)
    except (OverflowError, ValueError) as e:
        raise InvalidDate(value, str(e)) from e


def format_rfc822(value: Optional[DateLike] = None) -> str:
    """Format a timestamp as ``Wed, 02 Oct 2002 13:00:00 GMT``.

    ``None`` means the current time.
    """
    dt = datetime.now(tz=timezone.utc) if value is None else to_utc(value)
    return format_datetime(dt, usegmt=True)
