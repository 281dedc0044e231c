"""Make arbitrary text safe to wrap in ``<![CDATA[ ... ]]>``."""
import re
from typing import Any

# C0 and C1 controls, keeping tab, newline and carriage return.
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F-\x9F]")

CDATA_END = "]]>"
ESCAPED_CDATA_END = "]]&gt;"


def clean_cdata(content: Any) -> str:
    """Sanitize text for a CDATA section.

    Previously escaped terminators are restored first, so running this twice
    gives the same result as running it once.
    """
    if content is None:
        return ""
    text = content if isinstance(content, str) else str(content)
    text = text.replace(ESCAPED_CDATA_END, CDATA_END)
    text = _CONTROL_CHARS.sub("", text)
    return text.replace(CDATA_END, ESCAPED_CDATA_END)


def wrap_cdata(content: Any) -> str:
    return f"<![CDATA[{clean_cdata(content)}]]>"
