"""YAML/JSON entries file loader."""
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import yaml

from rssbuilder.config import normalize_keys

logger = logging.getLogger(__name__)


@dataclass
class EntriesFile:
    entries: List[Dict[str, Any]]
    channel: Dict[str, Any] = field(default_factory=dict)
    fields: Dict[str, str] = field(default_factory=dict)


def load_entries_file(path: str) -> EntriesFile:
    """Load feed entries from a YAML or JSON file.

    Expected format (YAML):
        channel:
          title: My Blog
          site: https://example.com
        fields:
          link: url
        entries:
          - title: Hello
            url: https://example.com/hello
            pubDate: 2024-01-01
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Entries file not found: {path}")

    content = p.read_text(encoding="utf-8")

    if p.suffix in (".yaml", ".yml"):
        data = yaml.safe_load(content)
    elif p.suffix == ".json":
        data = json.loads(content)
    else:
        raise ValueError(f"Unsupported entries file format: {p.suffix} (use .yaml, .yml, or .json)")

    if not isinstance(data, dict) or "entries" not in data:
        raise ValueError("Entries file must contain a top-level 'entries' key with a list of entries")

    entries = data["entries"]
    if not isinstance(entries, list):
        raise ValueError("'entries' must be a list")

    for i, e in enumerate(entries):
        if not isinstance(e, dict):
            raise ValueError(f"Entry #{i+1} must be a mapping")

    channel = data.get("channel") or {}
    if not isinstance(channel, dict):
        raise ValueError("'channel' must be a mapping")
    fields = data.get("fields") or {}
    if not isinstance(fields, dict):
        raise ValueError("'fields' must be a mapping")

    logger.info(f"[Entries] Loaded {len(entries)} entries from {path}")
    return EntriesFile(
        entries=entries,
        channel=normalize_keys(channel),
        fields={str(k): str(v) for k, v in fields.items()},
    )
