"""Config file support for rssbuilder.

Loads channel defaults and CLI defaults from:
  1. ~/.rssbuilder.yaml  (user-level)
  2. ./rssbuilder.yaml   (project-level, overrides user-level)

Example config file:

    # ./rssbuilder.yaml
    title: My Blog
    description: Latest posts
    site: https://example.com
    feed-url: https://example.com/feed.xml
    language: en-GB
    output: public/feed.xml
    fields:
      link: url
      pubDate: date
"""
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)

CHANNEL_FIELDS = ("title", "description", "site", "feed_url", "language", "custom_data")

_BOOL_FIELDS = {"verbose", "quiet", "check"}
_STR_FIELDS = {"output"} | set(CHANNEL_FIELDS)

USER_CONFIG_FILES = (".rssbuilder.yaml", ".rssbuilder.yml")
PROJECT_CONFIG_FILES = ("rssbuilder.yaml", "rssbuilder.yml")


def normalize_keys(data: Dict[Any, Any]) -> Dict[str, Any]:
    """Stringify keys, dashes → underscores, camelCase channel keys → snake_case."""
    aliases = {"feedUrl": "feed_url", "customData": "custom_data"}
    normalized = {}
    for key, value in data.items():
        key = str(key)
        normalized[aliases.get(key, key.replace("-", "_"))] = value
    return normalized


def config_paths() -> List[Path]:
    """Config files in merge order: user-level first, project-level last."""
    home = Path.home()
    return [home / name for name in USER_CONFIG_FILES] + [Path(name) for name in PROJECT_CONFIG_FILES]


def read_config_file(path: Path) -> Dict[str, Any]:
    """Parse one YAML config file. An empty file is an empty config.

    Raises ValueError when the top level is not a mapping.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"top level is a {type(data).__name__}, expected a mapping")
    return normalize_keys(data)


def load_config() -> Dict[str, Any]:
    """Merge every config file that exists; unreadable ones are skipped with a warning."""
    config: Dict[str, Any] = {}
    for path in config_paths():
        if not path.is_file():
            continue
        try:
            config.update(read_config_file(path))
        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.warning(f"[Config] Skipping {path}: {e}")
            continue
        logger.debug(f"[Config] Loaded {path}")
    return config


def load_env_config() -> Dict[str, Any]:
    """Load config from RSSBUILDER_* environment variables.

    Maps RSSBUILDER_TITLE=Blog → title=Blog, RSSBUILDER_FEED_URL=... → feed_url=..., etc.
    Boolean vars: RSSBUILDER_QUIET=1, RSSBUILDER_CHECK=true, etc.
    """
    prefix = "RSSBUILDER_"
    config: Dict[str, Any] = {}
    for key, value in os.environ.items():
        if not key.startswith(prefix):
            continue
        field = key[len(prefix):].lower()
        if field in _BOOL_FIELDS:
            config[field] = value.lower() in ("1", "true", "yes", "on")
        elif field in _STR_FIELDS:
            config[field] = value
    return config


def channel_defaults(config: Dict[str, Any]) -> Dict[str, Any]:
    """The channel fields found in a merged config, skipping empty values."""
    return {k: config[k] for k in CHANNEL_FIELDS if config.get(k)}


def apply_config_defaults(parser, args, config: Dict[str, Any] = None):
    """Apply config defaults to unset CLI flags (CLI always wins).

    Priority: CLI flags > env vars (RSSBUILDER_*) > config files > parser defaults.
    Channel fields are not touched here; they are layered by the CLI.
    """
    if config is None:
        config = load_config()
        config.update(load_env_config())
    if not config:
        return args

    for key, value in config.items():
        if key in CHANNEL_FIELDS or not hasattr(args, key):
            continue
        current = getattr(args, key)
        default = parser.get_default(key)
        if current != default:
            continue  # User explicitly set it, don't override

        if key in _BOOL_FIELDS:
            setattr(args, key, bool(value))
        elif key in _STR_FIELDS:
            setattr(args, key, str(value))

    return args


_STARTER_CONFIG = """\
# rssbuilder configuration — customize your defaults here.
# CLI flags and the entries file's `channel` block override these values.

# Channel metadata (all four are required to build a feed)
# title: My Blog
# description: Latest posts
# site: https://example.com
# feed-url: https://example.com/feed.xml

# Channel language (default: en)
# language: en

# Where to write the feed (default: stdout)
# output: feed.xml

# Re-parse the generated feed and show a summary
# check: false

# Rename source keys used to fill item fields
# fields:
#   link: url
#   pubDate: date
"""


def generate_starter_config(directory: Optional[Path] = None) -> Path:
    """Write the starter config into ``directory`` (default: home).

    An existing file is never overwritten; the starter goes next to it with a
    ``.new`` suffix instead.
    """
    target = (directory or Path.home()) / USER_CONFIG_FILES[0]
    if target.exists():
        target = target.with_name(target.name + ".new")
    target.write_text(_STARTER_CONFIG, encoding="utf-8")
    logger.info(f"[Config] Wrote starter config to {target}")
    return target
