"""CLI entry point for rssbuilder."""
import argparse
import logging
import sys
from typing import Dict, List, Optional

from rssbuilder import __version__
from rssbuilder.collection import CollectionFeedConfig, FeedMappers, build_channel
from rssbuilder.feed import generate_rss
from rssbuilder.config import CHANNEL_FIELDS, channel_defaults, load_config, load_env_config
from rssbuilder.errors import RSSBuilderError


def _parse_field(value: str) -> tuple:
    """Parse a NAME=KEY field mapping like 'link=url'."""
    name, sep, key = value.partition("=")
    if not sep or not name.strip() or not key.strip():
        raise argparse.ArgumentTypeError(
            f"Invalid --field value '{value}'. Use NAME=KEY, e.g. link=url"
        )
    return name.strip(), key.strip()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rssbuilder",
        description="Build an RSS 2.0 feed from a YAML or JSON entries file",
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("entries", nargs="?", default=None,
                        help="Entries file (.yaml, .yml or .json) with a top-level 'entries' list")
    parser.add_argument("--title", type=str, default=None, help="Channel title")
    parser.add_argument("--description", type=str, default=None, help="Channel description")
    parser.add_argument("--site", type=str, default=None, help="Base site URL (channel link)")
    parser.add_argument("--feed-url", type=str, default=None, dest="feed_url",
                        help="Canonical URL of the feed itself (atom:link self)")
    parser.add_argument("--language", type=str, default=None, help="Channel language (default: en)")
    parser.add_argument("--custom-data", type=str, default=None, dest="custom_data", metavar="FILE",
                        help="File holding a trusted XML fragment inserted before the items (not escaped)")
    parser.add_argument("--field", type=_parse_field, action="append", default=None, dest="field",
                        metavar="NAME=KEY", help="Read item field NAME from entry key KEY (repeatable)")
    parser.add_argument("-o", "--output", type=str, default=None,
                        help="Write the feed to this file instead of stdout")
    parser.add_argument("--check", action="store_true",
                        help="Re-parse the generated feed and print a summary")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress status messages on stderr")
    parser.add_argument("--no-config", action="store_true",
                        help="Ignore config files (~/.rssbuilder.yaml, ./rssbuilder.yaml) and env vars")
    parser.add_argument("--init-config", action="store_true",
                        help="Write a starter ~/.rssbuilder.yaml and exit")
    return parser


def resolve_channel(args, file_channel: Dict, config: Dict) -> Dict:
    """Layer channel fields: CLI flags > entries file > env vars > config files."""
    channel = channel_defaults(config)
    channel.update({k: v for k, v in file_channel.items() if k in CHANNEL_FIELDS and v})
    for key in CHANNEL_FIELDS:
        if key == "custom_data":
            continue
        value = getattr(args, key, None)
        if value is not None:
            channel[key] = value
    if args.custom_data:
        with open(args.custom_data, "r", encoding="utf-8") as f:
            channel["custom_data"] = f.read()
    return channel


def resolve_fields(args, file_fields: Dict[str, str], config: Dict) -> Dict[str, str]:
    fields: Dict[str, str] = {}
    if isinstance(config.get("fields"), dict):
        fields.update({str(k): str(v) for k, v in config["fields"].items()})
    fields.update(file_fields)
    fields.update(dict(args.field or []))
    return fields


def check_feed(output: str, quiet: bool = False) -> bool:
    """Parse the produced feed with feedparser; print a summary table. Returns True if well-formed."""
    import feedparser
    from rich.console import Console
    from rich.table import Table

    console = Console(stderr=True)
    parsed = feedparser.parse(output.encode("utf-8"))
    if parsed.bozo:
        console.print(f"[bold red]❌ Feed is malformed:[/] {parsed.bozo_exception}")
        return False
    if quiet:
        return True

    table = Table(title=f"📡 {parsed.feed.get('title', '')} — {len(parsed.entries)} items")
    table.add_column("Title")
    table.add_column("Link", style="blue")
    table.add_column("Published", style="dim")
    for entry in parsed.entries:
        table.add_row(entry.get("title", ""), entry.get("link", ""), entry.get("published", ""))
    console.print(table)
    return True


def main(argv: Optional[List[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    config = {}
    if not args.no_config:
        from rssbuilder.config import apply_config_defaults
        config = load_config()
        config.update(load_env_config())
        args = apply_config_defaults(parser, args, config)

    if args.init_config:
        from rssbuilder.config import generate_starter_config
        path = generate_starter_config()
        print(f"✅ Wrote starter config to {path}")
        return

    if not args.entries:
        parser.error("the entries file is required")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    from rssbuilder.entries import load_entries_file
    try:
        entries_file = load_entries_file(args.entries)
    except (OSError, ValueError) as e:
        print(f"Error loading entries file: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        channel = resolve_channel(args, entries_file.channel, config)
        mappers = FeedMappers.from_fields(resolve_fields(args, entries_file.fields, config))
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    feed_config = CollectionFeedConfig(
        title=channel.get("title", ""),
        description=channel.get("description", ""),
        site=channel.get("site", ""),
        feed_url=channel.get("feed_url", ""),
        mappers=mappers,
        language=channel.get("language"),
        custom_data=channel.get("custom_data"),
    )

    feed_channel = build_channel(entries_file.entries, feed_config)
    rendered = sum(1 for item in feed_channel.items if item.is_renderable)
    try:
        output = generate_rss(feed_channel)
    except RSSBuilderError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.check and not check_feed(output, quiet=args.quiet):
        sys.exit(1)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(output)
        if not args.quiet:
            print(f"✅ Wrote {rendered} of {len(entries_file.entries)} entries to {args.output}", file=sys.stderr)
    else:
        print(output)


if __name__ == "__main__":
    main()
