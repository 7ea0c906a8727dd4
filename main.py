#!/usr/bin/env python3
"""mirrorseek: CLI torrent search across Pirate Bay mirrors."""

import argparse
import json
import sys

from mirrorseek.config import AppConfig, ConfigManager
from mirrorseek.exceptions import MirrorseekError
from mirrorseek.log import setup_logging
from mirrorseek.mirrors import MirrorDirectory, MirrorResolver
from mirrorseek.models import Mirror, Torrent, VideoQuality
from mirrorseek.search import filter_torrents, find_title_torrents
from mirrorseek.sources import PirateBayScraper


def load_config(args) -> AppConfig:
    """Load the config file and apply command line overrides."""
    config = ConfigManager(args.config).load()

    if getattr(args, "source_url", None):
        config.source_url = args.source_url

    filters = config.search_filters
    if getattr(args, "min_size", None):
        filters.min_size = args.min_size
    if getattr(args, "max_size", None):
        filters.max_size = args.max_size
    if getattr(args, "verified", False):
        filters.verified_uploader = True
    if getattr(args, "quality", None):
        filters.quality = VideoQuality.parse(args.quality)

    # Malformed sizes must fail before any request is made
    filters.validate()
    return config


def build_resolver(config: AppConfig) -> MirrorResolver:
    directory = MirrorDirectory(
        filters=config.mirror_filters, source_url=config.proxy_source_url
    )
    return MirrorResolver(directory, fallback_mirror=config.fallback_mirror)


def print_mirrors(mirrors: list[Mirror]):
    """Display mirrors with their reported status."""
    print(f"{'':3} {'Country':8} URL")
    for m in mirrors:
        status = "x" if m.status else ""
        print(f"{status:3} {m.country:8} {m.url}")


def print_torrents(torrents: list[Torrent], magnet: bool = False):
    """Display torrents in a formatted list."""
    for i, t in enumerate(torrents, 1):
        quality = f" [{t.video_quality.value}]" if t.video_quality.value else ""
        verified = " ✓" if t.verified_uploader else ""
        print(f"[{i}] {t.title}{quality} ({t.size_formatted}) - {t.peers_string}{verified}")
        print(f"    {t.magnet if magnet else t.full_url}")


def output(items, as_json: bool, printer, **kwargs):
    if as_json:
        print(json.dumps([item.to_dict() for item in items], indent=3))
    else:
        printer(items, **kwargs)


def cmd_mirrors(args):
    """Handle the mirrors command."""
    config = load_config(args)
    directory = MirrorDirectory(
        filters=config.mirror_filters, source_url=config.proxy_source_url
    )
    output(directory.get_mirrors(), args.json, print_mirrors)


def cmd_search(args):
    """Handle the search command."""
    config = load_config(args)
    query = " ".join(args.query)
    filters = config.search_filters

    if args.mirror:
        torrents = PirateBayScraper(args.mirror).search(query)
    else:
        print(f"Searching for '{query}'...", file=sys.stderr)
        _, torrents = build_resolver(config).resolve(query)

    torrents = filter_torrents(torrents, filters)
    if filters.quality is not None:
        torrents = [t for t in torrents if t.video_quality == filters.quality]

    if args.number > 0:
        torrents = torrents[: args.number]

    if not torrents and not args.json:
        print(f"No results for '{query}'")
        return

    output(torrents, args.json, print_torrents, magnet=args.magnet)


def cmd_movie(args):
    """Handle the movie command: one torrent per video quality."""
    config = load_config(args)
    title = " ".join(args.title)

    if args.mirror:
        scraper = PirateBayScraper(args.mirror)
    else:
        print(f"Finding a mirror for '{title}'...", file=sys.stderr)
        scraper = build_resolver(config).find_scraper(title)

    torrents = find_title_torrents(
        scraper, config.search_filters, title, args.year, args.alt_title
    )

    if not torrents and not args.json:
        print(f"No torrents for '{title}'")
        return

    output(torrents, args.json, print_torrents, magnet=args.magnet)


def add_filter_arguments(parser):
    parser.add_argument("--min-size", help="Minimum size, e.g. 500MB")
    parser.add_argument("--max-size", help="Maximum size, e.g. 4GB")
    parser.add_argument(
        "--verified", action="store_true", help="Only VIP or trusted uploaders"
    )
    parser.add_argument(
        "--quality",
        choices=[q.name.lower() for q in VideoQuality] + [q.value for q in VideoQuality if q.value],
        help="Only this video quality",
    )
    parser.add_argument("--mirror", help="Search this mirror instead of resolving one")
    parser.add_argument("--source-url", help="Override the proxy list URL")
    parser.add_argument("--magnet", action="store_true", help="Print magnet links")
    parser.add_argument("--json", action="store_true", help="Output JSON")


COMMANDS = {"mirrors", "search", "movie"}


def insert_default_command(argv: list[str]) -> None:
    """Insert `search` after the global options when no command is given."""
    i = 1
    while i < len(argv):
        arg = argv[i]
        if arg in ("-h", "--help") or arg in COMMANDS:
            return
        if arg in ("-v", "--verbose"):
            i += 1
        elif arg == "--config":
            i += 2
        elif arg.startswith("--config="):
            i += 1
        else:
            break
    if i < len(argv):
        argv.insert(i, "search")


def main():
    parser = argparse.ArgumentParser(
        description="mirrorseek: CLI torrent search across Pirate Bay mirrors",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--config", help="Path to the configuration file")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    mirrors_parser = subparsers.add_parser("mirrors", help="List Pirate Bay mirrors")
    mirrors_parser.add_argument("--source-url", help="Override the proxy list URL")
    mirrors_parser.add_argument("--json", action="store_true", help="Output JSON")
    mirrors_parser.set_defaults(func=cmd_mirrors)

    search_parser = subparsers.add_parser("search", help="Search for torrents")
    search_parser.add_argument("query", nargs="+", help="Search query")
    search_parser.add_argument(
        "-n", "--number", type=int, default=0, help="Number of results (default: all)"
    )
    add_filter_arguments(search_parser)
    search_parser.set_defaults(func=cmd_search)

    movie_parser = subparsers.add_parser(
        "movie", help="Best torrent per video quality for a title"
    )
    movie_parser.add_argument("title", nargs="+", help="Movie title")
    movie_parser.add_argument("-y", "--year", type=int, help="Release year")
    movie_parser.add_argument("--alt-title", help="Alternative title to try")
    add_filter_arguments(movie_parser)
    movie_parser.set_defaults(func=cmd_movie)

    # Handle backwards compatibility - if first arg isn't a known command, assume search
    insert_default_command(sys.argv)

    args = parser.parse_args()
    setup_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    try:
        args.func(args)
    except (MirrorseekError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
