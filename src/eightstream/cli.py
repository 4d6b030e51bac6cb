import argparse
import asyncio
import json
import logging
import sys
from dataclasses import replace

from eightstream.config import Settings
from eightstream.source import get_streams


def build_parser():
    parser = argparse.ArgumentParser(description="Resolve 8Stream playback URLs for a TMDB title")
    parser.add_argument("tmdb_id", help="TMDB id of the movie or show")
    parser.add_argument("--type", dest="media_type", choices=["movie", "tv"], default="movie", help="Media type")
    parser.add_argument("--season", type=int, default=1, help="Season number (tv)")
    parser.add_argument("--episode", type=int, default=1, help="Episode number (tv)")
    parser.add_argument("--api-key", help="TMDB API key (defaults to TMDB_API_KEY)")
    parser.add_argument("--proxy", help="Forward proxy base URL (defaults to EIGHTSTREAM_PROXY_URL)")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = Settings.from_env()
    if args.proxy:
        settings = replace(settings, proxy_url=args.proxy)

    season = args.season if args.media_type == "tv" else None
    episode = args.episode if args.media_type == "tv" else None
    results = asyncio.run(get_streams(
        args.tmdb_id, args.media_type, season, episode, args.api_key, settings=settings,
    ))

    if args.json:
        print(json.dumps([r.to_dict() for r in results], indent=2))
    else:
        for r in results:
            print(f"{r.quality:<10} {r.url}")
    return 0 if results else 1


if __name__ == "__main__":
    sys.exit(main())
