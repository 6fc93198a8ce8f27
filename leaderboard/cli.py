"""
Standalone fetcher that writes the latest league snapshot to a file.

Intended for scheduled runs (e.g., cron or GitHub Actions) so a static
front-end, or the web app's own cache, always has recent data.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import presenter
from .aggregator import Aggregator
from .cache import DiskCache, describe_age
from .client import RemoteClient
from .errors import InvalidInputError, LeaderboardError
from .settings import Settings
from .web import parse_league_id

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fetch FPL league standings and write them out.")
    parser.add_argument("league", help="Numeric FPL classic league id.")
    parser.add_argument(
        "--format",
        default="json",
        help="Output format: json, csv or html (default: json).",
    )
    parser.add_argument(
        "--output",
        default=None,
        help="Path to write the rendered snapshot (default: stdout).",
    )
    parser.add_argument(
        "--refresh",
        action="store_true",
        help="Ignore a fresh cache entry and call the FPL API.",
    )
    parser.add_argument(
        "--cache-dir",
        default=None,
        help="Cache directory (default: FPL_CACHE_DIR or ./cache).",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    args = parse_args(argv)
    settings = Settings.from_env()

    try:
        league_id = parse_league_id(args.league)
    except InvalidInputError as exc:
        logger.error("%s", exc)
        return 2
    if league_id is None:
        logger.error("A league id is required.")
        return 2

    cache = DiskCache(args.cache_dir or settings.cache_dir)
    fmt = presenter.normalize_format(args.format)

    with RemoteClient(settings.api_base, timeout=settings.api_timeout) as client:
        aggregator = Aggregator(client, cache, ttl=settings.cache_ttl)
        try:
            snapshot = aggregator.assemble(league_id, force_refresh=args.refresh)
        except LeaderboardError as exc:
            logger.error("Failed to fetch league data: %s", exc)
            return 1

    if snapshot.is_stale:
        logger.warning("%s", snapshot.error)

    body = presenter.render(
        snapshot,
        fmt,
        cache_age=describe_age(cache.age(league_id)),
        cooldown=settings.refresh_cooldown,
    )

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(body)
        logger.info(
            "Snapshot written to %s (league %s, gameweek %s)",
            output_path,
            league_id,
            snapshot.current_gameweek,
        )
    else:
        sys.stdout.buffer.write(body)
        sys.stdout.buffer.write(b"\n")

    return 0


if __name__ == "__main__":
    sys.exit(main())
