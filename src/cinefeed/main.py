"""Command-line entry point: scrape every venue and write the feed."""

import argparse
import asyncio
import logging
import sys

from cinefeed.config import settings
from cinefeed.scrapers import SCRAPER_REGISTRY
from cinefeed.tasks.scrape_job import run_scrape_all, write_feed
from cinefeed.utils.dates import date_for_offset, display_date

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Scrape Melbourne cinema showtimes into a JSON feed."
    )
    parser.add_argument(
        "--days",
        type=int,
        default=settings.days_to_scrape,
        metavar="N",
        help=f"Days to scrape starting today (default: {settings.days_to_scrape})",
    )
    parser.add_argument(
        "--output",
        default=settings.output_path,
        metavar="PATH",
        help=f"Where to write the feed (default: {settings.output_path})",
    )
    parser.add_argument(
        "--venue",
        action="append",
        choices=list(SCRAPER_REGISTRY),
        dest="venues",
        help="Only scrape this venue (repeatable; default: all)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug output",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(message)s",
    )

    logger.info("Melbourne Cinema Scraper")
    logger.info(f"Today: {display_date(date_for_offset(0))}")

    if not settings.tmdb_api_key:
        logger.error("TMDB_API_KEY environment variable not set")
        sys.exit(1)

    if args.days < 1:
        logger.error("--days must be at least 1")
        sys.exit(2)

    feed = asyncio.run(run_scrape_all(days=args.days, venues=args.venues))
    write_feed(feed, args.output)
    sys.exit(0)


if __name__ == "__main__":
    main()
