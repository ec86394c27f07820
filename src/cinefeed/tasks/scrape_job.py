"""Scrape job that builds the showtimes feed for every configured day and venue."""

import logging
from contextlib import AsyncExitStack
from datetime import date, datetime, timezone
from pathlib import Path

from cinefeed.config import settings
from cinefeed.schemas.feed import DayResult, Feed, VenueResult
from cinefeed.scrapers import BaseScraper, get_scrapers
from cinefeed.scrapers.browser import BrowserSession
from cinefeed.services.enrichment import Enricher
from cinefeed.services.metadata import MetadataLookup
from cinefeed.utils.dates import date_for_offset, display_date, venue_today

logger = logging.getLogger(__name__)


async def build_feed(
    scrapers: list[BaseScraper],
    enricher: Enricher,
    days: int,
    browser: BrowserSession | None = None,
    today: date | None = None,
) -> Feed:
    """
    Scrape and enrich every venue for each day, in configured order.

    Venues run one at a time. A venue that fails still appears in the day's
    results, with no sessions.

    Args:
        scrapers: Venue scrapers in output order
        enricher: Enricher holding this run's metadata cache
        days: Number of venue-local days to scrape, starting today
        browser: Shared browser session for rendered venues
        today: Venue-local today (computed if not given)

    Returns:
        The complete feed
    """
    today = today or venue_today()
    day_results: list[DayResult] = []

    for day_offset in range(days):
        target_date = date_for_offset(day_offset, today)
        logger.info(f"Scraping for: {display_date(target_date)} ({target_date.isoformat()})")

        cinemas: list[VenueResult] = []
        for scraper in scrapers:
            try:
                venue = await scraper.get_sessions(target_date, browser, today)
                cinemas.append(await enricher.enrich_venue(venue))
            except Exception as e:
                logger.error(f"Error scraping {scraper.name}: {e}", exc_info=True)
                cinemas.append(scraper.empty_result(target_date, today))

        day_results.append(
            DayResult(
                date=display_date(target_date),
                date_key=target_date.isoformat(),
                cinemas=cinemas,
            )
        )

    return Feed(generated_at=datetime.now(timezone.utc), days=day_results)


async def run_scrape_all(
    days: int | None = None,
    venues: list[str] | None = None,
) -> Feed:
    """Run a full scrape with a fresh metadata cache and one shared browser page.

    Args:
        days: Days to scrape (defaults to settings.days_to_scrape)
        venues: Venue keys to scrape (defaults to settings.enabled_venues, then all)
    """
    days = days or settings.days_to_scrape
    scrapers = get_scrapers(venues or settings.enabled_venues)
    logger.info(f"Scraping {len(scrapers)} cinemas for {days} day(s)")

    enricher = Enricher(MetadataLookup())
    async with AsyncExitStack() as stack:
        browser = await start_browser(stack)
        feed = await build_feed(scrapers, enricher, days, browser=browser)

    log_summary(feed)
    return feed


async def start_browser(stack: AsyncExitStack) -> BrowserSession | None:
    """
    Open the shared browser inside ``stack``.

    Returns None if Chromium cannot start; venues that render pages then come
    back empty and the API/HTTP venues still run.
    """
    try:
        return await stack.enter_async_context(BrowserSession())
    except Exception as e:
        logger.error(f"Could not start browser, rendered venues will be empty: {e}", exc_info=True)
        return None


def write_feed(feed: Feed, output_path: str | Path) -> Path:
    """Write the feed as JSON, replacing any previous file."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(feed.model_dump_json(by_alias=True, indent=2), encoding="utf-8")
    logger.info(f"Wrote feed to {path}")
    return path


def log_summary(feed: Feed) -> None:
    for day in feed.days:
        total = sum(len(c.sessions) for c in day.cinemas)
        logger.info(f"{day.date}: {len(day.cinemas)} cinemas, {total} films")
        for cinema in day.cinemas:
            logger.info(f"    {cinema.cinema}: {len(cinema.sessions)} films")
