"""Base scraper interface for all cinema scrapers."""

import logging
from abc import ABC, abstractmethod
from datetime import date
from typing import Any

from cinefeed.schemas.feed import VenueResult
from cinefeed.scrapers.browser import BrowserSession
from cinefeed.scrapers.models import RawListing, group_listings
from cinefeed.utils.dates import venue_today

logger = logging.getLogger(__name__)


class BaseScraper(ABC):
    """
    Abstract base class for all cinema scrapers.

    Scraping is split in two:

    - ``fetch`` gets the raw source for one day (JSON from an API, HTML from
      httpx or from the shared browser page).
    - ``extract`` turns that source into a ``VenueResult``. It does no I/O,
      so each venue can be tested against a captured sample.

    ``get_sessions`` runs both and never raises.
    """

    name: str = ""
    url: str = ""
    note: str | None = None

    async def get_sessions(
        self,
        target_date: date,
        browser: BrowserSession | None = None,
        today: date | None = None,
    ) -> VenueResult:
        """
        Scrape this venue for one day.

        Args:
            target_date: Venue-local day to scrape
            browser: Shared browser session for venues that need rendering
            today: Venue-local today (computed if not given)

        Returns:
            The venue's sessions; empty if anything went wrong
        """
        logger.info(f"Scraping {self.name} for {target_date.isoformat()}...")
        try:
            source = await self.fetch(target_date, browser, today)
            result = self.extract(source, target_date, today)
        except Exception as e:
            logger.error(f"{self.name} scraper error: {e}", exc_info=True)
            return self.empty_result(target_date, today)

        logger.info(f"{self.name}: Found {len(result.sessions)} films")
        return result

    @abstractmethod
    async def fetch(
        self,
        target_date: date,
        browser: BrowserSession | None,
        today: date | None = None,
    ) -> Any:
        """
        Fetch the raw source for ``target_date``.

        May raise; ``get_sessions`` handles it.
        """

    @abstractmethod
    def extract(self, source: Any, target_date: date, today: date | None = None) -> VenueResult:
        """
        Parse a fetched source into this venue's sessions for ``target_date``.

        Malformed listings are skipped. Markup that can't be understood at
        all gives an empty result rather than an exception.
        """

    def landing_url(self, target_date: date, today: date | None = None) -> str:
        """Venue page reported in the feed and used when a film has no link."""
        return self.url

    def empty_result(self, target_date: date, today: date | None = None) -> VenueResult:
        return VenueResult(
            cinema=self.name,
            url=self.landing_url(target_date, today),
            sessions=[],
            note=self.note,
        )

    def build_result(
        self,
        listings: list[RawListing],
        target_date: date,
        today: date | None = None,
    ) -> VenueResult:
        """Group raw listings by title and wrap them in a ``VenueResult``."""
        url = self.landing_url(target_date, today)
        return VenueResult(
            cinema=self.name,
            url=url,
            sessions=group_listings(listings, fallback_url=url),
            note=self.note,
        )

    def resolve_today(self, today: date | None) -> date:
        return today or venue_today()

    def require_browser(self, browser: BrowserSession | None) -> BrowserSession:
        if browser is None:
            raise RuntimeError(f"{self.name} needs a browser session to render its page")
        return browser
