"""IMAX Melbourne scraper."""

import logging
from datetime import date
from typing import Any
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from cinefeed.schemas.feed import VenueResult
from cinefeed.scrapers.base import BaseScraper
from cinefeed.scrapers.browser import BrowserSession
from cinefeed.scrapers.models import RawListing

logger = logging.getLogger(__name__)

BASE_URL = "https://imaxmelbourne.com.au"


class ImaxScraper(BaseScraper):
    """
    Scraper for IMAX Melbourne (Melbourne Museum).

    The session page groups films under ``div.session-day[data-date]``.
    Each ``li.session`` is one screening; ``premium`` on the item marks the
    laser/premium-format slots, which are reported in ``premium_times`` as
    well as ``times``.
    """

    name = "IMAX Melbourne"
    url = f"{BASE_URL}/session_times_and_tickets"

    async def fetch(
        self,
        target_date: date,
        browser: BrowserSession | None,
        today: date | None = None,
    ) -> Any:
        page = self.require_browser(browser)
        return await page.render(self.url, wait_selector=".session-day")

    def extract(self, source: Any, target_date: date, today: date | None = None) -> VenueResult:
        soup = BeautifulSoup(source, "html.parser")
        day = soup.select_one(f'div.session-day[data-date="{target_date.isoformat()}"]')
        if day is None:
            logger.debug(f"IMAX Melbourne: No sessions listed for {target_date}")
            return self.build_result([], target_date, today)

        listings: list[RawListing] = []
        for movie in day.select("div.movie"):
            try:
                listing = self._parse_movie(movie)
                if listing:
                    listings.append(listing)
            except Exception as e:
                logger.warning(f"IMAX Melbourne: Failed to parse movie: {e}")

        return self.build_result(listings, target_date, today)

    def _parse_movie(self, movie: Tag) -> RawListing | None:
        title_elem = movie.select_one(".movie-title")
        if not title_elem:
            return None

        title = title_elem.get_text(strip=True)
        if not title:
            return None

        link = title_elem.find("a")
        href = link.get("href") if link else None

        times: list[str] = []
        premium_times: list[str] = []
        for item in movie.select("li.session"):
            time_elem = item.find("a") or item.find("time")
            if not time_elem:
                continue
            time_text = time_elem.get_text(strip=True)
            if not time_text:
                continue
            times.append(time_text)
            if "premium" in (item.get("class") or []):
                premium_times.append(time_text)

        return RawListing(
            title=title,
            times=times,
            url=urljoin(BASE_URL, href) if href else None,
            premium_times=premium_times,
        )
