"""Eclipse Cinema scraper (Veezi session-time widget)."""

import logging
import re
from datetime import date
from typing import Any

from bs4 import BeautifulSoup, Tag

from cinefeed.schemas.feed import VenueResult
from cinefeed.scrapers.base import BaseScraper
from cinefeed.scrapers.browser import BrowserSession
from cinefeed.scrapers.models import RawListing

logger = logging.getLogger(__name__)

_TIME_RE = re.compile(r"^\d{1,2}:\d{2}$")


def veezi_date_token(day: date) -> str:
    """Veezi's date class suffix, e.g. date(2026, 1, 5) → "Mon-05-Jan"."""
    return f"{day:%a}-{day:%d}-{day:%b}"


class EclipseScraper(BaseScraper):
    """
    Scraper for Eclipse Cinema.

    The Veezi widget tags each film block with ``veezi-f-date-<token>`` for
    every day it screens, and each time link with a class ending in the same
    token. Times are 24-hour ("19:30").
    """

    name = "Eclipse Cinema"
    url = "https://eclipse-cinema.com.au/session-time/"

    async def fetch(
        self,
        target_date: date,
        browser: BrowserSession | None,
        today: date | None = None,
    ) -> Any:
        page = self.require_browser(browser)
        return await page.render(self.url, timeout_ms=90000)

    def extract(self, source: Any, target_date: date, today: date | None = None) -> VenueResult:
        token = veezi_date_token(target_date)
        logger.debug(f"Eclipse Cinema: Looking for date class veezi-f-date-{token}")

        soup = BeautifulSoup(source, "html.parser")
        listings: list[RawListing] = []

        for entry in soup.select(f".veezi-f-date-{token}"):
            try:
                listing = self._parse_entry(entry, token)
                if listing:
                    listings.append(listing)
            except Exception as e:
                logger.warning(f"Eclipse Cinema: Failed to parse film entry: {e}")

        return self.build_result(listings, target_date, today)

    def _parse_entry(self, entry: Tag, token: str) -> RawListing | None:
        title_elem = entry.select_one(".veezi-filter-film-title")
        if not title_elem:
            return None

        title = title_elem.get_text(strip=True)
        if not title:
            return None

        times: list[str] = []
        selector = f'a.veezi-time[class*="-{token}"], p.veezi-soldout[class*="-{token}"]'
        for link in entry.select(selector):
            time_elem = link.find("p") or link
            time_text = time_elem.get_text(strip=True)
            if _TIME_RE.match(time_text):
                times.append(time_text)

        return RawListing(title=title, times=times)
