"""Cinema Nova scraper."""

import logging
import re
from datetime import date
from typing import Any

from bs4 import BeautifulSoup, Tag

from cinefeed.schemas.feed import VenueResult
from cinefeed.scrapers.base import BaseScraper
from cinefeed.scrapers.browser import BrowserSession
from cinefeed.scrapers.models import RawListing
from cinefeed.utils.dates import relative_day_label
from cinefeed.utils.text import slugify

logger = logging.getLogger(__name__)

BASE_URL = "https://www.cinemanova.com.au"

_TIME_RE = re.compile(r"^\d{1,2}:\d{2}$")


class CinemaNovaScraper(BaseScraper):
    """
    Scraper for Cinema Nova (Carlton).

    Each day has its own page, ``/films-<day>-after-0:00`` where ``<day>`` is
    "today" or a lowercase weekday. The page is a table with one row per
    screening: a 24-hour time cell then a title cell.
    """

    name = "Cinema Nova"
    url = BASE_URL

    def landing_url(self, target_date: date, today: date | None = None) -> str:
        # Nova has no "tomorrow" page
        slug = relative_day_label(target_date, self.resolve_today(today), use_tomorrow=False)
        return f"{BASE_URL}/films-{slug}-after-0:00"

    async def fetch(
        self,
        target_date: date,
        browser: BrowserSession | None,
        today: date | None = None,
    ) -> Any:
        page = self.require_browser(browser)
        url = self.landing_url(target_date, today)
        logger.debug(f"Cinema Nova: Using URL {url}")
        return await page.render(url)

    def extract(self, source: Any, target_date: date, today: date | None = None) -> VenueResult:
        soup = BeautifulSoup(source, "html.parser")
        listings: list[RawListing] = []

        for row in soup.find_all("tr"):
            try:
                listing = self._parse_row(row)
                if listing:
                    listings.append(listing)
            except Exception as e:
                logger.warning(f"Cinema Nova: Failed to parse row: {e}")

        return self.build_result(listings, target_date, today)

    def _parse_row(self, row: Tag) -> RawListing | None:
        cells = row.find_all("td")
        if len(cells) < 2:
            return None

        time_cell, title_cell = cells[0], cells[1]
        time_link = time_cell.find("a")
        time_text = time_link.get_text(strip=True) if time_link else ""
        if not time_text:
            time_text = time_cell.get_text(strip=True)
        title = title_cell.get_text(strip=True)

        if not title or not _TIME_RE.match(time_text):
            return None

        return RawListing(
            title=title,
            times=[time_text],
            url=f"{BASE_URL}/films/{slugify(title)}",
        )
