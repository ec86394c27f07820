"""Brunswick Picture House scraper."""

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

logger = logging.getLogger(__name__)

_TIME_RE = re.compile(r"^\d{1,2}:\d{2}\s*(AM|PM)$", re.IGNORECASE)


class BrunswickPictureHouseScraper(BaseScraper):
    """
    Scraper for Brunswick Picture House.

    The now-showing page is a Vue app, so it is rendered in the browser. Each
    day is a header (``span.text-primary`` saying "Today", "Tomorrow" or a
    weekday) inside a ``.text-h6`` div, followed by a ``.poster-list`` of
    film cards with one ``button.showing`` per screening.
    """

    name = "Brunswick Picture House"
    url = "https://www.brunswickpicturehouse.com.au/now-showing/"

    async def fetch(
        self,
        target_date: date,
        browser: BrowserSession | None,
        today: date | None = None,
    ) -> Any:
        page = self.require_browser(browser)
        return await page.render(
            self.url,
            wait_selector=".poster-title, div.poster-title",
            settle_seconds=5,
        )

    def extract(self, source: Any, target_date: date, today: date | None = None) -> VenueResult:
        label = relative_day_label(target_date, self.resolve_today(today))
        logger.debug(f"Brunswick Picture House: Looking for day label '{label}'")

        soup = BeautifulSoup(source, "html.parser")
        container = self._find_day_container(soup, label)
        if container is None:
            logger.warning(f"Brunswick Picture House: No listings found for '{label}'")
            return self.build_result([], target_date, today)

        listings: list[RawListing] = []
        for card in container.select('[class*="showing-status-now-playing"]'):
            try:
                listing = self._parse_card(card)
                if listing:
                    listings.append(listing)
            except Exception as e:
                logger.warning(f"Brunswick Picture House: Failed to parse card: {e}")

        return self.build_result(listings, target_date, today)

    def _find_day_container(self, soup: BeautifulSoup, label: str) -> Tag | None:
        for span in soup.select("span.text-primary"):
            if label not in span.get_text(strip=True).lower():
                continue

            header = span.find_parent(_is_day_header)
            if header is None:
                continue

            container = header.find_next_sibling()
            if container is not None and "poster-list" in (container.get("class") or []):
                return container

        return None

    def _parse_card(self, card: Tag) -> RawListing | None:
        title_elem = card.select_one(".poster-title")
        if not title_elem:
            return None

        title = title_elem.get_text(strip=True)
        if not title:
            return None

        times: list[str] = []
        for button in card.select("button.showing"):
            time_elem = button.select_one('div.text-primary, div[style*="color: var(--q-primary)"]')
            if not time_elem:
                continue
            time_text = time_elem.get_text(strip=True)
            if _TIME_RE.match(time_text):
                times.append(time_text)

        return RawListing(title=title, times=times)


def _is_day_header(tag: Tag) -> bool:
    return any("text-h6" in cls for cls in (tag.get("class") or []))
