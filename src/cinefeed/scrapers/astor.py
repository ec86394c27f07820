"""The Astor Theatre scraper using raw homepage HTML and its AJAX session feed."""

import html
import logging
import re
from datetime import date
from typing import Any
from urllib.parse import urljoin

import httpx

from cinefeed.config import settings
from cinefeed.schemas.feed import VenueResult
from cinefeed.scrapers.base import BaseScraper
from cinefeed.scrapers.browser import BrowserSession
from cinefeed.scrapers.models import RawListing
from cinefeed.utils.dates import relative_day_label
from cinefeed.utils.times import SEE_WEBSITE

logger = logging.getLogger(__name__)

BASE_URL = "https://www.astortheatre.net.au/"
AJAX_URL = "https://www.astortheatre.net.au/wp-admin/admin-ajax.php"

_BLOCK_SPLIT_RE = re.compile(r'<div[^>]*class="[^"]*movie_preview[^"]*session', re.IGNORECASE)
_TIME_RE = re.compile(
    r"(?:today|tomorrow|monday|tuesday|wednesday|thursday|friday|saturday|sunday)"
    r"\s+at\s+(\d{1,2}(?::\d{2})?\s*(?:am|pm))",
    re.IGNORECASE,
)
_FILM_LINK_RE = re.compile(r'<a[^>]*href="([^"]*/films/[^"]*)"[^>]*>([^<]+)', re.IGNORECASE)
_DOUBLE_RE = re.compile(r"double\s*feature", re.IGNORECASE)
_RATING_RE = re.compile(r"\s*\[.*?\]\s*$")


class AstorScraper(BaseScraper):
    """
    Scraper for The Astor Theatre (St Kilda).

    The homepage lists upcoming sessions as ``movie_preview session`` blocks
    ("Tomorrow at 6:30pm"), and a WordPress AJAX action returns more of the
    same markup. No JavaScript rendering is needed: plain httpx + regex over
    both fragments is enough. A block marked "Double Feature" links to each
    of its films and becomes one "A + B" session.
    """

    name = "The Astor Theatre"
    url = BASE_URL

    async def fetch(
        self,
        target_date: date,
        browser: BrowserSession | None,
        today: date | None = None,
    ) -> Any:
        headers = {"User-Agent": settings.user_agent}
        async with httpx.AsyncClient(
            timeout=settings.scrape_timeout, verify=False, follow_redirects=True
        ) as client:
            response = await client.get(BASE_URL, headers=headers)
            response.raise_for_status()
            page_html = response.text
            logger.debug(f"Astor: Homepage HTML length {len(page_html)}")

            ajax_html = ""
            try:
                ajax = await client.post(
                    AJAX_URL,
                    data={"action": "get_frontpage_sessions", "offset": "0"},
                    headers=headers,
                )
                ajax.raise_for_status()
                ajax_html = ajax.text
                logger.debug(f"Astor: AJAX HTML length {len(ajax_html)}")
            except Exception as e:
                logger.warning(f"Astor: AJAX fetch failed, using homepage only: {e}")

        return page_html + ajax_html

    def extract(self, source: Any, target_date: date, today: date | None = None) -> VenueResult:
        label = relative_day_label(target_date, self.resolve_today(today))
        day_re = re.compile(label, re.IGNORECASE)
        logger.debug(f"Astor: Looking for day pattern '{label}'")

        blocks = _BLOCK_SPLIT_RE.split(source)[1:]
        logger.debug(f"Astor: Split into {len(blocks)} session blocks")

        listings: list[RawListing] = []
        for block in blocks:
            if not day_re.search(block):
                continue
            try:
                listing = self._parse_block(block)
                if listing:
                    listings.append(listing)
            except Exception as e:
                logger.warning(f"Astor: Failed to parse session block: {e}")

        return self.build_result(listings, target_date, today)

    def _parse_block(self, block: str) -> RawListing | None:
        titles, urls = self._extract_films(block)
        if not titles:
            return None

        time_match = _TIME_RE.search(block)
        time = time_match.group(1).lower().strip() if time_match else SEE_WEBSITE

        if _DOUBLE_RE.search(block) and len(titles) >= 2:
            return RawListing(
                title=" + ".join(titles),
                times=[time],
                url=urls[0],
                is_double_feature=True,
            )

        return RawListing(title=titles[0], times=[time], url=urls[0])

    def _extract_films(self, block: str) -> tuple[list[str], list[str]]:
        """Return each distinct film title in the block and its link, in order."""
        titles: list[str] = []
        urls: list[str] = []
        for href, text in _FILM_LINK_RE.findall(block):
            # Drop classification suffixes like "[PG]", "[MA15+]"
            title = _RATING_RE.sub("", html.unescape(text).strip()).strip()
            if title and title not in titles:
                titles.append(title)
                urls.append(urljoin(BASE_URL, html.unescape(href)))
        return titles, urls
