"""Palace Cinemas scraper using the page's embedded Next.js state."""

import json
import logging
from datetime import date
from typing import Any

from bs4 import BeautifulSoup

from cinefeed.schemas.feed import VenueResult
from cinefeed.scrapers.base import BaseScraper
from cinefeed.scrapers.browser import BrowserSession
from cinefeed.scrapers.models import RawListing
from cinefeed.utils.payload import dig
from cinefeed.utils.times import format_clock

logger = logging.getLogger(__name__)

BASE_URL = "https://www.palacecinemas.com.au"


class PalaceScraper(BaseScraper):
    """
    Scraper for a Palace Cinemas venue.

    Cinema pages embed ``<script id="__NEXT_DATA__">`` with every movie and
    its sessions across all Palace cinemas. Session timestamps look like UTC
    ("2026-01-01T10:00:00.000Z") but hold Melbourne wall-clock time, so the
    date and clock are read straight from the string with no conversion.
    """

    def __init__(self, name: str, slug: str, cinema_id: str | None = None) -> None:
        """
        Args:
            name: Display name, e.g. "Palace Como"
            slug: Cinema page slug, e.g. "palace-cinema-como"
            cinema_id: Palace cinema ID; read from the page data when omitted
        """
        self.name = name
        self.url = f"{BASE_URL}/cinemas/{slug}"
        self.cinema_id = cinema_id

    async def fetch(
        self,
        target_date: date,
        browser: BrowserSession | None,
        today: date | None = None,
    ) -> Any:
        page = self.require_browser(browser)
        return await page.render(self.url)

    def extract(self, source: Any, target_date: date, today: date | None = None) -> VenueResult:
        data = self._next_data(source)
        if data is None:
            logger.warning(f"{self.name}: No __NEXT_DATA__ found")
            return self.build_result([], target_date, today)

        cinema_id = self.cinema_id or dig(data, "props", "pageProps", "cinema", "cinemaId")
        if not cinema_id:
            logger.warning(f"{self.name}: Could not determine cinema ID")
            return self.build_result([], target_date, today)

        movies = dig(data, "props", "pageProps", "sessions") or []
        logger.debug(f"{self.name}: cinemaId {cinema_id}, {len(movies)} movies")

        listings: list[RawListing] = []
        for movie in movies:
            try:
                listing = self._parse_movie(movie, str(cinema_id), target_date)
                if listing:
                    listings.append(listing)
            except Exception as e:
                logger.warning(f"{self.name}: Failed to parse movie: {e}")

        return self.build_result(listings, target_date, today)

    def _next_data(self, html: str) -> dict | None:
        soup = BeautifulSoup(html, "html.parser")
        script = soup.find("script", id="__NEXT_DATA__")
        if not script or not script.string:
            return None
        try:
            data = json.loads(script.string)
        except json.JSONDecodeError as e:
            logger.error(f"{self.name}: Failed to parse __NEXT_DATA__: {e}")
            return None
        return data if isinstance(data, dict) else None

    def _parse_movie(self, movie: dict, cinema_id: str, target_date: date) -> RawListing | None:
        title = movie.get("title")
        if not title:
            return None

        times: list[str] = []
        for session in movie.get("sessions") or []:
            time = self._session_time(session, cinema_id, target_date)
            if time:
                times.append(time)

        slug = movie.get("slug")
        return RawListing(
            title=title,
            times=times,
            url=f"{BASE_URL}/movies/{slug}" if slug else None,
        )

    def _session_time(self, session: dict, cinema_id: str, target_date: date) -> str | None:
        if str(session.get("cinemaId")) != cinema_id:
            return None

        stamp = session.get("date") or ""
        if stamp[:10] != target_date.isoformat():
            return None

        try:
            hour = int(stamp[11:13])
            minute = int(stamp[14:16])
        except ValueError:
            return None
        return format_clock(hour, minute)
