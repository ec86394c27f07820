"""Hoyts scraper using the cinema API."""

import logging
from datetime import date
from typing import Any

import httpx

from cinefeed.config import settings
from cinefeed.schemas.feed import VenueResult
from cinefeed.scrapers.base import BaseScraper
from cinefeed.scrapers.browser import BrowserSession
from cinefeed.scrapers.models import RawListing
from cinefeed.utils.payload import first_list, first_text
from cinefeed.utils.times import format_clock

logger = logging.getLogger(__name__)

BASE_URL = "https://www.hoyts.com.au"
API_BASE = "https://apim.hoyts.com.au/au/cinemaapi/api"

_WRAPPER_KEYS = ("sessions", "movies", "data", "results", "items")
_EXPERIENCE_FIELDS = ("type", "screenType", "experience")


class HoytsScraper(BaseScraper):
    """
    Scraper for a Hoyts cinema.

    Flow:
    1. ``GET /sessions/{cinema_id}`` for every upcoming session at the cinema.
    2. ``GET /movies`` to map each session's ``movieId`` to a title.

    Session dates are local ("2026-10-18T14:30:00"). Lux sessions are sold
    separately and left out; the feed note says so.
    """

    note = "Lux sessions not listed"

    def __init__(
        self,
        name: str = "Hoyts Melbourne Central",
        cinema_id: str = "MELC",
        slug: str = "melbourne-central",
    ) -> None:
        self.name = name
        self.cinema_id = cinema_id
        self.url = f"{BASE_URL}/cinemas/{slug}"

    async def fetch(
        self,
        target_date: date,
        browser: BrowserSession | None,
        today: date | None = None,
    ) -> Any:
        headers = {"User-Agent": settings.user_agent, "Accept": "application/json"}
        async with httpx.AsyncClient(
            timeout=settings.scrape_timeout, verify=False, follow_redirects=True
        ) as client:
            sessions = await client.get(f"{API_BASE}/sessions/{self.cinema_id}", headers=headers)
            sessions.raise_for_status()

            movies = await client.get(f"{API_BASE}/movies", headers=headers)
            movies.raise_for_status()

            return {"sessions": sessions.json(), "movies": movies.json()}

    def extract(self, source: Any, target_date: date, today: date | None = None) -> VenueResult:
        sessions = first_list(source.get("sessions"), _WRAPPER_KEYS)
        if sessions is None:
            logger.warning(f"{self.name}: Could not find sessions in API response")
            return self.build_result([], target_date, today)

        titles, links = self._movie_map(source.get("movies"))

        listings: list[RawListing] = []
        for session in sessions:
            try:
                listing = self._parse_session(session, titles, links, target_date)
                if listing:
                    listings.append(listing)
            except Exception as e:
                logger.warning(f"{self.name}: Failed to parse session: {e}")

        return self.build_result(listings, target_date, today)

    def _movie_map(self, payload: Any) -> tuple[dict[str, str], dict[str, str]]:
        """Return ({movieId: title}, {movieId: film page URL})."""
        titles: dict[str, str] = {}
        links: dict[str, str] = {}
        for movie in first_list(payload, _WRAPPER_KEYS) or []:
            if not isinstance(movie, dict):
                continue
            movie_id = _movie_key(movie.get("vistaId")) or _movie_key(movie.get("id"))
            title = first_text(movie, ("name",), ("title",))
            if not movie_id or not title:
                continue
            titles[movie_id] = title
            link = first_text(movie, ("link",))
            if link:
                links[movie_id] = link if link.startswith("http") else f"{BASE_URL}{link}"
        return titles, links

    def _parse_session(
        self,
        session: dict,
        titles: dict[str, str],
        links: dict[str, str],
        target_date: date,
    ) -> RawListing | None:
        if self._is_lux(session):
            return None

        stamp = session.get("date") or ""
        if stamp[:10] != target_date.isoformat():
            return None

        movie_id = _movie_key(session.get("movieId"))
        title = titles.get(movie_id) if movie_id else None
        if not title:
            return None

        hour, minute = int(stamp[11:13]), int(stamp[14:16])
        return RawListing(
            title=title,
            times=[format_clock(hour, minute)],
            url=links.get(movie_id),
        )

    def _is_lux(self, session: dict) -> bool:
        for field in _EXPERIENCE_FIELDS:
            value = session.get(field)
            values = value if isinstance(value, list) else [value]
            if any(isinstance(v, str) and "lux" in v.lower() for v in values):
                return True
        return False


def _movie_key(value: Any) -> str | None:
    """Movie IDs arrive as strings ("HO00012345") or integers; both sides compare as strings."""
    if value is None or isinstance(value, bool):
        return None
    key = str(value).strip()
    return key or None
