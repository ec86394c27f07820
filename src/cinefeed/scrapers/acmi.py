"""ACMI scraper using the public calendar API."""

import logging
import re
from datetime import date
from typing import Any

import httpx

from cinefeed.config import settings
from cinefeed.schemas.feed import VenueResult
from cinefeed.scrapers.base import BaseScraper
from cinefeed.scrapers.browser import BrowserSession
from cinefeed.scrapers.models import RawListing
from cinefeed.utils.payload import dig, first_list, first_text
from cinefeed.utils.times import SEE_WEBSITE, format_clock

logger = logging.getLogger(__name__)

BASE_URL = "https://www.acmi.net.au"
API_URL = "https://admin.acmi.net.au/api/v2/calendar/by-day/"

# The API has returned a bare list and several different wrappers over time
_WRAPPER_KEYS = ("occurrences", "data", "results", "items", "events")

_TIME_RE = re.compile(r"T(\d{2}):(\d{2})")


class ACMIScraper(BaseScraper):
    """
    Scraper for ACMI (Federation Square).

    The by-day calendar endpoint returns every event for a date. Items are
    either flat occurrences or grouped as ``[{"date": ..., "occurrences": [...]}]``.
    Only events typed "Film" (or untyped) are kept.
    """

    name = "ACMI"
    url = BASE_URL

    def landing_url(self, target_date: date, today: date | None = None) -> str:
        day = target_date.isoformat()
        return f"{BASE_URL}/whats-on/?what=film&when_start={day}&when_end={day}"

    async def fetch(
        self,
        target_date: date,
        browser: BrowserSession | None,
        today: date | None = None,
    ) -> Any:
        async with httpx.AsyncClient(
            timeout=settings.scrape_timeout, verify=False, follow_redirects=True
        ) as client:
            response = await client.get(
                API_URL,
                params={"date": target_date.isoformat()},
                headers={"User-Agent": settings.user_agent},
            )
            response.raise_for_status()
            return response.json()

    def extract(self, source: Any, target_date: date, today: date | None = None) -> VenueResult:
        items = self._occurrences_for_day(source, target_date)
        logger.debug(f"ACMI: {len(items)} occurrences for {target_date}")

        listings: list[RawListing] = []
        for item in items:
            try:
                listing = self._parse_occurrence(item, target_date)
                if listing:
                    listings.append(listing)
            except Exception as e:
                logger.warning(f"ACMI: Failed to parse occurrence: {e}")

        return self.build_result(listings, target_date, today)

    def _occurrences_for_day(self, payload: Any, target_date: date) -> list[dict]:
        data = first_list(payload, _WRAPPER_KEYS)
        if data is None:
            keys = ", ".join(payload.keys()) if isinstance(payload, dict) else type(payload).__name__
            logger.warning(f"ACMI: Could not find a list in API response ({keys})")
            return []

        # Grouped per day: pick the target day's occurrences
        if data and isinstance(dig(data, 0, "occurrences"), list):
            day = next((d for d in data if dig(d, "date") == target_date.isoformat()), None)
            return dig(day, "occurrences") or []

        return data

    def _parse_occurrence(self, item: dict, target_date: date) -> RawListing | None:
        event_type = self._event_type(item)
        if event_type and event_type != "Film":
            return None

        start = item.get("start_datetime")
        if start and start.split("T")[0] != target_date.isoformat():
            return None

        title = first_text(item, ("event", "title"), ("title",))
        if not title:
            return None

        return RawListing(
            title=title,
            times=[self._parse_time(start)],
            url=self._film_url(item),
        )

    def _event_type(self, item: dict) -> str | None:
        return first_text(
            item,
            ("event_type", "name"),
            ("event", "event_type", "name"),
            ("type",),
        )

    def _parse_time(self, start: str | None) -> str:
        """Read the clock time straight from "2025-12-30T16:00:00+11:00" (already local)."""
        if not start:
            return SEE_WEBSITE
        match = _TIME_RE.search(start)
        if not match:
            return SEE_WEBSITE
        return format_clock(int(match.group(1)), int(match.group(2)))

    def _film_url(self, item: dict) -> str | None:
        path = first_text(item, ("event", "url"))
        if not path:
            return None
        return path if path.startswith("http") else f"{BASE_URL}{path}"
