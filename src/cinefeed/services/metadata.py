"""Cached film metadata lookups."""

import asyncio
import logging
from typing import Any

from cinefeed.config import settings
from cinefeed.schemas.feed import Metadata
from cinefeed.services.tmdb_client import TMDbClient
from cinefeed.utils.text import canonicalise_title

logger = logging.getLogger(__name__)


class MetadataCache:
    """
    In-memory metadata store for a single run.

    Keys are lower-cased, trimmed canonical titles. "No match" results are
    stored too, so a title is only ever looked up once per run. Nothing is
    persisted between runs.
    """

    def __init__(self) -> None:
        self._entries: dict[str, Metadata] = {}

    @staticmethod
    def key_for(title: str) -> str:
        return title.lower().strip()

    def get(self, title: str) -> Metadata | None:
        return self._entries.get(self.key_for(title))

    def set(self, title: str, metadata: Metadata) -> None:
        self._entries[self.key_for(title)] = metadata

    def __contains__(self, title: str) -> bool:
        return self.key_for(title) in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class MetadataLookup:
    """
    Look up film metadata by title, with caching and rate-limit pauses.

    Flow for an uncached title:
    1. Canonicalise the title and search TMDb.
    2. Take the first result.
    3. Fetch its details for runtime and trailer; a failure here only nulls
       those two fields.
    4. Pause (``detail_delay`` after a successful detail fetch,
       ``lookup_delay`` after every uncached lookup).

    No result and any error both produce an all-None ``Metadata``, so
    ``lookup`` never raises.
    """

    def __init__(
        self,
        tmdb_client: TMDbClient | None = None,
        cache: MetadataCache | None = None,
        detail_delay: float | None = None,
        lookup_delay: float | None = None,
    ) -> None:
        """
        Args:
            tmdb_client: TMDb client (creates default if not provided)
            cache: Per-run cache (a fresh one if not provided)
            detail_delay: Seconds to wait after each detail fetch
            lookup_delay: Seconds to wait after each uncached lookup
        """
        self.tmdb_client = tmdb_client or TMDbClient()
        self.cache = cache if cache is not None else MetadataCache()
        self.detail_delay = (
            settings.tmdb_detail_delay if detail_delay is None else detail_delay
        )
        self.lookup_delay = (
            settings.tmdb_lookup_delay if lookup_delay is None else lookup_delay
        )

    async def lookup(self, raw_title: str) -> Metadata:
        """
        Return metadata for a film title as shown by a cinema.

        Args:
            raw_title: Film title from a cinema website

        Returns:
            Matched metadata, or the all-None fallback
        """
        query = canonicalise_title(raw_title)
        cached = self.cache.get(query)
        if cached is not None:
            return cached

        logger.info(f"TMDb lookup: '{raw_title}' -> '{query}'")
        try:
            metadata = await self._fetch(query)
        except Exception as e:
            logger.error(f"TMDb lookup failed for '{raw_title}': {e}")
            metadata = Metadata()

        self.cache.set(query, metadata)
        await self._pause(self.lookup_delay)
        return metadata

    async def _fetch(self, query: str) -> Metadata:
        movie = await self.tmdb_client.search_film(query)
        if not movie:
            return Metadata()

        runtime, trailer_url = await self._fetch_details(movie)
        metadata = self._build_metadata(movie, runtime, trailer_url)

        year = f" ({metadata.year})" if metadata.year else ""
        extras = f" - {runtime}min" if runtime else ""
        trailer = " [trailer]" if trailer_url else ""
        logger.info(f"TMDb found: '{movie.get('title')}'{year}{extras}{trailer}")
        return metadata

    async def _fetch_details(self, movie: dict[str, Any]) -> tuple[int | None, str | None]:
        tmdb_id = movie.get("id")
        if tmdb_id is None:
            return None, None

        details = await self.tmdb_client.get_film_details(tmdb_id)
        if details is None:
            logger.info(f"TMDb: Could not fetch details for '{movie.get('title')}'")
            return None, None

        await self._pause(self.detail_delay)
        runtime = details.get("runtime") or None
        trailer_url = self.tmdb_client.extract_trailer_url(details)
        return runtime, trailer_url

    def _build_metadata(
        self,
        movie: dict[str, Any],
        runtime: int | None,
        trailer_url: str | None,
    ) -> Metadata:
        release_date = movie.get("release_date") or ""
        return Metadata(
            overview=movie.get("overview") or None,
            poster_path=self.tmdb_client.poster_url(movie.get("poster_path")),
            rating=movie.get("vote_average") or None,
            year=release_date[:4] or None,
            runtime=runtime,
            trailer_url=trailer_url,
            tmdb_id=movie.get("id"),
        )

    async def _pause(self, seconds: float) -> None:
        if seconds > 0:
            await asyncio.sleep(seconds)
