"""TMDb API client for fetching film metadata."""

import logging
from typing import Any

import httpx

from cinefeed.config import settings

logger = logging.getLogger(__name__)

POSTER_BASE_URL = "https://image.tmdb.org/t/p/w300"
YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v="
TRAILER_TYPES = ("Trailer", "Teaser")


class TMDbClient:
    """Client for The Movie Database (TMDb) API."""

    BASE_URL = "https://api.themoviedb.org/3"

    def __init__(self, api_key: str | None = None, language: str | None = None) -> None:
        """
        Initialize TMDb client.

        Args:
            api_key: TMDb API key (uses settings if not provided)
            language: TMDb response language (uses settings if not provided)
        """
        self.api_key = api_key or settings.tmdb_api_key
        self.language = language or settings.tmdb_language
        if not self.api_key:
            logger.warning("TMDb API key not configured")

    async def search_film(self, title: str) -> dict[str, Any] | None:
        """
        Search for a film by title.

        The first result is returned as is, without re-ranking.

        Args:
            title: Canonical film title

        Returns:
            First matching film result or None if not found or on error
        """
        if not self.api_key:
            logger.warning("Cannot search TMDb without API key")
            return None

        params: dict[str, Any] = {
            "api_key": self.api_key,
            "query": title,
            "language": self.language,
        }

        try:
            async with httpx.AsyncClient(timeout=settings.scrape_timeout, verify=False) as client:
                response = await client.get(f"{self.BASE_URL}/search/movie", params=params)
                response.raise_for_status()
                data = response.json()

                results = data.get("results") or []
                if not results:
                    logger.info(f"TMDb: No results for '{title}'")
                    return None

                return results[0]

        except Exception as e:
            logger.error(f"TMDb search error for '{title}': {e}")
            return None

    async def get_film_details(self, tmdb_id: int) -> dict[str, Any] | None:
        """
        Get film details including videos.

        Args:
            tmdb_id: TMDb film ID

        Returns:
            Film details with a ``videos`` block, or None on error
        """
        if not self.api_key:
            logger.warning("Cannot fetch TMDb details without API key")
            return None

        params = {
            "api_key": self.api_key,
            "language": self.language,
            "append_to_response": "videos",
        }

        try:
            async with httpx.AsyncClient(timeout=settings.scrape_timeout, verify=False) as client:
                response = await client.get(
                    f"{self.BASE_URL}/movie/{tmdb_id}",
                    params=params,
                )
                response.raise_for_status()
                return response.json()

        except Exception as e:
            logger.error(f"TMDb details error for ID {tmdb_id}: {e}")
            return None

    def extract_trailer_url(self, details: dict[str, Any]) -> str | None:
        """
        Pick the first YouTube trailer or teaser from TMDb film details.

        Args:
            details: TMDb film details fetched with ``append_to_response=videos``

        Returns:
            YouTube watch URL or None
        """
        videos = (details.get("videos") or {}).get("results") or []
        for video in videos:
            if video.get("site") == "YouTube" and video.get("type") in TRAILER_TYPES:
                key = video.get("key")
                if key:
                    return f"{YOUTUBE_WATCH_URL}{key}"
        return None

    def poster_url(self, poster_path: str | None) -> str | None:
        """Build a full poster image URL from a TMDb ``poster_path``."""
        if not poster_path:
            return None
        return f"{POSTER_BASE_URL}{poster_path}"
