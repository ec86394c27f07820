"""Scraper registry for the configured Melbourne cinemas."""

import logging
from typing import Callable

from cinefeed.scrapers.acmi import ACMIScraper
from cinefeed.scrapers.astor import AstorScraper
from cinefeed.scrapers.base import BaseScraper
from cinefeed.scrapers.brunswick import BrunswickPictureHouseScraper
from cinefeed.scrapers.eclipse import EclipseScraper
from cinefeed.scrapers.hoyts import HoytsScraper
from cinefeed.scrapers.imax import ImaxScraper
from cinefeed.scrapers.nova import CinemaNovaScraper
from cinefeed.scrapers.palace import PalaceScraper

logger = logging.getLogger(__name__)

# Venue key → scraper factory. Order here is the order venues appear in the feed.
SCRAPER_REGISTRY: dict[str, Callable[[], BaseScraper]] = {
    "acmi": ACMIScraper,
    "brunswick-picture-house": BrunswickPictureHouseScraper,
    "eclipse": EclipseScraper,
    "cinema-nova": CinemaNovaScraper,
    "hoyts-melbourne-central": HoytsScraper,
    "astor": AstorScraper,
    "palace-como": lambda: PalaceScraper("Palace Como", "palace-cinema-como", cinema_id="155"),
    "palace-kino": lambda: PalaceScraper("Palace Kino", "the-kino-melbourne"),
    "palace-westgarth": lambda: PalaceScraper("Palace Westgarth", "palace-westgarth"),
    "pentridge": lambda: PalaceScraper("Pentridge Cinema", "pentridge-cinema"),
    "imax-melbourne": ImaxScraper,
}


def get_scraper(venue_key: str) -> BaseScraper | None:
    """
    Get a scraper instance by venue key.

    Args:
        venue_key: The venue key (e.g., "acmi", "palace-como")

    Returns:
        Scraper instance or None if the key is unknown
    """
    factory = SCRAPER_REGISTRY.get(venue_key)
    if factory:
        return factory()
    return None


def get_scrapers(enabled: list[str] | None = None) -> list[BaseScraper]:
    """
    Build scrapers for the enabled venues, in registry order.

    Args:
        enabled: Venue keys to include; None or empty means all venues

    Returns:
        Scraper instances
    """
    if enabled:
        unknown = [key for key in enabled if key not in SCRAPER_REGISTRY]
        for key in unknown:
            logger.warning(f"No scraper found for venue '{key}'")
        keys = [key for key in SCRAPER_REGISTRY if key in enabled]
    else:
        keys = list(SCRAPER_REGISTRY)

    return [SCRAPER_REGISTRY[key]() for key in keys]


__all__ = [
    "SCRAPER_REGISTRY",
    "get_scraper",
    "get_scrapers",
    "BaseScraper",
    "ACMIScraper",
    "AstorScraper",
    "BrunswickPictureHouseScraper",
    "CinemaNovaScraper",
    "EclipseScraper",
    "HoytsScraper",
    "ImaxScraper",
    "PalaceScraper",
]
