"""Live tests for The Astor Theatre scraper.

These tests make real HTTP requests to astortheatre.net.au.
Run with: pytest -m live tests/scrapers/test_astor_live.py -v -s --log-cli-level=DEBUG
"""

import logging

import pytest

from cinefeed.scrapers.astor import AstorScraper
from cinefeed.utils.dates import venue_today

logger = logging.getLogger(__name__)


@pytest.mark.live
async def test_astor_fetch_returns_session_markup():
    """The homepage (plus AJAX fragment) still contains movie_preview session blocks."""
    scraper = AstorScraper()
    today = venue_today()

    source = await scraper.fetch(today, None, today)
    result = scraper.extract(source, today, today)

    logger.info(f"Astor returned {len(result.sessions)} films for {today}")
    for s in result.sessions:
        logger.info(f"  {s.title} — {s.times} — double={s.is_double_feature}")

    assert "movie_preview" in source, "Astor homepage layout has changed"
    for s in result.sessions:
        assert s.title
        assert s.times
