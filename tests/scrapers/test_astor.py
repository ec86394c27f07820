"""Unit tests for The Astor Theatre scraper."""

from datetime import date
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from cinefeed.scrapers.astor import AJAX_URL, BASE_URL, AstorScraper

FIXTURE_DIR = Path(__file__).parent / "fixtures" / "astor"
TODAY = date(2026, 10, 18)


@pytest.fixture
def scraper() -> AstorScraper:
    return AstorScraper()


@pytest.fixture
def homepage_html() -> str:
    return (FIXTURE_DIR / "homepage.html").read_text()


@pytest.fixture
def ajax_html() -> str:
    return (FIXTURE_DIR / "frontpage_sessions.html").read_text()


@pytest.fixture
def source(homepage_html: str, ajax_html: str) -> str:
    return homepage_html + ajax_html


def make_text_response(text: str) -> MagicMock:
    response = MagicMock()
    response.text = text
    response.raise_for_status = MagicMock()
    return response


def make_client_ctx(get_response: MagicMock, post) -> MagicMock:
    client = AsyncMock()
    client.get = AsyncMock(return_value=get_response)
    if isinstance(post, Exception):
        client.post = AsyncMock(side_effect=post)
    else:
        client.post = AsyncMock(return_value=post)
    ctx = MagicMock()
    ctx.__aenter__ = AsyncMock(return_value=client)
    ctx.__aexit__ = AsyncMock(return_value=False)
    return ctx


# ---------------------------------------------------------------------------
# extract — pure parsing, no HTTP
# ---------------------------------------------------------------------------


class TestAstorExtract:
    def test_today_sessions_in_page_order(self, scraper: AstorScraper, source: str) -> None:
        result = scraper.extract(source, TODAY, TODAY)
        assert [s.title for s in result.sessions] == [
            "Casablanca",
            "Alien + Aliens",
            "Mystery Movie",
        ]

    def test_reads_time_from_day_phrase(self, scraper: AstorScraper, source: str) -> None:
        result = scraper.extract(source, TODAY, TODAY)
        assert result.sessions[0].times == ["2:00pm"]

    def test_strips_classification_suffix(self, scraper: AstorScraper, source: str) -> None:
        result = scraper.extract(source, TODAY, TODAY)
        assert all("[" not in s.title for s in result.sessions)

    def test_double_feature_block(self, scraper: AstorScraper, source: str) -> None:
        result = scraper.extract(source, TODAY, TODAY)
        double = result.sessions[1]
        assert double.is_double_feature is True
        assert double.times == ["7:30pm"]
        assert double.url == "https://www.astortheatre.net.au/films/alien/"

    def test_missing_time_reports_see_website(self, scraper: AstorScraper, source: str) -> None:
        result = scraper.extract(source, TODAY, TODAY)
        assert result.sessions[2].times == ["See website"]

    def test_tomorrow(self, scraper: AstorScraper, source: str) -> None:
        result = scraper.extract(source, date(2026, 10, 19), TODAY)
        assert [s.title for s in result.sessions] == ["The Goonies"]
        assert result.sessions[0].times == ["6:30pm"]
        assert result.sessions[0].is_double_feature is False

    def test_weekday_label_and_entities(self, scraper: AstorScraper, source: str) -> None:
        result = scraper.extract(source, date(2026, 10, 20), TODAY)
        [session] = result.sessions
        assert session.title == "Harry Potter & the Philosopher’s Stone"
        assert session.times == ["8pm"]
        assert session.url == (
            "https://www.astortheatre.net.au/films/harry-potter-and-the-philosophers-stone/"
        )

    def test_no_session_blocks(self, scraper: AstorScraper) -> None:
        result = scraper.extract("<html><body>Closed for renovations</body></html>", TODAY, TODAY)
        assert result.sessions == []
        assert result.url == BASE_URL


# ---------------------------------------------------------------------------
# fetch — HTTP mocked
# ---------------------------------------------------------------------------


class TestAstorFetch:
    async def test_combines_homepage_and_ajax_fragment(
        self, scraper: AstorScraper, homepage_html: str, ajax_html: str
    ) -> None:
        ctx = make_client_ctx(make_text_response(homepage_html), make_text_response(ajax_html))
        with patch("httpx.AsyncClient", return_value=ctx):
            source = await scraper.fetch(TODAY, None, TODAY)

        assert source == homepage_html + ajax_html
        client = ctx.__aenter__.return_value
        assert client.post.call_args.args[0] == AJAX_URL
        assert client.post.call_args.kwargs["data"] == {
            "action": "get_frontpage_sessions",
            "offset": "0",
        }

    async def test_ajax_failure_falls_back_to_homepage(
        self, scraper: AstorScraper, homepage_html: str
    ) -> None:
        ctx = make_client_ctx(make_text_response(homepage_html), Exception("HTTP 500"))
        with patch("httpx.AsyncClient", return_value=ctx):
            result = await scraper.get_sessions(TODAY, None, TODAY)

        assert [s.title for s in result.sessions] == ["Casablanca", "Alien + Aliens"]
