"""Tests for the shared browser session's page rendering."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from cinefeed.scrapers.browser import BrowserSession


def make_session(goto_error: Exception | None = None, selector_error: Exception | None = None):
    session = BrowserSession(timeout_ms=1000, selector_timeout_ms=500, settle_seconds=0)
    page = MagicMock()
    page.goto = AsyncMock(side_effect=goto_error)
    page.wait_for_selector = AsyncMock(side_effect=selector_error)
    page.content = AsyncMock(return_value="<html>rendered</html>")
    session.page = page
    return session, page


class TestRender:
    async def test_returns_page_content(self) -> None:
        session, page = make_session()
        html = await session.render("https://example.com/", wait_selector=".film")
        assert html == "<html>rendered</html>"
        page.goto.assert_awaited_once_with(
            "https://example.com/", wait_until="networkidle", timeout=1000
        )
        page.wait_for_selector.assert_awaited_once_with(".film", timeout=500)

    async def test_navigation_timeout_still_reads_page(self) -> None:
        session, _ = make_session(goto_error=PlaywrightTimeoutError("networkidle"))
        assert await session.render("https://example.com/") == "<html>rendered</html>"

    async def test_selector_timeout_still_reads_page(self) -> None:
        session, _ = make_session(selector_error=PlaywrightTimeoutError("selector"))
        html = await session.render("https://example.com/", wait_selector=".missing")
        assert html == "<html>rendered</html>"

    async def test_per_call_timeout(self) -> None:
        session, page = make_session()
        await session.render("https://example.com/", timeout_ms=90000)
        assert page.goto.call_args.kwargs["timeout"] == 90000

    async def test_no_selector_wait_when_not_given(self) -> None:
        session, page = make_session()
        await session.render("https://example.com/")
        page.wait_for_selector.assert_not_awaited()

    async def test_outside_context_raises(self) -> None:
        with pytest.raises(RuntimeError):
            await BrowserSession().render("https://example.com/")


class TestStartup:
    async def test_launch_failure_closes_playwright(self) -> None:
        playwright = MagicMock()
        playwright.chromium.launch = AsyncMock(side_effect=RuntimeError("Executable doesn't exist"))
        playwright_ctx = MagicMock()
        playwright_ctx.__aenter__ = AsyncMock(return_value=playwright)
        playwright_ctx.__aexit__ = AsyncMock(return_value=False)
        stealth = MagicMock()
        stealth.return_value.use_async.return_value = playwright_ctx

        session = BrowserSession()
        with patch("cinefeed.scrapers.browser.Stealth", stealth), patch(
            "cinefeed.scrapers.browser.async_playwright"
        ):
            with pytest.raises(RuntimeError, match="Executable"):
                await session.__aenter__()

        playwright_ctx.__aexit__.assert_awaited_once()
        assert session.page is None
