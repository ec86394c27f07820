"""Shared headless browser for venues whose listings are rendered client-side."""

import asyncio
import logging
from contextlib import AsyncExitStack

from playwright.async_api import Browser, Page, async_playwright
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright_stealth import Stealth

from cinefeed.config import settings

logger = logging.getLogger(__name__)


class BrowserSession:
    """
    One stealth Chromium page, reused for every venue in a run.

    Venues are visited one after another on the same page, so calls to
    ``render`` must not overlap. Timeouts are treated as a liveness bound:
    a page that never settles is still read and whatever has rendered is
    returned.

    Usage:
        async with BrowserSession() as browser:
            html = await browser.render(url, wait_selector=".poster-title")
    """

    def __init__(
        self,
        timeout_ms: int | None = None,
        selector_timeout_ms: int | None = None,
        settle_seconds: float | None = None,
    ) -> None:
        self.timeout_ms = timeout_ms or settings.page_timeout_ms
        self.selector_timeout_ms = selector_timeout_ms or settings.selector_timeout_ms
        self.settle_seconds = (
            settings.page_settle_seconds if settle_seconds is None else settle_seconds
        )
        self._stack: AsyncExitStack | None = None
        self._browser: Browser | None = None
        self.page: Page | None = None

    async def __aenter__(self) -> "BrowserSession":
        self._stack = AsyncExitStack()
        try:
            playwright = await self._stack.enter_async_context(
                Stealth().use_async(async_playwright())
            )
            self._browser = await playwright.chromium.launch(
                headless=True,
                args=["--no-sandbox", "--disable-setuid-sandbox", "--disable-dev-shm-usage"],
            )
            context = await self._browser.new_context(
                viewport={"width": 1920, "height": 1080},
                locale="en-AU",
                timezone_id=settings.venue_timezone,
                user_agent=settings.user_agent,
            )
            self.page = await context.new_page()
        except Exception:
            await self.__aexit__(None, None, None)
            raise
        logger.debug("Browser session started")
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        try:
            if self._browser:
                await self._browser.close()
        finally:
            if self._stack:
                await self._stack.aclose()
            self._browser = None
            self.page = None
            logger.debug("Browser session closed")

    async def render(
        self,
        url: str,
        wait_selector: str | None = None,
        settle_seconds: float | None = None,
        timeout_ms: int | None = None,
    ) -> str:
        """
        Navigate to ``url`` and return the rendered HTML.

        Args:
            url: Page to load
            wait_selector: CSS selector that signals the listings have rendered
            settle_seconds: Extra wait after network idle for client-side rendering
            timeout_ms: Navigation timeout (defaults to the session's)

        Returns:
            Page HTML, possibly partial if the page never fully settled
        """
        if self.page is None:
            raise RuntimeError("BrowserSession used outside 'async with'")

        try:
            await self.page.goto(
                url,
                wait_until="networkidle",
                timeout=timeout_ms or self.timeout_ms,
            )
        except PlaywrightTimeoutError:
            logger.warning(f"Timed out loading {url}, using partial page")

        settle = self.settle_seconds if settle_seconds is None else settle_seconds
        if settle > 0:
            await asyncio.sleep(settle)

        if wait_selector:
            try:
                await self.page.wait_for_selector(
                    wait_selector, timeout=self.selector_timeout_ms
                )
            except PlaywrightTimeoutError:
                logger.warning(f"Waiting for '{wait_selector}' on {url} timed out, trying anyway")

        return await self.page.content()
