"""
Direct Playwright client for the Cempal Portal suite.

Launches the configured browser in-process and owns the browser, the default
context and the default page for one test case. Every test case gets a fresh
context, so cookies and storage never leak between tests.

Usage:
    from cempal_ui_tests.playwright_client import PlaywrightClient

    async with PlaywrightClient() as client:
        await client.page.goto("https://dev.cempal.craftsmenltd.com/login")
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Optional

from playwright.async_api import async_playwright, Browser, BrowserContext, Page, Playwright

from cempal_ui_tests.config import settings

logger = logging.getLogger(__name__)


class PlaywrightClient:
    """
    Owns one Playwright browser with a default context and page.

    Example:
        async with PlaywrightClient(browser_type="firefox", headless=False) as client:
            page = await client.new_page()
            await page.goto("/login")
    """

    def __init__(
        self,
        browser_type: Optional[str] = None,
        headless: Optional[bool] = None,
        timeout: Optional[int] = None,
        slow_mo: Optional[int] = None,
        viewport: Optional[Dict[str, int]] = None,
        base_url: Optional[str] = None,
    ):
        """
        Args:
            browser_type: chromium, firefox or webkit (default from settings)
            headless: Run headless (default from settings)
            timeout: Default action timeout in milliseconds
            slow_mo: Delay in milliseconds inserted between browser operations
            viewport: Viewport for the default context
            base_url: Base URL so relative navigations resolve against the portal
        """
        self.browser_type = browser_type or settings.browser.browser_type
        self.headless = settings.browser.headless if headless is None else headless
        self.timeout = timeout if timeout is not None else settings.timeouts.long
        self.slow_mo = settings.browser.slow_mo if slow_mo is None else slow_mo
        self.viewport = viewport or settings.browser.viewport
        self.base_url = base_url or settings.base_url

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def connect(self):
        """Launch the browser and open the default context and page."""
        self._playwright = await async_playwright().start()

        if self.browser_type == "firefox":
            launcher = self._playwright.firefox
        elif self.browser_type == "webkit":
            launcher = self._playwright.webkit
        else:
            launcher = self._playwright.chromium

        logger.info(
            "Launching %s (headless=%s, slow_mo=%sms)", self.browser_type, self.headless, self.slow_mo
        )
        self._browser = await launcher.launch(headless=self.headless, slow_mo=self.slow_mo)

        self._context = await self.new_context()
        self._page = await self._context.new_page()

    async def new_page(self) -> Page:
        """Create a new page in the default context."""
        if not self._context:
            raise RuntimeError("Client not connected. Use 'async with' or call connect()")

        return await self._context.new_page()

    async def new_context(self, **kwargs) -> BrowserContext:
        """
        Create an isolated browser context.

        Viewport and base URL default to the client's own; any Playwright
        context option can be passed through ``kwargs``.
        """
        if not self._browser:
            raise RuntimeError("Client not connected. Use 'async with' or call connect()")

        kwargs.setdefault("viewport", self.viewport)
        kwargs.setdefault("base_url", self.base_url)
        context = await self._browser.new_context(**kwargs)
        context.set_default_timeout(self.timeout)
        return context

    async def close(self):
        """Close page, context, browser and the Playwright driver."""
        if self._page:
            await self._page.close()
            self._page = None

        if self._context:
            await self._context.close()
            self._context = None

        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

    @property
    def browser(self) -> Browser:
        if not self._browser:
            raise RuntimeError("Client not connected")
        return self._browser

    @property
    def context(self) -> BrowserContext:
        if not self._context:
            raise RuntimeError("Client not connected")
        return self._context

    @property
    def page(self) -> Page:
        if not self._page:
            raise RuntimeError("Client not connected or page not created")
        return self._page


@asynccontextmanager
async def playwright_session(**client_options) -> AsyncIterator[Page]:
    """
    Yield the default page of a short-lived client.

    Usage:
        async with playwright_session(headless=False) as page:
            await page.goto("/login")
    """
    client = PlaywrightClient(**client_options)
    await client.connect()
    try:
        yield client.page
    finally:
        await client.close()
