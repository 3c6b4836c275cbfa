"""Thin wrapper around direct Playwright for ergonomic page-object code."""
from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any, AsyncIterator, Callable, Dict

import anyio
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, Page, TimeoutError as PlaywrightTimeout

from cempal_ui_tests.config import settings
from cempal_ui_tests.playwright_client import playwright_session


@dataclass
class ToolError(Exception):
    """Raised when a browser operation fails."""

    name: str
    payload: Dict[str, Any]
    message: str

    def __str__(self) -> str:  # pragma: no cover - human readable helper
        return f"{self.name} failed ({self.message}) with payload={self.payload}"


class Browser:
    """Convenience wrapper over one Playwright page."""

    def __init__(self, page: Page, default_timeout: int | None = None) -> None:
        self._page = page
        self.default_timeout = default_timeout or settings.timeouts.medium
        self.current_url: str | None = None
        self.current_title: str | None = None

    @property
    def page(self) -> Page:
        return self._page

    @property
    def url(self) -> str:
        """Live URL of the page (not the cached ``current_url``)."""
        return self._page.url

    async def _update_state(self) -> None:
        self.current_url = self._page.url
        self.current_title = await self._page.title()

    async def title(self) -> str:
        return await self._page.title()

    async def reset(self) -> Dict[str, Any]:
        """Navigate to about:blank (reset state)."""
        await self._page.goto("about:blank")
        await self._update_state()
        return {"url": self.current_url, "title": self.current_title}

    async def goto(self, url: str, wait_until: str = "networkidle", timeout: int | None = None) -> Dict[str, Any]:
        """Navigate to URL and return url, title and HTTP status.

        "networkidle" can time out on pages that keep background connections
        open; in that case the navigation is retried once with
        "domcontentloaded".
        """
        timeout = timeout or settings.timeouts.long
        try:
            response = await self._page.goto(url, wait_until=wait_until, timeout=timeout)
        except PlaywrightTimeout as exc:
            if wait_until != "networkidle":
                raise ToolError(name="goto", payload={"url": url, "wait_until": wait_until}, message=str(exc))
            try:
                response = await self._page.goto(url, wait_until="domcontentloaded", timeout=timeout)
            except PlaywrightError:
                raise ToolError(name="goto", payload={"url": url, "wait_until": wait_until}, message=str(exc))
        except PlaywrightError as exc:
            raise ToolError(name="goto", payload={"url": url, "wait_until": wait_until}, message=str(exc))
        await self._update_state()
        return {
            "url": self.current_url,
            "title": self.current_title,
            "status": response.status if response else None,
            "headers": response.headers if response else {},
        }

    async def reload(self, wait_until: str = "load") -> Dict[str, Any]:
        try:
            response = await self._page.reload(wait_until=wait_until)
        except PlaywrightError as exc:
            raise ToolError(name="reload", payload={"wait_until": wait_until}, message=str(exc))
        await self._update_state()
        return {"url": self.current_url, "status": response.status if response else None}

    async def go_back(self) -> None:
        try:
            await self._page.go_back()
        except PlaywrightError as exc:
            raise ToolError(name="go_back", payload={}, message=str(exc))
        await self._update_state()

    async def go_forward(self) -> None:
        try:
            await self._page.go_forward()
        except PlaywrightError as exc:
            raise ToolError(name="go_forward", payload={}, message=str(exc))
        await self._update_state()

    async def fill(self, selector: str, value: str, timeout: int | None = None) -> Dict[str, Any]:
        """Fill input field."""
        try:
            await self._page.fill(selector, value, timeout=timeout or self.default_timeout)
            return {"selector": selector, "value": value}
        except PlaywrightError as exc:
            raise ToolError(name="fill", payload={"selector": selector, "value": value}, message=str(exc))

    async def type_text(self, selector: str, text: str, delay: float = 0) -> Dict[str, Any]:
        """Type text key by key, firing keyboard events for every character."""
        try:
            await self._page.locator(selector).press_sequentially(text, delay=delay)
            return {"selector": selector, "value": text}
        except PlaywrightError as exc:
            raise ToolError(name="type_text", payload={"selector": selector, "value": text}, message=str(exc))

    async def click(self, selector: str, timeout: int | None = None, **options: Any) -> Dict[str, Any]:
        """Wait until the element is visible, then click it."""
        timeout = timeout or self.default_timeout
        try:
            await self._page.wait_for_selector(selector, state="visible", timeout=timeout)
            await self._page.click(selector, timeout=timeout, **options)
            await self._update_state()
            return {"selector": selector, "url": self.current_url}
        except PlaywrightError as exc:
            raise ToolError(name="click", payload={"selector": selector}, message=str(exc))

    async def select(self, selector: str, value: str | list[str]) -> Dict[str, Any]:
        """Select option(s) in a native select element."""
        try:
            values = [value] if isinstance(value, str) else value
            await self._page.select_option(selector, values)
            return {"selector": selector, "value": value}
        except PlaywrightError as exc:
            raise ToolError(name="select", payload={"selector": selector, "value": value}, message=str(exc))

    async def text(self, selector: str, timeout: int | None = None) -> str:
        """Get text content of element."""
        try:
            text = await self._page.text_content(selector, timeout=timeout or settings.timeouts.short)
            return text or ""
        except PlaywrightError as exc:
            raise ToolError(name="text", payload={"selector": selector}, message=str(exc))

    async def get_attribute(self, selector: str, attribute: str, timeout: int | None = None) -> str | None:
        """Get attribute value of element (None when the attribute is absent)."""
        try:
            return await self._page.get_attribute(selector, attribute, timeout=timeout or settings.timeouts.short)
        except PlaywrightError as exc:
            raise ToolError(
                name="get_attribute", payload={"selector": selector, "attribute": attribute}, message=str(exc)
            )

    async def wait_for_selector(self, selector: str, state: str = "visible", timeout: int | None = None) -> None:
        try:
            await self._page.wait_for_selector(selector, state=state, timeout=timeout or self.default_timeout)
        except PlaywrightError as exc:
            raise ToolError(
                name="wait_for_selector", payload={"selector": selector, "state": state}, message=str(exc)
            )

    async def wait_for_text(self, text: str, timeout: int | None = None) -> None:
        """Wait until an element with the given text is visible anywhere on the page."""
        await self.wait_for_selector(f"text={text}", timeout=timeout)

    async def is_visible(self, selector: str, timeout: int | None = None) -> bool:
        """Return True if the element shows up within the timeout, never raise."""
        try:
            await self._page.wait_for_selector(selector, timeout=timeout or settings.timeouts.short)
            return await self._page.is_visible(selector)
        except PlaywrightError:
            return False

    async def wait_for_load_state(self, state: str = "networkidle", timeout: int | None = None) -> None:
        try:
            await self._page.wait_for_load_state(state, timeout=timeout or settings.timeouts.long)
        except PlaywrightError as exc:
            raise ToolError(name="wait_for_load_state", payload={"state": state}, message=str(exc))
        await self._update_state()

    async def wait_for_url(self, url: Any, timeout: int | None = None) -> None:
        """Wait for the URL to match a string, glob, regex or predicate."""
        try:
            await self._page.wait_for_url(url, timeout=timeout or settings.timeouts.long)
        except PlaywrightError as exc:
            raise ToolError(name="wait_for_url", payload={"url": str(url)}, message=str(exc))
        await self._update_state()

    async def evaluate(self, script: str, arg: Any = None) -> Any:
        """Execute JavaScript in the page context."""
        try:
            return await self._page.evaluate(script, arg)
        except PlaywrightError as exc:
            raise ToolError(name="evaluate", payload={"script": script}, message=str(exc))

    async def screenshot(self, path: str | Path, full_page: bool = False) -> str:
        """Save a PNG screenshot to ``path`` (parent directories are created)."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        try:
            await self._page.screenshot(path=str(target), full_page=full_page)
        except PlaywrightError as exc:
            raise ToolError(name="screenshot", payload={"path": str(target)}, message=str(exc))
        return str(target)

    def locator(self, selector: str) -> Locator:
        """Expose a Playwright Locator for row-scoped and chained queries."""
        return self._page.locator(selector)

    async def count(self, selector: str) -> int:
        try:
            return await self._page.locator(selector).count()
        except PlaywrightError as exc:
            raise ToolError(name="count", payload={"selector": selector}, message=str(exc))

    async def scroll_into_view(self, selector: str) -> None:
        try:
            await self._page.locator(selector).scroll_into_view_if_needed()
        except PlaywrightError as exc:
            raise ToolError(name="scroll_into_view", payload={"selector": selector}, message=str(exc))

    async def query_selector(self, selector: str):
        """Get element handle for selector (exposes Playwright ElementHandle API)."""
        try:
            return await self._page.query_selector(selector)
        except PlaywrightError as exc:
            raise ToolError(name="query_selector", payload={"selector": selector}, message=str(exc))

    async def query_selector_all(self, selector: str):
        """Get all element handles matching selector (exposes Playwright ElementHandle API)."""
        try:
            return await self._page.query_selector_all(selector)
        except PlaywrightError as exc:
            raise ToolError(name="query_selector_all", payload={"selector": selector}, message=str(exc))

    async def press(self, key: str) -> None:
        """Press a key on whatever element currently has focus."""
        await self._page.keyboard.press(key)

    def on(self, event: str, handler: Callable[..., Any]) -> None:
        """Register a page event listener (request, response, console, ...)."""
        self._page.on(event, handler)

    async def wait(self, ms: int) -> None:
        """Fixed pause, used where the portal animates dropdowns and modals."""
        await anyio.sleep(ms / 1000)

    async def set_viewport(self, width: int | None = None, height: int | None = None) -> None:
        width = width or settings.browser.viewport_width
        height = height or settings.browser.viewport_height
        await self._page.set_viewport_size({"width": width, "height": height})


@asynccontextmanager
async def browser_session(**client_options) -> AsyncIterator[Browser]:
    """Yield a Browser wrapper on a fresh Playwright page."""
    async with playwright_session(**client_options) as page:
        yield Browser(page)
