"""Base page object shared by every Cempal Portal screen."""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Dict

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import expect

from cempal_ui_tests.browser import Browser, ToolError
from cempal_ui_tests.config import UiTestConfig, settings
from cempal_ui_tests.screenshots import timestamped_filename

logger = logging.getLogger(__name__)


def xpath_literal(value: str) -> str:
    """Quote ``value`` as an XPath 1.0 string literal.

    XPath has no escape character, so a value holding both quote kinds is
    built with concat().
    """
    if "'" not in value:
        return f"'{value}'"
    if '"' not in value:
        return f'"{value}"'
    parts = value.split("'")
    pieces = []
    for index, part in enumerate(parts):
        if part:
            pieces.append(f"'{part}'")
        if index < len(parts) - 1:
            pieces.append('"\'"')
    return "concat(" + ", ".join(pieces) + ")"


def row_xpath(cell_text: str) -> str:
    """XPath of the table row that has a cell containing ``cell_text``."""
    return f"//tr[td[contains(text(),{xpath_literal(cell_text)})]]"


def scoped(selector: str) -> str:
    """Make an absolute XPath relative so it matches inside a parent locator."""
    return "." + selector if selector.startswith("//") else selector


class BasePage:
    """Common actions and checks on top of the Browser wrapper."""

    def __init__(self, browser: Browser, config: UiTestConfig = settings) -> None:
        self.browser = browser
        self.config = config
        self.selectors = config.selectors
        self.timeouts = config.timeouts

    @property
    def page(self):
        return self.browser.page

    async def goto(self, path: str) -> Dict[str, Any]:
        return await self.browser.goto(self.config.url(path))

    async def wait_for_element(self, selector: str, timeout: int | None = None) -> None:
        await self.browser.wait_for_selector(selector, state="visible", timeout=timeout or self.timeouts.medium)

    async def wait_for_clickable(self, selector: str, timeout: int | None = None) -> None:
        timeout = timeout or self.timeouts.medium
        await self.browser.wait_for_selector(selector, state="visible", timeout=timeout)
        await self.browser.wait_for_selector(selector, state="attached", timeout=timeout)

    async def click(self, selector: str, **options: Any) -> None:
        await self.wait_for_clickable(selector)
        await self.browser.click(selector, **options)

    async def fill(self, selector: str, text: str) -> None:
        await self.wait_for_element(selector)
        await self.browser.fill(selector, text)

    async def type_text(self, selector: str, text: str) -> None:
        await self.wait_for_element(selector)
        await self.browser.type_text(selector, text)

    async def get_text(self, selector: str) -> str:
        await self.wait_for_element(selector)
        return await self.browser.text(selector)

    async def is_visible(self, selector: str, timeout: int | None = None) -> bool:
        return await self.browser.is_visible(selector, timeout=timeout or self.timeouts.short)

    async def exists(self, selector: str, timeout: int | None = None) -> bool:
        """True if the element becomes visible within the timeout."""
        try:
            await self.wait_for_element(selector, timeout=timeout)
            return True
        except ToolError:
            return False

    async def wait_for_page_load(self, url: Any = None) -> None:
        await self.browser.wait_for_load_state("networkidle")
        if url:
            await self.browser.wait_for_url(url)

    async def wait_for_navigation(self) -> None:
        await self.browser.wait_for_load_state("networkidle")

    async def take_screenshot(self, name: str, full_page: bool = False) -> str:
        """Save a timestamped screenshot under the configured directory."""
        path = Path(self.config.screenshot_dir) / timestamped_filename(name)
        saved = await self.browser.screenshot(path, full_page=full_page)
        logger.debug("Screenshot saved: %s", saved)
        return saved

    async def scroll_into_view(self, selector: str) -> None:
        await self.browser.scroll_into_view(selector)

    async def wait_for_element_to_disappear(self, selector: str, timeout: int | None = None) -> None:
        await self.browser.wait_for_selector(selector, state="hidden", timeout=timeout or self.timeouts.medium)

    async def select_option(self, selector: str, value: str) -> None:
        await self.wait_for_element(selector)
        await self.browser.select(selector, value)

    async def click_dropdown_option(self, dropdown_selector: str, option_text: str) -> None:
        """Open a custom (non-native) dropdown and click the option with the given text."""
        await self.click(dropdown_selector)
        await self.click(f"//div[contains(text(),{xpath_literal(option_text)})]")

    async def wait_for_text(self, text: str, timeout: int | None = None) -> None:
        await self.browser.wait_for_text(text, timeout=timeout or self.timeouts.medium)

    async def get_attribute(self, selector: str, attribute: str) -> str | None:
        await self.wait_for_element(selector)
        return await self.browser.get_attribute(selector, attribute)

    async def reload(self) -> None:
        await self.browser.reload()

    async def go_back(self) -> None:
        await self.browser.go_back()

    async def go_forward(self) -> None:
        await self.browser.go_forward()

    def current_url(self) -> str:
        return self.browser.url

    async def get_title(self) -> str:
        return await self.browser.title()

    async def wait(self, ms: int) -> None:
        await self.browser.wait(ms)

    def row_selector(self, cell_text: str) -> str:
        return row_xpath(cell_text)

    async def click_in_row(self, cell_text: str, selector: str) -> None:
        """Click the first match of a relative ``selector`` inside the row holding ``cell_text``."""
        row = self.browser.locator(row_xpath(cell_text))
        try:
            await row.locator(scoped(selector)).first.click(timeout=self.timeouts.medium)
        except PlaywrightError as exc:
            raise ToolError(name="click_in_row", payload={"row": cell_text, "selector": selector}, message=str(exc))
        await self.browser.wait_for_load_state("load")

    async def search_table(self, term: str, debounce_ms: int = 1000) -> bool:
        """Type into the list search box, if there is one, and report whether a cell matches."""
        search_input = self.browser.locator(self.selectors.search_input).first
        if await search_input.is_visible():
            await search_input.fill(term)
            await self.wait(debounce_ms)
        return await self.exists(f"//td[contains(text(),{xpath_literal(term)})]", timeout=self.timeouts.short)

    async def cell_texts(self, cell_text: str) -> list[str]:
        """Text of every cell in the row that contains ``cell_text``."""
        try:
            cells = await self.browser.locator(row_xpath(cell_text)).locator("td").all()
            return [(await cell.text_content(timeout=self.timeouts.short)) or "" for cell in cells]
        except PlaywrightError as exc:
            raise ToolError(name="cell_texts", payload={"row": cell_text}, message=str(exc))

    # ---- assertions -------------------------------------------------------------
    async def assert_visible(self, selector: str, message: str = "Element should be visible") -> None:
        await expect(self.browser.locator(selector), message).to_be_visible()

    async def assert_text(self, selector: str, text: str, message: str = "Element should contain text") -> None:
        await expect(self.browser.locator(selector), message).to_contain_text(text)

    async def assert_url(self, text: str, message: str = "URL should contain text") -> None:
        await expect(self.page, message).to_have_url(re.compile(text))
