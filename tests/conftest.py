"""Offline fixtures: mocked Playwright objects, no browser and no network."""
from unittest.mock import AsyncMock, MagicMock

import pytest

from cempal_ui_tests.browser import Browser
from cempal_ui_tests.config import UiTestConfig


def _make_locator(**async_results) -> MagicMock:
    """Locator mock whose chained ``locator``/``first``/``nth`` return itself."""
    locator = MagicMock()
    locator.locator.return_value = locator
    locator.first = locator
    locator.nth.return_value = locator
    locator.click = AsyncMock()
    locator.fill = AsyncMock()
    locator.count = AsyncMock(return_value=async_results.get("count", 0))
    locator.all = AsyncMock(return_value=async_results.get("all", []))
    locator.is_visible = AsyncMock(return_value=async_results.get("is_visible", False))
    locator.text_content = AsyncMock(return_value=async_results.get("text_content", ""))
    locator.get_attribute = AsyncMock(return_value=async_results.get("get_attribute"))
    locator.press_sequentially = AsyncMock()
    locator.scroll_into_view_if_needed = AsyncMock()
    return locator


@pytest.fixture
def make_locator():
    """Factory for chained locator mocks."""
    return _make_locator


@pytest.fixture
def mock_page():
    """Create a mock Playwright page."""
    page = AsyncMock()
    page.url = "https://portal.example.test/login"
    page.title = AsyncMock(return_value="Cempal")
    page.goto = AsyncMock(return_value=MagicMock(status=200, headers={"content-type": "text/html"}))
    page.reload = AsyncMock(return_value=MagicMock(status=200, headers={}))
    page.click = AsyncMock()
    page.fill = AsyncMock()
    page.screenshot = AsyncMock()
    page.evaluate = AsyncMock(return_value=0)
    page.wait_for_selector = AsyncMock()
    page.wait_for_url = AsyncMock()
    page.wait_for_load_state = AsyncMock()
    page.text_content = AsyncMock(return_value="Hello World")
    page.get_attribute = AsyncMock(return_value=None)
    page.is_visible = AsyncMock(return_value=True)
    page.select_option = AsyncMock()
    page.set_viewport_size = AsyncMock()
    page.keyboard = MagicMock()
    page.keyboard.press = AsyncMock()
    page.locator = MagicMock(return_value=_make_locator())
    page.on = MagicMock()
    return page


@pytest.fixture
def config(monkeypatch, tmp_path):
    """Configuration isolated from the caller's environment."""
    for key in ("CEMPAL_E2E", "PLAYWRIGHT_BROWSER", "PLAYWRIGHT_HEADLESS", "PLAYWRIGHT_SLOW_MO"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("CEMPAL_BASE_URL", "https://portal.example.test")
    monkeypatch.setenv("CEMPAL_EMAIL", "admin@example.test")
    monkeypatch.setenv("CEMPAL_PASSWORD", "secret")
    monkeypatch.setenv("CEMPAL_GOOGLE_EMAIL", "admin.google@example.test")
    monkeypatch.setenv("SCREENSHOT_DIR", str(tmp_path / "shots"))
    return UiTestConfig()


@pytest.fixture
def browser(mock_page, config):
    return Browser(mock_page, default_timeout=config.timeouts.medium)
