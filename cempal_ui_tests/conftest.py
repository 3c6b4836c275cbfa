"""Fixtures for the live Cempal Portal suites.

The suites drive the real portal. They run only when CEMPAL_E2E=1 and the
configured base URL answers; otherwise every test here is skipped.
"""
import logging
from pathlib import Path

import httpx
import pytest
import pytest_asyncio

from cempal_ui_tests.browser import Browser, ToolError
from cempal_ui_tests.config import settings
from cempal_ui_tests.network_monitor import NetworkMonitor
from cempal_ui_tests.pages import DashboardPage, LoginPage, TenantManagementPage, UserAssignmentPage
from cempal_ui_tests.parallel_session_manager import ParallelSessionManager
from cempal_ui_tests.playwright_client import PlaywrightClient
from cempal_ui_tests.screenshots import ScreenshotHelper, failure_filename
from cempal_ui_tests.workflows import login_to_dashboard

logger = logging.getLogger(__name__)


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Expose each phase's report on the item (item.rep_setup, item.rep_call)."""
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


@pytest.fixture(scope="session", autouse=True)
def live_portal():
    """Skip the live suites unless they are enabled and the portal responds."""
    if not settings.e2e_enabled:
        pytest.skip("Live portal suites disabled (set CEMPAL_E2E=1 to run them)")
    try:
        httpx.get(settings.base_url, timeout=10.0, follow_redirects=True)
    except httpx.HTTPError as exc:
        pytest.skip(f"Portal not reachable at {settings.base_url}: {exc}")

    env = settings.environment
    logger.info("Running against %s", settings.describe())
    logger.info("Recorded session: %s / %s / %s / %s", env.os, env.browser, env.resolution, env.test_date)
    return settings


@pytest_asyncio.fixture()
async def playwright_client():
    """Create a Playwright client instance."""
    async with PlaywrightClient(headless=settings.playwright_headless) as client:
        yield client


@pytest_asyncio.fixture()
async def browser(request, playwright_client):
    """Browser wrapper on the client's page; screenshots the page if the test fails."""
    browser = Browser(playwright_client.page)
    yield browser

    report = getattr(request.node, "rep_call", None)
    if report is not None and report.failed:
        path = Path(settings.screenshot_dir) / failure_filename(request.node.nodeid)
        try:
            await browser.screenshot(path, full_page=True)
            logger.info("Failure screenshot: %s", path)
        except ToolError as exc:
            logger.warning("Could not capture failure screenshot: %s", exc)


@pytest.fixture
def login_page(browser) -> LoginPage:
    return LoginPage(browser)


@pytest.fixture
def dashboard_page(browser) -> DashboardPage:
    return DashboardPage(browser)


@pytest.fixture
def tenant_page(browser) -> TenantManagementPage:
    return TenantManagementPage(browser)


@pytest.fixture
def assignment_page(browser) -> UserAssignmentPage:
    return UserAssignmentPage(browser)


@pytest_asyncio.fixture()
async def logged_in(browser) -> DashboardPage:
    """Signed in with the configured account, dashboard loaded."""
    return await login_to_dashboard(browser)


@pytest.fixture
def screenshot_helper(browser):
    """Factory fixture creating numbered screenshot helpers for a journey."""
    def _create_helper(prefix: str = "step") -> ScreenshotHelper:
        return ScreenshotHelper(browser, prefix)
    return _create_helper


@pytest.fixture
def network_monitor(browser) -> NetworkMonitor:
    return NetworkMonitor(browser)


@pytest_asyncio.fixture()
async def session_manager(playwright_client):
    """Isolated browser contexts for concurrent-user tests, closed afterwards."""
    async with ParallelSessionManager(
        browser=playwright_client.browser,
        base_url=settings.url(''),
    ) as manager:
        yield manager


@pytest.fixture
def api_client():
    """HTTP client for header and redirect checks without a browser."""
    with httpx.Client(base_url=settings.url(''), timeout=30.0, follow_redirects=False) as client:
        yield client
