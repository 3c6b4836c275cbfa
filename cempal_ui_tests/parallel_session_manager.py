"""
Parallel Session Manager for the portal suites.

Manages multiple isolated browser sessions so several users can be
simulated against the portal at the same time.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import logging

import anyio
from playwright.async_api import Browser as PlaywrightBrowser, BrowserContext, Page

from cempal_ui_tests.browser import Browser
from cempal_ui_tests.config import settings
from cempal_ui_tests.pages.login_page import LoginPage
from cempal_ui_tests.workflows import Stopwatch

logger = logging.getLogger(__name__)


@dataclass
class SessionHandle:
    """Handle to a parallel browser session."""
    session_id: str
    context: BrowserContext
    page: Page
    browser: Browser
    role: str  # 'super_admin', 'user', 'anonymous'
    username: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __repr__(self) -> str:
        return f"SessionHandle(id={self.session_id}, role={self.role}, user={self.username})"


class ParallelSessionManager:
    """
    Manages multiple parallel browser sessions for testing.

    Each session gets its own Playwright BrowserContext, providing:
    - Isolated cookies and storage
    - Independent authentication state
    - Separate viewport and settings

    Usage:
        async with ParallelSessionManager(client.browser) as manager:
            login_times = await manager.login_concurrently(5)
    """

    def __init__(
        self,
        browser: PlaywrightBrowser,
        base_url: Optional[str] = None,
        viewport: Optional[Dict[str, int]] = None,
    ):
        """
        Initialize the session manager.

        Args:
            browser: Playwright Browser instance
            base_url: Base URL for navigation (defaults to the configured portal)
            viewport: Default viewport size (defaults to the configured viewport)
        """
        self.browser = browser
        self.base_url = base_url or settings.base_url
        self.viewport = viewport or settings.browser.viewport
        self.sessions: Dict[str, SessionHandle] = {}
        self._counter = 0

    async def __aenter__(self) -> 'ParallelSessionManager':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close_all()

    async def create_session(
        self,
        role: str,
        session_id: Optional[str] = None,
        viewport: Optional[Dict[str, int]] = None,
    ) -> SessionHandle:
        """
        Create a new isolated browser session.

        Raises:
            ValueError: if ``session_id`` is already in use
        """
        if session_id is None:
            self._counter += 1
            session_id = f"{role}_{self._counter}"

        if session_id in self.sessions:
            raise ValueError(f"Session {session_id} already exists")

        context = await self.browser.new_context(
            viewport=viewport if viewport is not None else self.viewport,
            base_url=self.base_url,
        )
        context.set_default_timeout(settings.timeouts.long)
        page = await context.new_page()

        handle = SessionHandle(
            session_id=session_id,
            context=context,
            page=page,
            browser=Browser(page),
            role=role,
        )
        self.sessions[session_id] = handle

        logger.debug(f"Created session: {handle}")
        return handle

    async def get_session(self, session_id: str) -> Optional[SessionHandle]:
        return self.sessions.get(session_id)

    async def user_session(self, username: str, role: str = 'user') -> SessionHandle:
        """Get or create the session for ``username``."""
        session_id = f"{role}_{username}"
        if session_id not in self.sessions:
            handle = await self.create_session(role, session_id)
            handle.username = username
        return self.sessions[session_id]

    async def close_session(self, session_id: str) -> None:
        """Close and remove a session."""
        if session_id in self.sessions:
            handle = self.sessions.pop(session_id)
            try:
                await handle.context.close()
                logger.debug(f"Closed session: {handle}")
            except Exception as e:
                logger.warning(f"Error closing session {session_id}: {e}")

    async def close_all(self) -> None:
        for session_id in list(self.sessions.keys()):
            await self.close_session(session_id)

    async def login_concurrently(
        self,
        count: int,
        email: Optional[str] = None,
        password: Optional[str] = None,
    ) -> List[float]:
        """
        Log ``count`` users in at the same time, one context each.

        Returns:
            Login wall-clock time in milliseconds per user, in session order.
            A failing login cancels the others and propagates.
        """
        handles = [await self.create_session('user') for _ in range(count)]
        times: List[float] = [0.0] * count

        async def _login(index: int, handle: SessionHandle) -> None:
            login_page = LoginPage(handle.browser)
            with Stopwatch() as watch:
                await login_page.navigate_to_login()
                await login_page.login(email, password)
            times[index] = watch.elapsed_ms
            handle.username = email or settings.credentials.email
            logger.info(f"User {index + 1} login time: {watch.elapsed_ms:.0f}ms")

        async with anyio.create_task_group() as tg:
            for index, handle in enumerate(handles):
                tg.start_soon(_login, index, handle)

        return times

    @property
    def session_count(self) -> int:
        return len(self.sessions)

    def list_sessions(self) -> list[str]:
        return list(self.sessions.keys())
