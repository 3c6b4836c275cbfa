"""Screenshot file naming for scripted steps and failed tests."""
from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from pathlib import Path

from cempal_ui_tests.browser import Browser
from cempal_ui_tests.config import settings

logger = logging.getLogger(__name__)

_UNSAFE = re.compile(r"[^A-Za-z0-9_.-]+")


def timestamp(now: datetime | None = None) -> str:
    """UTC ISO timestamp with ':' and '.' replaced, safe for file names.

    >>> timestamp(datetime(2025, 10, 28, 16, 35, 25, 123000, tzinfo=timezone.utc))
    '2025-10-28T16-35-25-123Z'
    """
    now = now or datetime.now(timezone.utc)
    iso = now.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"
    return iso.replace(":", "-").replace(".", "-")


def timestamped_filename(name: str, now: datetime | None = None) -> str:
    return f"{safe_name(name)}-{timestamp(now)}.png"


def safe_name(name: str) -> str:
    """Collapse anything outside [A-Za-z0-9_.-] into a single dash."""
    return _UNSAFE.sub("-", name).strip("-") or "screenshot"


def failure_filename(nodeid: str, now: datetime | None = None) -> str:
    """File name for the screenshot taken when a test case fails."""
    test_name = nodeid.split("::", 1)[-1]
    return timestamped_filename(f"FAILED-{test_name}", now)


class ScreenshotHelper:
    """Capture numbered screenshots while a scripted journey runs.

    Files are named ``<prefix>-<step>-<name>-<timestamp>.png``. The step
    counter advances by one per capture unless an explicit step is given,
    which lets a journey keep the numbering of its written script.
    """

    def __init__(self, browser: Browser, prefix: str = "step", directory: str | Path | None = None):
        self.browser = browser
        self.prefix = prefix
        self.directory = Path(directory or settings.screenshot_dir)
        self._step = 0
        self.captured: list[str] = []

    @property
    def step(self) -> int:
        return self._step

    async def capture(self, name: str, description: str = "", step: int | None = None) -> str:
        self._step = step if step is not None else self._step + 1
        filename = timestamped_filename(f"{self.prefix}-{self._step}-{name}")
        saved = await self.browser.screenshot(self.directory / filename)
        self.captured.append(saved)

        if description:
            logger.info("Screenshot %s: %s", filename, description)
        else:
            logger.info("Screenshot %s", filename)
        return saved
