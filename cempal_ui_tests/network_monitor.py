"""Collect requests, responses and console errors from a live page."""
from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from playwright.async_api import Page

from cempal_ui_tests.browser import Browser

logger = logging.getLogger(__name__)

STATIC_ASSET_PATTERN = re.compile(r"\.(png|jpg|jpeg|gif|svg|css|js)$", re.IGNORECASE)
API_PATTERNS = ("/api/", "/graphql")


@dataclass
class NetworkRecord:
    url: str
    method: str
    status: int
    elapsed_ms: float | None = None
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def path(self) -> str:
        return self.url.split("?", 1)[0]

    @property
    def ok(self) -> bool:
        return self.status < 400


class NetworkMonitor:
    """Attach to a page and keep every response with its request timing.

    Usage:
        monitor = NetworkMonitor(browser)
        await browser.goto(...)
        slow = [r for r in monitor.api_responses() if r.elapsed_ms > 2000]
    """

    def __init__(self, target: Browser | Page) -> None:
        self.page: Page = target.page if isinstance(target, Browser) else target
        self.requests: List[str] = []
        self.responses: List[NetworkRecord] = []
        self.console_errors: List[str] = []
        self.failed_requests: List[str] = []
        self._started: Dict[int, float] = {}

        self.page.on("request", self._on_request)
        self.page.on("response", self._on_response)
        self.page.on("requestfailed", self._on_request_failed)
        self.page.on("console", self._on_console)

    def _on_request(self, request: Any) -> None:
        self.requests.append(request.url)
        self._started[id(request)] = time.perf_counter()

    def _on_response(self, response: Any) -> None:
        request = response.request
        started = self._started.pop(id(request), None)
        elapsed = (time.perf_counter() - started) * 1000 if started is not None else None
        record = NetworkRecord(
            url=response.url,
            method=request.method,
            status=response.status,
            elapsed_ms=elapsed,
            headers=dict(response.headers),
        )
        self.responses.append(record)
        if not record.ok:
            logger.debug("%s %s -> %s", record.method, record.url, record.status)

    def _on_request_failed(self, request: Any) -> None:
        self._started.pop(id(request), None)
        self.failed_requests.append(request.url)
        logger.debug("%s %s failed: %s", request.method, request.url, request.failure)

    def _on_console(self, message: Any) -> None:
        if message.type == "error":
            self.console_errors.append(message.text)

    def api_responses(self, patterns: Iterable[str] = API_PATTERNS) -> List[NetworkRecord]:
        patterns = tuple(patterns)
        return [record for record in self.responses if any(p in record.url for p in patterns)]

    def static_assets(self) -> List[NetworkRecord]:
        return [record for record in self.responses if STATIC_ASSET_PATTERN.search(record.path)]

    def failed_responses(self) -> List[NetworkRecord]:
        return [record for record in self.responses if not record.ok]

    def slow_responses(self, threshold_ms: float, patterns: Iterable[str] = API_PATTERNS) -> List[NetworkRecord]:
        return [
            record
            for record in self.api_responses(patterns)
            if record.elapsed_ms is not None and record.elapsed_ms >= threshold_ms
        ]

    def clear(self) -> None:
        self.requests.clear()
        self.responses.clear()
        self.console_errors.clear()
        self.failed_requests.clear()
        self._started.clear()
