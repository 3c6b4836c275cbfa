"""Reusable form data and flows shared by the portal suites."""
from __future__ import annotations

import secrets
import time
from dataclasses import dataclass

from cempal_ui_tests.browser import Browser
from cempal_ui_tests.config import UiTestConfig, settings


@dataclass
class TenantFormData:
    name: str
    domain: str
    contact_email: str
    address: str

    @classmethod
    def from_config(cls, config: UiTestConfig = settings) -> "TenantFormData":
        tenant = config.tenant
        return cls(
            name=tenant.name,
            domain=tenant.domain,
            contact_email=tenant.contact_email,
            address=tenant.address,
        )


@dataclass
class AssignmentFormData:
    tenant_name: str
    user_group: str
    team_name: str

    @classmethod
    def from_config(cls, config: UiTestConfig = settings) -> "AssignmentFormData":
        assignment = config.user_assignment
        return cls(
            tenant_name=assignment.tenant_name,
            user_group=assignment.user_group,
            team_name=assignment.team_name,
        )


def generate_tenant_data(prefix: str = "ui-tenant") -> TenantFormData:
    suffix = secrets.token_hex(4)
    return TenantFormData(
        name=f"{prefix}-{suffix}",
        domain=f"{prefix}-{suffix}.example.com",
        contact_email=f"{prefix}-{suffix}@example.com",
        address=f"{suffix} Automation Road",
    )


class Stopwatch:
    """Wall-clock timer in milliseconds.

    >>> with Stopwatch() as watch:
    ...     pass
    >>> watch.elapsed_ms >= 0
    True
    """

    def __init__(self) -> None:
        self._started: float | None = None
        self._stopped: float | None = None

    def start(self) -> "Stopwatch":
        self._started = time.perf_counter()
        self._stopped = None
        return self

    def stop(self) -> float:
        if self._started is None:
            raise RuntimeError("Stopwatch was never started")
        self._stopped = time.perf_counter()
        return self.elapsed_ms

    @property
    def elapsed_ms(self) -> float:
        if self._started is None:
            return 0.0
        end = self._stopped if self._stopped is not None else time.perf_counter()
        return (end - self._started) * 1000

    def __enter__(self) -> "Stopwatch":
        return self.start()

    def __exit__(self, *exc_info) -> None:
        self.stop()


async def login_to_dashboard(
    browser: Browser,
    email: str | None = None,
    password: str | None = None,
    config: UiTestConfig = settings,
):
    """Open the login page, sign in and wait for the dashboard shell.

    Returns the DashboardPage bound to ``browser``.
    """
    # pages import this module for the form dataclasses
    from cempal_ui_tests.pages.dashboard_page import DashboardPage
    from cempal_ui_tests.pages.login_page import LoginPage

    login_page = LoginPage(browser, config)
    await login_page.navigate_to_login()
    await login_page.login(email, password)

    dashboard = DashboardPage(browser, config)
    await dashboard.wait_for_dashboard_load()
    return dashboard
