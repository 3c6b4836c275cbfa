"""Shared configuration for the Cempal Portal UI suite.

Values resolve in this order:
1. environment variable (e.g. CEMPAL_BASE_URL, PLAYWRIGHT_HEADLESS)
2. the repository's .env.defaults file
3. the built-in default below

The resulting ``settings`` object is created once at import and is read-only
for the rest of the run.
"""
from __future__ import annotations

import os
from dataclasses import asdict, dataclass
from typing import Dict
from urllib.parse import urljoin

from cempal_ui_tests.env_defaults import get_env_default

DEFAULT_BASE_URL = "https://dev.cempal.craftsmenltd.com"
SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")


def _setting(key: str, fallback: str = "") -> str:
    value = os.getenv(key)
    if value:
        return value
    return get_env_default(key) or fallback


def _flag(key: str, fallback: str) -> bool:
    return _setting(key, fallback).lower() in {"true", "1", "yes"}


def _int_setting(key: str, fallback: int) -> int:
    raw = _setting(key, str(fallback))
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Credentials:
    email: str
    password: str
    google_email: str


@dataclass(frozen=True)
class TenantDefaults:
    """Tenant fixture used by the create and edit flows."""

    name: str
    domain: str
    contact_email: str
    address: str
    updated_address: str


@dataclass(frozen=True)
class AssignmentDefaults:
    """Super Admin row to assign and the tenant, user group and team to pick."""

    user_email: str
    tenant_name: str
    user_group: str
    team_name: str


@dataclass(frozen=True)
class BrowserOptions:
    browser_type: str = "chromium"
    headless: bool = True
    slow_mo: int = 0
    viewport_width: int = 1920
    viewport_height: int = 1080

    @property
    def viewport(self) -> Dict[str, int]:
        return {"width": self.viewport_width, "height": self.viewport_height}


@dataclass(frozen=True)
class Timeouts:
    """Timeouts in milliseconds."""

    short: int = 5000
    medium: int = 10000
    long: int = 30000
    very_long: int = 60000


@dataclass(frozen=True)
class EnvironmentInfo:
    """Environment of the recorded manual QA session the replay is based on."""

    os: str = "Linux 6.14.0"
    browser: str = "Chrome 141"
    resolution: str = "1920x1080"
    test_date: str = "28 Oct 2025 / 22:35:25 GMT+6"


@dataclass(frozen=True)
class Selectors:
    """Logical selector name -> CSS/XPath string for the portal UI."""

    # Login page
    email_input: str = "input[id='amplify-id-:r2:']"
    password_input: str = "input[id='amplify-id-:r5:']"
    sign_in_button: str = "button[type='submit']"
    google_sign_in_button: str = "//span[@class='amplify-text']"
    reset_password_button: str = "//span[normalize-space()='Reset Password']"
    login_form_area: str = "//div[@class='login gutter-sm']"
    cempal_logo: str = "//img[@alt='Cempal Logo']"
    get_started_button: str = "//span[normalize-space()='Get Started']"

    # Dashboard
    account_circle: str = "//span[@class='material-symbols-outlined medium-icon-style']"
    logout_button: str = "//span[normalize-space()='Logout from Cempal']"
    tenant_logo: str = "//img[@alt='tenantLogo']"
    dashboard_button: str = "//span[normalize-space()='Dashboard']"
    privacy_policy_link: str = "//a[normalize-space()='Privacy Policy']"
    theme_switch: str = "//span[@class='ant-switch-inner']"

    # Tenant management
    tenant_list_link: str = "//a[normalize-space()='Tenant List']"
    create_tenant_button: str = "//span[normalize-space()='Create new Tenant']"
    tenant_name_input: str = "#tenantName"
    domain_name_input: str = "#domainName"
    contact_email_input: str = "#contact"
    address_textarea: str = "#address"
    create_tenant_submit_button: str = "//span[normalize-space()='Create Tenant']"
    update_tenant_button: str = "//span[normalize-space()='Update']"
    send_icon: str = "//svg[@aria-label='send']"

    # User assignment
    super_admins_link: str = "//a[normalize-space()='Super Admins']"
    assign_button: str = "//button[@type='button']//span[contains(text(),'Assign')]"
    tenant_select: str = "#tenantId"
    group_select: str = "#userGroup"
    team_select: str = "#teamId"
    assign_submit_button: str = "//button[@type='submit']//span[contains(text(),'Assign')]"

    # Shared widgets
    modal_content: str = "//div[@class='ant-modal-content']"
    modal_wrap: str = "//div[@class='ant-modal-wrap']"
    modal_close: str = "//*[@fill-rule='evenodd']"
    submit_button: str = "//button[@type='submit']"
    table: str = "//table"
    table_rows: str = "//table//tbody//tr"
    search_input: str = "input[placeholder*='search'], input[placeholder*='Search']"

    def as_dict(self) -> Dict[str, str]:
        return asdict(self)


class UiTestConfig:
    """Configuration for one run of the suite.

    Construct a new instance to re-read the environment; the module-level
    ``settings`` is the instance the suite uses.
    """

    def __init__(self) -> None:
        self.base_url: str = _setting("CEMPAL_BASE_URL", DEFAULT_BASE_URL)

        self.credentials = Credentials(
            email=_setting("CEMPAL_EMAIL"),
            password=_setting("CEMPAL_PASSWORD"),
            google_email=_setting("CEMPAL_GOOGLE_EMAIL"),
        )
        self.tenant = TenantDefaults(
            name=_setting("CEMPAL_TENANT_NAME", "ee"),
            domain=_setting("CEMPAL_TENANT_DOMAIN", "dev.cem0pal.craftsmenltd.com"),
            contact_email=_setting("CEMPAL_TENANT_CONTACT_EMAIL", "s@g.com"),
            address=_setting("CEMPAL_TENANT_ADDRESS", "eee12"),
            updated_address=_setting("CEMPAL_TENANT_UPDATED_ADDRESS", "eee12"),
        )
        self.user_assignment = AssignmentDefaults(
            user_email=_setting("CEMPAL_ASSIGN_USER_EMAIL", self.credentials.google_email),
            tenant_name=_setting("CEMPAL_ASSIGN_TENANT", "@#$%"),
            user_group=_setting("CEMPAL_ASSIGN_USER_GROUP", "Tenant Admin"),
            team_name=_setting("CEMPAL_ASSIGN_TEAM", "Cutting Shoaib Vai"),
        )

        browser_type = _setting("PLAYWRIGHT_BROWSER", "chromium").lower()
        if browser_type not in SUPPORTED_BROWSERS:
            raise ValueError(
                f"PLAYWRIGHT_BROWSER must be one of {', '.join(SUPPORTED_BROWSERS)}, got {browser_type!r}"
            )
        self.browser = BrowserOptions(
            browser_type=browser_type,
            headless=_flag("PLAYWRIGHT_HEADLESS", "true"),
            slow_mo=_int_setting("PLAYWRIGHT_SLOW_MO", 0),
            viewport_width=_int_setting("CEMPAL_VIEWPORT_WIDTH", 1920),
            viewport_height=_int_setting("CEMPAL_VIEWPORT_HEIGHT", 1080),
        )

        self.timeouts = Timeouts()
        self.environment = EnvironmentInfo()
        self.selectors = Selectors()

        self.screenshot_dir: str = _setting("SCREENSHOT_DIR", "screenshots")
        self.e2e_enabled: bool = _flag("CEMPAL_E2E", "false")

        if not self.credentials.password and self.e2e_enabled:
            print("[CONFIG] WARNING: CEMPAL_PASSWORD is empty, logins will fail")

    @property
    def playwright_headless(self) -> bool:
        return self.browser.headless

    def url(self, path: str) -> str:
        """Return an absolute URL for the provided path."""
        return urljoin(self.base_url.rstrip("/") + "/", path.lstrip("/"))

    def describe(self) -> str:
        return (
            f"base_url={self.base_url} browser={self.browser.browser_type} "
            f"headless={self.browser.headless} slow_mo={self.browser.slow_mo}ms "
            f"viewport={self.browser.viewport_width}x{self.browser.viewport_height}"
        )


settings = UiTestConfig()
