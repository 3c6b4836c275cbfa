"""Login screen, including the federated (Google) sign-in entry point."""
from __future__ import annotations

import logging

from cempal_ui_tests.browser import ToolError
from cempal_ui_tests.pages.base_page import BasePage, xpath_literal

logger = logging.getLogger(__name__)

# Indicators the portal shows when authentication is rejected
LOGIN_ERROR_SELECTORS = (
    "text=Invalid credentials",
    "text=User not found",
    "text=Incorrect password",
    "text=Authentication failed",
    "[data-testid='error-message']",
    ".error-message",
    ".alert-danger",
)

EMAIL_ERROR_SELECTORS = (
    "text=Invalid email format",
    "text=Please enter a valid email",
    "[data-testid='email-error']",
    ".field-error",
)


def google_account_tile(google_email: str) -> str:
    return f"//div[normalize-space()={xpath_literal(google_email)}]"


class LoginPage(BasePage):
    async def navigate_to_login(self) -> None:
        await self.goto("/login")
        await self.wait_for_page_load()

    async def enter_email(self, email: str | None = None) -> None:
        await self.fill(self.selectors.email_input, self.config.credentials.email if email is None else email)

    async def enter_password(self, password: str | None = None) -> None:
        await self.fill(
            self.selectors.password_input, self.config.credentials.password if password is None else password
        )

    async def click_sign_in(self) -> None:
        await self.click(self.selectors.sign_in_button)

    async def click_google_sign_in(self) -> None:
        await self.click(self.selectors.google_sign_in_button)

    async def click_reset_password(self) -> None:
        await self.click(self.selectors.reset_password_button)

    async def login(self, email: str | None = None, password: str | None = None) -> None:
        """Fill both fields, submit and wait for the network to settle."""
        email = self.config.credentials.email if email is None else email
        logger.info("Logging in as %s", email)
        await self.enter_email(email)
        await self.enter_password(password)
        await self.click_sign_in()
        await self.wait_for_navigation()

    async def login_with_google(self, google_email: str | None = None) -> None:
        """Start the federated flow and pick the account tile when it is offered."""
        google_email = google_email or self.config.credentials.google_email
        await self.click_google_sign_in()
        await self.wait_for_navigation()

        tile = google_account_tile(google_email)
        if await self.is_visible(tile):
            await self.click(tile)
            await self.wait_for_navigation()

    async def is_login_successful(self) -> bool:
        return await self.exists(self.selectors.tenant_logo, timeout=self.timeouts.medium)

    async def _first_visible_error(self) -> str | None:
        for selector in LOGIN_ERROR_SELECTORS:
            if await self.is_visible(selector):
                return selector
        return None

    async def is_login_failed(self) -> bool:
        return await self._first_visible_error() is not None

    async def get_error_message(self) -> str:
        selector = await self._first_visible_error()
        if selector is None:
            return "No error message found"
        return await self.get_text(selector)

    async def is_password_hidden(self) -> bool:
        input_type = await self.browser.get_attribute(self.selectors.password_input, "type")
        return input_type == "password"

    async def is_google_sign_in_available(self) -> bool:
        return await self.is_visible(self.selectors.google_sign_in_button)

    async def is_reset_password_available(self) -> bool:
        return await self.is_visible(self.selectors.reset_password_button)

    async def validate_email_field(self, email: str) -> bool:
        """Type ``email`` and move focus away; False if the form flags it as invalid."""
        await self.enter_email(email)
        await self.click(self.selectors.password_input)
        for selector in EMAIL_ERROR_SELECTORS:
            if await self.is_visible(selector):
                return False
        return True

    async def clear_email(self) -> None:
        await self.browser.fill(self.selectors.email_input, "")

    async def clear_password(self) -> None:
        await self.browser.fill(self.selectors.password_input, "")

    async def is_login_form_visible(self) -> bool:
        return (
            await self.is_visible(self.selectors.email_input)
            and await self.is_visible(self.selectors.password_input)
            and await self.is_visible(self.selectors.sign_in_button)
        )

    async def get_page_title(self) -> str:
        return await self.get_title()

    async def is_cempal_logo_visible(self) -> bool:
        return await self.is_visible(self.selectors.cempal_logo)

    async def click_cempal_logo(self) -> None:
        await self.click(self.selectors.cempal_logo)

    async def click_get_started(self) -> None:
        await self.click(self.selectors.get_started_button)

    async def click_login_form_area(self) -> None:
        await self.click(self.selectors.login_form_area)

    async def click_google_account(self, google_email: str | None = None) -> None:
        await self.click(google_account_tile(google_email or self.config.credentials.google_email))

    async def has_error_text(self, *texts: str) -> bool:
        """True if any of the given validation texts is shown."""
        for text in texts:
            try:
                await self.browser.wait_for_text(text, timeout=self.timeouts.short)
                return True
            except ToolError:
                continue
        return False
