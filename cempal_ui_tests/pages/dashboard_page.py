"""Dashboard shell: account menu, navigation links and the theme switch."""
from __future__ import annotations

import logging

from cempal_ui_tests.pages.base_page import BasePage

logger = logging.getLogger(__name__)

DROPDOWN_DELAY_MS = 1000
THEME_TRANSITION_MS = 1000


class DashboardPage(BasePage):
    def _role_selectors(self) -> dict[str, str]:
        return {
            "super_admin": self.selectors.super_admins_link,
            "tenant_admin": self.selectors.tenant_list_link,
            "team_lead": "//a[contains(text(),'Team')]",
            "employee": "//a[contains(text(),'Profile')]",
        }

    async def wait_for_dashboard_load(self) -> None:
        await self.wait_for_element(self.selectors.tenant_logo)
        await self.wait_for_page_load()

    async def click_account_circle(self) -> None:
        await self.click(self.selectors.account_circle)

    async def click_logout(self) -> None:
        await self.click(self.selectors.logout_button)

    async def logout(self) -> None:
        await self.click_account_circle()
        await self.wait(DROPDOWN_DELAY_MS)
        await self.click_logout()
        await self.wait_for_navigation()
        logger.info("Logged out")

    async def click_tenant_logo(self) -> None:
        await self.click(self.selectors.tenant_logo)

    async def click_dashboard_button(self) -> None:
        await self.click(self.selectors.dashboard_button)

    async def click_privacy_policy(self) -> None:
        await self.click(self.selectors.privacy_policy_link)

    async def navigate_to_tenant_list(self) -> None:
        await self.click(self.selectors.tenant_list_link)
        await self.wait_for_navigation()

    async def navigate_to_super_admins(self) -> None:
        await self.click(self.selectors.super_admins_link)
        await self.wait_for_navigation()

    async def toggle_theme(self) -> None:
        await self.click(self.selectors.theme_switch)
        await self.wait(THEME_TRANSITION_MS)

    async def is_logged_in(self) -> bool:
        return await self.exists(self.selectors.tenant_logo, timeout=self.timeouts.short)

    async def is_account_dropdown_visible(self) -> bool:
        return await self.is_visible(self.selectors.logout_button)

    async def is_tenant_logo_visible(self) -> bool:
        return await self.is_visible(self.selectors.tenant_logo)

    async def is_dashboard_button_visible(self) -> bool:
        return await self.is_visible(self.selectors.dashboard_button)

    async def is_privacy_policy_visible(self) -> bool:
        return await self.is_visible(self.selectors.privacy_policy_link)

    async def is_tenant_list_visible(self) -> bool:
        return await self.is_visible(self.selectors.tenant_list_link)

    async def is_super_admins_visible(self) -> bool:
        return await self.is_visible(self.selectors.super_admins_link)

    async def get_current_theme(self) -> str:
        """'dark' when the body carries a dark class, otherwise 'light'."""
        class_name = await self.browser.get_attribute("body", "class")
        return "dark" if class_name and "dark" in class_name else "light"

    async def is_theme_toggle_available(self) -> bool:
        return await self.is_visible(self.selectors.theme_switch)

    async def navigate_to_dashboard(self) -> None:
        await self.goto("/")
        await self.wait_for_dashboard_load()

    async def is_page_loaded(self) -> bool:
        return await self.exists(self.selectors.tenant_logo, timeout=self.timeouts.medium)

    async def get_dashboard_title(self) -> str:
        return await self.get_title()

    async def is_navigation_menu_visible(self) -> bool:
        for selector in (
            self.selectors.dashboard_button,
            self.selectors.tenant_list_link,
            self.selectors.super_admins_link,
        ):
            if await self.is_visible(selector):
                return True
        return False

    async def wait_for_navigation_item(self, item_text: str) -> None:
        await self.wait_for_text(item_text)

    async def has_role(self, role: str) -> bool:
        """Infer a role from the navigation landmarks it unlocks."""
        selector = self._role_selectors().get(role.lower())
        if selector is None:
            return False
        return await self.is_visible(selector)
