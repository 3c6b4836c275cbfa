"""Super Admins list and the tenant/group/team assignment modal."""
from __future__ import annotations

import logging
from typing import Dict, List

from playwright.async_api import Error as PlaywrightError

from cempal_ui_tests.browser import ToolError
from cempal_ui_tests.pages.base_page import BasePage, row_xpath, scoped, xpath_literal
from cempal_ui_tests.workflows import AssignmentFormData

logger = logging.getLogger(__name__)

DROPDOWN_DELAY_MS = 1000
SEARCH_DEBOUNCE_MS = 1000

TENANT_OPTION = "//div[@class='ant-select-item-option-content']"
GROUP_OPTION = "//div[contains(@class,'ant-select-item-option-content')]"
TEAM_OPTION = "//div[@title]"
STATUS_COLUMN = 2


def tenant_option(tenant_name: str) -> str:
    return f"{TENANT_OPTION}[normalize-space()={xpath_literal(tenant_name)}]"


def group_option(group_name: str) -> str:
    return f"//div[contains(text(),{xpath_literal(group_name)})]"


def team_option(team_name: str) -> str:
    return f"//div[@title={xpath_literal(team_name)}]"


def validate_assignment_form(data: AssignmentFormData) -> Dict[str, bool]:
    return {
        "tenant": bool(data.tenant_name),
        "group": bool(data.user_group),
        "team": bool(data.team_name),
    }


class UserAssignmentPage(BasePage):
    def default_assignment(self) -> AssignmentFormData:
        return AssignmentFormData.from_config(self.config)

    async def navigate_to_super_admins(self) -> None:
        await self.goto("/super-admins")
        await self.wait_for_page_load()

    async def click_assign_button(self, user_email: str) -> None:
        await self.click_in_row(user_email, self.selectors.assign_button)

    async def click_tenant_dropdown(self) -> None:
        await self.click(self.selectors.tenant_select)

    async def select_tenant(self, tenant_name: str | None = None) -> None:
        tenant_name = self.config.user_assignment.tenant_name if tenant_name is None else tenant_name
        await self.click_tenant_dropdown()
        await self.wait(DROPDOWN_DELAY_MS)
        await self.click(tenant_option(tenant_name))

    async def click_group_dropdown(self) -> None:
        await self.click(self.selectors.group_select)

    async def select_user_group(self, group_name: str | None = None) -> None:
        group_name = self.config.user_assignment.user_group if group_name is None else group_name
        await self.click_group_dropdown()
        await self.wait(DROPDOWN_DELAY_MS)
        await self.click(group_option(group_name))

    async def click_team_dropdown(self) -> None:
        await self.click(self.selectors.team_select)

    async def select_team(self, team_name: str | None = None) -> None:
        team_name = self.config.user_assignment.team_name if team_name is None else team_name
        await self.click_team_dropdown()
        await self.wait(DROPDOWN_DELAY_MS)
        await self.click(team_option(team_name))

    async def click_assign_submit(self) -> None:
        await self.click(self.selectors.assign_submit_button)

    async def assign_user(self, user_email: str, data: AssignmentFormData | None = None) -> None:
        """Open the user's assign modal, pick tenant, group and team, then submit."""
        data = data or self.default_assignment()
        logger.info("Assigning %s to %r / %r / %r", user_email, data.tenant_name, data.user_group, data.team_name)

        await self.click_assign_button(user_email)
        await self.wait_for_element(self.selectors.modal_content)

        await self.select_tenant(data.tenant_name)
        await self.select_user_group(data.user_group)
        await self.select_team(data.team_name)

        await self.click_assign_submit()
        await self.wait_for_navigation()

    async def is_assignment_modal_visible(self) -> bool:
        return await self.is_visible(self.selectors.modal_content)

    async def is_tenant_dropdown_visible(self) -> bool:
        return await self.is_visible(self.selectors.tenant_select)

    async def is_group_dropdown_visible(self) -> bool:
        return await self.is_visible(self.selectors.group_select)

    async def is_team_dropdown_visible(self) -> bool:
        return await self.is_visible(self.selectors.team_select)

    async def _option_values(self, selector: str, attribute: str | None = None) -> List[str]:
        values = []
        for option in await self.browser.locator(selector).all():
            raw = await option.get_attribute(attribute) if attribute else await option.text_content()
            if raw and raw.strip():
                values.append(raw.strip())
        return values

    async def get_available_tenants(self) -> List[str]:
        await self.click_tenant_dropdown()
        await self.wait(DROPDOWN_DELAY_MS)
        return await self._option_values(TENANT_OPTION)

    async def get_available_user_groups(self) -> List[str]:
        await self.click_group_dropdown()
        await self.wait(DROPDOWN_DELAY_MS)
        return await self._option_values(GROUP_OPTION)

    async def get_available_teams(self) -> List[str]:
        await self.click_team_dropdown()
        await self.wait(DROPDOWN_DELAY_MS)
        return await self._option_values(TEAM_OPTION, attribute="title")

    async def _status_text(self, user_email: str) -> str:
        cell = self.browser.locator(row_xpath(user_email)).locator("td").nth(STATUS_COLUMN)
        return (await cell.text_content(timeout=self.timeouts.short)) or ""

    async def is_user_assigned(self, user_email: str) -> bool:
        try:
            return "assigned" in (await self._status_text(user_email)).lower()
        except PlaywrightError:
            return False

    async def get_user_assignment_status(self, user_email: str) -> str:
        try:
            return await self._status_text(user_email)
        except PlaywrightError:
            return "Unknown"

    async def is_super_admins_table_visible(self) -> bool:
        return await self.is_visible(self.selectors.table)

    async def get_super_admins_count(self) -> int:
        try:
            return await self.browser.count(self.selectors.table_rows)
        except ToolError:
            return 0

    async def search_user(self, search_term: str) -> bool:
        return await self.search_table(search_term, SEARCH_DEBOUNCE_MS)

    def validate_assignment_form(self, data: AssignmentFormData) -> Dict[str, bool]:
        return validate_assignment_form(data)

    async def close_assignment_modal(self) -> None:
        await self.click(self.selectors.modal_close)

    async def wait_for_super_admins_load(self) -> None:
        await self.wait_for_element(self.selectors.table)
        await self.wait_for_page_load()

    async def is_assign_button_visible(self, user_email: str) -> bool:
        button = self.browser.locator(row_xpath(user_email)).locator(scoped(self.selectors.assign_button))
        try:
            return await button.first.is_visible()
        except PlaywrightError:
            return False

    async def get_user_details(self, user_email: str) -> Dict[str, str] | None:
        try:
            cells = await self.cell_texts(user_email)
        except ToolError:
            return None
        cells = cells + [""] * (4 - len(cells))
        return {"email": cells[0], "name": cells[1], "status": cells[2], "actions": cells[3]}
