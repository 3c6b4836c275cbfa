"""Tenant list screen with its create, edit, details and groups modals."""
from __future__ import annotations

import logging
import re
from typing import Dict, Mapping

from cempal_ui_tests.browser import ToolError
from cempal_ui_tests.pages.base_page import BasePage, xpath_literal
from cempal_ui_tests.workflows import TenantFormData

logger = logging.getLogger(__name__)

TENANT_ACTIONS = {
    "read_more": ".//span[@aria-label='read_more']",
    "edit_note": ".//span[@aria-label='edit_note']",
    "groups": ".//span[@aria-label='groups']",
}

# One or more dot-separated labels followed by an alphabetic TLD. Wider than
# the portal's single-label rule so multi-label hosts such as
# dev.cem0pal.craftsmenltd.com validate (see "Domain pattern" in DESIGN.md).
DOMAIN_PATTERN = re.compile(r"(?=.{1,253}\Z)(?:[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?\.)+[a-zA-Z]{2,}")
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
SEARCH_DEBOUNCE_MS = 1000


def validate_tenant_form(data: TenantFormData) -> Dict[str, bool]:
    """Local sanity check of tenant fields; the portal remains the authority."""
    return {
        "tenant_name": bool(data.name and data.name.strip()),
        "domain_name": bool(data.domain and DOMAIN_PATTERN.fullmatch(data.domain)),
        "contact_email": bool(data.contact_email and EMAIL_PATTERN.fullmatch(data.contact_email)),
        "address": bool(data.address and data.address.strip()),
    }


class TenantManagementPage(BasePage):
    def default_tenant(self) -> TenantFormData:
        return TenantFormData.from_config(self.config)

    async def navigate_to_tenant_list(self) -> None:
        await self.goto("/tenant-list")
        await self.wait_for_page_load()

    async def click_create_new_tenant(self) -> None:
        await self.click(self.selectors.create_tenant_button)

    async def fill_tenant_name(self, name: str | None = None) -> None:
        await self.fill(self.selectors.tenant_name_input, self.config.tenant.name if name is None else name)

    async def fill_domain_name(self, domain: str | None = None) -> None:
        await self.fill(self.selectors.domain_name_input, self.config.tenant.domain if domain is None else domain)

    async def fill_contact_email(self, email: str | None = None) -> None:
        await self.fill(
            self.selectors.contact_email_input, self.config.tenant.contact_email if email is None else email
        )

    async def fill_address(self, address: str | None = None) -> None:
        await self.fill(self.selectors.address_textarea, self.config.tenant.address if address is None else address)

    async def click_create_tenant_submit(self) -> None:
        await self.click(self.selectors.create_tenant_submit_button)

    async def click_update_tenant(self) -> None:
        await self.click(self.selectors.update_tenant_button)

    async def create_tenant(self, data: TenantFormData | None = None) -> None:
        data = data or self.default_tenant()
        problems = [field for field, ok in self.validate_tenant_form(data).items() if not ok]
        if problems:
            logger.warning("Submitting tenant %r with locally invalid fields: %s", data.name, ", ".join(problems))

        await self.click_create_new_tenant()
        await self.wait_for_element(self.selectors.modal_content)

        await self.fill_tenant_name(data.name)
        await self.fill_domain_name(data.domain)
        await self.fill_contact_email(data.contact_email)
        await self.fill_address(data.address)

        await self.click_create_tenant_submit()
        await self.wait_for_navigation()
        logger.info("Submitted tenant %r", data.name)

    async def find_tenant_in_list(self, tenant_name: str) -> bool:
        return await self.exists(f"//td[contains(text(),{xpath_literal(tenant_name)})]", timeout=self.timeouts.short)

    async def click_tenant_action(self, tenant_name: str, action: str) -> None:
        """Click the read_more, edit_note or groups icon in the tenant's row."""
        if action not in TENANT_ACTIONS:
            raise ValueError(f"Unknown tenant action {action!r}; expected one of {', '.join(TENANT_ACTIONS)}")
        await self.click_in_row(tenant_name, TENANT_ACTIONS[action])

    async def click_close_modal(self) -> None:
        await self.click(self.selectors.modal_close)

    async def edit_tenant(self, tenant_name: str, updates: Mapping[str, str]) -> None:
        """Open the edit modal and overwrite only the fields present in ``updates``.

        Keys: name, domain, contact_email, address.
        """
        await self.click_tenant_action(tenant_name, "edit_note")
        await self.wait_for_element(self.selectors.modal_wrap)

        if updates.get("name"):
            await self.fill_tenant_name(updates["name"])
        if updates.get("domain"):
            await self.fill_domain_name(updates["domain"])
        if updates.get("contact_email"):
            await self.fill_contact_email(updates["contact_email"])
        if updates.get("address"):
            await self.fill_address(updates["address"])

        await self.click_update_tenant()
        await self.wait_for_navigation()

    async def is_create_tenant_modal_visible(self) -> bool:
        return await self.is_visible(self.selectors.modal_content)

    async def is_edit_tenant_modal_visible(self) -> bool:
        return await self.is_visible(self.selectors.modal_wrap)

    def validate_tenant_form(self, data: TenantFormData) -> Dict[str, bool]:
        return validate_tenant_form(data)

    async def get_tenant_list_count(self) -> int:
        try:
            return await self.browser.count(self.selectors.table_rows)
        except ToolError:
            return 0

    async def search_tenant(self, search_term: str) -> bool:
        return await self.search_table(search_term, SEARCH_DEBOUNCE_MS)

    async def is_tenant_table_visible(self) -> bool:
        return await self.is_visible(self.selectors.table)

    async def get_tenant_details(self, tenant_name: str) -> Dict[str, str] | None:
        """First four cells of the tenant's row, or None if the row cannot be read."""
        try:
            cells = await self.cell_texts(tenant_name)
        except ToolError:
            return None
        cells = cells + [""] * (4 - len(cells))
        return {"name": cells[0], "domain": cells[1], "contact_email": cells[2], "address": cells[3]}

    async def tenant_exists(self, tenant_name: str) -> bool:
        return await self.find_tenant_in_list(tenant_name)

    async def wait_for_tenant_list_load(self) -> None:
        await self.wait_for_element(self.selectors.table)
        await self.wait_for_page_load()

    async def is_create_tenant_button_visible(self) -> bool:
        return await self.is_visible(self.selectors.create_tenant_button)

    async def clear_tenant_form(self) -> None:
        for selector in (
            self.selectors.tenant_name_input,
            self.selectors.domain_name_input,
            self.selectors.contact_email_input,
            self.selectors.address_textarea,
        ):
            await self.browser.fill(selector, "")

    async def click_send(self) -> None:
        await self.click(self.selectors.send_icon)

    async def click_modal_content(self) -> None:
        await self.click(self.selectors.modal_content)

    async def click_modal_wrap(self) -> None:
        await self.click(self.selectors.modal_wrap)

    async def click_address_field(self) -> None:
        await self.click(self.selectors.address_textarea)

    async def click_submit(self) -> None:
        await self.click(self.selectors.submit_button)
