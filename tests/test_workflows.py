"""Form data builders, the stopwatch and the shared login flow."""
from unittest.mock import AsyncMock

import pytest

from cempal_ui_tests.pages import DashboardPage
from cempal_ui_tests.pages.tenant_management_page import validate_tenant_form
from cempal_ui_tests.workflows import (
    AssignmentFormData,
    Stopwatch,
    TenantFormData,
    generate_tenant_data,
    login_to_dashboard,
)


def test_form_data_from_config(config):
    tenant = TenantFormData.from_config(config)
    assert (tenant.name, tenant.domain, tenant.contact_email, tenant.address) == (
        "ee",
        "dev.cem0pal.craftsmenltd.com",
        "s@g.com",
        "eee12",
    )

    assignment = AssignmentFormData.from_config(config)
    assert assignment == AssignmentFormData("@#$%", "Tenant Admin", "Cutting Shoaib Vai")


def test_generated_tenants_are_unique_and_valid():
    first = generate_tenant_data("qa")
    second = generate_tenant_data("qa")

    assert first.name != second.name
    assert first.name.startswith("qa-")
    assert all(validate_tenant_form(first).values())


class TestStopwatch:
    def test_measures_elapsed_time(self):
        with Stopwatch() as watch:
            sum(range(1000))
        assert watch.elapsed_ms >= 0
        frozen = watch.elapsed_ms
        assert watch.elapsed_ms == frozen

    def test_unstarted_reads_zero(self):
        assert Stopwatch().elapsed_ms == 0.0

    def test_stop_without_start_raises(self):
        with pytest.raises(RuntimeError, match="never started"):
            Stopwatch().stop()


@pytest.mark.asyncio
async def test_login_to_dashboard(browser, config, mock_page):
    dashboard = await login_to_dashboard(browser, config=config)

    assert isinstance(dashboard, DashboardPage)
    assert mock_page.goto.await_args.args[0] == "https://portal.example.test/login"
    filled = [call.args[1] for call in mock_page.fill.await_args_list]
    assert filled == ["admin@example.test", "secret"]
    waited = [call.args[0] for call in mock_page.wait_for_selector.await_args_list]
    assert config.selectors.tenant_logo in waited


@pytest.mark.asyncio
async def test_login_to_dashboard_with_explicit_credentials(browser, config, mock_page):
    mock_page.fill = AsyncMock()
    await login_to_dashboard(browser, "other@example.test", "pw", config=config)
    assert [call.args[1] for call in mock_page.fill.await_args_list] == ["other@example.test", "pw"]
