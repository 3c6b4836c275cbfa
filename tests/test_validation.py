"""Local form validation and XPath construction from user data."""
import pytest

from cempal_ui_tests.pages.base_page import row_xpath, scoped, xpath_literal
from cempal_ui_tests.pages.login_page import google_account_tile
from cempal_ui_tests.pages.tenant_management_page import validate_tenant_form
from cempal_ui_tests.pages.user_assignment_page import team_option, tenant_option, validate_assignment_form
from cempal_ui_tests.workflows import AssignmentFormData, TenantFormData


def _tenant(**overrides) -> TenantFormData:
    values = dict(name="ee", domain="dev.cem0pal.craftsmenltd.com", contact_email="s@g.com", address="eee12")
    values.update(overrides)
    return TenantFormData(**values)


class TestTenantValidation:
    def test_recorded_tenant_is_valid(self):
        assert validate_tenant_form(_tenant()) == {
            "tenant_name": True,
            "domain_name": True,
            "contact_email": True,
            "address": True,
        }

    @pytest.mark.parametrize("domain", ["example.com", "a.b.example.co", "x1-y2.example.org"])
    def test_domains_accepted(self, domain):
        assert validate_tenant_form(_tenant(domain=domain))["domain_name"] is True

    @pytest.mark.parametrize("domain", ["ee", "", "-bad.example.com", "bad-.example.com", "example.c0m", "a..b.com"])
    def test_domains_rejected(self, domain):
        assert validate_tenant_form(_tenant(domain=domain))["domain_name"] is False

    @pytest.mark.parametrize("email, ok", [("s@g.com", True), ("ee", False), ("a b@c.com", False), ("a@b", False)])
    def test_contact_email(self, email, ok):
        assert validate_tenant_form(_tenant(contact_email=email))["contact_email"] is ok

    @pytest.mark.parametrize(
        "field, value, key",
        [("contact_email", "s@g.com\n", "contact_email"), ("domain", "example.com\n", "domain_name")],
    )
    def test_trailing_newline_rejected(self, field, value, key):
        assert validate_tenant_form(_tenant(**{field: value}))[key] is False

    def test_blank_name_and_address_rejected(self):
        result = validate_tenant_form(_tenant(name="   ", address=""))
        assert result["tenant_name"] is False
        assert result["address"] is False


class TestAssignmentValidation:
    def test_all_selected(self):
        data = AssignmentFormData(tenant_name="@#$%", user_group="Tenant Admin", team_name="Cutting Shoaib Vai")
        assert validate_assignment_form(data) == {"tenant": True, "group": True, "team": True}

    def test_missing_selection_flagged(self):
        data = AssignmentFormData(tenant_name="", user_group="Tenant Admin", team_name="")
        assert validate_assignment_form(data) == {"tenant": False, "group": True, "team": False}


class TestXPathQuoting:
    def test_plain_value_single_quoted(self):
        assert xpath_literal("qa@example.com") == "'qa@example.com'"

    def test_value_with_apostrophe_double_quoted(self):
        assert xpath_literal("O'Brien") == '"O\'Brien"'

    def test_value_with_both_quotes_uses_concat(self):
        assert xpath_literal("a'b\"c") == "concat('a', \"'\", 'b\"c')"

    def test_leading_and_trailing_apostrophes(self):
        assert xpath_literal("'x\"'") == "concat(\"'\", 'x\"', \"'\")"

    def test_row_xpath_cannot_be_broken_out_of(self):
        hostile = "x')] | //*[contains(.,'"
        xpath = row_xpath(hostile)
        assert xpath == "//tr[td[contains(text(),\"x')] | //*[contains(.,'\")]]"

    def test_option_selectors_quote_values(self):
        assert tenant_option("@#$%") == "//div[@class='ant-select-item-option-content'][normalize-space()='@#$%']"
        assert team_option("Shoaib's Team") == "//div[@title=\"Shoaib's Team\"]"
        assert google_account_tile("me@example.com") == "//div[normalize-space()='me@example.com']"

    @pytest.mark.parametrize(
        "selector, expected",
        [
            ("//button[@type='button']", ".//button[@type='button']"),
            (".//span", ".//span"),
            ("td", "td"),
        ],
    )
    def test_scoped(self, selector, expected):
        assert scoped(selector) == expected
