"""
Security checks against the live portal.

Covers authentication failures with hostile input, session lifetime,
role-based access, client-side validation, password handling, CSRF tokens
and transport/header hardening.
Run with: pytest cempal_ui_tests/tests/test_security.py -m security -v
"""
import pytest

from cempal_ui_tests.config import settings

pytestmark = [pytest.mark.e2e, pytest.mark.security]

SQL_INJECTION = "'; DROP TABLE users; --"
XSS_PAYLOAD = '<script>alert("XSS")</script>'
INVALID_EMAILS = [
    "invalid-email",
    "@domain.com",
    "user@",
    "user@domain",
    "user..name@domain.com",
]
EMAIL_ERRORS = ("Invalid email format", "Please enter a valid email")


class TestAuthenticationSecurity:
    @pytest.mark.asyncio
    async def test_invalid_credentials_rejected(self, login_page):
        await login_page.navigate_to_login()
        await login_page.login("invalid@email.com", "wrongpassword")
        assert await login_page.is_login_failed(), "Wrong credentials must not sign in"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("hostile_email", [SQL_INJECTION, XSS_PAYLOAD], ids=["sql-injection", "xss"])
    async def test_hostile_email_rejected(self, login_page, hostile_email):
        await login_page.navigate_to_login()
        await login_page.enter_email(hostile_email)
        await login_page.enter_password("password")
        await login_page.click_sign_in()
        assert await login_page.is_login_failed(), f"Login with {hostile_email!r} should fail"


class TestSessionManagement:
    @pytest.mark.asyncio
    async def test_session_survives_reload_and_ends_at_logout(self, browser, logged_in, login_page):
        assert await logged_in.is_logged_in()

        await browser.reload()
        assert await logged_in.is_logged_in(), "Session should persist across a reload"

        await logged_in.logout()
        assert await login_page.is_login_form_visible(), "Logout should end the session"


class TestAuthorization:
    @pytest.mark.asyncio
    async def test_super_admin_role(self, logged_in):
        assert await logged_in.has_role("super_admin")

    @pytest.mark.asyncio
    async def test_direct_url_access(self, browser, logged_in):
        await browser.goto(settings.url("/super-admins"))
        assert await logged_in.is_logged_in()


class TestInputValidation:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("email", INVALID_EMAILS)
    async def test_invalid_email_flagged(self, login_page, email):
        await login_page.navigate_to_login()
        await login_page.clear_email()
        await login_page.enter_email(email)
        await login_page.click(login_page.selectors.password_input)
        assert await login_page.has_error_text(*EMAIL_ERRORS), f"No validation message for {email!r}"


class TestPasswordSecurity:
    @pytest.mark.asyncio
    async def test_password_is_masked(self, login_page):
        await login_page.navigate_to_login()
        await login_page.enter_password("testpassword")
        assert await login_page.is_password_hidden()

    @pytest.mark.asyncio
    async def test_weak_password_rejected(self, login_page):
        await login_page.navigate_to_login()
        await login_page.enter_email()
        await login_page.enter_password("123")
        await login_page.click_sign_in()
        assert await login_page.is_login_failed()


class TestCsrfProtection:
    @pytest.mark.asyncio
    async def test_forms_carry_csrf_token(self, browser, logged_in):
        forms = await browser.locator("form").all()
        for index, form in enumerate(forms):
            tokens = await form.locator('input[name*="csrf"], input[name*="token"]').count()
            assert tokens > 0, f"Form #{index} has no CSRF token field"


class TestTransportSecurity:
    @pytest.mark.asyncio
    async def test_http_redirects_to_https(self, browser):
        if not settings.base_url.startswith("https://"):
            pytest.skip("Portal is not served over HTTPS")
        insecure = "http://" + settings.url("/login")[len("https://"):]

        await browser.goto(insecure)
        assert browser.url.startswith("https:"), f"Expected HTTPS after redirect, got {browser.url}"

    @pytest.mark.asyncio
    async def test_content_security_policy_present(self, browser):
        result = await browser.goto(settings.url("/login"))
        csp = result["headers"].get("content-security-policy", "")
        assert csp.strip(), "Content-Security-Policy header missing"

    def test_csp_header_without_browser(self, api_client):
        response = api_client.get("/login")
        if response.is_redirect:
            response = api_client.get(response.headers["location"])
        assert response.headers.get("content-security-policy"), "Content-Security-Policy header missing"
