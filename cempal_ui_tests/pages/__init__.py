from cempal_ui_tests.pages.base_page import BasePage
from cempal_ui_tests.pages.dashboard_page import DashboardPage
from cempal_ui_tests.pages.login_page import LoginPage
from cempal_ui_tests.pages.tenant_management_page import TenantManagementPage
from cempal_ui_tests.pages.user_assignment_page import UserAssignmentPage

__all__ = ["BasePage", "DashboardPage", "LoginPage", "TenantManagementPage", "UserAssignmentPage"]
