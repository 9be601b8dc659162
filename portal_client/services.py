from __future__ import annotations

from typing import Callable

from portal_client.apis import (
    AccountingApi,
    DashboardApi,
    HrApi,
    ItApi,
    MarketingApi,
    OperationsApi,
    SalesApi,
)
from portal_client.auth import AuthManager
from portal_client.envelope import Empty, Items
from portal_client.models import AuthState, ListView
from portal_client.pagination import Fetcher, PagedList
from portal_client.permissions import MANAGE_ROLES, VIEW_ROLES

LIST_VIEWS: tuple[ListView, ...] = (
    ListView("hr.employees", "Employees", ("name", "email", "position", "department"), VIEW_ROLES),
    ListView("hr.departments", "Departments", ("name", "description")),
    ListView("hr.leaves", "Leaves", ("employee", "leaveType", "startDate", "endDate", "status"), VIEW_ROLES),
    ListView("hr.payroll", "Payroll", ("employee", "month", "netSalary", "status"), MANAGE_ROLES),
    ListView("hr.advances", "Advances", ("employee", "amount", "payrollMonth", "status"), MANAGE_ROLES),
    ListView("sales.customers", "Customers", ("name", "email", "phone", "status")),
    ListView("it.projects", "IT Projects", ("name", "status", "startDate", "endDate")),
    ListView("it.tickets", "IT Tickets", ("title", "priority", "status")),
    ListView("marketing.projects", "Marketing Projects", ("name", "customerName", "status")),
    ListView("operation.campaigns", "Campaigns", ("name", "status", "startDate", "endDate")),
    ListView("accounting.invoices", "Invoices", ("client_name", "amount", "due_date", "status")),
    ListView("dashboard.advances", "My Advances", ("amount", "payrollMonth", "status")),
)


class PortalService:
    def __init__(
        self,
        auth_manager: AuthManager,
        hr_api: HrApi,
        sales_api: SalesApi,
        it_api: ItApi,
        marketing_api: MarketingApi,
        operations_api: OperationsApi,
        accounting_api: AccountingApi,
        dashboard_api: DashboardApi,
        page_size: int,
        count_probe_limit: int,
        request_timeout_seconds: int,
    ):
        self._auth_manager = auth_manager
        self.hr = hr_api
        self.sales = sales_api
        self.it = it_api
        self.marketing = marketing_api
        self.operations = operations_api
        self.accounting = accounting_api
        self.dashboard = dashboard_api
        self._page_size = page_size
        self._count_probe_limit = count_probe_limit
        self._request_timeout_seconds = request_timeout_seconds

    @property
    def request_timeout_seconds(self) -> int:
        return self._request_timeout_seconds

    def auth_state(self) -> AuthState:
        return self._auth_manager.get_auth_state()

    def sign_in(self, email: str, password: str) -> AuthState:
        return self._auth_manager.sign_in(email, password)

    def sign_out(self) -> None:
        self._auth_manager.sign_out()

    def list_views(self) -> tuple[ListView, ...]:
        return LIST_VIEWS

    def paged_list(self, key: str) -> PagedList:
        return PagedList(self._fetcher(key), page_size=self._page_size, probe_limit=self._count_probe_limit)

    def _fetcher(self, key: str) -> Fetcher:
        fetchers: dict[str, Callable[[int, int], Items | Empty]] = {
            "hr.employees": self.hr.list_employees,
            "hr.departments": lambda page, limit: self.hr.list_departments(),
            "hr.leaves": self.hr.list_leaves,
            "hr.payroll": self.hr.list_payroll,
            "hr.advances": lambda page, limit: self.hr.list_advances(page, limit),
            "sales.customers": lambda page, limit: self.sales.list_customers({"page": page, "limit": limit}),
            "it.projects": lambda page, limit: self.it.list_projects(page, limit),
            "it.tickets": lambda page, limit: self.it.list_tickets(page, limit),
            "marketing.projects": self.marketing.list_projects,
            "operation.campaigns": lambda page, limit: self.operations.list_campaigns(page, limit),
            "accounting.invoices": lambda page, limit: self.accounting.list_invoices(),
            "dashboard.advances": self.dashboard.get_employee_advances,
        }
        if key not in fetchers:
            raise KeyError(f"Unknown list view: {key}")
        return fetchers[key]
