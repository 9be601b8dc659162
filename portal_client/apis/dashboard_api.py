from __future__ import annotations

import math
from typing import Any

from portal_client.apis.base import DomainApi, page_params
from portal_client.endpoints import resolve
from portal_client.envelope import Empty, Items
from portal_client.errors import validation_error


class DashboardApi(DomainApi):
    """Self-service endpoints for the signed-in employee."""

    def request_advance(self, amount: Any, payroll_month: str) -> Any:
        try:
            value = float(amount)
        except (TypeError, ValueError):
            value = None
        if value is None or not math.isfinite(value) or value < 1:
            raise validation_error("Amount must be a number greater than or equal to 1", field="amount")
        if not isinstance(payroll_month, str) or not payroll_month.strip():
            raise validation_error("Payroll month is required", field="payrollMonth")

        body = {
            "amount": int(value) if value.is_integer() else value,
            "payrollMonth": payroll_month.strip(),
        }
        return self._call("POST", resolve("dashboard.advances"), "Failed to request advance", payload=body)

    def get_employee_advances(self, page: int = 1, limit: int = 10) -> Items | Empty:
        return self._list(resolve("dashboard.advances"), "Failed to fetch advances", params=page_params(page, limit))

    def get_employee_leaves(
        self,
        page: int = 1,
        limit: int = 10,
        status: str | None = None,
        search: str | None = None,
    ) -> Items | Empty:
        return self._list(
            resolve("dashboard.leaves"),
            "Failed to fetch leaves",
            params=page_params(page, limit, status=status, search=search),
            optional=True,
        )

    def submit_leave(self, leave_data: dict[str, Any]) -> Any:
        return self._record("POST", resolve("dashboard.leaves"), "Failed to submit leave", payload=leave_data)

    def get_employee_tickets(self, page: int = 1, limit: int = 10) -> Items | Empty:
        return self._list(
            resolve("dashboard.tickets"),
            "Failed to fetch tickets",
            params=page_params(page, limit),
            optional=True,
        )
