from __future__ import annotations

from typing import Any

from portal_client.apis.base import DomainApi
from portal_client.endpoints import resolve
from portal_client.envelope import Empty, Items


class SalesApi(DomainApi):
    def list_customers(self, params: dict[str, Any] | None = None) -> Items | Empty:
        return self._list(resolve("sales.customers"), "Failed to fetch customers", params=params or None)

    def get_customer(self, customer_id: str) -> Any:
        return self._record("GET", resolve("sales.customer", id=customer_id), "Failed to fetch customer")

    def add_customer(self, customer_data: dict[str, Any]) -> Any:
        return self._record("POST", resolve("sales.customers"), "Failed to add customer", payload=customer_data)

    def update_customer(self, customer_id: str, customer_data: dict[str, Any]) -> Any:
        return self._record(
            "PUT",
            resolve("sales.customer", id=customer_id),
            "Failed to update customer",
            payload=customer_data,
        )

    def delete_customer(self, customer_id: str) -> Any:
        return self._call("DELETE", resolve("sales.customer", id=customer_id), "Failed to delete customer")

    def list_sales_employees(self) -> Items | Empty:
        return self._list(resolve("sales.employees"), "Failed to fetch sales employees")

    def list_follow_ups(self, params: dict[str, Any] | None = None) -> Items | Empty:
        return self._list(resolve("sales.follow_ups"), "Failed to fetch follow-ups", params=params or None)

    def mark_follow_up_contacted(self, follow_up_id: str) -> Any:
        return self._record(
            "PATCH",
            resolve("sales.follow_up_status", id=follow_up_id),
            "Failed to update follow-up status",
            payload={"id": follow_up_id},
        )

    def reschedule_follow_up(self, follow_up_id: str, new_date: str) -> Any:
        return self._record(
            "PATCH",
            resolve("sales.follow_up_reschedule", id=follow_up_id),
            "Failed to reschedule follow-up",
            payload={"newDate": new_date},
        )

    # Reports are optional: a missing or forbidden report reads as "no data".

    def my_customers_report(self) -> Items | Empty:
        return self._list(resolve("sales.report_my_customers"), "Failed to fetch customers report", optional=True)

    def team_performance_report(self) -> Items | Empty:
        return self._list(
            resolve("sales.report_team_performance"),
            "Failed to fetch team performance report",
            optional=True,
        )

    def services_demand_report(self) -> Items | Empty:
        return self._list(
            resolve("sales.report_services_demand"),
            "Failed to fetch services demand report",
            optional=True,
        )
