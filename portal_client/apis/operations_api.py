from __future__ import annotations

from typing import Any

from portal_client.apis.base import DomainApi, page_params
from portal_client.endpoints import resolve
from portal_client.envelope import Empty, Items


class OperationsApi(DomainApi):
    def list_employees(self) -> Items | Empty:
        return self._list(resolve("operation.employees"), "Failed to fetch operation employees")

    def get_rating(self, employee_id: str) -> Any:
        return self._record("GET", resolve("operation.employee_rate", id=employee_id), "Failed to fetch rating")

    def update_rating(self, employee_id: str, rating_data: dict[str, Any]) -> Any:
        return self._record(
            "PUT",
            resolve("operation.employee_rate", id=employee_id),
            "Failed to update rating",
            payload=rating_data,
        )

    # Campaigns

    def list_campaigns(self, page: int = 1, limit: int = 10, status: str | None = None) -> Items | Empty:
        return self._list(
            resolve("operation.campaigns"),
            "Failed to fetch campaigns",
            params=page_params(page, limit, status=status),
            optional=True,
        )

    def create_campaign(self, campaign_data: dict[str, Any]) -> Any:
        return self._record("POST", resolve("operation.campaigns"), "Failed to create campaign", payload=campaign_data)

    def update_campaign(self, campaign_id: str, campaign_data: dict[str, Any]) -> Any:
        return self._record(
            "PUT",
            resolve("operation.campaign", id=campaign_id),
            "Failed to update campaign",
            payload=campaign_data,
        )

    def delete_campaign(self, campaign_id: str) -> Any:
        return self._record("DELETE", resolve("operation.campaign", id=campaign_id), "Failed to delete campaign")

    # Leaves

    def list_department_leaves(self, department_id: str, page: int = 1, limit: int = 10) -> Items | Empty:
        return self._list(
            resolve("operation.department_leaves", department_id=department_id),
            "Failed to fetch department leaves",
            params=page_params(page, limit),
        )

    def add_leave(self, leave_data: dict[str, Any]) -> Any:
        return self._record("POST", resolve("operation.leaves"), "Failed to add leave", payload=leave_data)

    def update_leave_status(self, leave_id: str, leave_data: dict[str, Any]) -> Any:
        return self._record(
            "PUT",
            resolve("operation.leave", id=leave_id),
            "Failed to update leave status",
            payload=leave_data,
        )

    def delete_leave(self, leave_id: str) -> Any:
        return self._record("DELETE", resolve("operation.leave", id=leave_id), "Failed to delete leave")

    # Tickets

    def submit_ticket(self, ticket_data: dict[str, Any]) -> Any:
        return self._record("POST", resolve("operation.tickets"), "Failed to submit ticket", payload=ticket_data)
