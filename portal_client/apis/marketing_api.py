from __future__ import annotations

import logging
from typing import Any

from portal_client.apis.base import DomainApi, page_params
from portal_client.endpoints import resolve
from portal_client.envelope import Empty, Items
from portal_client.errors import PortalApiError

logger = logging.getLogger(__name__)


def _route_missing(error: PortalApiError) -> bool:
    """True when the backend answered as if the department route does not exist."""
    if error.status_code == 404:
        return True
    if error.status_code != 500 or not isinstance(error.payload, dict):
        return False
    detail = str(error.payload.get("error") or "")
    message = str(error.payload.get("message") or "").lower()
    return detail == "Page not found" or "internal server error" in message


class MarketingApi(DomainApi):
    # Employees

    def list_employees(self) -> Items | Empty:
        return self._list(resolve("marketing.employees"), "Failed to fetch marketing employees")

    def get_rating(self, employee_id: str) -> Any:
        return self._record("GET", resolve("marketing.employee_rating", id=employee_id), "Failed to fetch rating")

    def update_rating(self, employee_id: str, rating_data: dict[str, Any]) -> Any:
        return self._record(
            "PUT",
            resolve("marketing.employee_rating", id=employee_id),
            "Failed to update rating",
            payload=rating_data,
        )

    # Projects

    def list_projects(self, page: int = 1, limit: int = 10) -> Items | Empty:
        return self._list(
            resolve("marketing.projects"),
            "Failed to fetch projects",
            params=page_params(page, limit),
            optional=True,
        )

    def create_project(self, project_data: dict[str, Any]) -> Any:
        return self._record("POST", resolve("marketing.projects"), "Failed to create project", payload=project_data)

    def update_project(self, project_id: str, project_data: dict[str, Any]) -> Any:
        return self._record(
            "PUT",
            resolve("marketing.project", id=project_id),
            "Failed to update project",
            payload=project_data,
        )

    def delete_project(self, project_id: str) -> Any:
        return self._record("DELETE", resolve("marketing.project", id=project_id), "Failed to delete project")

    # Tickets

    def list_tickets(self) -> Items | Empty:
        return self._list(resolve("marketing.tickets"), "Failed to fetch tickets", optional=True)

    def create_ticket(self, ticket_data: dict[str, Any]) -> Any:
        return self._record("POST", resolve("marketing.tickets"), "Failed to create ticket", payload=ticket_data)

    def update_ticket(self, ticket_id: str, ticket_data: dict[str, Any]) -> Any:
        return self._record(
            "PUT",
            resolve("marketing.ticket", id=ticket_id),
            "Failed to update ticket",
            payload=ticket_data,
        )

    def delete_ticket(self, ticket_id: str) -> Any:
        return self._record("DELETE", resolve("marketing.ticket", id=ticket_id), "Failed to delete ticket")

    # Leaves

    def list_leaves(
        self,
        department_id: str | None = None,
        page: int = 1,
        limit: int = 10,
        status: str | None = None,
        search: str | None = None,
    ) -> Items | Empty:
        params = page_params(page, limit, status=status, search=search)
        if department_id:
            path = resolve("marketing.department_leaves", department_id=department_id)
            try:
                return self._list(path, "Failed to fetch department leaves", params=params)
            except PortalApiError as exc:
                if not _route_missing(exc):
                    raise
                logger.info("Department leaves route unavailable, using the marketing leaves list")
        return self._list(resolve("marketing.leaves"), "Failed to fetch leaves", params=params)

    def submit_leave(self, leave_data: dict[str, Any]) -> Any:
        return self._record("POST", resolve("marketing.leaves"), "Failed to submit leave", payload=leave_data)

    def update_leave_status(self, leave_id: str, leave_data: dict[str, Any]) -> Any:
        return self._on_leave_routes("PUT", leave_id, "Failed to update leave status", payload=leave_data)

    def delete_leave(self, leave_id: str) -> Any:
        return self._on_leave_routes("DELETE", leave_id, "Failed to delete leave")

    def _on_leave_routes(self, method: str, leave_id: str, default_message: str, payload: Any = None) -> Any:
        """Try the marketing leave route, then the global one if the first is missing."""
        try:
            return self._record(method, resolve("marketing.leave", id=leave_id), default_message, payload=payload)
        except PortalApiError as exc:
            if not _route_missing(exc):
                raise
            logger.info("Marketing leave route unavailable for %s, using the global leaves route", method)
        return self._record(method, resolve("leaves.global", id=leave_id), default_message, payload=payload)

    # Customers

    def list_customers(self, page: int = 1, limit: int = 10) -> Items | Empty:
        return self._list(resolve("marketing.customers"), "Failed to fetch customers", params=page_params(page, limit))

    def list_customer_projects(
        self,
        customer_name: str,
        page: int = 1,
        limit: int = 10,
        status: str | None = None,
    ) -> Items | Empty:
        return self._list(
            resolve("marketing.customer_projects", customer_name=customer_name),
            "Failed to fetch customer projects",
            params=page_params(page, limit, status=status),
            optional=True,
        )
