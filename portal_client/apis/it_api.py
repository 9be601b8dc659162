from __future__ import annotations

import logging
from typing import Any

from portal_client.apis.base import DomainApi, page_params
from portal_client.endpoints import resolve
from portal_client.envelope import EMPTY, Empty, Items
from portal_client.errors import ErrorKind, PortalApiError

logger = logging.getLogger(__name__)

OBJECT_ID_CAST_FAILURE = "Cast to ObjectId failed"


class ItApi(DomainApi):
    def _optional_list(self, path: str, default_message: str, params: dict[str, Any]) -> Items | Empty:
        try:
            return self._list(path, default_message, params=params, optional=True)
        except PortalApiError as exc:
            # The backend reports a malformed department reference this way; the list is simply empty.
            if exc.kind is ErrorKind.APPLICATION and OBJECT_ID_CAST_FAILURE in exc.message:
                logger.info("%s returned an ObjectId cast failure; showing no data", path)
                return EMPTY
            raise

    # Employees

    def list_employees(self) -> Items | Empty:
        return self._list(resolve("it.employees"), "Failed to fetch IT employees")

    def get_rating(self, employee_id: str) -> Any:
        return self._record("GET", resolve("it.employee_rating", id=employee_id), "Failed to fetch rating")

    def update_rating(self, employee_id: str, rating_data: dict[str, Any]) -> Any:
        return self._record(
            "PUT",
            resolve("it.employee_rating", id=employee_id),
            "Failed to update rating",
            payload=rating_data,
        )

    # Projects

    def list_projects(
        self,
        page: int = 1,
        limit: int = 10,
        status: str | None = None,
        search: str | None = None,
    ) -> Items | Empty:
        return self._optional_list(
            resolve("it.projects"),
            "Failed to fetch projects",
            page_params(page, limit, status=status, search=search),
        )

    def create_project(self, project_data: dict[str, Any]) -> Any:
        return self._record("POST", resolve("it.projects"), "Failed to create project", payload=project_data)

    def update_project(self, project_id: str, project_data: dict[str, Any]) -> Any:
        return self._record(
            "PUT",
            resolve("it.project", id=project_id),
            "Failed to update project",
            payload=project_data,
        )

    def delete_project(self, project_id: str) -> Any:
        return self._record("DELETE", resolve("it.project", id=project_id), "Failed to delete project")

    # Tickets

    def list_tickets(self, page: int = 1, limit: int = 10, status: str | None = None) -> Items | Empty:
        return self._optional_list(
            resolve("it.tickets"),
            "Failed to fetch tickets",
            page_params(page, limit, status=status),
        )

    def create_ticket(self, ticket_data: dict[str, Any]) -> Any:
        return self._record("POST", resolve("it.tickets"), "Failed to create ticket", payload=ticket_data)

    def update_ticket(self, ticket_id: str, ticket_data: dict[str, Any]) -> Any:
        return self._record(
            "PUT",
            resolve("it.ticket", id=ticket_id),
            "Failed to update ticket",
            payload=ticket_data,
        )

    def delete_ticket(self, ticket_id: str) -> Any:
        return self._record("DELETE", resolve("it.ticket", id=ticket_id), "Failed to delete ticket")

    # Leaves

    def submit_leave(self, leave_data: dict[str, Any]) -> Any:
        return self._record("POST", resolve("it.leaves"), "Failed to submit leave", payload=leave_data)
