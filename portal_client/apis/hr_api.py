from __future__ import annotations

from typing import Any

from portal_client.apis.base import DomainApi, page_params
from portal_client.endpoints import resolve
from portal_client.envelope import Empty, Items

NEWEST_FIRST = {"sortBy": "createdAt", "sortOrder": "desc"}


class HrApi(DomainApi):
    # Employees

    def list_employees(self, page: int = 1, limit: int = 10) -> Items | Empty:
        return self._list(resolve("hr.employees_hr_dept"), "Failed to fetch employees", params=page_params(page, limit))

    def get_employee(self, employee_id: str) -> Any:
        return self._record("GET", resolve("hr.employee", id=employee_id), "Failed to fetch employee details")

    def add_employee(self, employee_data: dict[str, Any]) -> Any:
        return self._record("POST", resolve("hr.employees"), "Failed to add employee", payload=employee_data)

    def update_employee(self, employee_id: str, employee_data: dict[str, Any]) -> Any:
        return self._record(
            "PUT",
            resolve("hr.employee", id=employee_id),
            "Failed to update employee",
            payload=employee_data,
        )

    def delete_employee(self, employee_id: str) -> Any:
        return self._call("DELETE", resolve("hr.employee", id=employee_id), "Failed to delete employee")

    # Departments

    def list_departments(self) -> Items | Empty:
        return self._list(resolve("hr.departments"), "Failed to fetch departments")

    def add_department(self, department_data: dict[str, Any]) -> Any:
        return self._record("POST", resolve("hr.departments"), "Failed to add department", payload=department_data)

    def update_department(self, department_id: str, department_data: dict[str, Any]) -> Any:
        return self._record(
            "PUT",
            resolve("hr.department", id=department_id),
            "Failed to update department",
            payload=department_data,
        )

    def delete_department(self, department_id: str) -> Any:
        return self._call("DELETE", resolve("hr.department", id=department_id), "Failed to delete department")

    # Leaves

    def list_leaves(self, page: int = 1, limit: int = 10) -> Items | Empty:
        return self._list(
            resolve("hr.leaves"),
            "Failed to fetch leaves",
            params=page_params(page, limit, **NEWEST_FIRST),
        )

    def add_leave(self, leave_data: dict[str, Any]) -> Any:
        return self._record("POST", resolve("hr.leaves"), "Failed to add leave", payload=leave_data)

    def update_leave_status(self, leave_id: str, leave_data: dict[str, Any]) -> Any:
        return self._record(
            "PUT",
            resolve("hr.leave", id=leave_id),
            "Failed to update leave status",
            payload=leave_data,
        )

    def delete_leave(self, leave_id: str) -> Any:
        return self._call("DELETE", resolve("hr.leave", id=leave_id), "Failed to delete leave")

    # Payroll

    def list_payroll(self, page: int = 1, limit: int = 10) -> Items | Empty:
        return self._list(
            resolve("hr.payroll"),
            "Failed to fetch payroll",
            params=page_params(page, limit, **NEWEST_FIRST),
        )

    def get_payslip(self, payroll_id: str) -> Any:
        return self._record("GET", resolve("hr.payroll_record", id=payroll_id), "Failed to fetch payslip")

    def generate_payslip(self, employee_id: str, payroll_data: dict[str, Any]) -> Any:
        return self._record(
            "POST",
            resolve("hr.payroll_record", id=employee_id),
            "Failed to generate payslip",
            payload=payroll_data,
        )

    def update_payroll(self, payroll_id: str, payroll_data: dict[str, Any]) -> Any:
        return self._record(
            "PUT",
            resolve("hr.payroll_record", id=payroll_id),
            "Failed to update payroll",
            payload=payroll_data,
        )

    def delete_payroll(self, payroll_id: str) -> Any:
        return self._call("DELETE", resolve("hr.payroll_record", id=payroll_id), "Failed to delete payroll")

    # Attendance

    def list_attendance(self, page: int = 1, limit: int = 10) -> Items | Empty:
        return self._list(
            resolve("hr.attendance"),
            "Failed to fetch attendance records",
            params=page_params(page, limit, **NEWEST_FIRST),
        )

    def delete_attendance(self, attendance_id: str) -> Any:
        return self._call(
            "DELETE",
            resolve("hr.attendance_record", id=attendance_id),
            "Failed to delete attendance record",
        )

    # Salary advances

    def list_advances(self, page: int = 1, limit: int = 10, status: str | None = None) -> Items | Empty:
        if status:
            status = str(status).lower()
        return self._list(
            resolve("hr.advances_list"),
            "Failed to fetch advances",
            params=page_params(page, limit, status=status),
        )

    def update_advance_status(self, advance_id: str, status: str) -> Any:
        return self._record(
            "PUT",
            resolve("hr.advance", id=advance_id),
            "Failed to update advance status",
            payload={"status": status},
        )

    def delete_advance(self, advance_id: str) -> Any:
        return self._call("DELETE", resolve("hr.advance", id=advance_id), "Failed to delete advance")
