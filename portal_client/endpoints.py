from __future__ import annotations

from urllib.parse import quote

LOGIN = "/user/log_in"

ENDPOINTS: dict[str, str] = {
    # User
    "user.login": LOGIN,
    "user.details": "/user/{id}",
    "user.forget_password": "/user/forget_password",
    "user.reset_password": "/user/reset_password",
    # Employee dashboard
    "dashboard.advances": "/dashboard/advance",
    "dashboard.leaves": "/dashboard/leaves",
    "dashboard.tickets": "/dashboard/tickets",
    # HR
    "hr.employees": "/hr/employees",
    "hr.employee": "/hr/employees/{id}",
    "hr.employees_hr_dept": "/hr/employees/HRDeprt",
    "hr.departments": "/hr/departments",
    "hr.department": "/hr/departments/{id}",
    "hr.leaves": "/hr/leaves",
    "hr.leave": "/hr/leaves/{id}",
    "hr.payroll": "/hr/payroll",
    "hr.payroll_record": "/hr/payroll/{id}",
    "hr.attendance": "/hr/attendance",
    "hr.attendance_record": "/hr/attendance/{id}",
    "hr.advances_list": "/hr/advances",
    "hr.advance": "/hr/Advance/{id}",
    # Sales
    "sales.customers": "/sales/customers",
    "sales.customer": "/sales/customers/{id}",
    "sales.employees": "/sales/employees",
    "sales.follow_ups": "/sales/follow-ups",
    "sales.follow_up_status": "/sales/follow-ups/{id}/status",
    "sales.follow_up_reschedule": "/sales/follow-ups/{id}/reschedule",
    "sales.report_my_customers": "/sales/reports/my-customers",
    "sales.report_team_performance": "/sales/reports/team-performance",
    "sales.report_services_demand": "/sales/reports/services-demand",
    # IT
    "it.employees": "/it/employees/ITDeprt",
    "it.employee_rating": "/it/employees/{id}/rating",
    "it.projects": "/it/projects",
    "it.project": "/it/projects/{id}",
    "it.tickets": "/it/tickets",
    "it.ticket": "/it/tickets/{id}",
    "it.leaves": "/it/leaves",
    # Digital marketing
    "marketing.employees": "/digitalMarketing/employees",
    "marketing.employee_rating": "/digitalMarketing/employees/{id}/rating",
    "marketing.projects": "/digitalMarketing/projects",
    "marketing.project": "/digitalMarketing/projects/{id}",
    "marketing.tickets": "/digitalMarketing/tickets",
    "marketing.ticket": "/digitalMarketing/tickets/{id}",
    "marketing.leaves": "/digitalMarketing/leaves",
    "marketing.leave": "/digitalMarketing/leaves/{id}",
    "marketing.department_leaves": "/digitalMarketing/departments/{department_id}/leaves",
    "marketing.customers": "/digitalMarketing/customers",
    "marketing.customer_projects": "/digitalMarketing/customers/{customer_name}/projects",
    "leaves.global": "/leaves/{id}",
    # Operations
    "operation.employees": "/operation/employees/operationDept",
    "operation.employee_rate": "/operation/employees/{id}/rate",
    "operation.campaigns": "/operation/campaigns",
    "operation.campaign": "/operation/campaigns/{id}",
    "operation.leaves": "/operation/leaves",
    "operation.leave": "/operation/leaves/{id}",
    "operation.department_leaves": "/operation/departments/{department_id}/leaves",
    "operation.tickets": "/operation/tickets",
    # Accounting
    "accounting.invoices": "/accounting/get_all",
    "accounting.add_invoice": "/accounting/add_invoice",
    "accounting.update_invoice": "/accounting/update_invoice/{id}",
    "accounting.delete_invoice": "/accounting/delete_invoice/{id}",
}


def resolve(name: str, **params: object) -> str:
    template = ENDPOINTS[name]
    quoted = {key: quote(str(value), safe="") for key, value in params.items()}
    return template.format(**quoted)
