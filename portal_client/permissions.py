from __future__ import annotations

from typing import Any, Iterable

# Department ids issued by the backend.
DEPARTMENT_NAMES = {
    "68da376594328b3a175633a7": "IT",
    "68da377194328b3a175633ad": "HR",
    "68da378594328b3a175633b3": "Operation",
    "68da378d94328b3a175633b9": "Sales",
    "68da379894328b3a175633bf": "Accounting",
    "68da6e0813fe176e91aefd59": "Digital Marketing",
}

MANAGE_ROLES = ("Admin", "HR")
VIEW_ROLES = ("Admin", "HR", "Manager")
ADMIN_ROLES = ("Admin",)


def role_name(user: dict[str, Any] | None) -> str:
    if not user or not user.get("role"):
        return "User"
    role = user["role"]
    if isinstance(role, dict):
        role = role.get("role") or role.get("roleName") or role.get("name") or role.get("userRole")
    return str(role) if role else "User"


def check_permission(user: dict[str, Any] | None, required_roles: Iterable[str] = MANAGE_ROLES) -> bool:
    if not user or not user.get("role"):
        return False
    return role_name(user) in tuple(required_roles)


def can_add(user: dict[str, Any] | None) -> bool:
    return check_permission(user, MANAGE_ROLES)


def can_edit(user: dict[str, Any] | None) -> bool:
    return check_permission(user, MANAGE_ROLES)


def can_delete(user: dict[str, Any] | None) -> bool:
    return check_permission(user, MANAGE_ROLES)


def can_view(user: dict[str, Any] | None) -> bool:
    return check_permission(user, VIEW_ROLES)


def can_submit_leave(user: dict[str, Any] | None) -> bool:
    return bool(user and user.get("id"))


def can_create_projects(user: dict[str, Any] | None) -> bool:
    return check_permission(user, ADMIN_ROLES)


def can_create_campaigns(user: dict[str, Any] | None) -> bool:
    return check_permission(user, ADMIN_ROLES)


def department_name(user: dict[str, Any] | None) -> str | None:
    if not user or not user.get("department"):
        return None
    department = user["department"]
    if isinstance(department, dict):
        department = department.get("id") or department.get("_id") or department.get("name")
    if not department:
        return None
    return DEPARTMENT_NAMES.get(str(department), str(department))
