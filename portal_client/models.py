from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class AuthState:
    is_signed_in: bool
    user_id: str | None = None
    email: str | None = None
    name: str | None = None
    role: str | None = None
    department: str | None = None


@dataclass(frozen=True)
class ListView:
    key: str
    title: str
    columns: tuple[str, ...]
    required_roles: tuple[str, ...] = field(default_factory=tuple)

    def row(self, record: Any) -> tuple[str, ...]:
        if not isinstance(record, dict):
            return (str(record),) + ("",) * (len(self.columns) - 1)
        return tuple(_cell(record.get(column)) for column in self.columns)


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, dict):
        for key in ("name", "title", "email", "_id", "id"):
            if value.get(key):
                return str(value[key])
        return ""
    if isinstance(value, list):
        return ", ".join(_cell(item) for item in value)
    return str(value)
