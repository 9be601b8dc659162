"""Normalization of the backend's list envelopes.

The backend answers list requests in several shapes::

    [...]
    {"data": [...]}
    {"data": {"data": [...], "total": 7}}
    {"Data": [...]}
    {"success": true, "data": [...], "total": 7, "page": 1, "limit": 10, "totalPages": 1}

``normalize`` tries one matcher per shape in a fixed order and always produces
an ``Items`` (ordered records plus a non-negative total) or ``EMPTY``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

TOTAL_KEYS = ("total", "count", "totalCount", "totalAdvances")
TOTAL_PAGES_KEYS = ("totalPages", "total_pages")


@dataclass(frozen=True)
class Items:
    items: list[Any]
    total: int
    reported_total: int | None = None
    reported_pages: int | None = None
    page: int | None = None
    limit: int | None = None

    @property
    def is_authoritative(self) -> bool:
        return self.reported_total is not None or self.reported_pages is not None

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class Empty:
    items: list[Any] = field(default_factory=list)
    total: int = 0
    reported_total: int | None = None
    reported_pages: int | None = None
    page: int | None = None
    limit: int | None = None

    @property
    def is_authoritative(self) -> bool:
        return False

    def __len__(self) -> int:
        return 0


EMPTY = Empty()


def _count(value: Any) -> int | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = int(value)
    elif isinstance(value, str) and value.strip().isdigit():
        number = int(value.strip())
    else:
        return None
    return number if number >= 0 else None


def _first_count(envelope: dict[str, Any], keys: tuple[str, ...]) -> int | None:
    for key in keys:
        number = _count(envelope.get(key))
        if number is not None:
            return number
    return None


def _from_envelope(records: list[Any], *envelopes: dict[str, Any]) -> Items:
    reported_total = reported_pages = page = limit = None
    for envelope in envelopes:
        if reported_total is None:
            reported_total = _first_count(envelope, TOTAL_KEYS)
        if reported_pages is None:
            reported_pages = _first_count(envelope, TOTAL_PAGES_KEYS)
        if page is None:
            page = _count(envelope.get("page"))
        if limit is None:
            limit = _count(envelope.get("limit"))
    return Items(
        items=list(records),
        total=reported_total if reported_total is not None else len(records),
        reported_total=reported_total,
        reported_pages=reported_pages,
        page=page,
        limit=limit,
    )


def _match_bare_list(raw: Any) -> Items | None:
    if isinstance(raw, list):
        return Items(items=list(raw), total=len(raw))
    return None


def _match_nested_data(raw: Any) -> Items | None:
    if not isinstance(raw, dict):
        return None
    inner = raw.get("data")
    if isinstance(inner, dict) and isinstance(inner.get("data"), list):
        return _from_envelope(inner["data"], inner, raw)
    return None


def _match_data(raw: Any) -> Items | None:
    if isinstance(raw, dict) and isinstance(raw.get("data"), list):
        return _from_envelope(raw["data"], raw)
    return None


def _match_capitalized_data(raw: Any) -> Items | None:
    if isinstance(raw, dict) and isinstance(raw.get("Data"), list):
        return _from_envelope(raw["Data"], raw)
    return None


SHAPE_MATCHERS: tuple[Callable[[Any], Items | None], ...] = (
    _match_bare_list,
    _match_nested_data,
    _match_data,
    _match_capitalized_data,
)


def normalize(raw: Any) -> Items | Empty:
    for matcher in SHAPE_MATCHERS:
        matched = matcher(raw)
        if matched is not None:
            return matched
    return EMPTY


def is_application_failure(raw: Any) -> bool:
    return isinstance(raw, dict) and raw.get("success") is False


def application_message(raw: Any, default: str) -> str:
    if isinstance(raw, dict):
        for key in ("message", "error"):
            value = raw.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    return default


def unwrap_record(raw: Any) -> Any:
    if isinstance(raw, dict) and "data" in raw and raw["data"] is not None:
        return raw["data"]
    return raw
