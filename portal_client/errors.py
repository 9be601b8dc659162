from __future__ import annotations

from enum import Enum
import re
from typing import Any

from portal_client.envelope import application_message
from portal_client.http import ApiHttpError, ApiTransportError

NETWORK_ERROR_MESSAGE = "Network error. Please check your internet connection."
TIMEOUT_ERROR_MESSAGE = "Request timeout. Please try again."
SERVER_ERROR_MESSAGE = "Server error. Please try again later."
DUPLICATE_KEY_MESSAGE = "A record with this value already exists."

STATUS_MESSAGES = {
    400: "Invalid request. Please check your input.",
    401: "Unauthorized. Please log in again.",
    403: "Forbidden. You do not have access.",
    404: "Resource not found.",
    409: "Conflict. This resource already exists.",
    422: "Validation error. Please check your input.",
    500: SERVER_ERROR_MESSAGE,
}

_FIELD_ERROR_KEY = re.compile(r"error|validation", re.IGNORECASE)
_RESERVED_KEYS = frozenset({"errors", "validationErrors", "fieldErrors", "error", "message", "success"})


class ErrorKind(Enum):
    TRANSPORT = "transport"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    CONFLICT = "conflict"
    SERVER = "server"
    APPLICATION = "application"
    UNKNOWN = "unknown"


class PortalApiError(RuntimeError):
    def __init__(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.UNKNOWN,
        status_code: int | None = None,
        field_errors: dict[str, str] | None = None,
        payload: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.status_code = status_code
        self.field_errors = field_errors or {}
        self.payload = payload

    def __repr__(self) -> str:
        return f"PortalApiError(kind={self.kind.value}, status_code={self.status_code}, message={self.message!r})"


def extract_field_errors(payload: Any, loose_keys: bool = False) -> dict[str, str]:
    """Collect per-field messages from a failure payload.

    ``errors[]``, ``validationErrors`` and ``fieldErrors`` are always read.
    With ``loose_keys`` any other string value under a key naming an error or
    validation (``amountError``, ``due_date_validation``) counts too; only the
    invoice forms send those.
    """
    if not isinstance(payload, dict):
        return {}

    errors: dict[str, str] = {}

    entries = payload.get("errors")
    if isinstance(entries, list):
        for entry in entries:
            if not isinstance(entry, dict):
                continue
            name = entry.get("path") or entry.get("field")
            if isinstance(name, list):
                name = ".".join(str(part) for part in name)
            if name:
                errors[str(name)] = str(entry.get("msg") or entry.get("message") or entry.get("error") or "Invalid value")

    for key in ("validationErrors", "fieldErrors"):
        mapping = payload.get(key)
        if isinstance(mapping, dict):
            errors.update({str(name): str(message) for name, message in mapping.items()})

    if not loose_keys:
        return errors

    for key, value in payload.items():
        if key in _RESERVED_KEYS or not isinstance(value, str):
            continue
        if not _FIELD_ERROR_KEY.search(key):
            continue
        name = _FIELD_ERROR_KEY.sub("", key).strip("_").lower()
        if name:
            errors[name] = value

    return errors


def classify(status_code: int, field_errors: dict[str, str] | None = None) -> ErrorKind:
    if status_code == 0:
        return ErrorKind.TRANSPORT
    if field_errors and status_code in (400, 422, 500):
        return ErrorKind.VALIDATION
    if status_code == 401:
        return ErrorKind.AUTHENTICATION
    if status_code == 403:
        return ErrorKind.AUTHORIZATION
    if status_code == 404:
        return ErrorKind.NOT_FOUND
    if status_code == 409:
        return ErrorKind.CONFLICT
    if status_code in (400, 422):
        return ErrorKind.VALIDATION
    if status_code >= 500:
        return ErrorKind.SERVER
    return ErrorKind.UNKNOWN


def _rewrite_known_messages(message: str) -> str:
    if "E11000" in message and "duplicate key" in message:
        return DUPLICATE_KEY_MESSAGE
    return message


def resolve_message(
    status_code: int,
    payload: Any,
    default: str,
    field_errors: dict[str, str] | None = None,
) -> str:
    """Pick the message a user sees for a failed call.

    Order: first field error, backend message, status default, generic default.
    A 5xx without field details always reads as a server error.
    """
    if field_errors is None:
        field_errors = extract_field_errors(payload)
    if field_errors:
        return next(iter(field_errors.values()))

    if status_code >= 500:
        return SERVER_ERROR_MESSAGE

    backend_message = application_message(payload, "")
    if backend_message:
        return _rewrite_known_messages(backend_message)

    if status_code in STATUS_MESSAGES:
        return STATUS_MESSAGES[status_code]
    return f"{default} (HTTP {status_code})"


def from_http_error(error: ApiHttpError, default: str, loose_keys: bool = False) -> PortalApiError:
    if isinstance(error, ApiTransportError):
        message = TIMEOUT_ERROR_MESSAGE if error.timed_out else NETWORK_ERROR_MESSAGE
        return PortalApiError(message, kind=ErrorKind.TRANSPORT, status_code=None)

    field_errors = extract_field_errors(error.payload, loose_keys)
    return PortalApiError(
        resolve_message(error.status_code, error.payload, default, field_errors),
        kind=classify(error.status_code, field_errors),
        status_code=error.status_code,
        field_errors=field_errors,
        payload=error.payload,
    )


def application_error(
    raw: Any,
    default: str,
    status_code: int | None = 200,
    loose_keys: bool = False,
) -> PortalApiError:
    field_errors = extract_field_errors(raw, loose_keys)
    message = _rewrite_known_messages(application_message(raw, default))
    return PortalApiError(
        message,
        kind=ErrorKind.APPLICATION,
        status_code=status_code,
        field_errors=field_errors,
        payload=raw,
    )


def validation_error(message: str, field: str | None = None) -> PortalApiError:
    return PortalApiError(
        message,
        kind=ErrorKind.VALIDATION,
        field_errors={field: message} if field else None,
    )
