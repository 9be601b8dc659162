from __future__ import annotations

import re
from typing import Any

from portal_client.apis.base import DomainApi
from portal_client.endpoints import LOGIN, resolve
from portal_client.errors import ErrorKind, PortalApiError, validation_error

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_REJECTION_WORDS = ("invalid", "wrong", "incorrect")


class UserApi(DomainApi):
    def login(self, email: str, password: str) -> dict[str, Any]:
        email = (email or "").strip()
        if not email or not password:
            raise validation_error("Email and password are required")
        if not EMAIL_PATTERN.match(email):
            raise validation_error("Please enter a valid email address", field="email")

        try:
            data = self._call("POST", LOGIN, "Login failed", payload={"email": email, "password": password})
        except PortalApiError as exc:
            if exc.status_code == 401:
                raise PortalApiError("Invalid email or password", ErrorKind.AUTHENTICATION, 401) from exc
            if exc.status_code == 404:
                raise PortalApiError("User not found", ErrorKind.NOT_FOUND, 404) from exc
            raise

        if not isinstance(data, dict) or not data:
            raise PortalApiError("Invalid response from server", ErrorKind.APPLICATION)
        message = str(data.get("message") or "")
        if any(word in message.lower() for word in _REJECTION_WORDS) and not extract_token(data):
            raise PortalApiError(message, ErrorKind.AUTHENTICATION)
        return data

    def get_user_details(self, user_id: str) -> Any:
        return self._record("GET", resolve("user.details", id=user_id), "Failed to fetch user details")

    def forget_password(self, email: str) -> Any:
        email = (email or "").strip()
        if not EMAIL_PATTERN.match(email):
            raise validation_error("Please enter a valid email address.", field="email")
        return self._call("POST", resolve("user.forget_password"), "Failed to send reset code", payload={"email": email})

    def reset_password(self, reset_data: dict[str, Any]) -> Any:
        return self._call("PUT", resolve("user.reset_password"), "Failed to reset password", payload=reset_data)


def extract_token(data: dict[str, Any]) -> str | None:
    for key in ("token", "accessToken", "access_token", "jwt"):
        value = data.get(key)
        if isinstance(value, str) and value:
            return value
    return None
