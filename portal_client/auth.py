from __future__ import annotations

import base64
import json
import logging
from typing import Any

from portal_client.apis.user_api import UserApi, extract_token
from portal_client.errors import ErrorKind, PortalApiError
from portal_client.models import AuthState
from portal_client.permissions import department_name, role_name
from portal_client.session import SessionContext

logger = logging.getLogger(__name__)

ROLE_CLAIMS = ("role", "user_role", "userRole", "role_name", "roleName")
DEPARTMENT_CLAIMS = ("department", "department_id", "departmentId", "dept", "dept_id", "departmentName")
ID_CLAIMS = ("id", "_id", "userId", "user_id", "sub")


class AuthenticationError(PortalApiError):
    def __init__(self, message: str):
        super().__init__(message, kind=ErrorKind.AUTHENTICATION)


def decode_token_claims(token: str) -> dict[str, Any]:
    """Read the JWT payload without verifying it; the backend owns verification."""
    parts = token.split(".")
    if len(parts) != 3:
        return {}
    segment = parts[1] + "=" * (-len(parts[1]) % 4)
    try:
        claims = json.loads(base64.urlsafe_b64decode(segment.encode("ascii")))
    except (ValueError, UnicodeEncodeError):
        return {}
    return claims if isinstance(claims, dict) else {}


def _first(source: dict[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        value = source.get(key)
        if value:
            return value
    return None


def _claim(claims: dict[str, Any], keys: tuple[str, ...]) -> Any:
    value = _first(claims, keys)
    if value:
        return value
    for nested in ("user", "profile", "data"):
        inner = claims.get(nested)
        if isinstance(inner, dict):
            value = _first(inner, keys)
            if value:
                return value
    return None


def build_user(data: dict[str, Any], claims: dict[str, Any], email: str) -> dict[str, Any]:
    response_user = data.get("user") if isinstance(data.get("user"), dict) else {}
    nested_exists = response_user.get("is_user_exists") if isinstance(response_user.get("is_user_exists"), dict) else {}

    user_id = _claim(claims, ID_CLAIMS) or _first(response_user, ID_CLAIMS) or _first(data, ID_CLAIMS)
    role = _claim(claims, ROLE_CLAIMS) or response_user.get("role") or data.get("role")
    department = (
        _claim(claims, DEPARTMENT_CLAIMS)
        or nested_exists.get("department")
        or response_user.get("department")
        or data.get("department")
    )
    name = response_user.get("name") or " ".join(
        part for part in (response_user.get("firstName"), response_user.get("lastName")) if part
    )
    return {
        "id": str(user_id) if user_id else None,
        "email": response_user.get("email") or email,
        "name": name or None,
        "role": role,
        "department": department,
    }


class AuthManager:
    def __init__(self, user_api: UserApi, session: SessionContext):
        self._user_api = user_api
        self._session = session

    def sign_in(self, email: str, password: str) -> AuthState:
        data = self._user_api.login(email, password)
        token = extract_token(data)
        if not token:
            raise AuthenticationError("No authentication token received from server. Please check your credentials.")

        user = build_user(data, decode_token_claims(token), email.strip())
        self._session.begin(token, user)

        if not user.get("role") and user.get("id"):
            user = self._with_user_details(user)
            self._session.begin(token, user)

        logger.info("Signed in as %s (%s)", user.get("email"), role_name(user))
        return self.get_auth_state()

    def _with_user_details(self, user: dict[str, Any]) -> dict[str, Any]:
        try:
            details = self._user_api.get_user_details(user["id"])
        except PortalApiError as exc:
            logger.info("Could not load user details for role lookup: %s", exc.message)
            return user
        if isinstance(details, dict):
            merged = dict(user)
            for key in ("role", "department", "name"):
                if not merged.get(key) and details.get(key):
                    merged[key] = details[key]
            return merged
        return user

    def sign_out(self) -> None:
        if self._session.clear():
            logger.info("Signed out")

    def get_auth_state(self) -> AuthState:
        user = self._session.user
        if not self._session.is_authenticated or user is None:
            return AuthState(is_signed_in=False)
        return AuthState(
            is_signed_in=True,
            user_id=user.get("id"),
            email=user.get("email"),
            name=user.get("name"),
            role=role_name(user),
            department=department_name(user),
        )
