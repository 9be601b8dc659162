"""
Unit tests for sign-in, sign-out and token claim handling.
"""
import base64
import json
from unittest.mock import Mock

import pytest

from portal_client.apis import UserApi
from portal_client.auth import AuthenticationError, AuthManager, build_user, decode_token_claims
from portal_client.errors import ErrorKind, PortalApiError
from portal_client.models import AuthState

HR_DEPARTMENT_ID = "68da377194328b3a175633ad"


def make_token(claims):
    payload = base64.urlsafe_b64encode(json.dumps(claims).encode("utf-8")).rstrip(b"=").decode("ascii")
    return f"eyJhbGciOiJIUzI1NiJ9.{payload}.signature"


@pytest.fixture
def user_api():
    return Mock(spec=UserApi)


@pytest.fixture
def auth_manager(user_api, session):
    return AuthManager(user_api, session)


class TestDecodeTokenClaims:
    def test_reads_payload(self):
        assert decode_token_claims(make_token({"id": "u1", "role": "HR"})) == {"id": "u1", "role": "HR"}

    @pytest.mark.parametrize("token", ["", "opaque-token", "a.!!!.c", "a.bnVsbA.c"])
    def test_unreadable_tokens_have_no_claims(self, token):
        assert decode_token_claims(token) == {}


class TestBuildUser:
    def test_claims_take_precedence(self):
        data = {"user": {"name": "Jane Doe", "role": "User", "_id": "other"}}
        claims = {"userId": "u1", "role": "HR", "departmentId": HR_DEPARTMENT_ID}

        user = build_user(data, claims, "jane@corp.test")

        assert user == {
            "id": "u1",
            "email": "jane@corp.test",
            "name": "Jane Doe",
            "role": "HR",
            "department": HR_DEPARTMENT_ID,
        }

    def test_nested_claims_and_split_names(self):
        data = {"user": {"firstName": "Sam", "lastName": "Lee", "email": "sam@corp.test"}}
        claims = {"user": {"_id": "u7", "role": "Manager"}}

        user = build_user(data, claims, "typed@corp.test")

        assert user["id"] == "u7"
        assert user["role"] == "Manager"
        assert user["name"] == "Sam Lee"
        assert user["email"] == "sam@corp.test"


class TestAuthManager:
    def test_sign_in_starts_session(self, auth_manager, user_api, session):
        token = make_token({"id": "u1", "role": "HR", "department": HR_DEPARTMENT_ID})
        user_api.login.return_value = {"token": token, "user": {"name": "Jane Doe"}}

        state = auth_manager.sign_in("jane@corp.test", "secret")

        assert state == AuthState(
            is_signed_in=True,
            user_id="u1",
            email="jane@corp.test",
            name="Jane Doe",
            role="HR",
            department="HR",
        )
        assert session.token == token
        user_api.get_user_details.assert_not_called()

    def test_missing_token_is_an_error(self, auth_manager, user_api, session):
        user_api.login.return_value = {"message": "Welcome"}

        with pytest.raises(AuthenticationError) as exc_info:
            auth_manager.sign_in("jane@corp.test", "secret")

        assert exc_info.value.kind is ErrorKind.AUTHENTICATION
        assert session.token is None

    def test_role_is_looked_up_when_token_lacks_it(self, auth_manager, user_api):
        user_api.login.return_value = {"accessToken": "opaque", "user": {"_id": "u9"}}
        user_api.get_user_details.return_value = {"role": "Manager", "name": "Ana"}

        state = auth_manager.sign_in("ana@corp.test", "secret")

        user_api.get_user_details.assert_called_once_with("u9")
        assert state.role == "Manager"
        assert state.name == "Ana"

    def test_failed_role_lookup_defaults_to_user(self, auth_manager, user_api):
        user_api.login.return_value = {"token": "opaque", "user": {"id": "u9"}}
        user_api.get_user_details.side_effect = PortalApiError("Resource not found.", ErrorKind.NOT_FOUND, 404)

        state = auth_manager.sign_in("ana@corp.test", "secret")

        assert state.is_signed_in
        assert state.role == "User"

    def test_login_errors_propagate(self, auth_manager, user_api, session):
        user_api.login.side_effect = PortalApiError("Invalid email or password", ErrorKind.AUTHENTICATION, 401)

        with pytest.raises(PortalApiError):
            auth_manager.sign_in("jane@corp.test", "wrong")

        assert auth_manager.get_auth_state() == AuthState(is_signed_in=False)

    def test_sign_out(self, auth_manager, signed_in_session):
        assert auth_manager.get_auth_state().is_signed_in

        auth_manager.sign_out()
        auth_manager.sign_out()

        assert auth_manager.get_auth_state() == AuthState(is_signed_in=False)
        assert signed_in_session.token is None
