"""
Unit tests for mapping HTTP and backend failures to user-facing errors.
"""
import pytest

from portal_client.errors import (
    DUPLICATE_KEY_MESSAGE,
    NETWORK_ERROR_MESSAGE,
    SERVER_ERROR_MESSAGE,
    STATUS_MESSAGES,
    TIMEOUT_ERROR_MESSAGE,
    ErrorKind,
    application_error,
    classify,
    extract_field_errors,
    from_http_error,
    resolve_message,
    validation_error,
)
from portal_client.http import ApiHttpError, ApiTransportError


class TestExtractFieldErrors:
    def test_errors_list(self):
        payload = {"errors": [{"path": "email", "msg": "Email is taken"}, {"field": ["address", "city"]}]}

        assert extract_field_errors(payload) == {"email": "Email is taken", "address.city": "Invalid value"}

    def test_error_maps(self):
        payload = {"validationErrors": {"name": "Required"}, "fieldErrors": {"phone": "Too short"}}

        assert extract_field_errors(payload) == {"name": "Required", "phone": "Too short"}

    def test_keys_naming_a_field(self):
        payload = {"emailError": "Bad email", "phone_validation": "Bad phone", "message": "ignored", "error": "x"}

        assert extract_field_errors(payload, loose_keys=True) == {"email": "Bad email", "phone": "Bad phone"}

    def test_error_named_keys_are_ignored_by_default(self):
        payload = {"message": "Internal server error", "errorCode": "INTERNAL_ERROR", "amountError": "Too big"}

        assert extract_field_errors(payload) == {}

    def test_error_code_keeps_server_failure_classification(self):
        payload = {"success": False, "message": "Internal server error", "errorCode": "INTERNAL_ERROR"}

        error = from_http_error(ApiHttpError(500, "HTTP 500", payload=payload), "Failed")

        assert error.kind is ErrorKind.SERVER
        assert error.message == SERVER_ERROR_MESSAGE
        assert error.field_errors == {}

    @pytest.mark.parametrize("payload", [None, "text", [], {"message": "Nope"}])
    def test_nothing_to_extract(self, payload):
        assert extract_field_errors(payload) == {}


class TestClassify:
    @pytest.mark.parametrize(
        "status, kind",
        [
            (0, ErrorKind.TRANSPORT),
            (400, ErrorKind.VALIDATION),
            (401, ErrorKind.AUTHENTICATION),
            (403, ErrorKind.AUTHORIZATION),
            (404, ErrorKind.NOT_FOUND),
            (409, ErrorKind.CONFLICT),
            (422, ErrorKind.VALIDATION),
            (500, ErrorKind.SERVER),
            (502, ErrorKind.SERVER),
            (418, ErrorKind.UNKNOWN),
        ],
    )
    def test_status_kinds(self, status, kind):
        assert classify(status) is kind

    def test_field_errors_make_server_errors_validation(self):
        assert classify(500, {"email": "taken"}) is ErrorKind.VALIDATION


class TestResolveMessage:
    def test_first_field_error_wins(self):
        payload = {"message": "Validation failed", "errors": [{"path": "name", "msg": "Name is required"}]}

        assert resolve_message(400, payload, "Failed") == "Name is required"

    def test_backend_message(self):
        assert resolve_message(400, {"message": "Employee already on leave"}, "Failed") == "Employee already on leave"

    def test_server_errors_hide_backend_details(self):
        assert resolve_message(500, {"message": "TypeError: x is undefined"}, "Failed") == SERVER_ERROR_MESSAGE
        assert resolve_message(503, "", "Failed") == SERVER_ERROR_MESSAGE

    def test_duplicate_key_is_rewritten(self):
        payload = {"message": "E11000 duplicate key error collection: employees index: email_1"}

        assert resolve_message(400, payload, "Failed") == DUPLICATE_KEY_MESSAGE

    @pytest.mark.parametrize("status", [400, 401, 403, 404, 409, 422])
    def test_status_defaults(self, status):
        assert resolve_message(status, {}, "Failed") == STATUS_MESSAGES[status]

    def test_generic_default_includes_status(self):
        assert resolve_message(418, {}, "Failed to brew") == "Failed to brew (HTTP 418)"


class TestFromHttpError:
    def test_network_failure(self):
        error = from_http_error(ApiTransportError("Connection failed"), "Failed")

        assert error.message == NETWORK_ERROR_MESSAGE
        assert error.kind is ErrorKind.TRANSPORT
        assert error.status_code is None

    def test_timeout(self):
        error = from_http_error(ApiTransportError("Request timed out", timed_out=True), "Failed")

        assert error.message == TIMEOUT_ERROR_MESSAGE

    def test_validation_failure_keeps_field_errors(self):
        payload = {"errors": [{"path": "amount", "msg": "Amount exceeds limit"}]}
        error = from_http_error(ApiHttpError(422, "HTTP 422", payload=payload), "Failed")

        assert error.kind is ErrorKind.VALIDATION
        assert error.status_code == 422
        assert error.field_errors == {"amount": "Amount exceeds limit"}
        assert error.message == "Amount exceeds limit"
        assert error.payload is payload

    def test_str_is_user_message(self):
        error = from_http_error(ApiHttpError(404, "HTTP 404", payload={}), "Failed")

        assert str(error) == STATUS_MESSAGES[404]
        assert "not_found" in repr(error)


class TestApplicationError:
    def test_uses_backend_message(self):
        error = application_error({"success": False, "message": "Department has employees"}, "Failed")

        assert error.kind is ErrorKind.APPLICATION
        assert error.message == "Department has employees"
        assert error.status_code == 200

    def test_falls_back_to_default(self):
        assert application_error({"success": False}, "Failed to delete").message == "Failed to delete"

    def test_validation_error_names_field(self):
        error = validation_error("Payroll month is required", field="payrollMonth")

        assert error.kind is ErrorKind.VALIDATION
        assert error.field_errors == {"payrollMonth": "Payroll month is required"}
        assert validation_error("Required").field_errors == {}
