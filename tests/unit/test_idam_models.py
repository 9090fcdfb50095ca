import json
from datetime import datetime, timezone

import pytest

from idam.core.idam.constants import MARSHALL_LABS_IDENTITY_PROVIDER, ErrorCode
from idam.core.idam.models import (
    ErrorResponse,
    UserAccountVerificationRequest,
    UserLoginRequest,
    UserLoginResponse,
    UserPasswordResetExecutionRequest,
    UserPasswordResetInitiationRequest,
    UserRegistrationRequest,
    UserRegistrationResponse,
    format_timestamp,
    parse_timestamp,
)

LOGIN_BODY = {
    "token": "access-token",
    "token_type": "Bearer",
    "application": "test-app",
    "expires_in": 3600,
    "user_id": "u-1",
    "username": "alice",
    "refresh_token": "refresh-token",
}


class TestRequestValidation:
    def test_registration_collects_fields_in_declaration_order(self):
        valid, messages = UserRegistrationRequest("ab", "nope", "Abcdef1!").validate()
        assert not valid
        assert messages == [
            "username must be at least 3 characters long",
            "email must be a valid email address",
        ]

    def test_registration_valid(self):
        assert UserRegistrationRequest("User123", "user@example.com", "Abcdef1!").validate() == (True, [])

    def test_login_password_is_presence_only(self):
        # Would fail the strength policy, but login must accept it
        assert UserLoginRequest("user@example.com", "weak").validate().valid

    def test_login_missing_fields(self):
        valid, messages = UserLoginRequest("", "").validate()
        assert not valid
        assert messages == [
            "email must not be empty",
            "email must be a valid email address",
            "password must not be empty",
        ]

    def test_reset_execution_applies_full_policy(self):
        valid, messages = UserPasswordResetExecutionRequest("u-1", "weak", "tok", "123456").validate()
        assert not valid
        assert all(message.startswith("new_password ") for message in messages)

    def test_reset_initiation_checks_email(self):
        assert UserPasswordResetInitiationRequest("user@example.com").validate().valid
        assert not UserPasswordResetInitiationRequest("user").validate().valid

    def test_account_verification_requires_both_fields(self):
        valid, messages = UserAccountVerificationRequest("", "").validate()
        assert not valid
        assert messages == ["user_id must not be empty", "verification_code must not be empty"]

    def test_request_serialization_uses_wire_names(self):
        request = UserPasswordResetExecutionRequest("u-1", "Abcdef1!", "tok", "123456")
        assert request.to_dict() == {
            "user_id": "u-1",
            "new_password": "Abcdef1!",
            "password_reset_token": "tok",
            "verification_code": "123456",
        }

    def test_requests_are_immutable(self):
        request = UserLoginRequest("user@example.com", "secret")
        with pytest.raises(AttributeError):
            request.password = "other"


class TestLoginResponse:
    def test_json_round_trip(self):
        original = UserLoginResponse.from_dict(LOGIN_BODY)
        restored = UserLoginResponse.from_dict(json.loads(json.dumps(original.to_dict())))
        assert restored == original
        assert original.application_id == "test-app"
        assert original.to_dict() == LOGIN_BODY

    def test_missing_refresh_token_defaults_to_empty(self):
        body = dict(LOGIN_BODY)
        del body["refresh_token"]
        assert UserLoginResponse.from_dict(body).refresh_token == ""

    @pytest.mark.parametrize(
        "body",
        [
            [],
            "token",
            {k: v for k, v in LOGIN_BODY.items() if k != "token"},
            dict(LOGIN_BODY, expires_in="3600"),
            dict(LOGIN_BODY, expires_in=True),
        ],
    )
    def test_wrong_shape_raises_value_error(self, body):
        with pytest.raises(ValueError):
            UserLoginResponse.from_dict(body)


class TestRegistrationResponse:
    def test_decodes_nanosecond_utc_timestamp(self):
        response = UserRegistrationResponse.from_dict({
            "user_id": "u-1",
            "username": "alice",
            "email": "alice@example.com",
            "verified": False,
            "provider": MARSHALL_LABS_IDENTITY_PROVIDER,
            "created_at_utc": "2024-03-01T12:30:45.123456789Z",
            "features": ["chat"],
        })
        assert response.created_at_utc == datetime(2024, 3, 1, 12, 30, 45, 123456, tzinfo=timezone.utc)
        assert response.features == ("chat",)

    def test_null_features_become_empty(self):
        response = UserRegistrationResponse.from_dict({
            "user_id": "u-1",
            "username": "alice",
            "email": "alice@example.com",
            "verified": True,
            "provider": MARSHALL_LABS_IDENTITY_PROVIDER,
            "created_at_utc": "2024-03-01T12:30:45Z",
            "features": None,
        })
        assert response.features == ()

    def test_bad_timestamp_raises_value_error(self):
        with pytest.raises(ValueError):
            UserRegistrationResponse.from_dict({
                "user_id": "u-1",
                "username": "alice",
                "email": "alice@example.com",
                "verified": True,
                "created_at_utc": "yesterday",
            })


class TestTimestamps:
    def test_format_uses_z_suffix(self):
        assert format_timestamp(datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)) == "2024-01-02T03:04:05Z"

    def test_offset_is_preserved_as_instant(self):
        parsed = parse_timestamp("2024-01-02T05:04:05+02:00")
        assert format_timestamp(parsed) == "2024-01-02T03:04:05Z"

    @pytest.mark.parametrize(
        "text, microsecond",
        [
            ("2024-01-02T03:04:05.1Z", 100000),
            ("2024-01-02T03:04:05.12345Z", 123450),
            ("2024-01-02T03:04:05.1234567+00:00", 123456),
        ],
    )
    def test_fraction_of_any_length(self, text, microsecond):
        assert parse_timestamp(text) == datetime(2024, 1, 2, 3, 4, 5, microsecond, tzinfo=timezone.utc)


class TestErrorResponse:
    def test_decodes_wire_shape(self):
        error = ErrorResponse.from_dict({
            "error_code": 10,
            "error_message": "request validation failure",
            "error_details": ["password must contain at least one number"],
        })
        assert error == ErrorResponse(10, "request validation failure", ("password must contain at least one number",))

    def test_missing_details_allowed(self):
        error = ErrorResponse.from_dict({"error_code": 50, "error_message": "user not found"})
        assert error.details == ()

    def test_unknown_code_passed_through(self):
        assert ErrorResponse.from_dict({"error_code": 999, "error_message": "new"}).code == 999

    def test_missing_message_defaults_to_empty(self):
        assert ErrorResponse.from_dict({"error_code": 20}) == ErrorResponse(20, "")

    @pytest.mark.parametrize(
        "body",
        [
            {"error": "Bad Request"},
            {"error_code": "10", "error_message": "x"},
            {"error_code": 70000, "error_message": "x"},
            {"error_code": 10, "error_message": "x", "error_details": [1, 2]},
            ["error_code"],
        ],
    )
    def test_wrong_shape_raises_value_error(self, body):
        with pytest.raises(ValueError):
            ErrorResponse.from_dict(body)

    def test_for_code_uses_canonical_message(self):
        error = ErrorResponse.for_code(ErrorCode.USER_ACCOUNT_LOCKOUT, "try again later")
        assert error.to_dict() == {
            "error_code": 75,
            "error_message": "user account lockout due to too many failed login attempts",
            "error_details": ["try again later"],
        }
