"""Constants shared by the IDAM user-account client."""
from __future__ import annotations
from enum import IntEnum
from typing import Dict

# Endpoint templates (":appId" is replaced with the application id)
APP_ID_PLACEHOLDER = ":appId"
USER_REGISTRATION_URL = "/api/idam/user-account/applications/:appId/register"
USER_LOGIN_URL = "/api/idam/user-account/applications/:appId/login"
USER_VERIFY_ACCOUNT_URL = "/api/idam/user-account/applications/:appId/verify-account"
USER_LOGOUT_URL = "/api/idam/user-account/logout"
INITIATE_PASSWORD_RESET_URL = "/api/idam/user-account/applications/:appId/initiate-password-reset"
EXECUTE_PASSWORD_RESET_URL = "/api/idam/user-account/applications/:appId/execute-password-reset"

BEARER_PREFIX = "Bearer "
JSON_CONTENT_TYPE = "application/json"

# Identity provider reported for accounts registered directly with the service
MARSHALL_LABS_IDENTITY_PROVIDER = "marshall-labs"


class ErrorCode(IntEnum):
    """Error codes reported by the IDAM service in ``error_code``."""
    UNHANDLED_ERROR = 1
    REQUEST_PAYLOAD_INVALID = 5
    REQUEST_VALIDATION_FAILURE = 10
    APPLICATION_NOT_FOUND = 15
    INVALID_CREDENTIALS = 20
    DATA_CONFLICT = 25
    USER_NOT_VERIFIED = 30
    INVALID_AUTH_TOKEN = 35
    ACCESS_DENIED = 40
    INVALID_USER_VERIFICATION_CODE = 45
    USER_NOT_FOUND = 50
    INVALID_PASSWORD_RESET_TOKEN = 55
    INVALID_PASSWORD_RESET_VERIFICATION_CODE = 60
    INVALID_REQUEST_HEADERS = 65
    AUTH_TOKEN_EXPIRED = 70
    # Lockout expires one hour after the last failed login attempt
    USER_ACCOUNT_LOCKOUT = 75


ERROR_MESSAGES: Dict[ErrorCode, str] = {
    ErrorCode.UNHANDLED_ERROR: "an unhandled/unexpected error occured",
    ErrorCode.REQUEST_PAYLOAD_INVALID: "the request body could not be parsed",
    ErrorCode.REQUEST_VALIDATION_FAILURE: "request validation failure",
    ErrorCode.APPLICATION_NOT_FOUND: "application not found",
    ErrorCode.INVALID_CREDENTIALS: "invalid credentials",
    ErrorCode.DATA_CONFLICT: "data conflict",
    ErrorCode.USER_NOT_VERIFIED: "user not verified",
    ErrorCode.INVALID_AUTH_TOKEN: "invalid or malformed authorization token",
    ErrorCode.ACCESS_DENIED: "access denied",
    ErrorCode.INVALID_USER_VERIFICATION_CODE: "invalid verification code",
    ErrorCode.USER_NOT_FOUND: "user not found",
    ErrorCode.INVALID_PASSWORD_RESET_TOKEN: "invalid password reset token",
    ErrorCode.INVALID_PASSWORD_RESET_VERIFICATION_CODE: "invalid password reset verification code",
    ErrorCode.INVALID_REQUEST_HEADERS: "invalid or missing request headers",
    ErrorCode.AUTH_TOKEN_EXPIRED: "authorization token expired",
    ErrorCode.USER_ACCOUNT_LOCKOUT: "user account lockout due to too many failed login attempts",
}

REAUTHENTICATION_CODES = frozenset({
    ErrorCode.INVALID_CREDENTIALS,
    ErrorCode.INVALID_AUTH_TOKEN,
    ErrorCode.AUTH_TOKEN_EXPIRED,
})
