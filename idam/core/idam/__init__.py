"""IDAM user-account client library.

This package maps the IDAM service's user account endpoints onto typed
Python calls.

Architecture:
- client.py: UserAuthClient, endpoint resolution, status/error mapping
- models.py: Request/response payloads and the structured ErrorResponse
- exceptions.py: Typed exceptions for validation, service and transport errors
- constants.py: Endpoint templates and the service error-code table

Usage:
    from idam.core.idam import UserAuthClient, UserLoginRequest, IdamServiceError

    client = UserAuthClient("https://idam.example.com")
    try:
        session = client.login("my-app", UserLoginRequest("alice@example.com", "secret"))
    except IdamServiceError as e:
        print(e.code, e.message, e.details)
"""
from .client import (
    UserAuthClient,
    resolve_endpoint,
    bearer_authorization,
)
from .constants import (
    ErrorCode,
    ERROR_MESSAGES,
    USER_REGISTRATION_URL,
    USER_LOGIN_URL,
    USER_VERIFY_ACCOUNT_URL,
    USER_LOGOUT_URL,
    INITIATE_PASSWORD_RESET_URL,
    EXECUTE_PASSWORD_RESET_URL,
    MARSHALL_LABS_IDENTITY_PROVIDER,
)
from .exceptions import (
    IdamError,
    IdamValidationError,
    IdamServiceError,
    IdamTransportError,
    IdamDecodingError,
)
from .models import (
    ErrorResponse,
    UserRegistrationRequest,
    UserRegistrationResponse,
    UserLoginRequest,
    UserLoginResponse,
    UserAccountVerificationRequest,
    UserPasswordResetInitiationRequest,
    UserPasswordResetExecutionRequest,
)

__all__ = [
    # Client
    "UserAuthClient",
    "resolve_endpoint",
    "bearer_authorization",

    # Constants
    "ErrorCode",
    "ERROR_MESSAGES",
    "USER_REGISTRATION_URL",
    "USER_LOGIN_URL",
    "USER_VERIFY_ACCOUNT_URL",
    "USER_LOGOUT_URL",
    "INITIATE_PASSWORD_RESET_URL",
    "EXECUTE_PASSWORD_RESET_URL",
    "MARSHALL_LABS_IDENTITY_PROVIDER",

    # Exceptions
    "IdamError",
    "IdamValidationError",
    "IdamServiceError",
    "IdamTransportError",
    "IdamDecodingError",

    # Payloads
    "ErrorResponse",
    "UserRegistrationRequest",
    "UserRegistrationResponse",
    "UserLoginRequest",
    "UserLoginResponse",
    "UserAccountVerificationRequest",
    "UserPasswordResetInitiationRequest",
    "UserPasswordResetExecutionRequest",
]
