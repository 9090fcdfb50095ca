"""HTTP client for the IDAM service's user account endpoints.

Each operation maps onto exactly one HTTP exchange and either returns the
decoded success payload or raises one of the exceptions in ``exceptions.py``.
"""
from __future__ import annotations
import json
import logging
from typing import Any, Callable, Dict, Optional, TypeVar, Union
from urllib.parse import quote, urljoin, urlparse

import requests

from .constants import (
    APP_ID_PLACEHOLDER,
    BEARER_PREFIX,
    EXECUTE_PASSWORD_RESET_URL,
    INITIATE_PASSWORD_RESET_URL,
    JSON_CONTENT_TYPE,
    USER_LOGIN_URL,
    USER_LOGOUT_URL,
    USER_REGISTRATION_URL,
    USER_VERIFY_ACCOUNT_URL,
)
from .exceptions import (
    IdamDecodingError,
    IdamServiceError,
    IdamTransportError,
    IdamValidationError,
)
from .models import (
    ErrorResponse,
    UserAccountVerificationRequest,
    UserLoginRequest,
    UserLoginResponse,
    UserPasswordResetExecutionRequest,
    UserPasswordResetInitiationRequest,
    UserRegistrationRequest,
    UserRegistrationResponse,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")
Timeout = Union[None, float, tuple]


def resolve_endpoint(base_url: str, template: str, app_id: Optional[str] = None) -> str:
    """Build an absolute endpoint URL from a path template.

    Args:
        base_url: IDAM service base URL (scheme and host required)
        template: Endpoint path, optionally containing ``:appId``
        app_id: Application id substituted for the placeholder

    Returns:
        Absolute URL; an absolute template path replaces any base path

    Raises:
        IdamTransportError: If the base URL or template cannot be used
    """
    parsed = urlparse(base_url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise IdamTransportError(f"invalid IDAM base URL '{base_url}'", template)

    path = template
    if APP_ID_PLACEHOLDER in template:
        if not app_id:
            raise IdamTransportError("application id is required", template)
        path = template.replace(APP_ID_PLACEHOLDER, quote(app_id, safe=""), 1)

    return urljoin(base_url, path)


def bearer_authorization(auth_token: str) -> str:
    """Return the Authorization header value, adding the Bearer scheme if absent."""
    if auth_token.startswith(BEARER_PREFIX):
        return auth_token
    return BEARER_PREFIX + auth_token


def _check_timeout(timeout: Timeout) -> None:
    parts = timeout if isinstance(timeout, tuple) else (timeout,)
    for part in parts:
        if part is None:
            continue
        if isinstance(part, bool) or not isinstance(part, (int, float)) or part <= 0:
            raise ValueError(f"timeout must be a positive number of seconds or None, got {timeout!r}")


class UserAuthClient:
    """Client for user-facing calls to the IDAM service.

    The instance holds only its base URL, timeout, default application id
    and a reusable ``requests.Session``; nothing is mutated per call, so one
    instance can be shared between threads.

    Usage:
        client = UserAuthClient("https://idam.example.com")
        response = client.login("my-app", UserLoginRequest("a@b.com", "secret"))
        client.logout(response.token)
    """

    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: Timeout = None,
        application_id: str = "",
    ):
        """Initialize the client.

        Args:
            base_url: IDAM service base URL
            session: Pre-configured transport (defaults to a new Session)
            timeout: Passed to every request; None leaves it to the transport
            application_id: Used by app-scoped operations called with an empty app id

        Raises:
            ValueError: If the timeout (or any part of a timeout tuple) is not positive
        """
        _check_timeout(timeout)
        self.base_url = base_url
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.application_id = application_id

    # ──────────────────────────────────────────────────────────────────────
    # Operations
    # ──────────────────────────────────────────────────────────────────────
    def register(self, app_id: str, request: UserRegistrationRequest) -> UserRegistrationResponse:
        """Register a new user account (POST, expects 201 Created)."""
        self._validate(request)
        url = resolve_endpoint(self.base_url, USER_REGISTRATION_URL, app_id or self.application_id)
        response = self._exchange("POST", url, 201, payload=request.to_dict())
        return self._decode(response, url, UserRegistrationResponse.from_dict)

    def login(self, app_id: str, request: UserLoginRequest) -> UserLoginResponse:
        """Log a user in (POST, expects 200 OK)."""
        self._validate(request)
        url = resolve_endpoint(self.base_url, USER_LOGIN_URL, app_id or self.application_id)
        response = self._exchange("POST", url, 200, payload=request.to_dict())
        return self._decode(response, url, UserLoginResponse.from_dict)

    def verify_account(self, app_id: str, request: UserAccountVerificationRequest) -> None:
        """Confirm an account with its verification code (PUT, expects 204)."""
        self._validate(request)
        url = resolve_endpoint(self.base_url, USER_VERIFY_ACCOUNT_URL, app_id or self.application_id)
        self._exchange("PUT", url, 204, payload=request.to_dict())

    def logout(self, auth_token: str) -> None:
        """Invalidate an access token (POST, expects 200 OK).

        Args:
            auth_token: Access token, with or without the "Bearer " prefix
        """
        url = resolve_endpoint(self.base_url, USER_LOGOUT_URL)
        headers = {"Authorization": bearer_authorization(auth_token)}
        self._exchange("POST", url, 200, headers=headers)

    def initiate_password_reset(self, app_id: str, request: UserPasswordResetInitiationRequest) -> None:
        """Start a password reset for an email address (POST, expects 200 OK)."""
        self._validate(request)
        url = resolve_endpoint(self.base_url, INITIATE_PASSWORD_RESET_URL, app_id or self.application_id)
        self._exchange("POST", url, 200, payload=request.to_dict())

    def execute_password_reset(self, app_id: str, request: UserPasswordResetExecutionRequest) -> None:
        """Set a new password using a reset token and code (PUT, expects 204)."""
        self._validate(request)
        url = resolve_endpoint(self.base_url, EXECUTE_PASSWORD_RESET_URL, app_id or self.application_id)
        self._exchange("PUT", url, 204, payload=request.to_dict())

    # ──────────────────────────────────────────────────────────────────────
    # Helpers
    # ──────────────────────────────────────────────────────────────────────
    @staticmethod
    def _validate(request: Any) -> None:
        valid, messages = request.validate()
        if not valid:
            logger.debug("Rejected %s locally: %d validation message(s)", type(request).__name__, len(messages))
            raise IdamValidationError(messages)

    def _exchange(
        self,
        method: str,
        url: str,
        expected_status: int,
        payload: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> requests.Response:
        """Send one request and check the status code.

        Raises:
            IdamTransportError: If the request could not be completed
            IdamServiceError: If the service answered with a structured error
            IdamDecodingError: If an error response body could not be decoded
        """
        request_headers = dict(headers or {})
        data = None
        if payload is not None:
            data = json.dumps(payload)
            request_headers["Content-Type"] = JSON_CONTENT_TYPE

        try:
            response = self.session.request(
                method, url, data=data, headers=request_headers, timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.warning("IDAM %s %s failed: %s", method, url, type(e).__name__)
            raise IdamTransportError(str(e), url) from e

        logger.debug("IDAM %s %s -> %s", method, url, response.status_code)

        if response.status_code != expected_status:
            raise self._error_from_response(response, url)
        return response

    @staticmethod
    def _error_from_response(response: requests.Response, url: str) -> Exception:
        try:
            error_response = ErrorResponse.from_dict(response.json())
        except ValueError as e:
            logger.warning("IDAM returned undecodable error body (status %s) for %s", response.status_code, url)
            return IdamDecodingError(
                f"error decoding error response body from idam service - {e}",
                url,
                response.status_code,
            )

        logger.warning(
            "IDAM error %s (status %s) for %s: %s",
            error_response.code, response.status_code, url, error_response.message,
        )
        return IdamServiceError(error_response, response.status_code)

    @staticmethod
    def _decode(response: requests.Response, url: str, parse: Callable[[Any], T]) -> T:
        try:
            return parse(response.json())
        except ValueError as e:
            logger.warning("IDAM returned undecodable success body (status %s) for %s", response.status_code, url)
            raise IdamDecodingError(
                f"error decoding response body from idam service - {e}",
                url,
                response.status_code,
            ) from e
