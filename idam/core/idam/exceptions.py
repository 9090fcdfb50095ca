"""IDAM client exceptions.

Three kinds of failure are kept apart so callers can branch on type:

- IdamValidationError: request rejected locally, nothing was sent
- IdamServiceError: the service answered with a structured error
- IdamTransportError: the exchange failed; IdamDecodingError narrows this
  to a response body that could not be interpreted
"""
from __future__ import annotations
from typing import List, Optional

from .constants import ErrorCode, REAUTHENTICATION_CODES
from .models import ErrorResponse


class IdamError(Exception):
    """Base exception for all IDAM client operations."""
    pass


class IdamValidationError(IdamError):
    """Request failed local validation and was not sent.

    Attributes:
        messages: Field messages, suitable for showing to the end user
    """

    def __init__(self, messages: List[str]):
        self.messages = list(messages)
        super().__init__("; ".join(self.messages) or "request validation failed")


class IdamServiceError(IdamError):
    """Structured error returned by the IDAM service.

    Attributes:
        error_response: Decoded error body, passed through unchanged
        status_code: HTTP status of the response
    """

    def __init__(self, error_response: ErrorResponse, status_code: int):
        self.error_response = error_response
        self.status_code = status_code
        super().__init__(error_response.message)

    @property
    def code(self) -> int:
        return self.error_response.code

    @property
    def message(self) -> str:
        return self.error_response.message

    @property
    def details(self) -> List[str]:
        return list(self.error_response.details)

    @property
    def requires_reauthentication(self) -> bool:
        """Credentials or token were rejected; the caller should log in again."""
        return self.code in REAUTHENTICATION_CODES

    @property
    def is_lockout(self) -> bool:
        return self.code == ErrorCode.USER_ACCOUNT_LOCKOUT

    @property
    def is_server_fault(self) -> bool:
        return self.code == ErrorCode.UNHANDLED_ERROR


class IdamTransportError(IdamError):
    """HTTP exchange with the IDAM service could not be completed.

    Attributes:
        endpoint: URL (or template) the request was aimed at
    """

    def __init__(self, message: str, endpoint: str = ""):
        self.endpoint = endpoint
        super().__init__(f"{endpoint}: {message}" if endpoint else message)


class IdamDecodingError(IdamTransportError):
    """Response body could not be decoded into the expected shape.

    Attributes:
        status_code: HTTP status of the undecodable response
    """

    def __init__(self, message: str, endpoint: str = "", status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(f"[{status_code}] {message}" if status_code is not None else message, endpoint)
