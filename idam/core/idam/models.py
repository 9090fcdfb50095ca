"""Request and response payloads for the IDAM user-account endpoints.

All payloads are frozen dataclasses. Requests validate themselves against
the credential policies; responses are decoded with ``from_dict`` which
raises ``ValueError`` when the payload does not have the expected shape.
"""
from __future__ import annotations
import re
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Tuple

from idam.core import policy
from idam.core.validators import ValidationResult

from .constants import ERROR_MESSAGES, ErrorCode

_MISSING = object()
_FRACTION = re.compile(r"\.(\d+)")


def _field(payload: Dict[str, Any], key: str, expected: type, default: Any = _MISSING) -> Any:
    """Read ``key`` from a decoded JSON object and check its type."""
    if key not in payload or payload[key] is None:
        if default is _MISSING:
            raise ValueError(f"missing field '{key}'")
        return default

    value = payload[key]
    # bool is an int subclass; JSON true/false must not pass as a number
    if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
        raise ValueError(f"field '{key}' must be of type {expected.__name__}")
    return value


def _string_list(payload: Dict[str, Any], key: str) -> Tuple[str, ...]:
    values = _field(payload, key, list, default=[])
    if not all(isinstance(item, str) for item in values):
        raise ValueError(f"field '{key}' must be a list of strings")
    return tuple(values)


def _require_object(payload: Any, name: str) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        raise ValueError(f"{name} must be a JSON object")
    return payload


def parse_timestamp(value: str) -> datetime:
    """Parse an RFC 3339 timestamp; naive values are taken as UTC."""
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    # Service timestamps may carry nanoseconds or fewer than six digits
    text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


# ─────────────────────────────────────────────────────────────────────────────
# Errors
# ─────────────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class ErrorResponse:
    """Structured error body returned by the IDAM service."""
    code: int
    message: str
    details: Tuple[str, ...] = ()

    @classmethod
    def for_code(cls, code: ErrorCode, *details: str) -> "ErrorResponse":
        """Build an error using the canonical message for ``code``."""
        return cls(code=int(code), message=ERROR_MESSAGES[code], details=tuple(details))

    @classmethod
    def from_dict(cls, payload: Any) -> "ErrorResponse":
        payload = _require_object(payload, "error response")
        code = _field(payload, "error_code", int)
        if not 0 <= code <= 0xFFFF:
            raise ValueError("field 'error_code' is out of range")
        return cls(
            code=code,
            message=_field(payload, "error_message", str, default=""),
            details=_string_list(payload, "error_details"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_code": self.code,
            "error_message": self.message,
            "error_details": list(self.details),
        }


# ─────────────────────────────────────────────────────────────────────────────
# Requests
# ─────────────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class UserRegistrationRequest:
    username: str
    email: str
    password: str

    def validate(self) -> ValidationResult:
        return ValidationResult.merge(
            policy.validate_username(self.username),
            policy.validate_email(self.email),
            policy.validate_password(self.password),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class UserLoginRequest:
    email: str
    password: str

    def validate(self) -> ValidationResult:
        # Presence only: existing passwords may predate the current policy
        return ValidationResult.merge(
            policy.validate_email(self.email),
            policy.validate_present(self.password, "password"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class UserAccountVerificationRequest:
    user_id: str
    verification_code: str

    def validate(self) -> ValidationResult:
        return ValidationResult.merge(
            policy.validate_present(self.user_id, "user_id"),
            policy.validate_present(self.verification_code, "verification_code"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class UserPasswordResetInitiationRequest:
    email: str

    def validate(self) -> ValidationResult:
        return policy.validate_email(self.email)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class UserPasswordResetExecutionRequest:
    """Second step of a password reset, carrying the emailed token and code."""
    user_id: str
    new_password: str
    password_reset_token: str
    verification_code: str

    def validate(self) -> ValidationResult:
        return policy.validate_password(self.new_password, "new_password")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ─────────────────────────────────────────────────────────────────────────────
# Responses
# ─────────────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class UserRegistrationResponse:
    user_id: str
    username: str
    email: str
    verified: bool
    provider: str
    created_at_utc: datetime
    features: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, payload: Any) -> "UserRegistrationResponse":
        payload = _require_object(payload, "registration response")
        return cls(
            user_id=_field(payload, "user_id", str),
            username=_field(payload, "username", str),
            email=_field(payload, "email", str),
            verified=_field(payload, "verified", bool),
            provider=_field(payload, "provider", str, default=""),
            created_at_utc=parse_timestamp(_field(payload, "created_at_utc", str)),
            features=_string_list(payload, "features"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user_id": self.user_id,
            "username": self.username,
            "email": self.email,
            "verified": self.verified,
            "provider": self.provider,
            "created_at_utc": format_timestamp(self.created_at_utc),
            "features": list(self.features),
        }


@dataclass(frozen=True)
class UserLoginResponse:
    token: str
    token_type: str
    application_id: str
    expires_in: int
    user_id: str
    username: str
    refresh_token: str = ""

    @classmethod
    def from_dict(cls, payload: Any) -> "UserLoginResponse":
        payload = _require_object(payload, "login response")
        return cls(
            token=_field(payload, "token", str),
            token_type=_field(payload, "token_type", str),
            application_id=_field(payload, "application", str),
            expires_in=_field(payload, "expires_in", int),
            user_id=_field(payload, "user_id", str),
            username=_field(payload, "username", str),
            refresh_token=_field(payload, "refresh_token", str, default=""),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "token": self.token,
            "token_type": self.token_type,
            "application": self.application_id,
            "expires_in": self.expires_in,
            "user_id": self.user_id,
            "username": self.username,
            "refresh_token": self.refresh_token,
        }
