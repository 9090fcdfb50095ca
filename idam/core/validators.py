"""String validation rules for user-supplied credential fields.

Rules are plain callables built by the ``must_*`` factories below. Each one
receives the value and the field name and returns ``None`` when the value
passes, or a message naming the field when it does not.

Usage:
    result = validate_string_with_name(
        "alice", "username",
        must_not_be_empty(),
        must_have_min_length_of(3),
    )
    if not result.valid:
        print(result.messages)
"""
from __future__ import annotations
from typing import Callable, Iterable, List, NamedTuple, Optional

ValidationRule = Callable[[str, str], Optional[str]]


class ValidationResult(NamedTuple):
    """Outcome of validating one field or a whole request."""
    valid: bool
    messages: List[str]

    @classmethod
    def merge(cls, *results: "ValidationResult") -> "ValidationResult":
        """Combine field results, keeping message order."""
        messages: List[str] = []
        for result in results:
            messages.extend(result.messages)
        return cls(all(result.valid for result in results), messages)


def validate_string_with_name(value: str, field_name: str, *rules: ValidationRule) -> ValidationResult:
    """Run every rule against ``value`` and collect all failure messages.

    Args:
        value: String to validate
        field_name: Name embedded in each failure message
        *rules: Rules to apply, in message order

    Returns:
        ValidationResult; valid when no rule produced a message
    """
    messages = [message for message in (rule(value, field_name) for rule in rules) if message]
    return ValidationResult(not messages, messages)


def must_not_be_empty() -> ValidationRule:
    def rule(value: str, field_name: str) -> Optional[str]:
        if len(value) == 0:
            return f"{field_name} must not be empty"
        return None
    return rule


def must_have_min_length_of(min_length: int) -> ValidationRule:
    def rule(value: str, field_name: str) -> Optional[str]:
        if len(value) < min_length:
            return f"{field_name} must be at least {min_length} characters long"
        return None
    return rule


def must_have_max_length_of(max_length: int) -> ValidationRule:
    def rule(value: str, field_name: str) -> Optional[str]:
        if len(value) > max_length:
            return f"{field_name} must not exceed {max_length} characters"
        return None
    return rule


def must_contain_at_least_one(allowed: Iterable[str]) -> ValidationRule:
    """Require at least one character from ``allowed``."""
    listing = "".join(dict.fromkeys(allowed))
    allowed_set = frozenset(listing)

    def rule(value: str, field_name: str) -> Optional[str]:
        if not any(char in allowed_set for char in value):
            return f"{field_name} must contain at least one of the following characters: {listing}"
        return None
    return rule


def must_not_contain_any_of(disallowed: Iterable[str]) -> ValidationRule:
    """Reject values containing any character from ``disallowed``."""
    listing = "".join(dict.fromkeys(disallowed))
    disallowed_set = frozenset(listing)

    def rule(value: str, field_name: str) -> Optional[str]:
        if any(char in disallowed_set for char in value):
            return f"{field_name} must not contain any of the following characters: {listing}"
        return None
    return rule


def must_contain_numbers() -> ValidationRule:
    def rule(value: str, field_name: str) -> Optional[str]:
        if not any(char.isdigit() for char in value):
            return f"{field_name} must contain at least one number"
        return None
    return rule


def must_contain_uppercase_letter() -> ValidationRule:
    def rule(value: str, field_name: str) -> Optional[str]:
        if not any(char.isupper() for char in value):
            return f"{field_name} must contain at least one uppercase letter"
        return None
    return rule


def must_contain_lowercase_letter() -> ValidationRule:
    def rule(value: str, field_name: str) -> Optional[str]:
        if not any(char.islower() for char in value):
            return f"{field_name} must contain at least one lowercase letter"
        return None
    return rule


def must_only_contain_printable_characters() -> ValidationRule:
    def rule(value: str, field_name: str) -> Optional[str]:
        if not all(char.isprintable() for char in value):
            return f"{field_name} must only contain printable characters"
        return None
    return rule


def must_only_contain_ascii_characters() -> ValidationRule:
    def rule(value: str, field_name: str) -> Optional[str]:
        if any(ord(char) > 127 for char in value):
            return f"{field_name} must only contain ASCII characters"
        return None
    return rule


def must_be_alphanumeric() -> ValidationRule:
    def rule(value: str, field_name: str) -> Optional[str]:
        if not all(char.isalnum() for char in value):
            return f"{field_name} must only contain letters and numbers"
        return None
    return rule


def must_be_valid_email_format() -> ValidationRule:
    """Require a ``local@domain`` shape with a dot in the domain.

    The value is split on its last ``@`` so quoted local parts containing
    ``@`` are still checked against the real domain.
    """
    def rule(value: str, field_name: str) -> Optional[str]:
        message = f"{field_name} must be a valid email address"
        if "@" not in value:
            return message

        local, domain = value.rsplit("@", 1)
        if not local or not domain or "." not in domain:
            return message
        return None
    return rule
