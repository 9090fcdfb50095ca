"""Credential policies for IDAM user-account requests.

Each policy is a fixed list of rules from ``idam.core.validators``:

- Username: required, letters and digits only, 3 to 20 characters
- Email: required, ``local@domain`` format
- Password: required, 8 to 64 printable ASCII characters with a digit,
  an uppercase letter, a lowercase letter and one allowed special character,
  and none of the disallowed special characters

Login only checks that a password is present: passwords issued under older
rules must still be accepted there. Requests that set a new password apply
the full password policy.
"""
from __future__ import annotations
from typing import Tuple

from idam.core import validators
from idam.core.validators import ValidationResult, ValidationRule

# Password requirements
MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 64
# At least one of these is required
ALLOWABLE_PASSWORD_SPECIAL_CHARACTERS = "!@#$%^&*()_+-=[]{}|\\:,./?"
DISALLOWED_PASSWORD_SPECIAL_CHARACTERS = "\"'`~<>;"

# Username requirements
MIN_USERNAME_LENGTH = 3
MAX_USERNAME_LENGTH = 20

USERNAME_RULES: Tuple[ValidationRule, ...] = (
    validators.must_not_be_empty(),
    validators.must_be_alphanumeric(),
    validators.must_have_min_length_of(MIN_USERNAME_LENGTH),
    validators.must_have_max_length_of(MAX_USERNAME_LENGTH),
)

EMAIL_RULES: Tuple[ValidationRule, ...] = (
    validators.must_not_be_empty(),
    validators.must_be_valid_email_format(),
)

PASSWORD_RULES: Tuple[ValidationRule, ...] = (
    validators.must_not_be_empty(),
    validators.must_have_min_length_of(MIN_PASSWORD_LENGTH),
    validators.must_have_max_length_of(MAX_PASSWORD_LENGTH),
    validators.must_contain_at_least_one(ALLOWABLE_PASSWORD_SPECIAL_CHARACTERS),
    validators.must_not_contain_any_of(DISALLOWED_PASSWORD_SPECIAL_CHARACTERS),
    validators.must_contain_numbers(),
    validators.must_contain_uppercase_letter(),
    validators.must_contain_lowercase_letter(),
    validators.must_only_contain_printable_characters(),
    validators.must_only_contain_ascii_characters(),
)

PRESENCE_RULES: Tuple[ValidationRule, ...] = (
    validators.must_not_be_empty(),
)


def validate_username(value: str, field_name: str = "username") -> ValidationResult:
    return validators.validate_string_with_name(value, field_name, *USERNAME_RULES)


def validate_email(value: str, field_name: str = "email") -> ValidationResult:
    return validators.validate_string_with_name(value, field_name, *EMAIL_RULES)


def validate_password(value: str, field_name: str = "password") -> ValidationResult:
    """Apply the full password strength policy."""
    return validators.validate_string_with_name(value, field_name, *PASSWORD_RULES)


def validate_present(value: str, field_name: str) -> ValidationResult:
    """Only require the field to be non-empty."""
    return validators.validate_string_with_name(value, field_name, *PRESENCE_RULES)
