"""Core logic of the IDAM client.

Module Structure:
    - validators.py : String validation rules and validate_string_with_name()
    - policy.py     : Username, email and password policies
    - idam/         : HTTP client for the IDAM user account endpoints

Usage Pattern:
    Import explicitly when needed:
        from idam.core.validators import validate_string_with_name, must_not_be_empty
        from idam.core.policy import validate_password
        from idam.core.idam import UserAuthClient
"""
