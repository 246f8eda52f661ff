"""
Input Validation
================
Checks applied to request fields before they reach the OTP manager.
"""

import re

EMAIL_PATTERN = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$"
)

PASSWORD_ERROR_MESSAGE = (
    "password must have at least 8 characters, one lower and upper case "
    "letters, one digit, one special character"
)

_PASSWORD_CHECKS = (r"[a-z]", r"[A-Z]", r"[0-9]", r"[^\d\w]")


def any_value_empty(*values: str) -> bool:
    """True if any of the values is empty or missing."""
    return any(not v for v in values)


def is_email(value: str) -> bool:
    """
    Validate an email address.

    Args:
        value: Email address

    Returns:
        True if the address is syntactically valid and at most 254 chars
    """
    if not value or len(value) > 254:
        return False
    return bool(EMAIL_PATTERN.fullmatch(value))


def is_password_valid(password: str) -> bool:
    """
    Check a password against the account password policy.

    8-70 characters with a lower case letter, an upper case letter, a digit
    and a special character.
    """
    if not password or len(password) < 8 or len(password) > 70:
        return False
    return all(re.search(check, password) for check in _PASSWORD_CHECKS)
