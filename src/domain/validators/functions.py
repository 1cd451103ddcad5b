"""Centralized validation functions.

All validation logic defined once, reused everywhere via Annotated types.
Validators are pure functions that raise ValueError on validation failure.
"""

import re

from email_validator import EmailNotValidError
from email_validator import validate_email as _check_email

PASSWORD_SPECIAL_CHARACTERS = '!@#$%^&*(),.?":{}|<>-_'
USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


def validate_email(v: str) -> str:
    """Validate email format.

    Syntax only; no DNS lookups.

    Args:
        v: Email address to validate.

    Returns:
        Normalized email (lowercase).

    Raises:
        ValueError: If email format is invalid.

    Example:
        >>> validate_email("User@Example.COM")
        'user@example.com'
        >>> validate_email("invalid")
        ValueError: Invalid email format
    """
    try:
        result = _check_email(v, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError("Invalid email format") from e
    return result.normalized.lower()


def validate_strong_password(v: str) -> str:
    """Validate password strength.

    Args:
        v: Password to validate.

    Returns:
        Password unchanged (validation only).

    Raises:
        ValueError: If password doesn't meet requirements.

    Example:
        >>> validate_strong_password("Secr3t!23")
        'Secr3t!23'
        >>> validate_strong_password("weak")
        ValueError: Password must be at least 8 characters
    """
    if len(v) < 8:
        raise ValueError("Password must be at least 8 characters")
    if not any(c.isupper() for c in v):
        raise ValueError("Password must contain uppercase letter")
    if not any(c.islower() for c in v):
        raise ValueError("Password must contain lowercase letter")
    if not any(c.isdigit() for c in v):
        raise ValueError("Password must contain digit")
    if not any(c in PASSWORD_SPECIAL_CHARACTERS for c in v):
        raise ValueError("Password must contain special character")
    return v


def validate_username(v: str) -> str:
    """Validate username characters.

    Letters, digits, dot, dash and underscore. An "@" is rejected so a
    username can never be mistaken for an email at login.
    """
    if not USERNAME_PATTERN.match(v):
        raise ValueError(
            "Username may only contain letters, digits, '.', '-' and '_'"
        )
    return v


def validate_token_format(v: str) -> str:
    """Validate token format (hex string).

    Used for email verification and password reset tokens.

    Args:
        v: Token string to validate.

    Returns:
        Token lowercased.

    Raises:
        ValueError: If token format is invalid.
    """
    if not v:
        raise ValueError("Token cannot be empty")
    if not re.match(r"^[a-fA-F0-9]+$", v):
        raise ValueError("Token must be hexadecimal")
    return v.lower()


def validate_refresh_token_format(v: str) -> str:
    """Validate refresh token format (three dot-separated base64url segments).

    Raises:
        ValueError: If token format is invalid.
    """
    if not v:
        raise ValueError("Refresh token cannot be empty")
    if not re.match(r"^[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+$", v):
        raise ValueError("Invalid refresh token format")
    return v


def validate_second_factor_code(v: str) -> str:
    """Validate a second-factor code.

    Accepts 6-digit TOTP or email codes and 8-character hex recovery codes.
    Surrounding whitespace is stripped.
    """
    code = v.strip()
    if re.fullmatch(r"\d{6}", code) or re.fullmatch(r"[A-Fa-f0-9]{8}", code):
        return code
    raise ValueError("Code must be 6 digits or an 8-character recovery code")
