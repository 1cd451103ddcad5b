"""Validators package exports."""

from src.domain.validators.functions import (
    validate_email,
    validate_refresh_token_format,
    validate_second_factor_code,
    validate_strong_password,
    validate_token_format,
    validate_username,
)

__all__ = [
    "validate_email",
    "validate_refresh_token_format",
    "validate_second_factor_code",
    "validate_strong_password",
    "validate_token_format",
    "validate_username",
]
