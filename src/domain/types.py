"""Annotated types with centralized validation.

Define validation once, use everywhere. All custom types use Pydantic's
Annotated with Field constraints and AfterValidator.

Usage:
    from src.domain.types import Email, Password, Username

    class RegisterRequest(BaseModel):
        email: Email
        username: Username
        password: Password
"""

from typing import Annotated

from pydantic import AfterValidator, Field

from src.domain.validators import (
    validate_email,
    validate_refresh_token_format,
    validate_second_factor_code,
    validate_strong_password,
    validate_token_format,
    validate_username,
)

# ============================================================================
# Identity Types
# ============================================================================

Email = Annotated[
    str,
    Field(
        min_length=3,
        max_length=255,
        description="Email address",
        examples=["a@x.com"],
    ),
    AfterValidator(validate_email),
]
"""Email address with validation and normalization.

Examples:
    >>> from pydantic import BaseModel
    >>> class Request(BaseModel):
    ...     email: Email
    >>> Request(email="User@Example.COM").email
    'user@example.com'
"""

Username = Annotated[
    str,
    Field(
        min_length=1,
        max_length=50,
        description="Unique username",
        examples=["alice"],
    ),
    AfterValidator(validate_username),
]

Password = Annotated[
    str,
    Field(
        min_length=8,
        max_length=128,
        description="Password with strength requirements",
        examples=["Secr3t!23"],
    ),
    AfterValidator(validate_strong_password),
]
"""Password with strength validation.

Requirements:
- At least 8 characters
- At least one uppercase letter, one lowercase letter and one digit
- At least one special character
"""

Identifier = Annotated[
    str,
    Field(
        min_length=1,
        max_length=255,
        description="Email or username as typed at login",
        examples=["a@x.com"],
    ),
]
"""Login identifier.

Not normalized: lockout counters are keyed on the identifier as submitted.
"""

# ============================================================================
# Token Types
# ============================================================================

ActionTokenValue = Annotated[
    str,
    Field(
        min_length=16,
        max_length=128,
        description="Password reset or email verification token (hex)",
        examples=["9f86d081884c7d659a2feaa0c55ad015a3bf4f1b2b0b822cd15d6c15b0f00a08"],
    ),
    AfterValidator(validate_token_format),
]

RefreshToken = Annotated[
    str,
    Field(
        min_length=16,
        max_length=2048,
        description="Signed refresh token",
    ),
    AfterValidator(validate_refresh_token_format),
]

SecondFactorCode = Annotated[
    str,
    Field(
        min_length=6,
        max_length=16,
        description="TOTP code, email OTP or recovery code",
        examples=["123456", "A1B2C3D4"],
    ),
    AfterValidator(validate_second_factor_code),
]
"""Second-factor code.

Examples:
    >>> from pydantic import BaseModel
    >>> class Request(BaseModel):
    ...     code: SecondFactorCode
    >>> Request(code=" 123456 ").code
    '123456'
"""
