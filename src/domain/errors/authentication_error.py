"""Authentication domain errors.

Returned inside Failure by the login, refresh and account-recovery flows.
Messages are deliberately generic: none of them tells the caller whether an
email or username exists.

Usage:
    from src.domain.errors import InvalidCredentials

    return Failure(error=InvalidCredentials())
"""

from dataclasses import dataclass

from src.core.enums import ErrorCode
from src.core.errors import AuthenticationError, ConflictError, DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class InvalidCredentials(AuthenticationError):
    """Unknown identifier or wrong password (indistinguishable)."""

    code: ErrorCode = ErrorCode.INVALID_CREDENTIALS
    message: str = "Invalid credentials"


@dataclass(frozen=True, slots=True, kw_only=True)
class AccountLocked(DomainError):
    """Identifier is locked after repeated failures.

    Attributes:
        remaining_minutes: Whole minutes until the lock expires (at least 1).
    """

    remaining_minutes: int
    code: ErrorCode = ErrorCode.ACCOUNT_LOCKED
    message: str = "Account temporarily locked due to too many failed attempts"


@dataclass(frozen=True, slots=True, kw_only=True)
class EmailNotVerified(AuthenticationError):
    """Login refused until the email address is verified."""

    code: ErrorCode = ErrorCode.EMAIL_NOT_VERIFIED
    message: str = "Email address not verified"


@dataclass(frozen=True, slots=True, kw_only=True)
class InvalidRefreshToken(AuthenticationError):
    """Refresh token is forged, expired, or its session is gone."""

    code: ErrorCode = ErrorCode.INVALID_REFRESH_TOKEN
    message: str = "Invalid refresh token"


@dataclass(frozen=True, slots=True, kw_only=True)
class InvalidAccessToken(AuthenticationError):
    """Access token failed signature, expiry or type checks."""

    code: ErrorCode = ErrorCode.INVALID_ACCESS_TOKEN
    message: str = "Invalid or expired access token"


@dataclass(frozen=True, slots=True, kw_only=True)
class InvalidResetToken(AuthenticationError):
    """Password reset token is unknown, used or expired."""

    code: ErrorCode = ErrorCode.INVALID_RESET_TOKEN
    message: str = "Invalid or expired reset token"


@dataclass(frozen=True, slots=True, kw_only=True)
class InvalidVerificationToken(AuthenticationError):
    """Email verification token is unknown or expired."""

    code: ErrorCode = ErrorCode.INVALID_VERIFICATION_TOKEN
    message: str = "Invalid or expired verification token"


@dataclass(frozen=True, slots=True, kw_only=True)
class EmailAlreadyVerified(ConflictError):
    """Verification requested for an already verified address."""

    code: ErrorCode = ErrorCode.EMAIL_ALREADY_VERIFIED
    message: str = "Email already verified"
    resource_type: str = "identity"
    conflicting_field: str | None = "email_verified_at"
