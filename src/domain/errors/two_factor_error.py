"""Second factor and quota errors.

RateLimited and TooManyAttempts are expected security outcomes. Callers log
them at warning level, never as errors.
"""

from dataclasses import dataclass

from src.core.enums import ErrorCode
from src.core.errors import DomainError, NotFoundError


@dataclass(frozen=True, slots=True, kw_only=True)
class RateLimited(DomainError):
    """Too many sends (OTP, reset or verification emails) in the window."""

    code: ErrorCode = ErrorCode.RATE_LIMITED
    message: str = "Too many requests. Please try again later"


@dataclass(frozen=True, slots=True, kw_only=True)
class TooManyAttempts(DomainError):
    """Too many failed OTP verifications in the window."""

    code: ErrorCode = ErrorCode.TOO_MANY_ATTEMPTS
    message: str = "Too many verification attempts. Please try again later"


@dataclass(frozen=True, slots=True, kw_only=True)
class InvalidCode(DomainError):
    """A submitted OTP or setup code did not match."""

    code: ErrorCode = ErrorCode.INVALID_CODE
    message: str = "Invalid code"


@dataclass(frozen=True, slots=True, kw_only=True)
class InvalidTwoFactorCode(DomainError):
    """No applicable second-factor method accepted the code at login."""

    code: ErrorCode = ErrorCode.INVALID_TWO_FACTOR_CODE
    message: str = "Invalid two-factor code"


@dataclass(frozen=True, slots=True, kw_only=True)
class ChallengeNotFound(NotFoundError):
    """No live email OTP challenge (never issued or expired)."""

    code: ErrorCode = ErrorCode.CHALLENGE_NOT_FOUND
    message: str = "Code expired or not found"
    resource_type: str = "email_otp_challenge"


@dataclass(frozen=True, slots=True, kw_only=True)
class SetupNotStarted(NotFoundError):
    """TOTP confirmation attempted before provisioning."""

    code: ErrorCode = ErrorCode.SETUP_NOT_STARTED
    message: str = "Two-factor setup has not been started"
    resource_type: str = "second_factor"
