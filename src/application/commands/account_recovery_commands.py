"""Password reset and email verification commands (CQRS write operations)."""

from dataclasses import dataclass

from src.domain.types import ActionTokenValue, Email, Password


@dataclass(frozen=True, kw_only=True)
class RequestPasswordReset:
    """Ask for a password reset link.

    The handler answers the same way whether or not the email is registered.
    """

    email: Email
    ip_address: str | None = None
    user_agent: str | None = None


@dataclass(frozen=True, kw_only=True)
class ConfirmPasswordReset:
    """Set a new password with a reset token.

    Attributes:
        token: 64-hex token from the reset link.
        new_password: New password (validated strength).
    """

    token: ActionTokenValue
    new_password: Password
    ip_address: str | None = None
    user_agent: str | None = None


@dataclass(frozen=True, kw_only=True)
class VerifyEmail:
    """Redeem an email verification link."""

    token: ActionTokenValue
    ip_address: str | None = None
    user_agent: str | None = None


@dataclass(frozen=True, kw_only=True)
class ResendVerificationEmail:
    """Ask for a new verification link."""

    email: Email
