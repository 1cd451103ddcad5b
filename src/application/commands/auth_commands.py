"""Authentication commands (CQRS write operations).

Commands represent user intent to change system state.
All commands are immutable (frozen=True) and use keyword-only arguments (kw_only=True).

Pattern:
- Commands are data containers (no logic)
- Handlers execute business logic
- Commands don't return values (handlers return Result types)
- Use Annotated types for validation (DRY principle)
- Request metadata (ip_address, user_agent) is copied in by the router
"""

from dataclasses import dataclass
from uuid import UUID

from src.domain.types import Email, Identifier, Password, RefreshToken, Username


@dataclass(frozen=True, kw_only=True)
class RegisterIdentity:
    """Register a new identity.

    Attributes:
        email: Email address (validated, normalized).
        username: Username (letters, digits, dot, dash, underscore).
        password: Plain password (validated strength, will be hashed).
        display_name: Optional human name used in emails.

    Example:
        >>> command = RegisterIdentity(
        ...     email="a@x.com",
        ...     username="a",
        ...     password="Secr3t!23",
        ... )
        >>> result = await handler.handle(command)
    """

    email: Email
    username: Username
    password: Password
    display_name: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None


@dataclass(frozen=True, kw_only=True)
class LoginIdentity:
    """Authenticate with password and, when enabled, a second factor.

    Attributes:
        identifier: Email or username exactly as submitted.
        password: Plain password.
        two_factor_code: TOTP code, recovery code or emailed code (second call).

    Example:
        >>> result = await handler.handle(
        ...     LoginIdentity(identifier="a", password="Secr3t!23")
        ... )
        >>> # Success(AuthenticatedIdentity) or Success(TwoFactorChallenge)
    """

    identifier: Identifier
    password: str
    two_factor_code: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None


@dataclass(frozen=True, kw_only=True)
class RefreshTokens:
    """Exchange a refresh token for a new pair (rotation).

    Attributes:
        refresh_token: Refresh token from the cookie or body.
    """

    refresh_token: RefreshToken
    ip_address: str | None = None
    user_agent: str | None = None


@dataclass(frozen=True, kw_only=True)
class LogoutIdentity:
    """End one session, or all of them when no refresh token is given.

    Attributes:
        identity_id: Authenticated identity (from the access token).
        refresh_token: Refresh token of the session to end.
    """

    identity_id: UUID
    refresh_token: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None
