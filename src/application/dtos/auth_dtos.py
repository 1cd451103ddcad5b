"""Authentication DTOs (Data Transfer Objects).

Response/result dataclasses for authentication command handlers.
These carry data from handlers back to the presentation layer.

DTOs:
    - TokenPair: Access + refresh token issued together
    - AuthenticatedIdentity: Result of a completed login or registration
    - TwoFactorChallenge: Login paused until a second factor is supplied
    - LockoutInfo: Lock state of an identifier
    - ResetTokenStatus: Result of validating a password reset link
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from src.domain.entities import Identity


@dataclass(frozen=True, kw_only=True)
class TokenPair:
    """Tokens returned to the client.

    Attributes:
        access_token: Short-lived JWT (default 15 minutes).
        refresh_token: Long-lived JWT backed by a Session row.
        expires_in: Access token lifetime in seconds.
        refresh_expires_at: When the refresh token (and its session) expires.
        token_type: Always "bearer".
    """

    access_token: str
    refresh_token: str
    expires_in: int
    refresh_expires_at: datetime
    token_type: str = "bearer"


@dataclass(frozen=True, kw_only=True)
class AuthenticatedIdentity:
    """Identity plus its freshly issued tokens.

    The Identity entity carries no password hash or second-factor secrets,
    so it is safe to serialize.
    """

    identity: Identity
    tokens: TokenPair


@dataclass(frozen=True, kw_only=True)
class TwoFactorChallenge:
    """Login needs a second factor before tokens are issued.

    Attributes:
        method: "email" when a code was just emailed, "totp" otherwise.
        requires_2fa: Always True (wire flag for clients).
    """

    method: Literal["email", "totp"]
    requires_2fa: bool = True


@dataclass(frozen=True, kw_only=True)
class LockoutInfo:
    """Lock state of an identifier.

    Attributes:
        is_locked: Whether the lock flag is present.
        remaining_minutes: Minutes until unlock (locked only).
        attempts: Failures in the current window (unlocked only).
    """

    is_locked: bool
    remaining_minutes: int | None = None
    attempts: int | None = None


@dataclass(frozen=True, kw_only=True)
class ResetTokenStatus:
    """Outcome of checking a password reset link.

    Attributes:
        valid: Whether the token is live.
        masked_email: Address hint such as "a***@x.com" (valid tokens only).
    """

    valid: bool
    masked_email: str | None = None
