"""Authentication queries (CQRS read operations).

Queries represent requests for information. They are immutable
dataclasses with question-like names. Queries NEVER change state.
"""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class GetCurrentIdentity:
    """Profile of the authenticated identity.

    Attributes:
        identity_id: Subject of the access token.
    """

    identity_id: UUID


@dataclass(frozen=True, kw_only=True)
class GetTwoFactorStatus:
    """Which second factors the identity has enabled."""

    identity_id: UUID


@dataclass(frozen=True, kw_only=True)
class ValidateResetToken:
    """Whether a password reset link can still be used.

    Attributes:
        token: Token from the reset link.
    """

    token: str


@dataclass(frozen=True, kw_only=True)
class ListAuditEvents:
    """Newest-first security events of the identity.

    Attributes:
        identity_id: Authenticated identity.
        limit: Maximum number of events.
    """

    identity_id: UUID
    limit: int = 50


@dataclass(frozen=True, kw_only=True)
class GetLockoutInfo:
    """Lock state and failure count of a login identifier."""

    identifier: str
