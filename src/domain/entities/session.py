"""Session domain entity.

A Session backs one still-valid refresh token. Only a SHA-256 digest of the
token is kept, so a leaked table cannot be replayed.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(slots=True, kw_only=True)
class Session:
    """Refresh-token session.

    Business Rules:
        - Created on login, registration and refresh
        - Destroyed on logout, rotation and password reset
        - Expiry equals the refresh token's expiry

    Attributes:
        id: Session identifier.
        identity_id: Owning identity.
        token_digest: SHA-256 hex digest of the refresh token.
        expires_at: When the session stops being valid.
        created_at: When the session was created.
    """

    id: UUID
    identity_id: UUID
    token_digest: str
    expires_at: datetime
    created_at: datetime

    def is_expired(self, now: datetime) -> bool:
        """Check expiry against a reference time."""
        return now >= self.expires_at
