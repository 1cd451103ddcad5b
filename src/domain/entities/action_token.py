"""ActionToken domain entity.

Single-use hashed token authorizing a password reset or an email
verification. The plaintext token exists only in the emailed link.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from src.domain.enums import ActionTokenPurpose


@dataclass(slots=True, kw_only=True)
class ActionToken:
    """Hashed single-use token.

    Attributes:
        id: Record identifier.
        identity_id: Owning identity.
        purpose: What the token authorizes.
        token_digest: SHA-256 hex digest of the token.
        expires_at: End of validity.
        created_at: Issue time.
        used: Set once the token was redeemed.
    """

    id: UUID
    identity_id: UUID
    purpose: ActionTokenPurpose
    token_digest: str
    expires_at: datetime
    created_at: datetime
    used: bool = False

    def is_live(self, now: datetime) -> bool:
        """True while unused and not expired."""
        return not self.used and now < self.expires_at

    def mark_used(self) -> None:
        """Redeem the token."""
        self.used = True
