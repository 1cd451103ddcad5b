"""EmailOtpChallenge domain entity."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(slots=True, kw_only=True)
class EmailOtpChallenge:
    """Hashed six-digit code sent by email.

    At most one live challenge exists per identity; issuing a new one deletes
    the previous. A challenge past ``expires_at`` is treated as absent.

    Attributes:
        id: Challenge identifier.
        identity_id: Owning identity.
        code_hash: Argon2id hash of the code.
        attempts: Verification attempts made against this challenge.
        expires_at: End of validity.
        created_at: Issue time.
    """

    id: UUID
    identity_id: UUID
    code_hash: str
    expires_at: datetime
    created_at: datetime
    attempts: int = 0

    def is_live(self, now: datetime) -> bool:
        """True while the challenge has not expired."""
        return now < self.expires_at

    def register_attempt(self) -> None:
        """Count one verification attempt."""
        self.attempts += 1
