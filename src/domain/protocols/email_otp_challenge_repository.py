"""EmailOtpChallengeRepository protocol."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from src.domain.entities.email_otp_challenge import EmailOtpChallenge


class EmailOtpChallengeRepository(Protocol):
    """Email OTP challenge repository protocol (port)."""

    async def create(self, challenge: EmailOtpChallenge) -> None:
        """Persist a new challenge."""
        ...

    async def find_live(
        self, identity_id: UUID, now: datetime
    ) -> EmailOtpChallenge | None:
        """Most recent unexpired challenge for the identity, if any."""
        ...

    async def update(self, challenge: EmailOtpChallenge) -> None:
        """Persist the attempt counter."""
        ...

    async def delete(self, challenge_id: UUID) -> None:
        """Delete one challenge."""
        ...

    async def delete_for_identity(self, identity_id: UUID) -> int:
        """Delete every challenge of the identity."""
        ...

    async def delete_expired(self, now: datetime) -> int:
        """Purge challenges past expiry.

        Returns:
            Number of rows deleted.
        """
        ...
