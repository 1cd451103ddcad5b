"""SessionRepository protocol for refresh-token sessions."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from src.domain.entities.session import Session


class SessionRepository(Protocol):
    """Session repository protocol (port).

    Sessions are looked up by the SHA-256 digest of the refresh token and
    the owning identity, and only while unexpired.
    """

    async def create(self, session: Session) -> None:
        """Persist a new session."""
        ...

    async def find_live(
        self, identity_id: UUID, token_digest: str, now: datetime
    ) -> Session | None:
        """Find an unexpired session for the identity and token digest.

        Args:
            identity_id: Owning identity (from the token's subject).
            token_digest: SHA-256 hex digest of the refresh token.
            now: Reference time for the expiry check.

        Returns:
            Session if present and live, None otherwise.
        """
        ...

    async def delete(self, session_id: UUID) -> None:
        """Delete one session by ID."""
        ...

    async def delete_by_digest(self, identity_id: UUID, token_digest: str) -> int:
        """Delete the identity's session bound to a refresh token.

        Returns:
            Number of rows deleted.
        """
        ...

    async def delete_all_for_identity(self, identity_id: UUID) -> int:
        """Delete every session of an identity (logout everywhere, reset).

        Returns:
            Number of rows deleted.
        """
        ...
