"""ActionTokenRepository protocol for reset and verification tokens."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from src.domain.entities.action_token import ActionToken
from src.domain.enums import ActionTokenPurpose


class ActionTokenRepository(Protocol):
    """Action token repository protocol (port).

    Tokens are looked up by the SHA-256 digest of the emailed token.
    """

    async def create(self, token: ActionToken) -> None:
        """Persist a new token."""
        ...

    async def find_by_digest(
        self, purpose: ActionTokenPurpose, token_digest: str
    ) -> ActionToken | None:
        """Find a token by purpose and digest (used or not)."""
        ...

    async def update(self, token: ActionToken) -> None:
        """Persist the used flag."""
        ...

    async def delete(self, token_id: UUID) -> None:
        """Delete one token."""
        ...

    async def delete_for_identity(
        self, identity_id: UUID, purpose: ActionTokenPurpose
    ) -> int:
        """Delete all tokens of one purpose for an identity."""
        ...

    async def delete_expired(self, now: datetime) -> int:
        """Purge expired tokens."""
        ...
