"""Token pair issuance backed by sessions.

Every issued refresh token gets a Session row keyed by its SHA-256 digest,
expiring together with the token. Refresh and logout find sessions by the
same digest.
"""

from datetime import UTC, datetime

from uuid_extensions import uuid7

from src.application.dtos import TokenPair
from src.domain.entities import Identity, Session
from src.domain.protocols import SessionRepository, TokenGenerationProtocol
from src.infrastructure.security.opaque_token_service import OpaqueTokenService


class TokenIssuer:
    """Signs a token pair and opens the matching session."""

    def __init__(
        self,
        *,
        token_service: TokenGenerationProtocol,
        session_repo: SessionRepository,
    ) -> None:
        self._token_service = token_service
        self._session_repo = session_repo

    async def issue(self, identity: Identity) -> TokenPair:
        tokens = self._token_service.issue_token_pair(
            identity_id=identity.id,
            email=identity.email,
            username=identity.username,
            role=identity.role.value,
        )
        await self._session_repo.create(
            Session(
                id=uuid7(),
                identity_id=identity.id,
                token_digest=OpaqueTokenService.digest(tokens.refresh_token),
                expires_at=tokens.refresh_expires_at,
                created_at=datetime.now(UTC),
            )
        )
        return TokenPair(
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token,
            expires_in=tokens.expires_in,
            refresh_expires_at=tokens.refresh_expires_at,
        )
