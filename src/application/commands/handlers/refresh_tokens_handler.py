"""Refresh token handler (rotation).

Flow:
1. Verify signature, expiry and type of the refresh token
2. Find the live session bound to the token's digest for the token's subject
3. Load the identity
4. Delete the old session (the old refresh token stops working)
5. Issue a new pair and open a new session
6. Record audit event

Every rejection returns the same InvalidRefreshToken.
"""

from datetime import UTC, datetime
from uuid import UUID

from src.application.commands.auth_commands import RefreshTokens
from src.application.dtos import TokenPair
from src.application.services.audit_recorder import AuditRecorder
from src.application.services.token_issuer import TokenIssuer
from src.core.errors import DomainError
from src.core.result import Failure, Result, Success
from src.domain.enums import AuditAction
from src.domain.errors import InvalidRefreshToken
from src.domain.protocols import (
    IdentityRepository,
    LoggerProtocol,
    SessionRepository,
    TokenGenerationProtocol,
)
from src.infrastructure.security.opaque_token_service import OpaqueTokenService


class RefreshTokensHandler:
    """Handler for RefreshTokens command."""

    def __init__(
        self,
        *,
        token_service: TokenGenerationProtocol,
        session_repo: SessionRepository,
        identity_repo: IdentityRepository,
        token_issuer: TokenIssuer,
        audit: AuditRecorder,
        logger: LoggerProtocol,
    ) -> None:
        self._token_service = token_service
        self._sessions = session_repo
        self._identities = identity_repo
        self._token_issuer = token_issuer
        self._audit = audit
        self._logger = logger

    async def handle(self, cmd: RefreshTokens) -> Result[TokenPair, DomainError]:
        """Rotate a refresh token.

        Returns:
            Success(TokenPair) or Failure(InvalidRefreshToken).
        """
        claims = self._token_service.validate_refresh_token(cmd.refresh_token)
        if isinstance(claims, Failure):
            self._logger.info("Refresh token failed validation")
            return claims

        try:
            identity_id = UUID(str(claims.value["sub"]))
        except ValueError:
            return Failure(error=InvalidRefreshToken())

        session = await self._sessions.find_live(
            identity_id,
            OpaqueTokenService.digest(cmd.refresh_token),
            datetime.now(UTC),
        )
        if session is None:
            self._logger.warning(
                "Refresh token has no live session",
                identity_id=str(identity_id),
            )
            return Failure(error=InvalidRefreshToken())

        identity = await self._identities.find_by_id(identity_id)
        if identity is None:
            return Failure(error=InvalidRefreshToken())

        await self._sessions.delete(session.id)
        tokens = await self._token_issuer.issue(identity)

        audited = await self._audit.record(
            AuditAction.TOKENS_REFRESHED,
            success=True,
            identity_id=identity.id,
            ip_address=cmd.ip_address,
            user_agent=cmd.user_agent,
        )
        if isinstance(audited, Failure):
            return audited

        self._logger.info("Tokens refreshed", identity_id=str(identity.id))
        return Success(value=tokens)
