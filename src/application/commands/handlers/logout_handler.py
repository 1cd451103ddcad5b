"""Logout handler.

With a refresh token only that session ends; without one every session of
the identity ends. Access tokens already issued stay valid until they expire.
"""

from src.application.commands.auth_commands import LogoutIdentity
from src.application.services.audit_recorder import AuditRecorder
from src.core.errors import DomainError
from src.core.result import Failure, Result, Success
from src.domain.enums import AuditAction
from src.domain.protocols import LoggerProtocol, SessionRepository
from src.infrastructure.security.opaque_token_service import OpaqueTokenService


class LogoutHandler:
    """Handler for LogoutIdentity command."""

    def __init__(
        self,
        *,
        session_repo: SessionRepository,
        audit: AuditRecorder,
        logger: LoggerProtocol,
    ) -> None:
        self._sessions = session_repo
        self._audit = audit
        self._logger = logger

    async def handle(self, cmd: LogoutIdentity) -> Result[int, DomainError]:
        """End sessions.

        Returns:
            Success(number of sessions ended).
        """
        if cmd.refresh_token:
            ended = await self._sessions.delete_by_digest(
                cmd.identity_id, OpaqueTokenService.digest(cmd.refresh_token)
            )
        else:
            ended = await self._sessions.delete_all_for_identity(cmd.identity_id)

        audited = await self._audit.record(
            AuditAction.LOGOUT,
            success=True,
            identity_id=cmd.identity_id,
            ip_address=cmd.ip_address,
            user_agent=cmd.user_agent,
            metadata={"sessions_ended": ended, "all_sessions": not cmd.refresh_token},
        )
        if isinstance(audited, Failure):
            return audited

        self._logger.info(
            "Logged out", identity_id=str(cmd.identity_id), sessions_ended=ended
        )
        return Success(value=ended)
