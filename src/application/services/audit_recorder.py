"""Audit recorder service.

Builds AuditEvent entities for the authentication flows and appends them
through the AuditProtocol port. Every handler records through this service so
the event shape (id, timestamp, request metadata) stays uniform.

Usage:
    recorder = AuditRecorder(audit=audit, logger=logger)
    result = await recorder.record(
        AuditAction.LOGIN_SUCCEEDED,
        success=True,
        identity_id=identity.id,
        method="password",
        ip_address=cmd.ip_address,
    )
"""

from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from uuid_extensions import uuid7

from src.core.result import Failure, Result, Success
from src.domain.entities import AuditEvent
from src.domain.enums import AuditAction
from src.domain.errors import AuditError
from src.domain.protocols import AuditProtocol, LoggerProtocol


class AuditRecorder:
    """Appends security events to the audit trail.

    A failed append is returned to the caller: flows that cannot be audited
    do not complete.
    """

    def __init__(self, *, audit: AuditProtocol, logger: LoggerProtocol) -> None:
        self._audit = audit
        self._logger = logger

    async def record(
        self,
        action: AuditAction,
        *,
        success: bool,
        identity_id: UUID | None = None,
        method: str | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> Result[None, AuditError]:
        """Append one audit event.

        Args:
            action: Action tag.
            success: Outcome of the action.
            identity_id: Identity concerned, if known.
            method: Verification method (password, totp, recovery, email).
            ip_address: Origin address.
            user_agent: Client user agent.
            metadata: Extra context. Never pass secrets or codes here.

        Returns:
            Success(None) when stored, Failure(AuditError) otherwise.
        """
        event = AuditEvent(
            id=uuid7(),
            action=action.value,
            success=success,
            created_at=datetime.now(UTC),
            identity_id=identity_id,
            method=method,
            ip_address=ip_address,
            user_agent=user_agent,
            metadata=metadata or {},
        )

        result = await self._audit.record(event)
        if isinstance(result, Failure):
            self._logger.error(
                "Audit event not recorded",
                action=action.value,
                identity_id=str(identity_id) if identity_id else None,
                error_code=result.error.code.value,
            )
            return result
        return Success(value=None)
