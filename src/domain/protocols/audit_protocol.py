"""Audit protocol for security event recording.

Append-only: implementations expose no update or delete.

Usage:
    result = await audit.record(event)
    match result:
        case Success():
            ...
        case Failure(error=error):
            logger.error("Audit failed", error_message=error.message)
"""

from typing import Protocol
from uuid import UUID

from src.core.result import Result
from src.domain.entities.audit_event import AuditEvent
from src.domain.errors import AuditError


class AuditProtocol(Protocol):
    """Audit trail port."""

    async def record(self, event: AuditEvent) -> Result[None, AuditError]:
        """Append one audit event.

        Args:
            event: Event to store.

        Returns:
            Success(None) if stored, Failure(AuditError) otherwise.
        """
        ...

    async def list_for_identity(
        self, identity_id: UUID, limit: int = 50
    ) -> Result[list[AuditEvent], AuditError]:
        """Newest-first events of one identity."""
        ...

    async def list_by_action(
        self, action: str, limit: int = 100
    ) -> Result[list[AuditEvent], AuditError]:
        """Newest-first events with a given action tag."""
        ...
