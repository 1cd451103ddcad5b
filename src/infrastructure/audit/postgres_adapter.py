"""PostgreSQL implementation of AuditProtocol.

Append-only audit trail:
- Only INSERT is issued by this adapter
- The migration installs RULES that turn UPDATE and DELETE into no-ops
- Metadata stored as JSONB

Usage:
    adapter = PostgresAuditAdapter(session)
    result = await adapter.record(event)
"""

from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.entities.audit_event import AuditEvent
from src.domain.errors import AuditError
from src.infrastructure.persistence.models.audit_event import AuditEventModel

MAX_QUERY_LIMIT = 1000


class PostgresAuditAdapter:
    """PostgreSQL implementation of AuditProtocol.

    Attributes:
        session: SQLAlchemy async session (request-scoped).

    Thread Safety:
        Not thread-safe (uses the provided session). FastAPI creates a new
        session per request.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def record(self, event: AuditEvent) -> Result[None, AuditError]:
        """Append an audit event.

        Returns:
            Success(None) if stored, Failure(AuditError) if the insert failed.
        """
        try:
            async with self.session.begin_nested():
                self.session.add(
                    AuditEventModel(
                        id=event.id,
                        identity_id=event.identity_id,
                        action=event.action,
                        method=event.method,
                        success=event.success,
                        ip_address=event.ip_address,
                        user_agent=event.user_agent,
                        event_metadata=dict(event.metadata),
                        created_at=event.created_at,
                    )
                )
                await self.session.flush()
        except SQLAlchemyError as e:
            return Failure(
                error=AuditError(
                    code=ErrorCode.AUDIT_RECORD_FAILED,
                    message="Failed to record audit event",
                    details={"action": event.action, "error_type": type(e).__name__},
                )
            )
        return Success(value=None)

    async def list_for_identity(
        self, identity_id: UUID, limit: int = 50
    ) -> Result[list[AuditEvent], AuditError]:
        """Newest-first events of one identity (limit capped at 1000)."""
        stmt = (
            select(AuditEventModel)
            .where(AuditEventModel.identity_id == identity_id)
            .order_by(AuditEventModel.created_at.desc())
            .limit(min(limit, MAX_QUERY_LIMIT))
        )
        return await self._query(stmt)

    async def list_by_action(
        self, action: str, limit: int = 100
    ) -> Result[list[AuditEvent], AuditError]:
        stmt = (
            select(AuditEventModel)
            .where(AuditEventModel.action == action)
            .order_by(AuditEventModel.created_at.desc())
            .limit(min(limit, MAX_QUERY_LIMIT))
        )
        return await self._query(stmt)

    async def _query(
        self, stmt: Select[tuple[AuditEventModel]]
    ) -> Result[list[AuditEvent], AuditError]:
        try:
            result = await self.session.execute(stmt)
            models = result.scalars().all()
        except SQLAlchemyError as e:
            return Failure(
                error=AuditError(
                    code=ErrorCode.AUDIT_QUERY_FAILED,
                    message="Failed to query audit events",
                    details={"error_type": type(e).__name__},
                )
            )
        return Success(value=[self._to_domain(model) for model in models])

    def _to_domain(self, model: AuditEventModel) -> AuditEvent:
        return AuditEvent(
            id=model.id,
            action=model.action,
            success=model.success,
            created_at=model.created_at,
            identity_id=model.identity_id,
            method=model.method,
            ip_address=model.ip_address,
            user_agent=model.user_agent,
            metadata=dict(model.event_metadata or {}),
        )
