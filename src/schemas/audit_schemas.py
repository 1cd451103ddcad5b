"""Audit trail and lockout administration schemas."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from src.domain.entities import AuditEvent


class AuditEventResponse(BaseModel):
    id: UUID
    action: str
    success: bool
    method: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime

    @classmethod
    def from_event(cls, event: AuditEvent) -> "AuditEventResponse":
        return cls(
            id=event.id,
            action=event.action,
            success=event.success,
            method=event.method,
            ip_address=event.ip_address,
            user_agent=event.user_agent,
            metadata=event.metadata,
            created_at=event.created_at,
        )


class AuditEventListResponse(BaseModel):
    """Newest first."""

    events: list[AuditEventResponse]
    total_count: int


class LockoutInfoResponse(BaseModel):
    """Lock state of a login identifier."""

    identifier: str
    is_locked: bool
    remaining_minutes: int | None = None
    attempts: int | None = None
