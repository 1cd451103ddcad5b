"""Audit event table (append-only).

The migration installs rules that turn UPDATE and DELETE into no-ops on
PostgreSQL.
"""

from typing import Any
from uuid import UUID

from sqlalchemy import JSON, Boolean, Index, String, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseModel


class AuditEventModel(BaseModel):
    """Security event.

    Fields:
        identity_id: Identity concerned (no FK; events outlive identities)
        action: Action tag (AuditAction value)
        method: Verification method (password, totp, recovery, email)
        success: Outcome
        ip_address: Origin address
        user_agent: Client user agent
        event_metadata: Free-form context, column "metadata"
    """

    __tablename__ = "audit_events"

    identity_id: Mapped[UUID | None] = mapped_column(Uuid, nullable=True)
    action: Mapped[str] = mapped_column(String(50), nullable=False)
    method: Mapped[str | None] = mapped_column(String(20), nullable=True)
    success: Mapped[bool] = mapped_column(Boolean, nullable=False)
    ip_address: Mapped[str | None] = mapped_column(String(45), nullable=True)
    user_agent: Mapped[str | None] = mapped_column(String(500), nullable=True)
    # "metadata" is reserved on declarative classes
    event_metadata: Mapped[dict[str, Any]] = mapped_column(
        "metadata",
        JSON().with_variant(JSONB(), "postgresql"),
        nullable=False,
        default=dict,
    )

    __table_args__ = (
        Index("idx_audit_events_identity_action", "identity_id", "action"),
    )
