"""AuditEvent domain entity (append-only)."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID


@dataclass(frozen=True, slots=True, kw_only=True)
class AuditEvent:
    """Structured security event.

    Attributes:
        id: Record identifier.
        action: Action tag (see AuditAction).
        success: Outcome of the action.
        created_at: When it happened.
        identity_id: Identity concerned (None when unknown).
        method: Verification method (password, totp, recovery, email).
        ip_address: Origin address.
        user_agent: Client user agent.
        metadata: Free-form context (never secrets).
    """

    id: UUID
    action: str
    success: bool
    created_at: datetime
    identity_id: UUID | None = None
    method: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
