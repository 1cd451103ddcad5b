"""LoginAttempt domain entity (append-only)."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True, kw_only=True)
class LoginAttempt:
    """One login attempt as submitted.

    Attributes:
        id: Record identifier.
        identifier: Email or username exactly as typed.
        ip_address: Origin address, if known.
        success: Whether the attempt authenticated fully.
        created_at: When the attempt happened.
    """

    id: UUID
    identifier: str
    success: bool
    created_at: datetime
    ip_address: str | None = None
