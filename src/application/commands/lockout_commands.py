"""Lockout administration and housekeeping commands (CQRS write operations)."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class UnlockAccount:
    """Lift a lockout before it expires.

    Attributes:
        identifier: Email or username exactly as the failed logins submitted it.
        performed_by: Administrator lifting the lock.
    """

    identifier: str
    performed_by: UUID
    ip_address: str | None = None
    user_agent: str | None = None


@dataclass(frozen=True, kw_only=True)
class PurgeExpiredRecords:
    """Delete expired email OTP challenges and action tokens."""
