"""Queries - Read operations that fetch data.

Queries represent a request for information. They are immutable dataclasses
with question-like names (GetCurrentIdentity, ListAuditEvents).

Each query has a corresponding handler that fetches and returns the requested
data. Queries NEVER change state.
"""

from src.application.queries.auth_queries import (
    GetCurrentIdentity,
    GetLockoutInfo,
    GetTwoFactorStatus,
    ListAuditEvents,
    ValidateResetToken,
)

__all__ = [
    "GetCurrentIdentity",
    "GetLockoutInfo",
    "GetTwoFactorStatus",
    "ListAuditEvents",
    "ValidateResetToken",
]
