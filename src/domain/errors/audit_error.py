"""Audit trail failures."""

from dataclasses import dataclass

from src.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class AuditError(DomainError):
    """Appending to or reading the audit trail failed.

    ``code`` is AUDIT_RECORD_FAILED or AUDIT_QUERY_FAILED. Handlers propagate
    a failed append instead of finishing the operation unaudited.
    """
