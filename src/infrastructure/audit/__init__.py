"""Append-only audit trail backed by the ``audit_events`` table."""

from src.infrastructure.audit.postgres_adapter import PostgresAuditAdapter

__all__ = ["PostgresAuditAdapter"]
