"""Session table (one row per live refresh token)."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseModel


class SessionModel(BaseModel):
    """Refresh-token session.

    Rows are inserted and deleted, never updated: rotation deletes the old
    row and inserts a new one.

    Fields:
        identity_id: Owning identity
        token_digest: SHA-256 hex digest of the refresh token
        expires_at: Same instant as the refresh token's exp claim
    """

    __tablename__ = "sessions"

    identity_id: Mapped[UUID] = mapped_column(
        ForeignKey("identities.id", ondelete="CASCADE"),
        nullable=False,
    )
    token_digest: Mapped[str] = mapped_column(String(64), nullable=False)
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )

    __table_args__ = (
        Index("idx_sessions_identity_digest", "identity_id", "token_digest"),
    )
