"""Action token table (password reset, email verification)."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel


class ActionTokenModel(BaseMutableModel):
    """Single-use emailed token.

    Fields:
        purpose: PASSWORD_RESET or EMAIL_VERIFICATION
        token_digest: SHA-256 hex digest of the emailed token
        expires_at: Token expiry
        used: Set once the token was redeemed
    """

    __tablename__ = "action_tokens"

    identity_id: Mapped[UUID] = mapped_column(
        ForeignKey("identities.id", ondelete="CASCADE"),
        nullable=False,
    )
    purpose: Mapped[str] = mapped_column(String(30), nullable=False)
    token_digest: Mapped[str] = mapped_column(String(64), nullable=False)
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    used: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (
        Index("idx_action_tokens_purpose_digest", "purpose", "token_digest", unique=True),
        Index("idx_action_tokens_identity_purpose", "identity_id", "purpose"),
    )
