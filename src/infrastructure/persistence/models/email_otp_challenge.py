"""Email OTP challenge table."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel


class EmailOtpChallengeModel(BaseMutableModel):
    """Outstanding email OTP.

    Fields:
        code_hash: Argon2 hash of the 6-digit code
        attempts: Verification attempts against this challenge
        expires_at: Past this instant the challenge is treated as absent
    """

    __tablename__ = "email_otp_challenges"

    identity_id: Mapped[UUID] = mapped_column(
        ForeignKey("identities.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    code_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    attempts: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
