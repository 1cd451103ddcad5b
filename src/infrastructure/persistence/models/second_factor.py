"""Second factor table."""

from uuid import UUID

from sqlalchemy import JSON, Boolean, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel


class SecondFactorModel(BaseMutableModel):
    """Second factor enrolled by an identity (one row per type).

    Fields:
        type: TOTP or EMAIL
        secret: AES-GCM envelope of the TOTP secret, or "email"
        enabled: Participates in login
        recovery_code_hashes: Ordered JSON list of Argon2 hashes (TOTP only)
    """

    __tablename__ = "second_factors"

    identity_id: Mapped[UUID] = mapped_column(
        ForeignKey("identities.id", ondelete="CASCADE"),
        nullable=False,
    )
    type: Mapped[str] = mapped_column(String(10), nullable=False)
    secret: Mapped[str] = mapped_column(Text, nullable=False)
    enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    recovery_code_hashes: Mapped[list[str]] = mapped_column(
        JSON, nullable=False, default=list
    )

    __table_args__ = (
        UniqueConstraint("identity_id", "type", name="uq_second_factors_identity_type"),
    )
