"""Login attempt table (append-only)."""

from sqlalchemy import Boolean, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseModel


class LoginAttemptModel(BaseModel):
    """One password login attempt.

    Fields:
        identifier: Email or username exactly as submitted
        ip_address: Origin address (IPv4 or IPv6)
        success: Whether the attempt fully authenticated
    """

    __tablename__ = "login_attempts"

    identifier: Mapped[str] = mapped_column(String(255), nullable=False)
    ip_address: Mapped[str | None] = mapped_column(String(45), nullable=True)
    success: Mapped[bool] = mapped_column(Boolean, nullable=False)

    __table_args__ = (
        Index("idx_login_attempts_identifier_created", "identifier", "created_at"),
    )
