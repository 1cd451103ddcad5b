"""Identity and credential tables.

Uniqueness of email and username is enforced by named constraints; the
identity repository reads the constraint name to report which field
conflicted.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel

EMAIL_UNIQUE_CONSTRAINT = "uq_identities_email"
USERNAME_UNIQUE_CONSTRAINT = "uq_identities_username"


class IdentityModel(BaseMutableModel):
    """Registered identity.

    Fields:
        email: Lowercase email address (unique)
        username: Username (unique)
        display_name: Optional name used in notices
        role: OWNER, ADMIN or USER
        email_verified_at: Null until the verification link is followed
    """

    __tablename__ = "identities"

    email: Mapped[str] = mapped_column(String(255), nullable=False)
    username: Mapped[str] = mapped_column(String(50), nullable=False)
    display_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="USER")
    email_verified_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    __table_args__ = (
        UniqueConstraint("email", name=EMAIL_UNIQUE_CONSTRAINT),
        UniqueConstraint("username", name=USERNAME_UNIQUE_CONSTRAINT),
    )

    def __repr__(self) -> str:
        return f"<IdentityModel(id={self.id}, username={self.username!r})>"


class CredentialModel(BaseMutableModel):
    """Password credential, one per identity, removed with it."""

    __tablename__ = "credentials"

    identity_id: Mapped[UUID] = mapped_column(
        ForeignKey("identities.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    # Argon2id hash, never plaintext
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    last_login_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
