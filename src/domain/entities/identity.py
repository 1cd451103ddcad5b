"""Identity and Credential domain entities.

Pure business logic, no framework dependencies.

An Identity owns exactly one Credential. The credential holds the password
hash and is never exposed outside the authentication flows.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from src.domain.enums import UserRole


@dataclass(slots=True, kw_only=True)
class Identity:
    """Identity domain entity.

    Attributes:
        id: Unique identifier (UUIDv7).
        email: Email address (lowercase, unique).
        username: Username (unique).
        role: Role claim carried in tokens.
        created_at: When the identity registered.
        display_name: Optional human name used in notices.
        email_verified_at: When the email address was verified (None = unverified).

    Example:
        >>> identity = Identity(
        ...     id=uuid7(),
        ...     email="a@x.com",
        ...     username="a",
        ...     role=UserRole.USER,
        ...     created_at=datetime.now(UTC),
        ... )
        >>> identity.is_email_verified
        False
    """

    id: UUID
    email: str
    username: str
    role: UserRole
    created_at: datetime
    display_name: str | None = None
    email_verified_at: datetime | None = None

    @property
    def is_email_verified(self) -> bool:
        """True once the email verification link was followed."""
        return self.email_verified_at is not None

    @property
    def greeting_name(self) -> str:
        """Name used when addressing the identity in messages."""
        return self.display_name or self.username

    def mark_email_verified(self, at: datetime) -> None:
        """Record email verification time."""
        self.email_verified_at = at


@dataclass(slots=True, kw_only=True)
class Credential:
    """Password credential exclusively owned by one Identity.

    Attributes:
        identity_id: Owning identity.
        password_hash: Argon2id hash (never plaintext).
        last_login_at: Last fully successful authentication.
    """

    identity_id: UUID
    password_hash: str
    last_login_at: datetime | None = None

    def record_login(self, at: datetime) -> None:
        """Stamp a successful login."""
        self.last_login_at = at
