"""IdentityRepository protocol for identity and credential persistence.

Port (interface) for hexagonal architecture.
Infrastructure layer implements this protocol.
"""

from typing import Protocol
from uuid import UUID

from src.core.errors import ConflictError
from src.core.result import Result
from src.domain.entities.identity import Credential, Identity


class IdentityRepository(Protocol):
    """Identity repository protocol (port).

    Identities and their credentials are created together and read
    separately, so that the password hash only leaves the store when a
    flow needs to verify it.

    This is a Protocol (not ABC) for structural typing.

    Methods:
        find_by_id: Retrieve identity by ID
        find_by_email: Retrieve identity by email
        find_by_username: Retrieve identity by username
        find_by_email_or_username: Login lookup
        create_with_credential: Atomic insert of identity + credential
        update: Persist identity changes
        get_credential: Load the credential of an identity
        update_credential: Persist credential changes

    Example Implementation:
        >>> class IdentityRepository:
        ...     async def find_by_email(self, email: str) -> Identity | None:
        ...         # Database logic here
        ...         pass
    """

    async def find_by_id(self, identity_id: UUID) -> Identity | None:
        """Find identity by ID.

        Args:
            identity_id: Identity's unique identifier.

        Returns:
            Identity if found, None otherwise.
        """
        ...

    async def find_by_email(self, email: str) -> Identity | None:
        """Find identity by email address (case-insensitive).

        Args:
            email: Email address.

        Returns:
            Identity if found, None otherwise.
        """
        ...

    async def find_by_username(self, username: str) -> Identity | None:
        """Find identity by username.

        Args:
            username: Username.

        Returns:
            Identity if found, None otherwise.
        """
        ...

    async def find_by_email_or_username(self, identifier: str) -> Identity | None:
        """Find identity whose email or username equals the identifier.

        Args:
            identifier: Email or username as submitted at login.

        Returns:
            Identity if found, None otherwise.

        Example:
            >>> identity = await repo.find_by_email_or_username("a@x.com")
            >>> identity = await repo.find_by_email_or_username("a")
        """
        ...

    async def create_with_credential(
        self, identity: Identity, credential: Credential
    ) -> Result[None, ConflictError]:
        """Create identity and credential in one atomic operation.

        Args:
            identity: New identity.
            credential: Its password credential.

        Returns:
            Success(None) when both rows were inserted.
            Failure(ConflictError) when the store rejects a duplicate email
            or username (conflicting_field names which).
        """
        ...

    async def update(self, identity: Identity) -> None:
        """Persist identity changes (verification timestamp, display name).

        Args:
            identity: Identity entity with updated fields.
        """
        ...

    async def get_credential(self, identity_id: UUID) -> Credential | None:
        """Load the credential owned by an identity.

        Args:
            identity_id: Owning identity.

        Returns:
            Credential if present, None otherwise.
        """
        ...

    async def update_credential(self, credential: Credential) -> None:
        """Persist credential changes (password hash, last login).

        Args:
            credential: Credential entity with updated fields.
        """
        ...
