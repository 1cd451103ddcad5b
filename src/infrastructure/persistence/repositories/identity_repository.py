"""IdentityRepository - SQLAlchemy implementation of IdentityRepository protocol.

Adapter for hexagonal architecture.
Maps between domain Identity/Credential entities and database models.
"""

from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.enums import ErrorCode
from src.core.errors import ConflictError
from src.core.result import Failure, Result, Success
from src.domain.entities.identity import Credential, Identity
from src.domain.enums import UserRole
from src.infrastructure.persistence.models.identity import (
    EMAIL_UNIQUE_CONSTRAINT,
    USERNAME_UNIQUE_CONSTRAINT,
    CredentialModel,
    IdentityModel,
)


class IdentityRepository:
    """SQLAlchemy implementation of IdentityRepository protocol.

    This class does NOT inherit from the protocol (structural typing).

    Attributes:
        session: SQLAlchemy async session for database operations.

    Example:
        >>> async with db.get_session() as session:
        ...     repo = IdentityRepository(session)
        ...     identity = await repo.find_by_email_or_username("a@x.com")
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, identity_id: UUID) -> Identity | None:
        model = await self.session.get(IdentityModel, identity_id)
        return self._to_domain(model) if model is not None else None

    async def find_by_email(self, email: str) -> Identity | None:
        """Find identity by email address (case-insensitive)."""
        stmt = select(IdentityModel).where(
            func.lower(IdentityModel.email) == email.lower()
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model is not None else None

    async def find_by_username(self, username: str) -> Identity | None:
        stmt = select(IdentityModel).where(IdentityModel.username == username)
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model is not None else None

    async def find_by_email_or_username(self, identifier: str) -> Identity | None:
        """Login lookup: email (case-insensitive) or exact username.

        Usernames cannot contain "@", so at most one row can match.
        """
        stmt = (
            select(IdentityModel)
            .where(
                or_(
                    func.lower(IdentityModel.email) == identifier.lower(),
                    IdentityModel.username == identifier,
                )
            )
            .limit(1)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model is not None else None

    async def create_with_credential(
        self, identity: Identity, credential: Credential
    ) -> Result[None, ConflictError]:
        """Insert identity and credential atomically.

        A savepoint isolates the insert, so a unique violation leaves the
        request transaction usable.
        """
        try:
            async with self.session.begin_nested():
                self.session.add(self._to_model(identity))
                await self.session.flush()
                self.session.add(
                    CredentialModel(
                        identity_id=credential.identity_id,
                        password_hash=credential.password_hash,
                        last_login_at=credential.last_login_at,
                    )
                )
                await self.session.flush()
        except IntegrityError as e:
            return Failure(error=self._conflict_from(e))
        return Success(value=None)

    async def update(self, identity: Identity) -> None:
        model = await self.session.get(IdentityModel, identity.id)
        if model is None:
            return
        model.email = identity.email
        model.username = identity.username
        model.display_name = identity.display_name
        model.role = identity.role.value
        model.email_verified_at = identity.email_verified_at
        await self.session.flush()

    async def get_credential(self, identity_id: UUID) -> Credential | None:
        stmt = select(CredentialModel).where(
            CredentialModel.identity_id == identity_id
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            return None
        return Credential(
            identity_id=model.identity_id,
            password_hash=model.password_hash,
            last_login_at=model.last_login_at,
        )

    async def update_credential(self, credential: Credential) -> None:
        stmt = select(CredentialModel).where(
            CredentialModel.identity_id == credential.identity_id
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one()
        model.password_hash = credential.password_hash
        model.last_login_at = credential.last_login_at
        await self.session.flush()

    def _conflict_from(self, error: IntegrityError) -> ConflictError:
        text = str(error.orig)
        if USERNAME_UNIQUE_CONSTRAINT in text:
            return ConflictError(
                code=ErrorCode.USERNAME_ALREADY_EXISTS,
                message="Username already taken",
                resource_type="identity",
                conflicting_field="username",
            )
        if EMAIL_UNIQUE_CONSTRAINT in text:
            return ConflictError(
                code=ErrorCode.EMAIL_ALREADY_EXISTS,
                message="Email already registered",
                resource_type="identity",
                conflicting_field="email",
            )
        return ConflictError(
            code=ErrorCode.RESOURCE_CONFLICT,
            message="Identity already exists",
            resource_type="identity",
        )

    def _to_domain(self, model: IdentityModel) -> Identity:
        return Identity(
            id=model.id,
            email=model.email,
            username=model.username,
            role=UserRole(model.role),
            created_at=model.created_at,
            display_name=model.display_name,
            email_verified_at=model.email_verified_at,
        )

    def _to_model(self, identity: Identity) -> IdentityModel:
        return IdentityModel(
            id=identity.id,
            email=identity.email,
            username=identity.username,
            role=identity.role.value,
            created_at=identity.created_at,
            display_name=identity.display_name,
            email_verified_at=identity.email_verified_at,
        )
