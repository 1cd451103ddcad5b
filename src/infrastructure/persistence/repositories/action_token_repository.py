"""ActionTokenRepository - SQLAlchemy implementation."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.action_token import ActionToken
from src.domain.enums import ActionTokenPurpose
from src.infrastructure.persistence.models.action_token import ActionTokenModel


class ActionTokenRepository:
    """Password reset and email verification tokens.

    Attributes:
        session: SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, token: ActionToken) -> None:
        self.session.add(
            ActionTokenModel(
                id=token.id,
                identity_id=token.identity_id,
                purpose=token.purpose.value,
                token_digest=token.token_digest,
                expires_at=token.expires_at,
                used=token.used,
                created_at=token.created_at,
            )
        )
        await self.session.flush()

    async def find_by_digest(
        self, purpose: ActionTokenPurpose, token_digest: str
    ) -> ActionToken | None:
        stmt = select(ActionTokenModel).where(
            ActionTokenModel.purpose == purpose.value,
            ActionTokenModel.token_digest == token_digest,
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            return None
        return ActionToken(
            id=model.id,
            identity_id=model.identity_id,
            purpose=ActionTokenPurpose(model.purpose),
            token_digest=model.token_digest,
            expires_at=model.expires_at,
            created_at=model.created_at,
            used=model.used,
        )

    async def update(self, token: ActionToken) -> None:
        model = await self.session.get(ActionTokenModel, token.id)
        if model is None:
            return
        model.used = token.used
        await self.session.flush()

    async def delete(self, token_id: UUID) -> None:
        await self.session.execute(
            delete(ActionTokenModel).where(ActionTokenModel.id == token_id)
        )

    async def delete_for_identity(
        self, identity_id: UUID, purpose: ActionTokenPurpose
    ) -> int:
        result = await self.session.execute(
            delete(ActionTokenModel).where(
                ActionTokenModel.identity_id == identity_id,
                ActionTokenModel.purpose == purpose.value,
            )
        )
        return result.rowcount or 0

    async def delete_expired(self, now: datetime) -> int:
        result = await self.session.execute(
            delete(ActionTokenModel).where(ActionTokenModel.expires_at <= now)
        )
        return result.rowcount or 0
