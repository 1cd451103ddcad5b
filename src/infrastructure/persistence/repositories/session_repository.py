"""SessionRepository - SQLAlchemy implementation of SessionRepository protocol."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.session import Session
from src.infrastructure.persistence.models.session import SessionModel


class SessionRepository:
    """Refresh-token sessions.

    Attributes:
        session: SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, session: Session) -> None:
        self.session.add(
            SessionModel(
                id=session.id,
                identity_id=session.identity_id,
                token_digest=session.token_digest,
                expires_at=session.expires_at,
                created_at=session.created_at,
            )
        )
        await self.session.flush()

    async def find_live(
        self, identity_id: UUID, token_digest: str, now: datetime
    ) -> Session | None:
        """Find an unexpired session of the identity by refresh token digest."""
        stmt = select(SessionModel).where(
            SessionModel.identity_id == identity_id,
            SessionModel.token_digest == token_digest,
            SessionModel.expires_at > now,
        )
        result = await self.session.execute(stmt)
        model = result.scalars().first()
        if model is None:
            return None
        return Session(
            id=model.id,
            identity_id=model.identity_id,
            token_digest=model.token_digest,
            expires_at=model.expires_at,
            created_at=model.created_at,
        )

    async def delete(self, session_id: UUID) -> None:
        await self.session.execute(
            delete(SessionModel).where(SessionModel.id == session_id)
        )

    async def delete_by_digest(self, identity_id: UUID, token_digest: str) -> int:
        result = await self.session.execute(
            delete(SessionModel).where(
                SessionModel.identity_id == identity_id,
                SessionModel.token_digest == token_digest,
            )
        )
        return result.rowcount or 0

    async def delete_all_for_identity(self, identity_id: UUID) -> int:
        result = await self.session.execute(
            delete(SessionModel).where(SessionModel.identity_id == identity_id)
        )
        return result.rowcount or 0
