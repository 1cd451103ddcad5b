"""EmailOtpChallengeRepository - SQLAlchemy implementation."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.email_otp_challenge import EmailOtpChallenge
from src.infrastructure.persistence.models.email_otp_challenge import (
    EmailOtpChallengeModel,
)


class EmailOtpChallengeRepository:
    """Email OTP challenges.

    Attributes:
        session: SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, challenge: EmailOtpChallenge) -> None:
        self.session.add(
            EmailOtpChallengeModel(
                id=challenge.id,
                identity_id=challenge.identity_id,
                code_hash=challenge.code_hash,
                attempts=challenge.attempts,
                expires_at=challenge.expires_at,
                created_at=challenge.created_at,
            )
        )
        await self.session.flush()

    async def find_live(
        self, identity_id: UUID, now: datetime
    ) -> EmailOtpChallenge | None:
        """Newest unexpired challenge of the identity."""
        stmt = (
            select(EmailOtpChallengeModel)
            .where(
                EmailOtpChallengeModel.identity_id == identity_id,
                EmailOtpChallengeModel.expires_at > now,
            )
            .order_by(EmailOtpChallengeModel.created_at.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            return None
        return EmailOtpChallenge(
            id=model.id,
            identity_id=model.identity_id,
            code_hash=model.code_hash,
            expires_at=model.expires_at,
            created_at=model.created_at,
            attempts=model.attempts,
        )

    async def update(self, challenge: EmailOtpChallenge) -> None:
        model = await self.session.get(EmailOtpChallengeModel, challenge.id)
        if model is None:
            return
        model.attempts = challenge.attempts
        await self.session.flush()

    async def delete(self, challenge_id: UUID) -> None:
        await self.session.execute(
            delete(EmailOtpChallengeModel).where(
                EmailOtpChallengeModel.id == challenge_id
            )
        )

    async def delete_for_identity(self, identity_id: UUID) -> int:
        result = await self.session.execute(
            delete(EmailOtpChallengeModel).where(
                EmailOtpChallengeModel.identity_id == identity_id
            )
        )
        return result.rowcount or 0

    async def delete_expired(self, now: datetime) -> int:
        result = await self.session.execute(
            delete(EmailOtpChallengeModel).where(
                EmailOtpChallengeModel.expires_at <= now
            )
        )
        return result.rowcount or 0
