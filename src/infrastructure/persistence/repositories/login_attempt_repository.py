"""LoginAttemptRepository - append-only SQLAlchemy implementation."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.login_attempt import LoginAttempt
from src.infrastructure.persistence.models.login_attempt import LoginAttemptModel


class LoginAttemptRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def append(self, attempt: LoginAttempt) -> None:
        self.session.add(
            LoginAttemptModel(
                id=attempt.id,
                identifier=attempt.identifier,
                ip_address=attempt.ip_address,
                success=attempt.success,
                created_at=attempt.created_at,
            )
        )
        await self.session.flush()
