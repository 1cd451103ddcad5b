"""SecondFactorRepository - SQLAlchemy implementation of SecondFactorRepository protocol."""

from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.second_factor import SecondFactor
from src.domain.enums import SecondFactorType
from src.infrastructure.persistence.models.second_factor import SecondFactorModel


class SecondFactorRepository:
    """Second factors keyed by (identity, type).

    Recovery code hashes are written as a whole list (read-modify-write);
    two concurrent consumptions of different codes can overwrite each other.

    Attributes:
        session: SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find(
        self, identity_id: UUID, factor_type: SecondFactorType
    ) -> SecondFactor | None:
        model = await self._find_model(identity_id, factor_type)
        return self._to_domain(model) if model is not None else None

    async def find_enabled(self, identity_id: UUID) -> list[SecondFactor]:
        stmt = select(SecondFactorModel).where(
            SecondFactorModel.identity_id == identity_id,
            SecondFactorModel.enabled.is_(True),
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def upsert(self, factor: SecondFactor) -> None:
        model = await self._find_model(factor.identity_id, factor.type)
        if model is None:
            self.session.add(
                SecondFactorModel(
                    id=factor.id,
                    identity_id=factor.identity_id,
                    type=factor.type.value,
                    secret=factor.secret,
                    enabled=factor.enabled,
                    recovery_code_hashes=list(factor.recovery_code_hashes),
                    created_at=factor.created_at,
                )
            )
        else:
            model.secret = factor.secret
            model.enabled = factor.enabled
            # New list object so the JSON column is flagged dirty
            model.recovery_code_hashes = list(factor.recovery_code_hashes)
        await self.session.flush()

    async def disable(self, identity_id: UUID, factor_type: SecondFactorType) -> int:
        result = await self.session.execute(
            update(SecondFactorModel)
            .where(
                SecondFactorModel.identity_id == identity_id,
                SecondFactorModel.type == factor_type.value,
            )
            .values(enabled=False)
        )
        return result.rowcount or 0

    async def _find_model(
        self, identity_id: UUID, factor_type: SecondFactorType
    ) -> SecondFactorModel | None:
        stmt = select(SecondFactorModel).where(
            SecondFactorModel.identity_id == identity_id,
            SecondFactorModel.type == factor_type.value,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    def _to_domain(self, model: SecondFactorModel) -> SecondFactor:
        return SecondFactor(
            id=model.id,
            identity_id=model.identity_id,
            type=SecondFactorType(model.type),
            secret=model.secret,
            created_at=model.created_at,
            enabled=model.enabled,
            recovery_code_hashes=list(model.recovery_code_hashes or []),
        )
