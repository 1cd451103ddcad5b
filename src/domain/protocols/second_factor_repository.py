"""SecondFactorRepository protocol."""

from typing import Protocol
from uuid import UUID

from src.domain.entities.second_factor import SecondFactor
from src.domain.enums import SecondFactorType


class SecondFactorRepository(Protocol):
    """Second factor repository protocol (port).

    One record per (identity, type), enforced by a composite unique
    constraint in the store.
    """

    async def find(
        self, identity_id: UUID, factor_type: SecondFactorType
    ) -> SecondFactor | None:
        """Find the factor of a given type, enabled or not."""
        ...

    async def find_enabled(self, identity_id: UUID) -> list[SecondFactor]:
        """List the identity's enabled factors."""
        ...

    async def upsert(self, factor: SecondFactor) -> None:
        """Insert or overwrite the (identity, type) record.

        Overwrites secret, enabled flag and recovery code hashes.
        """
        ...

    async def disable(self, identity_id: UUID, factor_type: SecondFactorType) -> int:
        """Flip enabled to False, keeping the secret.

        Returns:
            Number of rows updated.
        """
        ...
