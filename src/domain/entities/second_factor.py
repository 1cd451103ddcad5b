"""SecondFactor domain entity.

One record per (identity, type). A TOTP factor carries an encrypted secret and
the hashes of its unused recovery codes; an EMAIL factor carries a placeholder
secret and no codes.
"""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from src.domain.enums import SecondFactorType

EMAIL_SECRET_PLACEHOLDER = "email"


@dataclass(slots=True, kw_only=True)
class SecondFactor:
    """Second factor enrolled by an identity.

    Business Rules:
        - A TOTP factor becomes enabled only after one verified setup code
        - Disabling keeps the secret so the data survives
        - Recovery codes are single-use (hash removed on first match)

    Attributes:
        id: Record identifier.
        identity_id: Owning identity.
        type: TOTP or EMAIL.
        secret: Secret codec envelope (TOTP) or placeholder (EMAIL).
        enabled: Whether the factor participates in login.
        recovery_code_hashes: Ordered hashes of unused recovery codes.
        created_at: When the factor was first provisioned.
    """

    id: UUID
    identity_id: UUID
    type: SecondFactorType
    secret: str
    created_at: datetime
    enabled: bool = False
    recovery_code_hashes: list[str] = field(default_factory=list)

    def enable(self) -> None:
        """Activate the factor."""
        self.enabled = True

    def disable(self) -> None:
        """Deactivate the factor, keeping its secret."""
        self.enabled = False

    def replace_recovery_codes(self, code_hashes: list[str]) -> None:
        """Swap the whole recovery code set (new setup)."""
        self.recovery_code_hashes = list(code_hashes)

    def remove_recovery_code(self, code_hash: str) -> bool:
        """Remove one used recovery code hash.

        Returns:
            True if the hash was present and removed.
        """
        if code_hash not in self.recovery_code_hashes:
            return False
        self.recovery_code_hashes.remove(code_hash)
        return True

    @property
    def remaining_recovery_codes(self) -> int:
        """Number of unused recovery codes."""
        return len(self.recovery_code_hashes)
