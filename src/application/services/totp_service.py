"""Authenticator-app (TOTP) engine and second-factor records.

Lifecycle of the TOTP factor:
    provision      -> record stored with enabled=False (secret encrypted)
    confirm_setup  -> one valid code enables it and yields recovery codes
    verify         -> login-time code check
    disable        -> enabled=False, secret kept

Recovery codes are 8 uppercase hex characters, stored as Argon2id hashes and
removed on first use.
"""

import secrets
from datetime import UTC, datetime
from uuid import UUID

from uuid_extensions import uuid7

from src.application.dtos import TotpProvisioning, TwoFactorStatus
from src.core.errors import DomainError
from src.core.result import Failure, Result, Success
from src.domain.entities import SecondFactor
from src.domain.entities.second_factor import EMAIL_SECRET_PLACEHOLDER
from src.domain.enums import SecondFactorType
from src.domain.errors import InvalidCode, SetupNotStarted
from src.domain.protocols import (
    LoggerProtocol,
    PasswordHashingProtocol,
    SecondFactorRepository,
    SecretCodecProtocol,
    TotpAuthenticatorProtocol,
)
from src.domain.value_objects import AuthPolicy

RECOVERY_CODE_BYTES = 4


def generate_recovery_code() -> str:
    """8 uppercase hex characters from 4 random bytes."""
    return secrets.token_hex(RECOVERY_CODE_BYTES).upper()


class TotpService:
    """TOTP provisioning, verification and second-factor bookkeeping."""

    def __init__(
        self,
        *,
        second_factor_repo: SecondFactorRepository,
        codec: SecretCodecProtocol,
        authenticator: TotpAuthenticatorProtocol,
        password_service: PasswordHashingProtocol,
        logger: LoggerProtocol,
        policy: AuthPolicy,
    ) -> None:
        self._factors = second_factor_repo
        self._codec = codec
        self._authenticator = authenticator
        self._password_service = password_service
        self._logger = logger
        self._policy = policy

    async def provision(
        self, identity_id: UUID, label: str
    ) -> Result[TotpProvisioning, DomainError]:
        """Start TOTP setup.

        Re-provisioning replaces the pending (or previous) secret.

        Args:
            identity_id: Identity enrolling the authenticator.
            label: Account label shown in the app (usually the email).
        """
        secret = self._authenticator.generate_secret()
        uri = self._authenticator.provisioning_uri(secret, label, self._policy.totp_issuer)

        sealed = self._codec.encrypt(secret)
        if isinstance(sealed, Failure):
            self._logger.error(
                "TOTP secret encryption failed",
                identity_id=str(identity_id),
                error_code=sealed.error.code.value,
            )
            return sealed

        existing = await self._factors.find(identity_id, SecondFactorType.TOTP)
        await self._factors.upsert(
            SecondFactor(
                id=existing.id if existing else uuid7(),
                identity_id=identity_id,
                type=SecondFactorType.TOTP,
                secret=sealed.value,
                created_at=existing.created_at if existing else datetime.now(UTC),
                enabled=False,
            )
        )

        self._logger.info("TOTP provisioned", identity_id=str(identity_id))
        return Success(
            value=TotpProvisioning(
                secret=secret,
                otpauth_uri=uri,
                qr_code=self._authenticator.qr_code_data_url(uri),
            )
        )

    async def confirm_setup(
        self, identity_id: UUID, code: str
    ) -> Result[list[str], DomainError]:
        """Enable TOTP after the first valid code.

        Returns:
            Success(recovery_codes) in plaintext, shown once.
            Failure(SetupNotStarted), Failure(DecodeError) or Failure(InvalidCode).
        """
        factor = await self._factors.find(identity_id, SecondFactorType.TOTP)
        if factor is None:
            return Failure(error=SetupNotStarted(resource_id=str(identity_id)))

        secret = self._codec.decrypt(factor.secret)
        if isinstance(secret, Failure):
            self._logger.error(
                "Stored TOTP secret could not be decoded",
                identity_id=str(identity_id),
            )
            return secret

        if not self._authenticator.verify(
            secret.value, code, self._policy.totp_valid_window
        ):
            self._logger.warning("TOTP setup code rejected", identity_id=str(identity_id))
            return Failure(error=InvalidCode())

        codes = [generate_recovery_code() for _ in range(self._policy.recovery_code_count)]
        factor.replace_recovery_codes(
            [await self._password_service.hash_password(code) for code in codes]
        )
        factor.enable()
        await self._factors.upsert(factor)

        self._logger.info("TOTP enabled", identity_id=str(identity_id))
        return Success(value=codes)

    async def verify(self, identity_id: UUID, code: str) -> bool:
        """Check a login code. False when TOTP is not enabled."""
        factor = await self._enabled_totp(identity_id)
        if factor is None:
            return False

        secret = self._codec.decrypt(factor.secret)
        if isinstance(secret, Failure):
            self._logger.error(
                "Stored TOTP secret could not be decoded",
                identity_id=str(identity_id),
            )
            return False

        return self._authenticator.verify(
            secret.value, code, self._policy.totp_valid_window
        )

    async def verify_recovery_code(self, identity_id: UUID, code: str) -> bool:
        """Consume a recovery code.

        The matching hash is removed, so each code works once.
        """
        factor = await self._enabled_totp(identity_id)
        if factor is None or not factor.recovery_code_hashes:
            return False

        normalized = code.strip().upper()
        for code_hash in list(factor.recovery_code_hashes):
            if await self._password_service.verify_password(normalized, code_hash):
                factor.remove_recovery_code(code_hash)
                await self._factors.upsert(factor)
                self._logger.info(
                    "Recovery code consumed",
                    identity_id=str(identity_id),
                    remaining=factor.remaining_recovery_codes,
                )
                return True
        return False

    async def disable(self, identity_id: UUID, factor_type: SecondFactorType) -> bool:
        """Turn a factor off. Returns False when it did not exist."""
        updated = await self._factors.disable(identity_id, factor_type)
        self._logger.info(
            "Second factor disabled",
            identity_id=str(identity_id),
            factor_type=factor_type.value,
        )
        return updated > 0

    async def enable_email(self, identity_id: UUID) -> None:
        """Turn on email codes as a second factor."""
        existing = await self._factors.find(identity_id, SecondFactorType.EMAIL)
        if existing is not None:
            existing.enable()
            await self._factors.upsert(existing)
        else:
            await self._factors.upsert(
                SecondFactor(
                    id=uuid7(),
                    identity_id=identity_id,
                    type=SecondFactorType.EMAIL,
                    secret=EMAIL_SECRET_PLACEHOLDER,
                    created_at=datetime.now(UTC),
                    enabled=True,
                )
            )
        self._logger.info("Email second factor enabled", identity_id=str(identity_id))

    async def status(self, identity_id: UUID) -> TwoFactorStatus:
        """Which factors are enabled, with the unused recovery code count."""
        enabled = {factor.type: factor for factor in await self._factors.find_enabled(identity_id)}
        totp = enabled.get(SecondFactorType.TOTP)
        return TwoFactorStatus(
            totp=totp is not None,
            email=SecondFactorType.EMAIL in enabled,
            recovery_codes_remaining=totp.remaining_recovery_codes if totp else 0,
        )

    async def _enabled_totp(self, identity_id: UUID) -> SecondFactor | None:
        factor = await self._factors.find(identity_id, SecondFactorType.TOTP)
        if factor is None or not factor.enabled:
            return None
        return factor
