"""Email one-time password engine.

Each identity has at most one live challenge. Issuing a code deletes the
previous challenge, so only the newest emailed code verifies.

Quotas (cache counters, one window each):
    otp:resend:{identity_id}    codes issued, capped at otp_max_resends
    otp:attempts:{identity_id}  wrong codes, capped at otp_max_attempts

Codes are six digits drawn uniformly from 100000-999999 and stored only as
Argon2id hashes.
"""

import secrets
from datetime import UTC, datetime
from uuid import UUID

from uuid_extensions import uuid7

from src.application.services.counters import bump_count, read_count
from src.core.errors import DomainError
from src.core.result import Failure, Result, Success
from src.domain.entities import EmailOtpChallenge
from src.domain.enums import NotificationTemplate
from src.domain.errors import ChallengeNotFound, InvalidCode, RateLimited, TooManyAttempts
from src.domain.protocols import (
    CacheKeysProtocol,
    CacheProtocol,
    EmailOtpChallengeRepository,
    LoggerProtocol,
    NotifierProtocol,
    PasswordHashingProtocol,
)
from src.domain.value_objects import AuthPolicy


def generate_otp() -> str:
    """Six-digit code, uniform over 100000-999999."""
    return str(secrets.randbelow(900_000) + 100_000)


class OtpService:
    """Issues and verifies emailed one-time codes."""

    def __init__(
        self,
        *,
        otp_repo: EmailOtpChallengeRepository,
        cache: CacheProtocol,
        cache_keys: CacheKeysProtocol,
        password_service: PasswordHashingProtocol,
        notifier: NotifierProtocol,
        logger: LoggerProtocol,
        policy: AuthPolicy,
    ) -> None:
        self._otp_repo = otp_repo
        self._cache = cache
        self._keys = cache_keys
        self._password_service = password_service
        self._notifier = notifier
        self._logger = logger
        self._policy = policy

    async def issue(self, identity_id: UUID, destination: str) -> Result[None, DomainError]:
        """Create a fresh challenge and email its code.

        Args:
            identity_id: Identity the code is for.
            destination: Email address to send the code to.

        Returns:
            Success(None) when the code was sent.
            Failure(RateLimited) when the resend quota is used up.
            Failure(DomainError) when the notifier or cache fails.
        """
        resend_key = self._keys.otp_resend(identity_id)
        sent_count = await read_count(self._cache, resend_key)
        if isinstance(sent_count, Failure):
            return sent_count
        if sent_count.value >= self._policy.otp_max_resends:
            self._logger.warning(
                "OTP issue refused, resend quota reached",
                identity_id=str(identity_id),
                sent=sent_count.value,
            )
            return Failure(error=RateLimited())

        code = generate_otp()
        now = datetime.now(UTC)
        challenge = EmailOtpChallenge(
            id=uuid7(),
            identity_id=identity_id,
            code_hash=await self._password_service.hash_password(code),
            expires_at=now + self._policy.otp_lifetime,
            created_at=now,
        )
        await self._otp_repo.delete_for_identity(identity_id)
        await self._otp_repo.create(challenge)

        sent = await self._notifier.send(
            destination,
            NotificationTemplate.OTP_CODE,
            {"otp": code, "expiry_minutes": self._policy.otp_expiry_minutes},
        )
        if isinstance(sent, Failure):
            self._logger.warning(
                "OTP email not delivered",
                identity_id=str(identity_id),
                error_code=sent.error.code.value,
            )
            return sent

        bumped = await bump_count(self._cache, resend_key, self._policy.otp_window_seconds)
        if isinstance(bumped, Failure):
            return bumped

        self._logger.info("OTP issued", identity_id=str(identity_id))
        return Success(value=None)

    async def verify(self, identity_id: UUID, code: str) -> Result[None, DomainError]:
        """Check a submitted code against the live challenge.

        The attempt quota is checked before the challenge is loaded.

        Returns:
            Success(None) on match (challenge and counters are cleared).
            Failure(TooManyAttempts), Failure(ChallengeNotFound) or
            Failure(InvalidCode) otherwise.
        """
        attempts_key = self._keys.otp_attempts(identity_id)
        failures = await read_count(self._cache, attempts_key)
        if isinstance(failures, Failure):
            return failures
        if failures.value >= self._policy.otp_max_attempts:
            self._logger.warning(
                "OTP verification refused, attempt quota reached",
                identity_id=str(identity_id),
            )
            return Failure(error=TooManyAttempts())

        challenge = await self._otp_repo.find_live(identity_id, datetime.now(UTC))
        if challenge is None:
            return Failure(error=ChallengeNotFound(resource_id=str(identity_id)))

        challenge.register_attempt()
        await self._otp_repo.update(challenge)

        if not await self._password_service.verify_password(code, challenge.code_hash):
            bumped = await bump_count(
                self._cache, attempts_key, self._policy.otp_window_seconds
            )
            if isinstance(bumped, Failure):
                return bumped
            self._logger.warning(
                "OTP rejected",
                identity_id=str(identity_id),
                attempts=bumped.value,
            )
            return Failure(error=InvalidCode())

        await self._otp_repo.delete(challenge.id)
        for key in (attempts_key, self._keys.otp_resend(identity_id)):
            cleared = await self._cache.delete(key)
            if isinstance(cleared, Failure):
                return cleared

        self._logger.info("OTP verified", identity_id=str(identity_id))
        return Success(value=None)

    async def purge_expired(self) -> int:
        """Delete expired challenges. Returns how many were removed."""
        removed = await self._otp_repo.delete_expired(datetime.now(UTC))
        self._logger.info("Expired OTP challenges purged", removed=removed)
        return removed
