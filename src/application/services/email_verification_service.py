"""Email address verification by emailed single-use link.

Links look like <frontend_url>/verify-email?token=<64 hex chars>. Sends are
rate limited per address (verify:resend:{email}); a new link replaces any
earlier one.
"""

from datetime import UTC, datetime, timedelta

from uuid_extensions import uuid7

from src.application.services.counters import bump_count, read_count
from src.core.errors import DomainError
from src.core.result import Failure, Result, Success
from src.domain.entities import ActionToken, Identity
from src.domain.enums import ActionTokenPurpose, NotificationTemplate
from src.domain.errors import EmailAlreadyVerified, InvalidVerificationToken, RateLimited
from src.domain.protocols import (
    ActionTokenRepository,
    CacheKeysProtocol,
    CacheProtocol,
    IdentityRepository,
    LoggerProtocol,
    NotifierProtocol,
)
from src.domain.value_objects import AuthPolicy
from src.infrastructure.security.opaque_token_service import OpaqueTokenService


class EmailVerificationService:
    """Sends verification links and redeems them."""

    def __init__(
        self,
        *,
        identity_repo: IdentityRepository,
        action_token_repo: ActionTokenRepository,
        cache: CacheProtocol,
        cache_keys: CacheKeysProtocol,
        notifier: NotifierProtocol,
        logger: LoggerProtocol,
        policy: AuthPolicy,
    ) -> None:
        self._identities = identity_repo
        self._tokens = action_token_repo
        self._cache = cache
        self._keys = cache_keys
        self._notifier = notifier
        self._logger = logger
        self._policy = policy

    async def send(self, identity: Identity) -> Result[None, DomainError]:
        """Issue a verification link and email it.

        Returns:
            Success(None), Failure(RateLimited) over quota, or a cache failure.
            Delivery failures are logged, not returned.
        """
        rate_key = self._keys.verification_resend(identity.email)
        sends = await read_count(self._cache, rate_key)
        if isinstance(sends, Failure):
            return sends
        if sends.value >= self._policy.email_verification_max_sends:
            self._logger.warning(
                "Verification email refused, rate limit reached",
                identity_id=str(identity.id),
            )
            return Failure(error=RateLimited())

        token = OpaqueTokenService.generate_token()
        now = datetime.now(UTC)
        await self._tokens.delete_for_identity(
            identity.id, ActionTokenPurpose.EMAIL_VERIFICATION
        )
        await self._tokens.create(
            ActionToken(
                id=uuid7(),
                identity_id=identity.id,
                purpose=ActionTokenPurpose.EMAIL_VERIFICATION,
                token_digest=OpaqueTokenService.digest(token),
                expires_at=now + timedelta(hours=self._policy.email_verification_expiry_hours),
                created_at=now,
            )
        )

        sent = await self._notifier.send(
            identity.email,
            NotificationTemplate.VERIFY_EMAIL,
            {
                "name": identity.greeting_name,
                "verification_url": f"{self._policy.frontend_url}/verify-email?token={token}",
                "expiry_hours": self._policy.email_verification_expiry_hours,
            },
        )
        if isinstance(sent, Failure):
            self._logger.warning(
                "Verification email not delivered",
                identity_id=str(identity.id),
                error_code=sent.error.code.value,
            )

        bumped = await bump_count(
            self._cache, rate_key, self._policy.email_verification_window_minutes * 60
        )
        if isinstance(bumped, Failure):
            return bumped

        self._logger.info("Verification email issued", identity_id=str(identity.id))
        return Success(value=None)

    async def verify(self, token: str) -> Result[Identity, DomainError]:
        """Mark the address behind a live token as verified.

        Returns:
            Success(identity) or Failure(InvalidVerificationToken).
        """
        now = datetime.now(UTC)
        found = await self._tokens.find_by_digest(
            ActionTokenPurpose.EMAIL_VERIFICATION, OpaqueTokenService.digest(token)
        )
        if found is None or not found.is_live(now):
            return Failure(error=InvalidVerificationToken())

        identity = await self._identities.find_by_id(found.identity_id)
        if identity is None:
            return Failure(error=InvalidVerificationToken())

        identity.mark_email_verified(now)
        await self._identities.update(identity)
        await self._tokens.delete(found.id)

        cleared = await self._cache.delete(self._keys.verification_resend(identity.email))
        if isinstance(cleared, Failure):
            return cleared

        self._logger.info("Email verified", identity_id=str(identity.id))
        return Success(value=identity)

    async def resend(self, email: str) -> Result[Identity | None, DomainError]:
        """Send a new link on request.

        Returns:
            Success(None) for an unknown address (nothing sent),
            Success(identity) when a link was sent,
            Failure(EmailAlreadyVerified) or Failure(RateLimited).
        """
        identity = await self._identities.find_by_email(email)
        if identity is None:
            self._logger.info("Verification resend requested for unknown email")
            return Success(value=None)
        if identity.is_email_verified:
            return Failure(error=EmailAlreadyVerified())

        sent = await self.send(identity)
        if isinstance(sent, Failure):
            return sent
        return Success(value=identity)
