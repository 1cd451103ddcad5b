"""Password reset by emailed single-use link.

Flow:
    request  -> rate check, token emailed as <frontend_url>/reset-password?token=...
    validate -> tells the reset page whether the link is still usable
    confirm  -> new password stored, token spent, every session ended

Responses to ``request`` never reveal whether the email is registered:
unknown addresses still consume the rate quota and succeed silently.
"""

from datetime import UTC, datetime, timedelta

from uuid_extensions import uuid7

from src.application.dtos import ResetTokenStatus
from src.application.services.counters import bump_count, read_count
from src.core.errors import DomainError
from src.core.result import Failure, Result, Success
from src.domain.entities import ActionToken, Identity
from src.domain.enums import ActionTokenPurpose, NotificationTemplate
from src.domain.errors import InvalidResetToken, RateLimited
from src.domain.protocols import (
    ActionTokenRepository,
    CacheKeysProtocol,
    CacheProtocol,
    IdentityRepository,
    LoggerProtocol,
    NotifierProtocol,
    PasswordHashingProtocol,
    SessionRepository,
)
from src.domain.value_objects import AuthPolicy
from src.infrastructure.security.opaque_token_service import OpaqueTokenService


def mask_email(email: str) -> str:
    """Hide the local part: ``alice@x.com`` -> ``a***@x.com``."""
    local, _, domain = email.partition("@")
    return f"{local[:1]}***@{domain}"


class PasswordResetService:
    """Issues and redeems password reset tokens."""

    def __init__(
        self,
        *,
        identity_repo: IdentityRepository,
        action_token_repo: ActionTokenRepository,
        session_repo: SessionRepository,
        password_service: PasswordHashingProtocol,
        cache: CacheProtocol,
        cache_keys: CacheKeysProtocol,
        notifier: NotifierProtocol,
        logger: LoggerProtocol,
        policy: AuthPolicy,
    ) -> None:
        self._identities = identity_repo
        self._tokens = action_token_repo
        self._sessions = session_repo
        self._password_service = password_service
        self._cache = cache
        self._keys = cache_keys
        self._notifier = notifier
        self._logger = logger
        self._policy = policy

    async def request(self, email: str) -> Result[Identity | None, DomainError]:
        """Email a reset link if the address is registered.

        Returns:
            Success(identity) when a link was issued, Success(None) for an
            unknown address, Failure(RateLimited) over quota.
        """
        rate_key = self._keys.password_reset_rate(email)
        window_seconds = self._policy.password_reset_window_minutes * 60

        requests = await read_count(self._cache, rate_key)
        if isinstance(requests, Failure):
            return requests
        if requests.value >= self._policy.password_reset_max_requests:
            self._logger.warning("Password reset refused, rate limit reached", email=email)
            return Failure(error=RateLimited())

        identity = await self._identities.find_by_email(email)
        if identity is None:
            bumped = await bump_count(self._cache, rate_key, window_seconds)
            if isinstance(bumped, Failure):
                return bumped
            self._logger.info("Password reset requested for unknown email")
            return Success(value=None)

        token = OpaqueTokenService.generate_token()
        now = datetime.now(UTC)
        await self._tokens.delete_for_identity(identity.id, ActionTokenPurpose.PASSWORD_RESET)
        await self._tokens.create(
            ActionToken(
                id=uuid7(),
                identity_id=identity.id,
                purpose=ActionTokenPurpose.PASSWORD_RESET,
                token_digest=OpaqueTokenService.digest(token),
                expires_at=now + timedelta(minutes=self._policy.password_reset_expiry_minutes),
                created_at=now,
            )
        )

        reset_url = f"{self._policy.frontend_url}/reset-password?token={token}"
        sent = await self._notifier.send(
            identity.email,
            NotificationTemplate.RESET_PASSWORD,
            {
                "name": identity.greeting_name,
                "reset_url": reset_url,
                "expiry_minutes": self._policy.password_reset_expiry_minutes,
            },
        )
        if isinstance(sent, Failure):
            self._logger.warning(
                "Password reset email not delivered",
                identity_id=str(identity.id),
                error_code=sent.error.code.value,
            )

        bumped = await bump_count(self._cache, rate_key, window_seconds)
        if isinstance(bumped, Failure):
            return bumped

        self._logger.info("Password reset link issued", identity_id=str(identity.id))
        return Success(value=identity)

    async def validate(self, token: str) -> ResetTokenStatus:
        """Check a reset link without spending it."""
        found = await self._live_token(token)
        if found is None:
            return ResetTokenStatus(valid=False)

        identity = await self._identities.find_by_id(found.identity_id)
        if identity is None:
            return ResetTokenStatus(valid=False)
        return ResetTokenStatus(valid=True, masked_email=mask_email(identity.email))

    async def confirm(
        self, token: str, new_password: str
    ) -> Result[Identity, DomainError]:
        """Set a new password using a live reset token.

        Ends every session of the identity.

        Returns:
            Success(identity) or Failure(InvalidResetToken).
        """
        found = await self._live_token(token)
        if found is None:
            return Failure(error=InvalidResetToken())

        identity = await self._identities.find_by_id(found.identity_id)
        credential = await self._identities.get_credential(found.identity_id)
        if identity is None or credential is None:
            return Failure(error=InvalidResetToken())

        credential.password_hash = await self._password_service.hash_password(new_password)
        await self._identities.update_credential(credential)

        found.mark_used()
        await self._tokens.update(found)

        ended = await self._sessions.delete_all_for_identity(identity.id)

        cleared = await self._cache.delete(self._keys.password_reset_rate(identity.email))
        if isinstance(cleared, Failure):
            return cleared

        sent = await self._notifier.send(
            identity.email,
            NotificationTemplate.PASSWORD_CHANGED,
            {"name": identity.greeting_name},
        )
        if isinstance(sent, Failure):
            self._logger.warning(
                "Password change notice not delivered",
                identity_id=str(identity.id),
                error_code=sent.error.code.value,
            )

        self._logger.info(
            "Password reset completed",
            identity_id=str(identity.id),
            sessions_ended=ended,
        )
        return Success(value=identity)

    async def _live_token(self, token: str) -> ActionToken | None:
        found = await self._tokens.find_by_digest(
            ActionTokenPurpose.PASSWORD_RESET, OpaqueTokenService.digest(token)
        )
        if found is None or not found.is_live(datetime.now(UTC)):
            return None
        return found
