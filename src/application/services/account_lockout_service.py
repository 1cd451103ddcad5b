"""Account lockout tracking.

Counts failed logins per identifier (and per origin address) in the cache and
sets a lock flag once the identifier reaches the policy threshold. The flag's
TTL is the remaining lock time, so locks expire on their own.

Cache keys:
    lockout:user:{identifier}    failures in the current window
    lockout:ip:{ip_address}      failures from one address
    lockout:locked:{identifier}  lock flag

Email-shaped identifiers are keyed lower-cased, the way the identity lookup
matches them, so case variants of one address share a counter.

Lockouts are expected outcomes and are logged at warning level. Losing cache
state clears every lock.
"""

import math
from datetime import UTC, datetime, timedelta

from src.application.dtos import LockoutInfo
from src.application.services.counters import bump_count, read_count
from src.core.errors import DomainError
from src.core.result import Failure, Result, Success
from src.domain.enums import NotificationTemplate
from src.domain.errors import AccountLocked
from src.domain.protocols import (
    CacheKeysProtocol,
    CacheProtocol,
    LoggerProtocol,
    NotifierProtocol,
)
from src.domain.value_objects import AuthPolicy

LOCK_FLAG_VALUE = "locked"


def lockout_subject(identifier: str) -> str:
    """Counter key for an identifier (emails compare case-insensitively)."""
    identifier = identifier.strip()
    return identifier.lower() if "@" in identifier else identifier


def remaining_minutes(ttl_seconds: int | None) -> int:
    """Whole minutes left on a lock, never below 1."""
    return max(1, math.ceil((ttl_seconds or 0) / 60))


class AccountLockoutService:
    """Failed-login counters and lock flags."""

    def __init__(
        self,
        *,
        cache: CacheProtocol,
        cache_keys: CacheKeysProtocol,
        notifier: NotifierProtocol,
        logger: LoggerProtocol,
        policy: AuthPolicy,
    ) -> None:
        self._cache = cache
        self._keys = cache_keys
        self._notifier = notifier
        self._logger = logger
        self._policy = policy

    async def check_lockout(self, identifier: str) -> Result[None, DomainError]:
        """Refuse a locked identifier.

        Returns:
            Success(None) when not locked.
            Failure(AccountLocked) with the remaining minutes when locked.
            Failure(DomainError) when the cache is unavailable.
        """
        identifier = lockout_subject(identifier)
        flag_key = self._keys.lockout_flag(identifier)
        flag = await self._cache.get(flag_key)
        if isinstance(flag, Failure):
            return flag
        if flag.value is None:
            return Success(value=None)

        ttl = await self._cache.ttl(flag_key)
        if isinstance(ttl, Failure):
            return ttl

        minutes = remaining_minutes(ttl.value)
        self._logger.warning(
            "Login refused for locked identifier",
            identifier=identifier,
            remaining_minutes=minutes,
        )
        return Failure(error=AccountLocked(remaining_minutes=minutes))

    async def record_failure(
        self,
        identifier: str,
        *,
        ip_address: str | None = None,
        email: str | None = None,
        display_name: str | None = None,
    ) -> Result[int, DomainError]:
        """Count one failed login and lock once the threshold is reached.

        Args:
            identifier: Email or username as submitted.
            ip_address: Origin address, counted separately when given.
            email: Address for the lock notice (known identities only).
            display_name: Name used in the lock notice.

        Returns:
            Success(count) with the identifier's new failure count.
        """
        identifier = lockout_subject(identifier)
        window = self._policy.lockout_seconds
        count = await bump_count(self._cache, self._keys.lockout_user(identifier), window)
        if isinstance(count, Failure):
            return count

        if ip_address:
            ip_count = await bump_count(
                self._cache, self._keys.lockout_ip(ip_address), window
            )
            if isinstance(ip_count, Failure):
                return ip_count

        self._logger.info(
            "Failed login recorded",
            identifier=identifier,
            attempts=count.value,
            max_attempts=self._policy.lockout_max_attempts,
        )

        if count.value >= self._policy.lockout_max_attempts:
            locked = await self._lock(identifier, email=email, display_name=display_name)
            if isinstance(locked, Failure):
                return locked

        return Success(value=count.value)

    async def reset_attempts(
        self, identifier: str, *, ip_address: str | None = None
    ) -> Result[None, DomainError]:
        """Clear failure counters after a successful login."""
        identifier = lockout_subject(identifier)
        deleted = await self._cache.delete(self._keys.lockout_user(identifier))
        if isinstance(deleted, Failure):
            return deleted
        if ip_address:
            deleted = await self._cache.delete(self._keys.lockout_ip(ip_address))
            if isinstance(deleted, Failure):
                return deleted
        return Success(value=None)

    async def unlock_account(self, identifier: str) -> Result[None, DomainError]:
        """Lift a lock manually (flag and identifier counter)."""
        identifier = lockout_subject(identifier)
        for key in (self._keys.lockout_flag(identifier), self._keys.lockout_user(identifier)):
            deleted = await self._cache.delete(key)
            if isinstance(deleted, Failure):
                return deleted
        self._logger.info("Account unlocked", identifier=identifier)
        return Success(value=None)

    async def get_lockout_info(self, identifier: str) -> Result[LockoutInfo, DomainError]:
        """Report lock state, or the current failure count when unlocked."""
        identifier = lockout_subject(identifier)
        flag_key = self._keys.lockout_flag(identifier)
        flag = await self._cache.get(flag_key)
        if isinstance(flag, Failure):
            return flag

        if flag.value is not None:
            ttl = await self._cache.ttl(flag_key)
            if isinstance(ttl, Failure):
                return ttl
            return Success(
                value=LockoutInfo(is_locked=True, remaining_minutes=remaining_minutes(ttl.value))
            )

        attempts = await read_count(self._cache, self._keys.lockout_user(identifier))
        if isinstance(attempts, Failure):
            return attempts
        return Success(value=LockoutInfo(is_locked=False, attempts=attempts.value))

    async def _lock(
        self,
        identifier: str,
        *,
        email: str | None,
        display_name: str | None,
    ) -> Result[None, DomainError]:
        minutes = self._policy.lockout_minutes
        stored = await self._cache.set(
            self._keys.lockout_flag(identifier),
            LOCK_FLAG_VALUE,
            ttl=self._policy.lockout_seconds,
        )
        if isinstance(stored, Failure):
            return stored

        self._logger.warning(
            "Account locked after repeated failures",
            identifier=identifier,
            lockout_minutes=minutes,
        )

        if email and display_name:
            unlock_time = datetime.now(UTC) + timedelta(minutes=minutes)
            sent = await self._notifier.send(
                email,
                NotificationTemplate.ACCOUNT_LOCKED,
                {
                    "name": display_name,
                    "lockout_minutes": minutes,
                    "unlock_time": unlock_time.strftime("%Y-%m-%d %H:%M UTC"),
                },
            )
            if isinstance(sent, Failure):
                self._logger.warning(
                    "Lock notice not delivered",
                    identifier=identifier,
                    error_code=sent.error.code.value,
                )

        return Success(value=None)
