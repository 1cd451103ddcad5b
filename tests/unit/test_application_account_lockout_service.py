"""Unit tests for AccountLockoutService.

Tests cover:
- Counting failures and locking at the threshold
- Email identifiers keyed case-insensitively
- Remaining minutes on a locked identifier
- Lock notice email
- Reset, manual unlock and lock info
- Cache failures propagate
"""

from unittest.mock import AsyncMock

import pytest

from src.application.services.account_lockout_service import (
    AccountLockoutService,
    remaining_minutes,
)
from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.enums import NotificationTemplate
from src.domain.errors import AccountLocked
from src.infrastructure.enums import InfrastructureErrorCode
from src.infrastructure.errors import CacheError


async def _fail(lockout, identifier, times, **kwargs):
    for _ in range(times):
        result = await lockout.record_failure(identifier, **kwargs)
    return result


@pytest.mark.unit
class TestRemainingMinutes:
    @pytest.mark.parametrize(
        ("ttl", "expected"),
        [(None, 1), (0, 1), (30, 1), (60, 1), (61, 2), (900, 15)],
    )
    def test_rounds_up_and_never_below_one(self, ttl, expected):
        assert remaining_minutes(ttl) == expected


@pytest.mark.unit
class TestRecordFailure:
    """Test failure counting and locking."""

    async def test_counts_failures_below_threshold(self, lockout):
        result = await _fail(lockout, "alice", 3)

        assert result == Success(value=3)
        assert await lockout.check_lockout("alice") == Success(value=None)

    async def test_locks_at_threshold(self, lockout, policy):
        # Act
        result = await _fail(lockout, "alice", policy.lockout_max_attempts)

        # Assert
        assert result == Success(value=policy.lockout_max_attempts)
        check = await lockout.check_lockout("alice")
        assert isinstance(check, Failure)
        assert isinstance(check.error, AccountLocked)
        assert check.error.code == ErrorCode.ACCOUNT_LOCKED
        assert check.error.remaining_minutes == policy.lockout_minutes

    async def test_counts_origin_address_separately(self, lockout, cache, cache_keys):
        await _fail(lockout, "alice", 2, ip_address="10.0.0.1")
        await lockout.record_failure("bob", ip_address="10.0.0.1")

        ip_count = await cache.get(cache_keys.lockout_ip("10.0.0.1"))
        assert ip_count == Success(value="3")

    async def test_identifiers_are_isolated(self, lockout, policy):
        await _fail(lockout, "alice", policy.lockout_max_attempts)

        assert await lockout.check_lockout("bob") == Success(value=None)

    async def test_email_case_variants_share_a_counter(self, lockout, policy):
        # Arrange
        variants = ["alice@example.com", "ALICE@example.com", " Alice@Example.com "]

        # Act
        for n in range(policy.lockout_max_attempts):
            await lockout.record_failure(variants[n % len(variants)])

        # Assert
        for variant in variants:
            check = await lockout.check_lockout(variant)
            assert isinstance(check, Failure)
            assert isinstance(check.error, AccountLocked)

    async def test_usernames_keep_their_case(self, lockout, policy):
        await _fail(lockout, "Alice", policy.lockout_max_attempts)

        assert await lockout.check_lockout("alice") == Success(value=None)

    async def test_counter_expires_after_window(self, lockout, cache, cache_keys, policy):
        await _fail(lockout, "alice", 2, ip_address="10.0.0.1")

        user_ttl = await cache.ttl(cache_keys.lockout_user("alice"))
        ip_ttl = await cache.ttl(cache_keys.lockout_ip("10.0.0.1"))
        assert 0 < user_ttl.value <= policy.lockout_seconds
        assert 0 < ip_ttl.value <= policy.lockout_seconds

    async def test_lock_notice_sent_for_known_identity(self, lockout, notifier, policy):
        await _fail(
            lockout,
            "alice",
            policy.lockout_max_attempts,
            email="alice@example.com",
            display_name="Alice",
        )

        assert len(notifier.sent) == 1
        to, template, context = notifier.sent[0]
        assert to == "alice@example.com"
        assert template == NotificationTemplate.ACCOUNT_LOCKED
        assert context["name"] == "Alice"
        assert context["lockout_minutes"] == policy.lockout_minutes
        assert context["unlock_time"].endswith(" UTC")

    async def test_no_notice_for_unknown_identifier(self, lockout, notifier, policy):
        await _fail(lockout, "ghost", policy.lockout_max_attempts)

        assert notifier.sent == []

    async def test_cache_failure_propagates(self, cache_keys, notifier, logger, policy):
        # Arrange
        cache = AsyncMock()
        cache.increment.return_value = Failure(
            error=CacheError(
                code=ErrorCode.STORE_UNAVAILABLE,
                infrastructure_code=InfrastructureErrorCode.CACHE_CONNECTION_ERROR,
                message="Cache connection failed",
            )
        )
        lockout = AccountLockoutService(
            cache=cache,
            cache_keys=cache_keys,
            notifier=notifier,
            logger=logger,
            policy=policy,
        )

        # Act
        result = await lockout.record_failure("alice")

        # Assert
        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.STORE_UNAVAILABLE
        cache.expire.assert_not_called()
        cache.set.assert_not_called()


@pytest.mark.unit
class TestResetAndUnlock:
    async def test_reset_clears_counters(self, lockout, cache, cache_keys):
        await _fail(lockout, "alice", 3, ip_address="10.0.0.1")

        await lockout.reset_attempts("alice", ip_address="10.0.0.1")

        assert await cache.get(cache_keys.lockout_user("alice")) == Success(value=None)
        assert await cache.get(cache_keys.lockout_ip("10.0.0.1")) == Success(value=None)

    async def test_unlock_ignores_email_case(self, lockout, policy):
        await _fail(lockout, "alice@example.com", policy.lockout_max_attempts)

        await lockout.unlock_account("ALICE@example.com")

        assert await lockout.check_lockout("alice@example.com") == Success(value=None)

    async def test_unlock_lifts_lock(self, lockout, policy):
        await _fail(lockout, "alice", policy.lockout_max_attempts)

        result = await lockout.unlock_account("alice")

        assert result == Success(value=None)
        assert await lockout.check_lockout("alice") == Success(value=None)
        info = await lockout.get_lockout_info("alice")
        assert info.value.attempts == 0


@pytest.mark.unit
class TestLockoutInfo:
    async def test_unlocked_reports_attempts(self, lockout):
        await _fail(lockout, "alice", 2)

        info = await lockout.get_lockout_info("alice")

        assert info.value.is_locked is False
        assert info.value.attempts == 2
        assert info.value.remaining_minutes is None

    async def test_locked_reports_remaining_minutes(self, lockout, policy):
        await _fail(lockout, "alice", policy.lockout_max_attempts)

        info = await lockout.get_lockout_info("alice")

        assert info.value.is_locked is True
        assert info.value.remaining_minutes == policy.lockout_minutes

    async def test_email_lookup_ignores_case(self, lockout):
        await _fail(lockout, "alice@example.com", 2)

        info = await lockout.get_lockout_info("Alice@Example.COM")

        assert info.value.attempts == 2
