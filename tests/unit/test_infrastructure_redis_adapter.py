"""Unit tests for RedisAdapter.

Uses fakeredis for behaviour and a mocked client for error mapping.
"""

from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError

from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.infrastructure.cache import CacheKeys, RedisAdapter
from src.infrastructure.enums import InfrastructureErrorCode
from src.infrastructure.errors import CacheError


@pytest.mark.unit
class TestRedisAdapterOperations:
    """Test operations against fake Redis."""

    async def test_get_missing_key_returns_none(self, cache):
        assert await cache.get("missing") == Success(value=None)

    async def test_set_then_get_decodes_bytes(self, cache):
        await cache.set("k", "v")

        assert await cache.get("k") == Success(value="v")

    async def test_set_with_ttl_reports_remaining_seconds(self, cache):
        await cache.set("k", "v", ttl=900)

        result = await cache.ttl("k")

        assert isinstance(result, Success)
        assert 0 < result.value <= 900

    async def test_ttl_is_none_without_expiry_or_key(self, cache):
        await cache.set("persistent", "v")

        assert await cache.ttl("persistent") == Success(value=None)
        assert await cache.ttl("missing") == Success(value=None)

    async def test_delete_reports_whether_key_existed(self, cache):
        await cache.set("k", "v")

        assert await cache.delete("k") == Success(value=True)
        assert await cache.delete("k") == Success(value=False)

    async def test_increment_counts_from_zero(self, cache):
        await cache.increment("counter")
        result = await cache.increment("counter", 4)

        assert result == Success(value=5)

    async def test_expire_reports_whether_key_existed(self, cache):
        await cache.set("k", "v")

        assert await cache.expire("k", 60) == Success(value=True)
        assert await cache.expire("missing", 60) == Success(value=False)

    async def test_ping(self, cache):
        assert await cache.ping() == Success(value=True)


@pytest.mark.unit
class TestRedisAdapterErrors:
    """Test Redis exceptions become CacheError failures."""

    async def test_connection_error_maps_to_store_unavailable(self):
        # Arrange
        client = AsyncMock()
        client.get.side_effect = RedisConnectionError("refused")
        adapter = RedisAdapter(redis_client=client)

        # Act
        result = await adapter.get("lockout:user:alice")

        # Assert
        assert isinstance(result, Failure)
        assert isinstance(result.error, CacheError)
        assert result.error.code == ErrorCode.STORE_UNAVAILABLE
        assert result.error.infrastructure_code == InfrastructureErrorCode.CACHE_GET_ERROR
        assert result.error.details["key"] == "lockout:user:alice"

    async def test_timeout_is_reported_as_timeout(self):
        client = AsyncMock()
        client.setex.side_effect = RedisTimeoutError("slow")
        adapter = RedisAdapter(redis_client=client)

        result = await adapter.set("k", "v", ttl=10)

        assert isinstance(result, Failure)
        assert result.error.infrastructure_code == InfrastructureErrorCode.CACHE_TIMEOUT

    async def test_ping_failure_has_no_key(self):
        client = AsyncMock()
        client.ping.side_effect = RedisConnectionError("down")
        adapter = RedisAdapter(redis_client=client)

        result = await adapter.ping()

        assert isinstance(result, Failure)
        assert "key" not in result.error.details


@pytest.mark.unit
class TestCacheKeys:
    """Test key shapes."""

    def test_lockout_keys(self):
        keys = CacheKeys()

        assert keys.lockout_user("a@x.com") == "lockout:user:a@x.com"
        assert keys.lockout_ip("10.0.0.1") == "lockout:ip:10.0.0.1"
        assert keys.lockout_flag("alice") == "lockout:locked:alice"

    def test_prefix_namespaces_every_key(self):
        keys = CacheKeys(prefix="gh")

        assert keys.password_reset_rate("a@x.com") == "gh:reset:rate:a@x.com"
        assert keys.verification_resend("a@x.com") == "gh:verify:resend:a@x.com"
