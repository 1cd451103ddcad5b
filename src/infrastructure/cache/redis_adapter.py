"""Redis adapter implementing CacheProtocol.

Counters, lock flags and rate windows for the lockout tracker and the OTP
engine live here. Every key is written with a TTL; losing the cache resets
lockouts and quotas.

Architecture:
- Implements CacheProtocol without inheritance (structural typing)
- Maps Redis exceptions to CacheError with proper ErrorCode
- Returns Result types for all operations
"""

from redis.asyncio import Redis
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.infrastructure.enums import InfrastructureErrorCode
from src.infrastructure.errors import CacheError


def _cache_error(
    operation: str,
    key: str | None,
    error: RedisError,
    infrastructure_code: InfrastructureErrorCode,
) -> CacheError:
    if isinstance(error, RedisTimeoutError):
        infrastructure_code = InfrastructureErrorCode.CACHE_TIMEOUT
    details: dict[str, str] = {"operation": operation, "error": str(error)}
    if key is not None:
        details["key"] = key
    return CacheError(
        code=ErrorCode.STORE_UNAVAILABLE,
        infrastructure_code=infrastructure_code,
        message=f"Cache {operation} failed",
        details=details,
    )


class RedisAdapter:
    """Redis implementation of CacheProtocol.

    Note: Does NOT inherit from CacheProtocol (uses structural typing).

    Attributes:
        _redis: Async Redis client instance.
    """

    def __init__(self, redis_client: Redis) -> None:
        """Initialize Redis adapter.

        Args:
            redis_client: Async Redis client instance.
        """
        self._redis = redis_client

    async def get(self, key: str) -> Result[str | None, CacheError]:
        """Get value from Redis.

        Args:
            key: Cache key.

        Returns:
            Result with value if found, None if not found, or CacheError.
        """
        try:
            value = await self._redis.get(key)
        except RedisError as e:
            return Failure(
                error=_cache_error(
                    "get", key, e, InfrastructureErrorCode.CACHE_GET_ERROR
                )
            )
        if value is None:
            return Success(value=None)
        # Redis returns bytes unless the pool decodes responses
        decoded = value.decode("utf-8") if isinstance(value, bytes) else value
        return Success(value=decoded)

    async def set(
        self,
        key: str,
        value: str,
        ttl: int | None = None,
    ) -> Result[None, CacheError]:
        """Set value in Redis.

        Args:
            key: Cache key.
            value: Value to cache.
            ttl: Time to live in seconds (None = no expiration).

        Returns:
            Result with None on success, or CacheError.
        """
        try:
            if ttl is not None:
                await self._redis.setex(key, ttl, value)
            else:
                await self._redis.set(key, value)
        except RedisError as e:
            return Failure(
                error=_cache_error(
                    "set", key, e, InfrastructureErrorCode.CACHE_SET_ERROR
                )
            )
        return Success(value=None)

    async def delete(self, key: str) -> Result[bool, CacheError]:
        """Delete key from Redis.

        Returns:
            Result with True if deleted, False if key didn't exist, or CacheError.
        """
        try:
            deleted_count = await self._redis.delete(key)
        except RedisError as e:
            return Failure(
                error=_cache_error(
                    "delete", key, e, InfrastructureErrorCode.CACHE_DELETE_ERROR
                )
            )
        return Success(value=deleted_count > 0)

    async def ttl(self, key: str) -> Result[int | None, CacheError]:
        """Get time to live for key in Redis.

        Returns:
            Result with seconds until expiration, None if no TTL or key
            doesn't exist, or CacheError.
        """
        try:
            ttl_value = await self._redis.ttl(key)
        except RedisError as e:
            return Failure(
                error=_cache_error(
                    "ttl", key, e, InfrastructureErrorCode.CACHE_GET_ERROR
                )
            )
        # Redis returns -2 if key doesn't exist, -1 if no expiration
        if ttl_value < 0:
            return Success(value=None)
        return Success(value=ttl_value)

    async def increment(self, key: str, amount: int = 1) -> Result[int, CacheError]:
        """Increment value in Redis (atomic, missing key counts from 0)."""
        try:
            new_value = await self._redis.incrby(key, amount)
        except RedisError as e:
            return Failure(
                error=_cache_error(
                    "increment", key, e, InfrastructureErrorCode.CACHE_SET_ERROR
                )
            )
        return Success(value=new_value)

    async def expire(self, key: str, seconds: int) -> Result[bool, CacheError]:
        """Set expiration on key in Redis.

        Returns:
            Result with True if timeout set, False if key doesn't exist, or CacheError.
        """
        try:
            was_set = await self._redis.expire(key, seconds)
        except RedisError as e:
            return Failure(
                error=_cache_error(
                    "expire", key, e, InfrastructureErrorCode.CACHE_SET_ERROR
                )
            )
        return Success(value=bool(was_set))

    async def ping(self) -> Result[bool, CacheError]:
        """Check Redis connectivity (health check)."""
        try:
            await self._redis.ping()  # type: ignore[misc]
        except RedisError as e:
            return Failure(
                error=_cache_error(
                    "ping", None, e, InfrastructureErrorCode.CACHE_CONNECTION_ERROR
                )
            )
        return Success(value=True)
