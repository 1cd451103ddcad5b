"""Windowed counters kept in the cache.

Counters are integers incremented atomically in the cache. Each bump restarts
the key's TTL, so a counter lives for one window after its last increment.
"""

from src.core.errors import DomainError
from src.core.result import Failure, Result, Success
from src.domain.protocols import CacheProtocol


async def read_count(cache: CacheProtocol, key: str) -> Result[int, DomainError]:
    """Current counter value (0 when absent)."""
    result = await cache.get(key)
    if isinstance(result, Failure):
        return result
    return Success(value=int(result.value) if result.value else 0)


async def bump_count(
    cache: CacheProtocol, key: str, ttl_seconds: int
) -> Result[int, DomainError]:
    """Increment a counter and restart its window.

    Returns:
        Success(new_count) or the cache failure.
    """
    incremented = await cache.increment(key)
    if isinstance(incremented, Failure):
        return incremented

    expiring = await cache.expire(key, ttl_seconds)
    if isinstance(expiring, Failure):
        return expiring
    return Success(value=incremented.value)
