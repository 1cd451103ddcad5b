"""Cache infrastructure package.

Architecture:
- RedisAdapter: Concrete Redis implementation of CacheProtocol
- CacheKeys: Key shapes for counters, flags and rate windows
- Use src.core.container.get_cache() for dependency injection
"""

from src.infrastructure.cache.cache_keys import CacheKeys
from src.infrastructure.cache.redis_adapter import RedisAdapter

__all__ = [
    "CacheKeys",
    "RedisAdapter",
]
