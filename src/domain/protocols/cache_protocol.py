"""Cache protocol for domain layer.

The authentication core keeps every counter and lock flag in a key-value
cache with per-key expiry: lockout counters, lock flags, OTP attempt and
resend counters, reset and verification rate windows.

Architecture:
- Protocol-based - uses structural typing
- All operations return Result types
- Losing cache state resets counters (accepted degradation)
"""

from typing import Protocol

from src.core.errors import DomainError
from src.core.result import Result


class CacheProtocol(Protocol):
    """Cache protocol - what the domain needs from the counter store."""

    async def get(self, key: str) -> Result[str | None, DomainError]:
        """Get value from cache.

        Args:
            key: Cache key.

        Returns:
            Result with value if found, None if not found, or CacheError.

        Example:
            match await cache.get("otp:resend:123"):
                case Success(value=None):
                    count = 0
                case Success(value=raw):
                    count = int(raw)
                case Failure(error=error):
                    return Failure(error=error)
        """
        ...

    async def set(
        self,
        key: str,
        value: str,
        ttl: int | None = None,
    ) -> Result[None, DomainError]:
        """Set value in cache.

        Args:
            key: Cache key.
            value: Value to store.
            ttl: Time to live in seconds (None = no expiration).

        Returns:
            Result with None on success, or CacheError.
        """
        ...

    async def delete(self, key: str) -> Result[bool, DomainError]:
        """Delete key from cache.

        Returns:
            Result with True if deleted, False if key didn't exist.
        """
        ...

    async def ttl(self, key: str) -> Result[int | None, DomainError]:
        """Get remaining time to live in seconds.

        Returns:
            Result with seconds remaining, None if the key is absent or
            has no expiry.
        """
        ...

    async def increment(self, key: str, amount: int = 1) -> Result[int, DomainError]:
        """Increment integer value (atomic). Missing keys start at 0."""
        ...

    async def expire(self, key: str, seconds: int) -> Result[bool, DomainError]:
        """Set expiration on existing key."""
        ...

    async def ping(self) -> Result[bool, DomainError]:
        """Check cache connectivity."""
        ...
