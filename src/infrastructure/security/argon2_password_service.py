"""Argon2id password hashing service (adapter).

Implements PasswordHashingProtocol with argon2-cffi. Used for passwords,
email OTP codes and recovery codes.

Architecture:
    - Implements PasswordHashingProtocol (no inheritance required)
    - Structural typing via Protocol
    - Injected via dependency container

Performance:
    - Memory-hard: each call allocates ``memory_cost`` KiB and burns CPU
    - Work runs in a worker thread (asyncio.to_thread) so the event loop
      keeps serving other requests
"""

import asyncio

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError


class Argon2PasswordService:
    """Argon2id password hashing service.

    Usage:
        from src.core.container import get_password_service

        password_service = get_password_service()
        password_hash = await password_service.hash_password("Secr3t!23")
        is_valid = await password_service.verify_password("Secr3t!23", password_hash)
    """

    def __init__(
        self,
        time_cost: int = 3,
        memory_cost: int = 65536,
        parallelism: int = 4,
    ) -> None:
        """Initialize argon2 password service.

        Args:
            time_cost: Number of iterations.
            memory_cost: Memory usage in KiB (default 64 MiB).
            parallelism: Number of parallel lanes.

        Raises:
            ValueError: If parameters fall below safe minimums.
        """
        if time_cost < 1:
            msg = "time_cost must be at least 1"
            raise ValueError(msg)
        if memory_cost < 8 * parallelism:
            msg = "memory_cost must be at least 8 KiB per lane"
            raise ValueError(msg)

        self._hasher = PasswordHasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
        )

    async def hash_password(self, password: str) -> str:
        """Hash a plaintext secret using argon2id.

        Args:
            password: Plaintext to hash.

        Returns:
            Encoded hash ($argon2id$v=19$m=...,t=...,p=...$salt$hash).

        Note:
            Each call produces a different hash (random salt).
        """
        return await asyncio.to_thread(self._hasher.hash, password)

    async def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a plaintext secret against an argon2 hash.

        Returns:
            True if it matches, False otherwise (malformed hashes included).
        """
        return await asyncio.to_thread(self._verify, password, password_hash)

    def _verify(self, password: str, password_hash: str) -> bool:
        try:
            return self._hasher.verify(password_hash, password)
        except (VerifyMismatchError, VerificationError, InvalidHashError):
            return False
