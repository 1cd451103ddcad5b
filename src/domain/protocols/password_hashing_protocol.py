"""Password hashing protocol for domain layer.

Memory-hard one-way hashing used for passwords, email OTP codes and
recovery codes. Hashing is CPU-bound, so the methods are async and
implementations offload the work from the event loop.

Architecture:
    - Domain defines protocol (port)
    - Infrastructure implements adapter (Argon2PasswordService)
"""

from typing import Protocol


class PasswordHashingProtocol(Protocol):
    """Password hashing and verification interface.

    Usage:
        password_hash = await self._password_service.hash_password("Secr3t!23")
        is_valid = await self._password_service.verify_password("Secr3t!23", password_hash)
    """

    async def hash_password(self, password: str) -> str:
        """Hash a plaintext secret.

        Args:
            password: Plaintext to hash.

        Returns:
            Encoded hash string (argon2 format: $argon2id$...).

        Note:
            Same input produces different hashes (random salt).
        """
        ...

    async def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a plaintext secret against a hash.

        Args:
            password: Plaintext to verify.
            password_hash: Stored hash.

        Returns:
            True if it matches, False otherwise (including malformed hashes).
        """
        ...
