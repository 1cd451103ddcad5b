"""Cache keys protocol for counter key generation.

Defines the port for cache key construction. Infrastructure
layer implements this protocol to provide consistent key patterns.

Architecture:
    - Domain layer protocol (port)
    - Infrastructure adapter: src/infrastructure/cache/cache_keys.py
    - Used by lockout, OTP and account-recovery services
"""

from typing import Protocol
from uuid import UUID


class CacheKeysProtocol(Protocol):
    """Protocol for generating counter keys.

    Keys follow the pattern ``[{prefix}:]{area}:{counter}:{subject}``.

    Example:
        class AccountLockoutService:
            def __init__(self, *, cache_keys: CacheKeysProtocol, ...) -> None:
                self._keys = cache_keys
    """

    def lockout_user(self, identifier: str) -> str:
        """Failed-login counter key.

        Pattern: lockout:user:{identifier}
        """
        ...

    def lockout_ip(self, ip_address: str) -> str:
        """Failed-login counter key per origin address.

        Pattern: lockout:ip:{ip_address}
        """
        ...

    def lockout_flag(self, identifier: str) -> str:
        """Lock flag key.

        Pattern: lockout:locked:{identifier}
        """
        ...

    def otp_attempts(self, identity_id: UUID) -> str:
        """Failed email OTP verification counter key.

        Pattern: otp:attempts:{identity_id}
        """
        ...

    def otp_resend(self, identity_id: UUID) -> str:
        """Email OTP issue counter key.

        Pattern: otp:resend:{identity_id}
        """
        ...

    def password_reset_rate(self, email: str) -> str:
        """Password reset request counter key.

        Pattern: reset:rate:{email}
        """
        ...

    def verification_resend(self, email: str) -> str:
        """Verification email counter key.

        Pattern: verify:resend:{email}
        """
        ...
