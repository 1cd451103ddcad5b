"""Cache key construction for lockout and quota counters.

Keys keep the short, fixed shapes operators grep for in Redis
(``lockout:user:a@x.com``). An optional prefix namespaces them when several
deployments share one Redis database.

Usage:
    keys = CacheKeys(prefix=settings.cache_key_prefix)
    keys.lockout_user("a@x.com")  # "lockout:user:a@x.com"
"""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, slots=True)
class CacheKeys:
    """Centralized cache key construction.

    Attributes:
        prefix: Optional namespace ("" for none).

    Example:
        >>> CacheKeys(prefix="gh").otp_resend(identity_id)
        'gh:otp:resend:0190...'
    """

    prefix: str = ""

    def _key(self, *parts: object) -> str:
        body = ":".join(str(part) for part in parts)
        return f"{self.prefix}:{body}" if self.prefix else body

    def lockout_user(self, identifier: str) -> str:
        """Failed-login counter per identifier as typed."""
        return self._key("lockout", "user", identifier)

    def lockout_ip(self, ip_address: str) -> str:
        """Failed-login counter per origin address."""
        return self._key("lockout", "ip", ip_address)

    def lockout_flag(self, identifier: str) -> str:
        """Lock flag; its TTL is the remaining lock time."""
        return self._key("lockout", "locked", identifier)

    def otp_attempts(self, identity_id: UUID) -> str:
        """Failed email OTP verifications in the current window."""
        return self._key("otp", "attempts", identity_id)

    def otp_resend(self, identity_id: UUID) -> str:
        """Email OTP issues in the current window."""
        return self._key("otp", "resend", identity_id)

    def password_reset_rate(self, email: str) -> str:
        """Password reset requests per email."""
        return self._key("reset", "rate", email)

    def verification_resend(self, email: str) -> str:
        """Verification emails sent per email."""
        return self._key("verify", "resend", email)
