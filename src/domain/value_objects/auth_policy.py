"""Authentication policy value object.

All tunable numbers of the authentication flows live here and are passed
explicitly to every service, so tests can run the same code under a
different policy than production.

Usage:
    policy = AuthPolicy(lockout_max_attempts=3)
    tracker = AccountLockoutService(cache=cache, keys=keys, notifier=notifier,
                                    logger=logger, policy=policy)
"""

from dataclasses import dataclass
from datetime import timedelta


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthPolicy:
    """Named policy fields with production defaults.

    Attributes:
        access_token_minutes: Access token lifetime.
        refresh_token_days: Refresh token and session lifetime.
        lockout_max_attempts: Failures per identifier before locking.
        lockout_minutes: Lock duration and failure counting window.
        otp_expiry_minutes: Email OTP challenge lifetime.
        otp_max_attempts: Failed OTP verifications allowed per window.
        otp_max_resends: OTP issues allowed per window.
        otp_window_minutes: Window for OTP attempt and resend counters.
        totp_valid_window: Accepted drift in 30-second steps.
        recovery_code_count: Codes generated at TOTP confirmation.
        password_reset_expiry_minutes: Reset token lifetime.
        password_reset_max_requests: Reset requests per email per window.
        password_reset_window_minutes: Reset rate window.
        email_verification_expiry_hours: Verification token lifetime.
        email_verification_max_sends: Verification emails per window.
        email_verification_window_minutes: Verification rate window.
        require_verified_email: Refuse login for unverified identities.
        totp_issuer: Issuer label shown in authenticator apps.
        frontend_url: Base URL for links in emails.
    """

    access_token_minutes: int = 15
    refresh_token_days: int = 7
    lockout_max_attempts: int = 5
    lockout_minutes: int = 15
    otp_expiry_minutes: int = 5
    otp_max_attempts: int = 5
    otp_max_resends: int = 3
    otp_window_minutes: int = 15
    totp_valid_window: int = 2
    recovery_code_count: int = 10
    password_reset_expiry_minutes: int = 60
    password_reset_max_requests: int = 3
    password_reset_window_minutes: int = 15
    email_verification_expiry_hours: int = 24
    email_verification_max_sends: int = 3
    email_verification_window_minutes: int = 60
    require_verified_email: bool = False
    totp_issuer: str = "Gatehouse"
    frontend_url: str = "http://localhost:3000"

    @property
    def lockout_seconds(self) -> int:
        return self.lockout_minutes * 60

    @property
    def otp_window_seconds(self) -> int:
        return self.otp_window_minutes * 60

    @property
    def otp_lifetime(self) -> timedelta:
        return timedelta(minutes=self.otp_expiry_minutes)

    @property
    def access_token_lifetime(self) -> timedelta:
        return timedelta(minutes=self.access_token_minutes)

    @property
    def refresh_token_lifetime(self) -> timedelta:
        return timedelta(days=self.refresh_token_days)
