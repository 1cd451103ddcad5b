"""Outbound message templates."""

from enum import Enum


class NotificationTemplate(str, Enum):
    """Template names understood by notifier adapters.

    Context keys per template:
        OTP_CODE: otp, expiry_minutes
        ACCOUNT_LOCKED: name, lockout_minutes, unlock_time
        RESET_PASSWORD: name, reset_url, expiry_minutes
        PASSWORD_CHANGED: name
        VERIFY_EMAIL: name, verification_url, expiry_hours
    """

    OTP_CODE = "otp-code"
    ACCOUNT_LOCKED = "account-locked"
    RESET_PASSWORD = "reset-password"
    PASSWORD_CHANGED = "password-changed"
    VERIFY_EMAIL = "verify-email"
