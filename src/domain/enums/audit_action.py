"""Audit action tags for security events.

Every security-relevant step of the authentication flows appends an
AuditEvent tagged with one of these actions. The stored value is the plain
string, so new actions need no schema change.

Usage:
    from src.domain.enums import AuditAction

    await audit.record(
        action=AuditAction.TWO_FACTOR_VERIFIED,
        identity_id=identity.id,
        method="totp",
        success=True,
    )
"""

from enum import Enum


class AuditAction(str, Enum):
    """Audit action tags.

    String Enum:
        Inherits from str for easy serialization and database storage.
        Values are snake_case strings and match historical audit rows.
    """

    # =========================================================================
    # Registration and login
    # =========================================================================

    USER_REGISTERED = "user_registered"
    LOGIN_SUCCEEDED = "login_succeeded"
    LOGIN_FAILED = "login_failed"
    LOGOUT = "logout"
    TOKENS_REFRESHED = "tokens_refreshed"

    # =========================================================================
    # Second factor
    # =========================================================================

    TWO_FACTOR_SETUP_INITIATED = "2fa_setup_initiated"
    TWO_FACTOR_ENABLED = "2fa_enabled"
    TWO_FACTOR_DISABLED = "2fa_disabled"
    TWO_FACTOR_VERIFIED = "2fa_verified"
    TWO_FACTOR_VERIFICATION_FAILED = "2fa_verification_failed"
    TWO_FACTOR_RECOVERY_CODE_USED = "2fa_recovery_code_used"
    TWO_FACTOR_OTP_RESENT = "2fa_otp_resent"

    # =========================================================================
    # Account recovery
    # =========================================================================

    PASSWORD_RESET_REQUESTED = "password_reset_requested"
    PASSWORD_RESET_COMPLETED = "password_reset_completed"
    EMAIL_VERIFIED = "email_verified"

    # =========================================================================
    # Lockout
    # =========================================================================

    ACCOUNT_LOCKED = "account_locked"
    ACCOUNT_UNLOCKED = "account_unlocked"
