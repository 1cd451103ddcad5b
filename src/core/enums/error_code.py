"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention.
Used with Result types for railway-oriented programming.

Categories:
- Validation errors (INVALID_*, VALIDATION_*)
- Resource errors (*_NOT_FOUND, *_NOT_STARTED)
- Conflict errors (*_ALREADY_EXISTS, *_ALREADY_VERIFIED)
- Authentication errors (INVALID_CREDENTIALS, *_TOKEN_*)
- Lockout and quota outcomes (ACCOUNT_LOCKED, RATE_LIMITED, TOO_MANY_ATTEMPTS)
- Second factor errors (INVALID_CODE, INVALID_TWO_FACTOR_CODE)
- Secret codec errors (ENCRYPTION_*, DECRYPTION_*)
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable).

    Error codes follow ENTITY_ACTION_REASON naming convention.
    """

    # Validation errors
    INVALID_EMAIL = "invalid_email"
    INVALID_PASSWORD = "invalid_password"
    PASSWORD_TOO_WEAK = "password_too_weak"
    VALIDATION_FAILED = "validation_failed"

    # Resource errors
    IDENTITY_NOT_FOUND = "identity_not_found"
    CHALLENGE_NOT_FOUND = "challenge_not_found"
    SETUP_NOT_STARTED = "setup_not_started"
    RESOURCE_NOT_FOUND = "resource_not_found"

    # Conflict errors
    EMAIL_ALREADY_EXISTS = "email_already_exists"
    USERNAME_ALREADY_EXISTS = "username_already_exists"
    EMAIL_ALREADY_VERIFIED = "email_already_verified"
    RESOURCE_CONFLICT = "resource_conflict"

    # Authentication errors
    INVALID_CREDENTIALS = "invalid_credentials"
    INVALID_REFRESH_TOKEN = "invalid_refresh_token"
    INVALID_ACCESS_TOKEN = "invalid_access_token"
    INVALID_RESET_TOKEN = "invalid_reset_token"
    INVALID_VERIFICATION_TOKEN = "invalid_verification_token"
    EMAIL_NOT_VERIFIED = "email_not_verified"

    # Lockout and quota outcomes
    ACCOUNT_LOCKED = "account_locked"
    RATE_LIMITED = "rate_limited"
    TOO_MANY_ATTEMPTS = "too_many_attempts"

    # Second factor errors
    INVALID_CODE = "invalid_code"
    INVALID_TWO_FACTOR_CODE = "invalid_two_factor_code"

    # Audit trail errors
    AUDIT_RECORD_FAILED = "audit_record_failed"
    AUDIT_QUERY_FAILED = "audit_query_failed"

    # Secret codec errors
    ENCRYPTION_KEY_INVALID = "encryption_key_invalid"
    ENCRYPTION_FAILED = "encryption_failed"
    DECRYPTION_FAILED = "decryption_failed"

    # Infrastructure passthrough
    STORE_UNAVAILABLE = "store_unavailable"
    NOTIFICATION_FAILED = "notification_failed"
