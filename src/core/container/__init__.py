"""Container module - Centralized dependency injection.

This module re-exports all factory functions from submodules:

    from src.core.container import get_cache, get_login_handler, ...

The container is organized into modules by concern:
- infrastructure: Core services (cache, db, logging, security, notifier, policy)
- services: Application engines (lockout, OTP, TOTP, tokens, recovery, audit)
- auth_handlers: Registration, login, refresh, logout, profile, audit trail
- two_factor_handlers: Second-factor management
- account_recovery_handlers: Password reset and email verification
- lockout_handlers: Lockout administration and expired-record purge
"""

# Infrastructure services
from src.core.container.infrastructure import (
    get_auth_policy,
    get_cache,
    get_cache_keys,
    get_database,
    get_db_session,
    get_logger,
    get_notifier,
    get_password_service,
    get_secret_codec,
    get_token_service,
    get_totp_authenticator,
)

# Application services
from src.core.container.services import get_lockout_service

# Lockout administration and housekeeping
from src.core.container.lockout_handlers import (
    get_lockout_info_handler,
    get_unlock_account_handler,
    purge_expired_records,
)

# Auth handlers
from src.core.container.auth_handlers import (
    get_current_identity_handler,
    get_list_audit_events_handler,
    get_login_handler,
    get_logout_handler,
    get_refresh_tokens_handler,
    get_register_identity_handler,
)

# Two-factor handlers
from src.core.container.two_factor_handlers import (
    get_confirm_totp_setup_handler,
    get_disable_two_factor_handler,
    get_enable_email_otp_handler,
    get_initiate_totp_setup_handler,
    get_resend_otp_handler,
    get_two_factor_status_handler,
)

# Account recovery handlers
from src.core.container.account_recovery_handlers import (
    get_confirm_password_reset_handler,
    get_request_password_reset_handler,
    get_resend_verification_handler,
    get_validate_reset_token_handler,
    get_verify_email_handler,
)

__all__ = [
    # Infrastructure
    "get_auth_policy",
    "get_cache",
    "get_cache_keys",
    "get_database",
    "get_db_session",
    "get_logger",
    "get_notifier",
    "get_password_service",
    "get_secret_codec",
    "get_token_service",
    "get_totp_authenticator",
    # Services
    "get_lockout_service",
    # Lockout administration
    "get_lockout_info_handler",
    "get_unlock_account_handler",
    "purge_expired_records",
    # Auth handlers
    "get_current_identity_handler",
    "get_list_audit_events_handler",
    "get_login_handler",
    "get_logout_handler",
    "get_refresh_tokens_handler",
    "get_register_identity_handler",
    # Two-factor handlers
    "get_confirm_totp_setup_handler",
    "get_disable_two_factor_handler",
    "get_enable_email_otp_handler",
    "get_initiate_totp_setup_handler",
    "get_resend_otp_handler",
    "get_two_factor_status_handler",
    # Account recovery handlers
    "get_confirm_password_reset_handler",
    "get_request_password_reset_handler",
    "get_resend_verification_handler",
    "get_validate_reset_token_handler",
    "get_verify_email_handler",
]
