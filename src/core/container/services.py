"""Application service builders.

The engines shared by several handlers (lockout tracker, OTP and TOTP
engines, token issuer, account recovery, audit recorder). Services that
touch the database are built per request around the request's session;
the lockout tracker only needs singletons and is cached.
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.container.infrastructure import (
    get_auth_policy,
    get_cache,
    get_cache_keys,
    get_logger,
    get_notifier,
    get_password_service,
    get_secret_codec,
    get_token_service,
    get_totp_authenticator,
)

if TYPE_CHECKING:
    from src.application.services.account_lockout_service import (
        AccountLockoutService,
    )
    from src.application.services.audit_recorder import AuditRecorder
    from src.application.services.email_verification_service import (
        EmailVerificationService,
    )
    from src.application.services.otp_service import OtpService
    from src.application.services.password_reset_service import (
        PasswordResetService,
    )
    from src.application.services.token_issuer import TokenIssuer
    from src.application.services.totp_service import TotpService


@lru_cache()
def get_lockout_service() -> "AccountLockoutService":
    """Lockout tracker singleton (cache-only state)."""
    from src.application.services.account_lockout_service import (
        AccountLockoutService,
    )

    return AccountLockoutService(
        cache=get_cache(),
        cache_keys=get_cache_keys(),
        notifier=get_notifier(),
        logger=get_logger(),
        policy=get_auth_policy(),
    )


def build_audit_recorder(session: AsyncSession) -> "AuditRecorder":
    """Audit recorder writing through the request session."""
    from src.application.services.audit_recorder import AuditRecorder
    from src.infrastructure.audit import PostgresAuditAdapter

    return AuditRecorder(audit=PostgresAuditAdapter(session=session), logger=get_logger())


def build_otp_service(session: AsyncSession) -> "OtpService":
    from src.application.services.otp_service import OtpService
    from src.infrastructure.persistence.repositories import (
        EmailOtpChallengeRepository,
    )

    return OtpService(
        otp_repo=EmailOtpChallengeRepository(session=session),
        cache=get_cache(),
        cache_keys=get_cache_keys(),
        password_service=get_password_service(),
        notifier=get_notifier(),
        logger=get_logger(),
        policy=get_auth_policy(),
    )


def build_totp_service(session: AsyncSession) -> "TotpService":
    from src.application.services.totp_service import TotpService
    from src.infrastructure.persistence.repositories import SecondFactorRepository

    return TotpService(
        second_factor_repo=SecondFactorRepository(session=session),
        codec=get_secret_codec(),
        authenticator=get_totp_authenticator(),
        password_service=get_password_service(),
        logger=get_logger(),
        policy=get_auth_policy(),
    )


def build_token_issuer(session: AsyncSession) -> "TokenIssuer":
    from src.application.services.token_issuer import TokenIssuer
    from src.infrastructure.persistence.repositories import SessionRepository

    return TokenIssuer(
        token_service=get_token_service(),
        session_repo=SessionRepository(session=session),
    )


def build_password_reset_service(session: AsyncSession) -> "PasswordResetService":
    from src.application.services.password_reset_service import (
        PasswordResetService,
    )
    from src.infrastructure.persistence.repositories import (
        ActionTokenRepository,
        IdentityRepository,
        SessionRepository,
    )

    return PasswordResetService(
        identity_repo=IdentityRepository(session=session),
        action_token_repo=ActionTokenRepository(session=session),
        session_repo=SessionRepository(session=session),
        password_service=get_password_service(),
        cache=get_cache(),
        cache_keys=get_cache_keys(),
        notifier=get_notifier(),
        logger=get_logger(),
        policy=get_auth_policy(),
    )


def build_email_verification_service(
    session: AsyncSession,
) -> "EmailVerificationService":
    from src.application.services.email_verification_service import (
        EmailVerificationService,
    )
    from src.infrastructure.persistence.repositories import (
        ActionTokenRepository,
        IdentityRepository,
    )

    return EmailVerificationService(
        identity_repo=IdentityRepository(session=session),
        action_token_repo=ActionTokenRepository(session=session),
        cache=get_cache(),
        cache_keys=get_cache_keys(),
        notifier=get_notifier(),
        logger=get_logger(),
        policy=get_auth_policy(),
    )
