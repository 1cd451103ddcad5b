# mypy: disable-error-code="arg-type"
"""Infrastructure dependency factories.

Application-scoped singletons for core infrastructure services:
- Cache (Redis) and counter keys
- Database (PostgreSQL)
- Password hashing (Argon2id)
- Token generation (JWT)
- Secret codec (AES-256-GCM)
- TOTP authenticator (pyotp)
- Notifier (stub/AWS SES)
- Logging (structlog console)
- Authentication policy (from Settings)
"""

from functools import lru_cache
from typing import TYPE_CHECKING, AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import get_settings
from src.infrastructure.persistence.database import Database

if TYPE_CHECKING:
    from src.domain.protocols import (
        CacheKeysProtocol,
        CacheProtocol,
        LoggerProtocol,
        NotifierProtocol,
        PasswordHashingProtocol,
        SecretCodecProtocol,
        TokenGenerationProtocol,
        TotpAuthenticatorProtocol,
    )
    from src.domain.value_objects import AuthPolicy


# ============================================================================
# Application-Scoped Dependencies (Singletons)
# ============================================================================


@lru_cache()
def get_cache() -> "CacheProtocol":
    """Get cache client singleton (app-scoped).

    Returns RedisAdapter with connection pooling.
    Connection pool is shared across entire application.

    Returns:
        Cache client implementing CacheProtocol.

    Usage:
        cache = get_cache()
        await cache.set("key", "value", ttl=60)
    """
    from redis.asyncio import ConnectionPool, Redis

    from src.infrastructure.cache.redis_adapter import RedisAdapter

    pool = ConnectionPool.from_url(
        get_settings().redis_url,
        max_connections=50,
        decode_responses=False,
        socket_connect_timeout=5,
        socket_timeout=5,
        retry_on_timeout=True,
        socket_keepalive=True,
        socket_keepalive_options={
            1: 1,  # TCP_KEEPIDLE
            2: 1,  # TCP_KEEPINTVL
            3: 5,  # TCP_KEEPCNT
        },
    )
    redis_client = Redis(connection_pool=pool)
    return RedisAdapter(redis_client=redis_client)


@lru_cache()
def get_cache_keys() -> "CacheKeysProtocol":
    """Get counter key builder singleton (app-scoped)."""
    from src.infrastructure.cache.cache_keys import CacheKeys

    return CacheKeys(prefix=get_settings().cache_key_prefix)


@lru_cache()
def get_secret_codec() -> "SecretCodecProtocol":
    """Get secret codec singleton (app-scoped).

    Returns AESGCMSecretCodec keyed with settings.encryption_key.

    Raises:
        RuntimeError: If the key does not decode to 32 bytes.
    """
    from src.core.result import Failure, Success
    from src.infrastructure.security.aes_gcm_secret_codec import AESGCMSecretCodec

    result = AESGCMSecretCodec.create(bytes.fromhex(get_settings().encryption_key))

    match result:
        case Success(value=codec):
            return codec
        case Failure(error=err):
            raise RuntimeError(f"Failed to initialize secret codec: {err.message}")


@lru_cache()
def get_database() -> Database:
    """Get database manager singleton (app-scoped).

    Returns Database instance with connection pool.
    Use get_db_session() for per-request sessions.
    """
    settings = get_settings()
    return Database(
        database_url=settings.database_url,
        echo=settings.db_echo,
    )


# ============================================================================
# Request-Scoped Dependencies (Per-Request)
# ============================================================================


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session (request-scoped).

    Creates new session per request with automatic transaction management:
        - Commits on success (including handlers that returned Failure,
          so failed login attempts and audit events persist)
        - Rolls back on exception
        - Always closes session

    Yields:
        Database session for request duration.

    Usage:
        @router.post("/sessions")
        async def create_session(
            session: AsyncSession = Depends(get_db_session)
        ):
            ...
    """
    db = get_database()
    async with db.get_session() as session:
        yield session


# ============================================================================
# Security Services (Application-Scoped)
# ============================================================================


@lru_cache()
def get_password_service() -> "PasswordHashingProtocol":
    """Get password hashing singleton (Argon2id, app-scoped)."""
    from src.infrastructure.security.argon2_password_service import (
        Argon2PasswordService,
    )

    return Argon2PasswordService()


@lru_cache()
def get_token_service() -> "TokenGenerationProtocol":
    """Get JWT service singleton (app-scoped).

    Access and refresh tokens are signed with distinct secrets.
    """
    from src.infrastructure.security.jwt_service import JWTService

    policy = get_auth_policy()
    settings = get_settings()
    return JWTService(
        secret_key=settings.jwt_secret,
        refresh_secret_key=settings.jwt_refresh_secret,
        access_token_lifetime=policy.access_token_lifetime,
        refresh_token_lifetime=policy.refresh_token_lifetime,
    )


@lru_cache()
def get_totp_authenticator() -> "TotpAuthenticatorProtocol":
    """Get TOTP authenticator singleton (app-scoped)."""
    from src.infrastructure.security.pyotp_authenticator import PyOtpAuthenticator

    return PyOtpAuthenticator()


@lru_cache()
def get_auth_policy() -> "AuthPolicy":
    """Build the authentication policy from settings (app-scoped).

    Services receive this object instead of reading Settings, so tests
    construct their own policy.
    """
    from src.domain.value_objects import AuthPolicy

    settings = get_settings()
    return AuthPolicy(
        access_token_minutes=settings.access_token_expire_minutes,
        refresh_token_days=settings.refresh_token_expire_days,
        lockout_max_attempts=settings.lockout_max_attempts,
        lockout_minutes=settings.lockout_minutes,
        otp_expiry_minutes=settings.otp_expiry_minutes,
        otp_max_attempts=settings.otp_max_attempts,
        otp_max_resends=settings.otp_max_resends,
        otp_window_minutes=settings.otp_window_minutes,
        totp_valid_window=settings.totp_valid_window,
        recovery_code_count=settings.recovery_code_count,
        password_reset_expiry_minutes=settings.password_reset_expiry_minutes,
        password_reset_max_requests=settings.password_reset_max_requests,
        password_reset_window_minutes=settings.password_reset_window_minutes,
        email_verification_expiry_hours=settings.email_verification_expiry_hours,
        email_verification_max_sends=settings.email_verification_max_sends,
        email_verification_window_minutes=settings.email_verification_window_minutes,
        require_verified_email=settings.require_verified_email,
        totp_issuer=settings.app_name,
        frontend_url=settings.frontend_url,
    )


# ============================================================================
# Notifications (Application-Scoped)
# ============================================================================


@lru_cache()
def get_notifier() -> "NotifierProtocol":
    """Get notifier singleton (app-scoped).

    Container owns factory logic - decides which adapter based on ENVIRONMENT:
        - development/testing/ci: StubEmailService (logs, keeps sent list)
        - production: SESEmailService (AWS SES)

    Returns:
        Notifier implementing NotifierProtocol.
    """
    settings = get_settings()

    if settings.is_production:
        import boto3

        from src.infrastructure.email import SESEmailService

        return SESEmailService(
            client=boto3.client("ses", region_name=settings.aws_region),
            from_email=settings.ses_from_email,
            from_name=settings.ses_from_name,
            logger=get_logger(),
        )

    from src.infrastructure.email import StubEmailService

    return StubEmailService(logger=get_logger())


# ============================================================================
# Logging (Application-Scoped)
# ============================================================================


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    Adapter selection is centralized here (composition root):
    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON lines)

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from src.infrastructure.logging.console_adapter import ConsoleAdapter

    settings = get_settings()
    return ConsoleAdapter(
        use_json=not settings.is_development,
        level=settings.log_level,
        service=settings.app_name,
    )
