"""Authentication handler dependency factories.

Request-scoped handler instances for authentication operations:
- Registration, login, logout
- Token refresh
- Current identity and audit trail queries
"""

from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.container.infrastructure import (
    get_auth_policy,
    get_db_session,
    get_logger,
    get_password_service,
    get_token_service,
)
from src.core.container.services import (
    build_audit_recorder,
    build_email_verification_service,
    build_otp_service,
    build_token_issuer,
    build_totp_service,
    get_lockout_service,
)

if TYPE_CHECKING:
    from src.application.commands.handlers.login_handler import LoginHandler
    from src.application.commands.handlers.logout_handler import LogoutHandler
    from src.application.commands.handlers.refresh_tokens_handler import (
        RefreshTokensHandler,
    )
    from src.application.commands.handlers.register_identity_handler import (
        RegisterIdentityHandler,
    )
    from src.application.queries.handlers.auth_query_handlers import (
        GetCurrentIdentityHandler,
        ListAuditEventsHandler,
    )


# ============================================================================
# Authentication Handler Factories
# ============================================================================


async def get_register_identity_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "RegisterIdentityHandler":
    """Get RegisterIdentity command handler (request-scoped).

    Creates new handler instance per request with all required dependencies:
    - IdentityRepository (request-scoped, uses session)
    - TokenIssuer, EmailVerificationService, AuditRecorder (request-scoped)
    - Argon2PasswordService, logger (app-scoped singletons)

    Usage:
        @router.post("/users")
        async def create_user(
            handler: RegisterIdentityHandler = Depends(get_register_identity_handler)
        ):
            result = await handler.handle(command)
    """
    from src.application.commands.handlers.register_identity_handler import (
        RegisterIdentityHandler,
    )
    from src.infrastructure.persistence.repositories import IdentityRepository

    return RegisterIdentityHandler(
        identity_repo=IdentityRepository(session=session),
        password_service=get_password_service(),
        token_issuer=build_token_issuer(session),
        email_verification=build_email_verification_service(session),
        audit=build_audit_recorder(session),
        logger=get_logger(),
    )


async def get_login_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "LoginHandler":
    """Get LoginIdentity command handler (request-scoped)."""
    from src.application.commands.handlers.login_handler import LoginHandler
    from src.infrastructure.persistence.repositories import (
        IdentityRepository,
        LoginAttemptRepository,
        SecondFactorRepository,
    )

    return LoginHandler(
        identity_repo=IdentityRepository(session=session),
        second_factor_repo=SecondFactorRepository(session=session),
        login_attempt_repo=LoginAttemptRepository(session=session),
        password_service=get_password_service(),
        lockout=get_lockout_service(),
        otp_service=build_otp_service(session),
        totp_service=build_totp_service(session),
        token_issuer=build_token_issuer(session),
        audit=build_audit_recorder(session),
        logger=get_logger(),
        policy=get_auth_policy(),
    )


async def get_refresh_tokens_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "RefreshTokensHandler":
    """Get RefreshTokens command handler (request-scoped)."""
    from src.application.commands.handlers.refresh_tokens_handler import (
        RefreshTokensHandler,
    )
    from src.infrastructure.persistence.repositories import (
        IdentityRepository,
        SessionRepository,
    )

    return RefreshTokensHandler(
        token_service=get_token_service(),
        session_repo=SessionRepository(session=session),
        identity_repo=IdentityRepository(session=session),
        token_issuer=build_token_issuer(session),
        audit=build_audit_recorder(session),
        logger=get_logger(),
    )


async def get_logout_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "LogoutHandler":
    """Get LogoutIdentity command handler (request-scoped)."""
    from src.application.commands.handlers.logout_handler import LogoutHandler
    from src.infrastructure.persistence.repositories import SessionRepository

    return LogoutHandler(
        session_repo=SessionRepository(session=session),
        audit=build_audit_recorder(session),
        logger=get_logger(),
    )


async def get_current_identity_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "GetCurrentIdentityHandler":
    """Get GetCurrentIdentity query handler (request-scoped)."""
    from src.application.queries.handlers.auth_query_handlers import (
        GetCurrentIdentityHandler,
    )
    from src.infrastructure.persistence.repositories import IdentityRepository

    return GetCurrentIdentityHandler(identity_repo=IdentityRepository(session=session))


async def get_list_audit_events_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "ListAuditEventsHandler":
    """Get ListAuditEvents query handler (request-scoped)."""
    from src.application.queries.handlers.auth_query_handlers import (
        ListAuditEventsHandler,
    )
    from src.infrastructure.audit import PostgresAuditAdapter

    return ListAuditEventsHandler(audit=PostgresAuditAdapter(session=session))
