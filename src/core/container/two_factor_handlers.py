"""Second-factor handler dependency factories (request-scoped)."""

from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.container.infrastructure import (
    get_db_session,
    get_logger,
    get_password_service,
)
from src.core.container.services import (
    build_audit_recorder,
    build_otp_service,
    build_totp_service,
)

if TYPE_CHECKING:
    from src.application.commands.handlers.two_factor_handlers import (
        ConfirmTotpSetupHandler,
        DisableTwoFactorHandler,
        EnableEmailOtpHandler,
        InitiateTotpSetupHandler,
        ResendOtpHandler,
    )
    from src.application.queries.handlers.auth_query_handlers import (
        GetTwoFactorStatusHandler,
    )


async def get_initiate_totp_setup_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "InitiateTotpSetupHandler":
    from src.application.commands.handlers.two_factor_handlers import (
        InitiateTotpSetupHandler,
    )

    return InitiateTotpSetupHandler(
        totp_service=build_totp_service(session),
        audit=build_audit_recorder(session),
    )


async def get_confirm_totp_setup_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "ConfirmTotpSetupHandler":
    from src.application.commands.handlers.two_factor_handlers import (
        ConfirmTotpSetupHandler,
    )

    return ConfirmTotpSetupHandler(
        totp_service=build_totp_service(session),
        audit=build_audit_recorder(session),
    )


async def get_enable_email_otp_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "EnableEmailOtpHandler":
    from src.application.commands.handlers.two_factor_handlers import (
        EnableEmailOtpHandler,
    )

    return EnableEmailOtpHandler(
        totp_service=build_totp_service(session),
        audit=build_audit_recorder(session),
    )


async def get_disable_two_factor_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "DisableTwoFactorHandler":
    from src.application.commands.handlers.two_factor_handlers import (
        DisableTwoFactorHandler,
    )
    from src.infrastructure.persistence.repositories import IdentityRepository

    return DisableTwoFactorHandler(
        identity_repo=IdentityRepository(session=session),
        password_service=get_password_service(),
        totp_service=build_totp_service(session),
        otp_service=build_otp_service(session),
        audit=build_audit_recorder(session),
        logger=get_logger(),
    )


async def get_resend_otp_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "ResendOtpHandler":
    from src.application.commands.handlers.two_factor_handlers import ResendOtpHandler
    from src.infrastructure.persistence.repositories import IdentityRepository

    return ResendOtpHandler(
        identity_repo=IdentityRepository(session=session),
        otp_service=build_otp_service(session),
        audit=build_audit_recorder(session),
        logger=get_logger(),
    )


async def get_two_factor_status_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "GetTwoFactorStatusHandler":
    from src.application.queries.handlers.auth_query_handlers import (
        GetTwoFactorStatusHandler,
    )

    return GetTwoFactorStatusHandler(totp_service=build_totp_service(session))
