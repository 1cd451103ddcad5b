"""Password reset and email verification handler factories (request-scoped)."""

from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.container.infrastructure import get_db_session
from src.core.container.services import (
    build_audit_recorder,
    build_email_verification_service,
    build_password_reset_service,
)

if TYPE_CHECKING:
    from src.application.commands.handlers.account_recovery_handlers import (
        ConfirmPasswordResetHandler,
        RequestPasswordResetHandler,
        ResendVerificationEmailHandler,
        VerifyEmailHandler,
    )
    from src.application.queries.handlers.auth_query_handlers import (
        ValidateResetTokenHandler,
    )


async def get_request_password_reset_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "RequestPasswordResetHandler":
    from src.application.commands.handlers.account_recovery_handlers import (
        RequestPasswordResetHandler,
    )

    return RequestPasswordResetHandler(
        password_reset=build_password_reset_service(session),
        audit=build_audit_recorder(session),
    )


async def get_validate_reset_token_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "ValidateResetTokenHandler":
    from src.application.queries.handlers.auth_query_handlers import (
        ValidateResetTokenHandler,
    )

    return ValidateResetTokenHandler(
        password_reset=build_password_reset_service(session)
    )


async def get_confirm_password_reset_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "ConfirmPasswordResetHandler":
    from src.application.commands.handlers.account_recovery_handlers import (
        ConfirmPasswordResetHandler,
    )

    return ConfirmPasswordResetHandler(
        password_reset=build_password_reset_service(session),
        audit=build_audit_recorder(session),
    )


async def get_verify_email_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "VerifyEmailHandler":
    from src.application.commands.handlers.account_recovery_handlers import (
        VerifyEmailHandler,
    )

    return VerifyEmailHandler(
        email_verification=build_email_verification_service(session),
        audit=build_audit_recorder(session),
    )


async def get_resend_verification_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "ResendVerificationEmailHandler":
    from src.application.commands.handlers.account_recovery_handlers import (
        ResendVerificationEmailHandler,
    )

    return ResendVerificationEmailHandler(
        email_verification=build_email_verification_service(session)
    )
