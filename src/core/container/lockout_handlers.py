"""Lockout administration and housekeeping factories."""

from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.container.infrastructure import get_database, get_db_session, get_logger
from src.core.container.services import (
    build_audit_recorder,
    build_otp_service,
    get_lockout_service,
)
from src.core.result import Failure

if TYPE_CHECKING:
    from src.application.commands.handlers.lockout_handlers import (
        UnlockAccountHandler,
    )
    from src.application.queries.handlers.auth_query_handlers import (
        GetLockoutInfoHandler,
    )


async def get_unlock_account_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "UnlockAccountHandler":
    from src.application.commands.handlers.lockout_handlers import (
        UnlockAccountHandler,
    )

    return UnlockAccountHandler(
        lockout=get_lockout_service(),
        audit=build_audit_recorder(session),
    )


async def get_lockout_info_handler() -> "GetLockoutInfoHandler":
    from src.application.queries.handlers.auth_query_handlers import (
        GetLockoutInfoHandler,
    )

    return GetLockoutInfoHandler(lockout=get_lockout_service())


async def purge_expired_records() -> dict[str, int]:
    """Run one housekeeping pass in its own transaction.

    Used by the periodic task started in the application lifespan.

    Returns:
        Rows removed per table.
    """
    from src.application.commands import PurgeExpiredRecords
    from src.application.commands.handlers.lockout_handlers import (
        PurgeExpiredRecordsHandler,
    )
    from src.infrastructure.persistence.repositories import ActionTokenRepository

    async with get_database().get_session() as session:
        handler = PurgeExpiredRecordsHandler(
            otp_service=build_otp_service(session),
            action_token_repo=ActionTokenRepository(session=session),
            logger=get_logger(),
        )
        result = await handler.handle(PurgeExpiredRecords())
    if isinstance(result, Failure):
        return {}
    return result.value
