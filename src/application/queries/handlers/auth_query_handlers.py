"""Authentication query handlers."""

from src.application.dtos import LockoutInfo, ResetTokenStatus, TwoFactorStatus
from src.application.queries.auth_queries import (
    GetCurrentIdentity,
    GetLockoutInfo,
    GetTwoFactorStatus,
    ListAuditEvents,
    ValidateResetToken,
)
from src.application.services.account_lockout_service import AccountLockoutService
from src.application.services.password_reset_service import PasswordResetService
from src.application.services.totp_service import TotpService
from src.core.enums import ErrorCode
from src.core.errors import DomainError, NotFoundError
from src.core.result import Failure, Result, Success
from src.domain.entities import AuditEvent, Identity
from src.domain.protocols import AuditProtocol, IdentityRepository


class GetCurrentIdentityHandler:
    """Handler for GetCurrentIdentity query."""

    def __init__(self, *, identity_repo: IdentityRepository) -> None:
        self._identities = identity_repo

    async def handle(self, query: GetCurrentIdentity) -> Result[Identity, DomainError]:
        """Load the identity behind a valid access token.

        Returns:
            Success(Identity) or Failure(NotFoundError) when it was deleted.
        """
        identity = await self._identities.find_by_id(query.identity_id)
        if identity is None:
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.IDENTITY_NOT_FOUND,
                    message="Identity not found",
                    resource_type="identity",
                    resource_id=str(query.identity_id),
                )
            )
        return Success(value=identity)


class GetTwoFactorStatusHandler:
    """Handler for GetTwoFactorStatus query."""

    def __init__(self, *, totp_service: TotpService) -> None:
        self._totp = totp_service

    async def handle(self, query: GetTwoFactorStatus) -> Result[TwoFactorStatus, DomainError]:
        return Success(value=await self._totp.status(query.identity_id))


class ValidateResetTokenHandler:
    """Handler for ValidateResetToken query."""

    def __init__(self, *, password_reset: PasswordResetService) -> None:
        self._password_reset = password_reset

    async def handle(self, query: ValidateResetToken) -> Result[ResetTokenStatus, DomainError]:
        return Success(value=await self._password_reset.validate(query.token))


class ListAuditEventsHandler:
    """Handler for ListAuditEvents query."""

    def __init__(self, *, audit: AuditProtocol) -> None:
        self._audit = audit

    async def handle(self, query: ListAuditEvents) -> Result[list[AuditEvent], DomainError]:
        events = await self._audit.list_for_identity(query.identity_id, limit=query.limit)
        if isinstance(events, Failure):
            return events
        return Success(value=events.value)


class GetLockoutInfoHandler:
    """Handler for GetLockoutInfo query."""

    def __init__(self, *, lockout: AccountLockoutService) -> None:
        self._lockout = lockout

    async def handle(self, query: GetLockoutInfo) -> Result[LockoutInfo, DomainError]:
        return await self._lockout.get_lockout_info(query.identifier)
