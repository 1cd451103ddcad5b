"""Lockout administration and housekeeping handlers."""

from datetime import UTC, datetime

from src.application.commands.lockout_commands import PurgeExpiredRecords, UnlockAccount
from src.application.services.account_lockout_service import AccountLockoutService
from src.application.services.audit_recorder import AuditRecorder
from src.application.services.otp_service import OtpService
from src.core.errors import DomainError
from src.core.result import Failure, Result, Success
from src.domain.enums import AuditAction
from src.domain.protocols import ActionTokenRepository, LoggerProtocol


class UnlockAccountHandler:
    """Handler for UnlockAccount command."""

    def __init__(self, *, lockout: AccountLockoutService, audit: AuditRecorder) -> None:
        self._lockout = lockout
        self._audit = audit

    async def handle(self, cmd: UnlockAccount) -> Result[None, DomainError]:
        unlocked = await self._lockout.unlock_account(cmd.identifier)
        if isinstance(unlocked, Failure):
            return unlocked

        return await self._audit.record(
            AuditAction.ACCOUNT_UNLOCKED,
            success=True,
            identity_id=cmd.performed_by,
            ip_address=cmd.ip_address,
            user_agent=cmd.user_agent,
            metadata={"identifier": cmd.identifier},
        )


class PurgeExpiredRecordsHandler:
    """Handler for PurgeExpiredRecords command.

    Expired rows are already ignored by every lookup; purging only keeps the
    tables small.
    """

    def __init__(
        self,
        *,
        otp_service: OtpService,
        action_token_repo: ActionTokenRepository,
        logger: LoggerProtocol,
    ) -> None:
        self._otp = otp_service
        self._action_tokens = action_token_repo
        self._logger = logger

    async def handle(self, cmd: PurgeExpiredRecords) -> Result[dict[str, int], DomainError]:
        """Purge expired rows.

        Returns:
            Success with the number of rows removed per table.
        """
        challenges = await self._otp.purge_expired()
        action_tokens = await self._action_tokens.delete_expired(datetime.now(UTC))
        self._logger.info("Expired action tokens purged", removed=action_tokens)
        return Success(value={"otp_challenges": challenges, "action_tokens": action_tokens})
