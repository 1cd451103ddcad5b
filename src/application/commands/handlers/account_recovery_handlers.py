"""Password reset and email verification handlers.

Thin wrappers around PasswordResetService and EmailVerificationService that
add the audit trail. Request-style handlers succeed identically for unknown
emails.
"""

from src.application.commands.account_recovery_commands import (
    ConfirmPasswordReset,
    RequestPasswordReset,
    ResendVerificationEmail,
    VerifyEmail,
)
from src.application.services.audit_recorder import AuditRecorder
from src.application.services.email_verification_service import (
    EmailVerificationService,
)
from src.application.services.password_reset_service import PasswordResetService
from src.core.errors import DomainError
from src.core.result import Failure, Result, Success
from src.domain.enums import AuditAction


class RequestPasswordResetHandler:
    """Handler for RequestPasswordReset command."""

    def __init__(
        self, *, password_reset: PasswordResetService, audit: AuditRecorder
    ) -> None:
        self._password_reset = password_reset
        self._audit = audit

    async def handle(self, cmd: RequestPasswordReset) -> Result[None, DomainError]:
        requested = await self._password_reset.request(cmd.email)
        if isinstance(requested, Failure):
            return requested

        identity = requested.value
        if identity is not None:
            audited = await self._audit.record(
                AuditAction.PASSWORD_RESET_REQUESTED,
                success=True,
                identity_id=identity.id,
                ip_address=cmd.ip_address,
                user_agent=cmd.user_agent,
            )
            if isinstance(audited, Failure):
                return audited
        return Success(value=None)


class ConfirmPasswordResetHandler:
    """Handler for ConfirmPasswordReset command."""

    def __init__(
        self, *, password_reset: PasswordResetService, audit: AuditRecorder
    ) -> None:
        self._password_reset = password_reset
        self._audit = audit

    async def handle(self, cmd: ConfirmPasswordReset) -> Result[None, DomainError]:
        confirmed = await self._password_reset.confirm(cmd.token, cmd.new_password)
        if isinstance(confirmed, Failure):
            return confirmed

        audited = await self._audit.record(
            AuditAction.PASSWORD_RESET_COMPLETED,
            success=True,
            identity_id=confirmed.value.id,
            ip_address=cmd.ip_address,
            user_agent=cmd.user_agent,
        )
        if isinstance(audited, Failure):
            return audited
        return Success(value=None)


class VerifyEmailHandler:
    """Handler for VerifyEmail command."""

    def __init__(
        self, *, email_verification: EmailVerificationService, audit: AuditRecorder
    ) -> None:
        self._email_verification = email_verification
        self._audit = audit

    async def handle(self, cmd: VerifyEmail) -> Result[None, DomainError]:
        verified = await self._email_verification.verify(cmd.token)
        if isinstance(verified, Failure):
            return verified

        audited = await self._audit.record(
            AuditAction.EMAIL_VERIFIED,
            success=True,
            identity_id=verified.value.id,
            ip_address=cmd.ip_address,
            user_agent=cmd.user_agent,
        )
        if isinstance(audited, Failure):
            return audited
        return Success(value=None)


class ResendVerificationEmailHandler:
    """Handler for ResendVerificationEmail command."""

    def __init__(self, *, email_verification: EmailVerificationService) -> None:
        self._email_verification = email_verification

    async def handle(self, cmd: ResendVerificationEmail) -> Result[None, DomainError]:
        resent = await self._email_verification.resend(cmd.email)
        if isinstance(resent, Failure):
            return resent
        return Success(value=None)
