"""Second-factor management handlers.

Handlers:
    InitiateTotpSetupHandler  -> 2fa_setup_initiated
    ConfirmTotpSetupHandler   -> 2fa_enabled (totp), returns recovery codes
    EnableEmailOtpHandler     -> 2fa_enabled (email)
    DisableTwoFactorHandler   -> 2fa_disabled (password required)
    ResendOtpHandler          -> 2fa_otp_resent (silent for unknown identifiers)
"""

from src.application.commands.two_factor_commands import (
    ConfirmTotpSetup,
    DisableTwoFactor,
    EnableEmailOtp,
    InitiateTotpSetup,
    ResendOtp,
)
from src.application.dtos import TotpProvisioning
from src.application.services.audit_recorder import AuditRecorder
from src.application.services.otp_service import OtpService
from src.application.services.totp_service import TotpService
from src.core.errors import DomainError
from src.core.result import Failure, Result, Success
from src.domain.enums import AuditAction, SecondFactorType
from src.domain.errors import InvalidCredentials, InvalidTwoFactorCode
from src.domain.protocols import (
    IdentityRepository,
    LoggerProtocol,
    PasswordHashingProtocol,
)


def audit_method(factor_type: SecondFactorType) -> str:
    """Audit method label of a factor type."""
    return "totp" if factor_type == SecondFactorType.TOTP else "email"


class InitiateTotpSetupHandler:
    """Handler for InitiateTotpSetup command."""

    def __init__(self, *, totp_service: TotpService, audit: AuditRecorder) -> None:
        self._totp = totp_service
        self._audit = audit

    async def handle(self, cmd: InitiateTotpSetup) -> Result[TotpProvisioning, DomainError]:
        provisioned = await self._totp.provision(cmd.identity_id, cmd.label)
        if isinstance(provisioned, Failure):
            return provisioned

        audited = await self._audit.record(
            AuditAction.TWO_FACTOR_SETUP_INITIATED,
            success=True,
            identity_id=cmd.identity_id,
            method="totp",
            ip_address=cmd.ip_address,
            user_agent=cmd.user_agent,
        )
        if isinstance(audited, Failure):
            return audited
        return provisioned


class ConfirmTotpSetupHandler:
    """Handler for ConfirmTotpSetup command.

    Returns the plaintext recovery codes; they are never shown again.
    """

    def __init__(self, *, totp_service: TotpService, audit: AuditRecorder) -> None:
        self._totp = totp_service
        self._audit = audit

    async def handle(self, cmd: ConfirmTotpSetup) -> Result[list[str], DomainError]:
        confirmed = await self._totp.confirm_setup(cmd.identity_id, cmd.code)
        if isinstance(confirmed, Failure):
            return confirmed

        audited = await self._audit.record(
            AuditAction.TWO_FACTOR_ENABLED,
            success=True,
            identity_id=cmd.identity_id,
            method="totp",
            ip_address=cmd.ip_address,
            user_agent=cmd.user_agent,
        )
        if isinstance(audited, Failure):
            return audited
        return confirmed


class EnableEmailOtpHandler:
    """Handler for EnableEmailOtp command."""

    def __init__(self, *, totp_service: TotpService, audit: AuditRecorder) -> None:
        self._totp = totp_service
        self._audit = audit

    async def handle(self, cmd: EnableEmailOtp) -> Result[None, DomainError]:
        await self._totp.enable_email(cmd.identity_id)
        audited = await self._audit.record(
            AuditAction.TWO_FACTOR_ENABLED,
            success=True,
            identity_id=cmd.identity_id,
            method="email",
            ip_address=cmd.ip_address,
            user_agent=cmd.user_agent,
        )
        if isinstance(audited, Failure):
            return audited
        return Success(value=None)


class DisableTwoFactorHandler:
    """Handler for DisableTwoFactor command.

    Flow:
    1. Verify the current password (InvalidCredentials otherwise)
    2. When a code is given, check it against the factor being disabled
       (TOTP: authenticator code; EMAIL: the live emailed code)
    3. Disable the factor (secret kept)
    4. Record audit event
    """

    def __init__(
        self,
        *,
        identity_repo: IdentityRepository,
        password_service: PasswordHashingProtocol,
        totp_service: TotpService,
        otp_service: OtpService,
        audit: AuditRecorder,
        logger: LoggerProtocol,
    ) -> None:
        self._identities = identity_repo
        self._password_service = password_service
        self._totp = totp_service
        self._otp = otp_service
        self._audit = audit
        self._logger = logger

    async def handle(self, cmd: DisableTwoFactor) -> Result[None, DomainError]:
        credential = await self._identities.get_credential(cmd.identity_id)
        if credential is None or not await self._password_service.verify_password(
            cmd.password, credential.password_hash
        ):
            self._logger.warning(
                "Second factor disable refused, wrong password",
                identity_id=str(cmd.identity_id),
            )
            return Failure(error=InvalidCredentials())

        if cmd.code:
            code = cmd.code.strip()
            if cmd.method == SecondFactorType.TOTP:
                if not await self._totp.verify(cmd.identity_id, code):
                    return Failure(error=InvalidTwoFactorCode())
            else:
                verified = await self._otp.verify(cmd.identity_id, code)
                if isinstance(verified, Failure):
                    return verified

        await self._totp.disable(cmd.identity_id, cmd.method)

        audited = await self._audit.record(
            AuditAction.TWO_FACTOR_DISABLED,
            success=True,
            identity_id=cmd.identity_id,
            method=audit_method(cmd.method),
            ip_address=cmd.ip_address,
            user_agent=cmd.user_agent,
        )
        if isinstance(audited, Failure):
            return audited
        return Success(value=None)


class ResendOtpHandler:
    """Handler for ResendOtp command.

    Unknown identifiers succeed without sending anything, so the response
    does not reveal whether an account exists.
    """

    def __init__(
        self,
        *,
        identity_repo: IdentityRepository,
        otp_service: OtpService,
        audit: AuditRecorder,
        logger: LoggerProtocol,
    ) -> None:
        self._identities = identity_repo
        self._otp = otp_service
        self._audit = audit
        self._logger = logger

    async def handle(self, cmd: ResendOtp) -> Result[None, DomainError]:
        identity = await self._identities.find_by_email_or_username(cmd.identifier)
        if identity is None:
            self._logger.info("OTP resend requested for unknown identifier")
            return Success(value=None)

        issued = await self._otp.issue(identity.id, identity.email)
        if isinstance(issued, Failure):
            return issued

        audited = await self._audit.record(
            AuditAction.TWO_FACTOR_OTP_RESENT,
            success=True,
            identity_id=identity.id,
            method="email",
            ip_address=cmd.ip_address,
            user_agent=cmd.user_agent,
        )
        if isinstance(audited, Failure):
            return audited
        return Success(value=None)
