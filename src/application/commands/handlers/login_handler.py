"""Login handler (password, then optional second factor).

Flow:
0. Refuse locked identifiers (emails keyed case-insensitively)
1. Look up identity by email or username, then its credential
2. Verify the password
   - unknown identity or wrong password: failed LoginAttempt, lockout
     failure, InvalidCredentials (same answer for both)
   - the failure that reaches the threshold is audited as account_locked
3. Load enabled second factors; none -> step 6
4. No second-factor code supplied:
   - EMAIL enabled: email a code, return TwoFactorChallenge("email")
   - otherwise: return TwoFactorChallenge("totp")
5. Code supplied, tried in order (each attempt audited):
   TOTP -> recovery code (TOTP only) -> emailed code (EMAIL only)
   All fail (an exhausted emailed-code quota included): lockout failure,
   InvalidTwoFactorCode
6. Stamp last login, successful LoginAttempt, clear lockout counters,
   issue tokens + session, return AuthenticatedIdentity

Architecture:
- Imports domain entities, protocols and errors plus sibling application
  services; token digests reach it through TokenIssuer, which uses the
  infrastructure OpaqueTokenService
- Collaborating services are injected
"""

from datetime import UTC, datetime

from uuid_extensions import uuid7

from src.application.commands.auth_commands import LoginIdentity
from src.application.dtos import AuthenticatedIdentity, TwoFactorChallenge
from src.application.services.account_lockout_service import (
    AccountLockoutService,
    lockout_subject,
)
from src.application.services.audit_recorder import AuditRecorder
from src.application.services.otp_service import OtpService
from src.application.services.token_issuer import TokenIssuer
from src.application.services.totp_service import TotpService
from src.core.errors import DomainError
from src.core.result import Failure, Result, Success
from src.domain.entities import Credential, Identity, LoginAttempt
from src.domain.enums import AuditAction, SecondFactorType
from src.domain.errors import (
    ChallengeNotFound,
    EmailNotVerified,
    InvalidCode,
    InvalidCredentials,
    InvalidTwoFactorCode,
    TooManyAttempts,
)
from src.domain.protocols import (
    IdentityRepository,
    LoggerProtocol,
    LoginAttemptRepository,
    PasswordHashingProtocol,
    SecondFactorRepository,
)
from src.domain.value_objects import AuthPolicy

# Emailed-code outcomes that count as a failed method rather than an outage.
_OTP_REJECTIONS = (TooManyAttempts, ChallengeNotFound, InvalidCode)

LoginOutcome = AuthenticatedIdentity | TwoFactorChallenge


class LoginHandler:
    """Handler for LoginIdentity command."""

    def __init__(
        self,
        *,
        identity_repo: IdentityRepository,
        second_factor_repo: SecondFactorRepository,
        login_attempt_repo: LoginAttemptRepository,
        password_service: PasswordHashingProtocol,
        lockout: AccountLockoutService,
        otp_service: OtpService,
        totp_service: TotpService,
        token_issuer: TokenIssuer,
        audit: AuditRecorder,
        logger: LoggerProtocol,
        policy: AuthPolicy,
    ) -> None:
        self._identities = identity_repo
        self._factors = second_factor_repo
        self._attempts = login_attempt_repo
        self._password_service = password_service
        self._lockout = lockout
        self._otp = otp_service
        self._totp = totp_service
        self._token_issuer = token_issuer
        self._audit = audit
        self._logger = logger
        self._policy = policy

    async def handle(self, cmd: LoginIdentity) -> Result[LoginOutcome, DomainError]:
        """Handle login command.

        Args:
            cmd: LoginIdentity command.

        Returns:
            Success(AuthenticatedIdentity): fully authenticated, tokens issued.
            Success(TwoFactorChallenge): password accepted, second factor needed.
            Failure(AccountLocked | InvalidCredentials | EmailNotVerified |
                InvalidTwoFactorCode | RateLimited | DomainError).
        """
        # Step 0: Lockout
        locked = await self._lockout.check_lockout(cmd.identifier)
        if isinstance(locked, Failure):
            return locked

        # Step 1: Identity and credential
        identity = await self._identities.find_by_email_or_username(cmd.identifier)
        credential = (
            await self._identities.get_credential(identity.id) if identity else None
        )
        if identity is None or credential is None:
            return await self._reject_credentials(cmd, None)

        # Step 2: Password
        if not await self._password_service.verify_password(
            cmd.password, credential.password_hash
        ):
            return await self._reject_credentials(cmd, identity)

        if self._policy.require_verified_email and not identity.is_email_verified:
            self._logger.info("Login refused, email not verified", identity_id=str(identity.id))
            return Failure(error=EmailNotVerified())

        # Step 3: Second factors
        factors = await self._factors.find_enabled(identity.id)
        enabled = {factor.type for factor in factors}
        if not enabled:
            return await self._complete(cmd, identity, credential, method="password")

        # Step 4: Challenge
        if not cmd.two_factor_code:
            if SecondFactorType.EMAIL in enabled:
                issued = await self._otp.issue(identity.id, identity.email)
                if isinstance(issued, Failure):
                    return issued
                return Success(value=TwoFactorChallenge(method="email"))
            return Success(value=TwoFactorChallenge(method="totp"))

        # Step 5: Verification
        code = cmd.two_factor_code.strip()
        verified = await self._verify_second_factor(cmd, identity, enabled, code)
        if isinstance(verified, Failure):
            return verified
        if verified.value is not None:
            return await self._complete(cmd, identity, credential, method=verified.value)

        failed = await self._lockout.record_failure(
            cmd.identifier,
            ip_address=cmd.ip_address,
            email=identity.email,
            display_name=identity.greeting_name,
        )
        if isinstance(failed, Failure):
            return failed
        audited = await self._audit_lock(cmd, identity, failed.value)
        if isinstance(audited, Failure):
            return audited
        self._logger.warning("Second factor rejected", identity_id=str(identity.id))
        return Failure(error=InvalidTwoFactorCode())

    async def _verify_second_factor(
        self,
        cmd: LoginIdentity,
        identity: Identity,
        enabled: set[SecondFactorType],
        code: str,
    ) -> Result[str | None, DomainError]:
        """Try each applicable method.

        Returns:
            Success(method) for the method that accepted the code,
            Success(None) when none did.
        """
        if SecondFactorType.TOTP in enabled:
            totp_ok = await self._totp.verify(identity.id, code)
            audited = await self._audit_attempt(cmd, identity, "totp", totp_ok)
            if isinstance(audited, Failure):
                return audited
            if totp_ok:
                return Success(value="totp")

            recovery_ok = await self._totp.verify_recovery_code(identity.id, code)
            audited = await self._audit_attempt(cmd, identity, "recovery", recovery_ok)
            if isinstance(audited, Failure):
                return audited
            if recovery_ok:
                return Success(value="recovery")

        if SecondFactorType.EMAIL in enabled:
            otp_result = await self._otp.verify(identity.id, code)
            if isinstance(otp_result, Failure) and not isinstance(
                otp_result.error, _OTP_REJECTIONS
            ):
                return otp_result
            email_ok = isinstance(otp_result, Success)
            audited = await self._audit_attempt(cmd, identity, "email", email_ok)
            if isinstance(audited, Failure):
                return audited
            if email_ok:
                return Success(value="email")

        return Success(value=None)

    async def _audit_attempt(
        self, cmd: LoginIdentity, identity: Identity, method: str, success: bool
    ) -> Result[None, DomainError]:
        if success:
            action = (
                AuditAction.TWO_FACTOR_RECOVERY_CODE_USED
                if method == "recovery"
                else AuditAction.TWO_FACTOR_VERIFIED
            )
        else:
            action = AuditAction.TWO_FACTOR_VERIFICATION_FAILED
        return await self._audit.record(
            action,
            success=success,
            identity_id=identity.id,
            method=method,
            ip_address=cmd.ip_address,
            user_agent=cmd.user_agent,
        )

    async def _audit_lock(
        self, cmd: LoginIdentity, identity: Identity | None, attempts: int
    ) -> Result[None, DomainError]:
        if attempts != self._policy.lockout_max_attempts:
            return Success(value=None)
        return await self._audit.record(
            AuditAction.ACCOUNT_LOCKED,
            success=True,
            identity_id=identity.id if identity else None,
            ip_address=cmd.ip_address,
            user_agent=cmd.user_agent,
            metadata={
                "identifier": lockout_subject(cmd.identifier),
                "attempts": attempts,
            },
        )

    async def _reject_credentials(
        self, cmd: LoginIdentity, identity: Identity | None
    ) -> Result[LoginOutcome, DomainError]:
        await self._attempts.append(
            LoginAttempt(
                id=uuid7(),
                identifier=cmd.identifier,
                success=False,
                created_at=datetime.now(UTC),
                ip_address=cmd.ip_address,
            )
        )

        failed = await self._lockout.record_failure(
            cmd.identifier,
            ip_address=cmd.ip_address,
            email=identity.email if identity else None,
            display_name=identity.greeting_name if identity else None,
        )
        if isinstance(failed, Failure):
            return failed
        locked = await self._audit_lock(cmd, identity, failed.value)
        if isinstance(locked, Failure):
            return locked

        audited = await self._audit.record(
            AuditAction.LOGIN_FAILED,
            success=False,
            identity_id=identity.id if identity else None,
            method="password",
            ip_address=cmd.ip_address,
            user_agent=cmd.user_agent,
            metadata={"reason": "invalid_credentials"},
        )
        if isinstance(audited, Failure):
            return audited

        self._logger.info("Login rejected", attempts=failed.value)
        return Failure(error=InvalidCredentials())

    async def _complete(
        self,
        cmd: LoginIdentity,
        identity: Identity,
        credential: Credential,
        *,
        method: str,
    ) -> Result[LoginOutcome, DomainError]:
        now = datetime.now(UTC)
        credential.record_login(now)
        await self._identities.update_credential(credential)
        await self._attempts.append(
            LoginAttempt(
                id=uuid7(),
                identifier=cmd.identifier,
                success=True,
                created_at=now,
                ip_address=cmd.ip_address,
            )
        )

        reset = await self._lockout.reset_attempts(cmd.identifier, ip_address=cmd.ip_address)
        if isinstance(reset, Failure):
            return reset

        tokens = await self._token_issuer.issue(identity)

        audited = await self._audit.record(
            AuditAction.LOGIN_SUCCEEDED,
            success=True,
            identity_id=identity.id,
            method=method,
            ip_address=cmd.ip_address,
            user_agent=cmd.user_agent,
        )
        if isinstance(audited, Failure):
            return audited

        self._logger.info("Login succeeded", identity_id=str(identity.id), method=method)
        return Success(value=AuthenticatedIdentity(identity=identity, tokens=tokens))
