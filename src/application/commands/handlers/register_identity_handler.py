"""Registration handler.

Flow:
1. Check email uniqueness (reported before username)
2. Check username uniqueness
3. Hash password (Argon2id)
4. Create identity + credential atomically (store unique violations
   surface as ConflictError, covering concurrent registrations)
5. Issue tokens and open a session
6. Record audit event
7. Send verification email (failures logged, never returned)
8. Return Success(AuthenticatedIdentity)

Architecture:
- Repositories and the password hasher are injected via domain protocols
- Tokens come from TokenIssuer, whose digests use the infrastructure
  OpaqueTokenService (a pure helper, no I/O)
"""

from datetime import UTC, datetime

from uuid_extensions import uuid7

from src.application.commands.auth_commands import RegisterIdentity
from src.application.dtos import AuthenticatedIdentity
from src.application.services.audit_recorder import AuditRecorder
from src.application.services.email_verification_service import (
    EmailVerificationService,
)
from src.application.services.token_issuer import TokenIssuer
from src.core.enums import ErrorCode
from src.core.errors import ConflictError, DomainError
from src.core.result import Failure, Result, Success
from src.domain.entities import Credential, Identity
from src.domain.enums import AuditAction, UserRole
from src.domain.protocols import (
    IdentityRepository,
    LoggerProtocol,
    PasswordHashingProtocol,
)


class RegisterIdentityHandler:
    """Handler for RegisterIdentity command."""

    def __init__(
        self,
        *,
        identity_repo: IdentityRepository,
        password_service: PasswordHashingProtocol,
        token_issuer: TokenIssuer,
        email_verification: EmailVerificationService,
        audit: AuditRecorder,
        logger: LoggerProtocol,
    ) -> None:
        self._identities = identity_repo
        self._password_service = password_service
        self._token_issuer = token_issuer
        self._email_verification = email_verification
        self._audit = audit
        self._logger = logger

    async def handle(
        self, cmd: RegisterIdentity
    ) -> Result[AuthenticatedIdentity, DomainError]:
        """Handle registration command.

        Args:
            cmd: RegisterIdentity command (validated by Annotated types).

        Returns:
            Success(AuthenticatedIdentity) on success.
            Failure(ConflictError) when the email or username is taken.
        """
        # Step 1-2: Uniqueness
        if await self._identities.find_by_email(cmd.email) is not None:
            return Failure(
                error=ConflictError(
                    code=ErrorCode.EMAIL_ALREADY_EXISTS,
                    message="Email already registered",
                    resource_type="identity",
                    conflicting_field="email",
                )
            )
        if await self._identities.find_by_username(cmd.username) is not None:
            return Failure(
                error=ConflictError(
                    code=ErrorCode.USERNAME_ALREADY_EXISTS,
                    message="Username already taken",
                    resource_type="identity",
                    conflicting_field="username",
                )
            )

        # Step 3: Hash
        password_hash = await self._password_service.hash_password(cmd.password)

        # Step 4: Persist
        identity = Identity(
            id=uuid7(),
            email=cmd.email,
            username=cmd.username,
            role=UserRole.USER,
            created_at=datetime.now(UTC),
            display_name=cmd.display_name,
        )
        created = await self._identities.create_with_credential(
            identity,
            Credential(identity_id=identity.id, password_hash=password_hash),
        )
        if isinstance(created, Failure):
            self._logger.info(
                "Registration lost a uniqueness race",
                conflicting_field=created.error.conflicting_field,
            )
            return created

        # Step 5: Tokens
        tokens = await self._token_issuer.issue(identity)

        # Step 6: Audit
        audited = await self._audit.record(
            AuditAction.USER_REGISTERED,
            success=True,
            identity_id=identity.id,
            method="password",
            ip_address=cmd.ip_address,
            user_agent=cmd.user_agent,
        )
        if isinstance(audited, Failure):
            return audited

        # Step 7: Verification email
        sent = await self._email_verification.send(identity)
        if isinstance(sent, Failure):
            self._logger.warning(
                "Verification email not sent after registration",
                identity_id=str(identity.id),
                error_code=sent.error.code.value,
            )

        self._logger.info("Identity registered", identity_id=str(identity.id))
        return Success(value=AuthenticatedIdentity(identity=identity, tokens=tokens))
