"""Unit tests for RegisterIdentityHandler."""

from unittest.mock import AsyncMock

import pytest

from src.application.commands.auth_commands import RegisterIdentity
from src.application.commands.handlers.register_identity_handler import (
    RegisterIdentityHandler,
)
from src.core.enums import ErrorCode
from src.core.errors import ConflictError, DomainError
from src.core.result import Failure
from src.domain.enums import AuditAction, NotificationTemplate, UserRole
from src.domain.errors import AuditError


@pytest.fixture
def handler(store, password_service, token_issuer, email_verification,
            audit_recorder, logger):
    return RegisterIdentityHandler(
        identity_repo=store.identities,
        password_service=password_service,
        token_issuer=token_issuer,
        email_verification=email_verification,
        audit=audit_recorder,
        logger=logger,
    )


def _command(email="bob@example.com", username="bob"):
    return RegisterIdentity(
        email=email,
        username=username,
        password="Secr3t!Pass",
        display_name="Bob",
        ip_address="10.0.0.2",
    )


@pytest.mark.unit
class TestRegisterIdentity:
    """Test registration."""

    async def test_success(self, handler, store, notifier, password_service):
        # Act
        result = await handler.handle(_command())

        # Assert
        identity = result.value.identity
        assert identity.role == UserRole.USER
        assert identity.is_email_verified is False
        credential = await store.identities.get_credential(identity.id)
        assert credential.password_hash != "Secr3t!Pass"
        assert await password_service.verify_password(
            "Secr3t!Pass", credential.password_hash
        )
        assert len(store.sessions.for_identity(identity.id)) == 1
        assert store.audit.actions() == [AuditAction.USER_REGISTERED]
        to, template, context = notifier.sent[-1]
        assert to == "bob@example.com"
        assert template == NotificationTemplate.VERIFY_EMAIL
        assert "/verify-email?token=" in context["verification_url"]

    async def test_email_conflict_reported_first(self, handler, alice):
        result = await handler.handle(
            _command(email="alice@example.com", username="alice")
        )

        assert isinstance(result, Failure)
        assert isinstance(result.error, ConflictError)
        assert result.error.code == ErrorCode.EMAIL_ALREADY_EXISTS
        assert result.error.conflicting_field == "email"

    async def test_username_conflict(self, handler, alice, store):
        result = await handler.handle(_command(username="alice"))

        assert result.error.code == ErrorCode.USERNAME_ALREADY_EXISTS
        assert store.audit.events == []

    async def test_audit_failure_is_returned(self, handler, store):
        store.audit.fail = True

        result = await handler.handle(_command())

        assert isinstance(result, Failure)
        assert isinstance(result.error, AuditError)

    async def test_verification_email_failure_does_not_fail_registration(
        self, store, password_service, token_issuer, audit_recorder, logger
    ):
        # Arrange
        email_verification = AsyncMock()
        email_verification.send.return_value = Failure(
            error=DomainError(code=ErrorCode.NOTIFICATION_FAILED, message="down")
        )
        handler = RegisterIdentityHandler(
            identity_repo=store.identities,
            password_service=password_service,
            token_issuer=token_issuer,
            email_verification=email_verification,
            audit=audit_recorder,
            logger=logger,
        )

        # Act
        result = await handler.handle(_command())

        # Assert
        assert result.value.identity.email == "bob@example.com"
        logger.warning.assert_called_once()
