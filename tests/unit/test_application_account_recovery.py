"""Unit tests for password reset and email verification.

Tests cover:
- PasswordResetService: request, rate limit, validate, confirm
- EmailVerificationService: send, verify, resend
- The handlers' audit trail
"""

from datetime import UTC, datetime, timedelta
from urllib.parse import parse_qs, urlparse

import pytest

from src.application.commands.account_recovery_commands import (
    ConfirmPasswordReset,
    RequestPasswordReset,
    ResendVerificationEmail,
    VerifyEmail,
)
from src.application.commands.handlers.account_recovery_handlers import (
    ConfirmPasswordResetHandler,
    RequestPasswordResetHandler,
    ResendVerificationEmailHandler,
    VerifyEmailHandler,
)
from src.application.services.password_reset_service import mask_email
from src.core.result import Failure, Success
from src.domain.enums import AuditAction, NotificationTemplate
from src.domain.errors import (
    EmailAlreadyVerified,
    InvalidResetToken,
    InvalidVerificationToken,
    RateLimited,
)

NEW_PASSWORD = "N3w!Password"


def _token_from(notifier, template, url_key):
    _, sent_template, context = notifier.sent[-1]
    assert sent_template == template
    return parse_qs(urlparse(context[url_key]).query)["token"][0]


@pytest.mark.unit
class TestMaskEmail:
    @pytest.mark.parametrize(
        ("email", "masked"),
        [("alice@x.com", "a***@x.com"), ("b@example.org", "b***@example.org")],
    )
    def test_masks_local_part(self, email, masked):
        assert mask_email(email) == masked


@pytest.mark.unit
class TestPasswordResetService:
    """Test the reset link lifecycle."""

    async def test_request_emails_link(self, password_reset, alice, notifier, policy):
        result = await password_reset.request("alice@example.com")

        assert result.value.id == alice.id
        _, _, context = notifier.sent[-1]
        assert context["reset_url"].startswith(
            f"{policy.frontend_url}/reset-password?token="
        )
        token = _token_from(notifier, NotificationTemplate.RESET_PASSWORD, "reset_url")
        assert len(token) == 64

    async def test_unknown_email_is_silent_but_counted(
        self, password_reset, notifier, policy
    ):
        for _ in range(policy.password_reset_max_requests):
            assert await password_reset.request("ghost@example.com") == Success(
                value=None
            )

        result = await password_reset.request("ghost@example.com")

        assert notifier.sent == []
        assert isinstance(result.error, RateLimited)

    async def test_new_request_replaces_old_link(
        self, password_reset, alice, notifier, store
    ):
        await password_reset.request("alice@example.com")
        first = _token_from(notifier, NotificationTemplate.RESET_PASSWORD, "reset_url")
        await password_reset.request("alice@example.com")

        status = await password_reset.validate(first)

        assert status.valid is False
        assert len(store.action_tokens.tokens) == 1

    async def test_validate_live_token(self, password_reset, alice, notifier):
        await password_reset.request("alice@example.com")
        token = _token_from(notifier, NotificationTemplate.RESET_PASSWORD, "reset_url")

        status = await password_reset.validate(token)

        assert status.valid is True
        assert status.masked_email == "a***@example.com"

    async def test_confirm_sets_password_and_ends_sessions(
        self, password_reset, alice, notifier, store, token_issuer,
        password_service, cache, cache_keys,
    ):
        # Arrange
        await token_issuer.issue(alice)
        await password_reset.request("alice@example.com")
        token = _token_from(notifier, NotificationTemplate.RESET_PASSWORD, "reset_url")

        # Act
        result = await password_reset.confirm(token, NEW_PASSWORD)

        # Assert
        assert result.value.id == alice.id
        credential = await store.identities.get_credential(alice.id)
        assert await password_service.verify_password(
            NEW_PASSWORD, credential.password_hash
        )
        assert store.sessions.for_identity(alice.id) == []
        assert notifier.sent[-1][1] == NotificationTemplate.PASSWORD_CHANGED
        rate = await cache.get(cache_keys.password_reset_rate("alice@example.com"))
        assert rate == Success(value=None)

    async def test_token_is_single_use(self, password_reset, alice, notifier):
        await password_reset.request("alice@example.com")
        token = _token_from(notifier, NotificationTemplate.RESET_PASSWORD, "reset_url")
        await password_reset.confirm(token, NEW_PASSWORD)

        result = await password_reset.confirm(token, "An0ther!Pass")

        assert isinstance(result, Failure)
        assert isinstance(result.error, InvalidResetToken)

    async def test_expired_token(self, password_reset, alice, notifier, store):
        await password_reset.request("alice@example.com")
        token = _token_from(notifier, NotificationTemplate.RESET_PASSWORD, "reset_url")
        for stored in store.action_tokens.tokens.values():
            stored.expires_at = datetime.now(UTC) - timedelta(seconds=1)

        result = await password_reset.confirm(token, NEW_PASSWORD)

        assert isinstance(result.error, InvalidResetToken)


@pytest.mark.unit
class TestEmailVerificationService:
    """Test verification links."""

    async def test_send_and_verify(self, email_verification, alice, notifier, store):
        # Arrange
        await email_verification.send(alice)
        token = _token_from(
            notifier, NotificationTemplate.VERIFY_EMAIL, "verification_url"
        )

        # Act
        result = await email_verification.verify(token)

        # Assert
        assert result.value.is_email_verified is True
        stored = await store.identities.find_by_id(alice.id)
        assert stored.email_verified_at is not None
        assert store.action_tokens.tokens == {}

    async def test_unknown_token(self, email_verification):
        result = await email_verification.verify("ab" * 32)

        assert isinstance(result.error, InvalidVerificationToken)

    async def test_send_rate_limit(self, email_verification, alice, policy):
        for _ in range(policy.email_verification_max_sends):
            await email_verification.send(alice)

        result = await email_verification.send(alice)

        assert isinstance(result.error, RateLimited)

    async def test_resend_unknown_email(self, email_verification, notifier):
        result = await email_verification.resend("ghost@example.com")

        assert result == Success(value=None)
        assert notifier.sent == []

    async def test_resend_already_verified(self, email_verification, alice, store):
        alice.mark_email_verified(datetime.now(UTC))
        await store.identities.update(alice)

        result = await email_verification.resend("alice@example.com")

        assert isinstance(result.error, EmailAlreadyVerified)


@pytest.mark.unit
class TestRecoveryHandlers:
    """Test the audit trail added by the handlers."""

    async def test_reset_flow_is_audited(
        self, password_reset, audit_recorder, alice, notifier, store
    ):
        request = RequestPasswordResetHandler(
            password_reset=password_reset, audit=audit_recorder
        )
        confirm = ConfirmPasswordResetHandler(
            password_reset=password_reset, audit=audit_recorder
        )

        await request.handle(RequestPasswordReset(email="alice@example.com"))
        token = _token_from(notifier, NotificationTemplate.RESET_PASSWORD, "reset_url")
        result = await confirm.handle(
            ConfirmPasswordReset(token=token, new_password=NEW_PASSWORD)
        )

        assert result == Success(value=None)
        assert store.audit.actions() == [
            AuditAction.PASSWORD_RESET_REQUESTED,
            AuditAction.PASSWORD_RESET_COMPLETED,
        ]

    async def test_unknown_email_request_not_audited(
        self, password_reset, audit_recorder, store
    ):
        handler = RequestPasswordResetHandler(
            password_reset=password_reset, audit=audit_recorder
        )

        result = await handler.handle(RequestPasswordReset(email="ghost@example.com"))

        assert result == Success(value=None)
        assert store.audit.events == []

    async def test_verify_email_is_audited(
        self, email_verification, audit_recorder, alice, notifier, store
    ):
        resend = ResendVerificationEmailHandler(email_verification=email_verification)
        verify = VerifyEmailHandler(
            email_verification=email_verification, audit=audit_recorder
        )

        await resend.handle(ResendVerificationEmail(email="alice@example.com"))
        token = _token_from(
            notifier, NotificationTemplate.VERIFY_EMAIL, "verification_url"
        )
        result = await verify.handle(VerifyEmail(token=token))

        assert result == Success(value=None)
        assert store.audit.actions() == [AuditAction.EMAIL_VERIFIED]
        assert store.audit.events[0].identity_id == alice.id
