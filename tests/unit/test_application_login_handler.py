"""Unit tests for LoginHandler.

Tests cover:
- Password login issues tokens and a session
- Unknown identifier and wrong password answer the same
- Lockout after repeated failures (audited once), release and email case
  variants
- Verified-email policy
- Second-factor challenges and each verification method, including an
  exhausted emailed-code quota
"""

import hashlib
import time

import pyotp
import pytest

from src.application.commands.auth_commands import LoginIdentity, RegisterIdentity
from src.application.commands.handlers.login_handler import LoginHandler
from src.application.commands.handlers.register_identity_handler import (
    RegisterIdentityHandler,
)
from src.application.dtos import AuthenticatedIdentity, TwoFactorChallenge
from src.core.result import Failure
from src.domain.enums import AuditAction, NotificationTemplate, UserRole
from src.domain.errors import (
    AccountLocked,
    EmailNotVerified,
    InvalidCredentials,
    InvalidTwoFactorCode,
)
from src.domain.value_objects import AuthPolicy
from tests.conftest import TEST_PASSWORD


def _build(store, password_service, lockout, otp_service, totp_service,
           token_issuer, audit_recorder, logger, policy):
    return LoginHandler(
        identity_repo=store.identities,
        second_factor_repo=store.second_factors,
        login_attempt_repo=store.login_attempts,
        password_service=password_service,
        lockout=lockout,
        otp_service=otp_service,
        totp_service=totp_service,
        token_issuer=token_issuer,
        audit=audit_recorder,
        logger=logger,
        policy=policy,
    )


@pytest.fixture
def handler(store, password_service, lockout, otp_service, totp_service,
            token_issuer, audit_recorder, logger, policy):
    return _build(store, password_service, lockout, otp_service, totp_service,
                  token_issuer, audit_recorder, logger, policy)


def _unused_code(*taken):
    """First six-digit code not in ``taken``."""
    return next(c for c in ("000000", "111111", "222222", "333333") if c not in taken)


def _login(identifier="alice", password=TEST_PASSWORD, code=None):
    return LoginIdentity(
        identifier=identifier,
        password=password,
        two_factor_code=code,
        ip_address="10.0.0.1",
        user_agent="pytest",
    )


async def _enroll_totp(totp_service, identity):
    provisioning = (await totp_service.provision(identity.id, identity.email)).value
    codes = await totp_service.confirm_setup(
        identity.id, pyotp.TOTP(provisioning.secret).now()
    )
    return provisioning.secret, codes.value


@pytest.mark.unit
class TestPasswordLogin:
    """Test logins without a second factor."""

    async def test_success_by_username(self, handler, alice, store, token_service):
        # Act
        result = await handler.handle(_login())

        # Assert
        outcome = result.value
        assert isinstance(outcome, AuthenticatedIdentity)
        assert outcome.identity.id == alice.id
        claims = token_service.validate_access_token(outcome.tokens.access_token).value
        assert claims["sub"] == str(alice.id)
        [session] = store.sessions.for_identity(alice.id)
        assert (
            session.token_digest
            == hashlib.sha256(outcome.tokens.refresh_token.encode()).hexdigest()
        )
        assert store.login_attempts.attempts[-1].success is True
        assert store.audit.actions() == [AuditAction.LOGIN_SUCCEEDED]
        assert store.audit.events[0].method == "password"

    async def test_success_by_email_stamps_last_login(self, handler, alice, store):
        result = await handler.handle(_login(identifier="alice@example.com"))

        assert isinstance(result.value, AuthenticatedIdentity)
        credential = await store.identities.get_credential(alice.id)
        assert credential.last_login_at is not None

    async def test_wrong_password(self, handler, alice, store):
        result = await handler.handle(_login(password="Wr0ng!Pass"))

        assert isinstance(result, Failure)
        assert isinstance(result.error, InvalidCredentials)
        assert store.login_attempts.attempts[-1].success is False
        assert store.audit.actions() == [AuditAction.LOGIN_FAILED]
        assert store.audit.events[0].identity_id == alice.id

    async def test_unknown_identifier_looks_the_same(self, handler, store):
        result = await handler.handle(_login(identifier="nobody"))

        assert isinstance(result.error, InvalidCredentials)
        assert store.audit.events[0].identity_id is None

    async def test_success_clears_failure_count(self, handler, alice, lockout):
        await handler.handle(_login(password="Wr0ng!Pass"))
        await handler.handle(_login(password="Wr0ng!Pass"))

        await handler.handle(_login())

        info = await lockout.get_lockout_info("alice")
        assert info.value.attempts == 0


@pytest.mark.unit
class TestLockout:
    async def test_locks_after_max_failures(self, handler, alice, store, notifier, policy):
        # Arrange / Act
        for _ in range(policy.lockout_max_attempts):
            await handler.handle(_login(password="Wr0ng!Pass"))

        result = await handler.handle(_login())

        # Assert
        assert isinstance(result, Failure)
        assert isinstance(result.error, AccountLocked)
        assert result.error.remaining_minutes == policy.lockout_minutes
        assert store.audit.actions().count(AuditAction.ACCOUNT_LOCKED) == 1
        assert [t for _, t, _ in notifier.sent] == [NotificationTemplate.ACCOUNT_LOCKED]

    async def test_locked_refusal_is_not_counted(self, handler, alice, store, policy):
        for _ in range(policy.lockout_max_attempts):
            await handler.handle(_login(password="Wr0ng!Pass"))
        attempts_before = len(store.login_attempts.attempts)

        await handler.handle(_login(password="Wr0ng!Pass"))

        assert len(store.login_attempts.attempts) == attempts_before


@pytest.mark.unit
class TestVerifiedEmailPolicy:
    async def test_unverified_refused_when_required(
        self, store, password_service, lockout, otp_service, totp_service,
        token_issuer, audit_recorder, logger, alice,
    ):
        handler = _build(store, password_service, lockout, otp_service, totp_service,
                         token_issuer, audit_recorder, logger,
                         AuthPolicy(require_verified_email=True))

        result = await handler.handle(_login())

        assert isinstance(result.error, EmailNotVerified)
        assert store.sessions.sessions == {}


@pytest.mark.unit
class TestSecondFactor:
    """Test challenges and second-factor verification."""

    async def test_totp_challenge(self, handler, alice, totp_service, store):
        await _enroll_totp(totp_service, alice)

        result = await handler.handle(_login())

        assert result.value == TwoFactorChallenge(method="totp")
        assert store.sessions.sessions == {}

    async def test_email_challenge_sends_code(self, handler, alice, totp_service, notifier):
        await totp_service.enable_email(alice.id)

        result = await handler.handle(_login())

        assert result.value == TwoFactorChallenge(method="email")
        to, template, _ = notifier.sent[-1]
        assert (to, template) == ("alice@example.com", NotificationTemplate.OTP_CODE)

    async def test_totp_code_completes_login(self, handler, alice, totp_service, store):
        secret, _ = await _enroll_totp(totp_service, alice)

        result = await handler.handle(_login(code=pyotp.TOTP(secret).now()))

        assert isinstance(result.value, AuthenticatedIdentity)
        assert store.audit.actions() == [
            AuditAction.TWO_FACTOR_VERIFIED,
            AuditAction.LOGIN_SUCCEEDED,
        ]
        assert store.audit.events[-1].method == "totp"

    async def test_recovery_code_completes_login(self, handler, alice, totp_service, store):
        _, codes = await _enroll_totp(totp_service, alice)

        result = await handler.handle(_login(code=codes[0]))

        assert isinstance(result.value, AuthenticatedIdentity)
        assert AuditAction.TWO_FACTOR_RECOVERY_CODE_USED in store.audit.actions()
        assert store.audit.events[-1].method == "recovery"

    async def test_emailed_code_completes_login(
        self, handler, alice, totp_service, notifier, store
    ):
        # Arrange
        await totp_service.enable_email(alice.id)
        await handler.handle(_login())
        code = notifier.sent[-1][2]["otp"]

        # Act
        result = await handler.handle(_login(code=code))

        # Assert
        assert isinstance(result.value, AuthenticatedIdentity)
        assert store.audit.events[-1].method == "email"

    async def test_all_methods_fail(self, handler, alice, totp_service, lockout, store):
        # Arrange
        secret, _ = await _enroll_totp(totp_service, alice)
        valid = pyotp.TOTP(secret).now()
        wrong = "000000" if valid != "000000" else "111111"

        # Act
        result = await handler.handle(_login(code=wrong))

        # Assert
        assert isinstance(result, Failure)
        assert isinstance(result.error, InvalidTwoFactorCode)
        assert store.sessions.sessions == {}
        info = await lockout.get_lockout_info("alice")
        assert info.value.attempts == 1
        assert store.audit.actions() == [
            AuditAction.TWO_FACTOR_VERIFICATION_FAILED,
            AuditAction.TWO_FACTOR_VERIFICATION_FAILED,
        ]

    async def test_used_recovery_code_is_rejected(self, handler, alice, totp_service, store):
        # Arrange
        _, codes = await _enroll_totp(totp_service, alice)
        first = await handler.handle(_login(code=codes[0]))
        assert isinstance(first.value, AuthenticatedIdentity)

        # Act
        result = await handler.handle(_login(code=codes[0]))

        # Assert
        assert isinstance(result, Failure)
        assert isinstance(result.error, InvalidTwoFactorCode)
        assert len(store.sessions.for_identity(alice.id)) == 1

    @pytest.mark.parametrize("policy", [AuthPolicy(otp_max_attempts=2)])
    async def test_exhausted_email_code_quota_still_counts(
        self, handler, alice, totp_service, notifier, lockout, store
    ):
        # Arrange
        await totp_service.enable_email(alice.id)
        await handler.handle(_login())
        sent = notifier.sent[-1][2]["otp"]
        wrong = _unused_code(sent)
        for _ in range(2):
            rejected = await handler.handle(_login(code=wrong))
            assert isinstance(rejected.error, InvalidTwoFactorCode)

        # Act
        result = await handler.handle(_login(code=sent))

        # Assert
        assert isinstance(result, Failure)
        assert isinstance(result.error, InvalidTwoFactorCode)
        assert store.sessions.sessions == {}
        assert store.audit.events[-1].action == AuditAction.TWO_FACTOR_VERIFICATION_FAILED
        info = await lockout.get_lockout_info("alice")
        assert info.value.attempts == 3

    @pytest.mark.parametrize("policy", [AuthPolicy(otp_max_attempts=2)])
    async def test_guessing_past_email_quota_locks_account(
        self, handler, alice, totp_service, notifier, policy
    ):
        # Arrange
        secret, _ = await _enroll_totp(totp_service, alice)
        await totp_service.enable_email(alice.id)
        await handler.handle(_login())
        sent = notifier.sent[-1][2]["otp"]
        totp = pyotp.TOTP(secret)
        now = time.time()
        window = range(-policy.totp_valid_window, policy.totp_valid_window + 1)
        wrong = _unused_code(sent, *(totp.at(now, offset) for offset in window))

        # Act
        rejected = [
            await handler.handle(_login(code=wrong))
            for _ in range(policy.lockout_max_attempts)
        ]
        result = await handler.handle(_login(code=wrong))

        # Assert
        assert all(isinstance(r.error, InvalidTwoFactorCode) for r in rejected)
        assert isinstance(result, Failure)
        assert isinstance(result.error, AccountLocked)


@pytest.mark.unit
class TestLockoutRelease:
    """Test logins once a lock is over."""

    async def test_login_succeeds_after_lock_window(
        self, handler, alice, cache, cache_keys, policy
    ):
        # Arrange
        for _ in range(policy.lockout_max_attempts):
            await handler.handle(_login(password="Wr0ng!Pass"))
        locked = await handler.handle(_login())
        assert isinstance(locked.error, AccountLocked)

        # Act (window over: flag and counter expired)
        await cache.delete(cache_keys.lockout_flag("alice"))
        await cache.delete(cache_keys.lockout_user("alice"))
        result = await handler.handle(_login())

        # Assert
        assert isinstance(result.value, AuthenticatedIdentity)

    async def test_login_succeeds_after_manual_unlock(self, handler, alice, lockout, policy):
        for _ in range(policy.lockout_max_attempts):
            await handler.handle(_login(password="Wr0ng!Pass"))

        await lockout.unlock_account("alice")
        result = await handler.handle(_login())

        assert isinstance(result.value, AuthenticatedIdentity)


@pytest.mark.unit
class TestEmailCaseVariants:
    """Test that case variants of one email share the lock."""

    async def test_case_variant_is_refused_once_locked(self, handler, alice, policy):
        # Arrange
        for _ in range(policy.lockout_max_attempts):
            await handler.handle(_login(identifier="alice@example.com", password="Wr0ng!Pass"))

        # Act
        upper = await handler.handle(_login(identifier="ALICE@example.com"))
        mixed = await handler.handle(_login(identifier="Alice@Example.com"))

        # Assert
        assert isinstance(upper.error, AccountLocked)
        assert isinstance(mixed.error, AccountLocked)

    async def test_failures_across_variants_accumulate(self, handler, alice, lockout, policy):
        variants = ["alice@example.com", "ALICE@example.com", "Alice@Example.com"]

        for n in range(policy.lockout_max_attempts - 1):
            await handler.handle(
                _login(identifier=variants[n % len(variants)], password="Wr0ng!Pass")
            )

        info = await lockout.get_lockout_info("alice@example.com")
        assert info.value.attempts == policy.lockout_max_attempts - 1

    async def test_lock_audit_uses_normalized_identifier(self, handler, alice, store, policy):
        for _ in range(policy.lockout_max_attempts):
            await handler.handle(_login(identifier="ALICE@Example.com", password="Wr0ng!Pass"))

        [locked] = [e for e in store.audit.events if e.action == AuditAction.ACCOUNT_LOCKED]
        assert locked.metadata["identifier"] == "alice@example.com"


@pytest.mark.unit
class TestRegisteredIdentityLockout:
    """Test a freshly registered identity against the lockout policy."""

    async def test_locks_after_repeated_wrong_passwords(
        self, handler, store, password_service, token_issuer, email_verification,
        audit_recorder, logger, policy,
    ):
        # Arrange
        register = RegisterIdentityHandler(
            identity_repo=store.identities,
            password_service=password_service,
            token_issuer=token_issuer,
            email_verification=email_verification,
            audit=audit_recorder,
            logger=logger,
        )
        registered = await register.handle(
            RegisterIdentity(email="a@x.com", username="a", password="Secr3t!23")
        )
        identity = registered.value.identity
        assert identity.role == UserRole.USER
        assert identity.is_email_verified is False

        # Act
        for _ in range(policy.lockout_max_attempts):
            rejected = await handler.handle(_login(identifier="a@x.com", password="Wr0ng!Pass"))
            assert isinstance(rejected.error, InvalidCredentials)
        result = await handler.handle(_login(identifier="a@x.com", password="Secr3t!23"))

        # Assert
        assert isinstance(result, Failure)
        assert isinstance(result.error, AccountLocked)
        assert 0 < result.error.remaining_minutes <= 15
