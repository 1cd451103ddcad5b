"""Unit tests for RefreshTokensHandler and LogoutHandler.

Tests cover:
- Rotation ends the old session and opens a new one
- Reused, forged and orphaned refresh tokens are rejected alike
- Logout of one session or all sessions
"""

import pytest
from uuid_extensions import uuid7

from src.application.commands.auth_commands import LogoutIdentity, RefreshTokens
from src.application.commands.handlers.logout_handler import LogoutHandler
from src.application.commands.handlers.refresh_tokens_handler import (
    RefreshTokensHandler,
)
from src.core.result import Failure, Success
from src.domain.enums import AuditAction
from src.domain.errors import InvalidRefreshToken


@pytest.fixture
def refresh_handler(store, token_service, token_issuer, audit_recorder, logger):
    return RefreshTokensHandler(
        token_service=token_service,
        session_repo=store.sessions,
        identity_repo=store.identities,
        token_issuer=token_issuer,
        audit=audit_recorder,
        logger=logger,
    )


@pytest.fixture
def logout_handler(store, audit_recorder, logger):
    return LogoutHandler(session_repo=store.sessions, audit=audit_recorder, logger=logger)


@pytest.mark.unit
class TestRefreshTokens:
    """Test refresh token rotation."""

    async def test_rotation(self, refresh_handler, token_issuer, alice, store):
        # Arrange
        original = await token_issuer.issue(alice)

        # Act
        result = await refresh_handler.handle(
            RefreshTokens(refresh_token=original.refresh_token)
        )

        # Assert
        rotated = result.value
        assert rotated.refresh_token != original.refresh_token
        assert len(store.sessions.for_identity(alice.id)) == 1
        assert store.audit.actions() == [AuditAction.TOKENS_REFRESHED]

    async def test_old_token_rejected_after_rotation(
        self, refresh_handler, token_issuer, alice
    ):
        original = await token_issuer.issue(alice)
        await refresh_handler.handle(RefreshTokens(refresh_token=original.refresh_token))

        result = await refresh_handler.handle(
            RefreshTokens(refresh_token=original.refresh_token)
        )

        assert isinstance(result, Failure)
        assert isinstance(result.error, InvalidRefreshToken)

    async def test_access_token_is_not_a_refresh_token(
        self, refresh_handler, token_issuer, alice
    ):
        tokens = await token_issuer.issue(alice)

        result = await refresh_handler.handle(
            RefreshTokens(refresh_token=tokens.access_token)
        )

        assert isinstance(result.error, InvalidRefreshToken)

    async def test_signed_token_without_session(
        self, refresh_handler, token_service, alice
    ):
        orphan = token_service.issue_token_pair(
            identity_id=alice.id,
            email=alice.email,
            username=alice.username,
            role=alice.role.value,
        )

        result = await refresh_handler.handle(
            RefreshTokens(refresh_token=orphan.refresh_token)
        )

        assert isinstance(result.error, InvalidRefreshToken)

    async def test_deleted_identity(self, refresh_handler, token_issuer, alice, store):
        tokens = await token_issuer.issue(alice)
        del store.identities.identities[alice.id]

        result = await refresh_handler.handle(
            RefreshTokens(refresh_token=tokens.refresh_token)
        )

        assert isinstance(result.error, InvalidRefreshToken)


@pytest.mark.unit
class TestLogout:
    async def test_single_session(self, logout_handler, token_issuer, alice, store):
        first = await token_issuer.issue(alice)
        await token_issuer.issue(alice)

        result = await logout_handler.handle(
            LogoutIdentity(identity_id=alice.id, refresh_token=first.refresh_token)
        )

        assert result == Success(value=1)
        assert len(store.sessions.for_identity(alice.id)) == 1
        assert store.audit.events[0].metadata == {
            "sessions_ended": 1,
            "all_sessions": False,
        }

    async def test_all_sessions(self, logout_handler, token_issuer, alice, store):
        await token_issuer.issue(alice)
        await token_issuer.issue(alice)

        result = await logout_handler.handle(LogoutIdentity(identity_id=alice.id))

        assert result == Success(value=2)
        assert store.sessions.for_identity(alice.id) == []

    async def test_refresh_token_of_another_identity_ends_nothing(
        self, logout_handler, token_issuer, alice, store
    ):
        tokens = await token_issuer.issue(alice)

        result = await logout_handler.handle(
            LogoutIdentity(identity_id=uuid7(), refresh_token=tokens.refresh_token)
        )

        assert result == Success(value=0)
        assert len(store.sessions.for_identity(alice.id)) == 1
