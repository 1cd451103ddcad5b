"""Helpers for API tests: stub handlers, identities and bearer tokens."""

from datetime import UTC, datetime, timedelta
from uuid import UUID

from uuid_extensions import uuid7

from src.application.dtos import TokenPair
from src.core.container import get_token_service
from src.domain.entities import Identity
from src.domain.enums import UserRole


class StubHandler:
    """Returns a fixed result and remembers what it was asked."""

    def __init__(self, result):
        self.result = result
        self.calls: list = []

    async def handle(self, message):
        self.calls.append(message)
        return self.result


def make_identity(role: UserRole = UserRole.USER, **overrides) -> Identity:
    fields = {
        "id": uuid7(),
        "email": "alice@example.com",
        "username": "alice",
        "role": role,
        "created_at": datetime.now(UTC),
        "display_name": "Alice",
    }
    fields.update(overrides)
    return Identity(**fields)


def make_tokens() -> TokenPair:
    return TokenPair(
        access_token="access.token.value",
        refresh_token="refresh.token.value",
        expires_in=900,
        refresh_expires_at=datetime.now(UTC) + timedelta(days=7),
    )


def bearer(identity_id: UUID | None = None, role: UserRole = UserRole.USER) -> dict:
    """Authorization header with a real access token."""
    tokens = get_token_service().issue_token_pair(
        identity_id=identity_id or uuid7(),
        email="alice@example.com",
        username="alice",
        role=role.value,
    )
    return {"Authorization": f"Bearer {tokens.access_token}"}
