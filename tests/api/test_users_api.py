"""API tests for user, audit and admin lockout endpoints."""

from datetime import UTC, datetime

import pytest
from fastapi.testclient import TestClient
from uuid_extensions import uuid7

from src.application.dtos import AuthenticatedIdentity, LockoutInfo
from src.core.container import (
    get_current_identity_handler,
    get_list_audit_events_handler,
    get_lockout_info_handler,
    get_register_identity_handler,
    get_unlock_account_handler,
)
from src.core.enums import ErrorCode
from src.core.errors import ConflictError
from src.core.result import Failure, Success
from src.domain.entities import AuditEvent
from src.domain.enums import AuditAction, UserRole
from src.main import app
from tests.utils.api import StubHandler, bearer, make_identity, make_tokens


@pytest.fixture(autouse=True)
def override_dependencies():
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    return TestClient(app, raise_server_exceptions=False)


def _use(dependency, result) -> StubHandler:
    stub = StubHandler(result)
    app.dependency_overrides[dependency] = lambda: stub
    return stub


@pytest.mark.api
class TestCreateUser:
    """Tests for POST /api/v1/users."""

    def test_registration(self, client):
        identity = make_identity(username="bob", email="bob@example.com")
        stub = _use(
            get_register_identity_handler,
            Success(value=AuthenticatedIdentity(identity=identity, tokens=make_tokens())),
        )

        response = client.post(
            "/api/v1/users",
            json={
                "email": "Bob@Example.com",
                "username": "bob",
                "password": "Secr3t!Pass",
            },
        )

        assert response.status_code == 201
        assert response.json()["user"]["username"] == "bob"
        assert stub.calls[0].email == "bob@example.com"

    def test_weak_password_rejected_before_handler(self, client):
        stub = _use(get_register_identity_handler, Success(value=None))

        response = client.post(
            "/api/v1/users",
            json={"email": "bob@example.com", "username": "bob", "password": "weak"},
        )

        assert response.status_code == 422
        assert stub.calls == []

    def test_conflict(self, client):
        _use(
            get_register_identity_handler,
            Failure(
                error=ConflictError(
                    code=ErrorCode.EMAIL_ALREADY_EXISTS,
                    message="Email already registered",
                    resource_type="identity",
                    conflicting_field="email",
                )
            ),
        )

        response = client.post(
            "/api/v1/users",
            json={
                "email": "bob@example.com",
                "username": "bob",
                "password": "Secr3t!Pass",
            },
        )

        assert response.status_code == 409
        assert response.json()["type"].endswith("/errors/email_already_exists")


@pytest.mark.api
class TestGetMe:
    def test_returns_identity(self, client):
        identity = make_identity()
        stub = _use(get_current_identity_handler, Success(value=identity))

        response = client.get("/api/v1/users/me", headers=bearer(identity.id))

        assert response.status_code == 200
        assert response.json()["id"] == str(identity.id)
        assert stub.calls[0].identity_id == identity.id

    def test_invalid_token(self, client):
        _use(get_current_identity_handler, Success(value=make_identity()))

        response = client.get(
            "/api/v1/users/me", headers={"Authorization": "Bearer not-a-jwt"}
        )

        assert response.status_code == 401


@pytest.mark.api
class TestAuditEvents:
    def test_lists_events(self, client):
        identity_id = uuid7()
        event = AuditEvent(
            id=uuid7(),
            action=AuditAction.LOGIN_SUCCEEDED.value,
            success=True,
            created_at=datetime.now(UTC),
            identity_id=identity_id,
            method="password",
        )
        stub = _use(get_list_audit_events_handler, Success(value=[event]))

        response = client.get(
            "/api/v1/audit-events?limit=10", headers=bearer(identity_id)
        )

        assert response.status_code == 200
        data = response.json()
        assert data["total_count"] == 1
        assert data["events"][0]["action"] == "login_succeeded"
        assert stub.calls[0].limit == 10


@pytest.mark.api
class TestAdminLockouts:
    """Tests for /api/v1/admin/lockouts/{identifier}."""

    def test_users_are_forbidden(self, client):
        _use(get_lockout_info_handler, Success(value=LockoutInfo(is_locked=False)))

        response = client.get(
            "/api/v1/admin/lockouts/alice", headers=bearer(role=UserRole.USER)
        )

        assert response.status_code == 403

    def test_admin_reads_lockout(self, client):
        _use(
            get_lockout_info_handler,
            Success(value=LockoutInfo(is_locked=True, remaining_minutes=7)),
        )

        response = client.get(
            "/api/v1/admin/lockouts/alice", headers=bearer(role=UserRole.ADMIN)
        )

        assert response.status_code == 200
        assert response.json() == {
            "identifier": "alice",
            "is_locked": True,
            "remaining_minutes": 7,
            "attempts": None,
        }

    def test_owner_unlocks(self, client):
        admin_id = uuid7()
        stub = _use(get_unlock_account_handler, Success(value=None))

        response = client.delete(
            "/api/v1/admin/lockouts/alice",
            headers=bearer(admin_id, role=UserRole.OWNER),
        )

        assert response.status_code == 204
        assert stub.calls[0].identifier == "alice"
        assert stub.calls[0].performed_by == admin_id
