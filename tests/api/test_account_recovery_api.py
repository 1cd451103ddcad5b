"""API tests for password reset and email verification endpoints.

- POST /api/v1/password-reset-tokens
- GET  /api/v1/password-reset-tokens/{token}
- POST /api/v1/password-resets
- POST /api/v1/email-verifications
- POST /api/v1/email-verification-tokens
"""

import pytest
from fastapi.testclient import TestClient

from src.application.dtos import ResetTokenStatus
from src.core.container import (
    get_confirm_password_reset_handler,
    get_request_password_reset_handler,
    get_resend_verification_handler,
    get_validate_reset_token_handler,
    get_verify_email_handler,
)
from src.core.result import Failure, Success
from src.domain.errors import (
    EmailAlreadyVerified,
    InvalidResetToken,
    InvalidVerificationToken,
    RateLimited,
)
from src.main import app
from tests.utils.api import StubHandler

TOKEN = "ab" * 32


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
class TestPasswordResetTokens:
    def test_request_is_accepted(self, client):
        stub = _use(get_request_password_reset_handler, Success(value=None))

        response = client.post(
            "/api/v1/password-reset-tokens", json={"email": "Alice@Example.com"}
        )

        assert response.status_code == 202
        assert "reset link" in response.json()["message"]
        assert stub.calls[0].email == "alice@example.com"

    def test_rate_limited(self, client):
        _use(get_request_password_reset_handler, Failure(error=RateLimited()))

        response = client.post(
            "/api/v1/password-reset-tokens", json={"email": "alice@example.com"}
        )

        assert response.status_code == 429

    def test_validate_token(self, client):
        _use(
            get_validate_reset_token_handler,
            Success(value=ResetTokenStatus(valid=True, masked_email="a***@example.com")),
        )

        response = client.get(f"/api/v1/password-reset-tokens/{TOKEN}")

        assert response.status_code == 200
        assert response.json() == {"valid": True, "masked_email": "a***@example.com"}


@pytest.mark.api
class TestPasswordResets:
    def test_reset(self, client):
        stub = _use(get_confirm_password_reset_handler, Success(value=None))

        response = client.post(
            "/api/v1/password-resets",
            json={"token": TOKEN.upper(), "new_password": "N3w!Password"},
        )

        assert response.status_code == 201
        assert stub.calls[0].token == TOKEN

    def test_invalid_token(self, client):
        _use(get_confirm_password_reset_handler, Failure(error=InvalidResetToken()))

        response = client.post(
            "/api/v1/password-resets",
            json={"token": TOKEN, "new_password": "N3w!Password"},
        )

        assert response.status_code == 400
        assert response.json()["type"].endswith("/errors/invalid_reset_token")

    def test_weak_password(self, client):
        stub = _use(get_confirm_password_reset_handler, Success(value=None))

        response = client.post(
            "/api/v1/password-resets",
            json={"token": TOKEN, "new_password": "weak"},
        )

        assert response.status_code == 422
        assert stub.calls == []


@pytest.mark.api
class TestEmailVerifications:
    def test_verify(self, client):
        _use(get_verify_email_handler, Success(value=None))

        response = client.post("/api/v1/email-verifications", json={"token": TOKEN})

        assert response.status_code == 201

    def test_invalid_token(self, client):
        _use(get_verify_email_handler, Failure(error=InvalidVerificationToken()))

        response = client.post("/api/v1/email-verifications", json={"token": TOKEN})

        assert response.status_code == 400

    def test_non_hex_token(self, client):
        response = client.post(
            "/api/v1/email-verifications", json={"token": "not-a-token-value-at-all"}
        )

        assert response.status_code == 422

    def test_resend(self, client):
        _use(get_resend_verification_handler, Success(value=None))

        response = client.post(
            "/api/v1/email-verification-tokens", json={"email": "alice@example.com"}
        )

        assert response.status_code == 202

    def test_resend_already_verified(self, client):
        _use(get_resend_verification_handler, Failure(error=EmailAlreadyVerified()))

        response = client.post(
            "/api/v1/email-verification-tokens", json={"email": "alice@example.com"}
        )

        assert response.status_code == 409
