"""API tests for second-factor endpoints (/api/v1/two-factor)."""

import pytest
from fastapi.testclient import TestClient

from src.application.dtos import TotpProvisioning, TwoFactorStatus
from src.core.container import (
    get_confirm_totp_setup_handler,
    get_disable_two_factor_handler,
    get_enable_email_otp_handler,
    get_initiate_totp_setup_handler,
    get_resend_otp_handler,
    get_two_factor_status_handler,
)
from src.core.result import Failure, Success
from src.domain.enums import SecondFactorType
from src.domain.errors import InvalidCode, InvalidCredentials, RateLimited, SetupNotStarted
from src.main import app
from tests.utils.api import StubHandler, bearer, make_identity


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
class TestStatus:
    def test_status(self, client):
        _use(
            get_two_factor_status_handler,
            Success(value=TwoFactorStatus(totp=True, email=False, recovery_codes_remaining=9)),
        )

        response = client.get("/api/v1/two-factor", headers=bearer())

        assert response.status_code == 200
        assert response.json() == {
            "totp": True,
            "email": False,
            "recovery_codes_remaining": 9,
        }

    def test_requires_authentication(self, client):
        _use(get_two_factor_status_handler, Success(value=None))

        response = client.get("/api/v1/two-factor")

        assert response.status_code == 401


@pytest.mark.api
class TestTotpSetup:
    """Tests for TOTP provisioning and confirmation."""

    def test_start_setup_uses_email_as_label(self, client):
        identity = make_identity()
        stub = _use(
            get_initiate_totp_setup_handler,
            Success(
                value=TotpProvisioning(
                    secret="JBSWY3DPEHPK3PXP",
                    otpauth_uri="otpauth://totp/Gatehouse:alice%40example.com?secret=JBSWY3DPEHPK3PXP",
                    qr_code="data:image/png;base64,AAAA",
                )
            ),
        )

        response = client.post("/api/v1/two-factor/totp", headers=bearer(identity.id))

        assert response.status_code == 201
        assert response.json()["secret"] == "JBSWY3DPEHPK3PXP"
        assert stub.calls[0].label == "alice@example.com"

    def test_confirm_returns_recovery_codes(self, client):
        codes = [f"{n:08X}" for n in range(10)]
        _use(get_confirm_totp_setup_handler, Success(value=codes))

        response = client.post(
            "/api/v1/two-factor/totp/confirmation",
            json={"code": "123456"},
            headers=bearer(),
        )

        assert response.status_code == 201
        assert response.json()["recovery_codes"] == codes

    @pytest.mark.parametrize(
        ("error", "status_code"),
        [(InvalidCode(), 401), (SetupNotStarted(resource_id="x"), 404)],
    )
    def test_confirm_failures(self, client, error, status_code):
        _use(get_confirm_totp_setup_handler, Failure(error=error))

        response = client.post(
            "/api/v1/two-factor/totp/confirmation",
            json={"code": "123456"},
            headers=bearer(),
        )

        assert response.status_code == status_code

    def test_malformed_code(self, client):
        stub = _use(get_confirm_totp_setup_handler, Success(value=[]))

        response = client.post(
            "/api/v1/two-factor/totp/confirmation",
            json={"code": "12ab"},
            headers=bearer(),
        )

        assert response.status_code == 422
        assert stub.calls == []


@pytest.mark.api
class TestEmailFactor:
    def test_enable(self, client):
        _use(get_enable_email_otp_handler, Success(value=None))

        response = client.post("/api/v1/two-factor/email", headers=bearer())

        assert response.status_code == 201

    def test_disable_passes_method_and_password(self, client):
        stub = _use(get_disable_two_factor_handler, Success(value=None))

        response = client.request(
            "DELETE",
            "/api/v1/two-factor/email",
            json={"password": "Secr3t!Pass"},
            headers=bearer(),
        )

        assert response.status_code == 204
        assert stub.calls[0].method == SecondFactorType.EMAIL
        assert stub.calls[0].code is None

    def test_disable_wrong_password(self, client):
        _use(get_disable_two_factor_handler, Failure(error=InvalidCredentials()))

        response = client.request(
            "DELETE",
            "/api/v1/two-factor/totp",
            json={"password": "wrong", "code": "123456"},
            headers=bearer(),
        )

        assert response.status_code == 401

    def test_unknown_method(self, client):
        _use(get_disable_two_factor_handler, Success(value=None))

        response = client.request(
            "DELETE",
            "/api/v1/two-factor/sms",
            json={"password": "Secr3t!Pass"},
            headers=bearer(),
        )

        assert response.status_code == 422


@pytest.mark.api
class TestResendCode:
    def test_no_authentication_needed(self, client):
        stub = _use(get_resend_otp_handler, Success(value=None))

        response = client.post("/api/v1/two-factor/codes", json={"identifier": "alice"})

        assert response.status_code == 202
        assert stub.calls[0].identifier == "alice"

    def test_quota(self, client):
        _use(get_resend_otp_handler, Failure(error=RateLimited()))

        response = client.post("/api/v1/two-factor/codes", json={"identifier": "alice"})

        assert response.status_code == 429
