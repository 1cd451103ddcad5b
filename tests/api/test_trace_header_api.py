"""API tests for request trace IDs (X-Trace-Id)."""

import re

import pytest
from fastapi.testclient import TestClient

from src.core.container import get_resend_otp_handler
from src.core.result import Failure, Success
from src.domain.errors import RateLimited
from src.main import app
from tests.utils.api import StubHandler

UUID_PATTERN = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$")


@pytest.fixture(autouse=True)
def override_dependencies():
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    return TestClient(app, raise_server_exceptions=False)


def _resend(client, result, headers=None):
    stub = StubHandler(result)
    app.dependency_overrides[get_resend_otp_handler] = lambda: stub
    return client.post(
        "/api/v1/two-factor/codes", json={"identifier": "alice"}, headers=headers
    )


@pytest.mark.api
class TestTraceHeader:
    def test_generated_when_absent(self, client):
        response = _resend(client, Success(value=None))

        assert UUID_PATTERN.match(response.headers["X-Trace-Id"])

    def test_caller_id_is_echoed(self, client):
        response = _resend(
            client, Success(value=None), headers={"X-Trace-Id": "req-2026-10-18-0001"}
        )

        assert response.headers["X-Trace-Id"] == "req-2026-10-18-0001"

    def test_malformed_caller_id_is_replaced(self, client):
        response = _resend(
            client, Success(value=None), headers={"X-Trace-Id": "bad id with spaces!"}
        )

        assert UUID_PATTERN.match(response.headers["X-Trace-Id"])

    def test_problem_body_carries_trace_id(self, client):
        response = _resend(
            client, Failure(error=RateLimited()), headers={"X-Trace-Id": "trace-abcdef01"}
        )

        assert response.status_code == 429
        assert response.json()["trace_id"] == "trace-abcdef01"
