"""Unit tests for ErrorResponseBuilder."""

import json
from unittest.mock import Mock

import pytest

from src.core.config import get_settings
from src.core.enums import ErrorCode
from src.core.errors import DomainError, ValidationError
from src.domain.errors import (
    AccountLocked,
    ChallengeNotFound,
    EmailAlreadyVerified,
    EmailNotVerified,
    InvalidCredentials,
    InvalidResetToken,
    RateLimited,
    TooManyAttempts,
)
from src.presentation.api.v1.errors import ErrorResponseBuilder


def _request(path="/api/v1/sessions"):
    request = Mock()
    request.url.path = path
    return request


def _build(error):
    response = ErrorResponseBuilder.from_domain_error(
        error=error, request=_request(), trace_id="trace-1"
    )
    return response, json.loads(response.body)


@pytest.mark.unit
class TestStatusMapping:
    @pytest.mark.parametrize(
        ("error", "status_code"),
        [
            (InvalidResetToken(), 400),
            (InvalidCredentials(), 401),
            (EmailNotVerified(), 403),
            (ChallengeNotFound(resource_id="x"), 404),
            (EmailAlreadyVerified(), 409),
            (AccountLocked(remaining_minutes=3), 423),
            (RateLimited(), 429),
            (TooManyAttempts(), 429),
            (DomainError(code=ErrorCode.NOTIFICATION_FAILED, message="x"), 502),
            (DomainError(code=ErrorCode.STORE_UNAVAILABLE, message="x"), 503),
            (DomainError(code=ErrorCode.AUDIT_RECORD_FAILED, message="x"), 500),
        ],
    )
    def test_status(self, error, status_code):
        response, body = _build(error)

        assert response.status_code == status_code
        assert body["status"] == status_code


@pytest.mark.unit
class TestProblemDetails:
    def test_body_fields(self):
        response, body = _build(InvalidCredentials())

        assert body["type"] == (
            f"{get_settings().api_base_url}/errors/invalid_credentials"
        )
        assert body["title"] == "Authentication Failed"
        assert body["instance"] == "/api/v1/sessions"
        assert body["trace_id"] == "trace-1"
        assert "errors" not in body

    def test_lockout_adds_retry_after(self):
        response, body = _build(AccountLocked(remaining_minutes=3))

        assert response.headers["Retry-After"] == "180"
        assert body["detail"].endswith("Try again in 3 minutes")

    def test_validation_error_lists_field(self):
        error = ValidationError(
            code=ErrorCode.PASSWORD_TOO_WEAK,
            message="Password must contain digit",
            field="password",
        )

        response, body = _build(error)

        assert response.status_code == 400
        assert body["title"] == "Validation Failed"
        assert body["errors"] == [
            {
                "field": "password",
                "code": "password_too_weak",
                "message": "Password must contain digit",
            }
        ]

    def test_unmapped_code_is_internal_error(self):
        _, body = _build(DomainError(code=ErrorCode.ENCRYPTION_FAILED, message="x"))

        assert body["title"] == "Internal Server Error"
