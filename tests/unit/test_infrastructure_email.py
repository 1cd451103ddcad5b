"""Unit tests for email templates and notifiers."""

from unittest.mock import Mock

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.enums import NotificationTemplate
from src.infrastructure.email import SESEmailService, StubEmailService
from src.infrastructure.email.templates import render
from src.infrastructure.errors import ExternalServiceError


@pytest.mark.unit
class TestTemplates:
    """Test template rendering."""

    def test_otp_template_includes_code_and_expiry(self):
        rendered = render(
            NotificationTemplate.OTP_CODE, {"otp": "123456", "expiry_minutes": 5}
        )

        assert rendered.subject == "Your verification code"
        assert "123456" in rendered.text_body
        assert "5 minutes" in rendered.text_body
        assert rendered.html_body.startswith("<html><body><p>")

    def test_account_locked_template(self):
        rendered = render(
            NotificationTemplate.ACCOUNT_LOCKED,
            {
                "name": "Alice",
                "lockout_minutes": 15,
                "unlock_time": "2026-01-01 12:15 UTC",
            },
        )

        assert "Hi Alice" in rendered.text_body
        assert "2026-01-01 12:15 UTC" in rendered.text_body

    def test_missing_variable_raises_key_error(self):
        with pytest.raises(KeyError):
            render(NotificationTemplate.RESET_PASSWORD, {"name": "Alice"})


@pytest.mark.unit
class TestStubEmailService:
    """Test the logging notifier."""

    async def test_records_message_and_hides_codes_from_log(self):
        # Arrange
        logger = Mock()
        notifier = StubEmailService(logger=logger)

        # Act
        result = await notifier.send(
            "alice@example.com",
            NotificationTemplate.OTP_CODE,
            {"otp": "123456", "expiry_minutes": 5},
        )

        # Assert
        assert result == Success(value=None)
        assert notifier.sent == [
            (
                "alice@example.com",
                NotificationTemplate.OTP_CODE,
                {"otp": "123456", "expiry_minutes": 5},
            )
        ]
        logged_context = logger.info.call_args.kwargs["context"]
        assert "otp" not in logged_context
        assert logged_context["expiry_minutes"] == 5

    async def test_missing_variable_is_a_delivery_failure(self):
        notifier = StubEmailService(logger=Mock())

        result = await notifier.send(
            "alice@example.com", NotificationTemplate.VERIFY_EMAIL, {}
        )

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.NOTIFICATION_FAILED
        assert notifier.sent == []

    async def test_keeps_only_recent_messages(self):
        # Arrange
        notifier = StubEmailService(logger=Mock(), history=3)

        # Act
        for n in range(5):
            await notifier.send(
                f"user{n}@example.com",
                NotificationTemplate.OTP_CODE,
                {"otp": f"00000{n}", "expiry_minutes": 5},
            )

        # Assert
        assert [to for to, _, _ in notifier.sent] == [
            "user2@example.com",
            "user3@example.com",
            "user4@example.com",
        ]

    def test_default_history_is_bounded(self):
        from src.infrastructure.email.stub_email_service import DEFAULT_HISTORY

        notifier = StubEmailService(logger=Mock())

        assert notifier._history.maxlen == DEFAULT_HISTORY


@pytest.mark.unit
class TestSESEmailService:
    """Test the SES notifier with a mocked boto3 client."""

    def _service(self, client):
        return SESEmailService(
            client=client,
            from_email="no-reply@example.com",
            from_name="Gatehouse",
            logger=Mock(),
        )

    async def test_send_calls_ses_with_rendered_message(self):
        # Arrange
        client = Mock()
        client.send_email.return_value = {"MessageId": "abc"}

        # Act
        result = await self._service(client).send(
            "alice@example.com",
            NotificationTemplate.PASSWORD_CHANGED,
            {"name": "Alice"},
        )

        # Assert
        assert result == Success(value=None)
        kwargs = client.send_email.call_args.kwargs
        assert kwargs["Source"] == "Gatehouse <no-reply@example.com>"
        assert kwargs["Destination"] == {"ToAddresses": ["alice@example.com"]}
        assert kwargs["Message"]["Subject"]["Data"] == "Your password was changed"

    async def test_client_error_becomes_notification_failure(self):
        client = Mock()
        client.send_email.side_effect = ClientError(
            {"Error": {"Code": "MessageRejected", "Message": "no"}}, "SendEmail"
        )

        result = await self._service(client).send(
            "alice@example.com",
            NotificationTemplate.PASSWORD_CHANGED,
            {"name": "Alice"},
        )

        assert isinstance(result, Failure)
        assert isinstance(result.error, ExternalServiceError)
        assert result.error.code == ErrorCode.NOTIFICATION_FAILED
        assert result.error.details == {"aws_error_code": "MessageRejected"}

    async def test_unreachable_endpoint_becomes_notification_failure(self):
        client = Mock()
        client.send_email.side_effect = EndpointConnectionError(
            endpoint_url="https://email.us-east-1.amazonaws.com"
        )

        result = await self._service(client).send(
            "alice@example.com",
            NotificationTemplate.PASSWORD_CHANGED,
            {"name": "Alice"},
        )

        assert isinstance(result, Failure)
        assert result.error.service_name == "ses"
