"""AWS SES notifier.

boto3 is synchronous, so the API call runs in a worker thread.
"""

import asyncio
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from src.core.enums import ErrorCode
from src.core.errors import DomainError
from src.core.result import Failure, Result, Success
from src.domain.enums import NotificationTemplate
from src.domain.protocols import LoggerProtocol
from src.infrastructure.email.templates import RenderedEmail, render
from src.infrastructure.enums import InfrastructureErrorCode
from src.infrastructure.errors import ExternalServiceError


class SESEmailService:
    """Implements NotifierProtocol with Amazon SES.

    Usage:
        client = boto3.client("ses", region_name=settings.aws_region)
        notifier = SESEmailService(
            client=client,
            from_email=settings.ses_from_email,
            from_name=settings.ses_from_name,
            logger=logger,
        )
    """

    def __init__(
        self,
        *,
        client: Any,
        from_email: str,
        from_name: str,
        logger: LoggerProtocol,
    ) -> None:
        self._client = client
        self._source = f"{from_name} <{from_email}>"
        self._logger = logger

    async def send(
        self,
        to: str,
        template: NotificationTemplate,
        context: dict[str, Any],
    ) -> Result[None, DomainError]:
        try:
            rendered = render(template, context)
        except KeyError as e:
            return Failure(
                error=DomainError(
                    code=ErrorCode.NOTIFICATION_FAILED,
                    message=f"Missing template variable {e}",
                    details={"template": template.value},
                )
            )

        try:
            response = await asyncio.to_thread(self._send_email, to, rendered)
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            self._logger.warning(
                "SES rejected email",
                template=template.value,
                aws_error_code=error_code,
            )
            return Failure(
                error=ExternalServiceError(
                    code=ErrorCode.NOTIFICATION_FAILED,
                    infrastructure_code=InfrastructureErrorCode.EXTERNAL_SERVICE_ERROR,
                    message="Email delivery failed",
                    service_name="ses",
                    details={"aws_error_code": error_code},
                )
            )
        except BotoCoreError as e:
            self._logger.warning(
                "SES unreachable",
                template=template.value,
                error_type=type(e).__name__,
            )
            return Failure(
                error=ExternalServiceError(
                    code=ErrorCode.NOTIFICATION_FAILED,
                    infrastructure_code=InfrastructureErrorCode.EXTERNAL_SERVICE_UNAVAILABLE,
                    message="Email delivery failed",
                    service_name="ses",
                )
            )

        self._logger.info(
            "Email sent",
            template=template.value,
            message_id=response.get("MessageId", "unknown"),
        )
        return Success(value=None)

    def _send_email(self, to: str, rendered: RenderedEmail) -> dict[str, Any]:
        response: dict[str, Any] = self._client.send_email(
            Source=self._source,
            Destination={"ToAddresses": [to]},
            Message={
                "Subject": {"Charset": "UTF-8", "Data": rendered.subject},
                "Body": {
                    "Text": {"Charset": "UTF-8", "Data": rendered.text_body},
                    "Html": {"Charset": "UTF-8", "Data": rendered.html_body},
                },
            },
        )
        return response
