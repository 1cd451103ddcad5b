"""NotifierProtocol - Port for templated outbound messages.

Infrastructure provides StubEmailService (logs) and SESEmailService.

Delivery failures come back as Failure. Callers decide: the OTP engine
propagates them (the caller must know the code never arrived), every other
flow logs and carries on.
"""

from typing import Any, Protocol

from src.core.errors import DomainError
from src.core.result import Result
from src.domain.enums import NotificationTemplate


class NotifierProtocol(Protocol):
    """Templated message dispatch."""

    async def send(
        self,
        to: str,
        template: NotificationTemplate,
        context: dict[str, Any],
    ) -> Result[None, DomainError]:
        """Render and send one message.

        Args:
            to: Recipient email address.
            template: Template to render.
            context: Template variables.

        Returns:
            Success(None) when accepted by the provider, Failure otherwise.

        Example:
            >>> await notifier.send(
            ...     "a@x.com",
            ...     NotificationTemplate.OTP_CODE,
            ...     {"otp": "123456", "expiry_minutes": 5},
            ... )
        """
        ...
