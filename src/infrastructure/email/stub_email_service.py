"""Stub notifier for development and testing.

Logs messages instead of sending them. Template context is logged except
for values that grant access (codes and links). Only the most recent
messages are kept in memory.
"""

from collections import deque
from typing import Any

from src.core.enums import ErrorCode
from src.core.errors import DomainError
from src.core.result import Failure, Result, Success
from src.domain.enums import NotificationTemplate
from src.domain.protocols import LoggerProtocol
from src.infrastructure.email.templates import render

SENSITIVE_CONTEXT_KEYS = frozenset({"otp", "reset_url", "verification_url"})

DEFAULT_HISTORY = 50

SentMessage = tuple[str, NotificationTemplate, dict[str, Any]]


class StubEmailService:
    """Implements NotifierProtocol by logging.

    Args:
        logger: Where messages are logged.
        history: How many recent messages to keep for inspection.
    """

    def __init__(self, logger: LoggerProtocol, *, history: int = DEFAULT_HISTORY) -> None:
        self._logger = logger
        self._history: deque[SentMessage] = deque(maxlen=history)

    @property
    def sent(self) -> list[SentMessage]:
        """Recent messages, oldest first (inspected by tests and the local console)."""
        return list(self._history)

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

        self._history.append((to, template, dict(context)))
        self._logger.info(
            "Email logged (not sent)",
            to=to,
            template=template.value,
            subject=rendered.subject,
            context={
                key: value
                for key, value in context.items()
                if key not in SENSITIVE_CONTEXT_KEYS
            },
        )
        return Success(value=None)
