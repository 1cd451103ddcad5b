"""structlog console adapter.

Development gets coloured key=value lines; testing, CI and production get one
JSON object per line. Values under credential-like keys (passwords, codes,
tokens, secrets) are replaced with ``"***"`` before rendering, so a careless
``logger.info("...", code=code)`` cannot leak an OTP.

Satisfies LoggerProtocol structurally.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

REDACTED = "***"

_SENSITIVE_KEYS = frozenset(
    {
        "password",
        "new_password",
        "code",
        "otp",
        "secret",
        "token",
        "access_token",
        "refresh_token",
        "recovery_code",
    }
)


def redact_sensitive(
    _logger: Any, _method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """structlog processor masking credential-like values."""
    for key in _SENSITIVE_KEYS.intersection(event_dict):
        event_dict[key] = REDACTED
    return event_dict


def _with_exception(error: Exception | None, context: dict[str, Any]) -> dict[str, Any]:
    if error is not None:
        context["error_type"] = type(error).__name__
        context["error_message"] = str(error)
    return context


class ConsoleAdapter:
    """Structured logger writing to stdout.

    Args:
        use_json: Render JSON lines instead of the development console format.
        level: Minimum level name.
        service: Value of the ``service`` field on every line.
    """

    def __init__(
        self,
        *,
        use_json: bool = False,
        level: str = "INFO",
        service: str = "gatehouse-api",
    ) -> None:
        renderer: structlog.types.Processor = (
            structlog.processors.JSONRenderer()
            if use_json
            else structlog.dev.ConsoleRenderer(colors=True)
        )
        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.stdlib.add_log_level,
                structlog.processors.TimeStamper(fmt="iso", utc=True),
                redact_sensitive,
                renderer,
            ],
            wrapper_class=structlog.make_filtering_bound_logger(
                logging.getLevelName(level.upper())
            ),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
            cache_logger_on_first_use=True,
        )
        self._logger = structlog.get_logger().bind(service=service)

    def debug(self, message: str, /, **context: Any) -> None:
        self._logger.debug(message, **context)

    def info(self, message: str, /, **context: Any) -> None:
        self._logger.info(message, **context)

    def warning(self, message: str, /, **context: Any) -> None:
        self._logger.warning(message, **context)

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        self._logger.error(message, **_with_exception(error, context))

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        self._logger.critical(message, **_with_exception(error, context))

    def bind(self, **context: Any) -> ConsoleAdapter:
        """Copy of this adapter with ``context`` attached to every line."""
        bound = ConsoleAdapter.__new__(ConsoleAdapter)
        bound._logger = self._logger.bind(**context)
        return bound
