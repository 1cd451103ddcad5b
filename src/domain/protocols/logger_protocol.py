"""LoggerProtocol definition for structured logging.

Backend-agnostic structured logging port. Implementations MUST keep logs
structured (message + key-value context) and safe: passwords, codes,
TOTP secrets, refresh tokens and reset tokens never appear in context.

Log Levels:
    - DEBUG: Diagnostic detail
    - INFO: Normal events (login succeeded, OTP issued)
    - WARNING: Expected security outcomes (lockout, rate limit, bad code)
    - ERROR: Operation failed (store down, email delivery failed)
    - CRITICAL: System-wide failure

Usage:
    logger: LoggerProtocol = get_logger()
    logger.warning("Account locked", identifier=identifier, attempts=attempts)

    request_logger = logger.bind(trace_id=trace_id)
    request_logger.info("Request started")
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters."""

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug-level message."""
        ...

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info-level message."""
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Log a warning-level message.

        Lockouts, rate limits and rejected codes are logged here, never at
        error level.
        """
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level message with optional exception details.

        Args:
            message: Human-readable message (avoid f-strings; use context).
            error: Optional exception instance; implementation may include
                error_type and error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical-level message for catastrophic failures."""
        ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return new logger with permanently bound context.

        Args:
            **context: Context to bind to all future logs.

        Returns:
            New logger instance with bound context.
        """
        ...
