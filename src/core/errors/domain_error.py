"""Base domain error class for Railway-Oriented Programming.

DomainError is the base class for ALL application errors (core, domain,
infrastructure). Errors are data: they travel inside ``Failure`` and are
never raised.

Usage:
    from src.core.errors import DomainError

    @dataclass(frozen=True, slots=True, kw_only=True)
    class AccountLocked(DomainError):
        remaining_minutes: int
"""

from dataclasses import dataclass
from typing import Any

from src.core.enums import ErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class DomainError:
    """Base domain error (does NOT inherit from Exception).

    Attributes:
        code: Machine-readable error code (enum).
        message: Human-readable error message, safe to show to clients.
        details: Optional context for debugging (never secrets).
    """

    code: ErrorCode
    message: str
    details: dict[str, Any] | None = None

    def __str__(self) -> str:
        """String representation of error."""
        return f"{self.code.value}: {self.message}"
