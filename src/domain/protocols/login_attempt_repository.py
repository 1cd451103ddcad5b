"""LoginAttemptRepository protocol (append-only)."""

from typing import Protocol

from src.domain.entities.login_attempt import LoginAttempt


class LoginAttemptRepository(Protocol):
    """Login attempt log. Records are never updated or deleted."""

    async def append(self, attempt: LoginAttempt) -> None:
        """Append one login attempt."""
        ...
