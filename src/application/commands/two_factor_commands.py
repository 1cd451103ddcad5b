"""Second-factor management commands (CQRS write operations)."""

from dataclasses import dataclass
from uuid import UUID

from src.domain.enums import SecondFactorType
from src.domain.types import Identifier, SecondFactorCode


@dataclass(frozen=True, kw_only=True)
class InitiateTotpSetup:
    """Provision an authenticator secret (not yet enabled).

    Attributes:
        identity_id: Authenticated identity.
        label: Account label for the authenticator app (the email).
    """

    identity_id: UUID
    label: str
    ip_address: str | None = None
    user_agent: str | None = None


@dataclass(frozen=True, kw_only=True)
class ConfirmTotpSetup:
    """Enable TOTP with the first code from the authenticator app."""

    identity_id: UUID
    code: SecondFactorCode
    ip_address: str | None = None
    user_agent: str | None = None


@dataclass(frozen=True, kw_only=True)
class EnableEmailOtp:
    """Turn on emailed codes as the second factor."""

    identity_id: UUID
    ip_address: str | None = None
    user_agent: str | None = None


@dataclass(frozen=True, kw_only=True)
class DisableTwoFactor:
    """Turn a second factor off.

    Attributes:
        identity_id: Authenticated identity.
        password: Current password (always required).
        method: Factor to disable.
        code: Optional current code for that factor; checked when given.
    """

    identity_id: UUID
    password: str
    method: SecondFactorType
    code: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None


@dataclass(frozen=True, kw_only=True)
class ResendOtp:
    """Send a new emailed login code.

    Attributes:
        identifier: Email or username used at login.
    """

    identifier: Identifier
    ip_address: str | None = None
    user_agent: str | None = None
