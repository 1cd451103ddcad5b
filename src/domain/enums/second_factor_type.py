"""Second factor types."""

from enum import Enum


class SecondFactorType(str, Enum):
    """Kinds of second factor an identity can enable.

    TOTP: authenticator app codes (30-second steps), with recovery codes.
    EMAIL: six-digit one-time codes delivered by email.
    """

    TOTP = "TOTP"
    EMAIL = "EMAIL"
