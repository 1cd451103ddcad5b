"""Second-factor DTOs."""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class TotpProvisioning:
    """Material shown once while setting up an authenticator app.

    Attributes:
        secret: Base32 secret for manual entry.
        otpauth_uri: Provisioning URI encoded in the QR code.
        qr_code: PNG data URL of the QR code.
    """

    secret: str
    otpauth_uri: str
    qr_code: str


@dataclass(frozen=True, kw_only=True)
class TwoFactorStatus:
    """Which second factors are enabled."""

    totp: bool
    email: bool
    recovery_codes_remaining: int = 0
