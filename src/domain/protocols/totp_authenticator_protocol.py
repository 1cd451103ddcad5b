"""TOTP authenticator protocol (RFC 6238 primitives)."""

from typing import Protocol


class TotpAuthenticatorProtocol(Protocol):
    """Secret generation, enrollment payloads and code checks.

    Codes are 6 digits over 30-second steps. ``valid_window`` is the
    number of steps accepted on either side of the current one.
    """

    def generate_secret(self) -> str:
        """Random base32 secret (at least 160 bits of entropy)."""
        ...

    def provisioning_uri(self, secret: str, label: str, issuer: str) -> str:
        """otpauth:// URI for authenticator apps."""
        ...

    def qr_code_data_url(self, uri: str) -> str:
        """PNG QR code of the URI as a data URL."""
        ...

    def verify(self, secret: str, code: str, valid_window: int) -> bool:
        """Check a code against the secret at the current time."""
        ...
