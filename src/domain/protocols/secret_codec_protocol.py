"""Secret codec protocol.

Authenticated symmetric encryption of TOTP secrets at rest. The envelope
embeds the nonce and integrity tag, so the same key decrypts every prior
ciphertext.
"""

from typing import Protocol

from src.core.result import Result
from src.domain.errors import DecodeError, SecretCodecError


class SecretCodecProtocol(Protocol):
    """Encrypt and decrypt short secrets.

    Usage:
        match codec.encrypt(totp_secret):
            case Success(value=envelope):
                factor.secret = envelope
    """

    def encrypt(self, plaintext: str) -> Result[str, SecretCodecError]:
        """Encrypt plaintext into a text-safe envelope (fresh nonce per call)."""
        ...

    def decrypt(self, envelope: str) -> Result[str, DecodeError]:
        """Decrypt an envelope.

        Returns:
            Failure(DecodeError) if the envelope is malformed or its tag does
            not verify (wrong key, tampering).
        """
        ...
