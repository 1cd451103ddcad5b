"""AES-256-GCM secret codec.

Encrypts TOTP secrets before they reach the store.

Security Properties:
    - Confidentiality: Only holder of key can decrypt
    - Integrity: Tampering is detected via GCM authentication tag
    - Uniqueness: Random nonce per encryption prevents pattern analysis

Format:
    urlsafe_b64( nonce (12 bytes) || ciphertext || auth_tag (16 bytes) )

The envelope is self-describing: no key id, no version byte. A key
rotation therefore means re-encrypting every stored secret.
"""

import base64
import binascii
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from src.core.result import Failure, Result, Success
from src.domain.errors import DecodeError, EncryptionError, EncryptionKeyError

KEY_SIZE = 32


class AESGCMSecretCodec:
    """AES-256-GCM implementation of SecretCodecProtocol.

    Usage:
        >>> match AESGCMSecretCodec.create(bytes.fromhex(settings.encryption_key)):
        ...     case Success(value=codec):
        ...         envelope = codec.encrypt("JBSWY3DPEHPK3PXP")
        ...     case Failure(error=error):
        ...         ...

    Thread Safety:
        AESGCM instances are safe to share between threads.
    """

    NONCE_SIZE = 12  # 96 bits - NIST recommended for GCM
    TAG_SIZE = 16
    MIN_ENVELOPE_SIZE = NONCE_SIZE + TAG_SIZE

    def __init__(self, aesgcm: AESGCM) -> None:
        """Use AESGCMSecretCodec.create() instead of direct construction."""
        self._aesgcm = aesgcm

    @classmethod
    def create(cls, key: bytes) -> Result["AESGCMSecretCodec", EncryptionKeyError]:
        """Create a codec with a validated key.

        Args:
            key: 32-byte (256-bit) encryption key.

        Returns:
            Success(AESGCMSecretCodec) if the key is valid.
            Failure(EncryptionKeyError) for any other length.
        """
        if len(key) != KEY_SIZE:
            return Failure(
                error=EncryptionKeyError(
                    message=(
                        f"Encryption key must be exactly {KEY_SIZE} bytes, "
                        f"got {len(key)} bytes"
                    ),
                    details={
                        "expected_length": KEY_SIZE,
                        "actual_length": len(key),
                    },
                )
            )
        return Success(value=cls(AESGCM(key)))

    def encrypt(self, plaintext: str) -> Result[str, EncryptionError]:
        """Encrypt a secret into a text envelope.

        Args:
            plaintext: Secret to encrypt.

        Returns:
            Success(envelope) with a fresh nonce on every call.
        """
        try:
            nonce = os.urandom(self.NONCE_SIZE)
            sealed = self._aesgcm.encrypt(
                nonce, plaintext.encode("utf-8"), associated_data=None
            )
        except (OverflowError, UnicodeEncodeError) as e:
            return Failure(error=EncryptionError(message=f"Encryption failed: {e}"))
        return Success(value=base64.urlsafe_b64encode(nonce + sealed).decode("ascii"))

    def decrypt(self, envelope: str) -> Result[str, DecodeError]:
        """Decrypt an envelope produced by encrypt().

        Returns:
            Success(plaintext), or Failure(DecodeError) when the envelope is
            not base64, is too short, or fails authentication.
        """
        try:
            raw = base64.urlsafe_b64decode(envelope.encode("ascii"))
        except (binascii.Error, ValueError, UnicodeEncodeError):
            return Failure(error=DecodeError(message="Malformed secret envelope"))

        if len(raw) < self.MIN_ENVELOPE_SIZE:
            return Failure(
                error=DecodeError(
                    message="Secret envelope too short",
                    details={
                        "actual_length": len(raw),
                        "minimum_length": self.MIN_ENVELOPE_SIZE,
                    },
                )
            )

        nonce, sealed = raw[: self.NONCE_SIZE], raw[self.NONCE_SIZE :]
        try:
            plaintext = self._aesgcm.decrypt(nonce, sealed, associated_data=None)
        except InvalidTag:
            return Failure(
                error=DecodeError(
                    message="Secret envelope failed authentication (wrong key or tampered)"
                )
            )

        try:
            return Success(value=plaintext.decode("utf-8"))
        except UnicodeDecodeError:
            return Failure(error=DecodeError(message="Decrypted secret is not text"))
