"""Secret codec errors.

Usage:
    match codec.decrypt(envelope):
        case Failure(error=DecodeError()):
            ...
"""

from dataclasses import dataclass

from src.core.enums import ErrorCode
from src.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class SecretCodecError(DomainError):
    """Base error for the secret codec."""

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class EncryptionKeyError(SecretCodecError):
    """Key is not exactly 32 bytes."""

    code: ErrorCode = ErrorCode.ENCRYPTION_KEY_INVALID


@dataclass(frozen=True, slots=True, kw_only=True)
class EncryptionError(SecretCodecError):
    """Encryption failed."""

    code: ErrorCode = ErrorCode.ENCRYPTION_FAILED


@dataclass(frozen=True, slots=True, kw_only=True)
class DecodeError(SecretCodecError):
    """Envelope is malformed or its integrity tag does not verify."""

    code: ErrorCode = ErrorCode.DECRYPTION_FAILED
    message: str = "Failed to decode secret"
