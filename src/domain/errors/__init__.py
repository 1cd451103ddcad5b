"""Domain errors package.

Usage:
    from src.domain.errors import AccountLocked, InvalidCredentials, DecodeError
"""

from src.domain.errors.audit_error import AuditError
from src.domain.errors.authentication_error import (
    AccountLocked,
    EmailAlreadyVerified,
    EmailNotVerified,
    InvalidAccessToken,
    InvalidCredentials,
    InvalidRefreshToken,
    InvalidResetToken,
    InvalidVerificationToken,
)
from src.domain.errors.secret_codec_error import (
    DecodeError,
    EncryptionError,
    EncryptionKeyError,
    SecretCodecError,
)
from src.domain.errors.two_factor_error import (
    ChallengeNotFound,
    InvalidCode,
    InvalidTwoFactorCode,
    RateLimited,
    SetupNotStarted,
    TooManyAttempts,
)

__all__ = [
    "AccountLocked",
    "AuditError",
    "ChallengeNotFound",
    "DecodeError",
    "EmailAlreadyVerified",
    "EmailNotVerified",
    "EncryptionError",
    "EncryptionKeyError",
    "InvalidAccessToken",
    "InvalidCode",
    "InvalidCredentials",
    "InvalidRefreshToken",
    "InvalidResetToken",
    "InvalidTwoFactorCode",
    "InvalidVerificationToken",
    "RateLimited",
    "SecretCodecError",
    "SetupNotStarted",
    "TooManyAttempts",
]
