"""Domain protocols (ports) package.

Infrastructure adapters implement these protocols without inheritance.

Usage:
    from src.domain.protocols import CacheProtocol, PasswordHashingProtocol
    from src.domain.protocols import IdentityRepository, SessionRepository
"""

# Service protocols
from src.domain.protocols.audit_protocol import AuditProtocol
from src.domain.protocols.cache_keys_protocol import CacheKeysProtocol
from src.domain.protocols.cache_protocol import CacheProtocol
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.notifier_protocol import NotifierProtocol
from src.domain.protocols.password_hashing_protocol import PasswordHashingProtocol
from src.domain.protocols.secret_codec_protocol import SecretCodecProtocol
from src.domain.protocols.token_generation_protocol import (
    IssuedTokens,
    TokenGenerationProtocol,
)
from src.domain.protocols.totp_authenticator_protocol import (
    TotpAuthenticatorProtocol,
)

# Repository protocols
from src.domain.protocols.action_token_repository import ActionTokenRepository
from src.domain.protocols.email_otp_challenge_repository import (
    EmailOtpChallengeRepository,
)
from src.domain.protocols.identity_repository import IdentityRepository
from src.domain.protocols.login_attempt_repository import LoginAttemptRepository
from src.domain.protocols.second_factor_repository import SecondFactorRepository
from src.domain.protocols.session_repository import SessionRepository

__all__ = [
    # Service protocols
    "AuditProtocol",
    "CacheKeysProtocol",
    "CacheProtocol",
    "IssuedTokens",
    "LoggerProtocol",
    "NotifierProtocol",
    "PasswordHashingProtocol",
    "SecretCodecProtocol",
    "TokenGenerationProtocol",
    "TotpAuthenticatorProtocol",
    # Repository protocols
    "ActionTokenRepository",
    "EmailOtpChallengeRepository",
    "IdentityRepository",
    "LoginAttemptRepository",
    "SecondFactorRepository",
    "SessionRepository",
]
