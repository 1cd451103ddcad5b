"""Repository implementations (adapters).

Each class structurally implements the matching protocol in
src.domain.protocols and takes the request-scoped AsyncSession.
"""

from src.infrastructure.persistence.repositories.action_token_repository import (
    ActionTokenRepository,
)
from src.infrastructure.persistence.repositories.email_otp_challenge_repository import (
    EmailOtpChallengeRepository,
)
from src.infrastructure.persistence.repositories.identity_repository import (
    IdentityRepository,
)
from src.infrastructure.persistence.repositories.login_attempt_repository import (
    LoginAttemptRepository,
)
from src.infrastructure.persistence.repositories.second_factor_repository import (
    SecondFactorRepository,
)
from src.infrastructure.persistence.repositories.session_repository import (
    SessionRepository,
)

__all__ = [
    "ActionTokenRepository",
    "EmailOtpChallengeRepository",
    "IdentityRepository",
    "LoginAttemptRepository",
    "SecondFactorRepository",
    "SessionRepository",
]
