"""Database models.

Importing this package registers every table on BaseModel.metadata
(Alembic autogenerate and Database.create_all rely on it).
"""

from src.infrastructure.persistence.models.action_token import ActionTokenModel
from src.infrastructure.persistence.models.audit_event import AuditEventModel
from src.infrastructure.persistence.models.email_otp_challenge import (
    EmailOtpChallengeModel,
)
from src.infrastructure.persistence.models.identity import (
    CredentialModel,
    IdentityModel,
)
from src.infrastructure.persistence.models.login_attempt import LoginAttemptModel
from src.infrastructure.persistence.models.second_factor import SecondFactorModel
from src.infrastructure.persistence.models.session import SessionModel

__all__ = [
    "ActionTokenModel",
    "AuditEventModel",
    "CredentialModel",
    "EmailOtpChallengeModel",
    "IdentityModel",
    "LoginAttemptModel",
    "SecondFactorModel",
    "SessionModel",
]
