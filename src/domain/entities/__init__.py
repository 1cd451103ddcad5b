"""Domain entities.

Pure business logic entities with no framework dependencies.
"""

from src.domain.entities.action_token import ActionToken
from src.domain.entities.audit_event import AuditEvent
from src.domain.entities.email_otp_challenge import EmailOtpChallenge
from src.domain.entities.identity import Credential, Identity
from src.domain.entities.login_attempt import LoginAttempt
from src.domain.entities.second_factor import SecondFactor
from src.domain.entities.session import Session

__all__ = [
    "ActionToken",
    "AuditEvent",
    "Credential",
    "EmailOtpChallenge",
    "Identity",
    "LoginAttempt",
    "SecondFactor",
    "Session",
]
