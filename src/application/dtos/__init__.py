"""Application DTOs.

Result dataclasses returned by command and query handlers.
"""

from src.application.dtos.auth_dtos import (
    AuthenticatedIdentity,
    LockoutInfo,
    ResetTokenStatus,
    TokenPair,
    TwoFactorChallenge,
)
from src.application.dtos.two_factor_dtos import TotpProvisioning, TwoFactorStatus

__all__ = [
    "AuthenticatedIdentity",
    "LockoutInfo",
    "ResetTokenStatus",
    "TokenPair",
    "TotpProvisioning",
    "TwoFactorChallenge",
    "TwoFactorStatus",
]
