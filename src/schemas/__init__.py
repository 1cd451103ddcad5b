"""Request/response schemas for API endpoints.

All Pydantic models for HTTP request validation and response serialization.
Schemas are kept separate from domain entities (HTTP-layer concerns only).

Usage:
    from src.schemas import UserCreateRequest, SessionCreateResponse
"""

from src.schemas.audit_schemas import (
    AuditEventListResponse,
    AuditEventResponse,
    LockoutInfoResponse,
)
from src.schemas.auth_schemas import (
    # Identity
    IdentityResponse,
    MessageResponse,
    # User (registration)
    UserCreateRequest,
    UserCreateResponse,
    # Session (login/logout)
    SessionCreateRequest,
    SessionCreateResponse,
    SessionDeleteRequest,
    TwoFactorChallengeResponse,
    # Token (refresh)
    TokenCreateRequest,
    TokenCreateResponse,
    # Email verification
    EmailVerificationCreateRequest,
    EmailVerificationTokenCreateRequest,
    # Password reset
    PasswordResetCreateRequest,
    PasswordResetTokenCreateRequest,
    PasswordResetTokenStatusResponse,
)
from src.schemas.two_factor_schemas import (
    OtpResendRequest,
    RecoveryCodesResponse,
    TotpConfirmRequest,
    TotpSetupResponse,
    TwoFactorDisableRequest,
    TwoFactorStatusResponse,
)

__all__ = [
    # Identity
    "IdentityResponse",
    "MessageResponse",
    # Registration
    "UserCreateRequest",
    "UserCreateResponse",
    # Session
    "SessionCreateRequest",
    "SessionCreateResponse",
    "SessionDeleteRequest",
    "TwoFactorChallengeResponse",
    # Token
    "TokenCreateRequest",
    "TokenCreateResponse",
    # Email verification
    "EmailVerificationCreateRequest",
    "EmailVerificationTokenCreateRequest",
    # Password reset
    "PasswordResetCreateRequest",
    "PasswordResetTokenCreateRequest",
    "PasswordResetTokenStatusResponse",
    # Two-factor
    "OtpResendRequest",
    "RecoveryCodesResponse",
    "TotpConfirmRequest",
    "TotpSetupResponse",
    "TwoFactorDisableRequest",
    "TwoFactorStatusResponse",
    # Audit and lockouts
    "AuditEventListResponse",
    "AuditEventResponse",
    "LockoutInfoResponse",
]
