"""Authentication request/response schemas.

Pydantic models for API request validation and response serialization.
Kept separate from domain entities - these are HTTP-layer concerns.

RESTful Endpoints (resource-based):
    POST   /api/v1/users                           - Create user (registration)
    GET    /api/v1/users/me                        - Current identity
    POST   /api/v1/sessions                        - Create session (login)
    DELETE /api/v1/sessions/current                - Delete session (logout)
    POST   /api/v1/tokens                          - Create tokens (refresh)
    POST   /api/v1/email-verifications             - Create verification (verify email)
    POST   /api/v1/email-verification-tokens       - Resend verification email
    POST   /api/v1/password-reset-tokens           - Create reset token (request)
    GET    /api/v1/password-reset-tokens/{token}   - Validate reset token
    POST   /api/v1/password-resets                 - Create reset (execute)
"""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.domain.entities import Identity
from src.domain.types import (
    ActionTokenValue,
    Email,
    Identifier,
    Password,
    RefreshToken,
    Username,
)


# =============================================================================
# Identity
# =============================================================================


class IdentityResponse(BaseModel):
    """Public view of an identity (never hashes or secrets)."""

    id: UUID = Field(..., description="Identity ID")
    email: str = Field(..., description="Email address")
    username: str = Field(..., description="Username")
    display_name: str | None = Field(None, description="Display name")
    role: str = Field(..., description="Role claim (OWNER, ADMIN, USER)")
    email_verified: bool = Field(..., description="Whether the email was verified")
    created_at: datetime = Field(..., description="Registration time")

    @classmethod
    def from_identity(cls, identity: Identity) -> "IdentityResponse":
        return cls(
            id=identity.id,
            email=identity.email,
            username=identity.username,
            display_name=identity.display_name,
            role=identity.role.value,
            email_verified=identity.is_email_verified,
            created_at=identity.created_at,
        )


class TokenFields(BaseModel):
    """Token pair as returned in response bodies (also set as cookies)."""

    access_token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., description="JWT refresh token (rotates on use)")
    token_type: str = Field(
        default="bearer", description="Token type for Authorization header"
    )
    expires_in: int = Field(
        default=900, description="Access token expiration in seconds"
    )


# =============================================================================
# Registration
# =============================================================================


class UserCreateRequest(BaseModel):
    """Request schema for user creation (registration).

    POST /api/v1/users
    Returns: 201 Created
    """

    email: Email
    username: Username
    password: Password
    display_name: str | None = Field(
        None,
        max_length=100,
        description="Optional name used in emails",
        examples=["Alice"],
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "a@x.com",
                "username": "a",
                "password": "Secr3t!23",
            }
        }
    )


class UserCreateResponse(TokenFields):
    """Response schema for user creation (201 Created).

    Registration signs the new identity in; a verification email is sent.
    """

    user: IdentityResponse
    message: str = Field(
        default="Registration successful. Please check your email to verify your account.",
        description="Success message",
    )


# =============================================================================
# Login
# =============================================================================


class SessionCreateRequest(BaseModel):
    """Request schema for session creation (login).

    POST /api/v1/sessions
    Returns: 201 Created with tokens, or 200 OK with a second-factor challenge
    """

    identifier: Identifier = Field(
        ...,
        description="Email or username",
        examples=["a@x.com"],
    )
    password: str = Field(
        ...,
        min_length=1,
        max_length=128,
        description="Password",
        examples=["Secr3t!23"],
    )
    two_factor_code: str | None = Field(
        None,
        max_length=16,
        description="TOTP code, recovery code or emailed code (second call)",
        examples=["123456"],
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "identifier": "a@x.com",
                "password": "Secr3t!23",
            }
        }
    )


class SessionCreateResponse(TokenFields):
    """Response schema for session creation (201 Created)."""

    user: IdentityResponse


class TwoFactorChallengeResponse(BaseModel):
    """Password accepted, second factor required (200 OK, no tokens)."""

    requires_2fa: bool = Field(default=True, description="Always true")
    method: Literal["email", "totp"] = Field(
        ..., description="email when a code was just sent, totp otherwise"
    )
    message: str = Field(..., description="Instruction for the client")


class SessionDeleteRequest(BaseModel):
    """Request schema for session deletion (logout).

    DELETE /api/v1/sessions/current
    Without a refresh token (body or cookie) every session ends.
    """

    refresh_token: str | None = Field(
        None, description="Refresh token of the session to end"
    )


# =============================================================================
# Token Refresh
# =============================================================================


class TokenCreateRequest(BaseModel):
    """Request schema for token refresh.

    POST /api/v1/tokens
    The refresh token may come from the body or the refresh_token cookie.
    """

    refresh_token: RefreshToken | None = None


class TokenCreateResponse(TokenFields):
    """Response schema for token refresh (201 Created)."""


# =============================================================================
# Email Verification
# =============================================================================


class EmailVerificationCreateRequest(BaseModel):
    """POST /api/v1/email-verifications"""

    token: ActionTokenValue


class EmailVerificationTokenCreateRequest(BaseModel):
    """POST /api/v1/email-verification-tokens (resend)"""

    email: Email


# =============================================================================
# Password Reset
# =============================================================================


class PasswordResetTokenCreateRequest(BaseModel):
    """POST /api/v1/password-reset-tokens"""

    email: Email


class PasswordResetTokenStatusResponse(BaseModel):
    """GET /api/v1/password-reset-tokens/{token}"""

    valid: bool
    masked_email: str | None = Field(None, examples=["a***@x.com"])


class PasswordResetCreateRequest(BaseModel):
    """POST /api/v1/password-resets"""

    token: ActionTokenValue
    new_password: Password


class MessageResponse(BaseModel):
    """Generic acknowledgement."""

    message: str
