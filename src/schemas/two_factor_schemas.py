"""Second-factor request/response schemas.

Endpoints:
    GET    /api/v1/two-factor                    - Status
    POST   /api/v1/two-factor/totp               - Start TOTP setup
    POST   /api/v1/two-factor/totp/confirmation  - Confirm TOTP setup
    POST   /api/v1/two-factor/email              - Enable email codes
    DELETE /api/v1/two-factor/{method}           - Disable a factor
    POST   /api/v1/two-factor/codes              - Resend login code
"""

from pydantic import BaseModel, Field

from src.domain.types import Identifier, SecondFactorCode


class TotpSetupResponse(BaseModel):
    """Provisioning material, shown once."""

    secret: str = Field(..., description="Base32 secret for manual entry")
    otpauth_uri: str = Field(..., description="Provisioning URI")
    qr_code: str = Field(..., description="PNG data URL of the QR code")


class TotpConfirmRequest(BaseModel):
    code: SecondFactorCode


class RecoveryCodesResponse(BaseModel):
    """Plaintext recovery codes (only ever returned here)."""

    recovery_codes: list[str]
    message: str = Field(
        default="Store these recovery codes somewhere safe. Each works once.",
    )


class TwoFactorDisableRequest(BaseModel):
    password: str = Field(..., min_length=1, max_length=128)
    code: str | None = Field(None, max_length=16)


class TwoFactorStatusResponse(BaseModel):
    totp: bool
    email: bool
    recovery_codes_remaining: int = 0


class OtpResendRequest(BaseModel):
    identifier: Identifier
