"""Security infrastructure adapters.

- Password hashing (argon2id)
- JWT access/refresh token generation and validation
- AES-256-GCM secret codec for TOTP secrets
- TOTP primitives (pyotp, qrcode)
- Opaque token generation and SHA-256 digests
"""

from src.infrastructure.security.aes_gcm_secret_codec import AESGCMSecretCodec
from src.infrastructure.security.argon2_password_service import Argon2PasswordService
from src.infrastructure.security.jwt_service import JWTService
from src.infrastructure.security.opaque_token_service import OpaqueTokenService
from src.infrastructure.security.pyotp_authenticator import PyOtpAuthenticator

__all__ = [
    "AESGCMSecretCodec",
    "Argon2PasswordService",
    "JWTService",
    "OpaqueTokenService",
    "PyOtpAuthenticator",
]
