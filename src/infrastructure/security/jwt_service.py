"""JWT token service (adapter).

Implements TokenGenerationProtocol using PyJWT with HMAC-SHA256.

Architecture:
    - Implements TokenGenerationProtocol (no inheritance required)
    - Structural typing via Protocol
    - Injected via dependency container

Security:
    - HMAC-SHA256 (HS256) algorithm, 256-bit secret minimum
    - Access and refresh tokens signed with distinct secrets
    - ``type`` claim checked on validation so tokens are not interchangeable
    - Unique JWT ID (jti, UUIDv7) so two tokens issued in the same second
      never collide (session rows store the refresh token digest)
"""

from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

import jwt
from jwt.exceptions import InvalidTokenError
from uuid_extensions import uuid7

from src.core.result import Failure, Result, Success
from src.domain.errors import InvalidAccessToken, InvalidRefreshToken
from src.domain.protocols import IssuedTokens

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


class JWTService:
    """JWT token generation and validation service.

    Usage:
        from src.core.container import get_token_service

        token_service = get_token_service()
        tokens = token_service.issue_token_pair(
            identity_id=identity.id,
            email=identity.email,
            username=identity.username,
            role=identity.role.value,
        )
        result = token_service.validate_access_token(tokens.access_token)
    """

    def __init__(
        self,
        secret_key: str,
        refresh_secret_key: str,
        access_token_lifetime: timedelta = timedelta(minutes=15),
        refresh_token_lifetime: timedelta = timedelta(days=7),
    ) -> None:
        """Initialize JWT service.

        Args:
            secret_key: Access token signing secret (>= 32 bytes).
            refresh_secret_key: Refresh token signing secret (>= 32 bytes).
            access_token_lifetime: Access token lifetime.
            refresh_token_lifetime: Refresh token lifetime.

        Raises:
            ValueError: If a secret is too short or both secrets are equal.
        """
        if len(secret_key) < 32 or len(refresh_secret_key) < 32:
            msg = "JWT secret keys must be at least 32 bytes (256 bits)"
            raise ValueError(msg)
        if secret_key == refresh_secret_key:
            msg = "Access and refresh tokens must use distinct secrets"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._refresh_secret_key = refresh_secret_key
        self._access_token_lifetime = access_token_lifetime
        self._refresh_token_lifetime = refresh_token_lifetime
        self._algorithm = "HS256"

    def issue_token_pair(
        self,
        *,
        identity_id: UUID,
        email: str,
        username: str,
        role: str,
    ) -> IssuedTokens:
        """Sign an access and a refresh token for the identity.

        Example:
            >>> tokens = service.issue_token_pair(
            ...     identity_id=uuid7(), email="a@x.com", username="a", role="USER"
            ... )
            >>> len(tokens.access_token.split("."))
            3
        """
        now = datetime.now(UTC)
        claims = {
            "sub": str(identity_id),
            "email": email,
            "username": username,
            "role": role,
        }
        refresh_expires_at = now + self._refresh_token_lifetime
        access_token = self._encode(
            claims,
            ACCESS_TOKEN_TYPE,
            now,
            now + self._access_token_lifetime,
            self._secret_key,
        )
        refresh_token = self._encode(
            claims,
            REFRESH_TOKEN_TYPE,
            now,
            refresh_expires_at,
            self._refresh_secret_key,
        )
        return IssuedTokens(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_in=int(self._access_token_lifetime.total_seconds()),
            refresh_expires_at=refresh_expires_at,
        )

    def validate_access_token(
        self, token: str
    ) -> Result[dict[str, Any], InvalidAccessToken]:
        """Validate an access token and extract its claims.

        Returns:
            Success(claims) or Failure(InvalidAccessToken) when the signature,
            expiry or type claim is wrong.
        """
        claims = self._decode(token, self._secret_key, ACCESS_TOKEN_TYPE)
        if claims is None:
            return Failure(error=InvalidAccessToken())
        return Success(value=claims)

    def validate_refresh_token(
        self, token: str
    ) -> Result[dict[str, Any], InvalidRefreshToken]:
        """Validate a refresh token and extract its claims."""
        claims = self._decode(token, self._refresh_secret_key, REFRESH_TOKEN_TYPE)
        if claims is None:
            return Failure(error=InvalidRefreshToken())
        return Success(value=claims)

    def _encode(
        self,
        claims: dict[str, str],
        token_type: str,
        issued_at: datetime,
        expires_at: datetime,
        secret: str,
    ) -> str:
        payload = {
            **claims,
            "type": token_type,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
            "jti": str(uuid7()),
        }
        token: str = jwt.encode(payload, secret, algorithm=self._algorithm)
        return token

    def _decode(
        self, token: str, secret: str, token_type: str
    ) -> dict[str, Any] | None:
        try:
            # Verifies signature and exp
            payload: dict[str, Any] = jwt.decode(
                token,
                secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp", "type"]},
            )
        except InvalidTokenError:
            return None
        if payload.get("type") != token_type:
            return None
        return payload
