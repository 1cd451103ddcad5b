"""Token generation protocol for domain layer.

Two signed tokens per successful authentication:
- Access token: short-lived, stateless, trusted by signature and expiry
- Refresh token: long-lived, backed by a Session row for rotation and revocation

Each is signed with a distinct secret so one can never be replayed as the other.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol
from uuid import UUID

from src.core.result import Result
from src.domain.errors import InvalidAccessToken, InvalidRefreshToken


@dataclass(frozen=True, slots=True, kw_only=True)
class IssuedTokens:
    """Freshly issued token pair.

    Attributes:
        access_token: Signed access token.
        refresh_token: Signed refresh token.
        expires_in: Access token lifetime in seconds.
        refresh_expires_at: Refresh token expiry (also the session expiry).
    """

    access_token: str
    refresh_token: str
    expires_in: int
    refresh_expires_at: datetime


class TokenGenerationProtocol(Protocol):
    """Access and refresh token interface.

    Usage:
        tokens = token_service.issue_token_pair(
            identity_id=identity.id,
            email=identity.email,
            username=identity.username,
            role=identity.role.value,
        )
        result = token_service.validate_refresh_token(tokens.refresh_token)
    """

    def issue_token_pair(
        self,
        *,
        identity_id: UUID,
        email: str,
        username: str,
        role: str,
    ) -> IssuedTokens:
        """Sign a new access and refresh token carrying the identity claims."""
        ...

    def validate_access_token(
        self, token: str
    ) -> Result[dict[str, Any], InvalidAccessToken]:
        """Verify signature, expiry and token type of an access token.

        Returns:
            Success(claims) or Failure(InvalidAccessToken).
        """
        ...

    def validate_refresh_token(
        self, token: str
    ) -> Result[dict[str, Any], InvalidRefreshToken]:
        """Verify signature, expiry and token type of a refresh token.

        Returns:
            Success(claims) or Failure(InvalidRefreshToken).
        """
        ...
