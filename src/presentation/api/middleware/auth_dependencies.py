"""JWT authentication dependencies.

FastAPI dependencies for extracting and validating access tokens. The token
is read from the ``Authorization: Bearer`` header, falling back to the
``access_token`` cookie set at login.

Usage:
    # Protected route (requires auth)
    @router.get("/users/me")
    async def get_me(current: SignedIn):
        return {"id": str(current.identity_id)}

    # Administrators only
    @router.delete("/admin/lockouts/{identifier}")
    async def unlock(current: AdminIdentity):
        ...
"""

from dataclasses import dataclass
from typing import Annotated
from uuid import UUID

from fastapi import Cookie, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.core.container import get_token_service
from src.core.result import Failure, Success
from src.domain.enums import UserRole
from src.domain.protocols import TokenGenerationProtocol

ACCESS_TOKEN_COOKIE = "access_token"
REFRESH_TOKEN_COOKIE = "refresh_token"

# auto_error=False so the cookie fallback gets a chance
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True, slots=True, kw_only=True)
class CurrentIdentity:
    """Authenticated identity information from the access token.

    Attributes:
        identity_id: Identity's unique identifier (from 'sub' claim).
        email: Email address (from 'email' claim).
        username: Username (from 'username' claim).
        role: Role claim.
        token_jti: Token unique identifier.
    """

    identity_id: UUID
    email: str
    username: str
    role: UserRole
    token_jti: str | None = None


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_identity(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
    token_service: Annotated[TokenGenerationProtocol, Depends(get_token_service)],
    access_token: Annotated[str | None, Cookie(alias=ACCESS_TOKEN_COOKIE)] = None,
) -> CurrentIdentity:
    """Get current authenticated identity from the access token.

    Args:
        credentials: Bearer token from Authorization header.
        token_service: JWT token service (injected).
        access_token: Access token cookie (used when no header is sent).

    Returns:
        CurrentIdentity with claims from a valid token.

    Raises:
        HTTPException 401: If token is missing, invalid, or expired.
    """
    token = credentials.credentials if credentials else access_token
    if not token:
        raise _unauthorized("Not authenticated")

    result = token_service.validate_access_token(token)

    match result:
        case Success(value=payload):
            try:
                return CurrentIdentity(
                    identity_id=UUID(payload["sub"]),
                    email=payload["email"],
                    username=payload["username"],
                    role=UserRole(payload["role"]),
                    token_jti=payload.get("jti"),
                )
            except (KeyError, ValueError) as e:
                raise _unauthorized("Invalid token payload") from e

        case Failure(error=error):
            # Token invalid or expired
            raise _unauthorized(error.message)

    raise _unauthorized("Not authenticated")


def require_any_role(*required_roles: UserRole):
    """Create a dependency that requires any of the specified roles.

    Args:
        *required_roles: Roles where the identity must hold at least one.

    Returns:
        Dependency function that validates the role claim.

    Raises:
        HTTPException 403: If the identity holds none of the roles.
    """

    async def role_checker(
        current: Annotated[CurrentIdentity, Depends(get_current_identity)],
    ) -> CurrentIdentity:
        if current.role not in required_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient role",
            )
        return current

    return role_checker


# Type aliases for cleaner route signatures
SignedIn = Annotated[CurrentIdentity, Depends(get_current_identity)]
AdminIdentity = Annotated[
    CurrentIdentity, Depends(require_any_role(UserRole.OWNER, UserRole.ADMIN))
]
