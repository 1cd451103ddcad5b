"""Sessions resource router.

RESTful endpoints for session management.

Endpoints:
    POST   /api/v1/sessions         - Create session (login)
    DELETE /api/v1/sessions/current - Delete session (logout)
"""

from typing import Annotated

from fastapi import APIRouter, Body, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from src.application.commands import LoginIdentity, LogoutIdentity
from src.application.commands.handlers.login_handler import LoginHandler
from src.application.commands.handlers.logout_handler import LogoutHandler
from src.application.dtos import AuthenticatedIdentity, TwoFactorChallenge
from src.core.container import get_login_handler, get_logout_handler
from src.core.result import Failure, Success
from src.presentation.api.middleware.auth_dependencies import SignedIn
from src.presentation.api.middleware.trace_middleware import get_trace_id
from src.presentation.api.v1.cookies import clear_auth_cookies, set_auth_cookies
from src.presentation.api.v1.errors import ErrorResponseBuilder, ProblemDetails
from src.schemas.auth_schemas import (
    IdentityResponse,
    SessionCreateRequest,
    SessionCreateResponse,
    SessionDeleteRequest,
    TwoFactorChallengeResponse,
)

router = APIRouter(prefix="/sessions", tags=["Sessions"])

_CHALLENGE_MESSAGES = {
    "email": "A verification code was sent to your email address",
    "totp": "Enter the code from your authenticator app",
}


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=SessionCreateResponse,
    responses={
        200: {
            "description": "Password accepted, second factor required",
            "model": TwoFactorChallengeResponse,
        },
        401: {"description": "Authentication failed", "model": ProblemDetails},
        403: {"description": "Email not verified", "model": ProblemDetails},
        423: {"description": "Account locked", "model": ProblemDetails},
        429: {"description": "Too many codes requested", "model": ProblemDetails},
    },
    summary="Create session",
    description=(
        "Authenticate with email or username and password. When a second "
        "factor is enabled the first call returns a challenge; repeat the call "
        "with two_factor_code to receive tokens."
    ),
)
async def create_session(
    request: Request,
    response: Response,
    data: SessionCreateRequest,
    handler: LoginHandler = Depends(get_login_handler),
) -> SessionCreateResponse | JSONResponse:
    """Create a new session (login).

    POST /api/v1/sessions → 201 Created (tokens) or 200 OK (challenge)

    Args:
        request: FastAPI request object.
        response: Response the auth cookies are set on.
        data: Identifier, password and optional second-factor code.
        handler: Login handler (injected).

    Returns:
        SessionCreateResponse on success (201 Created).
        TwoFactorChallengeResponse when a second factor is needed (200 OK).
        JSONResponse with error on failure (401/403/423/429).
    """
    command = LoginIdentity(
        identifier=data.identifier,
        password=data.password,
        two_factor_code=data.two_factor_code,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
    result = await handler.handle(command)

    match result:
        case Success(value=TwoFactorChallenge() as challenge):
            return JSONResponse(
                status_code=status.HTTP_200_OK,
                content=TwoFactorChallengeResponse(
                    requires_2fa=challenge.requires_2fa,
                    method=challenge.method,
                    message=_CHALLENGE_MESSAGES[challenge.method],
                ).model_dump(),
            )
        case Success(value=AuthenticatedIdentity() as authenticated):
            set_auth_cookies(response, authenticated.tokens)
            return SessionCreateResponse(
                user=IdentityResponse.from_identity(authenticated.identity),
                access_token=authenticated.tokens.access_token,
                refresh_token=authenticated.tokens.refresh_token,
                token_type=authenticated.tokens.token_type,
                expires_in=authenticated.tokens.expires_in,
            )
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(
                error=error,
                request=request,
                trace_id=get_trace_id() or "",
            )


@router.delete(
    "/current",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model=None,
    responses={
        204: {"description": "Session deleted successfully"},
        401: {"description": "Not authenticated"},
    },
    summary="Delete current session",
    description=(
        "Logout. With a refresh token only that session ends; without one "
        "every session of the identity ends."
    ),
)
async def delete_current_session(
    request: Request,
    current: SignedIn,
    data: Annotated[SessionDeleteRequest | None, Body()] = None,
    handler: LogoutHandler = Depends(get_logout_handler),
) -> Response:
    """Delete current session (logout).

    DELETE /api/v1/sessions/current → 204 No Content

    The current access token remains valid until it expires. Only a body
    refresh token narrows the logout; the refresh cookie is scoped to
    /tokens and is not consulted.
    """
    command = LogoutIdentity(
        identity_id=current.identity_id,
        refresh_token=data.refresh_token if data else None,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
    result = await handler.handle(command)

    match result:
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(
                error=error,
                request=request,
                trace_id=get_trace_id() or "",
            )
        case _:
            response = Response(status_code=status.HTTP_204_NO_CONTENT)
            clear_auth_cookies(response)
            return response
