"""Users resource router.

Endpoints:
    POST /api/v1/users     - Create user (registration)
    GET  /api/v1/users/me  - Current identity
"""

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from src.application.commands import RegisterIdentity
from src.application.commands.handlers.register_identity_handler import (
    RegisterIdentityHandler,
)
from src.application.queries import GetCurrentIdentity
from src.application.queries.handlers.auth_query_handlers import (
    GetCurrentIdentityHandler,
)
from src.core.container import get_current_identity_handler, get_register_identity_handler
from src.core.result import Failure, Success
from src.presentation.api.middleware.auth_dependencies import SignedIn
from src.presentation.api.middleware.trace_middleware import get_trace_id
from src.presentation.api.v1.cookies import set_auth_cookies
from src.presentation.api.v1.errors import ErrorResponseBuilder, ProblemDetails
from src.schemas.auth_schemas import (
    IdentityResponse,
    UserCreateRequest,
    UserCreateResponse,
)

router = APIRouter(prefix="/users", tags=["Users"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=UserCreateResponse,
    responses={
        409: {"description": "Email or username taken", "model": ProblemDetails},
        422: {"description": "Invalid input", "model": ProblemDetails},
    },
    summary="Create user",
    description="Register a new identity and sign it in. A verification email is sent.",
)
async def create_user(
    request: Request,
    response: Response,
    data: UserCreateRequest,
    handler: RegisterIdentityHandler = Depends(get_register_identity_handler),
) -> UserCreateResponse | JSONResponse:
    """Create a new user (registration).

    POST /api/v1/users → 201 Created

    Returns:
        UserCreateResponse with tokens on success (cookies set as well).
        JSONResponse with error on failure (409).
    """
    command = RegisterIdentity(
        email=data.email,
        username=data.username,
        password=data.password,
        display_name=data.display_name,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
    result = await handler.handle(command)

    match result:
        case Success(value=authenticated):
            set_auth_cookies(response, authenticated.tokens)
            return UserCreateResponse(
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


@router.get(
    "/me",
    response_model=IdentityResponse,
    responses={401: {"description": "Not authenticated"}},
    summary="Current identity",
)
async def get_me(
    request: Request,
    current: SignedIn,
    handler: GetCurrentIdentityHandler = Depends(get_current_identity_handler),
) -> IdentityResponse | JSONResponse:
    result = await handler.handle(GetCurrentIdentity(identity_id=current.identity_id))

    match result:
        case Success(value=identity):
            return IdentityResponse.from_identity(identity)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(
                error=error,
                request=request,
                trace_id=get_trace_id() or "",
            )
