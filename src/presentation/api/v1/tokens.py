"""Tokens resource router.

Endpoints:
    POST /api/v1/tokens - Create tokens (refresh)

The refresh token is read from the body or, for browser clients, from the
refresh_token cookie scoped to this path.
"""

from typing import Annotated

from fastapi import APIRouter, Body, Cookie, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from src.application.commands import RefreshTokens
from src.application.commands.handlers.refresh_tokens_handler import (
    RefreshTokensHandler,
)
from src.core.container import get_refresh_tokens_handler
from src.core.result import Failure, Success
from src.domain.errors import InvalidRefreshToken
from src.presentation.api.middleware.auth_dependencies import REFRESH_TOKEN_COOKIE
from src.presentation.api.middleware.trace_middleware import get_trace_id
from src.presentation.api.v1.cookies import set_auth_cookies
from src.presentation.api.v1.errors import ErrorResponseBuilder, ProblemDetails
from src.schemas.auth_schemas import TokenCreateRequest, TokenCreateResponse

router = APIRouter(prefix="/tokens", tags=["Tokens"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=TokenCreateResponse,
    responses={
        401: {"description": "Invalid or expired refresh token", "model": ProblemDetails},
    },
    summary="Create tokens",
    description="Rotate the refresh token. The previous refresh token stops working.",
)
async def create_tokens(
    request: Request,
    response: Response,
    data: Annotated[TokenCreateRequest | None, Body()] = None,
    refresh_cookie: Annotated[str | None, Cookie(alias=REFRESH_TOKEN_COOKIE)] = None,
    handler: RefreshTokensHandler = Depends(get_refresh_tokens_handler),
) -> TokenCreateResponse | JSONResponse:
    """Refresh tokens.

    POST /api/v1/tokens → 201 Created
    """
    refresh_token = (data.refresh_token if data else None) or refresh_cookie
    if not refresh_token:
        return ErrorResponseBuilder.from_domain_error(
            error=InvalidRefreshToken(),
            request=request,
            trace_id=get_trace_id() or "",
        )

    command = RefreshTokens(
        refresh_token=refresh_token,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
    result = await handler.handle(command)

    match result:
        case Success(value=tokens):
            set_auth_cookies(response, tokens)
            return TokenCreateResponse(
                access_token=tokens.access_token,
                refresh_token=tokens.refresh_token,
                token_type=tokens.token_type,
                expires_in=tokens.expires_in,
            )
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(
                error=error,
                request=request,
                trace_id=get_trace_id() or "",
            )
