"""Password reset routers.

Endpoints:
    POST /api/v1/password-reset-tokens          - Request a reset link
    GET  /api/v1/password-reset-tokens/{token}  - Check a reset link
    POST /api/v1/password-resets                - Set a new password
"""

from fastapi import APIRouter, Depends, Path, Request, status
from fastapi.responses import JSONResponse

from src.application.commands import ConfirmPasswordReset, RequestPasswordReset
from src.application.commands.handlers.account_recovery_handlers import (
    ConfirmPasswordResetHandler,
    RequestPasswordResetHandler,
)
from src.application.queries import ValidateResetToken
from src.application.queries.handlers.auth_query_handlers import (
    ValidateResetTokenHandler,
)
from src.core.container import (
    get_confirm_password_reset_handler,
    get_request_password_reset_handler,
    get_validate_reset_token_handler,
)
from src.core.result import Failure, Success
from src.presentation.api.middleware.trace_middleware import get_trace_id
from src.presentation.api.v1.errors import ErrorResponseBuilder, ProblemDetails
from src.schemas.auth_schemas import (
    MessageResponse,
    PasswordResetCreateRequest,
    PasswordResetTokenCreateRequest,
    PasswordResetTokenStatusResponse,
)

password_reset_tokens_router = APIRouter(
    prefix="/password-reset-tokens", tags=["Password Resets"]
)
password_resets_router = APIRouter(prefix="/password-resets", tags=["Password Resets"])


@password_reset_tokens_router.post(
    "",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=MessageResponse,
    responses={429: {"description": "Too many requests", "model": ProblemDetails}},
    summary="Request password reset",
    description="Email a reset link. The answer is the same for unknown addresses.",
)
async def create_password_reset_token(
    request: Request,
    data: PasswordResetTokenCreateRequest,
    handler: RequestPasswordResetHandler = Depends(get_request_password_reset_handler),
) -> MessageResponse | JSONResponse:
    command = RequestPasswordReset(
        email=data.email,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
    result = await handler.handle(command)

    match result:
        case Success():
            return MessageResponse(
                message="If the email is registered, a reset link has been sent"
            )
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(
                error=error,
                request=request,
                trace_id=get_trace_id() or "",
            )


@password_reset_tokens_router.get(
    "/{token}",
    response_model=PasswordResetTokenStatusResponse,
    summary="Check reset link",
)
async def get_password_reset_token(
    request: Request,
    token: str = Path(..., min_length=1, max_length=128),
    handler: ValidateResetTokenHandler = Depends(get_validate_reset_token_handler),
) -> PasswordResetTokenStatusResponse | JSONResponse:
    result = await handler.handle(ValidateResetToken(token=token))

    match result:
        case Success(value=token_status):
            return PasswordResetTokenStatusResponse(
                valid=token_status.valid,
                masked_email=token_status.masked_email,
            )
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(
                error=error,
                request=request,
                trace_id=get_trace_id() or "",
            )


@password_resets_router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=MessageResponse,
    responses={400: {"description": "Invalid or expired token", "model": ProblemDetails}},
    summary="Reset password",
    description="Set a new password. Every session of the identity ends.",
)
async def create_password_reset(
    request: Request,
    data: PasswordResetCreateRequest,
    handler: ConfirmPasswordResetHandler = Depends(get_confirm_password_reset_handler),
) -> MessageResponse | JSONResponse:
    command = ConfirmPasswordReset(
        token=data.token,
        new_password=data.new_password,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
    result = await handler.handle(command)

    match result:
        case Success():
            return MessageResponse(message="Password has been reset. Please sign in.")
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(
                error=error,
                request=request,
                trace_id=get_trace_id() or "",
            )
