"""Email verification routers.

Endpoints:
    POST /api/v1/email-verifications        - Verify email (redeem link token)
    POST /api/v1/email-verification-tokens  - Resend verification email
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from src.application.commands import ResendVerificationEmail, VerifyEmail
from src.application.commands.handlers.account_recovery_handlers import (
    ResendVerificationEmailHandler,
    VerifyEmailHandler,
)
from src.core.container import get_resend_verification_handler, get_verify_email_handler
from src.core.result import Failure, Success
from src.presentation.api.middleware.trace_middleware import get_trace_id
from src.presentation.api.v1.errors import ErrorResponseBuilder, ProblemDetails
from src.schemas.auth_schemas import (
    EmailVerificationCreateRequest,
    EmailVerificationTokenCreateRequest,
    MessageResponse,
)

email_verifications_router = APIRouter(
    prefix="/email-verifications", tags=["Email Verification"]
)
email_verification_tokens_router = APIRouter(
    prefix="/email-verification-tokens", tags=["Email Verification"]
)


@email_verifications_router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=MessageResponse,
    responses={400: {"description": "Invalid or expired token", "model": ProblemDetails}},
    summary="Verify email",
)
async def create_email_verification(
    request: Request,
    data: EmailVerificationCreateRequest,
    handler: VerifyEmailHandler = Depends(get_verify_email_handler),
) -> MessageResponse | JSONResponse:
    command = VerifyEmail(
        token=data.token,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
    result = await handler.handle(command)

    match result:
        case Success():
            return MessageResponse(message="Email address verified")
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(
                error=error,
                request=request,
                trace_id=get_trace_id() or "",
            )


@email_verification_tokens_router.post(
    "",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=MessageResponse,
    responses={
        409: {"description": "Already verified", "model": ProblemDetails},
        429: {"description": "Too many requests", "model": ProblemDetails},
    },
    summary="Resend verification email",
)
async def create_email_verification_token(
    request: Request,
    data: EmailVerificationTokenCreateRequest,
    handler: ResendVerificationEmailHandler = Depends(get_resend_verification_handler),
) -> MessageResponse | JSONResponse:
    result = await handler.handle(ResendVerificationEmail(email=data.email))

    match result:
        case Success():
            return MessageResponse(
                message="If the email is registered, a verification link has been sent"
            )
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(
                error=error,
                request=request,
                trace_id=get_trace_id() or "",
            )
