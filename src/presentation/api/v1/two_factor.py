"""Two-factor resource router.

Endpoints:
    GET    /api/v1/two-factor                    - Which factors are enabled
    POST   /api/v1/two-factor/totp               - Start TOTP setup
    POST   /api/v1/two-factor/totp/confirmation  - Confirm TOTP setup (recovery codes)
    POST   /api/v1/two-factor/email              - Enable email codes
    DELETE /api/v1/two-factor/{method}           - Disable a factor (password required)
    POST   /api/v1/two-factor/codes              - Resend the login code (unauthenticated)
"""

from typing import Literal

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from src.application.commands import (
    ConfirmTotpSetup,
    DisableTwoFactor,
    EnableEmailOtp,
    InitiateTotpSetup,
    ResendOtp,
)
from src.application.commands.handlers.two_factor_handlers import (
    ConfirmTotpSetupHandler,
    DisableTwoFactorHandler,
    EnableEmailOtpHandler,
    InitiateTotpSetupHandler,
    ResendOtpHandler,
)
from src.application.queries import GetTwoFactorStatus
from src.application.queries.handlers.auth_query_handlers import (
    GetTwoFactorStatusHandler,
)
from src.core.container import (
    get_confirm_totp_setup_handler,
    get_disable_two_factor_handler,
    get_enable_email_otp_handler,
    get_initiate_totp_setup_handler,
    get_resend_otp_handler,
    get_two_factor_status_handler,
)
from src.core.errors import DomainError
from src.core.result import Failure, Success
from src.domain.enums import SecondFactorType
from src.presentation.api.middleware.auth_dependencies import SignedIn
from src.presentation.api.middleware.trace_middleware import get_trace_id
from src.presentation.api.v1.errors import ErrorResponseBuilder, ProblemDetails
from src.schemas.auth_schemas import MessageResponse
from src.schemas.two_factor_schemas import (
    OtpResendRequest,
    RecoveryCodesResponse,
    TotpConfirmRequest,
    TotpSetupResponse,
    TwoFactorDisableRequest,
    TwoFactorStatusResponse,
)

router = APIRouter(prefix="/two-factor", tags=["Two-Factor"])

_FACTOR_TYPES = {"totp": SecondFactorType.TOTP, "email": SecondFactorType.EMAIL}


def _error(request: Request, error: DomainError) -> JSONResponse:
    return ErrorResponseBuilder.from_domain_error(
        error=error,
        request=request,
        trace_id=get_trace_id() or "",
    )


def _ip(request: Request) -> str | None:
    return request.client.host if request.client else None


@router.get(
    "",
    response_model=TwoFactorStatusResponse,
    summary="Two-factor status",
)
async def get_two_factor_status(
    request: Request,
    current: SignedIn,
    handler: GetTwoFactorStatusHandler = Depends(get_two_factor_status_handler),
) -> TwoFactorStatusResponse | JSONResponse:
    result = await handler.handle(GetTwoFactorStatus(identity_id=current.identity_id))

    match result:
        case Success(value=factors):
            return TwoFactorStatusResponse(
                totp=factors.totp,
                email=factors.email,
                recovery_codes_remaining=factors.recovery_codes_remaining,
            )
        case Failure(error=error):
            return _error(request, error)


@router.post(
    "/totp",
    status_code=status.HTTP_201_CREATED,
    response_model=TotpSetupResponse,
    summary="Start TOTP setup",
    description=(
        "Generate a new authenticator secret. The factor stays disabled until "
        "a code from the app is confirmed. Starting again replaces the secret."
    ),
)
async def create_totp_setup(
    request: Request,
    current: SignedIn,
    handler: InitiateTotpSetupHandler = Depends(get_initiate_totp_setup_handler),
) -> TotpSetupResponse | JSONResponse:
    command = InitiateTotpSetup(
        identity_id=current.identity_id,
        label=current.email,
        ip_address=_ip(request),
        user_agent=request.headers.get("user-agent"),
    )
    result = await handler.handle(command)

    match result:
        case Success(value=provisioning):
            return TotpSetupResponse(
                secret=provisioning.secret,
                otpauth_uri=provisioning.otpauth_uri,
                qr_code=provisioning.qr_code,
            )
        case Failure(error=error):
            return _error(request, error)


@router.post(
    "/totp/confirmation",
    status_code=status.HTTP_201_CREATED,
    response_model=RecoveryCodesResponse,
    responses={
        401: {"description": "Code did not match", "model": ProblemDetails},
        404: {"description": "Setup not started", "model": ProblemDetails},
    },
    summary="Confirm TOTP setup",
    description="Enable TOTP with a current code. Returns recovery codes once.",
)
async def confirm_totp_setup(
    request: Request,
    current: SignedIn,
    data: TotpConfirmRequest,
    handler: ConfirmTotpSetupHandler = Depends(get_confirm_totp_setup_handler),
) -> RecoveryCodesResponse | JSONResponse:
    command = ConfirmTotpSetup(
        identity_id=current.identity_id,
        code=data.code,
        ip_address=_ip(request),
        user_agent=request.headers.get("user-agent"),
    )
    result = await handler.handle(command)

    match result:
        case Success(value=codes):
            return RecoveryCodesResponse(recovery_codes=codes)
        case Failure(error=error):
            return _error(request, error)


@router.post(
    "/email",
    status_code=status.HTTP_201_CREATED,
    response_model=MessageResponse,
    summary="Enable email codes",
)
async def enable_email_otp(
    request: Request,
    current: SignedIn,
    handler: EnableEmailOtpHandler = Depends(get_enable_email_otp_handler),
) -> MessageResponse | JSONResponse:
    command = EnableEmailOtp(
        identity_id=current.identity_id,
        ip_address=_ip(request),
        user_agent=request.headers.get("user-agent"),
    )
    result = await handler.handle(command)

    match result:
        case Success():
            return MessageResponse(message="Email verification codes enabled")
        case Failure(error=error):
            return _error(request, error)


@router.delete(
    "/{method}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model=None,
    responses={
        401: {"description": "Wrong password or code", "model": ProblemDetails},
    },
    summary="Disable a second factor",
)
async def disable_two_factor(
    request: Request,
    method: Literal["totp", "email"],
    current: SignedIn,
    data: TwoFactorDisableRequest,
    handler: DisableTwoFactorHandler = Depends(get_disable_two_factor_handler),
) -> Response:
    command = DisableTwoFactor(
        identity_id=current.identity_id,
        password=data.password,
        method=_FACTOR_TYPES[method],
        code=data.code,
        ip_address=_ip(request),
        user_agent=request.headers.get("user-agent"),
    )
    result = await handler.handle(command)

    match result:
        case Failure(error=error):
            return _error(request, error)
        case _:
            return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/codes",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=MessageResponse,
    responses={429: {"description": "Too many codes requested", "model": ProblemDetails}},
    summary="Resend login code",
    description="Email a new login code. The answer is the same for unknown identifiers.",
)
async def resend_otp(
    request: Request,
    data: OtpResendRequest,
    handler: ResendOtpHandler = Depends(get_resend_otp_handler),
) -> MessageResponse | JSONResponse:
    command = ResendOtp(
        identifier=data.identifier,
        ip_address=_ip(request),
        user_agent=request.headers.get("user-agent"),
    )
    result = await handler.handle(command)

    match result:
        case Success():
            return MessageResponse(
                message="If the account exists, a new code has been sent"
            )
        case Failure(error=error):
            return _error(request, error)
