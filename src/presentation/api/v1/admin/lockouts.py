"""Lockout administration router.

Admin-only endpoints (role OWNER or ADMIN).

Endpoints:
    GET    /api/v1/admin/lockouts/{identifier} - Lock state and failure count
    DELETE /api/v1/admin/lockouts/{identifier} - Lift a lock early
"""

from fastapi import APIRouter, Depends, Path, Request, Response, status
from fastapi.responses import JSONResponse

from src.application.commands import UnlockAccount
from src.application.commands.handlers.lockout_handlers import UnlockAccountHandler
from src.application.queries import GetLockoutInfo
from src.application.queries.handlers.auth_query_handlers import GetLockoutInfoHandler
from src.core.container import get_lockout_info_handler, get_unlock_account_handler
from src.core.result import Failure, Success
from src.presentation.api.middleware.auth_dependencies import AdminIdentity
from src.presentation.api.middleware.trace_middleware import get_trace_id
from src.presentation.api.v1.errors import ErrorResponseBuilder
from src.schemas.audit_schemas import LockoutInfoResponse

router = APIRouter(prefix="/lockouts")


@router.get(
    "/{identifier}",
    response_model=LockoutInfoResponse,
    responses={403: {"description": "Insufficient role"}},
    summary="Get lockout state",
)
async def get_lockout(
    request: Request,
    current: AdminIdentity,
    identifier: str = Path(..., min_length=1, max_length=255),
    handler: GetLockoutInfoHandler = Depends(get_lockout_info_handler),
) -> LockoutInfoResponse | JSONResponse:
    result = await handler.handle(GetLockoutInfo(identifier=identifier))

    match result:
        case Success(value=info):
            return LockoutInfoResponse(
                identifier=identifier,
                is_locked=info.is_locked,
                remaining_minutes=info.remaining_minutes,
                attempts=info.attempts,
            )
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(
                error=error,
                request=request,
                trace_id=get_trace_id() or "",
            )


@router.delete(
    "/{identifier}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model=None,
    responses={403: {"description": "Insufficient role"}},
    summary="Unlock account",
)
async def delete_lockout(
    request: Request,
    current: AdminIdentity,
    identifier: str = Path(..., min_length=1, max_length=255),
    handler: UnlockAccountHandler = Depends(get_unlock_account_handler),
) -> Response:
    command = UnlockAccount(
        identifier=identifier,
        performed_by=current.identity_id,
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
            return Response(status_code=status.HTTP_204_NO_CONTENT)
