"""Audit events resource router.

Endpoints:
    GET /api/v1/audit-events - Security events of the current identity
"""

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from src.application.queries import ListAuditEvents
from src.application.queries.handlers.auth_query_handlers import ListAuditEventsHandler
from src.core.container import get_list_audit_events_handler
from src.core.result import Failure, Success
from src.presentation.api.middleware.auth_dependencies import SignedIn
from src.presentation.api.middleware.trace_middleware import get_trace_id
from src.presentation.api.v1.errors import ErrorResponseBuilder
from src.schemas.audit_schemas import AuditEventListResponse, AuditEventResponse

router = APIRouter(prefix="/audit-events", tags=["Audit"])


@router.get(
    "",
    response_model=AuditEventListResponse,
    summary="List audit events",
    description="Newest-first logins, second-factor checks and account changes.",
)
async def list_audit_events(
    request: Request,
    current: SignedIn,
    limit: int = Query(50, ge=1, le=200),
    handler: ListAuditEventsHandler = Depends(get_list_audit_events_handler),
) -> AuditEventListResponse | JSONResponse:
    result = await handler.handle(
        ListAuditEvents(identity_id=current.identity_id, limit=limit)
    )

    match result:
        case Success(value=events):
            return AuditEventListResponse(
                events=[AuditEventResponse.from_event(event) for event in events],
                total_count=len(events),
            )
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(
                error=error,
                request=request,
                trace_id=get_trace_id() or "",
            )
