"""Request correlation middleware.

Every request gets a trace ID: the caller's ``X-Trace-Id`` when it looks sane,
otherwise a fresh UUID. The ID is echoed in the response header, kept on
``request.state`` for the exception handlers, and bound into the structlog
context together with the method and path, so each log line of a login or
password reset can be tied back to one HTTP call.
"""

from __future__ import annotations

import re
from contextvars import ContextVar
from typing import Awaitable, Callable
from uuid import uuid4

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

TRACE_HEADER = "X-Trace-Id"

# Caller-supplied IDs end up in logs; keep them short and boring
_ACCEPTED_TRACE_ID = re.compile(r"^[A-Za-z0-9._-]{8,64}$")

_current_trace_id: ContextVar[str | None] = ContextVar("trace_id", default=None)


def get_trace_id() -> str | None:
    """Trace ID of the request being served, or None outside a request."""
    return _current_trace_id.get()


def _pick_trace_id(request: Request) -> str:
    supplied = request.headers.get(TRACE_HEADER)
    if supplied and _ACCEPTED_TRACE_ID.match(supplied):
        return supplied
    return str(uuid4())


class TraceMiddleware(BaseHTTPMiddleware):
    """Attach a trace ID to the request, its logs and its response."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        trace_id = _pick_trace_id(request)
        token = _current_trace_id.set(trace_id)
        request.state.trace_id = trace_id
        structlog.contextvars.bind_contextvars(
            trace_id=trace_id,
            http_method=request.method,
            http_path=request.url.path,
        )
        try:
            response = await call_next(request)
        finally:
            _current_trace_id.reset(token)
            structlog.contextvars.unbind_contextvars(
                "trace_id", "http_method", "http_path"
            )
        response.headers[TRACE_HEADER] = trace_id
        return response
