"""Global exception handlers for FastAPI application.

Converts request validation failures and unhandled exceptions into Problem
Details responses.

Exports:
    register_exception_handlers: Register all exception handlers with FastAPI app
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.core.config import get_settings
from src.core.container import get_logger
from src.presentation.api.v1.errors.problem_details import ErrorDetail, ProblemDetails


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request body/query validation failures (422).

    Each pydantic error becomes one ErrorDetail; the field is the dotted
    location without the leading ``body``/``query`` segment.
    """
    trace_id = getattr(request.state, "trace_id", None)
    errors = [
        ErrorDetail(
            field=".".join(str(part) for part in err["loc"][1:]) or str(err["loc"][0]),
            code=err["type"],
            message=err["msg"],
        )
        for err in exc.errors()
    ]
    problem = ProblemDetails(
        type=f"{get_settings().api_base_url}/errors/validation_failed",
        title="Validation Failed",
        status=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail="Request validation failed",
        instance=str(request.url.path),
        errors=errors,
        trace_id=trace_id,
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=problem.model_dump(exclude_none=True),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected Python exceptions.

    Prevents leaking stack traces or internal details to API consumers.

    Args:
        request: FastAPI Request object
        exc: Unhandled exception

    Returns:
        JSONResponse with ProblemDetails (500 Internal Server Error)
    """
    # Extract trace_id from request state (set by TraceMiddleware)
    trace_id = getattr(request.state, "trace_id", None)

    problem = ProblemDetails(
        type=f"{get_settings().api_base_url}/errors/internal-server-error",
        title="Internal Server Error",
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An unexpected error occurred. Please contact support with the trace ID.",
        instance=str(request.url.path),
        errors=None,
        trace_id=trace_id,
    )

    # Logged, never exposed to the client
    get_logger().error(
        "Unhandled exception",
        error=exc,
        exc_type=type(exc).__name__,
        trace_id=trace_id,
        request_path=request.url.path,
        request_method=request.method,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=problem.model_dump(exclude_none=True),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with FastAPI application.

    Args:
        app: FastAPI application instance

    Example:
        >>> from fastapi import FastAPI
        >>> app = FastAPI()
        >>> register_exception_handlers(app)
    """
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, generic_exception_handler)
