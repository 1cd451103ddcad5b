"""Problem Details error schemas and exception handlers.

Exports:
    ErrorDetail: Individual field-specific error
    ProblemDetails: Problem Details error response schema
    ErrorResponseBuilder: Builds error responses from domain errors
    register_exception_handlers: Register global exception handlers with FastAPI
"""

from src.presentation.api.v1.errors.error_response_builder import (
    ErrorResponseBuilder,
)
from src.presentation.api.v1.errors.exception_handlers import (
    register_exception_handlers,
)
from src.presentation.api.v1.errors.problem_details import (
    ErrorDetail,
    ProblemDetails,
)

__all__ = [
    "ErrorDetail",
    "ErrorResponseBuilder",
    "ProblemDetails",
    "register_exception_handlers",
]
