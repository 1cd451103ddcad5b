"""RFC 9457 Problem Details for HTTP APIs.

Pydantic models for structured error responses.

Exports:
    ErrorDetail: Individual field-specific error
    ProblemDetails: Problem Details response schema
"""

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Individual field-specific error.

    Used for validation errors where multiple fields may have errors.

    Examples:
        >>> error = ErrorDetail(
        ...     field="password",
        ...     code="password_too_weak",
        ...     message="Password must contain at least one digit",
        ... )
    """

    field: str = Field(..., description="Field name")
    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")


class ProblemDetails(BaseModel):
    """Problem Details error body.

    Attributes:
        type: URI reference identifying the problem type
        title: Short, human-readable summary of the problem type
        status: HTTP status code for this occurrence
        detail: Human-readable explanation specific to this occurrence
        instance: URI reference identifying the specific occurrence
        errors: Optional list of field-specific errors (for validation failures)
        trace_id: Optional request trace ID for debugging

    Examples:
        >>> problem = ProblemDetails(
        ...     type="http://localhost:8000/errors/account_locked",
        ...     title="Account Locked",
        ...     status=423,
        ...     detail="Account locked. Try again in 15 minutes",
        ...     instance="/api/v1/sessions",
        ...     trace_id="550e8400-e29b-41d4-a716-446655440000",
        ... )
    """

    type: str = Field(
        ...,
        description="URI reference identifying the problem type",
        examples=["http://localhost:8000/errors/invalid_credentials"],
    )
    title: str = Field(
        ...,
        description="Short, human-readable summary",
        examples=["Authentication Failed"],
    )
    status: int = Field(
        ...,
        description="HTTP status code",
        examples=[401],
    )
    detail: str = Field(
        ...,
        description="Human-readable explanation",
        examples=["Invalid credentials"],
    )
    instance: str = Field(
        ...,
        description="URI reference identifying this occurrence",
        examples=["/api/v1/sessions"],
    )
    errors: list[ErrorDetail] | None = Field(
        None,
        description="List of field-specific errors",
    )
    trace_id: str | None = Field(
        None,
        description="Request trace ID for debugging",
    )
