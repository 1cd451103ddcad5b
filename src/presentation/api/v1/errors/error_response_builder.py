"""Error response builder for Problem Details.

Converts domain errors returned inside ``Failure`` into Problem Details
JSON responses.

Exports:
    ErrorResponseBuilder: Utility class for building error responses
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from src.core.config import get_settings
from src.core.enums import ErrorCode
from src.core.errors import DomainError, ValidationError
from src.domain.errors import AccountLocked
from src.presentation.api.v1.errors.problem_details import ErrorDetail, ProblemDetails

_STATUS_CODES: dict[ErrorCode, int] = {
    # Validation
    ErrorCode.INVALID_EMAIL: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_PASSWORD: status.HTTP_400_BAD_REQUEST,
    ErrorCode.PASSWORD_TOO_WEAK: status.HTTP_400_BAD_REQUEST,
    ErrorCode.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_RESET_TOKEN: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_VERIFICATION_TOKEN: status.HTTP_400_BAD_REQUEST,
    ErrorCode.DECRYPTION_FAILED: status.HTTP_400_BAD_REQUEST,
    # Authentication
    ErrorCode.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.INVALID_REFRESH_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.INVALID_ACCESS_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.INVALID_TWO_FACTOR_CODE: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.INVALID_CODE: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.EMAIL_NOT_VERIFIED: status.HTTP_403_FORBIDDEN,
    # Resources
    ErrorCode.IDENTITY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.CHALLENGE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.SETUP_NOT_STARTED: status.HTTP_404_NOT_FOUND,
    ErrorCode.RESOURCE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    # Conflicts
    ErrorCode.EMAIL_ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorCode.USERNAME_ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorCode.EMAIL_ALREADY_VERIFIED: status.HTTP_409_CONFLICT,
    ErrorCode.RESOURCE_CONFLICT: status.HTTP_409_CONFLICT,
    # Lockout and quotas
    ErrorCode.ACCOUNT_LOCKED: status.HTTP_423_LOCKED,
    ErrorCode.RATE_LIMITED: status.HTTP_429_TOO_MANY_REQUESTS,
    ErrorCode.TOO_MANY_ATTEMPTS: status.HTTP_429_TOO_MANY_REQUESTS,
    # Infrastructure
    ErrorCode.NOTIFICATION_FAILED: status.HTTP_502_BAD_GATEWAY,
    ErrorCode.STORE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
}

_TITLES: dict[ErrorCode, str] = {
    ErrorCode.INVALID_CREDENTIALS: "Authentication Failed",
    ErrorCode.INVALID_REFRESH_TOKEN: "Authentication Failed",
    ErrorCode.INVALID_ACCESS_TOKEN: "Authentication Required",
    ErrorCode.INVALID_TWO_FACTOR_CODE: "Two-Factor Verification Failed",
    ErrorCode.INVALID_CODE: "Invalid Code",
    ErrorCode.EMAIL_NOT_VERIFIED: "Email Not Verified",
    ErrorCode.INVALID_RESET_TOKEN: "Invalid Reset Token",
    ErrorCode.INVALID_VERIFICATION_TOKEN: "Invalid Verification Token",
    ErrorCode.EMAIL_ALREADY_EXISTS: "Resource Conflict",
    ErrorCode.USERNAME_ALREADY_EXISTS: "Resource Conflict",
    ErrorCode.EMAIL_ALREADY_VERIFIED: "Resource Conflict",
    ErrorCode.ACCOUNT_LOCKED: "Account Locked",
    ErrorCode.RATE_LIMITED: "Rate Limit Exceeded",
    ErrorCode.TOO_MANY_ATTEMPTS: "Too Many Attempts",
    ErrorCode.NOTIFICATION_FAILED: "Notification Failed",
    ErrorCode.STORE_UNAVAILABLE: "Service Unavailable",
}


class ErrorResponseBuilder:
    """Build Problem Details error responses.

    Example:
        >>> match result:
        ...     case Failure(error=error):
        ...         return ErrorResponseBuilder.from_domain_error(
        ...             error=error,
        ...             request=request,
        ...             trace_id=get_trace_id() or "",
        ...         )
    """

    @staticmethod
    def from_domain_error(
        error: DomainError,
        request: Request,
        trace_id: str,
    ) -> JSONResponse:
        """Convert a DomainError to a Problem Details JSON response.

        Args:
            error: Error carried by a Failure.
            request: FastAPI Request object (for instance URL).
            trace_id: Request trace ID for debugging.

        Returns:
            JSONResponse with ProblemDetails content. Lockouts also carry a
            Retry-After header.
        """
        status_code = ErrorResponseBuilder._get_status_code(error.code)
        detail = error.message
        headers: dict[str, str] = {}
        if isinstance(error, AccountLocked):
            detail = f"{error.message}. Try again in {error.remaining_minutes} minutes"
            headers["Retry-After"] = str(error.remaining_minutes * 60)

        problem = ProblemDetails(
            type=f"{get_settings().api_base_url}/errors/{error.code.value}",
            title=ErrorResponseBuilder._get_title(error.code),
            status=status_code,
            detail=detail,
            instance=str(request.url.path),
            errors=None,
            trace_id=trace_id,
        )

        # Field-level detail for validation failures
        if isinstance(error, ValidationError) and error.field:
            problem.errors = [
                ErrorDetail(
                    field=error.field,
                    code=error.code.value,
                    message=error.message,
                )
            ]

        return JSONResponse(
            status_code=status_code,
            content=problem.model_dump(exclude_none=True),
            headers=headers or None,
        )

    @staticmethod
    def _get_status_code(code: ErrorCode) -> int:
        """Map error code to HTTP status code.

        Example:
            >>> ErrorResponseBuilder._get_status_code(ErrorCode.ACCOUNT_LOCKED)
            423
        """
        return _STATUS_CODES.get(code, status.HTTP_500_INTERNAL_SERVER_ERROR)

    @staticmethod
    def _get_title(code: ErrorCode) -> str:
        """Get human-readable title for error code."""
        if code in _TITLES:
            return _TITLES[code]
        status_code = ErrorResponseBuilder._get_status_code(code)
        if status_code == status.HTTP_400_BAD_REQUEST:
            return "Validation Failed"
        if status_code == status.HTTP_404_NOT_FOUND:
            return "Resource Not Found"
        return "Internal Server Error"
