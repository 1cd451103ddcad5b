"""Common error classes used across all layers.

Error Types:
- ValidationError: Input validation failures
- NotFoundError: Resource not found (challenge, setup, identity)
- ConflictError: Duplicate email or username
- AuthenticationError: Credential and token failures

Usage:
    from src.core.errors import ConflictError
    from src.core.enums import ErrorCode
    from src.core.result import Failure

    return Failure(error=ConflictError(
        code=ErrorCode.EMAIL_ALREADY_EXISTS,
        message="Email already registered",
        resource_type="identity",
        conflicting_field="email",
    ))
"""

from dataclasses import dataclass

from src.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Input validation failure.

    Attributes:
        field: Field name that failed validation.
    """

    field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class NotFoundError(DomainError):
    """Resource not found.

    Attributes:
        resource_type: Type of resource (otp_challenge, second_factor, ...).
        resource_id: ID of the resource that was not found.
    """

    resource_type: str
    resource_id: str


@dataclass(frozen=True, slots=True, kw_only=True)
class ConflictError(DomainError):
    """Resource conflict (duplicate email or username).

    Attributes:
        resource_type: Type of resource in conflict.
        conflicting_field: Field that has conflict (email, username).
    """

    resource_type: str
    conflicting_field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthenticationError(DomainError):
    """Authentication failure (invalid credentials, invalid token)."""

    pass
