"""Core errors package.

Usage:
    from src.core.errors import DomainError, ConflictError, NotFoundError
"""

from src.core.errors.common_errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from src.core.errors.domain_error import DomainError

__all__ = [
    "DomainError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "AuthenticationError",
]
