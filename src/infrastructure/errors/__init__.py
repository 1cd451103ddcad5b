"""Errors returned by cache and mail adapters."""

from src.infrastructure.errors.infrastructure_error import (
    CacheError,
    ExternalServiceError,
    InfrastructureError,
)

__all__ = [
    "CacheError",
    "ExternalServiceError",
    "InfrastructureError",
]
