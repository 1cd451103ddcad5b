"""Errors returned by infrastructure adapters.

Adapters never let redis or botocore exceptions escape; they wrap them in one
of these and return it inside ``Failure``. Like every DomainError they are
plain values, not exceptions.
"""

from dataclasses import dataclass

from src.core.errors import DomainError
from src.infrastructure.enums import InfrastructureErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class InfrastructureError(DomainError):
    infrastructure_code: InfrastructureErrorCode | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class CacheError(InfrastructureError):
    """Redis call failed; ``details`` names the operation and key."""


@dataclass(frozen=True, slots=True, kw_only=True)
class ExternalServiceError(InfrastructureError):
    """Mail provider call failed.

    Attributes:
        service_name: Provider identifier, e.g. "ses".
    """

    service_name: str
