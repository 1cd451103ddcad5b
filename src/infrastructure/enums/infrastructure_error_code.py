"""Adapter-level failure codes.

Carried as ``infrastructure_code`` next to the domain ErrorCode so logs show
which Redis call or which mail provider failed, while callers only branch on
the domain code (``store_unavailable``, ``notification_failed``).
"""

from enum import Enum


class InfrastructureErrorCode(Enum):
    # Redis (lockout counters, OTP quotas, rate limits)
    CACHE_CONNECTION_ERROR = "cache_connection_error"
    CACHE_TIMEOUT = "cache_timeout"
    CACHE_GET_ERROR = "cache_get_error"
    CACHE_SET_ERROR = "cache_set_error"
    CACHE_DELETE_ERROR = "cache_delete_error"

    # Mail provider
    EXTERNAL_SERVICE_UNAVAILABLE = "external_service_unavailable"
    EXTERNAL_SERVICE_ERROR = "external_service_error"
