"""API tests for the /health endpoint."""

from unittest.mock import AsyncMock, Mock, patch

import pytest
from fastapi.testclient import TestClient

from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.infrastructure.enums import InfrastructureErrorCode
from src.infrastructure.errors import CacheError
from src.main import app


def _backends(*, cache_result, database_up=True):
    cache = Mock()
    cache.ping = AsyncMock(return_value=cache_result)
    database = Mock()
    database.check_connection = AsyncMock(return_value=database_up)
    return (
        patch("src.core.container.get_cache", return_value=cache),
        patch("src.core.container.get_database", return_value=database),
    )


@pytest.mark.api
class TestHealth:
    def test_healthy_when_database_and_cache_answer(self):
        cache_patch, database_patch = _backends(cache_result=Success(value=True))

        with cache_patch, database_patch:
            response = TestClient(app).get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_unhealthy_when_cache_is_down(self):
        cache_patch, database_patch = _backends(
            cache_result=Failure(
                error=CacheError(
                    code=ErrorCode.STORE_UNAVAILABLE,
                    infrastructure_code=InfrastructureErrorCode.CACHE_CONNECTION_ERROR,
                    message="Cache connection failed",
                )
            )
        )

        with cache_patch, database_patch:
            response = TestClient(app).get("/health")

        assert response.status_code == 503
        assert response.json() == {"status": "unhealthy"}

    def test_unhealthy_when_database_is_down(self):
        cache_patch, database_patch = _backends(
            cache_result=Success(value=True), database_up=False
        )

        with cache_patch, database_patch:
            response = TestClient(app).get("/health")

        assert response.status_code == 503
