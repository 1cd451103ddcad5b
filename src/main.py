"""
Main FastAPI application entry point.

Wires the trace middleware, Problem Details exception handlers and the v1
routers. The lifespan closes the database pool on shutdown and runs a
periodic purge of expired OTP challenges and action tokens.
"""

import asyncio
import contextlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.core.config import get_settings
from src.core.result import Success
from src.presentation.api.middleware.trace_middleware import TraceMiddleware
from src.presentation.api.v1 import v1_router
from src.presentation.api.v1.errors import register_exception_handlers


async def purge_periodically(interval_minutes: int) -> None:
    """Purge expired rows every ``interval_minutes`` until cancelled.

    A failed pass is logged and retried on the next tick.
    """
    from src.core.container import get_logger, purge_expired_records

    logger = get_logger()
    while True:
        await asyncio.sleep(interval_minutes * 60)
        try:
            removed = await purge_expired_records()
        except Exception as e:
            logger.error("Expired record purge failed", error=e)
        else:
            logger.info("Expired records purged", **removed)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager.

    Handles startup and shutdown events:
    - Startup: start the expired-record purge task
    - Shutdown: stop the purge task, dispose the connection pool

    Args:
        app: FastAPI application instance.

    Yields:
        None during application lifetime.
    """
    from src.core.container import get_database

    settings = get_settings()
    purge_task = None
    if settings.purge_interval_minutes > 0:
        purge_task = asyncio.create_task(
            purge_periodically(settings.purge_interval_minutes)
        )

    yield

    if purge_task is not None:
        purge_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await purge_task
    await get_database().close()


def create_app() -> FastAPI:
    """Build the FastAPI application."""
    settings = get_settings()
    application = FastAPI(
        title=settings.app_name,
        description="Authentication service with TOTP and email second factors",
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        debug=settings.debug,
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Wire trace middleware (request correlation)
    application.add_middleware(TraceMiddleware)

    # Register global exception handlers (Problem Details responses)
    register_exception_handlers(application)

    # Include API v1 routers (RESTful resource-based endpoints)
    application.include_router(v1_router)

    @application.get("/health")
    async def health() -> JSONResponse:
        """
        Health check endpoint for monitoring and load balancers.

        Returns:
            JSONResponse: 200 when the database and the cache answer, 503
            otherwise.
        """
        from src.core.container import get_cache, get_database

        cache_ok = isinstance(await get_cache().ping(), Success)
        if cache_ok and await get_database().check_connection():
            return JSONResponse(content={"status": "healthy"})
        return JSONResponse(status_code=503, content={"status": "unhealthy"})

    return application


app = create_app()
