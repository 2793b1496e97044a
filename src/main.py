"""
Main FastAPI application entry point.

Wires the rate limit rule administration API: trace middleware, RFC 7807
exception handlers and the v1 routers. Storage and notifier backends are
selected in the container from settings.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from src.core.config import settings
from src.core.container import get_database, get_logger, get_redis
from src.presentation.api.middleware.trace_middleware import TraceMiddleware
from src.presentation.api.v1 import v1_router
from src.presentation.api.v1.errors import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager.

    - Startup: Log selected backends
    - Shutdown: Close database and Redis connection pools

    Args:
        app: FastAPI application instance.

    Yields:
        None during application lifetime.
    """
    logger = get_logger()
    logger.info(
        "application_started",
        environment=settings.environment.value,
        storage_backend=settings.rule_storage_backend,
        notifier_backend=settings.rule_notifier_backend,
    )

    yield

    if settings.rule_storage_backend == "postgres":
        await get_database().close()
    if settings.rule_notifier_backend == "redis":
        await get_redis().aclose()
    logger.info("application_stopped")


app = FastAPI(
    title=settings.app_name,
    description="Administrative control plane for distributed rate limit rules",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    debug=settings.debug,
    lifespan=lifespan,
)

# Wire trace middleware (request correlation)
app.add_middleware(TraceMiddleware)

# Register global exception handlers (RFC 7807 error responses)
register_exception_handlers(app)

app.include_router(v1_router)


@app.get("/health")
async def health() -> dict[str, str]:
    """
    Health check endpoint for monitoring and load balancers.

    Returns:
        dict: Health status indicator.
    """
    return {"status": "healthy"}


@app.get("/config")
async def get_config() -> JSONResponse:
    """
    Configuration debug endpoint (development only).

    Returns:
        JSONResponse: Configuration details (sanitized).
    """
    if not settings.is_development:
        return JSONResponse(
            status_code=403,
            content={"detail": "Config endpoint only available in development"},
        )

    return JSONResponse(
        content={
            "environment": settings.environment.value,
            "debug": settings.debug,
            "api": {
                "name": settings.app_name,
                "version": settings.app_version,
                "base_url": settings.api_base_url,
                "v1_prefix": settings.api_v1_prefix,
            },
            "rules": {
                "storage_backend": settings.rule_storage_backend,
                "storage_timeout_seconds": settings.rule_storage_timeout_seconds,
                "notifier_backend": settings.rule_notifier_backend,
                "change_channel_prefix": settings.rule_change_channel_prefix,
            },
            "database": {"url": "<redacted>", "echo": settings.db_echo},
            "redis": {"url": "<redacted>"},
        }
    )
