"""User Directory API."""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from redis.exceptions import RedisError

from userdirectory.api.dependencies.directory import get_controller
from userdirectory.api.middleware.logging import LoggingMiddleware
from userdirectory.api.v1.endpoints import health
from userdirectory.api.v1.router import api_router
from userdirectory.core.config import Environment, settings
from userdirectory.core.logging import get_logger, setup_logging
from userdirectory.db.redis import close_redis_connection

setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle."""
    logger.info(
        f"Starting {settings.app_name} v{settings.app_version}",
        extra={
            "environment": settings.environment.value,
            "dataset_size": settings.dataset_size,
        },
    )

    try:
        controller = get_controller()
        await controller.initialize()
        logger.info(
            f"Initialized: {controller.total_pages} pages of {controller.page_size} users"
        )
    except RedisError as e:
        logger.error(f"Preference store initialization failed: {e}")
        if settings.environment == Environment.PRODUCTION:
            raise

    yield

    logger.info("Shutting down")
    close_redis_connection()


app = FastAPI(
    title=f"{settings.app_name} API",
    version=settings.app_version,
    description="Paginated, searchable user directory over a simulated backend",
    docs_url=f"{settings.api_prefix}/docs",
    redoc_url=f"{settings.api_prefix}/redoc",
    openapi_url=f"{settings.api_prefix}/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(LoggingMiddleware)

app.include_router(health.router, tags=["health"])
app.include_router(api_router, prefix=settings.api_prefix)

if __name__ == "__main__":
    uvicorn.run(
        "userdirectory.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.log_level.value.lower(),
    )
