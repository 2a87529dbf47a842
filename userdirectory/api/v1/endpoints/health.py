"""Health check endpoints for liveness and readiness probes."""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import APIRouter, Response, status
from pydantic import BaseModel, Field

from userdirectory.core.config import settings
from userdirectory.core.logging import get_logger
from userdirectory.db.redis import store_reachable

logger = get_logger(__name__)

router = APIRouter()

APP_START_TIME = datetime.now(timezone.utc)


class HealthStatus(BaseModel):
    """Health check response model."""

    status: str = Field(..., description="Overall health status")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    uptime_seconds: float = Field(..., description="Application uptime in seconds")
    version: str = Field(..., description="Application version")
    environment: str = Field(..., description="Application environment")
    checks: Dict[str, Dict[str, Any]] = Field(
        default_factory=dict, description="Individual component health checks"
    )


class ReadinessStatus(BaseModel):
    """Readiness check response model."""

    ready: bool = Field(..., description="Whether the application is ready")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    checks: Dict[str, bool] = Field(
        default_factory=dict, description="Individual readiness checks"
    )
    message: Optional[str] = Field(None, description="Additional status message")


def check_component_health(component: str) -> Dict[str, Any]:
    """Check health of a specific component."""
    if component == "logging":
        logger.debug("Health check test log")
        return {"status": "healthy", "message": "Logging operational"}

    if component == "config":
        if settings.default_page_size <= settings.max_page_size:
            return {"status": "healthy", "message": "Configuration loaded"}
        return {
            "status": "unhealthy",
            "message": "default_page_size exceeds max_page_size",
        }

    if component == "store":
        if store_reachable():
            return {"status": "healthy", "message": "Preference store reachable"}
        # The directory still serves defaults without a store
        return {"status": "degraded", "message": "Preference store unreachable"}

    return {"status": "unknown", "message": f"No health check for {component}"}


@router.get(
    settings.health_check_path,
    response_model=HealthStatus,
    responses={
        200: {"description": "Application is healthy"},
        503: {"description": "Application is unhealthy"},
    },
    summary="Health Check",
)
async def health_check(response: Response) -> HealthStatus:
    """Liveness probe with per-component checks."""
    uptime = (datetime.now(timezone.utc) - APP_START_TIME).total_seconds()

    checks = {
        "logging": check_component_health("logging"),
        "config": check_component_health("config"),
        "store": check_component_health("store"),
    }

    statuses = [check["status"] for check in checks.values()]
    if "unhealthy" in statuses:
        overall_status = "unhealthy"
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    elif "degraded" in statuses:
        overall_status = "degraded"
    else:
        overall_status = "healthy"

    if overall_status != "healthy":
        logger.warning(
            "Health check failed", extra={"status": overall_status, "checks": checks}
        )

    return HealthStatus(
        status=overall_status,
        uptime_seconds=uptime,
        version=settings.app_version,
        environment=settings.environment.value,
        checks=checks,
    )


@router.get(
    settings.readiness_check_path,
    response_model=ReadinessStatus,
    responses={
        200: {"description": "Application is ready"},
        503: {"description": "Application is not ready"},
    },
    summary="Readiness Check",
)
async def readiness_check(response: Response) -> ReadinessStatus:
    """Ready once the preference store answers."""
    checks = {"store": store_reachable()}
    is_ready = all(checks.values())

    if not is_ready:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        message = "Application not ready"
        logger.warning("Readiness check failed", extra={"checks": checks})
    else:
        message = "Application ready to receive traffic"

    return ReadinessStatus(ready=is_ready, checks=checks, message=message)
