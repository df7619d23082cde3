"""
Health check endpoints.
"""

from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends

from pmo_reviews.api.deps import ServiceContainer, get_container
from pmo_reviews.core.config import settings
from pmo_reviews.core.exceptions import DatabaseError
from pmo_reviews.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check() -> dict[str, Any]:
    """
    Basic health check endpoint.
    Returns application status.
    """
    return {
        "status": "healthy",
        "app": settings.app_name,
        "environment": settings.app_env,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/health/ready")
async def readiness_check(
    container: ServiceContainer = Depends(get_container),
) -> dict[str, Any]:
    """
    Readiness check endpoint.
    Verifies the document store is reachable when one is configured.
    """
    container.initialize()
    checks = {"app": True}

    if container.database is not None:
        try:
            await container.database.ensure_connected()
            checks["database"] = True
        except DatabaseError as e:
            logger.warning("Database not ready", error=str(e))
            checks["database"] = False

    all_healthy = all(checks.values())

    return {
        "status": "ready" if all_healthy else "not_ready",
        "checks": checks,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/health/live")
async def liveness_check() -> dict[str, str]:
    """
    Liveness check endpoint.
    Simple check that the application is running.
    """
    return {"status": "alive"}
