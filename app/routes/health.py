"""
Health check and monitoring endpoints.
"""
import time
import logging
from fastapi import APIRouter

from app.db import check_database_health
from app.core.settings import settings

logger = logging.getLogger("app.health")
router = APIRouter()

_started_at = time.time()


@router.get("/health")
async def health_check():
    """Basic health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": time.time(),
        "environment": settings.environment,
        "version": "1.0.0"
    }


@router.get("/health/detailed")
async def detailed_health_check():
    """Detailed health check with service status."""
    start_time = time.time()

    health_status = {
        "status": "healthy",
        "timestamp": time.time(),
        "environment": settings.environment,
        "uptime_seconds": round(time.time() - _started_at, 1),
        "services": {}
    }

    db_health = await check_database_health()
    health_status["services"]["database"] = db_health
    if db_health["status"] != "healthy":
        health_status["status"] = "degraded"

    health_status["services"]["auth"] = (
        {"status": "configured", "provider": "auth0", "domain": settings.auth0_domain}
        if settings.auth0_configured
        else {"status": "not_configured", "note": "Only mock tokens accepted" if settings.allow_mock_tokens else "All tokens rejected"}
    )
    health_status["services"]["matching"] = (
        {"status": "configured", "url": settings.ds_api_url}
        if settings.matching_configured
        else {"status": "not_configured", "note": "Match and directory endpoints return 502"}
    )

    response_time = (time.time() - start_time) * 1000
    health_status["response_time_ms"] = round(response_time, 2)
    return health_status


@router.get("/ready")
async def readiness_check():
    """Kubernetes-style readiness probe."""
    db_health = await check_database_health()
    if db_health["status"] != "healthy":
        return {"status": "not_ready", "reason": "database_unavailable"}
    return {"status": "ready"}


@router.get("/live")
async def liveness_check():
    """Kubernetes-style liveness probe."""
    return {"status": "alive", "timestamp": time.time()}
