"""
Health Check Endpoints.

Provides liveness, readiness, and detailed health checks.

Endpoints:
- /health: Liveness check (process running)
- /health/ready: Readiness check (note store responsive)
- /health/detailed: Component-by-component status (for debugging)
"""

import asyncio
from typing import Any

from fastapi import APIRouter, HTTPException, Request

from postit.backend.core.logging import get_logger
from postit.backend.core.utils import utc_now
from postit.backend.store.note_store import NoteStore

router = APIRouter()
logger = get_logger(__name__)


async def check_store(store: NoteStore) -> dict[str, Any]:
    """
    Check that the note store answers.

    The store lock is taken on a worker thread so a wedged lock shows up
    as a timeout instead of stalling the event loop.

    Returns:
        Dict with status, latency, and store counts or an error message
    """
    try:
        start = utc_now()
        stats = await asyncio.to_thread(store.stats)
        latency_ms = int((utc_now() - start).total_seconds() * 1000)

        return {
            "status": "healthy",
            "latency_ms": latency_ms,
            **stats,
        }

    except Exception as e:
        logger.warning("Note store health check failed", extra={"error": str(e)})
        return {
            "status": "unhealthy",
            "error": str(e),
        }


@router.get("/health")
async def health_check() -> dict[str, str]:
    """
    Liveness check.

    Returns 200 if the process is running.
    No dependency checks - this endpoint should always respond quickly.
    """
    return {"status": "healthy"}


@router.get("/health/ready")
async def readiness_check(request: Request) -> dict[str, Any]:
    """
    Readiness check.

    Returns 200 if ready to serve traffic, 503 if the note store does not
    answer within the configured timeout.
    """
    from postit.backend.core.config import get_app_config
    timeout = get_app_config().application.timeouts.health_check

    try:
        async with asyncio.timeout(timeout):
            store_result = await check_store(request.app.state.note_store)
    except TimeoutError:
        store_result = {"status": "unhealthy", "error": f"no answer within {timeout}s"}

    checks = {"store": store_result}

    if store_result.get("status") == "unhealthy":
        logger.warning(
            "Readiness check failed",
            extra={"checks": checks},
        )
        raise HTTPException(
            status_code=503,
            detail={
                "status": "unhealthy",
                "checks": checks,
                "timestamp": utc_now().isoformat(),
            },
        )

    return {
        "status": "healthy",
        "checks": checks,
        "timestamp": utc_now().isoformat(),
    }


@router.get("/health/detailed")
async def detailed_health_check(request: Request) -> dict[str, Any]:
    """
    Detailed health check.

    Returns application identity, enabled surfaces and store statistics.
    """
    checks = {"store": await check_store(request.app.state.note_store)}

    try:
        from postit.backend.core.config import get_app_config
        app_config = get_app_config()
        app_settings = app_config.application

        app_info = {
            "name": app_settings.name,
            "env": app_settings.environment,
            "debug": app_settings.debug,
            "version": app_settings.version,
            "mcp_enabled": app_config.features.mcp_enabled,
            "dashboard_enabled": app_config.features.dashboard_enabled,
        }
    except Exception as e:
        logger.warning("Could not load application config", extra={"error": str(e)})
        app_info = {"error": "config unavailable"}

    overall = "healthy"
    if any(check.get("status") == "unhealthy" for check in checks.values()):
        overall = "unhealthy"

    return {
        "status": overall,
        "application": app_info,
        "checks": checks,
        "timestamp": utc_now().isoformat(),
    }
