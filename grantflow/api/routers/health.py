"""Health check endpoints for grantflow.

Provides Kubernetes-compatible health probes:
- /health: Basic health check
- /health/live: Liveness probe (is the app running?)
- /health/ready: Readiness probe (does the workflow configuration load?)
"""

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from grantflow import __version__
from grantflow.core.catalog import get_workflow_config
from grantflow.core.errors import ConfigurationError

router = APIRouter(tags=["health"])


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def check_configuration() -> Dict[str, Any]:
    """Check that the workflow configuration is loaded and valid."""
    try:
        config = get_workflow_config()
    except (ConfigurationError, FileNotFoundError) as e:
        return {
            "status": "unhealthy",
            "error": str(e),
        }
    return {
        "status": "healthy",
        "permissions": len(config.catalog),
        "stages": len(config.directory),
        "policy_rules": len(config.policy.rules),
    }


@router.get("/health")
async def health_check():
    """
    Basic health check endpoint.

    Returns 200 if the application is running.
    """
    return {
        "status": "healthy",
        "version": __version__,
        "timestamp": _timestamp(),
    }


@router.get("/health/live")
async def liveness_probe():
    """
    Kubernetes liveness probe.

    This check should be fast and not depend on configuration.
    """
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "alive",
            "timestamp": _timestamp(),
        },
    )


@router.get("/health/ready")
async def readiness_probe():
    """
    Kubernetes readiness probe.

    Returns 503 when the workflow configuration cannot be loaded, so no
    traffic is routed to an instance that would misapply the policy.
    """
    checks = {"configuration": check_configuration()}
    unhealthy = [name for name, check in checks.items() if check["status"] == "unhealthy"]

    if unhealthy:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "checks": checks,
                "failed": unhealthy,
                "timestamp": _timestamp(),
            },
        )

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "ready",
            "checks": checks,
            "timestamp": _timestamp(),
        },
    )
