"""
Health check endpoints
"""
import os
import resource
import time
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Request, status

from ..auth import isoformat_z
from ..db import check_db_connection

router = APIRouter(prefix="/health", tags=["health"])


def _uptime(request: Request) -> float:
    return round(time.monotonic() - request.app.state.started_at, 3)


@router.get("", status_code=status.HTTP_200_OK)
def health_check(request: Request) -> Dict[str, Any]:
    """
    Basic health check endpoint.

    Returns:
        dict: Health status, timestamp, uptime in seconds and environment
    """
    return {
        "status": "ok",
        "timestamp": isoformat_z(datetime.now(timezone.utc)),
        "uptime": _uptime(request),
        "environment": request.app.state.settings.ENVIRONMENT,
    }


@router.get("/detailed", status_code=status.HTTP_200_OK)
def detailed_health_check(request: Request) -> Dict[str, Any]:
    """
    Health check with process resource usage and database connectivity.
    """
    usage = resource.getrusage(resource.RUSAGE_SELF)
    db_connected = check_db_connection(request.app.state.session_factory)

    return {
        "status": "ok",
        "timestamp": isoformat_z(datetime.now(timezone.utc)),
        "uptime": _uptime(request),
        "environment": request.app.state.settings.ENVIRONMENT,
        "pid": os.getpid(),
        "memory": {"maxRss": usage.ru_maxrss},
        "cpu": {"user": usage.ru_utime, "system": usage.ru_stime},
        "database": "connected" if db_connected else "disconnected",
    }
