"""
ETTU Backend — Health Check Route
===================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Runs Database.health_check() (SELECT 1 AS health) against the shared pool.
Who:   Called by container health checks, load balancers, and uptime monitors.

Status matrix:
    pool answers SELECT 1      → 200 healthy,   database=connected
    pool exists, probe fails   → 503 unhealthy, database=disconnected (+ error)
    no pool (database-less)    → 200 healthy,   database=not_configured

    Database-less mode is a deliberate startup outcome, not a failure of this
    instance, so it still answers 200 and keeps receiving traffic.
"""

import logging
import time
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ettu import __version__
from ettu.config import Settings
from ettu.database import Database, get_database
from ettu.dependencies import get_app_settings
from ettu.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={
        200: {"description": "Service can take traffic", "model": HealthResponse},
        503: {"description": "Database unreachable", "model": HealthResponse},
    },
    summary="Service health check",
)
async def health_check(
    request: Request,
    database: Optional[Database] = Depends(get_database),
    settings: Settings = Depends(get_app_settings),
) -> JSONResponse:
    status_code = 200
    overall = "healthy"
    db_status = "not_configured"
    error = None

    if database is not None:
        try:
            await database.health_check()
            db_status = "connected"
        except Exception as e:
            status_code = 503
            overall = "unhealthy"
            db_status = "disconnected"
            error = str(e)
            logger.warning("Health check: database unreachable: %s", error)

    body = HealthResponse(
        status=overall,
        timestamp=datetime.now(timezone.utc),
        version=__version__,
        environment=str(settings.environment),
        database=db_status,
        uptime_seconds=round(time.monotonic() - request.app.state.started_at, 2),
        error=error,
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", exclude_none=True),
    )
