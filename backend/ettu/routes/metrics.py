"""
ETTU Backend — Metrics Route
==============================

GET /metrics answers in the Prometheus text exposition content type but
exports no series yet; scrapers get an empty, valid document.
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["Metrics"])

METRICS_PLACEHOLDER = "# metrics not yet exported\n"


@router.get("/metrics", response_class=PlainTextResponse, summary="Metrics (placeholder)")
async def metrics() -> str:
    return METRICS_PLACEHOLDER
