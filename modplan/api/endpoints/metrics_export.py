"""Prometheus metrics scrape endpoint.

Read-only: exposes the process-wide collectors (HTTP and plan resolution
counters) in the Prometheus text format.
"""

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter()


@router.get("/metrics", include_in_schema=False)
def prometheus_metrics() -> Response:
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
