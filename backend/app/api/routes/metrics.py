"""Prometheus metrics endpoint."""

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter()


@router.get("/metrics")
async def metrics() -> Response:
    """Prometheus metrics endpoint.

    Exposes all registered Prometheus metrics including:
    - trip_pipeline_runs_total{outcome}
    - trip_pipeline_stage_latency_ms{stage}
    - provider_fallbacks_total{provider, reason}
    - cache_events_total{cache, event}
    - itinerary_lock_acquisitions_total{outcome}
    """
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
