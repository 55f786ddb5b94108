"""Prometheus metrics endpoint."""

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter()


@router.get("/metrics")
async def metrics() -> Response:
    """Prometheus metrics endpoint.

    Exposes:
    - agent_turn_latency_ms{outcome}
    - agent_turn_errors_total{reason}
    - plan_activities
    - excel_exports_total{source}
    """
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
