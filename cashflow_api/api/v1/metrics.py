"""POST /v1/cashflow/metrics and /v1/cashflow/events - balance series summaries"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from cashflow_api.api.v1.schemas import (
    EventsResponse,
    KeyEventSchema,
    MetricsRequest,
    MetricsResponse,
)
from cashflow_api.api.dependencies import get_event_thresholds, get_request_id, get_risk_thresholds
from cashflow_api.domain.metrics import compute_metrics
from cashflow_api.domain.models import EventThresholds, RiskThresholds
from cashflow_api.domain.scenarios import identify_key_events
from cashflow_api.infrastructure.observability.metrics import record_metrics
from cashflow_api.infrastructure.observability.logging import log_metrics_computed

router = APIRouter()


@router.post("/cashflow/metrics", response_model=MetricsResponse)
def create_metrics(
    request_body: MetricsRequest,
    request: Request,
    thresholds: RiskThresholds = Depends(get_risk_thresholds),
):
    """
    Summarize a projected balance series.

    The first point is treated as today's balance and the last as the
    projected end balance. An empty series returns the neutral summary.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        points = request_body.to_domain()
        metrics = compute_metrics(points, thresholds)
    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_metrics(metrics.risk_score, metrics.trend_direction, len(points))
    log_metrics_computed(request_id, "metrics", len(points), metrics.risk_score, metrics.trend_direction, duration_ms)

    return MetricsResponse.from_domain(metrics)


@router.post("/cashflow/events", response_model=EventsResponse)
def create_events(
    request_body: MetricsRequest,
    request: Request,
    thresholds: EventThresholds = Depends(get_event_thresholds),
):
    """Detect probable salaries, large expenses, month starts and low balances"""
    request_id = get_request_id(request)

    try:
        events = identify_key_events(request_body.to_domain(), thresholds)
    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    logging.info(
        "Key events detected",
        extra={"request_id": request_id, "step": "events", "event_count": len(events)},
    )

    return EventsResponse(
        events=[
            KeyEventSchema(date=e.date, type=e.type, description=e.description, amount=e.amount)
            for e in events
        ]
    )
