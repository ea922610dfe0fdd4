"""POST /v1/cashflow/projection - build a daily balance projection and summarize it"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from cashflow_api.api.v1.schemas import (
    BalancePointSchema,
    MetricsResponse,
    ProjectionRequestSchema,
    ProjectionResponse,
)
from cashflow_api.api.dependencies import get_request_id, get_risk_thresholds
from cashflow_api.config import settings
from cashflow_api.domain.metrics import compute_metrics
from cashflow_api.domain.models import RiskThresholds
from cashflow_api.domain.projection import build_projection
from cashflow_api.domain.exceptions import InvalidProjectionInputError
from cashflow_api.infrastructure.observability.metrics import record_metrics, projection_failure_counter
from cashflow_api.infrastructure.observability.logging import log_metrics_computed

router = APIRouter()


@router.post("/cashflow/projection", response_model=ProjectionResponse)
def create_projection(
    request_body: ProjectionRequestSchema,
    request: Request,
    thresholds: RiskThresholds = Depends(get_risk_thresholds),
):
    """
    Project balances day by day and return the series with its metrics.

    Recurring templates, plans and card payments are only applied when
    their include flag is set. Windows longer than the configured maximum
    are rejected.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        points = build_projection(
            request_body.to_domain(),
            horizon_days=settings.projection_horizon_days,
            max_recurring_occurrences=settings.max_recurring_occurrences,
            max_days=settings.max_projection_days,
        )
        metrics = compute_metrics(points, thresholds)

    except InvalidProjectionInputError as e:
        projection_failure_counter.inc()
        logging.warning(f"Invalid projection input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_metrics(metrics.risk_score, metrics.trend_direction, len(points))
    log_metrics_computed(request_id, "projection", len(points), metrics.risk_score, metrics.trend_direction, duration_ms)

    return ProjectionResponse(
        points=[BalancePointSchema.from_domain(p) for p in points],
        metrics=MetricsResponse.from_domain(metrics),
    )
