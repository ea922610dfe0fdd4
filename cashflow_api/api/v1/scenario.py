"""POST /v1/cashflow/scenario - what-if simulation over a projection"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from cashflow_api.api.v1.schemas import (
    BalancePointSchema,
    ImpactSchema,
    MetricsResponse,
    ScenarioRequest,
    ScenarioResponse,
)
from cashflow_api.api.dependencies import get_request_id, get_risk_thresholds
from cashflow_api.config import settings
from cashflow_api.domain.metrics import compute_metrics
from cashflow_api.domain.models import RiskThresholds
from cashflow_api.domain.scenarios import simulate_scenario
from cashflow_api.domain.exceptions import InvalidScenarioError
from cashflow_api.infrastructure.observability.metrics import record_metrics, scenario_counter
from cashflow_api.infrastructure.observability.logging import log_metrics_computed

router = APIRouter()


@router.post("/cashflow/scenario", response_model=ScenarioResponse)
def create_scenario(
    request_body: ScenarioRequest,
    request: Request,
    thresholds: RiskThresholds = Depends(get_risk_thresholds),
):
    """
    Apply what-if adjustments and compare against the original projection.

    Flow:
    1. Simulate adjustments over the submitted series
    2. Compute metrics for the original and the scenario series
    3. Return scenario points, impact and both summaries
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        result = simulate_scenario(
            request_body.to_domain(),
            [adj.to_domain() for adj in request_body.adjustments],
            days_per_month=settings.scenario_days_per_month,
        )
        original_metrics = compute_metrics(result.original_points, thresholds)
        scenario_metrics = compute_metrics(result.scenario_points, thresholds)

    except InvalidScenarioError as e:
        logging.warning(f"Invalid scenario: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    scenario_counter.inc()
    record_metrics(scenario_metrics.risk_score, scenario_metrics.trend_direction, len(result.scenario_points))
    log_metrics_computed(
        request_id,
        "scenario",
        len(result.scenario_points),
        scenario_metrics.risk_score,
        scenario_metrics.trend_direction,
        duration_ms,
    )

    return ScenarioResponse(
        scenario_points=[BalancePointSchema.from_domain(p) for p in result.scenario_points],
        impact=ImpactSchema(
            total_improvement=result.impact.total_improvement,
            worst_day_improvement=result.impact.worst_day_improvement,
            days_above_zero_gained=result.impact.days_above_zero_gained,
        ),
        original_metrics=MetricsResponse.from_domain(original_metrics),
        scenario_metrics=MetricsResponse.from_domain(scenario_metrics),
    )
