"""Prometheus metrics for monitoring risk distribution, trends and series sizes"""

from prometheus_client import Counter, Histogram

# Metrics engine outcomes
risk_score_counter = Counter(
    "cashflow_metrics_computed_total",
    "Cash-flow metric summaries computed",
    ["risk_score"],  # low | medium | high
)

trend_direction_counter = Counter(
    "cashflow_trend_direction_total",
    "Trend directions detected",
    ["direction"],  # up | down | stable
)

series_length_histogram = Histogram(
    "cashflow_series_points",
    "Number of balance points per computed series",
    buckets=[1, 7, 30, 90, 180, 365, 730],
)

# Scenario simulation
scenario_counter = Counter(
    "cashflow_scenarios_total",
    "What-if scenarios simulated",
)

projection_failure_counter = Counter(
    "cashflow_projection_failures_total",
    "Projections rejected for invalid input",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_metrics(risk_score: str, trend_direction: str, point_count: int) -> None:
    """Record engine outcome for monitoring risk and trend distribution"""
    risk_score_counter.labels(risk_score=risk_score).inc()
    trend_direction_counter.labels(direction=trend_direction).inc()
    series_length_histogram.observe(point_count)
