"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from cashflow_api.api.middleware import RequestIDMiddleware, MetricsMiddleware
from cashflow_api.api.v1 import metrics, scenario, projection
from cashflow_api.infrastructure.observability.logging import setup_logging
from cashflow_api.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Cash-Flow Metrics API",
        description="Risk and trend signals over projected daily balances",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def prometheus_metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(metrics.router, prefix="/v1", tags=["metrics"])
    app.include_router(scenario.router, prefix="/v1", tags=["scenarios"])
    app.include_router(projection.router, prefix="/v1", tags=["projections"])

    return app


app = create_app()
