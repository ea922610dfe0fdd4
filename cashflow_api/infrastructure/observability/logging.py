"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = "cashflow-api"


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_metrics_computed(
    request_id: str,
    step: str,
    point_count: int,
    risk_score: str,
    trend_direction: str,
    duration_ms: float,
) -> None:
    """Log structured metrics outcome for analysis"""
    logging.info(
        "Cash-flow metrics computed",
        extra={
            "request_id": request_id,
            "step": step,
            "point_count": point_count,
            "risk_score": risk_score,
            "trend_direction": trend_direction,
            "duration_ms": duration_ms,
        },
    )
