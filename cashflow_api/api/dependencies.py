"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from cashflow_api.config import settings
from cashflow_api.domain.models import EventThresholds, RiskThresholds


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_risk_thresholds() -> RiskThresholds:
    """Provide risk policy from settings"""
    return RiskThresholds(
        high_worst_balance=settings.risk_high_worst_balance,
        medium_worst_balance=settings.risk_medium_worst_balance,
        medium_volatility_ratio=settings.risk_medium_volatility_ratio,
        trend_change_ratio=settings.trend_change_ratio,
    )


def get_event_thresholds() -> EventThresholds:
    """Provide key event thresholds from settings"""
    return EventThresholds(
        salary_change=settings.event_salary_change,
        large_expense_change=settings.event_large_expense_change,
        low_balance=settings.event_low_balance,
    )
