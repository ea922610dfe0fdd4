"""Cash-flow metrics engine - risk and trend signals over a balance series"""

import math
from typing import Sequence
from cashflow_api.domain.models import BalancePoint, CashFlowMetrics, RiskThresholds


def compute_metrics(
    points: Sequence[BalancePoint],
    thresholds: RiskThresholds = RiskThresholds(),
) -> CashFlowMetrics:
    """
    Summarize a daily balance series into risk and trend signals.

    Preconditions:
    - points are sorted by date ascending
    - points[0] is the current balance ("today"); points[-1] is the end of
      the projection

    Ordering is trusted, not checked. Empty input yields the default record
    (zeros, "stable", "low"). Non-finite totals propagate as NaN.

    Risk rules (first match wins):
    - high:   any day below zero, or worst day below thresholds.high_worst_balance
    - medium: worst day below thresholds.medium_worst_balance, or volatility
              above thresholds.medium_volatility_ratio of the average
    - low:    otherwise
    """
    if not points:
        return CashFlowMetrics()

    current_balance = points[0].total
    final_balance = points[-1].total

    # Strict < keeps the first occurrence on ties
    worst_day = points[0]
    total_sum = 0.0
    days_below_zero = 0
    for point in points:
        if point.total < worst_day.total:
            worst_day = point
        if point.total < 0:
            days_below_zero += 1
        total_sum += point.total

    average_balance = total_sum / len(points)

    # Population standard deviation (divide by N)
    variance = sum((point.total - average_balance) ** 2 for point in points) / len(points)
    volatility = math.sqrt(variance)

    # Threshold is not made absolute: a non-positive average makes any change a trend
    trend_direction = "stable"
    change = final_balance - current_balance
    if abs(change) > average_balance * thresholds.trend_change_ratio:
        trend_direction = "up" if change > 0 else "down"

    risk_score = "low"
    if days_below_zero > 0 or worst_day.total < thresholds.high_worst_balance:
        risk_score = "high"
    elif (
        worst_day.total < thresholds.medium_worst_balance
        or volatility > average_balance * thresholds.medium_volatility_ratio
    ):
        risk_score = "medium"

    return CashFlowMetrics(
        liquidity_now=current_balance,
        worst_day_balance=worst_day.total,
        worst_day_date=worst_day.date,
        days_below_zero=days_below_zero,
        average_balance=average_balance,
        volatility=volatility,
        trend_direction=trend_direction,
        risk_score=risk_score,
        projected_end_balance=final_balance,
    )
