"""What-if scenario simulation and key event detection over balance series"""

from dataclasses import replace
from datetime import date
from typing import List, Sequence
from cashflow_api.domain.models import (
    BalancePoint,
    EventThresholds,
    KeyEvent,
    ScenarioAdjustment,
    ScenarioImpact,
    SimulationResult,
)
from cashflow_api.domain.exceptions import InvalidScenarioError

ADJUSTMENT_TYPES = ("expense_reduction", "income_increase", "extra_payment", "savings_goal")


def _daily_adjustment(
    adjustment: ScenarioAdjustment,
    point_date: str,
    start_date: str,
    days_per_month: int,
) -> float:
    if adjustment.type in ("expense_reduction", "income_increase"):
        # Monthly amount spread across the days of a month
        return adjustment.amount / days_per_month
    if adjustment.type == "savings_goal":
        return -adjustment.amount / days_per_month
    # extra_payment: one-time payment on the first day of the window
    return -adjustment.amount if point_date == start_date else 0.0


def simulate_scenario(
    points: Sequence[BalancePoint],
    adjustments: Sequence[ScenarioAdjustment],
    days_per_month: int = 30,
) -> SimulationResult:
    """
    Apply what-if adjustments to a projection and measure the impact.

    Each adjustment is a per-day offset inside its window (defaults to the
    whole series). Offsets do not carry over to later days.

    Raises:
        InvalidScenarioError: On an unknown adjustment type
    """
    for adjustment in adjustments:
        if adjustment.type not in ADJUSTMENT_TYPES:
            raise InvalidScenarioError(f"Unknown adjustment type: {adjustment.type}")

    original = list(points)
    if not original:
        return SimulationResult(original_points=original, scenario_points=[], impact=ScenarioImpact())

    totals = [point.total for point in original]

    for adjustment in adjustments:
        start_date = adjustment.start_date or original[0].date
        end_date = adjustment.end_date or original[-1].date

        for i, point in enumerate(original):
            if start_date <= point.date <= end_date:
                totals[i] += _daily_adjustment(adjustment, point.date, start_date, days_per_month)

    scenario = [
        replace(point, total=total, accounts=dict(point.accounts))
        for point, total in zip(original, totals)
    ]

    original_days_above_zero = sum(1 for p in original if p.total > 0)
    scenario_days_above_zero = sum(1 for p in scenario if p.total > 0)

    impact = ScenarioImpact(
        total_improvement=scenario[-1].total - original[-1].total,
        worst_day_improvement=min(totals) - min(p.total for p in original),
        days_above_zero_gained=scenario_days_above_zero - original_days_above_zero,
    )

    return SimulationResult(original_points=original, scenario_points=scenario, impact=impact)


def identify_key_events(
    points: Sequence[BalancePoint],
    thresholds: EventThresholds = EventThresholds(),
) -> List[KeyEvent]:
    """
    Flag notable days: probable salary, large expense, start of month and
    low (but positive) balance. The first point only serves as a baseline.

    Raises:
        ValueError: If a point's date is not an ISO date
    """
    events: List[KeyEvent] = []
    series = list(points)

    for previous, current in zip(series, series[1:]):
        change = current.total - previous.total

        if change > thresholds.salary_change:
            events.append(KeyEvent(current.date, "salary", "Possible salary", change))

        if change < thresholds.large_expense_change:
            events.append(KeyEvent(current.date, "large_expense", "Large expense", abs(change)))

        if date.fromisoformat(current.date).day == 1:
            events.append(KeyEvent(current.date, "month_start", "Start of month"))

        if 0 < current.total < thresholds.low_balance:
            events.append(KeyEvent(current.date, "low_balance", "Low balance", current.total))

    return events
