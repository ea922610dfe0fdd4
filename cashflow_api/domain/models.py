"""Domain models - pure Python dataclasses representing cash-flow entities"""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional


@dataclass(frozen=True)
class BalancePoint:
    """Projected balance for a single day"""

    date: str  # ISO date, e.g. "2024-01-31"
    total: float
    accounts: Dict[str, float] = field(default_factory=dict, compare=False)


@dataclass
class CashFlowMetrics:
    """Risk and trend summary derived from a balance series"""

    liquidity_now: float = 0.0
    worst_day_balance: float = 0.0
    worst_day_date: str = ""
    days_below_zero: int = 0
    average_balance: float = 0.0
    volatility: float = 0.0
    trend_direction: str = "stable"  # "up", "down" or "stable"
    risk_score: str = "low"  # "low", "medium" or "high"
    projected_end_balance: float = 0.0


@dataclass(frozen=True)
class RiskThresholds:
    """Policy constants used by the metrics engine, in base currency units"""

    high_worst_balance: float = -1000.0
    medium_worst_balance: float = 500.0
    medium_volatility_ratio: float = 0.5
    trend_change_ratio: float = 0.1


@dataclass
class ScenarioAdjustment:
    """What-if change applied on top of a projection"""

    type: str  # expense_reduction | income_increase | extra_payment | savings_goal
    amount: float
    description: str = ""
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    category: Optional[str] = None


@dataclass
class ScenarioImpact:
    total_improvement: float = 0.0
    worst_day_improvement: float = 0.0
    days_above_zero_gained: int = 0


@dataclass
class SimulationResult:
    original_points: List[BalancePoint]
    scenario_points: List[BalancePoint]
    impact: ScenarioImpact


@dataclass(frozen=True)
class EventThresholds:
    """Day-over-day changes and balances that flag a key event"""

    salary_change: float = 2000.0
    large_expense_change: float = -1000.0
    low_balance: float = 500.0


@dataclass
class KeyEvent:
    """Notable day in a balance series"""

    date: str
    type: str  # salary | large_expense | month_start | low_balance
    description: str
    amount: Optional[float] = None


@dataclass
class ProjectedTransaction:
    """Money movement: posted against an account, or expected in the projection"""

    account_id: Optional[str]
    amount: float
    type: str  # "income" or "expense"
    event_date: date
    description: str


@dataclass
class Account:
    """Account contributing to the projection"""

    account_id: str
    name: str
    balance: float  # initial balance, before posted transactions
    is_credit_card: bool = False
    transactions: List[ProjectedTransaction] = field(default_factory=list)


@dataclass
class RecurringTemplate:
    """Active recurring transaction"""

    template_id: str
    name: str
    expected_amount: float
    type: str
    recurrence_pattern: str  # weekly | monthly | quarterly | yearly
    next_due_date: date
    account_id: Optional[str] = None
    day_of_month: Optional[int] = None


@dataclass
class PlanInstallment:
    due_date: date
    planned_amount: float
    status: str = "pending"


@dataclass
class Plan:
    """Planned expense or savings plan"""

    plan_id: str
    name: str
    type: str  # "planned_expense" or "savings"
    payment_type: str  # "lump_sum" or "installments"
    total_amount: float
    start_date: date
    installments: List[PlanInstallment] = field(default_factory=list)


@dataclass
class CreditCard:
    """Credit card whose outstanding balance is paid on its due date"""

    card_id: str
    name: str
    balance: float
    next_due_date: Optional[date] = None


@dataclass
class ProjectionRequest:
    """Inputs for a day-by-day balance projection"""

    accounts: List[Account]
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    recurring: List[RecurringTemplate] = field(default_factory=list)
    plans: List[Plan] = field(default_factory=list)
    credit_cards: List[CreditCard] = field(default_factory=list)
    include_recurring: bool = False
    include_plans: bool = False
    include_credit_cards: bool = False
    sample_size: Optional[int] = None
