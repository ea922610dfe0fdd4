"""Pydantic schemas for API request/response validation"""

from datetime import date
from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, Field

from cashflow_api.domain import models


class BalancePointSchema(BaseModel):
    """Projected balance for one day"""

    date: date
    total: float
    accounts: Dict[str, float] = Field(default_factory=dict, description="Per-account balances")

    def to_domain(self) -> models.BalancePoint:
        return models.BalancePoint(date=self.date.isoformat(), total=self.total, accounts=dict(self.accounts))

    @classmethod
    def from_domain(cls, point: models.BalancePoint) -> "BalancePointSchema":
        return cls(date=date.fromisoformat(point.date), total=point.total, accounts=point.accounts)


class MetricsRequest(BaseModel):
    """Request body for POST /v1/cashflow/metrics"""

    points: List[BalancePointSchema] = Field(
        ...,
        description="Daily balances sorted by date ascending; the first point is today's balance",
    )

    def to_domain(self) -> List[models.BalancePoint]:
        return [point.to_domain() for point in self.points]


class MetricsResponse(BaseModel):
    """Risk and trend summary"""

    liquidity_now: float
    worst_day_balance: float
    worst_day_date: str
    days_below_zero: int
    average_balance: float
    volatility: float
    trend_direction: Literal["up", "down", "stable"]
    risk_score: Literal["low", "medium", "high"]
    projected_end_balance: float

    @classmethod
    def from_domain(cls, metrics: models.CashFlowMetrics) -> "MetricsResponse":
        return cls(
            liquidity_now=metrics.liquidity_now,
            worst_day_balance=metrics.worst_day_balance,
            worst_day_date=metrics.worst_day_date,
            days_below_zero=metrics.days_below_zero,
            average_balance=metrics.average_balance,
            volatility=metrics.volatility,
            trend_direction=metrics.trend_direction,
            risk_score=metrics.risk_score,
            projected_end_balance=metrics.projected_end_balance,
        )


class AdjustmentSchema(BaseModel):
    """Single what-if adjustment"""

    type: Literal["expense_reduction", "income_increase", "extra_payment", "savings_goal"]
    amount: float = Field(..., ge=0, description="Monthly amount, or the one-time payment for extra_payment")
    description: str = ""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    category: Optional[str] = None

    def to_domain(self) -> models.ScenarioAdjustment:
        return models.ScenarioAdjustment(
            type=self.type,
            amount=self.amount,
            description=self.description,
            start_date=self.start_date.isoformat() if self.start_date else None,
            end_date=self.end_date.isoformat() if self.end_date else None,
            category=self.category,
        )


class ScenarioRequest(MetricsRequest):
    """Request body for POST /v1/cashflow/scenario"""

    adjustments: List[AdjustmentSchema] = Field(default_factory=list)


class ImpactSchema(BaseModel):
    total_improvement: float
    worst_day_improvement: float
    days_above_zero_gained: int


class ScenarioResponse(BaseModel):
    """Response for POST /v1/cashflow/scenario"""

    scenario_points: List[BalancePointSchema]
    impact: ImpactSchema
    original_metrics: MetricsResponse
    scenario_metrics: MetricsResponse


class KeyEventSchema(BaseModel):
    date: str
    type: str
    description: str
    amount: Optional[float] = None


class EventsResponse(BaseModel):
    """Response for POST /v1/cashflow/events"""

    events: List[KeyEventSchema]


class PostedTransactionSchema(BaseModel):
    amount: float
    type: Literal["income", "expense"]
    event_date: date
    description: str = ""


class AccountSchema(BaseModel):
    account_id: str = Field(..., min_length=1)
    name: str = ""
    balance: float = Field(0.0, description="Initial balance, before posted transactions")
    is_credit_card: bool = False
    transactions: List[PostedTransactionSchema] = Field(default_factory=list)

    def to_domain(self) -> models.Account:
        return models.Account(
            account_id=self.account_id,
            name=self.name,
            balance=self.balance,
            is_credit_card=self.is_credit_card,
            transactions=[
                models.ProjectedTransaction(account_id=self.account_id, **t.model_dump())
                for t in self.transactions
            ],
        )


class RecurringSchema(BaseModel):
    template_id: str
    name: str
    expected_amount: float
    type: Literal["income", "expense"]
    recurrence_pattern: str = "monthly"
    next_due_date: date
    account_id: Optional[str] = None
    day_of_month: Optional[int] = Field(None, ge=1, le=31)


class PlanInstallmentSchema(BaseModel):
    due_date: date
    planned_amount: float
    status: str = "pending"


class PlanSchema(BaseModel):
    plan_id: str
    name: str
    type: Literal["planned_expense", "savings"]
    payment_type: Literal["lump_sum", "installments"]
    total_amount: float
    start_date: date
    installments: List[PlanInstallmentSchema] = Field(default_factory=list)


class CreditCardSchema(BaseModel):
    card_id: str
    name: str
    balance: float
    next_due_date: Optional[date] = None


class ProjectionRequestSchema(BaseModel):
    """Request body for POST /v1/cashflow/projection"""

    accounts: List[AccountSchema] = Field(..., min_length=1)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    recurring: List[RecurringSchema] = Field(default_factory=list)
    plans: List[PlanSchema] = Field(default_factory=list)
    credit_cards: List[CreditCardSchema] = Field(default_factory=list)
    include_recurring: bool = False
    include_plans: bool = False
    include_credit_cards: bool = False
    sample_size: Optional[int] = Field(None, gt=0)

    def to_domain(self) -> models.ProjectionRequest:
        return models.ProjectionRequest(
            accounts=[a.to_domain() for a in self.accounts],
            start_date=self.start_date,
            end_date=self.end_date,
            recurring=[models.RecurringTemplate(**r.model_dump()) for r in self.recurring],
            plans=[
                models.Plan(
                    **p.model_dump(exclude={"installments"}),
                    installments=[models.PlanInstallment(**i.model_dump()) for i in p.installments],
                )
                for p in self.plans
            ],
            credit_cards=[models.CreditCard(**c.model_dump()) for c in self.credit_cards],
            include_recurring=self.include_recurring,
            include_plans=self.include_plans,
            include_credit_cards=self.include_credit_cards,
            sample_size=self.sample_size,
        )


class ProjectionResponse(BaseModel):
    """Response for POST /v1/cashflow/projection"""

    points: List[BalancePointSchema]
    metrics: MetricsResponse
