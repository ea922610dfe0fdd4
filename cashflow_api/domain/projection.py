"""Day-by-day balance projection from current balances and future money movements"""

from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional
from cashflow_api.domain.models import (
    Account,
    BalancePoint,
    CreditCard,
    Plan,
    ProjectedTransaction,
    ProjectionRequest,
    RecurringTemplate,
)
from cashflow_api.domain.exceptions import InvalidProjectionInputError
from cashflow_api.utils.date_utils import add_months, generate_date_range


def current_balance(initial_amount: float, transactions: Iterable[ProjectedTransaction]) -> float:
    """Initial balance plus income minus everything else (signs normalized)"""
    balance = initial_amount
    for txn in transactions:
        if txn.type == "income":
            balance += abs(txn.amount)
        else:
            balance -= abs(txn.amount)
    return balance


def generate_recurring_occurrences(
    template: RecurringTemplate,
    start_date: date,
    end_date: date,
    max_occurrences: int = 24,
) -> List[ProjectedTransaction]:
    """
    Expand a recurring template into dated transactions inside [start_date, end_date].

    Monthly, quarterly and yearly steps pin the day to template.day_of_month
    (1 when unset). Unknown patterns step one month keeping the day.
    """
    occurrences = []
    current = max(template.next_due_date, start_date)
    pinned_day = template.day_of_month or 1

    while current <= end_date and len(occurrences) < max_occurrences:
        occurrences.append(
            ProjectedTransaction(
                account_id=template.account_id,
                amount=template.expected_amount,
                type=template.type,
                event_date=current,
                description=f"[Recurring] {template.name}",
            )
        )

        if template.recurrence_pattern == "weekly":
            current = current + timedelta(days=7)
        elif template.recurrence_pattern == "monthly":
            current = add_months(current, 1, pinned_day)
        elif template.recurrence_pattern == "quarterly":
            current = add_months(current, 3, pinned_day)
        elif template.recurrence_pattern == "yearly":
            current = add_months(current, 12, pinned_day)
        else:
            current = add_months(current, 1)

    return occurrences


def generate_plan_transactions(
    plan: Plan,
    account_id: str,
    start_date: date,
    end_date: date,
) -> List[ProjectedTransaction]:
    """Lump-sum plans pay once on start_date; otherwise each pending installment in the window"""
    txn_type = "expense" if plan.type == "planned_expense" else "income"

    if plan.payment_type == "lump_sum":
        if start_date <= plan.start_date <= end_date:
            return [
                ProjectedTransaction(
                    account_id=account_id,
                    amount=plan.total_amount,
                    type=txn_type,
                    event_date=plan.start_date,
                    description=f"[Plan] {plan.name}",
                )
            ]
        return []

    return [
        ProjectedTransaction(
            account_id=account_id,
            amount=inst.planned_amount,
            type=txn_type,
            event_date=inst.due_date,
            description=f"[Plan] {plan.name} - Installment",
        )
        for inst in plan.installments
        if inst.status == "pending" and start_date <= inst.due_date <= end_date
    ]


def generate_card_payment(
    card: CreditCard,
    account_id: str,
    start_date: date,
    end_date: date,
) -> Optional[ProjectedTransaction]:
    """Pay off the outstanding card debt on its next due date, if it falls in the window"""
    if card.next_due_date is None or not (start_date <= card.next_due_date <= end_date):
        return None
    if card.balance >= 0:
        return None
    return ProjectedTransaction(
        account_id=account_id,
        amount=abs(card.balance),
        type="expense",
        event_date=card.next_due_date,
        description=f"[Card Payment] {card.name}",
    )


def sample_points(points: List[BalancePoint], sample_size: Optional[int]) -> List[BalancePoint]:
    """Keep every n-th point so long horizons stay near sample_size; the last point is always kept"""
    if not sample_size or len(points) <= sample_size:
        return points

    step = len(points) // sample_size
    sampled = points[::step]
    if sampled[-1] is not points[-1]:
        sampled.append(points[-1])
    return sampled


def _starting_balances(accounts: List[Account], include_credit_cards: bool) -> Dict[str, float]:
    balances: Dict[str, float] = {}
    for account in accounts:
        # Card debt is simulated as a future payment instead
        if include_credit_cards and account.is_credit_card:
            balances[account.account_id] = 0.0
        else:
            balances[account.account_id] = current_balance(account.balance, account.transactions)
    return balances


def build_projection(
    request: ProjectionRequest,
    horizon_days: int = 90,
    max_recurring_occurrences: int = 24,
    today: Optional[date] = None,
    max_days: Optional[int] = None,
) -> List[BalancePoint]:
    """
    Project the combined balance of the selected accounts for every day of the window.

    Steps:
    1. Start from the current balance of each account (initial balance
       plus posted transactions)
    2. Expand recurring templates, plan installments and card payments
    3. Apply them in date order, carrying balances forward across empty days
    4. Optionally downsample long series

    Raises:
        InvalidProjectionInputError: If the window ends before it starts, or
            spans more than max_days days
    """
    if not request.accounts:
        return []

    start_date = request.start_date or today or date.today()
    end_date = request.end_date or start_date + timedelta(days=horizon_days)
    if end_date < start_date:
        raise InvalidProjectionInputError(
            f"Projection end {end_date.isoformat()} is before start {start_date.isoformat()}"
        )

    window_days = (end_date - start_date).days + 1
    if max_days is not None and window_days > max_days:
        raise InvalidProjectionInputError(
            f"Projection window of {window_days} days exceeds the limit of {max_days} days"
        )

    selected_ids = [account.account_id for account in request.accounts]
    default_account_id = selected_ids[0]

    future: List[ProjectedTransaction] = []

    if request.include_recurring:
        for template in request.recurring:
            if template.account_id is None or template.account_id in selected_ids:
                future.extend(
                    generate_recurring_occurrences(template, start_date, end_date, max_recurring_occurrences)
                )

    if request.include_plans:
        for plan in request.plans:
            future.extend(generate_plan_transactions(plan, default_account_id, start_date, end_date))

    if request.include_credit_cards:
        for card in request.credit_cards:
            payment = generate_card_payment(card, default_account_id, start_date, end_date)
            if payment is not None:
                future.append(payment)

    future.sort(key=lambda txn: txn.event_date)

    starting = _starting_balances(request.accounts, request.include_credit_cards)
    balances = dict(starting)
    total = sum(starting.values())

    # Running balances after all transactions up to and including each date
    snapshots: Dict[date, BalancePoint] = {}
    for txn in future:
        amount = abs(txn.amount) if txn.type == "income" else -abs(txn.amount)
        if txn.account_id is not None:
            balances[txn.account_id] = balances.get(txn.account_id, 0.0) + amount
        total += amount
        snapshots[txn.event_date] = BalancePoint(
            date=txn.event_date.isoformat(),
            total=total,
            accounts=dict(balances),
        )

    points: List[BalancePoint] = []
    last = BalancePoint(date=start_date.isoformat(), total=sum(starting.values()), accounts=starting)
    for day in generate_date_range(start_date, end_date):
        point = snapshots.get(day)
        if point is None:
            point = BalancePoint(date=day.isoformat(), total=last.total, accounts=dict(last.accounts))
        points.append(point)
        last = point

    return sample_points(points, request.sample_size)
