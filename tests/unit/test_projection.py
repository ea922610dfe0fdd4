"""Unit tests for the daily balance projection"""

import pytest
from datetime import date, timedelta
from cashflow_api.domain.models import (
    Account,
    BalancePoint,
    CreditCard,
    Plan,
    PlanInstallment,
    ProjectedTransaction,
    ProjectionRequest,
    RecurringTemplate,
)
from cashflow_api.domain.projection import (
    build_projection,
    current_balance,
    generate_recurring_occurrences,
    sample_points,
)
from cashflow_api.domain.exceptions import InvalidProjectionInputError


START = date(2024, 1, 1)


def _rent(pattern: str = "monthly", **overrides) -> RecurringTemplate:
    fields = dict(
        template_id="rent",
        name="Rent",
        expected_amount=1200,
        type="expense",
        recurrence_pattern=pattern,
        next_due_date=date(2024, 1, 10),
        account_id="checking",
        day_of_month=10,
    )
    fields.update(overrides)
    return RecurringTemplate(**fields)


def test_current_balance_normalizes_signs():
    txns = [
        ProjectedTransaction("a", -3000, "income", START, "Salary"),  # sign ignored
        ProjectedTransaction("a", 500, "expense", START, "Groceries"),
        ProjectedTransaction("a", -200, "expense", START, "Fuel"),
    ]

    assert current_balance(1000, txns) == 3300


def test_generate_recurring_occurrences_monthly_pins_day():
    occurrences = generate_recurring_occurrences(_rent(), START, date(2024, 3, 31))

    assert [o.event_date for o in occurrences] == [date(2024, 1, 10), date(2024, 2, 10), date(2024, 3, 10)]
    assert occurrences[0].description == "[Recurring] Rent"


def test_generate_recurring_occurrences_starts_at_window():
    """Templates already due before the window start at the window start"""
    template = _rent(pattern="weekly", next_due_date=date(2023, 12, 1))

    occurrences = generate_recurring_occurrences(template, START, date(2024, 1, 15))

    assert [o.event_date for o in occurrences] == [date(2024, 1, 1), date(2024, 1, 8), date(2024, 1, 15)]


def test_generate_recurring_occurrences_clamps_to_month_end():
    template = _rent(next_due_date=date(2024, 1, 31), day_of_month=31)

    occurrences = generate_recurring_occurrences(template, START, date(2024, 4, 30))

    assert [o.event_date for o in occurrences] == [
        date(2024, 1, 31),
        date(2024, 2, 29),
        date(2024, 3, 31),
        date(2024, 4, 30),
    ]


def test_generate_recurring_occurrences_quarterly_and_yearly():
    quarterly = generate_recurring_occurrences(_rent(pattern="quarterly"), START, date(2024, 12, 31))
    yearly = generate_recurring_occurrences(_rent(pattern="yearly"), START, date(2026, 12, 31))

    assert [o.event_date.month for o in quarterly] == [1, 4, 7, 10]
    assert [o.event_date.year for o in yearly] == [2024, 2025, 2026]


def test_generate_recurring_occurrences_capped():
    template = _rent(pattern="weekly")

    occurrences = generate_recurring_occurrences(template, START, date(2030, 1, 1), max_occurrences=24)

    assert len(occurrences) == 24


def test_build_projection_carries_balance_forward():
    request = ProjectionRequest(
        accounts=[Account("checking", "Checking", 2000), Account("savings", "Savings", 500)],
        start_date=START,
        end_date=date(2024, 1, 15),
        recurring=[_rent()],
        include_recurring=True,
    )

    points = build_projection(request)

    assert len(points) == 15
    assert points[0] == BalancePoint(date="2024-01-01", total=2500)
    assert points[8].total == 2500  # Jan 9
    assert points[9].total == 1300  # Jan 10, rent paid
    assert points[-1].total == 1300
    assert points[-1].accounts == {"checking": 800, "savings": 500}


def test_build_projection_ignores_recurring_unless_included():
    request = ProjectionRequest(
        accounts=[Account("checking", "Checking", 2000)],
        start_date=START,
        end_date=date(2024, 1, 31),
        recurring=[_rent()],
    )

    points = build_projection(request)

    assert {p.total for p in points} == {2000}


def test_build_projection_skips_templates_for_other_accounts():
    request = ProjectionRequest(
        accounts=[Account("checking", "Checking", 2000)],
        start_date=START,
        end_date=date(2024, 1, 31),
        recurring=[_rent(account_id="other-bank")],
        include_recurring=True,
    )

    assert build_projection(request)[-1].total == 2000


def test_build_projection_plans():
    plans = [
        Plan("trip", "Trip", "planned_expense", "lump_sum", 900, date(2024, 1, 5)),
        Plan(
            "fund",
            "Emergency fund",
            "savings",
            "installments",
            300,
            START,
            installments=[
                PlanInstallment(date(2024, 1, 3), 100),
                PlanInstallment(date(2024, 1, 4), 100, status="paid"),
                PlanInstallment(date(2024, 2, 3), 100),  # outside the window
            ],
        ),
    ]
    request = ProjectionRequest(
        accounts=[Account("checking", "Checking", 1000)],
        start_date=START,
        end_date=date(2024, 1, 10),
        plans=plans,
        include_plans=True,
    )

    points = build_projection(request)

    assert points[2].total == 1100  # Jan 3, savings installment credited
    assert points[3].total == 1100  # paid installment ignored
    assert points[4].total == 200  # Jan 5, lump sum
    assert points[-1].accounts == {"checking": 200}


def test_build_projection_credit_card_payment():
    request = ProjectionRequest(
        accounts=[Account("checking", "Checking", 3000), Account("card", "Visa", -700, is_credit_card=True)],
        start_date=START,
        end_date=date(2024, 1, 20),
        credit_cards=[
            CreditCard("card", "Visa", -700, next_due_date=date(2024, 1, 15)),
            CreditCard("paid", "Amex", 0, next_due_date=date(2024, 1, 16)),
            CreditCard("late", "Master", -50, next_due_date=date(2024, 2, 15)),
        ],
        include_credit_cards=True,
    )

    points = build_projection(request)

    assert points[0].total == 3000  # card debt starts at zero
    assert points[14].total == 2300  # Jan 15
    assert points[-1].total == 2300
    assert points[-1].accounts == {"checking": 2300, "card": 0}


def test_build_projection_default_window():
    request = ProjectionRequest(accounts=[Account("checking", "Checking", 100)])

    points = build_projection(request, horizon_days=30, today=START)

    assert points[0].date == "2024-01-01"
    assert points[-1].date == (START + timedelta(days=30)).isoformat()
    assert len(points) == 31


def test_build_projection_without_accounts():
    assert build_projection(ProjectionRequest(accounts=[])) == []


def test_build_projection_rejects_inverted_window():
    request = ProjectionRequest(
        accounts=[Account("checking", "Checking", 100)],
        start_date=date(2024, 2, 1),
        end_date=START,
    )

    with pytest.raises(InvalidProjectionInputError):
        build_projection(request)


def test_build_projection_applies_posted_transactions():
    """Starting balance is the initial balance plus the account's posted transactions"""
    posted = [
        ProjectedTransaction("checking", 2500, "income", date(2023, 12, 28), "Salary"),
        ProjectedTransaction("checking", -300, "expense", date(2023, 12, 30), "Utilities"),
    ]
    request = ProjectionRequest(
        accounts=[
            Account("checking", "Checking", 1000, transactions=posted),
            Account("card", "Visa", 0, is_credit_card=True, transactions=[
                ProjectedTransaction("card", 400, "expense", date(2023, 12, 29), "Shopping"),
            ]),
        ],
        start_date=START,
        end_date=date(2024, 1, 3),
    )

    points = build_projection(request)

    # Cards not simulated as payments keep their posted debt
    assert points[0].accounts == {"checking": 3200, "card": -400}
    assert points[0].total == 2800
    assert points[-1].total == 2800


def test_build_projection_card_account_ignores_posted_debt_when_paid_off():
    request = ProjectionRequest(
        accounts=[
            Account("checking", "Checking", 1000),
            Account("card", "Visa", 0, is_credit_card=True, transactions=[
                ProjectedTransaction("card", 400, "expense", date(2023, 12, 29), "Shopping"),
            ]),
        ],
        start_date=START,
        end_date=date(2024, 1, 3),
        include_credit_cards=True,
    )

    assert build_projection(request)[0].accounts == {"checking": 1000, "card": 0}


def test_generate_recurring_occurrences_unknown_pattern_steps_monthly():
    """Unrecognized patterns advance one month and keep the current day"""
    template = _rent(pattern="biweekly", day_of_month=25)

    occurrences = generate_recurring_occurrences(template, START, date(2024, 3, 31))

    assert [o.event_date for o in occurrences] == [date(2024, 1, 10), date(2024, 2, 10), date(2024, 3, 10)]


def test_build_projection_recurring_without_account_moves_total_only():
    bonus = RecurringTemplate(
        template_id="bonus",
        name="Bonus",
        expected_amount=100,
        type="income",
        recurrence_pattern="monthly",
        next_due_date=date(2024, 1, 5),
        day_of_month=5,
    )
    request = ProjectionRequest(
        accounts=[Account("checking", "Checking", 1000)],
        start_date=START,
        end_date=date(2024, 1, 10),
        recurring=[bonus],
        include_recurring=True,
    )

    points = build_projection(request)

    assert points[3].total == 1000  # Jan 4
    assert points[4].total == 1100  # Jan 5
    assert points[-1].total == 1100
    assert points[-1].accounts == {"checking": 1000}


def test_build_projection_rejects_oversized_window():
    request = ProjectionRequest(
        accounts=[Account("checking", "Checking", 100)],
        start_date=START,
        end_date=date(2024, 2, 1),  # 32 days
    )

    with pytest.raises(InvalidProjectionInputError):
        build_projection(request, max_days=30)

    request.end_date = date(2024, 1, 30)  # 30 days
    assert len(build_projection(request, max_days=30)) == 30


def test_sample_points_keeps_last_point(make_points):
    points = make_points(*range(10))

    sampled = sample_points(points, 4)

    # step = 10 // 4 = 2
    assert [p.total for p in sampled] == [0, 2, 4, 6, 8, 9]


def test_sample_points_short_series_untouched(make_points):
    points = make_points(1, 2, 3)

    assert sample_points(points, 5) is points
    assert sample_points(points, None) is points
