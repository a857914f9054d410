"""Unit tests for financial health scoring"""

import pytest
from datetime import datetime, timedelta
from expense_insights.domain.health import (
    BILLS_INSIGHT,
    BUDGET_INSIGHT,
    CONSISTENCY_INSIGHT,
    POSITIVE_INSIGHT,
    SAVINGS_INSIGHT,
    calculate_financial_health_score,
    combine_scores,
    determine_grade,
    score_bill_payments,
    score_budget_adherence,
    score_savings_rate,
    score_spending_consistency,
)
from expense_insights.domain.models import BillReminderSnapshot, BudgetSnapshot, Grade, SavingsGoalSnapshot


def test_perfect_and_zero_scores():
    perfect = combine_scores(100, 100, 100, 100)
    assert perfect.overall == 100
    assert perfect.grade == Grade.A

    zero = combine_scores(0, 0, 0, 0)
    assert zero.overall == 0
    assert zero.grade == Grade.F


def test_weighted_overall():
    # 0.30*50 + 0.25*100 + 0.25*80 + 0.20*100 = 80
    score = combine_scores(50, 100, 80, 100)
    assert score.overall == 80
    assert score.grade == Grade.B


def test_determine_grade_bands():
    assert determine_grade(90) == Grade.A
    assert determine_grade(89) == Grade.B
    assert determine_grade(80) == Grade.B
    assert determine_grade(79) == Grade.C
    assert determine_grade(70) == Grade.C
    assert determine_grade(60) == Grade.D
    assert determine_grade(59) == Grade.F


def test_budget_adherence():
    assert score_budget_adherence([]) == 100

    budgets = [
        BudgetSnapshot("Food", amount_cents=50000, spent_cents=50000),  # exactly 100%
        BudgetSnapshot("Fun", amount_cents=10000, spent_cents=12000),
        BudgetSnapshot("Rent", amount_cents=150000, spent_cents=150000),
        BudgetSnapshot("Travel", amount_cents=20000, spent_cents=0),
    ]
    assert score_budget_adherence(budgets) == 75


def test_savings_rate():
    assert score_savings_rate([]) == 50

    goals = [
        SavingsGoalSnapshot("Emergency", target_cents=100000, current_cents=30000),
        SavingsGoalSnapshot("Trip", target_cents=100000, current_cents=10000),
    ]
    assert score_savings_rate(goals) == 20

    over_saved = [SavingsGoalSnapshot("Car", target_cents=1000, current_cents=5000)]
    assert score_savings_rate(over_saved) == 100


def test_spending_consistency():
    assert score_spending_consistency(50000, 0) == 80
    assert score_spending_consistency(50000, 50000) == 100
    assert score_spending_consistency(60000, 50000) == 80
    assert score_spending_consistency(40000, 50000) == 80
    assert score_spending_consistency(150000, 50000) == 0


def test_bill_payments():
    now = datetime(2024, 6, 15, 12, 0)
    assert score_bill_payments([], now) == 100

    bills = [
        BillReminderSnapshot("Phone", 5000, due_date=now - timedelta(days=2)),
        BillReminderSnapshot("Internet", 6000, due_date=now + timedelta(days=3)),
        BillReminderSnapshot("Power", 9000, due_date=now),
        BillReminderSnapshot("Old gym", 3000, due_date=now - timedelta(days=40), is_active=False),
    ]
    assert score_bill_payments(bills, now) == 67


def test_insights_are_triggered_independently():
    score = combine_scores(budget_adherence=50, savings_rate=20, spending_consistency=40, bill_payment_score=50)
    assert score.insights == [BUDGET_INSIGHT, SAVINGS_INSIGHT, CONSISTENCY_INSIGHT, BILLS_INSIGHT]

    healthy = combine_scores(100, 100, 100, 100)
    assert healthy.insights == [POSITIVE_INSIGHT]

    mixed = combine_scores(100, 40, 100, 100)
    assert mixed.overall == 85
    assert mixed.insights == [SAVINGS_INSIGHT, POSITIVE_INSIGHT]


def test_calculate_financial_health_score_defaults(make_txn):
    """No budgets, goals, bills or history still yields a well-defined score"""
    now = datetime(2024, 6, 15)
    score = calculate_financial_health_score([], [], [], [], [], now)

    # 0.30*100 + 0.25*50 + 0.25*80 + 0.20*100 = 82.5 -> 83
    assert score.budget_adherence == 100
    assert score.savings_rate == 50
    assert score.spending_consistency == 80
    assert score.bill_payment_score == 100
    assert score.overall == 83
    assert score.grade == Grade.B


def test_calculate_financial_health_score_uses_month_totals(make_txn):
    now = datetime(2024, 6, 15)
    current = [make_txn(30000, "Food", datetime(2024, 6, 2)), make_txn(30000, "Rent", datetime(2024, 6, 3))]
    last = [make_txn(50000, "Food", datetime(2024, 5, 10))]

    score = calculate_financial_health_score(current, last, [], [], [], now)

    assert score.spending_consistency == 80


@pytest.mark.parametrize("sub_score", [0, 25, 50, 75, 100])
def test_overall_stays_within_bounds(sub_score):
    score = combine_scores(sub_score, sub_score, sub_score, sub_score)
    assert 0 <= score.overall <= 100
    assert score.overall == sub_score
