"""Financial health scoring engine - weighted multi-factor score with grade"""

import math
from datetime import datetime
from typing import List

from expense_insights.domain.models import (
    BillReminderSnapshot,
    BudgetSnapshot,
    FinancialHealthScore,
    Grade,
    SavingsGoalSnapshot,
    Transaction,
)

# Neutral defaults when a factor cannot be measured
NO_BUDGETS_SCORE = 100
NO_GOALS_SCORE = 50  # midpoint
NO_HISTORY_CONSISTENCY_SCORE = 80
NO_BILLS_SCORE = 100

WEIGHT_BUDGET = 0.30
WEIGHT_SAVINGS = 0.25
WEIGHT_CONSISTENCY = 0.25
WEIGHT_BILLS = 0.20

BUDGET_INSIGHT = "You're over budget in some categories. Review your spending limits to stay on track."
SAVINGS_INSIGHT = "Your savings goals need attention. Consider setting aside a fixed amount each month."
CONSISTENCY_INSIGHT = "Your spending changed sharply from last month. Steadier spending makes budgeting easier."
BILLS_INSIGHT = "You have overdue bills. Paying them soon helps avoid late fees."
POSITIVE_INSIGHT = "Great job! Your finances are in good shape. Keep it up."


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def score_budget_adherence(budgets: List[BudgetSnapshot]) -> int:
    """Share of budgets at or under 100% utilization"""
    if not budgets:
        return NO_BUDGETS_SCORE
    within = sum(1 for b in budgets if b.percent_used <= 100)
    return round_half_up(within / len(budgets) * 100)


def score_savings_rate(goals: List[SavingsGoalSnapshot]) -> int:
    """Progress across all savings goals, capped at 100"""
    if not goals:
        return NO_GOALS_SCORE
    total_target = sum(g.target_cents for g in goals)
    total_saved = sum(g.current_cents for g in goals)
    if total_target <= 0:
        return NO_GOALS_SCORE
    return round_half_up(min(100.0, total_saved / total_target * 100))


def score_spending_consistency(current_month_spend: int, last_month_spend: int) -> int:
    """
    Penalize month-over-month swings.

    variance = |current - previous| / previous, score = 100 - variance * 100,
    floored at 0. Without last-month spend the variance is undefined.
    """
    if last_month_spend <= 0:
        return NO_HISTORY_CONSISTENCY_SCORE
    variance = abs(current_month_spend - last_month_spend) / last_month_spend
    return round_half_up(max(0.0, 100 - variance * 100))


def score_bill_payments(bills: List[BillReminderSnapshot], now: datetime) -> int:
    """Share of active bills not past their due date"""
    active = [b for b in bills if b.is_active]
    if not active:
        return NO_BILLS_SCORE
    on_time = sum(1 for b in active if not b.due_date < now)
    return round_half_up(on_time / len(active) * 100)


def determine_grade(overall: int) -> Grade:
    """
    Map overall score to letter grade.

    - 90+: A
    - 80-89: B
    - 70-79: C
    - 60-69: D
    - below 60: F
    """
    if overall >= 90:
        return Grade.A
    elif overall >= 80:
        return Grade.B
    elif overall >= 70:
        return Grade.C
    elif overall >= 60:
        return Grade.D
    else:
        return Grade.F


def build_health_insights(
    overall: int,
    budget_adherence: int,
    savings_rate: int,
    spending_consistency: int,
    bill_payment_score: int,
) -> List[str]:
    insights = []
    if budget_adherence < 80:
        insights.append(BUDGET_INSIGHT)
    if savings_rate < 50:
        insights.append(SAVINGS_INSIGHT)
    if spending_consistency < 60:
        insights.append(CONSISTENCY_INSIGHT)
    if bill_payment_score < 100:
        insights.append(BILLS_INSIGHT)
    if overall >= 80:
        insights.append(POSITIVE_INSIGHT)
    return insights


def combine_scores(
    budget_adherence: int,
    savings_rate: int,
    spending_consistency: int,
    bill_payment_score: int,
) -> FinancialHealthScore:
    """
    Weight sub-scores into the overall score.

    Scoring weights:
    - 30%: Budget adherence
    - 25%: Savings progress
    - 25%: Spending consistency
    - 20%: Bill punctuality
    """
    overall = round_half_up(
        budget_adherence * WEIGHT_BUDGET
        + savings_rate * WEIGHT_SAVINGS
        + spending_consistency * WEIGHT_CONSISTENCY
        + bill_payment_score * WEIGHT_BILLS
    )

    return FinancialHealthScore(
        overall=overall,
        budget_adherence=budget_adherence,
        savings_rate=savings_rate,
        spending_consistency=spending_consistency,
        bill_payment_score=bill_payment_score,
        grade=determine_grade(overall),
        insights=build_health_insights(
            overall, budget_adherence, savings_rate, spending_consistency, bill_payment_score
        ),
    )


def calculate_financial_health_score(
    current_month_transactions: List[Transaction],
    last_month_transactions: List[Transaction],
    budgets: List[BudgetSnapshot],
    goals: List[SavingsGoalSnapshot],
    bills: List[BillReminderSnapshot],
    now: datetime,
) -> FinancialHealthScore:
    """
    Main entry point: score a user's current financial snapshot.

    Pure function of its inputs; nothing is stored.
    """
    current_spend = sum(t.amount_cents for t in current_month_transactions)
    last_spend = sum(t.amount_cents for t in last_month_transactions)

    return combine_scores(
        budget_adherence=score_budget_adherence(budgets),
        savings_rate=score_savings_rate(goals),
        spending_consistency=score_spending_consistency(current_spend, last_spend),
        bill_payment_score=score_bill_payments(bills, now),
    )
