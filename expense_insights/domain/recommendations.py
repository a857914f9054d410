"""Budget-vs-actual comparisons and prioritized recommendations"""

from typing import List

from expense_insights.domain.health import round_half_up
from expense_insights.domain.models import (
    BudgetComparison,
    BudgetSnapshot,
    FinancialPattern,
    Priority,
    Recommendation,
    SpendingTrend,
    SpendingVelocity,
)

FAST_GROWTH_PERCENT = 25.0
PROJECTION_WARNING_RATIO = 1.1

BUDGETS_ACTION = "/budgets"
INSIGHTS_ACTION = "/insights"


def compare_budgets(budgets: List[BudgetSnapshot]) -> List[BudgetComparison]:
    """Budget vs actual per category, most utilized first"""
    comparisons = [
        BudgetComparison(
            category=b.category,
            budget_amount=b.amount_cents,
            spent=b.spent_cents,
            remaining=b.remaining_cents,
            percent_used=round_half_up(b.percent_used),
            is_over_budget=b.is_over_budget,
        )
        for b in budgets
    ]
    comparisons.sort(key=lambda c: (-c.percent_used, c.category))
    return comparisons


def build_recommendations(
    budgets: List[BudgetSnapshot],
    pattern: FinancialPattern,
    velocity: SpendingVelocity,
    total_current_period: int,
) -> List[Recommendation]:
    """
    Turn insight signals into actionable suggestions, highest priority first.

    - high: a budget is exceeded
    - medium: a budget crossed its alert threshold, overall spending is
      increasing, or one category grew by 25%+
    - low: projected spend runs more than 10% past the current total
    """
    recommendations = []

    for budget in sorted(budgets, key=lambda b: -b.percent_used):
        if budget.is_over_budget:
            recommendations.append(
                Recommendation(
                    title=f"Over budget on {budget.category}",
                    message=(
                        f"You've used {round_half_up(budget.percent_used)}% of your {budget.category} budget. "
                        "Cut back or adjust the limit."
                    ),
                    priority=Priority.HIGH,
                    action=BUDGETS_ACTION,
                )
            )
        elif budget.percent_used >= budget.alert_threshold:
            recommendations.append(
                Recommendation(
                    title=f"{budget.category} budget almost used",
                    message=(
                        f"{round_half_up(budget.percent_used)}% of your {budget.category} budget is gone. "
                        "Slow down to stay within it."
                    ),
                    priority=Priority.MEDIUM,
                    action=BUDGETS_ACTION,
                )
            )

    if pattern.spending_trend == SpendingTrend.INCREASING:
        recommendations.append(
            Recommendation(
                title="Spending is rising",
                message=f"You spent {pattern.spending_trend_percent}% more than in the previous period.",
                priority=Priority.MEDIUM,
                action=INSIGHTS_ACTION,
            )
        )

    if pattern.top_growing_category and pattern.top_growing_percent >= FAST_GROWTH_PERCENT:
        recommendations.append(
            Recommendation(
                title=f"{pattern.top_growing_category} spending jumped",
                message=(
                    f"{pattern.top_growing_category} grew by {pattern.top_growing_percent:.1f}%. "
                    "Consider setting a budget for it."
                ),
                priority=Priority.MEDIUM,
                action=BUDGETS_ACTION,
            )
        )

    if total_current_period > 0 and velocity.projected_period_total > total_current_period * PROJECTION_WARNING_RATIO:
        recommendations.append(
            Recommendation(
                title="Projected spend is climbing",
                message=(
                    f"At your current pace you'll spend about {velocity.projected_period_total / 100:.2f} "
                    "by the end of the period."
                ),
                priority=Priority.LOW,
            )
        )

    order = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}
    recommendations.sort(key=lambda r: order[r.priority])
    return recommendations
