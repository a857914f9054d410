"""Financial pattern summary derived from bucketed totals and category trends"""

from typing import List

from expense_insights.domain.health import round_half_up
from expense_insights.domain.models import CategoryTrend, FinancialPattern, SpendingTrend, Trend
from expense_insights.domain.trends import classify_trend

NO_CATEGORY = "N/A"

_SPENDING_TRENDS = {
    Trend.UP: SpendingTrend.INCREASING,
    Trend.DOWN: SpendingTrend.DECREASING,
    Trend.STABLE: SpendingTrend.STABLE,
}


def summarize_financial_pattern(
    total_current_period: int,
    overall_change_percent: float,
    category_trends: List[CategoryTrend],
    month_count: int,
) -> FinancialPattern:
    """
    Derive aggregate spending descriptors for one insights response.

    - avg monthly spend over at least one month
    - highest category by current total, lowest by smallest positive total
    - fastest growing category (up, with a previous total to grow from)
    - fastest shrinking category (down)
    """
    avg_monthly_spend = round_half_up(total_current_period / max(month_count, 1))

    highest = max(category_trends, key=lambda t: t.current_total, default=None)

    spending = [t for t in category_trends if t.current_total > 0]
    lowest = min(spending, key=lambda t: t.current_total, default=None)

    growing = [t for t in category_trends if t.trend == Trend.UP and t.previous_total > 0]
    top_growing = max(growing, key=lambda t: t.change_percent, default=None)

    shrinking = [t for t in category_trends if t.trend == Trend.DOWN]
    top_shrinking = min(shrinking, key=lambda t: t.change_percent, default=None)

    return FinancialPattern(
        avg_monthly_spend=avg_monthly_spend,
        highest_spend_category=highest.category if highest else NO_CATEGORY,
        highest_spend_amount=highest.current_total if highest else 0,
        lowest_spend_category=lowest.category if lowest else NO_CATEGORY,
        lowest_spend_amount=lowest.current_total if lowest else 0,
        spending_trend=_SPENDING_TRENDS[classify_trend(overall_change_percent)],
        spending_trend_percent=round(overall_change_percent, 1),
        top_growing_category=top_growing.category if top_growing else None,
        top_growing_percent=top_growing.change_percent if top_growing else 0.0,
        top_shrinking_category=top_shrinking.category if top_shrinking else None,
        top_shrinking_percent=top_shrinking.change_percent if top_shrinking else 0.0,
    )
