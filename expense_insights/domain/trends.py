"""Category trend analysis - current vs previous window per category"""

from collections import defaultdict
from typing import Dict, Iterable, List

from expense_insights.domain.models import CategoryTrend, PeriodBucket, PeriodTotal, Transaction, Trend

# Changes within +/-5% count as stable
TREND_THRESHOLD_PERCENT = 5.0


def percent_change(current: int, previous: int) -> float:
    """
    Percent change from previous to current.

    Zero-denominator branches:
    - previous == 0 and current > 0: 100
    - otherwise with previous <= 0: 0
    """
    if previous > 0:
        return (current - previous) / previous * 100
    if current > 0:
        return 100.0
    return 0.0


def classify_trend(change_percent: float) -> Trend:
    """Strict thresholds: exactly 5% is still stable"""
    if change_percent > TREND_THRESHOLD_PERCENT:
        return Trend.UP
    if change_percent < -TREND_THRESHOLD_PERCENT:
        return Trend.DOWN
    return Trend.STABLE


def totals_by_category(transactions: Iterable[Transaction]) -> Dict[str, int]:
    totals: Dict[str, int] = defaultdict(int)
    for txn in transactions:
        totals[txn.category] += txn.amount_cents
    return dict(totals)


def analyze_category_trends(
    current_transactions: List[Transaction],
    previous_transactions: List[Transaction],
    buckets: List[PeriodBucket],
) -> List[CategoryTrend]:
    """
    Build one CategoryTrend per category seen in the current window.

    Categories that only appear in the previous window are left out.
    Result is sorted by current_total, highest first.
    """
    current_totals = totals_by_category(current_transactions)
    previous_totals = totals_by_category(previous_transactions)

    # category -> per-bucket totals, aligned with `buckets`
    bucket_totals: Dict[str, List[int]] = {category: [0] * len(buckets) for category in current_totals}
    for txn in current_transactions:
        for index, bucket in enumerate(buckets):
            if bucket.range.contains(txn.occurred_at):
                bucket_totals[txn.category][index] += txn.amount_cents
                break

    trends = []
    for category, current_total in current_totals.items():
        previous_total = previous_totals.get(category, 0)
        change_percent = percent_change(current_total, previous_total)

        trends.append(
            CategoryTrend(
                category=category,
                current_total=current_total,
                previous_total=previous_total,
                change=current_total - previous_total,
                change_percent=change_percent,
                trend=classify_trend(change_percent),
                period_data=[
                    PeriodTotal(period=bucket.label, total=total)
                    for bucket, total in zip(buckets, bucket_totals[category])
                ],
            )
        )

    trends.sort(key=lambda t: (-t.current_total, t.category))
    return trends
