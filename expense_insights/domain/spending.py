"""Spending signals - velocity over the current window and unusual transactions"""

from collections import defaultdict
from datetime import datetime, timedelta
from typing import Dict, List

from expense_insights.domain.health import round_half_up
from expense_insights.domain.models import DateRange, SpendingAnomaly, SpendingVelocity, Transaction
from expense_insights.utils.date_utils import end_of_day, generate_date_range, start_of_day

RECENT_DAYS = 7

# A transaction at or above 2x its category mean is flagged
ANOMALY_MULTIPLIER = 2.0
ANOMALY_MIN_TRANSACTIONS = 3


def calculate_spending_velocity(
    window: DateRange,
    total_spend: int,
    transactions: List[Transaction],
    now: datetime,
) -> SpendingVelocity:
    """
    Measure how fast money is leaving during the current window.

    Requirements:
    - Days elapsed counted from window start up to now (or window end if earlier)
    - Elapsed and remaining days together cover exactly the window's days
    - Current daily rate from the last 7 elapsed days
    - Projection extends the current rate over the days left in the window
    """
    elapsed_until = min(now, window.end)
    if elapsed_until < window.start:
        elapsed_until = window.start

    elapsed_days = generate_date_range(window.start.date(), elapsed_until.date())
    days_elapsed = len(elapsed_days)
    days_remaining = max(0, (window.end.date() - elapsed_until.date()).days)

    recent_start = start_of_day(elapsed_until) - timedelta(days=min(RECENT_DAYS, days_elapsed) - 1)
    recent = DateRange(start=max(recent_start, window.start), end=end_of_day(elapsed_until))
    recent_spend = sum(t.amount_cents for t in transactions if recent.contains(t.occurred_at))

    daily_average = round_half_up(total_spend / days_elapsed)
    current_daily_rate = round_half_up(recent_spend / min(RECENT_DAYS, days_elapsed))

    return SpendingVelocity(
        daily_average=daily_average,
        weekly_average=daily_average * 7,
        current_daily_rate=current_daily_rate,
        projected_period_total=total_spend + current_daily_rate * days_remaining,
        days_elapsed=days_elapsed,
        days_remaining=days_remaining,
    )


def detect_anomalies(transactions: List[Transaction]) -> List[SpendingAnomaly]:
    """
    Flag transactions far above their category's mean amount.

    Categories with fewer than 3 transactions have no meaningful mean and are
    skipped. Largest deviation first.
    """
    by_category: Dict[str, List[Transaction]] = defaultdict(list)
    for txn in transactions:
        by_category[txn.category].append(txn)

    anomalies = []
    for category, items in by_category.items():
        if len(items) < ANOMALY_MIN_TRANSACTIONS:
            continue

        mean = sum(t.amount_cents for t in items) / len(items)
        if mean <= 0:
            continue

        for txn in items:
            if txn.amount_cents >= mean * ANOMALY_MULTIPLIER:
                anomalies.append(
                    SpendingAnomaly(
                        transaction_id=txn.id,
                        category=category,
                        description=txn.description,
                        occurred_at=txn.occurred_at,
                        amount=txn.amount_cents,
                        category_average=round_half_up(mean),
                        deviation_percent=round((txn.amount_cents - mean) / mean * 100, 1),
                    )
                )

    anomalies.sort(key=lambda a: (-a.deviation_percent, a.occurred_at, a.transaction_id))
    return anomalies
