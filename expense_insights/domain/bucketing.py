"""Period bucketing - partitions a date range into calendar-aligned buckets"""

from datetime import datetime
from typing import Callable, Dict, Iterable, List, Tuple

from expense_insights.domain.models import DateRange, Granularity, PeriodBucket, Transaction
from expense_insights.utils.date_utils import TICK, add_months, start_of_month, start_of_quarter, start_of_year

# (period start for a moment, months per period, label for a period start)
_PERIODS: Dict[Granularity, Tuple[Callable[[datetime], datetime], int, Callable[[datetime], str]]] = {
    Granularity.MONTH: (start_of_month, 1, lambda start: start.strftime("%b %Y")),
    Granularity.QUARTER: (start_of_quarter, 3, lambda start: f"Q{(start.month - 1) // 3 + 1} {start.year}"),
    Granularity.YEAR: (start_of_year, 12, lambda start: str(start.year)),
}


def generate_period_buckets(date_range: DateRange, granularity: Granularity) -> List[DateRange]:
    """
    Split a range into contiguous, calendar-aligned periods.

    Each period is the full calendar month/quarter/year, not clipped to the
    range: month granularity over Jan 15 - Mar 10 gives all of Jan, Feb and Mar.
    """
    align, months, _ = _PERIODS[granularity]

    periods = []
    period_start = align(date_range.start)
    while period_start <= date_range.end:
        next_start = add_months(period_start, months)
        periods.append(DateRange(start=period_start, end=next_start - TICK))
        period_start = next_start

    return periods


def period_label(period_start: datetime, granularity: Granularity) -> str:
    """Format as "Jan 2024", "Q1 2024" or "2024" """
    _, _, label = _PERIODS[granularity]
    return label(period_start)


def bucket_transactions(
    date_range: DateRange,
    granularity: Granularity,
    transactions: Iterable[Transaction],
) -> List[PeriodBucket]:
    """
    Sum transaction amounts per calendar bucket, chronological ascending.

    Buckets are produced for the whole range even when nothing was spent.
    """
    periods = generate_period_buckets(date_range, granularity)
    totals = [0] * len(periods)

    for txn in transactions:
        for index, period in enumerate(periods):
            if period.contains(txn.occurred_at):
                totals[index] += txn.amount_cents
                break

    return [
        PeriodBucket(label=period_label(period.start, granularity), range=period, total=total)
        for period, total in zip(periods, totals)
    ]
