"""Validation of raw insights query parameters"""

import re
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from dateutil.parser import isoparse

from expense_insights.domain.exceptions import InvalidQueryError
from expense_insights.domain.models import DateRange, Granularity, InsightsQuery
from expense_insights.utils.date_utils import TICK, end_of_day, end_of_month, end_of_week, end_of_year, to_local_naive

# Date-only forms accepted by isoparse, mapped to the last instant they cover
_DATE_ONLY_FORMS: List[Tuple[re.Pattern, Callable[[datetime], datetime]]] = [
    (re.compile(r"^\d{4}$"), end_of_year),
    (re.compile(r"^\d{4}-\d{2}$"), end_of_month),
    (re.compile(r"^\d{4}-?W\d{2}$"), end_of_week),
    (re.compile(r"^\d{4}(-?\d{2}-?\d{2}|-?W\d{2}-?\d)$"), end_of_day),
]


def parse_timestamp(field: str, value: str, timezone: str, end_of_period: bool = False) -> datetime:
    """
    Parse an ISO-8601 date or datetime.

    A date without a time as the end of a range covers its whole period:
    `2024` runs to Dec 31, `2024-05` to May 31, `2024-05-31` to the end of
    that day.
    """
    raw = value.strip()
    try:
        parsed = to_local_naive(isoparse(raw), timezone)
        if end_of_period:
            for pattern, period_end in _DATE_ONLY_FORMS:
                if pattern.match(raw):
                    parsed = period_end(parsed)
                    break
    except (ValueError, OverflowError) as e:
        raise InvalidQueryError(field, f"Invalid {field}: '{value}' is not a supported ISO-8601 date") from e

    return parsed


def parse_insights_query(
    granularity: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    timezone: str = "UTC",
    default_granularity: str = Granularity.MONTH.value,
) -> InsightsQuery:
    """
    Validate raw query strings before any aggregation runs.

    Raises:
        InvalidQueryError: naming the offending field
    """
    raw_granularity = (granularity or default_granularity).strip().lower()
    try:
        resolved_granularity = Granularity(raw_granularity)
    except ValueError as e:
        allowed = ", ".join(g.value for g in Granularity)
        raise InvalidQueryError("granularity", f"Invalid granularity '{granularity}'; expected one of: {allowed}") from e

    start = parse_timestamp("start_date", start_date, timezone) if start_date else None
    end = parse_timestamp("end_date", end_date, timezone, end_of_period=True) if end_date else None

    if start is None or end is None:
        # A half-open range falls back to the default window
        return InsightsQuery(granularity=resolved_granularity)

    # Raises InvalidDateRangeError when end precedes start
    current = DateRange(start=start, end=end)

    # The equal-length comparison window before start must fit in the calendar
    try:
        current.start - TICK - current.duration
    except OverflowError as e:
        raise InvalidQueryError("start_date", f"Invalid start_date: '{start_date}' leaves no room for a comparison period") from e

    return InsightsQuery(granularity=resolved_granularity, start_date=start, end_date=end)
