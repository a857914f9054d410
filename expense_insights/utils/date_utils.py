"""Calendar-safe date manipulation utilities"""

from datetime import date, datetime, timedelta
from typing import List
from zoneinfo import ZoneInfo

from dateutil.relativedelta import relativedelta

# Smallest step between two inclusive ranges
TICK = timedelta(microseconds=1)


def generate_date_range(start: date, end: date) -> List[date]:
    """Generate list of dates from start to end (inclusive)"""
    days = (end - start).days + 1
    return [start + timedelta(days=i) for i in range(days)]


def start_of_day(value: datetime) -> datetime:
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(value: datetime) -> datetime:
    return start_of_day(value) + timedelta(days=1) - TICK


def start_of_month(value: datetime) -> datetime:
    return start_of_day(value).replace(day=1)


def end_of_month(value: datetime) -> datetime:
    return start_of_month(value) + relativedelta(months=1) - TICK


def start_of_quarter(value: datetime) -> datetime:
    first_month = 3 * ((value.month - 1) // 3) + 1
    return start_of_month(value).replace(month=first_month)


def start_of_year(value: datetime) -> datetime:
    return start_of_month(value).replace(month=1)


def end_of_year(value: datetime) -> datetime:
    return start_of_year(value) + relativedelta(years=1) - TICK


def end_of_week(value: datetime) -> datetime:
    """Sunday 23:59:59.999999 of the ISO week containing value"""
    return end_of_day(value + timedelta(days=6 - value.weekday()))



def add_months(value: datetime, months: int) -> datetime:
    """Shift by whole calendar months, clamping the day to the target month's length"""
    return value + relativedelta(months=months)


def months_spanned(start: datetime, end: datetime) -> int:
    """
    Count calendar months touched by [start, end].

    Jan 15 - Mar 10 spans 3 months. Never less than 1.
    """
    months = (end.year - start.year) * 12 + (end.month - start.month) + 1
    return max(months, 1)


def to_local_naive(value: datetime, timezone: str) -> datetime:
    """Convert an aware datetime into the configured timezone, dropping tzinfo"""
    if value.tzinfo is None:
        return value
    return value.astimezone(ZoneInfo(timezone)).replace(tzinfo=None)


def local_now(timezone: str) -> datetime:
    """Current wall-clock time in the configured timezone (naive)"""
    return datetime.now(ZoneInfo(timezone)).replace(tzinfo=None)
