"""Unit tests for insights query validation"""

import pytest
from datetime import datetime
from expense_insights.domain.exceptions import InvalidDateRangeError, InvalidQueryError
from expense_insights.domain.models import Granularity
from expense_insights.domain.query import parse_insights_query


def test_defaults_to_month_without_dates():
    query = parse_insights_query()

    assert query.granularity == Granularity.MONTH
    assert query.start_date is None
    assert query.end_date is None


def test_explicit_range_end_date_covers_whole_day():
    query = parse_insights_query("quarter", "2024-01-01", "2024-03-31")

    assert query.granularity == Granularity.QUARTER
    assert query.start_date == datetime(2024, 1, 1)
    assert query.end_date == datetime(2024, 3, 31, 23, 59, 59, 999999)


def test_explicit_datetime_end_is_kept():
    query = parse_insights_query("month", "2024-01-01T00:00:00", "2024-03-31T12:00:00")

    assert query.end_date == datetime(2024, 3, 31, 12, 0)


def test_aware_timestamps_are_normalized_to_configured_timezone():
    query = parse_insights_query(
        "month",
        "2024-01-01T05:00:00+00:00",
        "2024-01-31T05:00:00+00:00",
        timezone="America/New_York",
    )

    assert query.start_date == datetime(2024, 1, 1, 0, 0)
    assert query.end_date == datetime(2024, 1, 31, 0, 0)


def test_invalid_granularity_names_the_field():
    with pytest.raises(InvalidQueryError) as exc_info:
        parse_insights_query("week")

    assert exc_info.value.field == "granularity"


@pytest.mark.parametrize(
    "start,end,field",
    [
        ("not-a-date", "2024-03-31", "start_date"),
        ("2024-01-01", "2024-13-45", "end_date"),
    ],
)
def test_unparseable_dates_name_the_field(start, end, field):
    with pytest.raises(InvalidQueryError) as exc_info:
        parse_insights_query("month", start, end)

    assert exc_info.value.field == field


def test_end_before_start_is_rejected():
    with pytest.raises(InvalidDateRangeError) as exc_info:
        parse_insights_query("month", "2024-05-01", "2024-04-01")

    assert exc_info.value.field == "end_date"


def test_single_date_falls_back_to_default_window():
    query = parse_insights_query("year", "2024-05-01", None)

    assert query.granularity == Granularity.YEAR
    assert query.start_date is None
    assert query.end_date is None


@pytest.mark.parametrize(
    "end_date,expected_end",
    [
        ("2024", datetime(2024, 12, 31, 23, 59, 59, 999999)),
        ("2024-05", datetime(2024, 5, 31, 23, 59, 59, 999999)),
        ("20240531", datetime(2024, 5, 31, 23, 59, 59, 999999)),
        ("2024-W22", datetime(2024, 6, 2, 23, 59, 59, 999999)),
        ("2024-W22-3", datetime(2024, 5, 29, 23, 59, 59, 999999)),
    ],
)
def test_reduced_precision_end_date_covers_whole_period(end_date, expected_end):
    query = parse_insights_query("month", "2024-01", end_date)

    assert query.start_date == datetime(2024, 1, 1)
    assert query.end_date == expected_end


def test_month_only_range_includes_final_month():
    query = parse_insights_query("month", "2024-04", "2024-05")

    assert query.end_date == datetime(2024, 5, 31, 23, 59, 59, 999999)


def test_start_date_without_room_for_comparison_period_is_rejected():
    with pytest.raises(InvalidQueryError) as exc_info:
        parse_insights_query("month", "0001-01-01", "2024-01-01")

    assert exc_info.value.field == "start_date"


def test_end_date_at_calendar_limit_is_rejected():
    with pytest.raises(InvalidQueryError) as exc_info:
        parse_insights_query("year", "9999-01-01", "9999")

    assert exc_info.value.field == "end_date"
