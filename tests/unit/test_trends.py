"""Unit tests for category trend analysis"""

import pytest
from datetime import datetime
from expense_insights.domain.bucketing import bucket_transactions
from expense_insights.domain.models import DateRange, Granularity, Trend
from expense_insights.domain.trends import analyze_category_trends, classify_trend, percent_change


def test_classify_trend_boundaries():
    """Strict thresholds: exactly +/-5% stays stable"""
    assert classify_trend(5) == Trend.STABLE
    assert classify_trend(5.0001) == Trend.UP
    assert classify_trend(-5) == Trend.STABLE
    assert classify_trend(-5.0001) == Trend.DOWN
    assert classify_trend(0) == Trend.STABLE


def test_percent_change_zero_denominator_branches():
    assert percent_change(1000, 0) == 100.0
    assert percent_change(0, 0) == 0.0
    assert percent_change(0, 1000) == -100.0
    assert percent_change(1500, 1000) == 50.0


def test_category_trends_current_vs_previous(make_txn):
    current_range = DateRange(datetime(2024, 4, 1), datetime(2024, 5, 31, 23, 59, 59))
    current = [
        make_txn(5000, "Food", datetime(2024, 4, 3)),
        make_txn(3000, "Food", datetime(2024, 5, 9)),
        make_txn(1000, "Transport", datetime(2024, 5, 20)),
        make_txn(1040, "Utilities", datetime(2024, 4, 28)),
    ]
    previous = [
        make_txn(4000, "Food", datetime(2024, 3, 3)),
        make_txn(2000, "Transport", datetime(2024, 2, 14)),
        make_txn(1000, "Utilities", datetime(2024, 3, 28)),
    ]
    buckets = bucket_transactions(current_range, Granularity.MONTH, current)

    trends = analyze_category_trends(current, previous, buckets)

    assert [t.category for t in trends] == ["Food", "Utilities", "Transport"]

    food, utilities, transport = trends
    assert food.current_total == 8000
    assert food.previous_total == 4000
    assert food.change == 4000
    assert food.change_percent == 100.0
    assert food.trend == Trend.UP
    assert [(p.period, p.total) for p in food.period_data] == [("Apr 2024", 5000), ("May 2024", 3000)]

    assert utilities.change_percent == pytest.approx(4.0)
    assert utilities.trend == Trend.STABLE

    assert transport.change == -1000
    assert transport.change_percent == -50.0
    assert transport.trend == Trend.DOWN
    assert [p.total for p in transport.period_data] == [0, 1000]


def test_zero_previous_total_counts_as_full_increase(make_txn):
    current_range = DateRange(datetime(2024, 5, 1), datetime(2024, 5, 31))
    current = [make_txn(1000, "Hobbies", datetime(2024, 5, 2))]
    buckets = bucket_transactions(current_range, Granularity.MONTH, current)

    [trend] = analyze_category_trends(current, [], buckets)

    assert trend.previous_total == 0
    assert trend.change_percent == 100
    assert trend.trend == Trend.UP


def test_previous_only_categories_are_excluded(make_txn):
    current_range = DateRange(datetime(2024, 5, 1), datetime(2024, 5, 31))
    current = [make_txn(1000, "Food", datetime(2024, 5, 2))]
    previous = [make_txn(7000, "Gym", datetime(2024, 4, 2))]
    buckets = bucket_transactions(current_range, Granularity.MONTH, current)

    trends = analyze_category_trends(current, previous, buckets)

    assert [t.category for t in trends] == ["Food"]


def test_trend_invariants_hold(make_txn):
    current_range = DateRange(datetime(2024, 1, 1), datetime(2024, 3, 31))
    current = [make_txn(amount, cat, datetime(2024, m, 5)) for amount, cat, m in [
        (1000, "A", 1), (2100, "B", 2), (950, "C", 3), (10, "D", 1),
    ]]
    previous = [make_txn(amount, cat, datetime(2023, 11, 5)) for amount, cat in [
        (1000, "A"), (2000, "B"), (1000, "C"),
    ]]
    buckets = bucket_transactions(current_range, Granularity.MONTH, current)

    for trend in analyze_category_trends(current, previous, buckets):
        assert trend.change == trend.current_total - trend.previous_total
        assert trend.trend == classify_trend(trend.change_percent)
        assert sum(p.total for p in trend.period_data) == trend.current_total
