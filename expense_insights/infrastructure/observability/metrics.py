"""Prometheus metrics for insights traffic, validation failures and health scores"""

from prometheus_client import Counter, Histogram

# Insights metrics
insights_request_counter = Counter(
    "expense_insights_requests_total",
    "Insights computations served",
    ["granularity"],  # month | quarter | year
)

validation_failure_counter = Counter(
    "expense_insights_validation_failures_total",
    "Insights queries rejected before aggregation",
    ["field"],
)

ledger_read_failures_counter = Counter(
    "expense_insights_ledger_read_failures_total",
    "Ledger reads that failed or returned malformed rows",
)

# Health score metrics
health_score_histogram = Histogram(
    "expense_health_score",
    "Overall financial health scores issued",
    buckets=[20, 40, 60, 70, 80, 90, 100],
)

health_grade_counter = Counter(
    "expense_health_grade_total",
    "Financial health grades issued",
    ["grade"],  # A | B | C | D | F
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_insights(granularity: str) -> None:
    insights_request_counter.labels(granularity=granularity).inc()


def record_validation_failure(field: str) -> None:
    validation_failure_counter.labels(field=field).inc()


def record_health_score(overall: int, grade: str) -> None:
    """Record score distribution and grade counts"""
    health_score_histogram.observe(overall)
    health_grade_counter.labels(grade=grade).inc()
