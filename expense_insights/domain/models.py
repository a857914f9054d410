"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import List, Optional

from expense_insights.domain.exceptions import InvalidDateRangeError


class Granularity(str, Enum):
    """Bucketing resolution requested by the caller"""

    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"


class Trend(str, Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


class SpendingTrend(str, Enum):
    """Overall spending direction as worded in the pattern summary"""

    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


class Grade(str, Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class Transaction:
    """Ledger expense owned by a single user"""

    id: int
    owner_id: str
    amount_cents: int
    category: str
    occurred_at: datetime
    description: str = ""


@dataclass(frozen=True)
class DateRange:
    """Time window, inclusive on both ends"""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise InvalidDateRangeError(
                "end_date", f"Range end {self.end.isoformat()} is before start {self.start.isoformat()}"
            )

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end


@dataclass(frozen=True)
class PeriodBucket:
    """Calendar-aligned slice of time with the spend that fell inside it"""

    label: str
    range: DateRange
    total: int


@dataclass(frozen=True)
class PeriodTotal:
    period: str
    total: int


@dataclass(frozen=True)
class CategoryTrend:
    """Current vs previous window comparison for one category"""

    category: str
    current_total: int
    previous_total: int
    change: int
    change_percent: float
    trend: Trend
    period_data: List[PeriodTotal] = field(default_factory=list)


@dataclass(frozen=True)
class FinancialPattern:
    """Aggregate descriptors derived from buckets and category trends"""

    avg_monthly_spend: int
    highest_spend_category: str
    highest_spend_amount: int
    lowest_spend_category: str
    lowest_spend_amount: int
    spending_trend: SpendingTrend
    spending_trend_percent: float
    top_growing_category: Optional[str]
    top_growing_percent: float
    top_shrinking_category: Optional[str]
    top_shrinking_percent: float


@dataclass(frozen=True)
class FinancialHealthScore:
    """Weighted 0-100 score computed from the current month's snapshot"""

    overall: int
    budget_adherence: int
    savings_rate: int
    spending_consistency: int
    bill_payment_score: int
    grade: Grade
    insights: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class BudgetSnapshot:
    """Budget with the spend accumulated in its current period"""

    category: str
    amount_cents: int
    spent_cents: int
    period: str = "monthly"
    alert_threshold: int = 80  # percent

    @property
    def percent_used(self) -> float:
        if self.amount_cents <= 0:
            return 100.0 if self.spent_cents > 0 else 0.0
        return self.spent_cents / self.amount_cents * 100

    @property
    def remaining_cents(self) -> int:
        return self.amount_cents - self.spent_cents

    @property
    def is_over_budget(self) -> bool:
        return self.percent_used > 100


@dataclass(frozen=True)
class SavingsGoalSnapshot:
    name: str
    target_cents: int
    current_cents: int
    deadline: Optional[datetime] = None
    is_completed: bool = False


@dataclass(frozen=True)
class BillReminderSnapshot:
    name: str
    amount_cents: int
    due_date: datetime
    category: Optional[str] = None
    is_active: bool = True


@dataclass(frozen=True)
class CategoryRule:
    """Owner-defined rule mapping a description fragment to a category"""

    id: int
    pattern: str
    category: str
    is_active: bool = True


@dataclass(frozen=True)
class SpendingVelocity:
    daily_average: int
    weekly_average: int
    current_daily_rate: int
    projected_period_total: int
    days_elapsed: int
    days_remaining: int


@dataclass(frozen=True)
class BudgetComparison:
    category: str
    budget_amount: int
    spent: int
    remaining: int
    percent_used: int
    is_over_budget: bool


@dataclass(frozen=True)
class SpendingAnomaly:
    """Transaction well above its category's average"""

    transaction_id: int
    category: str
    description: str
    occurred_at: datetime
    amount: int
    category_average: int
    deviation_percent: float


@dataclass(frozen=True)
class Recommendation:
    title: str
    message: str
    priority: Priority
    action: Optional[str] = None


@dataclass(frozen=True)
class InsightsQuery:
    """Validated insights request parameters"""

    granularity: Granularity = Granularity.MONTH
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


@dataclass(frozen=True)
class InsightsWindow:
    """Requested window plus the equal-length window immediately before it"""

    current: DateRange
    previous: DateRange


@dataclass(frozen=True)
class InsightsResponse:
    period_buckets: List[PeriodBucket]
    category_trends: List[CategoryTrend]
    total_current_period: int
    total_previous_period: int
    overall_change: int
    overall_change_percent: float
    overall_trend: Trend
    financial_pattern: FinancialPattern
    spending_velocity: SpendingVelocity
    budget_comparisons: List[BudgetComparison] = field(default_factory=list)
    anomalies: List[SpendingAnomaly] = field(default_factory=list)
    recommendations: List[Recommendation] = field(default_factory=list)
