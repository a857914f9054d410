"""Insights orchestration - resolves windows and runs the aggregation pipeline"""

from datetime import datetime
from typing import List, Optional, Protocol

from expense_insights.domain.bucketing import bucket_transactions
from expense_insights.domain.categorization import match_category
from expense_insights.domain.health import calculate_financial_health_score
from expense_insights.domain.models import (
    BillReminderSnapshot,
    BudgetSnapshot,
    CategoryRule,
    DateRange,
    FinancialHealthScore,
    InsightsQuery,
    InsightsResponse,
    InsightsWindow,
    SavingsGoalSnapshot,
    Transaction,
)
from expense_insights.domain.patterns import summarize_financial_pattern
from expense_insights.domain.recommendations import build_recommendations, compare_budgets
from expense_insights.domain.spending import calculate_spending_velocity, detect_anomalies
from expense_insights.domain.trends import analyze_category_trends, classify_trend, percent_change
from expense_insights.utils.date_utils import TICK, add_months, end_of_month, local_now, months_spanned, start_of_month

DEFAULT_WINDOW_MONTHS = 6


class TransactionReader(Protocol):
    def list_transactions(self, owner_id: str, start: datetime, end: datetime) -> List[Transaction]: ...


class BudgetReader(Protocol):
    def list_budgets_with_spending(self, owner_id: str, now: datetime) -> List[BudgetSnapshot]: ...


class SavingsGoalReader(Protocol):
    def list_goals(self, owner_id: str) -> List[SavingsGoalSnapshot]: ...


class BillReminderReader(Protocol):
    def list_active_bills(self, owner_id: str) -> List[BillReminderSnapshot]: ...


class CategoryRuleReader(Protocol):
    def list_active_rules(self, owner_id: str) -> List[CategoryRule]: ...


def resolve_window(query: InsightsQuery, now: datetime, window_months: int = DEFAULT_WINDOW_MONTHS) -> InsightsWindow:
    """
    Determine the current window and the equal-length window right before it.

    Explicit dates: previous window ends one tick before the current start and
    spans the same duration. Default: trailing calendar months ending now,
    compared with the same number of months before them.
    """
    if query.start_date is not None and query.end_date is not None:
        current = DateRange(start=query.start_date, end=query.end_date)
        previous_end = current.start - TICK
        previous = DateRange(start=previous_end - current.duration, end=previous_end)
        return InsightsWindow(current=current, previous=previous)

    current_start = add_months(start_of_month(now), -(window_months - 1))
    current = DateRange(start=current_start, end=now)
    previous = DateRange(start=add_months(current_start, -window_months), end=current_start - TICK)
    return InsightsWindow(current=current, previous=previous)


class InsightsService:
    """
    Aggregation service over one owner's ledger.

    Data access is injected so the pipeline can run against fixtures as well
    as the database-backed repositories.
    """

    def __init__(
        self,
        transactions: TransactionReader,
        budgets: BudgetReader,
        goals: SavingsGoalReader,
        bills: BillReminderReader,
        rules: Optional[CategoryRuleReader] = None,
        timezone: str = "UTC",
        window_months: int = DEFAULT_WINDOW_MONTHS,
    ):
        self.transactions = transactions
        self.budgets = budgets
        self.goals = goals
        self.bills = bills
        self.rules = rules
        self.timezone = timezone
        self.window_months = window_months

    def _now(self, now: Optional[datetime]) -> datetime:
        return now if now is not None else local_now(self.timezone)

    def compute_insights(
        self,
        owner_id: str,
        query: InsightsQuery,
        now: Optional[datetime] = None,
    ) -> InsightsResponse:
        """
        Main entry point: build the full insights response.

        Flow:
        1. Resolve current and previous windows
        2. Fetch transactions for both windows
        3. Bucket current-window spend at the requested granularity
        4. Compare categories across windows
        5. Compute overall totals and trend
        6. Summarize spending patterns
        7. Add velocity, budget comparisons, anomalies and recommendations
        """
        now = self._now(now)

        # 1-2. Windows and ledger reads
        window = resolve_window(query, now, self.window_months)
        current_txns = self.transactions.list_transactions(owner_id, window.current.start, window.current.end)
        previous_txns = self.transactions.list_transactions(owner_id, window.previous.start, window.previous.end)

        # 3-4. Buckets and category trends
        buckets = bucket_transactions(window.current, query.granularity, current_txns)
        category_trends = analyze_category_trends(current_txns, previous_txns, buckets)

        # 5. Overall comparison
        total_current = sum(t.amount_cents for t in current_txns)
        total_previous = sum(t.amount_cents for t in previous_txns)
        overall_change_percent = percent_change(total_current, total_previous)

        # 6. Pattern summary
        pattern = summarize_financial_pattern(
            total_current_period=total_current,
            overall_change_percent=overall_change_percent,
            category_trends=category_trends,
            month_count=months_spanned(window.current.start, window.current.end),
        )

        # 7. Supplementary signals
        budgets = self.budgets.list_budgets_with_spending(owner_id, now)
        velocity = calculate_spending_velocity(window.current, total_current, current_txns, now)

        return InsightsResponse(
            period_buckets=buckets,
            category_trends=category_trends,
            total_current_period=total_current,
            total_previous_period=total_previous,
            overall_change=total_current - total_previous,
            overall_change_percent=overall_change_percent,
            overall_trend=classify_trend(overall_change_percent),
            financial_pattern=pattern,
            spending_velocity=velocity,
            budget_comparisons=compare_budgets(budgets),
            anomalies=detect_anomalies(current_txns),
            recommendations=build_recommendations(budgets, pattern, velocity, total_current),
        )

    def compute_financial_health_score(self, owner_id: str, now: Optional[datetime] = None) -> FinancialHealthScore:
        """Score the current calendar month against last month and the owner's snapshots"""
        now = self._now(now)

        month_start = start_of_month(now)
        last_month_start = add_months(month_start, -1)

        current_month = self.transactions.list_transactions(owner_id, month_start, end_of_month(now))
        last_month = self.transactions.list_transactions(owner_id, last_month_start, month_start - TICK)

        return calculate_financial_health_score(
            current_month_transactions=current_month,
            last_month_transactions=last_month,
            budgets=self.budgets.list_budgets_with_spending(owner_id, now),
            goals=self.goals.list_goals(owner_id),
            bills=self.bills.list_active_bills(owner_id),
            now=now,
        )

    def match_category(self, owner_id: str, description: str) -> Optional[str]:
        """Suggest a category for a description using the owner's rules"""
        if self.rules is None:
            return None
        return match_category(description, self.rules.list_active_rules(owner_id))
