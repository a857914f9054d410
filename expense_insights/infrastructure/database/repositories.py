"""Data access layer - reads ledger rows and returns domain records"""

from datetime import datetime, timedelta
from typing import List

from sqlalchemy import func
from sqlalchemy.orm import Session

from expense_insights.domain.exceptions import InvalidTransactionDataError
from expense_insights.domain.models import BillReminderSnapshot, BudgetSnapshot, CategoryRule, SavingsGoalSnapshot, Transaction
from expense_insights.infrastructure.database.models import BillReminder, Budget, CategoryRuleRecord, Expense, SavingsGoal
from expense_insights.utils.date_utils import TICK, add_months, start_of_day, start_of_month, start_of_year


def budget_period_range(period: str, now: datetime) -> tuple[datetime, datetime]:
    """Calendar period a budget's spend accumulates over"""
    if period == "weekly":
        start = start_of_day(now) - timedelta(days=now.weekday())
        return start, start + timedelta(days=7) - TICK
    if period == "yearly":
        start = start_of_year(now)
        return start, add_months(start, 12) - TICK
    start = start_of_month(now)
    return start, add_months(start, 1) - TICK


class TransactionRepository:
    """Repository for ledger expenses"""

    def __init__(self, db: Session):
        self.db = db

    def list_transactions(self, owner_id: str, start: datetime, end: datetime) -> List[Transaction]:
        """
        Fetch an owner's expenses within [start, end], oldest first.

        Raises:
            InvalidTransactionDataError: A row cannot be converted; the whole read fails
        """
        rows = (
            self.db.query(Expense)
            .filter(Expense.user_id == owner_id)
            .filter(Expense.date >= start, Expense.date <= end)
            .order_by(Expense.date.asc(), Expense.id.asc())
            .all()
        )
        return [self._to_domain(row) for row in rows]

    @staticmethod
    def _to_domain(row: Expense) -> Transaction:
        if not isinstance(row.date, datetime):
            raise InvalidTransactionDataError(f"Expense {row.id} has an invalid date: {row.date!r}")
        if row.amount is None or not row.category:
            raise InvalidTransactionDataError(f"Expense {row.id} is missing amount or category")

        return Transaction(
            id=row.id,
            owner_id=row.user_id,
            amount_cents=int(row.amount),
            category=row.category,
            occurred_at=row.date,
            description=row.description or "",
        )


class BudgetRepository:
    """Repository for budgets with their current-period spend"""

    def __init__(self, db: Session):
        self.db = db

    def list_budgets_with_spending(self, owner_id: str, now: datetime) -> List[BudgetSnapshot]:
        budgets = (
            self.db.query(Budget)
            .filter(Budget.user_id == owner_id, Budget.is_active.is_(True))
            .order_by(Budget.id.asc())
            .all()
        )

        snapshots = []
        for budget in budgets:
            start, end = budget_period_range(budget.period, now)
            spent = (
                self.db.query(func.coalesce(func.sum(Expense.amount), 0))
                .filter(
                    Expense.user_id == owner_id,
                    Expense.category == budget.category,
                    Expense.date >= start,
                    Expense.date <= end,
                )
                .scalar()
            )
            snapshots.append(
                BudgetSnapshot(
                    category=budget.category,
                    amount_cents=int(budget.amount),
                    spent_cents=int(spent),
                    period=budget.period,
                    alert_threshold=budget.alert_threshold,
                )
            )
        return snapshots


class SavingsGoalRepository:
    def __init__(self, db: Session):
        self.db = db

    def list_goals(self, owner_id: str) -> List[SavingsGoalSnapshot]:
        goals = self.db.query(SavingsGoal).filter(SavingsGoal.user_id == owner_id).order_by(SavingsGoal.id.asc()).all()
        return [
            SavingsGoalSnapshot(
                name=g.name,
                target_cents=int(g.target_amount),
                current_cents=int(g.current_amount or 0),
                deadline=g.deadline,
                is_completed=bool(g.is_completed),
            )
            for g in goals
        ]


class BillReminderRepository:
    def __init__(self, db: Session):
        self.db = db

    def list_active_bills(self, owner_id: str) -> List[BillReminderSnapshot]:
        bills = (
            self.db.query(BillReminder)
            .filter(BillReminder.user_id == owner_id, BillReminder.is_active.is_(True))
            .order_by(BillReminder.due_date.asc())
            .all()
        )
        return [
            BillReminderSnapshot(
                name=b.name,
                amount_cents=int(b.amount),
                due_date=b.due_date,
                category=b.category,
                is_active=True,
            )
            for b in bills
        ]


class CategoryRuleRepository:
    def __init__(self, db: Session):
        self.db = db

    def list_active_rules(self, owner_id: str) -> List[CategoryRule]:
        rules = (
            self.db.query(CategoryRuleRecord)
            .filter(CategoryRuleRecord.user_id == owner_id, CategoryRuleRecord.is_active.is_(True))
            .order_by(CategoryRuleRecord.id.asc())
            .all()
        )
        return [CategoryRule(id=r.id, pattern=r.pattern, category=r.category) for r in rules]
