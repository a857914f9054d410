"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from expense_insights.config import settings
from expense_insights.domain.insights import InsightsService
from expense_insights.infrastructure.database.repositories import (
    BillReminderRepository,
    BudgetRepository,
    CategoryRuleRepository,
    SavingsGoalRepository,
    TransactionRepository,
)
from expense_insights.infrastructure.database.session import get_db


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_insights_service(db: Session = Depends(get_db)) -> InsightsService:
    """Provide an insights service bound to the request's database session"""
    return InsightsService(
        transactions=TransactionRepository(db),
        budgets=BudgetRepository(db),
        goals=SavingsGoalRepository(db),
        bills=BillReminderRepository(db),
        rules=CategoryRuleRepository(db),
        timezone=settings.timezone,
        window_months=settings.insights_window_months,
    )
