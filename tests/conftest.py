"""Pytest fixtures for testing"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest
from datetime import datetime
from typing import Callable, Generator, List
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from expense_insights.api.main import create_app
from expense_insights.domain.insights import InsightsService
from expense_insights.domain.models import (
    BillReminderSnapshot,
    BudgetSnapshot,
    CategoryRule,
    SavingsGoalSnapshot,
    Transaction,
)
from expense_insights.infrastructure.database.models import Base
from expense_insights.infrastructure.database.session import get_db


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Fixed clock for deterministic windows: mid-June 2024
NOW = datetime(2024, 6, 15, 12, 0, 0)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


class FakeLedger:
    """In-memory stand-in for every repository the insights service reads"""

    def __init__(self):
        self.transactions: List[Transaction] = []
        self.budgets: List[BudgetSnapshot] = []
        self.goals: List[SavingsGoalSnapshot] = []
        self.bills: List[BillReminderSnapshot] = []
        self.rules: List[CategoryRule] = []
        self.reads: List[tuple] = []

    def list_transactions(self, owner_id: str, start: datetime, end: datetime) -> List[Transaction]:
        self.reads.append((owner_id, start, end))
        return [
            t for t in self.transactions
            if t.owner_id == owner_id and start <= t.occurred_at <= end
        ]

    def list_budgets_with_spending(self, owner_id: str, now: datetime) -> List[BudgetSnapshot]:
        return list(self.budgets)

    def list_goals(self, owner_id: str) -> List[SavingsGoalSnapshot]:
        return list(self.goals)

    def list_active_bills(self, owner_id: str) -> List[BillReminderSnapshot]:
        return [b for b in self.bills if b.is_active]

    def list_active_rules(self, owner_id: str) -> List[CategoryRule]:
        return [r for r in self.rules if r.is_active]


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def ledger() -> FakeLedger:
    return FakeLedger()


@pytest.fixture
def service(ledger: FakeLedger) -> InsightsService:
    """Insights service wired to the in-memory ledger"""
    return InsightsService(
        transactions=ledger,
        budgets=ledger,
        goals=ledger,
        bills=ledger,
        rules=ledger,
    )


@pytest.fixture
def make_txn() -> Callable[..., Transaction]:
    """Build transactions with sequential ids"""
    counter = {"id": 0}

    def _make(amount_cents: int, category: str, occurred_at: datetime, owner_id: str = "user_1", description: str = "") -> Transaction:
        counter["id"] += 1
        return Transaction(
            id=counter["id"],
            owner_id=owner_id,
            amount_cents=amount_cents,
            category=category,
            occurred_at=occurred_at,
            description=description or category,
        )

    return _make
