"""SQLAlchemy ORM models for the finance tracker ledger"""

from sqlalchemy import BigInteger, Boolean, Column, DateTime, Integer, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class Expense(Base):
    """Ledger expense, amount stored in minor units"""

    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Text, nullable=False, index=True)
    amount = Column(BigInteger, nullable=False)
    description = Column(Text, nullable=False, default="")
    category = Column(Text, nullable=False)
    date = Column(DateTime, nullable=False, index=True, server_default=func.now())


class Budget(Base):
    """Spending limit for one category"""

    __tablename__ = "budgets"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Text, nullable=False, index=True)
    category = Column(Text, nullable=False)
    amount = Column(BigInteger, nullable=False)
    period = Column(Text, nullable=False, default="monthly")  # weekly | monthly | yearly
    alert_threshold = Column(Integer, nullable=False, default=80)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())


class SavingsGoal(Base):
    __tablename__ = "savings_goals"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Text, nullable=False, index=True)
    name = Column(Text, nullable=False)
    target_amount = Column(BigInteger, nullable=False)
    current_amount = Column(BigInteger, nullable=False, default=0)
    deadline = Column(DateTime, nullable=True)
    is_completed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, server_default=func.now())


class BillReminder(Base):
    """Upcoming bill with its next due date"""

    __tablename__ = "bill_reminders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Text, nullable=False, index=True)
    name = Column(Text, nullable=False)
    amount = Column(BigInteger, nullable=False)
    due_date = Column(DateTime, nullable=False)
    category = Column(Text, nullable=True)
    frequency = Column(Text, nullable=False, default="monthly")
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())


class CategoryRuleRecord(Base):
    """Description pattern mapped to a category"""

    __tablename__ = "category_rules"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Text, nullable=False, index=True)
    pattern = Column(Text, nullable=False)
    category = Column(Text, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
