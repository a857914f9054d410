"""Database engine and per-request session management"""

from typing import Any, Dict, Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from expense_insights.config import settings


def build_engine(database_url: str) -> Engine:
    """
    Create an engine for the ledger database.

    PostgreSQL gets a bounded connection pool recycled hourly; SQLite (local
    runs and tests) is opened for use across request threads.
    """
    if database_url.startswith("sqlite"):
        return create_engine(database_url, connect_args={"check_same_thread": False})

    pool_options: Dict[str, Any] = {
        "pool_pre_ping": True,
        "pool_size": 10,
        "max_overflow": 10,
        "pool_recycle": 3600,
    }
    return create_engine(database_url, **pool_options)


engine = build_engine(settings.database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Iterator[Session]:
    """Yield a read session for the duration of one request"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
